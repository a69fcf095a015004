"""Domain-specific configuration accessors.

- PolicyConfig: decision layout, accepted permission modes, policy toggles
- SearchConfig: worker pool bounds and output limits for decision search
- LoggingConfig: log level and optional log file
- TimeoutsConfig: subprocess timeouts
- HooksConfig: installed hook names and base refs for new branches
- DecisionConfig: editor and template settings for decision creation
"""
from __future__ import annotations

from .decision import DecisionConfig
from .hooks import HooksConfig
from .logging import LoggingConfig
from .policy import PolicyConfig
from .search import SearchConfig
from .timeouts import TimeoutsConfig

__all__ = [
    "DecisionConfig",
    "HooksConfig",
    "LoggingConfig",
    "PolicyConfig",
    "SearchConfig",
    "TimeoutsConfig",
]
