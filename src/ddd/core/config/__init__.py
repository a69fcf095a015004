"""ddd configuration system.

Usage:
    from ddd.core.config import ConfigManager
    from ddd.core.config.domains import PolicyConfig

    manager = ConfigManager(repo_root=Path("/path/to/project"))
    config = manager.load_config()

    policy = PolicyConfig(repo_root=Path("/path/to/project"))
    layout = policy.layout
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, is_cached
from .manager import ConfigManager

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "clear_all_caches",
    "get_cached_config",
    "is_cached",
]
