"""ddd core library package.

Contains the decision-policy validation engine (``ddd.core.policy``), the git
backend it queries (``ddd.core.git``), decision-document operations and the
ambient configuration/logging stack.
"""

from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
