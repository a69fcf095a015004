"""
ddd - Decision-Driven Development policy system

Enforces that every committed change ships with an immutable, human-authored
decision document stored in a sibling ``.decision`` directory.
"""

__version__ = "2.0.0"
__all__ = ["__version__"]
