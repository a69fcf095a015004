from __future__ import annotations

from typing import Any, Dict, Mapping


class DddError(Exception):
    """Base exception for the ddd system."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class NotAGitRepositoryError(DddError, RuntimeError):
    """Raised when the engine is invoked outside of a git repository.

    This is a precondition failure: no validation runs once it is raised.
    """

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        DddError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class GitCommandError(DddError, RuntimeError):
    """Raised when a git plumbing command fails."""

    def __init__(
        self,
        message: str,
        *,
        argv: list[str] | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if argv:
            ctx["argv"] = list(argv)
        if returncode is not None:
            ctx["returncode"] = returncode
        if stderr:
            ctx["stderr"] = stderr.strip()
        DddError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)


class ConfigError(DddError, ValueError):
    """Raised when configuration cannot be loaded or fails schema validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        DddError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class DecisionError(DddError):
    """Raised when a decision-document operation cannot proceed."""


__all__ = [
    "DddError",
    "NotAGitRepositoryError",
    "GitCommandError",
    "ConfigError",
    "DecisionError",
]
