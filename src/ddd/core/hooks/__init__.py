"""Git hook installation and ref-update handling."""
from __future__ import annotations

from .installer import (
    HOOK_MARKER,
    HookState,
    hook_status,
    install_hooks,
    render_hook,
    uninstall_hooks,
    write_github_workflow,
)
from .refs import RefUpdate, parse_ref_updates, range_for_update

__all__ = [
    "HOOK_MARKER",
    "HookState",
    "RefUpdate",
    "hook_status",
    "install_hooks",
    "parse_ref_updates",
    "range_for_update",
    "render_hook",
    "uninstall_hooks",
    "write_github_workflow",
]
