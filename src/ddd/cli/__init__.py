"""
ddd CLI package.

Provides the command-line interface with auto-discovery of commands from
subfolders (decision/, hooks/) and top-level commands from commands/.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, print_error, print_success
from ._args import add_force_flag, add_json_flag, add_repo_root_flag, add_standard_flags
from ._utils import EXIT_OK, EXIT_PRECONDITION, EXIT_VIOLATIONS, confirm, emit_report, get_repo_root

__all__ = [
    # Output formatting
    "OutputFormatter",
    "print_success",
    "print_error",
    # Argument helpers
    "add_force_flag",
    "add_json_flag",
    "add_repo_root_flag",
    "add_standard_flags",
    # Utilities
    "EXIT_OK",
    "EXIT_PRECONDITION",
    "EXIT_VIOLATIONS",
    "confirm",
    "emit_report",
    "get_repo_root",
]
