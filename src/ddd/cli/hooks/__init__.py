"""Git hook commands (the installed hook scripts call these)."""
