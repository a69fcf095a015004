"""Top-level ddd commands (no domain prefix)."""
