"""Shared utilities for ddd (I/O, subprocess, merging, worker pool)."""
