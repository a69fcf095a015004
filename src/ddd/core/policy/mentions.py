"""Mention lookup: does a decision document reference a subject file?

A document mentions a subject when its content contains the subject's full
repository path or its basename as an exact substring. Basename matching can
produce false positives when the name collides with unrelated text; that
trade-off is accepted.
"""
from __future__ import annotations

import posixpath
from typing import Iterable, Optional, Tuple


def mentions(subject: str, content: Optional[str]) -> bool:
    if not content or not subject:
        return False
    if subject in content:
        return True
    basename = posixpath.basename(subject)
    return bool(basename) and basename in content


def first_mentioning(subject: str, documents: Iterable[Tuple[str, Optional[str]]]) -> Optional[str]:
    """Return the path of the first ``(path, content)`` document mentioning ``subject``."""
    for path, content in documents:
        if mentions(subject, content):
            return path
    return None


__all__ = ["first_mentioning", "mentions"]
