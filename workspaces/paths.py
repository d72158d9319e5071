"""Path helpers shared by the store, the managers and the facade.

All comparisons between a record path and a user-supplied path go through
``normalize_path`` so that ``/home/u/proj`` and ``/home/u/proj/`` (or a
relative spelling of the same directory) are treated as equal.
"""

from __future__ import annotations

import os

SEP = os.sep

# Characters that would break the line / field framing of the backing file.
DELIMITERS = ("\0", "\n")


def normalize_path(path: str) -> str:
    """Expand ``~``, make absolute, and strip any trailing separator."""
    return os.path.normpath(os.path.abspath(os.path.expanduser(path)))


def basename(path: str) -> str:
    """Last component of ``path``, ignoring a trailing separator."""
    return os.path.basename(normalize_path(path))


def parent(path: str) -> str:
    """Normalized parent directory of ``path``."""
    return os.path.dirname(normalize_path(path))


def same_path(a: str, b: str) -> bool:
    return normalize_path(a) == normalize_path(b)


def looks_like_path(token: str) -> bool:
    """A bare token is a path when it contains a separator."""
    return SEP in token or (os.altsep is not None and os.altsep in token)


def has_delimiter(value: str) -> bool:
    return any(d in value for d in DELIMITERS)
