"""Glob matching for ignore patterns.

Supports ``*`` (anything but ``/``), ``**`` (anything, including ``/``),
``?`` (one character but ``/``) and ``[...]`` character classes. A pattern
without wildcards also matches every path below it, so ``docs`` ignores
``docs/index.md``. Matching is case-sensitive and relative to the
repository root; a leading ``/`` is accepted, so ``/build/**`` equals
``build/**``.
"""
import re
from functools import lru_cache
from typing import Iterable, Optional, Pattern


def _normalize(value: str) -> str:
    value = value.replace("\\", "/")
    while value.startswith("./"):
        value = value[2:]
    return value


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Optional[Pattern[str]]:
    """Translate a glob into a compiled regex, or None if it is malformed."""
    parts = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if pattern.startswith("/", i):
                    # "**/" may also match zero directories
                    i += 1
                    parts.append("(?:.*/)?")
                else:
                    parts.append(".*")
                continue
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                # Unclosed class; left raw so compilation fails below
                parts.append("[")
            else:
                body = pattern[i + 1:end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                parts.append(f"[{body}]")
                i = end
        else:
            parts.append(re.escape(c))
        i += 1

    try:
        return re.compile("".join(parts) + r"\Z")
    except re.error:
        return None


def match_glob(path: str, pattern: str) -> bool:
    """Check whether ``path`` matches a single glob ``pattern``."""
    path = _normalize(path)
    pattern = _normalize(pattern).strip("/")
    if not pattern:
        return False

    if not any(ch in pattern for ch in "*?["):
        return path == pattern or path.startswith(pattern + "/")

    regex = _compile(pattern)
    if regex is None:
        return False
    return regex.match(path) is not None


def match_any(path: str, patterns: Iterable[str]) -> bool:
    """Check whether ``path`` matches any of ``patterns``."""
    return any(match_glob(path, pattern) for pattern in patterns)
