"""Path segment sanitizing and normalization."""

import os
import re

# Unicode look-alikes for characters that cannot appear in a path segment
_LOOKALIKES = {
    "*": "★",
    "|": "¦",
    "\\": "⧵",
    "/": "⁄",
    ":": "꞉",
    '"': "″",
    ">": "›",
    "<": "‹",
    "?": "﹖",
}
_ILLEGAL_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_SEP_RE = re.compile(r"[\\/]+")


def replace_illegal_chars(segment: str, replace: bool, remove: bool) -> str:
    """Substitute or strip illegal characters; `remove` wins over `replace`."""
    if replace and not remove:
        segment = segment.translate(str.maketrans(_LOOKALIKES))
    return _ILLEGAL_RE.sub("", segment)


def clean_segment(segment: str) -> str:
    """Drop leftover illegal characters, surrounding whitespace and trailing dots."""
    segment = _ILLEGAL_RE.sub("", segment).strip()
    return segment.rstrip(". ").strip()


def sanitize_segment(segment: str, replace: bool = False, remove: bool = False) -> str:
    return clean_segment(replace_illegal_chars(segment, replace, remove))


def norm_path(path: str) -> str:
    """Unify separators to os.sep, collapse runs and drop a trailing separator.

    `.` and `..` components are left alone.
    """
    if not path:
        return ""
    out = _SEP_RE.sub(lambda _: os.sep, path)
    if len(out) > 1:
        out = out.rstrip(os.sep) or os.sep
    return out


def common_prefix_len(a: str, b: str) -> int:
    """Length of the case-insensitive common prefix of two paths."""
    n = 0
    for x, y in zip(norm_path(a), norm_path(b)):
        if x.upper() != y.upper():
            break
        n += 1
    return n


def is_path_prefix(prefix: str, path: str) -> bool:
    p = norm_path(prefix)
    return bool(p) and common_prefix_len(p, path) == len(p)
