"""
Default column-to-property naming policy.

Examples (underline_to_camel):
    user_name   -> userName
    USER_NAME   -> userName
    UserName    -> userName
    t_user_name -> userName   (with field prefix "t_")
"""

from __future__ import annotations

import re
from typing import Iterable, Tuple

from fieldgen.domain.models import NamingStrategy

_CAPITAL_RE = re.compile(r"^[0-9A-Z/_]+$")
_HAS_UPPER_RE = re.compile(r"[A-Z]")
_HAS_SEPARATOR_RE = re.compile(r"[/_]")


def is_capital_mode(name: str) -> bool:
    """True for names made only of capitals, digits, `/` and `_`."""
    return bool(_CAPITAL_RE.match(name))


def is_mixed_mode(name: str) -> bool:
    """True for names mixing upper-case characters with separators."""
    return bool(_HAS_UPPER_RE.search(name)) and bool(_HAS_SEPARATOR_RE.search(name))


def contains_upper_case(name: str) -> bool:
    return any(ch.isupper() for ch in name)


def underline_to_camel(name: str) -> str:
    if not name or not name.strip():
        return ""
    if is_capital_mode(name) or is_mixed_mode(name):
        name = name.lower()
    parts = [part for part in name.split("_") if part.strip()]
    if not parts:
        return ""
    head, tail = parts[0], parts[1:]
    return head[0].lower() + head[1:] + "".join(part[0].upper() + part[1:] for part in tail)


def remove_prefix(name: str, prefixes: Iterable[str]) -> str:
    """Remove the first prefix that matches case-insensitively."""
    lowered = name.lower()
    for prefix in prefixes:
        if prefix and lowered.startswith(prefix.lower()):
            return name[len(prefix):]
    return name


class DefaultNamingPolicy:
    """
    Converts column names according to a NamingStrategy.

    Parameters
    ----------
    field_prefixes : Iterable[str]
        Column prefixes (e.g. ``"f_"``) stripped before conversion.
    """

    def __init__(self, field_prefixes: Iterable[str] = ()) -> None:
        self.field_prefixes: Tuple[str, ...] = tuple(field_prefixes)

    def convert(self, raw_column_name: str, convention: NamingStrategy) -> str:
        name = remove_prefix(raw_column_name, self.field_prefixes)
        if convention is NamingStrategy.UNDERLINE_TO_CAMEL:
            return underline_to_camel(name)
        return name


__all__ = [
    "DefaultNamingPolicy",
    "contains_upper_case",
    "is_capital_mode",
    "is_mixed_mode",
    "remove_prefix",
    "underline_to_camel",
]
