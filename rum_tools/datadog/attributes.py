"""Helpers for reading nested RUM event attributes."""

from typing import Any, Iterable, List, NamedTuple, Optional


class Resolution(NamedTuple):
    """Outcome of resolving an attribute path.

    ``value`` is meaningless when ``found`` is False.
    """
    value: Any
    found: bool


NOT_FOUND = Resolution(None, False)


def split_path(path: str) -> List[str]:
    """Split a dotted attribute path like 'view.load_time' into its keys.

    Literal dots inside a key cannot be expressed.
    """
    return path.split(".")


def resolve_path(root: Any, path: Iterable[str]) -> Resolution:
    """Walk ``path`` through nested mappings starting at ``root``.

    Missing keys are an ordinary outcome: the walk stops at the first absent
    key, or at the first non-mapping value with keys still left, and returns
    NOT_FOUND. A key present with a None value counts as found. An empty path
    resolves to ``root`` itself.
    """
    current = root
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return NOT_FOUND
        current = current[key]
    return Resolution(current, True)


def lookup(root: Any, path: Iterable[str]) -> Optional[Any]:
    """Like resolve_path, but returns None for anything not found."""
    current = root
    for key in path:
        if not current or not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def to_plain(item: Any) -> Any:
    """Convert an API model object to a plain dict; dicts pass through."""
    return item.to_dict() if hasattr(item, 'to_dict') else item


def get_attrs(event: Any) -> Optional[dict]:
    """Return the inner RUM attributes dict of an event, or None if unusable."""
    attrs = lookup(to_plain(event), ("attributes", "attributes"))
    if not attrs or not isinstance(attrs, dict):
        return None
    return attrs
