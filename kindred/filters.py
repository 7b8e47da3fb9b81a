"""Client-side search and display ordering for archive listings.

These work on plain dicts as returned by the JSON API as well as on ORM rows
and pydantic models, so both the HTTP client and the rendered pages use them.
"""
from datetime import datetime
from typing import Any, Iterable, List, Optional


def _field(item: Any, *names: str) -> Any:
    for name in names:
        if isinstance(item, dict):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            return getattr(item, name)
    return None


def _created_key(item: Any):
    created = _field(item, "createdAt", "created_at")
    if isinstance(created, str):
        try:
            created = datetime.fromisoformat(created.replace("Z", "+00:00"))
        except ValueError:
            created = None
    if created is not None and created.tzinfo is not None:
        created = created.replace(tzinfo=None)
    return (created or datetime.min, _field(item, "id") or 0)


def search(items: Iterable[Any], query: Optional[str] = None, category: Optional[str] = None) -> List[Any]:
    """Title substring and category match, both case-insensitive.

    An empty query or a category of ``None``/``""``/``"all"`` does not filter.
    """
    q = (query or "").strip().lower()
    cat = (category or "").strip().lower()
    if cat == "all":
        cat = ""
    out = []
    for item in items:
        title = (_field(item, "title") or "").lower()
        if q and q not in title:
            continue
        if cat and (_field(item, "category") or "").lower() != cat:
            continue
        out.append(item)
    return out


def newest_first(items: Iterable[Any]) -> List[Any]:
    return sorted(items, key=_created_key, reverse=True)


def timeline_order(notes: Iterable[Any]) -> List[Any]:
    """Sort timeline notes by year, oldest first; equal years keep their order."""
    return sorted(notes, key=lambda n: _field(n, "year"))
