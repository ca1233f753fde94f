"""Decoding of paged and unpaged list responses."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .errors import DecodeError

T = TypeVar("T")

_COUNTERS = ("page", "page_count", "item_count", "filtered_count", "total_count")


@dataclass(slots=True)
class Page(Generic[T]):
    """One page of a filtered list.

    Attributes:
        items: Items on this page.
        page: 1-based number of this page.
        page_count: Total pages for the filtered set.
        item_count: Number of items on this page.
        filtered_count: Items matching the filters across all pages.
        total_count: Items ignoring filters.
        page_size: Page size the server applied, when reported.
    """

    items: list[T] = field(default_factory=list)
    page: int = 1
    page_count: int = 1
    item_count: int = 0
    filtered_count: int = 0
    total_count: int = 0
    page_size: int | None = None

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count


def decode_page(data: Any, decode_item: Callable[[dict[str, Any]], T]) -> Page[T]:
    """Decode a list response into a Page.

    A paged object must carry ``items`` and all counters. A bare array (the
    response to an unpaged request) becomes a single page holding
    everything.

    Args:
        data: Parsed JSON body.
        decode_item: Decoder for one item.

    Returns:
        Decoded page.

    Raises:
        DecodeError: If the body is neither shape, or counters are missing
            or inconsistent with the items.
    """
    if isinstance(data, list):
        items = _decode_items(data, decode_item)
        return Page(
            items=items,
            page=1,
            page_count=1,
            item_count=len(items),
            filtered_count=len(items),
            total_count=len(items),
        )

    if not isinstance(data, dict):
        raise DecodeError(f"Expected a paged object or array, got {type(data).__name__}")

    raw_items = data.get("items")
    if not isinstance(raw_items, list):
        raise DecodeError("Paged response 'items' is missing or not an array")

    counters: dict[str, int] = {}
    for key in _COUNTERS:
        value = data.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError(f"Paged response counter '{key}' is missing or not an integer")
        counters[key] = value

    items = _decode_items(raw_items, decode_item)
    if counters["item_count"] != len(items):
        raise DecodeError(
            f"Paged response reports item_count={counters['item_count']} "
            f"but carries {len(items)} items"
        )

    page_size = data.get("page_size")
    return Page(
        items=items,
        page_size=page_size if isinstance(page_size, int) else None,
        **counters,
    )


def decode_list(data: Any, decode_item: Callable[[dict[str, Any]], T]) -> list[T]:
    """Decode a bare array, or the items of a paged object, into a list."""
    if isinstance(data, list):
        return _decode_items(data, decode_item)
    return decode_page(data, decode_item).items


def _decode_items(raw: list[Any], decode_item: Callable[[dict[str, Any]], T]) -> list[T]:
    items: list[T] = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise DecodeError(f"Expected list item to be an object, got {type(entry).__name__}")
        try:
            items.append(decode_item(entry))
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"Malformed list item: {e}") from e
    return items
