"""Tests for paged list decoding."""

import math

import pytest

from hop.errors import DecodeError
from hop.paging import decode_list, decode_page


def _name(item: dict) -> str:
    return item["name"]


def _paged(items: list, **overrides) -> dict:
    body = {
        "items": items,
        "page": 1,
        "page_count": 1,
        "page_size": 10,
        "item_count": len(items),
        "filtered_count": len(items),
        "total_count": len(items),
    }
    body.update(overrides)
    return body


class TestDecodePage:
    """Tests for decode_page."""

    def test_paged_object(self) -> None:
        page = decode_page(
            _paged([{"name": "a"}, {"name": "b"}], page=2, page_count=3, filtered_count=22,
                   total_count=40),
            _name,
        )
        assert page.items == ["a", "b"]
        assert page.page == 2
        assert page.page_count == 3
        assert page.filtered_count == 22
        assert page.total_count == 40
        assert page.page_size == 10
        assert page.has_next
        assert list(page) == ["a", "b"]
        assert len(page) == 2

    def test_bare_array_becomes_single_page(self) -> None:
        """An unpaged response is one page holding everything."""
        page = decode_page([{"name": "a"}, {"name": "b"}, {"name": "c"}], _name)
        assert page.page == 1
        assert page.page_count == 1
        assert page.item_count == page.filtered_count == page.total_count == 3
        assert not page.has_next

    def test_page_beyond_last_is_empty(self) -> None:
        page = decode_page(_paged([], page=4, page_count=3, filtered_count=25, total_count=25), _name)
        assert page.item_count == 0
        assert page.items == []

    @pytest.mark.parametrize("counter", ["page", "page_count", "item_count", "filtered_count",
                                         "total_count"])
    def test_missing_counter(self, counter: str) -> None:
        body = _paged([{"name": "a"}])
        del body[counter]
        with pytest.raises(DecodeError, match=counter):
            decode_page(body, _name)

    def test_non_integer_counter(self) -> None:
        with pytest.raises(DecodeError):
            decode_page(_paged([], page="1"), _name)
        with pytest.raises(DecodeError):
            decode_page(_paged([], page_count=True), _name)

    def test_items_not_array(self) -> None:
        with pytest.raises(DecodeError, match="items"):
            decode_page(_paged({"name": "a"}, item_count=1), _name)

    def test_item_count_mismatch(self) -> None:
        with pytest.raises(DecodeError, match="item_count"):
            decode_page(_paged([{"name": "a"}], item_count=2), _name)

    def test_malformed_item(self) -> None:
        """A decoder KeyError surfaces as DecodeError."""
        with pytest.raises(DecodeError):
            decode_page([{"vhost": "/"}], _name)

    def test_scalar_body(self) -> None:
        with pytest.raises(DecodeError):
            decode_page("nope", _name)

    def test_page_arithmetic(self) -> None:
        """page_count and summed item_count agree with the filtered total."""
        names = [{"name": f"q{i}"} for i in range(23)]
        size = 10
        pages = []
        for number in range(1, math.ceil(len(names) / size) + 1):
            chunk = names[(number - 1) * size:number * size]
            pages.append(decode_page(
                _paged(chunk, page=number, page_count=math.ceil(len(names) / size),
                       page_size=size, filtered_count=len(names), total_count=len(names)),
                _name,
            ))
        assert pages[0].page_count == 3
        assert sum(p.item_count for p in pages) == pages[0].filtered_count


class TestDecodeList:
    """Tests for decode_list."""

    def test_bare_array(self) -> None:
        assert decode_list([{"name": "a"}], _name) == ["a"]

    def test_paged_object_items(self) -> None:
        assert decode_list(_paged([{"name": "x"}]), _name) == ["x"]

    def test_non_object_item(self) -> None:
        with pytest.raises(DecodeError):
            decode_list(["a"], _name)
