import pytest

from loyalty.modules.common import Page, PageRequest, SortSpec
from loyalty.modules.transfers import SORTABLE_FIELDS


class TestSortSpec:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("created_at:asc", SortSpec("created_at", descending=False)),
            ("amount:desc", SortSpec("amount", descending=True)),
            ("amount:DESC", SortSpec("amount", descending=True)),
            ("expires_at", SortSpec("expires_at", descending=False)),
        ],
    )
    def test_parse(self, raw, expected):
        assert SortSpec.parse(raw, SORTABLE_FIELDS) == expected

    @pytest.mark.parametrize("raw", ["password_hash:asc", "amount:up", ":asc"])
    def test_rejects_unknown(self, raw):
        with pytest.raises(ValueError):
            SortSpec.parse(raw, SORTABLE_FIELDS)

    def test_str(self):
        assert str(SortSpec("amount", descending=True)) == "amount:desc"


class TestPageRequest:
    def test_defaults(self):
        request = PageRequest()

        assert request.offset == 0
        assert request.limit == 10
        assert request.sort == SortSpec("created_at")

    def test_offset(self):
        assert PageRequest(page=3, limit=25).offset == 50

    @pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (-1, 5)])
    def test_rejects_non_positive(self, page, limit):
        with pytest.raises(ValueError):
            PageRequest(page=page, limit=limit)


@pytest.mark.parametrize("total, size, pages", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2)])
def test_total_pages(total, size, pages):
    assert Page(items=[], total_items=total, current_page=1, page_size=size).total_pages == pages
