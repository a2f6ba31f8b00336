"""Tests for the read-only MCP resources."""

from datetime import date

import pytest
from fastmcp.exceptions import ResourceError

from infobooks.library import Library
from infobooks.resources import build_resources


@pytest.fixture
def resources(library: Library) -> dict:
    return {
        resource.get("uri_template", resource.get("uri")): resource["handler"]
        for resource in build_resources(library)
    }


def test_resource_uris(resources):
    assert set(resources) == {
        "library://books/list",
        "library://books/{book_id}",
        "library://loans/{user_id}",
        "library://stats/dashboard",
    }


class TestBookResources:
    async def test_list_books(self, resources, seeded):
        result = await resources["library://books/list"]()

        assert result["total"] == 5
        assert result["available"] == 5
        assert result["books"][0]["title"] == "Moby Dick"
        assert result["books"][0]["available_qty"] == 1

    async def test_get_book(self, resources, moby_dick_id):
        result = await resources["library://books/{book_id}"](moby_dick_id)

        assert result["id"] == moby_dick_id
        assert result["total_qty"] == 2

    @pytest.mark.parametrize("book_id", ["00000000-0000-4000-8000-000000000000", "nope"])
    async def test_missing_book(self, resources, seeded, book_id):
        with pytest.raises(ResourceError):
            await resources["library://books/{book_id}"](book_id)


class TestLoanResources:
    async def test_user_loans(self, resources, miguel_id, sample_loan_id):
        result = await resources["library://loans/{user_id}"](miguel_id)

        assert result["user_id"] == miguel_id
        assert [loan["id"] for loan in result["loans"]] == [sample_loan_id]
        assert result["loans"][0]["state"] == "active"
        assert result["active"] == 1
        assert result["overdue"] == 0

    async def test_overdue_loans(self, library: Library, resources, miguel_id):
        library.reporting.clock = lambda: date(2025, 11, 20)

        result = await resources["library://loans/{user_id}"](miguel_id)

        assert result["overdue"] == 1
        assert result["loans"][0]["days_overdue"] == 5

    async def test_user_id_in_other_case(self, resources, miguel_id, sample_loan_id):
        result = await resources["library://loans/{user_id}"](miguel_id.upper())

        assert result["user_id"] == miguel_id
        assert [loan["id"] for loan in result["loans"]] == [sample_loan_id]

    @pytest.mark.parametrize("user_id", ["nobody", "00000000-0000-4000-8000-000000000000"])
    async def test_unknown_user(self, resources, seeded, user_id):
        with pytest.raises(ResourceError):
            await resources["library://loans/{user_id}"](user_id)


async def test_dashboard(resources, seeded):
    result = await resources["library://stats/dashboard"]()

    assert result == {
        "total_books": 5,
        "active_loans": 1,
        "overdue_loans": 0,
        "active_users": 3,
        "as_of": "2025-11-10",
    }
