"""Table gateway: query building and error mapping."""

from types import SimpleNamespace

import httpx
import pytest
from postgrest import APIError

from plantswap.shared.core.exceptions import RepositoryError
from plantswap.shared.infrastructure.database import SupabaseTable


class FakeQuery:
    """Records builder calls and answers execute() with canned rows."""

    def __init__(self, rows=None, error=None):
        self.calls = []
        self.rows = rows if rows is not None else []
        self.error = error

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return record

    def execute(self):
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.rows)


class FakeClient:
    def __init__(self, query):
        self.query = query
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return self.query


async def test_select_applies_filters_and_order():
    query = FakeQuery(rows=[{"id": "1"}])
    table = SupabaseTable(FakeClient(query), "exchange_offers")

    rows = await table.select(
        eq={"status": "pending"},
        in_={"id": ("1", "2")},
        or_="sender_id.eq.u,receiver_id.eq.u",
    )

    assert rows == [{"id": "1"}]
    names = [name for name, _, _ in query.calls]
    assert names == ["select", "eq", "in_", "or_", "order"]
    assert query.calls[2][1] == ("id", ["1", "2"])
    assert query.calls[4] == ("order", ("created_at",), {"desc": True})


async def test_select_one_returns_none_when_empty():
    table = SupabaseTable(FakeClient(FakeQuery(rows=[])), "plants")

    assert await table.select_one(id="missing") is None


async def test_insert_returns_stored_row():
    table = SupabaseTable(FakeClient(FakeQuery(rows=[{"id": "n1", "read": False}])), "notifications")

    assert await table.insert({"read": False}) == {"id": "n1", "read": False}


async def test_insert_without_returned_row_is_an_error():
    table = SupabaseTable(FakeClient(FakeQuery(rows=[])), "notifications")

    with pytest.raises(RepositoryError):
        await table.insert({"read": False})


async def test_unfiltered_update_and_delete_are_refused():
    table = SupabaseTable(FakeClient(FakeQuery()), "plants")

    with pytest.raises(RepositoryError):
        await table.update({"status": "exchanged"})
    with pytest.raises(RepositoryError):
        await table.delete()


async def test_update_scopes_by_filters():
    query = FakeQuery(rows=[{"id": "p1"}])
    table = SupabaseTable(FakeClient(query), "plants")

    rows = await table.update({"name": "Fern"}, id="p1", user_id="u1")

    assert rows == [{"id": "p1"}]
    assert ("eq", ("id", "p1"), {}) in query.calls
    assert ("eq", ("user_id", "u1"), {}) in query.calls


async def test_api_errors_become_repository_errors():
    error = APIError({"message": "permission denied", "code": "42501"})
    table = SupabaseTable(FakeClient(FakeQuery(error=error)), "plants")

    with pytest.raises(RepositoryError) as exc_info:
        await table.select()

    assert exc_info.value.details["table"] == "plants"
    assert exc_info.value.details["operation"] == "select"


@pytest.mark.parametrize("error", [
    httpx.ReadTimeout("read timed out"),
    httpx.ConnectError("connection refused"),
])
async def test_transport_errors_become_repository_errors(error):
    table = SupabaseTable(FakeClient(FakeQuery(error=error)), "plants")

    with pytest.raises(RepositoryError) as exc_info:
        await table.update({"status": "exchanged"}, id="p1")

    assert exc_info.value.details["operation"] == "update"
    assert type(error).__name__ in exc_info.value.details["original_error"]
