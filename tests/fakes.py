# =============================================================================
# tests/fakes.py - In-Memory Supabase Stand-In
# =============================================================================
# A small fake of the supabase-py query builder, enough for the services:
# select / insert / update / delete with eq, neq, in_, ilike, order, limit,
# range and single. Rows live in plain dicts keyed by table name.
#
# Usage:
#   db = FakeSupabase(unique={"follows": [("user_id", "project_id")]})
#   SupabaseClient._instance = db
# =============================================================================

import re
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from uuid import UUID, uuid4

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


class FakeAPIError(Exception):
    """Mimics postgrest.exceptions.APIError, whose str() carries the code."""

    def __init__(self, code: str, message: str):
        super().__init__(f"{{'code': '{code}', 'message': '{message}'}}")
        self.code = code


def _norm(value: Any) -> Any:
    return str(value) if isinstance(value, UUID) else value


def _like_to_regex(pattern: str) -> re.Pattern:
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


class FakeResponse:
    """Shape of postgrest's APIResponse: .data and .count."""

    def __init__(self, data: Any, count: int | None = None):
        self.data = data
        self.count = count


class FakeQuery:
    """One chained query against a table."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.operation = "select"
        self.columns = "*"
        self.count = None
        self.payload: Any = None
        self.filters: list[Callable[[dict], bool]] = []
        self.orders: list[tuple[str, bool]] = []
        self.limit_value: int | None = None
        self.range_value: tuple[int, int] | None = None
        self.single_row = False

    # -- operations ----------------------------------------------------------

    def select(self, columns: str = "*", count: str | None = None) -> "FakeQuery":
        self.operation = "select"
        self.columns = columns
        self.count = count
        return self

    def insert(self, data: dict | list[dict]) -> "FakeQuery":
        self.operation = "insert"
        self.payload = data
        return self

    def update(self, data: dict) -> "FakeQuery":
        self.operation = "update"
        self.payload = data
        return self

    def delete(self) -> "FakeQuery":
        self.operation = "delete"
        return self

    # -- filters and modifiers -----------------------------------------------

    def eq(self, column: str, value: Any) -> "FakeQuery":
        value = _norm(value)
        self.filters.append(lambda row: _norm(row.get(column)) == value)
        return self

    def neq(self, column: str, value: Any) -> "FakeQuery":
        value = _norm(value)
        self.filters.append(lambda row: _norm(row.get(column)) != value)
        return self

    def in_(self, column: str, values: list[Any]) -> "FakeQuery":
        allowed = {_norm(v) for v in values}
        self.filters.append(lambda row: _norm(row.get(column)) in allowed)
        return self

    def ilike(self, column: str, pattern: str) -> "FakeQuery":
        regex = _like_to_regex(pattern)
        self.filters.append(lambda row: bool(regex.fullmatch(str(row.get(column) or ""))))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.orders.append((column, desc))
        return self

    def limit(self, size: int) -> "FakeQuery":
        self.limit_value = size
        return self

    def range(self, start: int, end: int) -> "FakeQuery":
        self.range_value = (start, end)
        return self

    def single(self) -> "FakeQuery":
        self.single_row = True
        return self

    # -- execution -----------------------------------------------------------

    def _matching(self) -> list[dict]:
        return [row for row in self.db.tables[self.table] if all(f(row) for f in self.filters)]

    def _project(self, row: dict) -> dict:
        if self.columns.strip() == "*":
            return dict(row)
        names = [c.strip() for c in self.columns.split(",")]
        return {name: row.get(name) for name in names}

    def execute(self) -> FakeResponse:
        if self.operation == "insert":
            return self._execute_insert()
        if self.operation == "update":
            return self._execute_update()
        if self.operation == "delete":
            return self._execute_delete()
        return self._execute_select()

    def _execute_select(self) -> FakeResponse:
        rows = self._matching()

        # Apply sort keys last-to-first so the first order() wins
        for column, desc in reversed(self.orders):
            non_null = [r for r in rows if r.get(column) is not None]
            nulls = [r for r in rows if r.get(column) is None]
            non_null.sort(key=lambda r: r[column], reverse=desc)
            rows = non_null + nulls

        total = len(rows)
        if self.range_value is not None:
            start, end = self.range_value
            rows = rows[start:end + 1]
        if self.limit_value is not None:
            rows = rows[:self.limit_value]

        data = [self._project(row) for row in rows]

        if self.single_row:
            if len(data) != 1:
                raise FakeAPIError("PGRST116", "JSON object requested, multiple (or no) rows returned")
            return FakeResponse(data[0], total if self.count else None)

        return FakeResponse(data, total if self.count else None)

    def _execute_insert(self) -> FakeResponse:
        rows = self.payload if isinstance(self.payload, list) else [self.payload]
        inserted = []
        for data in rows:
            row = self.db.new_row(self.table, data)
            self.db.check_unique(self.table, row)
            self.db.tables[self.table].append(row)
            inserted.append(dict(row))
        return FakeResponse(inserted)

    def _execute_update(self) -> FakeResponse:
        updated = []
        for row in self._matching():
            row.update({k: _norm(v) for k, v in self.payload.items()})
            updated.append(dict(row))
        return FakeResponse(updated)

    def _execute_delete(self) -> FakeResponse:
        doomed = self._matching()
        self.db.tables[self.table] = [r for r in self.db.tables[self.table] if r not in doomed]
        return FakeResponse([dict(r) for r in doomed])


class FakeSupabase:
    """
    Stand-in for supabase.Client.

    Args:
        unique: table -> list of column tuples that must be unique together
    """

    def __init__(self, unique: dict[str, list[tuple[str, ...]]] | None = None):
        self.tables: dict[str, list[dict]] = defaultdict(list)
        self.unique = unique or {}
        self._clock = 0

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def _now(self) -> str:
        self._clock += 1
        return (BASE_TIME + timedelta(seconds=self._clock)).isoformat()

    def new_row(self, table: str, data: dict) -> dict:
        row = {k: _norm(v) for k, v in data.items()}
        row.setdefault("id", str(uuid4()))
        row.setdefault("created_at", self._now())
        return row

    def check_unique(self, table: str, row: dict) -> None:
        for columns in self.unique.get(table, []):
            for existing in self.tables[table]:
                if all(existing.get(c) == row.get(c) for c in columns):
                    raise FakeAPIError(
                        "23505",
                        f"duplicate key value violates unique constraint on {table}{columns}",
                    )

    def seed(self, table: str, **data: Any) -> dict:
        """Insert a row directly and return a copy of it."""
        row = self.new_row(table, data)
        self.tables[table].append(row)
        return dict(row)

    def rows(self, table: str) -> list[dict]:
        return [dict(r) for r in self.tables[table]]
