"""
In-memory stand-in for the Supabase async client.

Covers the PostgREST builder calls the repositories make (select, insert,
update, delete, filters, or-filters, ordering, ranges), RPC calls and the
storage bucket API.
"""

import copy
import re
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple

from postgrest.exceptions import APIError

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def like_to_regex(pattern: str) -> "re.Pattern[str]":
    parts = [re.escape(part) for part in pattern.split("%")]
    return re.compile("^" + ".*".join(parts) + "$", re.IGNORECASE | re.DOTALL)


def _neq(row_value: Any, value: Any) -> bool:
    # SQL: NULL <> x is not true
    return row_value is not None and str(row_value) != str(value)


def _eq(row_value: Any, value: Any) -> bool:
    if isinstance(row_value, bool) or isinstance(value, bool):
        return row_value is value or str(row_value).lower() == str(value).lower()
    return row_value == value or (row_value is not None and str(row_value) == str(value))


def parse_or_filter(expression: str) -> Callable[[Dict[str, Any]], bool]:
    """Compile ``col.op.value,col.op.value`` into a row predicate"""
    checks = []
    for clause in expression.split(","):
        column, op, value = clause.split(".", 2)
        if op == "ilike":
            regex = like_to_regex(value)
            checks.append(lambda row, c=column, r=regex: row.get(c) is not None and bool(r.match(str(row[c]))))
        elif op == "is" and value == "null":
            checks.append(lambda row, c=column: row.get(c) is None)
        elif op == "neq":
            checks.append(lambda row, c=column, v=value: _neq(row.get(c), v))
        elif op == "eq":
            checks.append(lambda row, c=column, v=value: _eq(row.get(c), v))
        else:
            raise ValueError(f"Unsupported or-filter operator: {op}")
    return lambda row: any(check(row) for check in checks)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.columns = "*"
        self.count_mode: Optional[str] = None
        self.payload: Any = None
        self.predicates: List[Callable[[Dict[str, Any]], bool]] = []
        self.orders: List[Tuple[str, bool]] = []
        self.offset: Optional[int] = None
        self.end: Optional[int] = None
        self.max_rows: Optional[int] = None

    # Operations
    def select(self, columns: str = "*", count: Optional[str] = None):
        self.operation = "select"
        self.columns = columns
        self.count_mode = count
        return self

    def insert(self, data: Any):
        self.operation = "insert"
        self.payload = data
        return self

    def update(self, data: Dict[str, Any]):
        self.operation = "update"
        self.payload = data
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # Filters
    def eq(self, column: str, value: Any):
        self.predicates.append(lambda row: _eq(row.get(column), value))
        return self

    def neq(self, column: str, value: Any):
        self.predicates.append(lambda row: _neq(row.get(column), value))
        return self

    def in_(self, column: str, values: List[Any]):
        values = list(values)
        self.predicates.append(lambda row: any(_eq(row.get(column), value) for value in values))
        return self

    def gte(self, column: str, value: Any):
        self.predicates.append(lambda row: row.get(column) is not None and row[column] >= value)
        return self

    def lte(self, column: str, value: Any):
        self.predicates.append(lambda row: row.get(column) is not None and row[column] <= value)
        return self

    def ilike(self, column: str, pattern: str):
        regex = like_to_regex(pattern)
        self.predicates.append(lambda row: row.get(column) is not None and bool(regex.match(str(row[column]))))
        return self

    def is_(self, column: str, value: Any):
        if value in (None, "null"):
            self.predicates.append(lambda row: row.get(column) is None)
        else:
            self.predicates.append(lambda row: _eq(row.get(column), value))
        return self

    def or_(self, expression: str):
        self.predicates.append(parse_or_filter(expression))
        return self

    # Shaping
    def order(self, column: str, desc: bool = False):
        self.orders.append((column, desc))
        return self

    def range(self, start: int, end: int):
        self.offset, self.end = start, end
        return self

    def limit(self, size: int):
        self.max_rows = size
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(predicate(row) for predicate in self.predicates)

    def _project(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if self.columns.strip() == "*":
            return copy.deepcopy(row)
        names = [name.strip() for name in self.columns.split(",") if name.strip()]
        return {name: copy.deepcopy(row.get(name)) for name in names}

    async def execute(self):
        self.db.calls.append((self.table_name, self.operation))
        code = self.db.failures.get((self.table_name, self.operation))
        if code:
            raise APIError({"code": code, "message": f"{self.operation} on {self.table_name} failed"})

        rows = self.db.tables.setdefault(self.table_name, [])
        if self.operation == "insert":
            return SimpleNamespace(data=self.db.insert_rows(self.table_name, self.payload), count=None)

        matched = [row for row in rows if self._matches(row)]
        if self.operation in ("update", "delete") and any(self.db.row_fails(self.table_name, self.operation, row) for row in matched):
            raise APIError({"code": "XX000", "message": f"{self.operation} on {self.table_name} row failed"})

        if self.operation == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return SimpleNamespace(data=copy.deepcopy(matched), count=None)

        if self.operation == "delete":
            self.db.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=copy.deepcopy(matched), count=None)

        for column, desc in reversed(self.orders):
            present = [row for row in matched if row.get(column) is not None]
            missing = [row for row in matched if row.get(column) is None]
            present.sort(key=lambda row: row[column], reverse=desc)
            matched = missing + present if desc else present + missing

        count = len(matched) if self.count_mode else None
        if self.offset is not None:
            matched = matched[self.offset:self.end + 1]
        if self.max_rows is not None:
            matched = matched[:self.max_rows]

        return SimpleNamespace(data=[self._project(row) for row in matched], count=count)


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: Dict[str, Any]):
        self.db = db
        self.name = name
        self.params = params

    async def execute(self):
        self.db.calls.append((self.name, "rpc"))
        handler = self.db.rpc_handlers.get(self.name)
        if handler is None:
            raise APIError({"code": "PGRST202", "message": f"function {self.name} not found"})
        return SimpleNamespace(data=handler(self.params), count=None)


class FakeBucket:
    def __init__(self, storage: "FakeStorage", bucket: str):
        self.storage = storage
        self.bucket = bucket

    async def upload(self, path: str, file: bytes, file_options: Optional[Dict[str, str]] = None):
        self.storage.objects[(self.bucket, path)] = {"data": file, "options": file_options or {}}
        return SimpleNamespace(path=path, full_path=f"{self.bucket}/{path}")


class FakeStorage:
    def __init__(self):
        self.buckets: Dict[str, Dict[str, Any]] = {}
        self.objects: Dict[Tuple[str, str], Dict[str, Any]] = {}

    async def list_buckets(self):
        return [SimpleNamespace(id=name, name=name) for name in self.buckets]

    async def create_bucket(self, id: str, name: Optional[str] = None, options: Optional[Dict[str, Any]] = None):
        self.buckets[id] = dict(options or {})
        return {"name": id}

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self, bucket)


class FakeAuth:
    def __init__(self):
        self.users: Dict[str, SimpleNamespace] = {}

    async def get_user(self, token: str):
        user = self.users.get(token)
        if user is None:
            raise RuntimeError("invalid JWT")
        return SimpleNamespace(user=user)


class FakeSupabase:
    """Tables are lists of dicts keyed by table name"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.rpc_handlers: Dict[str, Callable[[Dict[str, Any]], Any]] = {}
        self.failures: Dict[Tuple[str, str], str] = {}
        self.row_failures: List[Tuple[str, str, Dict[str, Any]]] = []
        self.calls: List[Tuple[str, str]] = []
        self.storage = FakeStorage()
        self.auth = FakeAuth()
        self._clock = 0

    def _next_timestamp(self) -> str:
        self._clock += 1
        return (BASE_TIME + timedelta(seconds=self._clock)).isoformat()

    def insert_rows(self, table: str, payload: Any) -> List[Dict[str, Any]]:
        rows = self.tables.setdefault(table, [])
        new_rows = payload if isinstance(payload, list) else [payload]
        inserted = []
        for data in new_rows:
            row = copy.deepcopy(data)
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", self._next_timestamp())
            if any(_eq(existing.get("id"), row["id"]) for existing in rows):
                raise APIError({"code": "23505", "message": f'duplicate key value violates unique constraint "{table}_pkey"'})
            rows.append(row)
            inserted.append(copy.deepcopy(row))
        return inserted

    def seed(self, table: str, *rows: Dict[str, Any]) -> List[Dict[str, Any]]:
        return self.insert_rows(table, list(rows))

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.get(table, [])

    def fail(self, table: str, operation: str, code: str = "XX000") -> None:
        """Make every ``operation`` on ``table`` raise a database error with ``code``"""
        self.failures[(table, operation)] = code

    def fail_row(self, table: str, operation: str, **match: Any) -> None:
        """Make ``operation`` raise only when it touches a row matching every column in ``match``"""
        self.row_failures.append((table, operation, match))

    def row_fails(self, table: str, operation: str, row: Dict[str, Any]) -> bool:
        return any(
            t == table and op == operation and all(_eq(row.get(column), value) for column, value in match.items())
            for t, op, match in self.row_failures
        )

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def from_(self, name: str) -> FakeQuery:
        return self.table(name)

    def rpc(self, name: str, params: Optional[Dict[str, Any]] = None) -> FakeRpc:
        return FakeRpc(self, name, params or {})
