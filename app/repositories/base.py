"""
Base repository over the Supabase PostgREST client
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from postgrest.exceptions import APIError
from pydantic import BaseModel

from app.core.exceptions import ConflictError, DatabaseError, MissingTableError, NotFoundError
from app.core.logging import log

Row = Dict[str, Any]

UNIQUE_VIOLATION = "23505"
# Postgres undefined_table and the PostgREST schema cache miss
MISSING_TABLE = {"42P01", "PGRST205"}


def sanitize_search_term(term: str) -> str:
    """Strip characters that break PostgREST or-filter syntax"""
    return "".join(ch for ch in term if ch not in ",()").strip()


def ilike_any(columns: Sequence[str], term: str) -> str:
    """Build an ``or`` filter matching term in any of the columns"""
    pattern = f"%{sanitize_search_term(term)}%"
    return ",".join(f"{column}.ilike.{pattern}" for column in columns)


class BaseRepository:
    """
    Generic repository for one table or view.

    Rows come back as plain dicts. Missing rows are None, never an exception;
    backend failures become ConflictError (unique violations) or DatabaseError.
    """

    table: str = ""
    resource_name: str = "Record"
    id_column: str = "id"

    def __init__(self, client: Any):
        self.client = client

    def query(self, columns: str = "*", count: Optional[str] = None):
        if count:
            return self.client.table(self.table).select(columns, count=count)
        return self.client.table(self.table).select(columns)

    @staticmethod
    def apply_filters(query, filters: Optional[Dict[str, Any]] = None):
        """Equality filters; list values become ``in`` filters, None is skipped"""
        for field, value in (filters or {}).items():
            if value is None:
                continue
            if isinstance(value, (list, tuple, set)):
                query = query.in_(field, list(value))
            else:
                query = query.eq(field, value)
        return query

    async def execute(self, query, action: str = "querying"):
        """Run a built query, mapping backend errors to API errors"""
        try:
            return await query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                log.warning(f"Unique violation {action} {self.resource_name}", table=self.table, error=e.message)
                raise ConflictError(f"{self.resource_name} already exists")
            if e.code in MISSING_TABLE:
                log.warning(f"Missing table {action} {self.resource_name}", table=self.table, code=e.code)
                raise MissingTableError(f"{self.resource_name} table not found")
            log.error(f"Database error {action} {self.resource_name}", table=self.table, code=e.code, error=e.message)
            raise DatabaseError(f"Error {action} {self.resource_name.lower()}")

    async def get(self, *, id: Any, columns: str = "*") -> Optional[Row]:
        """Get a row by id"""
        return await self.find_one({self.id_column: id}, columns=columns)

    async def get_or_404(self, *, id: Any, columns: str = "*") -> Row:
        """Get a row by id or raise NotFoundError"""
        row = await self.get(id=id, columns=columns)
        if not row:
            raise NotFoundError(f"{self.resource_name} not found")
        return row

    async def find_one(self, filters: Dict[str, Any], columns: str = "*") -> Optional[Row]:
        query = self.apply_filters(self.query(columns), filters).limit(1)
        response = await self.execute(query, "fetching")
        return response.data[0] if response.data else None

    async def get_multi(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        columns: str = "*",
        order_by: Optional[str] = None,
        order_desc: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """Get rows with optional filtering and ordering"""
        query = self.apply_filters(self.query(columns), filters)
        if order_by:
            query = query.order(order_by, desc=order_desc)
        if limit is not None:
            query = query.limit(limit)
        response = await self.execute(query, "listing")
        return response.data or []

    async def get_many(self, ids: Sequence[Any], columns: str = "*") -> List[Row]:
        """Rows whose id is in ids; no query when ids is empty"""
        if not ids:
            return []
        return await self.get_multi(filters={self.id_column: list(ids)}, columns=columns)

    async def get_page(
        self,
        *,
        offset: int,
        end: int,
        filters: Optional[Dict[str, Any]] = None,
        columns: str = "*",
        search: Optional[Tuple[Sequence[str], str]] = None,
        order_by: str = "created_at",
        order_desc: bool = True,
        refine=None,
    ) -> Tuple[List[Row], int]:
        """
        One page of rows plus the exact total.

        ``search`` is (columns, term) matched case-insensitively; ``refine``
        may add further filters to the query builder.
        """
        query = self.apply_filters(self.query(columns, count="exact"), filters)
        if search and search[1]:
            query = query.or_(ilike_any(search[0], search[1]))
        if refine is not None:
            query = refine(query)
        query = query.order(order_by, desc=order_desc).range(offset, end)

        response = await self.execute(query, "listing")
        return response.data or [], response.count or 0

    async def find_like(self, column: str, pattern: str, columns: str = "*") -> List[Row]:
        """Rows whose column matches a case-insensitive LIKE pattern"""
        response = await self.execute(self.query(columns).ilike(column, pattern), "listing")
        return response.data or []

    async def count(self, filters: Optional[Dict[str, Any]] = None, refine=None) -> int:
        """Exact row count; ``refine`` works as in get_page"""
        query = self.apply_filters(self.query("id", count="exact"), filters)
        if refine is not None:
            query = refine(query)
        response = await self.execute(query, "counting")
        return response.count or 0

    async def create(self, obj_in: Union[BaseModel, Row], **kwargs) -> Row:
        """Insert a row and return it"""
        data = obj_in.model_dump(exclude_unset=True, mode="json") if isinstance(obj_in, BaseModel) else dict(obj_in)
        data.update(kwargs)

        response = await self.execute(self.client.table(self.table).insert(data), "creating")
        row = response.data[0] if response.data else data
        log.info(f"Created {self.resource_name}", table=self.table, id=row.get(self.id_column))
        return row

    async def create_many(self, rows: List[Row]) -> List[Row]:
        """Insert several rows in one request"""
        if not rows:
            return []
        response = await self.execute(self.client.table(self.table).insert(rows), "creating")
        log.info(f"Created {self.resource_name} rows", table=self.table, count=len(rows))
        return response.data or []

    async def update(self, *, id: Any, obj_in: Union[BaseModel, Row]) -> Optional[Row]:
        """Update a row by id; None when nothing matched"""
        data = obj_in.model_dump(exclude_unset=True, mode="json") if isinstance(obj_in, BaseModel) else dict(obj_in)
        query = self.client.table(self.table).update(data).eq(self.id_column, id)
        response = await self.execute(query, "updating")
        if not response.data:
            return None
        log.info(f"Updated {self.resource_name}", table=self.table, id=id)
        return response.data[0]

    async def delete(self, *, id: Any) -> bool:
        """Delete a row by id"""
        query = self.client.table(self.table).delete().eq(self.id_column, id)
        response = await self.execute(query, "deleting")
        log.info(f"Deleted {self.resource_name}", table=self.table, id=id)
        return bool(response.data)

    async def delete_where(self, filters: Dict[str, Any]) -> int:
        query = self.apply_filters(self.client.table(self.table).delete(), filters)
        response = await self.execute(query, "deleting")
        return len(response.data or [])
