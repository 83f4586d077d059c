"""
SELECT builder for the list endpoints.

Every list endpoint follows the same convention: optional filters become
AND-ed WHERE clauses with bound parameters, ORDER BY always ends with the
primary key so ties come back in a stable order, and LIMIT/OFFSET bound the
result.

Column names passed here come from route code, never from the request.
User input only ever travels as bound parameters.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class SelectQuery:
    """
    Usage:
        query = SelectQuery("careers", CAREER_COLUMNS)
        query.search(term, "career", "qualification")
        query.equals("stream", stream, case_insensitive=True)
        query.order_by("salary_numeric DESC")
        query.paginate(limit, offset)
        sql, params = query.build()
    """

    def __init__(self, table: str, columns: Sequence[str], primary_key: str = "id"):
        self.table = table
        self.columns = list(columns)
        self.primary_key = primary_key
        self._where: List[str] = []
        self._order: List[str] = []
        self._params: Dict[str, Any] = {}
        self._limit: Optional[int] = None
        self._offset: int = 0

    def _param(self, base: str, value: Any) -> str:
        name = base
        n = 1
        while name in self._params:
            n += 1
            name = f"{base}_{n}"
        self._params[name] = value
        return name

    def search(self, term: Optional[str], *columns: str) -> "SelectQuery":
        """Case-insensitive substring match on any of `columns`."""
        term = (term or "").strip()
        if not term or not columns:
            return self
        name = self._param("search", f"%{escape_like(term.lower())}%")
        matches = [f"LOWER({column}) LIKE :{name} ESCAPE '{LIKE_ESCAPE}'" for column in columns]
        self._where.append("(" + " OR ".join(matches) + ")")
        return self

    def equals(self, column: str, value: Any, case_insensitive: bool = False) -> "SelectQuery":
        """Equality filter; skipped when value is None."""
        if value is None:
            return self
        name = self._param(column, value)
        if case_insensitive:
            self._where.append(f"LOWER({column}) = LOWER(:{name})")
        else:
            self._where.append(f"{column} = :{name}")
        return self

    def order_by(self, *clauses: str) -> "SelectQuery":
        self._order.extend(clauses)
        return self

    def paginate(self, limit: Optional[int], offset: int = 0) -> "SelectQuery":
        self._limit = limit
        self._offset = offset
        return self

    def build(self) -> Tuple[str, Dict[str, Any]]:
        params = dict(self._params)
        sql = f"SELECT {', '.join(self.columns)} FROM {self.table}"
        if self._where:
            sql += " WHERE " + " AND ".join(self._where)
        order = list(self._order)
        if not any(clause.split()[0] == self.primary_key for clause in order):
            order.append(f"{self.primary_key} ASC")
        sql += " ORDER BY " + ", ".join(order)
        if self._limit is not None:
            sql += " LIMIT :limit OFFSET :offset"
            params["limit"] = self._limit
            params["offset"] = self._offset
        return sql, params
