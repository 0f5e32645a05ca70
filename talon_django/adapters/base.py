"""
Schema adapter contract.

An adapter is the seam between resource code and the data-access layer: it
describes a schema (columns, declared types, associations, primary key) and
applies the query-level operations the resource hooks need.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence


class SchemaAdapter(ABC):
    """Base class for schema adapters."""

    name: str = ""

    @abstractmethod
    def fields(self, schema: type) -> list[str]:
        """Return the schema's column names in declaration order."""

    @abstractmethod
    def types(self, schema: type) -> dict[str, str]:
        """Return column name to declared type, in declaration order."""

    @abstractmethod
    def associations(self, schema: type) -> list[str]:
        """Return the schema's association names."""

    @abstractmethod
    def primary_key(self, schema: type) -> Optional[str]:
        """Return the primary key column name."""

    @abstractmethod
    def queryset(self, schema: type) -> Any:
        """Return a query over every record of ``schema``."""

    @abstractmethod
    def preload_query(self, query: Any, associations: Sequence[str]) -> Any:
        """Mark ``associations`` for eager loading on ``query``."""

    @abstractmethod
    def where_id(self, query: Any, value: Any) -> Any:
        """Constrain ``query`` to the record whose primary key is ``value``."""

    @abstractmethod
    def order_by(self, query: Any, ordering: Sequence[str]) -> Any:
        """Apply ``ordering`` to ``query``."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
