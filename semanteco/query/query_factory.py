"""Query Factory

Creates empty queries of a requested kind.
"""

import logging

from .query import ConstructQuery, Query, QueryType, SelectQuery

logger = logging.getLogger(__name__)


class QueryFactory:
    """Creates fresh, unshared Query instances."""

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Whether created queries reject conflicting compositions
        """
        self.strict = strict

    def new_query(self, query_type: QueryType = QueryType.SELECT) -> Query:
        if query_type == QueryType.SELECT:
            query = SelectQuery(strict=self.strict)
        elif query_type == QueryType.CONSTRUCT:
            query = ConstructQuery(strict=self.strict)
        else:
            raise ValueError(f"Unsupported query type: {query_type}")
        logger.debug(f"Created new {query_type.value} query")
        return query
