"""SPARQL Serializer

Renders a Query as SPARQL 1.1 text. Output is deterministic for a given
model so identical compositions produce byte-identical queries.
"""

import logging
from typing import List

from .components import (
    BasicPattern, GraphComponentCollection, NamedGraphComponent, OptionalComponent
)
from .query import ConstructQuery, Query, SelectQuery
from .terms import render_term

logger = logging.getLogger(__name__)


class SparqlSerializer:
    """Serializes SELECT and CONSTRUCT queries."""

    def __init__(self, indent: str = "  "):
        self.indent = indent

    def serialize(self, query: Query) -> str:
        lines: List[str] = []
        for prefix, uri in query.namespaces.items():
            lines.append(f"PREFIX {prefix}: <{uri}>")

        if isinstance(query, SelectQuery):
            lines.append(self._select_clause(query))
        elif isinstance(query, ConstructQuery):
            lines.append("CONSTRUCT {")
            self._write_collection(query.construct, lines, 1)
            lines.append("}")
        else:
            raise ValueError(f"Unsupported query class: {type(query).__name__}")

        lines.append("WHERE {")
        self._write_collection(query.where, lines, 1)
        lines.append("}")

        if isinstance(query, SelectQuery) and query.group_by:
            lines.append("GROUP BY " + " ".join(v.n3() for v in query.group_by))

        text = "\n".join(lines) + "\n"
        logger.debug(f"Serialized {query.query_type.value} query:\n{text}")
        return text

    def _select_clause(self, query: SelectQuery) -> str:
        clause = "SELECT DISTINCT" if query.distinct else "SELECT"
        if not query.variables:
            return f"{clause} *"
        return clause + " " + " ".join(v.projection() for v in query.variables)

    def _write_collection(self, collection: GraphComponentCollection, lines: List[str], depth: int):
        pad = self.indent * depth
        for component in collection.components:
            if isinstance(component, BasicPattern):
                lines.append(pad + self._pattern(component))
            elif isinstance(component, NamedGraphComponent):
                lines.append(f"{pad}GRAPH <{component.uri}> {{")
                self._write_collection(component, lines, depth + 1)
                lines.append(pad + "}")
            elif isinstance(component, OptionalComponent):
                lines.append(pad + "OPTIONAL {")
                self._write_collection(component, lines, depth + 1)
                lines.append(pad + "}")
            elif isinstance(component, GraphComponentCollection):
                lines.append(pad + "{")
                self._write_collection(component, lines, depth + 1)
                lines.append(pad + "}")
            else:
                raise ValueError(f"Unsupported graph component: {type(component).__name__}")

    def _pattern(self, pattern: BasicPattern) -> str:
        triple = " ".join(render_term(t) for t in (pattern.subject, pattern.predicate, pattern.object))
        if pattern.graph is None:
            return f"{triple} ."
        # a plain string qualifier names a graph IRI, not a literal
        graph = f"<{pattern.graph}>" if isinstance(pattern.graph, str) else render_term(pattern.graph)
        return f"GRAPH {graph} {{ {triple} . }}"
