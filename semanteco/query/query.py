"""Query Model

In-memory representation of one SPARQL query. A query is created per request,
populated by the module pipeline, executed once and discarded.

SELECT and CONSTRUCT are separate classes so that projection state only
exists on SelectQuery and the construct template only on ConstructQuery.
"""

import logging
import re
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .components import GraphComponentCollection, NamedGraphComponent, OptionalComponent
from .terms import BlankNode, QueryResource, Variable, split_identifier

logger = logging.getLogger(__name__)

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS_NS = "http://www.w3.org/2000/01/rdf-schema#"
VAR_NS = "http://aquarius.tw.rpi.edu/projects/semantaqua/data-source/query-variable/"

_EXPRESSION_ALIAS = re.compile(r'^(?P<expr>.+?)\s+as\s+\?(?P<alias>[A-Za-z_][\w]*)\s*$',
                               re.IGNORECASE | re.DOTALL)


class QueryType(Enum):
    SELECT = "SELECT"
    CONSTRUCT = "CONSTRUCT"


class CompositionConflictError(Exception):
    """Raised by strict queries when two contributors disagree on a binding."""
    pass


class Query:
    """Base query: namespaces, term registries, and the WHERE body.

    Variables and resources are interned by identifier, so fragments written
    by different modules that name the same variable share one instance.
    """

    query_type: QueryType = None

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Raise CompositionConflictError instead of overwriting
                conflicting namespace prefixes or projection expressions
        """
        self.strict = strict
        self.namespaces: Dict[str, str] = {}
        self.where = GraphComponentCollection()
        self._variables: Dict[tuple, Variable] = {}
        self._resources: Dict[tuple, QueryResource] = {}
        self._blank_node_count = 0

    def get_variable(self, identifier: str) -> Variable:
        """Return the interned variable for an identifier, creating it if needed."""
        key = split_identifier(identifier)
        variable = self._variables.get(key)
        if variable is None:
            variable = Variable(*key)
            self._variables[key] = variable
        return variable

    def create_variable(self, identifier: str) -> Variable:
        return self.get_variable(identifier)

    def get_resource(self, identifier: str) -> QueryResource:
        """Return the interned resource for an identifier, creating it if needed."""
        key = split_identifier(identifier)
        resource = self._resources.get(key)
        if resource is None:
            resource = QueryResource(*key)
            self._resources[key] = resource
        return resource

    def create_blank_node(self) -> BlankNode:
        node = BlankNode(f"b{self._blank_node_count}")
        self._blank_node_count += 1
        return node

    def get_named_graph(self, uri: str) -> NamedGraphComponent:
        """Return the top-level named graph component for a URI.

        The component is created and appended to the WHERE body on first use;
        later calls with the same URI return that same component.
        """
        for component in self.where.collections():
            if isinstance(component, NamedGraphComponent) and component.uri == uri:
                return component
        graph = NamedGraphComponent(uri)
        self.where.add_graph_component(graph)
        return graph

    def create_optional(self) -> OptionalComponent:
        return OptionalComponent()

    def set_namespace(self, prefix: str, uri: str) -> None:
        current = self.namespaces.get(prefix)
        if current is not None and current != uri:
            message = f"Namespace prefix '{prefix}' rebound from <{current}> to <{uri}>"
            if self.strict:
                raise CompositionConflictError(message)
            logger.warning(message)
        self.namespaces[prefix] = uri

    def get_namespace(self, prefix: str) -> Optional[str]:
        return self.namespaces.get(prefix)

    def find_graph_components_with_pattern(self, subject=None, predicate=None,
                                           obj=None) -> List[GraphComponentCollection]:
        """Find every collection in the WHERE body holding a matching pattern.

        Nested named graphs and optional groups are searched at any depth.
        None arguments are wildcards.
        """
        return self.where.find_graph_components_with_pattern(subject, predicate, obj)

    def get_type(self) -> QueryType:
        return self.query_type

    def to_sparql(self) -> str:
        from .serializer import SparqlSerializer
        return SparqlSerializer().serialize(self)

    def __str__(self):
        return self.to_sparql()


class SelectQuery(Query):
    """A SELECT query with an ordered projection."""

    query_type = QueryType.SELECT

    def __init__(self, strict: bool = False):
        super().__init__(strict=strict)
        self.distinct = False
        self._projection: Dict[tuple, Variable] = {}
        self.group_by: List[Variable] = []

    @property
    def variables(self) -> List[Variable]:
        return list(self._projection.values())

    def get_variables(self) -> List[Variable]:
        return self.variables

    def set_variables(self, variables: Iterable[Variable]) -> None:
        """Replace the projection; repeated identities are kept once, first position wins."""
        projection: Dict[tuple, Variable] = {}
        for variable in variables:
            if not isinstance(variable, Variable):
                raise ValueError(f"Projection entries must be variables, got {type(variable).__name__}")
            projection.setdefault((variable.namespace, variable.name), variable)
        self._projection = projection

    def add_variable(self, variable: Variable) -> None:
        self.set_variables(self.variables + [variable])

    def set_distinct(self, distinct: bool) -> None:
        self.distinct = bool(distinct)

    def add_group_by(self, variable: Variable) -> None:
        if variable not in self.group_by:
            self.group_by.append(variable)

    def create_variable_expression(self, expression: str) -> Variable:
        """Create a computed projection variable from '<expr> as ?alias' text.

        The variable is interned under VAR_NS + alias. Re-creating the same
        expression returns the existing variable.

        Raises:
            ValueError: If the text has no alias, or the alias already names
                a pattern-bound variable
            CompositionConflictError: On a conflicting expression in a strict query
        """
        match = _EXPRESSION_ALIAS.match(expression.strip()) if expression else None
        if match is None:
            raise ValueError(f"Variable expression must end with 'as ?name': {expression!r}")
        expr = match.group('expr').strip()
        key = split_identifier(VAR_NS + match.group('alias'))
        variable = self._variables.get(key)
        if variable is None:
            variable = Variable(*key, expression=expr)
            self._variables[key] = variable
            return variable
        if not variable.is_expression:
            raise ValueError(f"?{variable.name} is already a pattern variable")
        if variable.expression != expr:
            message = f"Projection ?{variable.name} redefined from '{variable.expression}' to '{expr}'"
            if self.strict:
                raise CompositionConflictError(message)
            logger.warning(message)
            variable.expression = expr
        return variable


class ConstructQuery(Query):
    """A CONSTRUCT query with its own template collection."""

    query_type = QueryType.CONSTRUCT

    def __init__(self, strict: bool = False):
        super().__init__(strict=strict)
        self.construct = GraphComponentCollection()

    def get_construct_component(self) -> GraphComponentCollection:
        return self.construct
