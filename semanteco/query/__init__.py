"""SemantEco query model."""

from .terms import BlankNode, QueryResource, Variable
from .components import (
    BasicPattern, GraphComponent, GraphComponentCollection, NamedGraphComponent, OptionalComponent
)
from .query import (
    RDF_NS, RDFS_NS, VAR_NS, CompositionConflictError, ConstructQuery, Query, QueryType, SelectQuery
)
from .query_factory import QueryFactory
from .serializer import SparqlSerializer

__all__ = [
    'BlankNode', 'QueryResource', 'Variable',
    'BasicPattern', 'GraphComponent', 'GraphComponentCollection', 'NamedGraphComponent',
    'OptionalComponent',
    'RDF_NS', 'RDFS_NS', 'VAR_NS', 'CompositionConflictError', 'ConstructQuery', 'Query',
    'QueryType', 'SelectQuery',
    'QueryFactory', 'SparqlSerializer',
]
