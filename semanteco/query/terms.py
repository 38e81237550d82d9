"""Query Terms

Variables, resources, and blank nodes that make up graph patterns,
plus the rendering of raw literal values.
"""

from typing import Any, Optional, Tuple, Union

from rdflib import BNode, Literal, URIRef


def split_identifier(identifier: str) -> Tuple[str, str]:
    """Split a full identifier into (namespace, local name).

    The split happens after the last '#' or '/'. Identifiers without either
    separator have an empty namespace.
    """
    if not identifier:
        raise ValueError("Identifier must be a non-empty string")
    index = max(identifier.rfind('#'), identifier.rfind('/'))
    if index < 0:
        return "", identifier
    return identifier[:index + 1], identifier[index + 1:]


class Variable:
    """A named placeholder within one query.

    Identity is (namespace, name). A variable carrying an expression is a
    computed projection instead of a pattern-bound variable.
    """

    def __init__(self, namespace: str, name: str, expression: Optional[str] = None):
        self.namespace = namespace
        self.name = name
        self.expression = expression

    @property
    def identifier(self) -> str:
        return self.namespace + self.name

    @property
    def is_expression(self) -> bool:
        return self.expression is not None

    def n3(self) -> str:
        return f"?{self.name}"

    def projection(self) -> str:
        """Render the variable as it appears in a SELECT projection."""
        if self.expression is not None:
            return f"({self.expression} AS ?{self.name})"
        return self.n3()

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return (self.namespace, self.name) == (other.namespace, other.name)

    def __hash__(self):
        return hash(('variable', self.namespace, self.name))

    def __repr__(self):
        if self.expression is not None:
            return f"Variable({self.name!r}, expression={self.expression!r})"
        return f"Variable({self.identifier!r})"


class QueryResource:
    """A fixed IRI used as a subject, predicate, or object."""

    def __init__(self, namespace: str, name: str):
        self.namespace = namespace
        self.name = name

    @property
    def identifier(self) -> str:
        return self.namespace + self.name

    def n3(self) -> str:
        return URIRef(self.identifier).n3()

    def __eq__(self, other):
        if not isinstance(other, QueryResource):
            return NotImplemented
        return (self.namespace, self.name) == (other.namespace, other.name)

    def __hash__(self):
        return hash(('resource', self.namespace, self.name))

    def __repr__(self):
        return f"QueryResource({self.identifier!r})"


class BlankNode:
    """An anonymous node local to the query that created it."""

    def __init__(self, label: str):
        self.label = label

    def n3(self) -> str:
        return BNode(self.label).n3()

    def __repr__(self):
        return f"BlankNode({self.label!r})"


Term = Union[Variable, QueryResource, BlankNode, str, int, float, bool]

LITERAL_TYPES = (str, int, float, bool)


def validate_term(term: Any, role: str) -> None:
    """Check that a value can be used as a pattern term.

    Raises:
        ValueError: If the term is None, of an unsupported type, or a
            projection-only expression variable
    """
    if term is None:
        raise ValueError(f"Pattern {role} must not be None")
    if not isinstance(term, (Variable, QueryResource, BlankNode) + LITERAL_TYPES):
        raise ValueError(f"Unsupported pattern {role}: {type(term).__name__}")
    if isinstance(term, Variable) and term.is_expression:
        raise ValueError(f"Expression variable ?{term.name} cannot be used as pattern {role}")


def render_term(term: Any) -> str:
    """Render a term in SPARQL surface syntax."""
    if isinstance(term, (Variable, QueryResource, BlankNode)):
        return term.n3()
    return Literal(term).n3()


def term_matches(pattern_term: Any, wanted: Any) -> bool:
    """Compare a stored term with a search term; None matches anything."""
    if wanted is None:
        return True
    if isinstance(wanted, (Variable, QueryResource)):
        return type(pattern_term) is type(wanted) and pattern_term == wanted
    if isinstance(wanted, BlankNode):
        return pattern_term is wanted
    if isinstance(pattern_term, (Variable, QueryResource, BlankNode)):
        return False
    # bool is an int subclass; keep True distinct from 1
    return type(pattern_term) is type(wanted) and pattern_term == wanted
