"""Graph Components

Ordered containers of graph patterns. A collection holds basic patterns and
nested collections (named graphs and optional groups) in insertion order.
"""

from typing import Any, Iterator, List, Optional

from .terms import Term, term_matches, validate_term


class GraphComponent:
    """Base class for anything that can be placed in a collection."""
    pass


class BasicPattern(GraphComponent):
    """A subject-predicate-object pattern with an optional graph qualifier."""

    def __init__(self, subject: Term, predicate: Term, obj: Term, graph: Optional[Term] = None):
        validate_term(subject, "subject")
        validate_term(predicate, "predicate")
        validate_term(obj, "object")
        if graph is not None:
            validate_term(graph, "graph")
        self.subject = subject
        self.predicate = predicate
        self.object = obj
        self.graph = graph

    def matches(self, subject: Any = None, predicate: Any = None, obj: Any = None) -> bool:
        return (term_matches(self.subject, subject)
                and term_matches(self.predicate, predicate)
                and term_matches(self.object, obj))

    def __repr__(self):
        return f"BasicPattern({self.subject!r}, {self.predicate!r}, {self.object!r})"


class GraphComponentCollection(GraphComponent):
    """An ordered sequence of graph components."""

    def __init__(self):
        self.components: List[GraphComponent] = []

    def add_pattern(self, subject: Term, predicate: Term, obj: Term,
                    graph: Optional[Term] = None) -> BasicPattern:
        """Append a basic pattern to this collection.

        Args:
            subject: Variable, resource, blank node, or literal
            predicate: Variable, resource, blank node, or literal
            obj: Variable, resource, blank node, or literal
            graph: Optional qualifier scoping only this pattern to a graph

        Returns:
            The appended pattern

        Raises:
            ValueError: If any required term is None or unsupported
        """
        pattern = BasicPattern(subject, predicate, obj, graph)
        self.components.append(pattern)
        return pattern

    def add_graph_component(self, component: GraphComponent) -> None:
        """Nest a component inside this collection.

        Raises:
            ValueError: If the component is None, or is a collection that
                already contains this one (nesting must stay acyclic)
        """
        if component is None:
            raise ValueError("Graph component must not be None")
        if isinstance(component, GraphComponentCollection) and component._reaches(self):
            raise ValueError("A collection cannot contain itself")
        self.components.append(component)

    def _reaches(self, target: 'GraphComponentCollection') -> bool:
        if self is target:
            return True
        return any(nested._reaches(target) for nested in self.collections())

    def patterns(self) -> Iterator[BasicPattern]:
        """Iterate the basic patterns directly inside this collection."""
        for component in self.components:
            if isinstance(component, BasicPattern):
                yield component

    def collections(self) -> Iterator['GraphComponentCollection']:
        """Iterate the collections directly nested in this collection."""
        for component in self.components:
            if isinstance(component, GraphComponentCollection):
                yield component

    def find_graph_components_with_pattern(self, subject: Any = None, predicate: Any = None,
                                           obj: Any = None) -> List['GraphComponentCollection']:
        """Find every collection containing a matching basic pattern.

        The search is depth-first, visiting this collection before the
        collections nested inside it. None arguments act as wildcards.

        Returns:
            List of matching collections, possibly empty
        """
        found: List[GraphComponentCollection] = []
        self._collect_matches(subject, predicate, obj, found)
        return found

    def _collect_matches(self, subject, predicate, obj, found):
        if any(pattern.matches(subject, predicate, obj) for pattern in self.patterns()):
            found.append(self)
        for nested in self.collections():
            nested._collect_matches(subject, predicate, obj, found)

    def is_empty(self) -> bool:
        return not self.components

    def __len__(self):
        return len(self.components)


class NamedGraphComponent(GraphComponentCollection):
    """Patterns scoped to a single named graph."""

    def __init__(self, uri: str):
        super().__init__()
        if not uri:
            raise ValueError("Named graph URI must be a non-empty string")
        self.uri = uri

    def __repr__(self):
        return f"NamedGraphComponent({self.uri!r}, {len(self.components)} components)"


class OptionalComponent(GraphComponentCollection):
    """Patterns that are not required to match."""

    def __repr__(self):
        return f"OptionalComponent({len(self.components)} components)"
