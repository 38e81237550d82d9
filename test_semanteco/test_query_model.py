"""Tests for the query model

Interning, named graph reuse, structural search, and composition conflicts.
"""

import logging

import pytest

from semanteco.query import (
    RDF_NS, VAR_NS, CompositionConflictError, ConstructQuery, GraphComponentCollection,
    NamedGraphComponent, OptionalComponent, QueryFactory, QueryType, SelectQuery
)

EX = "http://example.org/ns#"


@pytest.fixture
def query():
    return QueryFactory().new_query(QueryType.SELECT)


class TestInterning:

    def test_variable_interned(self, query):
        assert query.get_variable(VAR_NS + "site") is query.get_variable(VAR_NS + "site")
        assert query.create_variable(VAR_NS + "site") is query.get_variable(VAR_NS + "site")

    def test_variable_identity_includes_namespace(self, query):
        a = query.get_variable("http://a.org/vars#site")
        b = query.get_variable("http://b.org/vars#site")
        assert a is not b
        assert a != b
        assert a.name == b.name == "site"

    def test_resource_interned(self, query):
        assert query.get_resource(RDF_NS + "type") is query.get_resource(RDF_NS + "type")

    def test_resource_and_variable_never_equal(self, query):
        assert query.get_resource(EX + "x") != query.get_variable(EX + "x")

    def test_blank_nodes_are_fresh(self, query):
        first = query.create_blank_node()
        second = query.create_blank_node()
        assert first is not second
        assert first.label != second.label


class TestNamedGraphs:

    def test_same_uri_returns_same_component(self, query):
        graph = query.get_named_graph("http://example.org/graph")
        assert query.get_named_graph("http://example.org/graph") is graph
        assert isinstance(graph, NamedGraphComponent)

    def test_patterns_from_both_calls_combined(self, query):
        s = query.get_variable(VAR_NS + "s")
        query.get_named_graph("http://example.org/graph").add_pattern(s, query.get_resource(EX + "p"), 1)
        query.get_named_graph("http://example.org/graph").add_pattern(s, query.get_resource(EX + "q"), 2)
        graphs = [c for c in query.where.collections() if isinstance(c, NamedGraphComponent)]
        assert len(graphs) == 1
        assert len(list(graphs[0].patterns())) == 2

    def test_different_uris_are_separate(self, query):
        assert query.get_named_graph("http://a.org/g") is not query.get_named_graph("http://b.org/g")
        assert len(query.where) == 2


class TestPatterns:

    def test_optional_is_detached(self, query):
        optional = query.create_optional()
        assert isinstance(optional, OptionalComponent)
        assert query.where.is_empty()
        query.where.add_graph_component(optional)
        assert list(query.where.collections()) == [optional]

    @pytest.mark.parametrize("position", [0, 1, 2])
    def test_none_term_rejected(self, query, position):
        terms = [query.get_variable(VAR_NS + "s"), query.get_resource(EX + "p"), "o"]
        terms[position] = None
        with pytest.raises(ValueError):
            query.where.add_pattern(*terms)

    def test_unsupported_term_rejected(self, query):
        with pytest.raises(ValueError):
            query.where.add_pattern(object(), query.get_resource(EX + "p"), "o")

    def test_literal_terms_accepted(self, query):
        pattern = query.where.add_pattern(query.get_variable(VAR_NS + "s"),
                                          query.get_resource(EX + "p"), 4.5)
        assert pattern.object == 4.5


class TestFindGraphComponents:

    def build(self, query):
        site = query.get_variable(VAR_NS + "site")
        rdf_type = query.get_resource(RDF_NS + "type")
        site_class = query.get_resource(EX + "MeasurementSite")
        top = query.where
        named = query.get_named_graph("http://example.org/graph")
        optional = query.create_optional()
        named.add_graph_component(optional)
        inner = OptionalComponent()
        optional.add_graph_component(inner)
        inner.add_pattern(site, rdf_type, site_class)
        named.add_pattern(site, query.get_resource(EX + "hasCounty"), "001")
        return site, rdf_type, site_class, top, named, optional, inner

    def test_finds_deeply_nested(self, query):
        site, rdf_type, site_class, top, named, optional, inner = self.build(query)
        assert query.find_graph_components_with_pattern(site, rdf_type, site_class) == [inner]

    def test_returns_every_matching_collection(self, query):
        site, rdf_type, site_class, top, named, optional, inner = self.build(query)
        top.add_pattern(site, rdf_type, site_class)
        found = query.find_graph_components_with_pattern(site, rdf_type, site_class)
        assert found == [top, inner]

    def test_wildcards(self, query):
        site, rdf_type, site_class, top, named, optional, inner = self.build(query)
        assert query.find_graph_components_with_pattern(site, None, None) == [named, inner]
        assert query.find_graph_components_with_pattern(None, None, "001") == [named]

    def test_no_match(self, query):
        site, rdf_type, site_class, *_ = self.build(query)
        other = query.get_resource(EX + "Facility")
        assert query.find_graph_components_with_pattern(site, rdf_type, other) == []
        assert query.find_graph_components_with_pattern(None, None, 1) == []

    def test_nesting_cycles_rejected(self):
        outer = OptionalComponent()
        middle = OptionalComponent()
        inner = OptionalComponent()
        outer.add_graph_component(middle)
        middle.add_graph_component(inner)
        for container, component in ((outer, outer), (middle, outer), (inner, outer)):
            with pytest.raises(ValueError):
                container.add_graph_component(component)
        assert [len(c) for c in (outer, middle, inner)] == [1, 1, 0]

    def test_literal_types_distinguished(self):
        collection = GraphComponentCollection()
        collection.add_pattern("s", "p", True)
        assert collection.find_graph_components_with_pattern(None, None, 1) == []
        assert collection.find_graph_components_with_pattern(None, None, True) == [collection]


class TestQueryKinds:

    def test_factory_creates_tagged_classes(self):
        factory = QueryFactory()
        select = factory.new_query(QueryType.SELECT)
        construct = factory.new_query(QueryType.CONSTRUCT)
        assert isinstance(select, SelectQuery) and select.get_type() == QueryType.SELECT
        assert isinstance(construct, ConstructQuery) and construct.get_type() == QueryType.CONSTRUCT
        assert not hasattr(construct, "set_variables")
        assert not hasattr(select, "get_construct_component")

    def test_set_variables_dedupes(self, query):
        a = query.get_variable(VAR_NS + "a")
        b = query.get_variable(VAR_NS + "b")
        query.set_variables([a, b, a])
        assert query.variables == [a, b]

    def test_set_variables_rejects_non_variables(self, query):
        with pytest.raises(ValueError):
            query.set_variables([query.get_resource(EX + "x")])


class TestVariableExpressions:

    def test_expression_interned_by_alias(self, query):
        first = query.create_variable_expression("EXISTS { ?site a ex:Site } as ?isSite")
        second = query.create_variable_expression("EXISTS { ?site a ex:Site } as ?isSite")
        assert first is second
        assert first.is_expression
        assert first.expression == "EXISTS { ?site a ex:Site }"
        assert first.projection() == "(EXISTS { ?site a ex:Site } AS ?isSite)"

    def test_expression_requires_alias(self, query):
        with pytest.raises(ValueError):
            query.create_variable_expression("EXISTS { ?site a ex:Site }")

    def test_expression_cannot_reuse_pattern_variable(self, query):
        query.get_variable(VAR_NS + "site")
        with pytest.raises(ValueError):
            query.create_variable_expression("COUNT(?x) as ?site")

    def test_expression_variable_not_usable_in_patterns(self, query):
        query.create_variable_expression("1 as ?flag")
        flag = query.get_variable(VAR_NS + "flag")
        assert flag.is_expression
        with pytest.raises(ValueError):
            query.where.add_pattern(flag, query.get_resource(RDF_NS + "type"), "x")
        with pytest.raises(ValueError):
            query.where.add_pattern(query.get_variable(VAR_NS + "site"), query.get_resource(RDF_NS + "type"), flag)
        assert query.where.is_empty()

    def test_conflicting_expression_last_writer_wins(self, query, caplog):
        variable = query.create_variable_expression("1 as ?flag")
        with caplog.at_level(logging.WARNING):
            query.create_variable_expression("2 as ?flag")
        assert variable.expression == "2"
        assert "redefined" in caplog.text

    def test_conflicting_expression_strict(self):
        query = QueryFactory(strict=True).new_query(QueryType.SELECT)
        query.create_variable_expression("1 as ?flag")
        with pytest.raises(CompositionConflictError):
            query.create_variable_expression("2 as ?flag")


class TestNamespaces:

    def test_rebinding_same_uri_is_silent(self, query, caplog):
        with caplog.at_level(logging.WARNING):
            query.set_namespace("ex", EX)
            query.set_namespace("ex", EX)
        assert caplog.text == ""

    def test_conflict_last_writer_wins(self, query, caplog):
        query.set_namespace("ex", EX)
        with caplog.at_level(logging.WARNING):
            query.set_namespace("ex", "http://other.org/#")
        assert query.get_namespace("ex") == "http://other.org/#"
        assert "rebound" in caplog.text

    def test_conflict_strict(self):
        query = QueryFactory(strict=True).new_query(QueryType.CONSTRUCT)
        query.set_namespace("ex", EX)
        with pytest.raises(CompositionConflictError):
            query.set_namespace("ex", "http://other.org/#")
        assert query.get_namespace("ex") == EX
