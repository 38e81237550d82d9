"""Tests for SPARQL serialization."""

import pytest

from semanteco.query import RDF_NS, RDFS_NS, VAR_NS, QueryFactory, QueryType

EX = "http://example.org/ns#"


@pytest.fixture
def factory():
    return QueryFactory()


def test_select_distinct_with_named_graph_and_optional(factory):
    query = factory.new_query(QueryType.SELECT)
    source = query.create_variable(VAR_NS + "source")
    label = query.create_variable(VAR_NS + "label")
    node = query.create_blank_node()
    query.set_variables([source, label])
    query.set_distinct(True)
    metadata = query.get_named_graph("http://sparql.tw.rpi.edu/semanteco/data-source")
    metadata.add_pattern(node, query.get_resource("http://purl.org/dc/terms/source"), source)
    optional = query.create_optional()
    metadata.add_graph_component(optional)
    optional.add_pattern(source, query.get_resource(RDFS_NS + "label"), label)

    assert query.to_sparql() == (
        "SELECT DISTINCT ?source ?label\n"
        "WHERE {\n"
        "  GRAPH <http://sparql.tw.rpi.edu/semanteco/data-source> {\n"
        "    _:b0 <http://purl.org/dc/terms/source> ?source .\n"
        "    OPTIONAL {\n"
        "      ?source <http://www.w3.org/2000/01/rdf-schema#label> ?label .\n"
        "    }\n"
        "  }\n"
        "}\n"
    )


def test_select_without_projection_uses_star(factory):
    query = factory.new_query(QueryType.SELECT)
    query.where.add_pattern(query.get_variable(VAR_NS + "s"), query.get_resource(EX + "p"), "x")
    assert query.to_sparql().startswith("SELECT *\nWHERE {\n")


def test_prefixes_and_expression_projection(factory):
    query = factory.new_query(QueryType.SELECT)
    site = query.get_variable(VAR_NS + "site")
    query.where.add_pattern(site, query.get_resource(RDF_NS + "type"), query.get_resource(EX + "Site"))
    query.set_namespace("ex", EX)
    flag = query.create_variable_expression("EXISTS { ?site a ex:Special } as ?isSpecial")
    query.set_variables([site, flag])

    text = query.to_sparql()
    assert text.splitlines()[0] == f"PREFIX ex: <{EX}>"
    assert "SELECT ?site (EXISTS { ?site a ex:Special } AS ?isSpecial)\n" in text
    assert f"?site <{RDF_NS}type> <{EX}Site> ." in text


def test_literals_rendered_through_rdflib(factory):
    query = factory.new_query(QueryType.SELECT)
    s = query.get_variable(VAR_NS + "s")
    query.where.add_pattern(s, query.get_resource(EX + "code"), "001")
    query.where.add_pattern(s, query.get_resource(EX + "quote"), 'say "hi"')
    query.where.add_pattern(s, query.get_resource(EX + "count"), 5)
    text = query.to_sparql()
    assert f'?s <{EX}code> "001" .' in text
    assert r'"say \"hi\""' in text
    assert '"5"^^<http://www.w3.org/2001/XMLSchema#integer>' in text


def test_pattern_graph_qualifier(factory):
    query = factory.new_query(QueryType.SELECT)
    s = query.get_variable(VAR_NS + "s")
    query.where.add_pattern(s, query.get_resource(EX + "p"), "o", "http://example.org/g")
    query.where.add_pattern(s, query.get_resource(EX + "q"), "o", query.get_variable(VAR_NS + "g"))
    text = query.to_sparql()
    assert f'GRAPH <http://example.org/g> {{ ?s <{EX}p> "o" . }}' in text
    assert f'GRAPH ?g {{ ?s <{EX}q> "o" . }}' in text


def test_group_by(factory):
    query = factory.new_query(QueryType.SELECT)
    t = query.get_variable(VAR_NS + "type")
    count = query.create_variable_expression("COUNT(DISTINCT ?site) as ?count")
    query.set_variables([t, count])
    query.add_group_by(t)
    query.add_group_by(t)
    query.where.add_pattern(query.get_variable(VAR_NS + "site"), query.get_resource(RDF_NS + "type"), t)
    text = query.to_sparql()
    assert "SELECT ?type (COUNT(DISTINCT ?site) AS ?count)\n" in text
    assert text.endswith("}\nGROUP BY ?type\n")


def test_construct(factory):
    query = factory.new_query(QueryType.CONSTRUCT)
    m = query.get_variable(VAR_NS + "measurement")
    p = query.get_resource(EX + "hasCounty")
    query.get_named_graph("http://example.org/data").add_pattern(m, p, "001")
    query.get_construct_component().add_pattern(m, p, "001")
    assert query.to_sparql() == (
        "CONSTRUCT {\n"
        f'  ?measurement <{EX}hasCounty> "001" .\n'
        "}\n"
        "WHERE {\n"
        "  GRAPH <http://example.org/data> {\n"
        f'    ?measurement <{EX}hasCounty> "001" .\n'
        "  }\n"
        "}\n"
    )


def test_serialization_is_repeatable(factory):
    query = factory.new_query(QueryType.SELECT)
    query.where.add_pattern(query.create_blank_node(), query.get_resource(EX + "p"), "o")
    assert query.to_sparql() == query.to_sparql()
    assert str(query) == query.to_sparql()
