"""Tests for ModulePipeline ordering and composition."""

import logging

import pytest

from semanteco.client.config.config_loader import ClientConfigurationError
from semanteco.module import Module, ModulePipeline, Request, UnknownQueryMethodError, query_method
from semanteco.model.query_method_model import QueryMethodResponse
from semanteco.providers.vocab import POL_NS
from semanteco.query import RDF_NS, VAR_NS, QueryType
from test_semanteco.utils.test_helpers import FakeSession, create_test_configuration, create_test_pipeline

PROVIDERS = [
    'semanteco.providers.water_data_provider.WaterDataProviderModule',
    'semanteco.providers.air_data_provider.AirDataProviderModule',
]


class RecordingModule(Module):

    def __init__(self, name, log):
        super().__init__()
        self.name = name
        self.log = log

    def get_name(self):
        return self.name

    def visit_query(self, query, request):
        self.log.append(self.name)

    @query_method
    def ping(self, request):
        return QueryMethodResponse(success=True)

    def not_exposed(self, request):
        return QueryMethodResponse(success=True)


def site_query(pipeline):
    query = pipeline.configuration.get_query_factory().new_query(QueryType.SELECT)
    site = query.get_variable(VAR_NS + "site")
    query.set_variables([site])
    query.where.add_pattern(site, query.get_resource(RDF_NS + "type"),
                            query.get_resource(POL_NS + "MeasurementSite"))
    return query


def test_modules_visited_once_in_registration_order():
    log = []
    modules = [RecordingModule(name, log) for name in ("c", "a", "b")]
    pipeline = ModulePipeline(modules, create_test_configuration())
    pipeline.visit_query(pipeline.configuration.get_query_factory().new_query(), Request())
    assert log == ["c", "a", "b"]
    assert all(m.config is pipeline.configuration for m in modules)


def test_duplicate_module_names_rejected():
    log = []
    with pytest.raises(ClientConfigurationError):
        ModulePipeline([RecordingModule("x", log), RecordingModule("x", log)], create_test_configuration())


def test_from_config_loads_modules_in_order():
    pipeline = create_test_pipeline(modules=list(reversed(PROVIDERS)))
    assert [m.get_name() for m in pipeline.modules] == ["Air Data Provider", "Water Data Provider"]


@pytest.mark.parametrize("path", ["semanteco.nope.Missing", "semanteco.query.query.Query", "json.JSONDecoder"])
def test_from_config_rejects_bad_module_paths(path):
    with pytest.raises(ClientConfigurationError):
        create_test_pipeline(modules=[path])


def test_existence_check_projection_added():
    pipeline = create_test_pipeline(modules=PROVIDERS)
    query = site_query(pipeline)
    pipeline.visit_query(query, Request())

    names = [v.name for v in query.variables]
    assert names == ["site", "isWater", "isAir"]
    assert len(set(names)) == len(names)
    assert query.get_namespace("water") == "http://escience.rpi.edu/ontology/semanteco/2/0/water.owl#"
    assert query.get_namespace("air") == "http://was.tw.rpi.edu/ontology/semanteco/air/air.owl#"
    text = query.to_sparql()
    assert "(EXISTS { ?site a water:WaterSite } AS ?isWater)" in text
    assert "(EXISTS { ?site a air:AirSite } AS ?isAir)" in text


def test_single_provider_adds_exactly_one_expression():
    pipeline = create_test_pipeline(modules=PROVIDERS[1:])
    query = site_query(pipeline)
    original = list(query.variables)
    pipeline.visit_query(query, Request())
    added = [v for v in query.variables if v not in original]
    assert query.variables[:len(original)] == original
    assert len(added) == 1 and added[0].is_expression


def test_pipeline_is_idempotent():
    pipeline = create_test_pipeline(modules=PROVIDERS)
    query = site_query(pipeline)
    request = Request({"state": "CO"})
    first = pipeline.visit_query(query, request).to_sparql()
    second = pipeline.visit_query(query, request).to_sparql()
    assert first == second
    assert len(query.variables) == 3


def test_no_site_pattern_no_change():
    pipeline = create_test_pipeline(modules=PROVIDERS)
    query = pipeline.configuration.get_query_factory().new_query(QueryType.SELECT)
    before = query.to_sparql()
    pipeline.visit_query(query, Request())
    assert query.to_sparql() == before
    assert query.namespaces == {}


def test_construct_queries_left_alone():
    pipeline = create_test_pipeline(modules=PROVIDERS)
    query = pipeline.configuration.get_query_factory().new_query(QueryType.CONSTRUCT)
    site = query.get_variable(VAR_NS + "site")
    query.where.add_pattern(site, query.get_resource(RDF_NS + "type"),
                            query.get_resource(POL_NS + "MeasurementSite"))
    before = query.to_sparql()
    pipeline.visit_query(query, Request())
    assert query.to_sparql() == before


def test_invoke_query_method():
    pipeline = ModulePipeline([RecordingModule("rec", [])], create_test_configuration())
    assert pipeline.invoke_query_method("rec", "ping", Request()).success
    assert pipeline.list_query_methods() == [("rec", "ping")]


@pytest.mark.parametrize("module,method", [("missing", "ping"), ("rec", "not_exposed"), ("rec", "nothing")])
def test_invoke_unknown_query_method(module, method):
    pipeline = ModulePipeline([RecordingModule("rec", [])], create_test_configuration())
    with pytest.raises(UnknownQueryMethodError):
        pipeline.invoke_query_method(module, method, Request())


def test_provider_query_methods_listed():
    pipeline = create_test_pipeline(modules=PROVIDERS, session=FakeSession())
    assert ("Water Data Provider", "query_for_data_sources") in pipeline.list_query_methods()
    assert ("Water Data Provider", "get_site_counts") in pipeline.list_query_methods()


def test_request_logs_carry_request_id(caplog):
    pipeline = ModulePipeline([RecordingModule("rec", [])], create_test_configuration())
    request = Request(request_id="req-42")
    with caplog.at_level(logging.DEBUG, logger="semanteco.request"):
        pipeline.visit_query(pipeline.configuration.get_query_factory().new_query(), request)
    messages = [r.getMessage() for r in caplog.records if r.name == "semanteco.request"]
    assert messages and all(m.startswith("[req-42] ") for m in messages)
