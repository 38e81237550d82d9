"""Data Provider Base

Shared behaviour of the domain data providers: flagging measurement sites
that belong to the provider's domain, and loading measurements for the
requested region into the data model.
"""

import logging
from typing import List

from rdflib import Graph

from ..module.domain import Domain
from ..module.module_inf import Module, ProvidesDomain
from ..module.request import Request
from ..query.query import RDF_NS, VAR_NS, ConstructQuery, Query, QueryType, SelectQuery
from .vocab import POL_NS, SITE_VAR, TURTLE, UNIT_NS

logger = logging.getLogger(__name__)


class DataProviderModule(Module, ProvidesDomain):
    """
    Base class for modules that provide one measurement domain.

    Subclasses set the class attributes below. When a SELECT query already
    matches (?site rdf:type pol:MeasurementSite), visit_query adds a boolean
    projection telling whether each site belongs to this domain.
    """

    DOMAIN_NS: str = None
    DOMAIN_PREFIX: str = None
    DOMAIN_LABEL: str = None
    SITE_CLASS: str = None
    FLAG_VAR: str = None
    MEASUREMENT_GRAPH: str = None

    def visit_query(self, query: Query, request: Request) -> None:
        request.get_logger().debug(f"{self.get_name()} updating query")
        if query.query_type != QueryType.SELECT:
            return
        site = query.get_variable(VAR_NS + SITE_VAR)
        rdf_type = query.get_resource(RDF_NS + "type")
        measurement_site = query.get_resource(POL_NS + "MeasurementSite")
        graphs = query.find_graph_components_with_pattern(site, rdf_type, measurement_site)
        if graphs:
            self.add_site_flag(query)

    def add_site_flag(self, query: SelectQuery) -> None:
        query.set_namespace(self.DOMAIN_PREFIX, self.DOMAIN_NS)
        flag = query.create_variable_expression(
            f"EXISTS {{ ?{SITE_VAR} a {self.DOMAIN_PREFIX}:{self.SITE_CLASS} }} as ?{self.FLAG_VAR}")
        query.set_variables(query.get_variables() + [flag])

    def build_data_query(self, request: Request) -> ConstructQuery:
        """
        Compose the CONSTRUCT query fetching measurements for one county.

        Required request parameters: state, county, stateCode.

        Raises:
            ModuleConfigurationError: If a required parameter is missing
        """
        request.require_param("state", "State parameter not supplied. "
                                       "Expected two letter state abbreviation, e.g. CA.")
        county_code = request.require_param("county", "County parameter not supplied.")
        state_code = request.require_param("stateCode", "State code parameter not supplied.")

        query = self.config.get_query_factory().new_query(QueryType.CONSTRUCT)
        measurement = query.get_variable(VAR_NS + "measurement")
        element = query.get_variable(VAR_NS + "element")
        value = query.get_variable(VAR_NS + "value")
        unit = query.get_variable(VAR_NS + "unit")
        has_county = query.get_resource(POL_NS + "hasCounty")
        has_state = query.get_resource(POL_NS + "hasState")
        has_characteristic = query.get_resource(POL_NS + "hasCharacteristic")
        has_value = query.get_resource(POL_NS + "hasValue")
        has_unit = query.get_resource(UNIT_NS + "hasUnit")

        patterns = [
            (measurement, has_county, str(county_code)),
            (measurement, has_state, str(state_code)),
            (measurement, has_characteristic, element),
            (measurement, has_value, value),
            (measurement, has_unit, unit),
        ]
        graph = query.get_named_graph(self.MEASUREMENT_GRAPH)
        template = query.get_construct_component()
        for subject, predicate, obj in patterns:
            graph.add_pattern(subject, predicate, obj)
            template.add_pattern(subject, predicate, obj)
        return query

    def visit_data_model(self, model: Graph, request: Request) -> None:
        """Load the requested county's measurements into the model."""
        log = request.get_logger()
        log.debug(f"Visiting {self.get_name()} building data model")
        query = self.build_data_query(request)
        turtle = self.config.get_query_executor(request).accept(TURTLE).execute(query)
        before = len(model)
        model.parse(data=turtle, format="turtle")
        log.info(f"{self.get_name()} loaded {len(model) - before} triples")

    def get_domains(self, request: Request) -> List[Domain]:
        domain = self.config.get_domain(self.DOMAIN_NS)
        domain.set_label(self.DOMAIN_LABEL)
        self.add_data_sources(domain, request)
        self.add_regulations(domain)
        self.add_data_types(domain)
        return [domain]

    def add_data_sources(self, domain: Domain, request: Request) -> None:
        pass

    def add_regulations(self, domain: Domain) -> None:
        pass

    def add_data_types(self, domain: Domain) -> None:
        pass
