"""Water Data Provider

Provides the water domain. Data sources are discovered from the metadata
graph of the backing triple store rather than configured statically.
"""

import logging

from ..client.utils.client_utils import QueryExecutionError
from ..model.query_method_model import FAILURE, QueryMethodResponse, SourceEntry, SourceListResponse
from ..module.domain import Domain
from ..module.module_inf import query_method
from ..module.request import Request
from ..query.query import RDFS_NS, VAR_NS, QueryType
from ..results.results_decoder import ResultDecodeError, decode_results, derive_label
from .data_provider import DataProviderModule
from .instance_counter import InstanceCounter
from .vocab import (
    DC_NS, LABEL_VAR, POL_NS, SEMANTECO_METADATA, SOURCE_VAR, SPARQL_JSON, WATER_MEASUREMENT_GRAPH, WATER_NS
)

logger = logging.getLogger(__name__)

REGULATION_NS = "http://escience.rpi.edu/ontology/semanteco/2/0/"


class WaterDataProviderModule(DataProviderModule):
    """Water domain provider."""

    DOMAIN_NS = WATER_NS
    DOMAIN_PREFIX = "water"
    DOMAIN_LABEL = "Water"
    SITE_CLASS = "WaterSite"
    FLAG_VAR = "isWater"
    MEASUREMENT_GRAPH = WATER_MEASUREMENT_GRAPH

    def get_name(self) -> str:
        return "Water Data Provider"

    @query_method
    def query_for_data_sources(self, request: Request) -> QueryMethodResponse:
        """
        List the data sources recorded in the metadata graph.

        Sources without an rdfs:label get one derived from their URI.

        Returns:
            SourceListResponse on success, otherwise the bare failure response
        """
        log = request.get_logger()
        log.debug("query_for_data_sources")
        query = self.config.get_query_factory().new_query(QueryType.SELECT)

        source = query.create_variable(VAR_NS + SOURCE_VAR)
        label = query.create_variable(VAR_NS + LABEL_VAR)
        dc_source = query.get_resource(DC_NS + SOURCE_VAR)
        rdfs_label = query.get_resource(RDFS_NS + LABEL_VAR)
        graph = query.create_blank_node()

        query.set_variables([source, label])
        query.set_distinct(True)
        metadata = query.get_named_graph(SEMANTECO_METADATA)
        metadata.add_pattern(graph, dc_source, source)
        optional = query.create_optional()
        metadata.add_graph_component(optional)
        optional.add_pattern(source, rdfs_label, label)

        try:
            result_str = self.config.get_query_executor(request).accept(SPARQL_JSON).execute(query)
            log.debug(f"Results: {result_str}")
            table = decode_results(result_str, [SOURCE_VAR, LABEL_VAR])
            data = []
            for row in table:
                source_uri = row.get_value(SOURCE_VAR)
                if source_uri is None:
                    raise ResultDecodeError(f"Row without ?{SOURCE_VAR} binding")
                label_str = row.get_value(LABEL_VAR)
                if label_str is None:
                    label_str = derive_label(source_uri)
                data.append(SourceEntry(uri=source_uri, label=label_str))
        except QueryExecutionError as e:
            log.error(f"Unable to query data sources: {e}")
            return FAILURE
        except ResultDecodeError as e:
            log.error(f"Unable to parse JSON results: {e}")
            return FAILURE
        return SourceListResponse(success=True, data=data)

    @query_method
    def get_site_counts(self, request: Request) -> QueryMethodResponse:
        """
        Count measurement sites and facilities, optionally within the
        county given by the request's county and stateCode parameters.
        """
        request.get_logger().debug("get_site_counts")
        counter = InstanceCounter(request, self.config,
                                  [POL_NS + "MeasurementSite", POL_NS + "Facility"])
        return counter.build()

    def add_data_sources(self, domain: Domain, request: Request) -> None:
        response = self.query_for_data_sources(request)
        if not isinstance(response, SourceListResponse):
            request.get_logger().warning("Water data sources unavailable")
            return
        for entry in response.data:
            domain.add_source(entry.uri, entry.label)

    def add_regulations(self, domain: Domain) -> None:
        domain.add_regulation(REGULATION_NS + "EPA-regulation.owl", "EPA Regulation")
        domain.add_regulation(REGULATION_NS + "ca-regulation.owl", "CA Regulation")
        domain.add_regulation(REGULATION_NS + "ma-regulation.owl", "MA Regulation")
        domain.add_regulation(REGULATION_NS + "ny-regulation.owl", "NY Regulation")
        domain.add_regulation(REGULATION_NS + "ri-regulation.owl", "RI Regulation")

    def add_data_types(self, domain: Domain) -> None:
        domain.add_data_type("clean-water", "Clean Water", "clean-water.png")
        domain.add_data_type("clean-facility", "Facility", "facility.png")
        domain.add_data_type("polluted-water", "Polluted Water", "polluted-water.png")
        domain.add_data_type("polluted-facility", "Polluted Facility", "polluted-facility.png")
