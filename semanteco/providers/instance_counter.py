"""Instance Counter

Counts distinct instances per class with a grouped COUNT query.
"""

import logging
from typing import List

from ..client.utils.client_utils import QueryExecutionError
from ..model.query_method_model import FAILURE, InstanceCount, InstanceCountResponse, QueryMethodResponse
from ..module.module_configuration import ModuleConfiguration
from ..module.request import Request
from ..query.query import RDF_NS, VAR_NS, QueryType, SelectQuery
from ..query.terms import split_identifier
from ..results.results_decoder import ResultDecodeError, decode_results
from .vocab import POL_NS, SITE_VAR, SPARQL_JSON

logger = logging.getLogger(__name__)


class InstanceCounter:

    def __init__(self, request: Request, config: ModuleConfiguration, class_uris: List[str]):
        self.request = request
        self.config = config
        self.class_uris = list(class_uris)
        self.logger = request.get_logger()

    def build_query(self) -> SelectQuery:
        query = self.config.get_query_factory().new_query(QueryType.SELECT)
        site = query.get_variable(VAR_NS + SITE_VAR)
        type_var = query.get_variable(VAR_NS + "type")
        rdf_type = query.get_resource(RDF_NS + "type")
        count = query.create_variable_expression(f"COUNT(DISTINCT ?{SITE_VAR}) as ?count")

        query.set_variables([type_var, count])
        query.add_group_by(type_var)

        # counts every class; build() keeps only the requested ones
        query.where.add_pattern(site, rdf_type, type_var)

        # a region is optional, but half of one is an error
        if self.request.get_param("county") is not None or self.request.get_param("stateCode") is not None:
            county = self.request.require_param("county", "County parameter not supplied.")
            state_code = self.request.require_param("stateCode", "State code parameter not supplied.")
            query.where.add_pattern(site, query.get_resource(POL_NS + "hasCounty"), str(county))
            query.where.add_pattern(site, query.get_resource(POL_NS + "hasState"), str(state_code))
        return query

    def build(self) -> QueryMethodResponse:
        """
        Execute the count query and decode one entry per requested class.

        Classes with no instances are reported with a count of zero.
        """
        query = self.build_query()
        try:
            result_str = self.config.get_query_executor(self.request).accept(SPARQL_JSON).execute(query)
            table = decode_results(result_str, ["type", "count"])
            counts = {}
            for row in table:
                type_uri = row.get_value("type")
                raw_count = row.get_value("count")
                if type_uri is None or raw_count is None:
                    continue
                try:
                    counts[type_uri] = int(raw_count)
                except ValueError:
                    raise ResultDecodeError(f"Count for {type_uri} is not an integer: {raw_count!r}")
        except QueryExecutionError as e:
            self.logger.error(f"Unable to count instances: {e}")
            return FAILURE
        except ResultDecodeError as e:
            self.logger.error(f"Unable to parse JSON results: {e}")
            return FAILURE

        data = [InstanceCount(type=uri, label=split_identifier(uri)[1], count=counts.get(uri, 0))
                for uri in self.class_uris]
        return InstanceCountResponse(success=True, data=data)
