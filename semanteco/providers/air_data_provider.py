"""Air Data Provider

Provides the air domain: air quality measurements and the EPA air
regulation.
"""

import logging

from ..module.domain import Domain
from ..module.request import Request
from .data_provider import DataProviderModule
from .vocab import AIR_MEASUREMENT_GRAPH, AIR_NS

logger = logging.getLogger(__name__)


class AirDataProviderModule(DataProviderModule):
    """Air domain provider."""

    DOMAIN_NS = AIR_NS
    DOMAIN_PREFIX = "air"
    DOMAIN_LABEL = "Air"
    SITE_CLASS = "AirSite"
    FLAG_VAR = "isAir"
    MEASUREMENT_GRAPH = AIR_MEASUREMENT_GRAPH

    def get_name(self) -> str:
        return "Air Data Provider"

    def add_data_sources(self, domain: Domain, request: Request) -> None:
        # TODO: discover air sources from the metadata graph once it lists them
        domain.add_source("http://sparql.tw.rpi.edu/source/epa-gov", "epa.gov")

    def add_regulations(self, domain: Domain) -> None:
        domain.add_regulation("http://was.tw.rpi.edu/ontology/semanteco/regulations/EPA-air-regulation.owl",
                              "EPA Regulation")

    def add_data_types(self, domain: Domain) -> None:
        domain.add_data_type("clean-air", "Clean Air", "clean-air.png")
        domain.add_data_type("clean-air-facility", "Clean Air Facility", "clean-air-facility.png")
        domain.add_data_type("polluted-air", "Polluted Air", "polluted-air.png")
        domain.add_data_type("polluted-air-facility", "Polluted Air Facility", "polluted-air-facility.png")
