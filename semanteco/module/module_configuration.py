"""Module Configuration

Process-wide services handed to each module at registration: the query
factory, query executors bound to the configured endpoint, and domain creation.
"""

import logging
from typing import Optional

import requests

from ..client.config.config_loader import SemantEcoConfig
from ..client.query_executor import QueryExecutor
from ..query.query_factory import QueryFactory
from .domain import Domain
from .request import Request

logger = logging.getLogger(__name__)


class ModuleConfiguration:

    def __init__(self, config: SemantEcoConfig, *, session: Optional[requests.Session] = None):
        """
        Args:
            config: Loaded SemantEco configuration
            session: Optional requests session shared by all executors
        """
        self.config = config
        self.session = session or requests.Session()
        self.query_factory = QueryFactory(strict=config.use_strict_composition())

    def get_query_factory(self) -> QueryFactory:
        return self.query_factory

    def get_query_executor(self, request: Request) -> QueryExecutor:
        """Return an executor that logs through the request's logger."""
        return QueryExecutor.from_config(self.config, session=self.session, logger=request.get_logger())

    def get_domain(self, uri: str) -> Domain:
        """
        Create the per-request Domain for a URI.

        Domains are filled with request-specific sources, so each call
        returns a new instance rather than a shared one.
        """
        return Domain(uri)
