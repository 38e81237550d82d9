"""
SemantEco Query Executor

Serializes a composed Query and submits it to a remote SPARQL endpoint over
HTTP, returning the raw response body.
"""

import logging
from typing import Optional

import requests

from .config.config_loader import DEFAULT_ACCEPT, SemantEcoConfig
from .utils.client_utils import QueryExecutionError, build_headers, validate_required_params
from ..query.query import Query

logger = logging.getLogger(__name__)


class QueryExecutor:
    """
    Executes queries against a SPARQL endpoint.

    Executors are cheap to copy; accept() returns a new executor bound to a
    response media type so a shared executor is never mutated per request.
    The call blocks until the endpoint answers or the transport times out.
    Failures are never retried here.
    """

    def __init__(self, endpoint_url: str, *, method: str = "POST", timeout: int = 30,
                 accept_type: str = DEFAULT_ACCEPT, session: Optional[requests.Session] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the executor.

        Args:
            endpoint_url: SPARQL query endpoint URL
            method: HTTP method, GET or POST
            timeout: Transport timeout in seconds
            accept_type: Media type requested from the endpoint
            session: Optional requests session used to send queries
            logger: Optional logger, usually the per-request logger
        """
        validate_required_params(endpoint_url=endpoint_url)
        self.endpoint_url = endpoint_url
        self.method = method.upper()
        if self.method not in ('GET', 'POST'):
            raise ValueError(f"Unsupported HTTP method: {method}")
        self.timeout = timeout
        self.accept_type = accept_type
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def from_config(cls, config: SemantEcoConfig, *, session: Optional[requests.Session] = None,
                    logger: Optional[logging.Logger] = None) -> 'QueryExecutor':
        return cls(config.get_endpoint_url(), method=config.get_http_method(),
                   timeout=config.get_timeout(), accept_type=config.get_default_accept(),
                   session=session, logger=logger)

    def accept(self, media_type: str) -> 'QueryExecutor':
        """
        Return an executor that requests the given response media type.

        Args:
            media_type: e.g. 'application/sparql-results+json' or 'text/turtle'
        """
        validate_required_params(media_type=media_type)
        return QueryExecutor(self.endpoint_url, method=self.method, timeout=self.timeout,
                             accept_type=media_type, session=self.session, logger=self.logger)

    def execute(self, query: Query) -> str:
        """
        Serialize and execute a query.

        Args:
            query: Fully composed query

        Returns:
            Raw response body

        Raises:
            QueryExecutionError: On network error, non-success status, or empty body
        """
        sparql = query.to_sparql()
        return self.execute_sparql(sparql)

    def execute_sparql(self, sparql: str) -> str:
        """
        Execute already serialized query text.

        Raises:
            QueryExecutionError: On network error, non-success status, or empty body
        """
        self.logger.debug(f"Executing query against {self.endpoint_url} (accept={self.accept_type}):\n{sparql}")

        headers = build_headers(Accept=self.accept_type)
        kwargs = {'headers': headers, 'timeout': self.timeout}
        if self.method == 'POST':
            headers['Content-Type'] = 'application/sparql-query'
            kwargs['data'] = sparql.encode('utf-8')
        else:
            kwargs['params'] = {'query': sparql}

        try:
            response = self.session.request(self.method, self.endpoint_url, **kwargs)
        except requests.RequestException as e:
            self.logger.error(f"SPARQL endpoint request failed: {e}")
            raise QueryExecutionError(f"SPARQL endpoint request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            self.logger.error(f"SPARQL query failed: {response.status_code} - {response.text[:500]}")
            raise QueryExecutionError(f"SPARQL query failed with status {response.status_code}",
                                      status_code=response.status_code)

        body = response.text
        if body is None or not body.strip():
            self.logger.error("SPARQL endpoint returned an empty response")
            raise QueryExecutionError("SPARQL endpoint returned an empty response",
                                      status_code=response.status_code)
        return body
