"""
SemantEco query execution client.
"""

from .query_executor import QueryExecutor
from .config.config_loader import SemantEcoConfig, ClientConfigurationError
from .utils.client_utils import SemantEcoClientError, QueryExecutionError

__all__ = ['QueryExecutor', 'SemantEcoConfig', 'ClientConfigurationError',
           'SemantEcoClientError', 'QueryExecutionError']
