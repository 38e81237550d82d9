"""
SemantEco Client Utilities Package
"""

from .client_utils import SemantEcoClientError, QueryExecutionError, validate_required_params, build_headers

__all__ = ['SemantEcoClientError', 'QueryExecutionError', 'validate_required_params', 'build_headers']
