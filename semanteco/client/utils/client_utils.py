"""
SemantEco Client Utilities

Shared exceptions and helper functions for the query execution client.
"""

from typing import Any, Dict


class SemantEcoClientError(Exception):
    """Base exception for SemantEco client errors."""
    pass


class QueryExecutionError(SemantEcoClientError):
    """Raised when a query cannot be executed against the remote endpoint."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


def validate_required_params(**params):
    """
    Validate that required parameters are provided.

    Args:
        **params: Parameter name-value pairs to validate

    Raises:
        SemantEcoClientError: If any required parameter is missing or None
    """
    for param_name, param_value in params.items():
        if param_value is None or param_value == "":
            raise SemantEcoClientError(f"Required parameter '{param_name}' is missing or empty")


def build_headers(**headers) -> Dict[str, Any]:
    """
    Build an HTTP header dictionary, filtering out None values.

    Args:
        **headers: Header name-value pairs, underscores become dashes

    Returns:
        Dictionary with non-None headers
    """
    return {k.replace('_', '-'): v for k, v in headers.items() if v is not None}
