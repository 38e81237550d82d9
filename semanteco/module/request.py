"""Request

Per-request parameters and logger handed to every module.
"""

import logging
import uuid
from types import MappingProxyType
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


class ModuleConfigurationError(ValueError):
    """Raised when a required request parameter is missing or invalid."""
    pass


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the id of the request it belongs to."""

    def process(self, msg, kwargs):
        return f"[{self.extra['request_id']}] {msg}", kwargs


class Request:
    """Read-only view of one inbound request."""

    def __init__(self, params: Optional[Mapping[str, Any]] = None, request_id: Optional[str] = None):
        self.request_id = request_id or uuid.uuid4().hex[:12]
        self.params = MappingProxyType(dict(params or {}))
        self._logger = RequestLoggerAdapter(logging.getLogger("semanteco.request"),
                                            {'request_id': self.request_id})

    def get_logger(self) -> RequestLoggerAdapter:
        return self._logger

    def get_param(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    def require_param(self, name: str, message: Optional[str] = None) -> Any:
        """
        Return a parameter that must be present and non-empty.

        Raises:
            ModuleConfigurationError: If the parameter is absent, None or blank
        """
        value = self.params.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ModuleConfigurationError(message or f"Required parameter '{name}' not supplied.")
        return value

    def __repr__(self):
        return f"Request(id={self.request_id}, params={dict(self.params)})"
