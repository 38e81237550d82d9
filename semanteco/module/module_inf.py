"""SemantEco Module Interface

Abstract base class for domain modules. A module is visited once per request
by the pipeline and may contribute patterns to the shared query or triples to
the shared data model.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, List, Optional

from rdflib import Graph

from ..query.query import Query
from .request import Request

if TYPE_CHECKING:
    from .domain import Domain
    from .module_configuration import ModuleConfiguration

QUERY_METHOD_ATTR = '_semanteco_query_method'


def query_method(func: Callable) -> Callable:
    """Mark a module method as invocable by name through the pipeline."""
    setattr(func, QUERY_METHOD_ATTR, True)
    return func


def is_query_method(func: Callable) -> bool:
    return callable(func) and getattr(func, QUERY_METHOD_ATTR, False)


class Module(ABC):
    """
    Abstract interface for SemantEco modules.

    Modules must be additive: they may add variables, patterns, and namespaces
    but never remove or rewrite what another module contributed. A module that
    does not handle the current query kind returns without changes.
    """

    def __init__(self):
        self.config: Optional['ModuleConfiguration'] = None

    @abstractmethod
    def get_name(self) -> str:
        """Human readable module name, unique within a pipeline."""
        pass

    def get_major_version(self) -> int:
        return 1

    def get_minor_version(self) -> int:
        return 0

    def get_extra_version(self) -> Optional[str]:
        return None

    def get_version(self) -> str:
        version = f"{self.get_major_version()}.{self.get_minor_version()}"
        extra = self.get_extra_version()
        return f"{version}-{extra}" if extra else version

    def set_module_configuration(self, config: 'ModuleConfiguration') -> None:
        self.config = config

    @abstractmethod
    def visit_query(self, query: Query, request: Request) -> None:
        """Contribute to the shared query for this request."""
        pass

    def visit_data_model(self, model: Graph, request: Request) -> None:
        """Contribute triples to the shared data model. Default does nothing."""
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}({self.get_name()!r}, {self.get_version()})"


class ProvidesDomain(ABC):
    """Mixin for modules that expose one or more domains."""

    @abstractmethod
    def get_domains(self, request: Request) -> List['Domain']:
        pass
