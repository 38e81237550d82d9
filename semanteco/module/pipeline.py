"""Module Pipeline

Runs registered modules against per-request objects in registration order.

Order is the only coordination between modules: a module that inspects
patterns contributed by another (through find_graph_components_with_pattern)
must be registered after it.
"""

import importlib
import logging
from typing import Any, Iterable, List, Optional, Tuple

from rdflib import Graph

from ..client.config.config_loader import ClientConfigurationError, SemantEcoConfig
from ..query.query import Query
from .domain import Domain
from .module_configuration import ModuleConfiguration
from .module_inf import Module, ProvidesDomain, is_query_method
from .request import Request

logger = logging.getLogger(__name__)


class UnknownQueryMethodError(LookupError):
    """Raised when a module or query method name cannot be resolved."""
    pass


def load_module_class(path: str) -> type:
    """
    Resolve a dotted 'package.module.ClassName' path to a Module subclass.

    Raises:
        ClientConfigurationError: If the path cannot be imported or is not a Module
    """
    module_path, _, class_name = path.rpartition('.')
    try:
        cls = getattr(importlib.import_module(module_path), class_name)
    except (ImportError, AttributeError, ValueError) as e:
        raise ClientConfigurationError(f"Cannot load module class '{path}': {e}")
    if not isinstance(cls, type) or not issubclass(cls, Module):
        raise ClientConfigurationError(f"'{path}' is not a SemantEco Module")
    return cls


class ModulePipeline:
    """
    Immutable, ordered collection of modules.

    Each visit_* call runs every module exactly once, sequentially, in
    registration order. Nothing here is mutated after construction, so one
    pipeline may serve concurrent requests as long as each request brings its
    own Query.
    """

    def __init__(self, modules: Iterable[Module], configuration: ModuleConfiguration):
        self._modules: Tuple[Module, ...] = tuple(modules)
        self.configuration = configuration

        names = [m.get_name() for m in self._modules]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ClientConfigurationError(f"Duplicate module names: {duplicates}")

        for module in self._modules:
            module.set_module_configuration(configuration)
            logger.info(f"Registered module {module!r}")

    @classmethod
    def from_config(cls, config: SemantEcoConfig, **kwargs) -> 'ModulePipeline':
        """Instantiate the configured module classes in their listed order."""
        configuration = ModuleConfiguration(config, **kwargs)
        modules = [load_module_class(path)() for path in config.get_module_paths()]
        return cls(modules, configuration)

    @property
    def modules(self) -> Tuple[Module, ...]:
        return self._modules

    def get_module(self, name: str) -> Optional[Module]:
        for module in self._modules:
            if module.get_name() == name:
                return module
        return None

    def visit_query(self, query: Query, request: Request) -> Query:
        """Let every module contribute to the query, in registration order."""
        log = request.get_logger()
        for module in self._modules:
            log.debug(f"{module.get_name()} visiting {query.query_type.value} query")
            module.visit_query(query, request)
        return query

    def visit_data_model(self, model: Graph, request: Request) -> Graph:
        log = request.get_logger()
        for module in self._modules:
            log.debug(f"{module.get_name()} visiting data model")
            module.visit_data_model(model, request)
        return model

    def get_domains(self, request: Request) -> List[Domain]:
        domains: List[Domain] = []
        for module in self._modules:
            if isinstance(module, ProvidesDomain):
                domains.extend(module.get_domains(request))
        return domains

    def list_query_methods(self) -> List[Tuple[str, str]]:
        """Return (module name, method name) for every exposed query method."""
        methods = []
        for module in self._modules:
            for attr in sorted(dir(type(module))):
                if is_query_method(getattr(type(module), attr, None)):
                    methods.append((module.get_name(), attr))
        return methods

    def invoke_query_method(self, module_name: str, method_name: str, request: Request) -> Any:
        """
        Call a method marked with @query_method on a registered module.

        Raises:
            UnknownQueryMethodError: If the module or method is unknown, or the
                method is not marked as a query method
        """
        module = self.get_module(module_name)
        if module is None:
            raise UnknownQueryMethodError(f"No module named '{module_name}'")
        method = getattr(module, method_name, None)
        if method is None or not is_query_method(method):
            raise UnknownQueryMethodError(f"'{module_name}' has no query method '{method_name}'")
        request.get_logger().debug(f"Invoking {module_name}.{method_name}")
        return method(request)
