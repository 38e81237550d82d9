"""SemantEco module contract and pipeline."""

from .request import Request, ModuleConfigurationError
from .domain import Domain, DataType
from .module_inf import Module, ProvidesDomain, query_method
from .module_configuration import ModuleConfiguration
from .pipeline import ModulePipeline, UnknownQueryMethodError

__all__ = ['Request', 'ModuleConfigurationError', 'Domain', 'DataType', 'Module', 'ProvidesDomain',
           'query_method', 'ModuleConfiguration', 'ModulePipeline', 'UnknownQueryMethodError']
