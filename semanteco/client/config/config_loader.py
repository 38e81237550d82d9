"""
SemantEco Configuration Loader

This module provides functionality to load and validate SemantEco configuration
from YAML files: the SPARQL endpoint location, the ordered list of modules to
register, and application settings.
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ACCEPT = "application/sparql-results+json"


class ClientConfigurationError(Exception):
    """Raised when there are configuration loading or validation errors."""
    pass


class SemantEcoConfig:
    """
    SemantEco configuration loader and manager.

    Loads configuration from YAML files and provides access to configuration
    sections. Values are read-only once the process has started.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to configuration file. If None, uses default locations or built-in defaults.
        """
        self.config_data: Dict[str, Any] = {}
        self.config_path: Optional[str] = None

        if config_path is not None:
            self.load_config(config_path)
        else:
            self._load_default_config()

    def load_config(self, config_path: str) -> None:
        """
        Load configuration from a specific file path.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ClientConfigurationError: If the file cannot be loaded or parsed
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise ClientConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                self.config_data = yaml.safe_load(f) or {}

            self.config_path = str(config_file.absolute())
            logger.info(f"Loaded configuration from: {self.config_path}")

        except yaml.YAMLError as e:
            raise ClientConfigurationError(f"Error parsing YAML configuration: {e}")
        except OSError as e:
            raise ClientConfigurationError(f"Error loading configuration file: {e}")

        if not isinstance(self.config_data, dict):
            raise ClientConfigurationError("Configuration root must be a mapping")

    def _load_default_config(self) -> None:
        """
        Load default configuration by searching standard locations or using built-in defaults.
        """
        default_paths = [
            "semanteco-config.yaml",
            "semanteco_config/semanteco-config.yaml",
            os.path.expanduser("~/.semanteco/semanteco-config.yaml"),
            "/etc/semanteco/semanteco-config.yaml"
        ]

        for path in default_paths:
            if os.path.exists(path):
                try:
                    self.load_config(path)
                    logger.info(f"Found and loaded default config from: {path}")
                    return
                except ClientConfigurationError:
                    continue

        self.config_data = self._get_default_config()
        self.config_path = "<built-in defaults>"
        logger.info("Using built-in default configuration")

    def _get_default_config(self) -> Dict[str, Any]:
        return {
            'endpoint': {
                'url': 'http://localhost:3030/semanteco/sparql',
                'method': 'POST',
                'timeout': 30,
                'accept': DEFAULT_ACCEPT
            },
            'modules': [
                'semanteco.providers.water_data_provider.WaterDataProviderModule',
                'semanteco.providers.air_data_provider.AirDataProviderModule'
            ],
            'app': {
                'log_level': 'INFO',
                'strict_composition': False
            }
        }

    def get_endpoint_config(self) -> Dict[str, Any]:
        """
        Get endpoint configuration section.

        Returns:
            Dictionary containing endpoint configuration
        """
        return self.config_data.get('endpoint', {})

    def get_app_config(self) -> Dict[str, Any]:
        return self.config_data.get('app', {})

    def get_endpoint_url(self) -> str:
        """
        Get the SPARQL endpoint URL.

        SEMANTECO_ENDPOINT_URL overrides the configured value.

        Returns:
            Endpoint URL string
        """
        load_dotenv()
        return os.getenv('SEMANTECO_ENDPOINT_URL',
                         self.get_endpoint_config().get('url', 'http://localhost:3030/semanteco/sparql'))

    def get_http_method(self) -> str:
        return str(self.get_endpoint_config().get('method', 'POST')).upper()

    def get_timeout(self) -> int:
        """
        Get the request timeout in seconds.

        SEMANTECO_ENDPOINT_TIMEOUT overrides the configured value.

        Returns:
            Timeout in seconds
        """
        load_dotenv()
        timeout = os.getenv('SEMANTECO_ENDPOINT_TIMEOUT')
        if timeout is not None:
            try:
                return int(timeout)
            except ValueError:
                raise ClientConfigurationError(f"SEMANTECO_ENDPOINT_TIMEOUT must be an integer: {timeout!r}")
        return self.get_endpoint_config().get('timeout', 30)

    def get_default_accept(self) -> str:
        return self.get_endpoint_config().get('accept', DEFAULT_ACCEPT)

    def get_module_paths(self) -> List[str]:
        """
        Get the dotted class paths of modules in registration order.

        Returns:
            List of dotted paths, e.g. 'package.module.ClassName'
        """
        return list(self.config_data.get('modules', []) or [])

    def get_log_level(self) -> str:
        return str(self.get_app_config().get('log_level', 'INFO')).upper()

    def use_strict_composition(self) -> bool:
        return self.get_app_config().get('strict_composition', False)

    def validate_config(self) -> None:
        """
        Validate the loaded configuration.

        Raises:
            ClientConfigurationError: If configuration is invalid
        """
        endpoint_url = self.get_endpoint_url()
        if not endpoint_url or not isinstance(endpoint_url, str):
            raise ClientConfigurationError("Endpoint URL must be a non-empty string")

        if not endpoint_url.startswith(('http://', 'https://')):
            raise ClientConfigurationError("Endpoint URL must start with http:// or https://")

        if self.get_http_method() not in ('GET', 'POST'):
            raise ClientConfigurationError("Endpoint method must be GET or POST")

        timeout = self.get_timeout()
        if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout <= 0:
            raise ClientConfigurationError("Timeout must be a positive integer")

        modules = self.get_module_paths()
        for path in modules:
            if not isinstance(path, str) or '.' not in path:
                raise ClientConfigurationError(f"Module entry must be a dotted class path: {path!r}")
        if len(set(modules)) != len(modules):
            raise ClientConfigurationError("Module list contains duplicate entries")

        if not isinstance(self.use_strict_composition(), bool):
            raise ClientConfigurationError("strict_composition must be a boolean value")

        logger.info("Configuration validation passed")

    def __str__(self) -> str:
        return f"SemantEcoConfig(path={self.config_path}, endpoint_url={self.get_endpoint_url()})"
