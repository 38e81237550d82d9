"""Domain

A domain groups the data sources, regulations, and data types a provider
module makes available (e.g. water or air).
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class DataType:
    """A displayable category of results."""
    identifier: str
    label: str
    icon: Optional[str] = None


@dataclass
class Domain:
    uri: str
    label: Optional[str] = None
    sources: Dict[str, str] = field(default_factory=dict)
    regulations: Dict[str, str] = field(default_factory=dict)
    data_types: Dict[str, DataType] = field(default_factory=dict)

    def set_label(self, label: str) -> None:
        self.label = label

    def add_source(self, uri: str, label: str) -> None:
        self.sources[uri] = label

    def add_regulation(self, uri: str, label: str) -> None:
        self.regulations[uri] = label

    def add_data_type(self, identifier: str, label: str, icon: Optional[str] = None) -> None:
        self.data_types[identifier] = DataType(identifier, label, icon)
