"""Result Decoder

Decodes SPARQL 1.1 JSON result documents
({"head": {"vars": [...]}, "results": {"bindings": [...]}}) into rows.

Unbound variables (an OPTIONAL that did not match) decode to None. Any
structural problem fails the whole document; rows decoded before the
problem are discarded.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

logger = logging.getLogger(__name__)

RESULTS = "results"
BINDINGS = "bindings"
VALUE = "value"


class ResultDecodeError(Exception):
    """Raised when a response is not a well-formed tabular JSON result."""
    pass


@dataclass(frozen=True)
class Binding:
    """The value bound to a variable in one row."""
    value: str
    type: Optional[str] = None      # "uri", "literal", "bnode"
    datatype: Optional[str] = None
    lang: Optional[str] = None

    @property
    def is_uri(self) -> bool:
        return self.type == "uri"


@dataclass
class ResultRow:
    """One solution: every requested variable maps to a Binding or None."""
    bindings: Dict[str, Optional[Binding]] = field(default_factory=dict)

    def get(self, name: str) -> Optional[Binding]:
        return self.bindings.get(name)

    def get_value(self, name: str) -> Optional[str]:
        binding = self.bindings.get(name)
        return binding.value if binding is not None else None

    def is_bound(self, name: str) -> bool:
        return self.bindings.get(name) is not None

    def __getitem__(self, name: str) -> Optional[Binding]:
        return self.bindings[name]

    def __contains__(self, name: str) -> bool:
        return name in self.bindings


@dataclass
class ResultTable:
    """Ordered rows plus the requested variable names."""
    variables: List[str]
    rows: List[ResultRow]

    def __iter__(self) -> Iterator[ResultRow]:
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)

    def is_empty(self) -> bool:
        return not self.rows


def derive_label(uri: str) -> str:
    """Derive a display label from the last path segment of a URI.

    Hyphens become periods, so '.../source/epa-gov' yields 'epa.gov'.
    """
    return uri[uri.rfind('/') + 1:].replace('-', '.')


def _decode_binding(name: str, raw: Any) -> Binding:
    if not isinstance(raw, dict) or VALUE not in raw:
        raise ResultDecodeError(f"Binding for '{name}' has no '{VALUE}'")
    value = raw[VALUE]
    if not isinstance(value, str):
        raise ResultDecodeError(f"Binding value for '{name}' is not a string")
    return Binding(value=value, type=raw.get('type'), datatype=raw.get('datatype'),
                   lang=raw.get('xml:lang'))


def _requested_variables(document: Dict[str, Any], bindings: List[Any]) -> List[str]:
    head = document.get('head')
    if isinstance(head, dict) and isinstance(head.get('vars'), list):
        return [str(v) for v in head['vars']]
    seen: Dict[str, None] = {}
    for raw_row in bindings:
        if isinstance(raw_row, dict):
            for name in raw_row:
                seen.setdefault(name, None)
    return list(seen)


def decode_results(text: Optional[str], variables: Optional[Sequence[str]] = None) -> ResultTable:
    """Decode a tabular JSON result document.

    Args:
        text: Raw response body
        variables: Variable names every row should expose; defaults to the
            document's head.vars, else every key seen in any row

    Returns:
        ResultTable, with an empty row list when nothing matched

    Raises:
        ResultDecodeError: On malformed JSON or an unexpected shape
    """
    if text is None:
        raise ResultDecodeError("No response to decode")
    try:
        document = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ResultDecodeError(f"Response is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise ResultDecodeError("Response root is not an object")
    results = document.get(RESULTS)
    if not isinstance(results, dict):
        raise ResultDecodeError(f"Response has no '{RESULTS}' object")
    bindings = results.get(BINDINGS)
    if not isinstance(bindings, list):
        raise ResultDecodeError(f"Response has no '{BINDINGS}' array")

    names = list(variables) if variables is not None else _requested_variables(document, bindings)

    rows: List[ResultRow] = []
    for index, raw_row in enumerate(bindings):
        if not isinstance(raw_row, dict):
            raise ResultDecodeError(f"Row {index} is not an object")
        row = {name: None for name in names}
        for name, raw in raw_row.items():
            row[name] = _decode_binding(name, raw)
        rows.append(ResultRow(row))

    logger.debug(f"Decoded {len(rows)} rows for variables {names}")
    return ResultTable(variables=names, rows=rows)
