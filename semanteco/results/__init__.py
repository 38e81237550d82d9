"""SemantEco result decoding."""

from .results_decoder import (
    Binding, ResultDecodeError, ResultRow, ResultTable, decode_results, derive_label
)

__all__ = ['Binding', 'ResultDecodeError', 'ResultRow', 'ResultTable', 'decode_results', 'derive_label']
