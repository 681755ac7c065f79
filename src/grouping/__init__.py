"""
Row reconstruction: unordered OCR word tokens -> table rows.

Greedy vertical clustering anchored on the first token of each row, then
left-to-right ordering within a row. No OCR correction, no semantics.
"""

from .config import RowConfig
from .group_tokens import RowGroupingResult, group_tokens_into_rows

__all__ = ["RowConfig", "RowGroupingResult", "group_tokens_into_rows"]
