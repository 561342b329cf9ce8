"""Row-store mapping: column descriptors, builders and the properties codec."""

from procspine.storage.builder import StorageBuilder, as_int, as_long, as_str, check_column_lengths
from procspine.storage.columns import Column, column, columns_of

__all__ = [
    "Column",
    "StorageBuilder",
    "as_int",
    "as_long",
    "as_str",
    "check_column_lengths",
    "column",
    "columns_of",
]
