"""
SelfIndex - inverted index, text persistence and boolean retrieval.
"""

from .postings import DocEntry, WordEntry
from .inverted_index import InvertedIndex
from .index_io import save_index, load_index, format_entry, parse_line
from .boolean_ops import BooleanOperations, QueryResult
from .query_processor import BooleanQueryProcessor

__all__ = [
    'DocEntry',
    'WordEntry',
    'InvertedIndex',

    'save_index',
    'load_index',
    'format_entry',
    'parse_line',

    'BooleanOperations',
    'QueryResult',
    'BooleanQueryProcessor',
]
