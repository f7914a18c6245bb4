"""Top-level indexing and querying programs."""

from .indexer import Indexer
from .querier import Querier
from .result_printer import ResultPrinter, rank_results

__all__ = ['Indexer', 'Querier', 'ResultPrinter', 'rank_results']
