"""
Ranking and display of query results.
"""

import logging
import sys
from typing import List, Optional, TextIO

from tse.data.page_loader import PageLoader
from tse.preprocessing.text_preprocessor import extract_page_metadata
from tse.selfindex.boolean_ops import QueryResult

logger = logging.getLogger(__name__)


def rank_results(results: List[QueryResult]) -> List[QueryResult]:
    """
    Sort results by rank, highest first.
    Equal ranks keep the order in which the documents were matched.
    """
    return sorted(results, key=lambda r: r.rank, reverse=True)


class ResultPrinter:
    """Prints ranked results with each page's title, URL and description."""

    def __init__(self, page_loader: PageLoader, title_max_len: int = 200,
                 description_max_len: int = 128, stream: Optional[TextIO] = None):
        self.page_loader = page_loader
        self.title_max_len = title_max_len
        self.description_max_len = description_max_len
        self.stream = stream

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def print_results(self, results: List[QueryResult]) -> int:
        """
        Print results in rank order.

        A document whose page cannot be loaded is skipped with a warning.

        Args:
            results: Unsorted query results

        Returns:
            Number of documents printed
        """
        out = self._out()

        if not results:
            print("No documents match.", file=out)
            return 0

        ranked = rank_results(results)
        print(f"Matches {len(ranked)} documents (ranked):", file=out)

        printed = 0
        for result in ranked:
            page = self.page_loader.load(result.doc_id)
            if page is None:
                logger.warning(f"Could not load page for docID {result.doc_id}")
                continue

            title, description = extract_page_metadata(
                page.html, self.title_max_len, self.description_max_len
            )

            print(f"\n{title or 'No Title'}", file=out)
            print(page.url, file=out)
            print(description or 'No Description', file=out)
            print(f"Rank: {result.rank}", file=out)
            printed += 1

        return printed
