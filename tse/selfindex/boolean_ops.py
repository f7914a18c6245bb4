"""
Boolean operations on ranked result sets (AND, OR).

A result set is a dict from doc_id to QueryResult; dict order is the order
in which documents entered the set.
"""

from typing import Dict
from dataclasses import dataclass
import logging

from .postings import WordEntry

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """A matched document and its rank."""
    doc_id: int
    rank: int


ResultSet = Dict[int, QueryResult]


class BooleanOperations:
    """Implements the ranked set operations used by query evaluation."""

    @staticmethod
    def seed(postings: WordEntry) -> ResultSet:
        """
        Start a result set from one word's postings.
        Each document's rank is the word's count in it.

        Args:
            postings: Postings of the first word of an AND-group

        Returns:
            New result set in postings order
        """
        results: ResultSet = {}
        for posting in postings:
            # A repeated doc_id in a hand-edited index keeps its first posting
            results.setdefault(posting.doc_id, QueryResult(posting.doc_id, posting.count))
        return results

    @staticmethod
    def intersect(results: ResultSet, postings: WordEntry) -> ResultSet:
        """
        Intersect a result set with a word's postings (AND operation).

        Surviving documents keep the smaller of their current rank and the
        word's count in that document.

        Args:
            results: Current result set
            postings: Postings of the next word

        Returns:
            New result set, in the order of the input set
        """
        intersected: ResultSet = {}

        for doc_id, result in results.items():
            posting = postings.get_posting(doc_id)
            if posting is None:
                continue
            intersected[doc_id] = QueryResult(doc_id, min(result.rank, posting.count))

        return intersected

    @staticmethod
    def union(final: ResultSet, group: ResultSet) -> ResultSet:
        """
        Merge an AND-group's results into the final set (OR operation).

        Ranks of documents already present are summed; new documents are
        appended. The final set is updated in place and returned.

        Args:
            final: Accumulated results of earlier groups
            group: Results of the next group

        Returns:
            The updated final set
        """
        for doc_id, result in group.items():
            existing = final.get(doc_id)
            if existing is None:
                final[doc_id] = result
            else:
                existing.rank += result.rank
        return final
