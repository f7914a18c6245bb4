"""
Boolean query evaluation over the inverted index.
"""

from typing import List
import logging

from .inverted_index import InvertedIndex
from .boolean_ops import BooleanOperations, QueryResult, ResultSet
from ..utils.query_parser import QueryToken, TokenType

logger = logging.getLogger(__name__)


class BooleanQueryProcessor:
    """
    Evaluate validated queries.

    A query is an OR of AND-groups separated by the `or` operator. Words in a
    group are conjoined whether or not an explicit `and` sits between them.
    Words shorter than `min_word_length` never constrain a group.
    """

    def __init__(self, index: InvertedIndex, min_word_length: int = 3):
        """
        Initialize boolean query processor.

        Args:
            index: InvertedIndex to query
            min_word_length: Shortest word that takes part in retrieval
        """
        self.index = index
        self.min_word_length = min_word_length

    @staticmethod
    def split_groups(tokens: List[QueryToken]) -> List[List[QueryToken]]:
        """Split a token sequence into AND-groups at each `or`."""
        groups: List[List[QueryToken]] = [[]]
        for token in tokens:
            if token.type is TokenType.OR:
                groups.append([])
            else:
                groups[-1].append(token)
        return groups

    def content_words(self, group: List[QueryToken]) -> List[str]:
        """Words of a group that are long enough to take part in retrieval."""
        return [
            token.value for token in group
            if token.type is TokenType.WORD and len(token.value) >= self.min_word_length
        ]

    def process_and_group(self, group: List[QueryToken]) -> ResultSet:
        """
        Evaluate one AND-group.

        Each surviving document is ranked by the smallest count of any of the
        group's content words in it.

        Args:
            group: Tokens between two `or` operators

        Returns:
            Result set of the group (empty if any content word is missing)
        """
        words = self.content_words(group)
        if not words:
            return {}

        postings = self.index.get_postings(words[0])
        if postings is None:
            return {}

        results = BooleanOperations.seed(postings)

        for word in words[1:]:
            postings = self.index.get_postings(word)
            if postings is None:
                logger.debug(f"'{word}' not in index, AND-group is empty")
                return {}
            results = BooleanOperations.intersect(results, postings)

        return results

    def process_query(self, tokens: List[QueryToken]) -> List[QueryResult]:
        """
        Evaluate a validated query.

        Args:
            tokens: Tokens produced by BooleanQueryParser.parse

        Returns:
            Matching documents in the order they were first matched (unsorted)
        """
        if not tokens:
            return []

        final: ResultSet = {}
        for group in self.split_groups(tokens):
            BooleanOperations.union(final, self.process_and_group(group))

        logger.debug(f"Query matched {len(final)} documents")
        return list(final.values())
