"""
Postings data structures for the inverted index.
"""

from typing import Dict, Iterator, List, Optional
from dataclasses import dataclass


@dataclass
class DocEntry:
    """
    Occurrences of one word in one document.

    Attributes:
        doc_id: Document identifier (positive integer)
        count: Number of times the word appears in the document
    """
    doc_id: int
    count: int = 1


class WordEntry:
    """
    Postings for a single word.
    Documents are kept in the order they were first seen.
    """

    def __init__(self, word: str):
        """
        Initialize an empty entry.

        Args:
            word: The normalized word this entry indexes
        """
        self.word = word
        self.docs: List[DocEntry] = []
        self._doc_lookup: Optional[Dict[int, DocEntry]] = None  # Cache for fast lookup

    def record_occurrence(self, doc_id: int):
        """
        Record one occurrence of the word in a document.

        Args:
            doc_id: Document identifier
        """
        # Documents arrive in increasing order, so the last entry is the usual hit
        if self.docs and self.docs[-1].doc_id == doc_id:
            self.docs[-1].count += 1
            return

        posting = self.get_posting(doc_id)
        if posting is not None:
            posting.count += 1
        else:
            self.docs.append(DocEntry(doc_id=doc_id, count=1))
            self._doc_lookup = None

    def add_posting(self, doc_id: int, count: int):
        """
        Append a posting as-is, without merging.
        Used when restoring an index from disk.
        """
        self.docs.append(DocEntry(doc_id=doc_id, count=count))
        self._doc_lookup = None

    def get_posting(self, doc_id: int) -> Optional[DocEntry]:
        """
        Get the posting for a specific document.

        Args:
            doc_id: Document identifier

        Returns:
            DocEntry if found, None otherwise
        """
        if self._doc_lookup is None:
            self._doc_lookup = {}
            for posting in self.docs:
                # First posting wins if a loaded file repeats a doc_id
                self._doc_lookup.setdefault(posting.doc_id, posting)
        return self._doc_lookup.get(doc_id)

    def get_count(self, doc_id: int) -> int:
        """Get the word count in a specific document (0 if absent)."""
        posting = self.get_posting(doc_id)
        return posting.count if posting else 0

    def get_doc_ids(self) -> List[int]:
        """Get list of all document IDs containing this word."""
        return [p.doc_id for p in self.docs]

    def __len__(self) -> int:
        return len(self.docs)

    def __iter__(self) -> Iterator[DocEntry]:
        return iter(self.docs)

    def __repr__(self):
        return f"WordEntry(word={self.word!r}, docs={self.docs!r})"
