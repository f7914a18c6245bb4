"""
Core inverted index data structure.
"""

from typing import Dict, Iterable, Iterator, List, Optional
import logging

from .postings import WordEntry

logger = logging.getLogger(__name__)


class InvertedIndex:
    """
    Maps words to their postings.

    Entries are iterated in insertion order, so loading an index file and
    saving it again reproduces the file unchanged.
    """

    def __init__(self):
        """Initialize an empty index."""
        # Word -> first WordEntry inserted for that word
        self.dictionary: Dict[str, WordEntry] = {}

        # Every entry in insertion order, including repeated words from a loaded file
        self.entries: List[WordEntry] = []

        # Statistics
        self.num_documents = 0
        self.total_tokens = 0

    def ensure(self, word: str) -> WordEntry:
        """
        Get the entry for a word, creating an empty one if needed.

        Args:
            word: Normalized word

        Returns:
            The existing or newly inserted WordEntry
        """
        entry = self.dictionary.get(word)
        if entry is None:
            entry = WordEntry(word)
            self.insert(entry)
        return entry

    def insert(self, entry: WordEntry):
        """
        Insert an entry without merging it into an existing one.
        Lookups keep returning the first entry stored for a word.
        """
        self.entries.append(entry)
        self.dictionary.setdefault(entry.word, entry)

    def add_document(self, doc_id: int, words: Iterable[str]) -> int:
        """
        Add a document's normalized word stream to the index.

        Args:
            doc_id: Document identifier
            words: Normalized words in document order

        Returns:
            Number of word occurrences recorded
        """
        recorded = 0
        for word in words:
            self.ensure(word).record_occurrence(doc_id)
            recorded += 1

        self.num_documents += 1
        self.total_tokens += recorded
        return recorded

    def get_postings(self, word: str) -> Optional[WordEntry]:
        """
        Get postings for a word.

        Args:
            word: The word to look up

        Returns:
            WordEntry if the word exists, None otherwise
        """
        return self.dictionary.get(word)

    def contains_term(self, word: str) -> bool:
        """Check if word exists in vocabulary."""
        return word in self.dictionary

    def get_vocabulary_size(self) -> int:
        """Get size of vocabulary (number of unique words)."""
        return len(self.dictionary)

    def get_statistics(self) -> Dict:
        """Get index statistics."""
        avg_postings_length = (
            sum(len(entry) for entry in self.entries) / len(self.entries)
            if self.entries else 0
        )

        return {
            'num_documents': self.num_documents,
            'num_entries': len(self.entries),
            'vocabulary_size': len(self.dictionary),
            'total_tokens': self.total_tokens,
            'avg_postings_length': avg_postings_length
        }

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self.entries)
