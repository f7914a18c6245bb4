"""
Indexer: builds the inverted index of a crawler directory and saves it.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from tqdm import tqdm

from tse.data.page_loader import PageLoader
from tse.preprocessing.text_preprocessor import TextPreprocessor
from tse.selfindex import InvertedIndex, save_index

logger = logging.getLogger(__name__)


class Indexer:
    """Walks the corpus from the first document until the first missing one."""

    def __init__(self, page_loader: PageLoader, preprocessor: TextPreprocessor,
                 first_doc_id: int = 1, show_progress: bool = False, encoding: str = 'utf-8'):
        """
        Args:
            page_loader: Access to the crawler directory
            preprocessor: Turns page HTML into normalized words
            first_doc_id: doc_id of the first page
            show_progress: Whether to show a progress bar
            encoding: Encoding of the index file
        """
        self.page_loader = page_loader
        self.preprocessor = preprocessor
        self.first_doc_id = first_doc_id
        self.show_progress = show_progress
        self.encoding = encoding

    def build_index(self) -> InvertedIndex:
        """
        Build the index from every page up to the first gap in doc_ids.

        Returns:
            The populated InvertedIndex
        """
        index = InvertedIndex()

        total = self.page_loader.count_pages(self.first_doc_id) if self.show_progress else None
        pbar = tqdm(total=total, desc="Indexing pages", disable=not self.show_progress)

        for doc_id, page in self.page_loader.iter_pages(self.first_doc_id):
            words = self.preprocessor.preprocess(page.html)
            index.add_document(doc_id, words)
            logger.debug(f"Processed page {doc_id} ({len(words)} words)")
            pbar.update(1)

        pbar.close()

        stats = index.get_statistics()
        logger.info(f"Indexed {stats['num_documents']} pages, "
                    f"vocabulary size {stats['vocabulary_size']}, "
                    f"{stats['total_tokens']} words, "
                    f"avg postings length {stats['avg_postings_length']:.2f}")
        return index

    def run(self, index_file: Union[str, Path]) -> Optional[InvertedIndex]:
        """
        Validate the corpus, build the index and save it.

        Args:
            index_file: Output index file

        Returns:
            The saved index, or None if the corpus is invalid or the file
            cannot be written
        """
        start_time = time.time()

        if self.page_loader.load(self.first_doc_id) is None:
            logger.error(f"'{self.page_loader.page_dir}' is not a valid crawler directory "
                         f"(page {self.first_doc_id} is missing)")
            return None

        index = self.build_index()

        if not save_index(index, index_file, encoding=self.encoding):
            logger.error(f"Failed to save index to file: {index_file}")
            return None

        duration = time.time() - start_time
        logger.info(f"Index saved to {index_file} in {duration:.2f}s")
        return index
