"""
Text persistence for the inverted index.

One line per word entry:

    <word> <docID> <count> <docID> <count> ...

Pairs are written in the entry's stored order and read back in file order,
so saving a freshly loaded index reproduces the original file byte for byte.
"""

from pathlib import Path
from typing import Optional, Union
import logging
import re

from .inverted_index import InvertedIndex
from .postings import WordEntry

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')


def format_entry(entry: WordEntry) -> str:
    """Render one word entry as an index file line."""
    pairs = ''.join(f" {posting.doc_id} {posting.count}" for posting in entry.docs)
    return f"{entry.word}{pairs}\n"


def _parse_int(token: str) -> Optional[int]:
    if _INT_PATTERN.fullmatch(token) is None:
        return None
    return int(token)


def parse_line(line: str) -> Optional[WordEntry]:
    """
    Parse one index file line.

    The first token is the word. Remaining tokens are read as (docID, count)
    pairs until the first pair that is not two integers; pairs read before
    that point are kept.

    Args:
        line: Raw line from the index file

    Returns:
        WordEntry, or None if the line holds no token at all
    """
    tokens = line.split()
    if not tokens:
        return None

    entry = WordEntry(tokens[0])
    rest = tokens[1:]

    for i in range(0, len(rest) - 1, 2):
        doc_id = _parse_int(rest[i])
        count = _parse_int(rest[i + 1])
        if doc_id is None or count is None:
            logger.debug(f"Stopped parsing '{entry.word}' at malformed pair {rest[i:i + 2]}")
            break
        entry.add_posting(doc_id, count)

    return entry


def save_index(index: InvertedIndex, path: Union[str, Path], encoding: str = 'utf-8') -> bool:
    """
    Save the index to a text file, truncating any existing content.

    Args:
        index: Index to save
        path: Destination file
        encoding: Text encoding of the file

    Returns:
        True on success, False if the file could not be written
    """
    try:
        with open(path, 'w', encoding=encoding, errors='surrogateescape', newline='\n') as f:
            for entry in index:
                f.write(format_entry(entry))
    except OSError as e:
        logger.error(f"Cannot write index file {path}: {e}")
        return False

    logger.info(f"Saved {len(index)} words to {path}")
    return True


def load_index(path: Union[str, Path], encoding: str = 'utf-8') -> Optional[InvertedIndex]:
    """
    Load an index from a text file.

    Every line becomes its own entry; repeated words are not merged.

    Args:
        path: Source file
        encoding: Text encoding of the file

    Returns:
        The loaded InvertedIndex, or None if the file could not be read
    """
    index = InvertedIndex()

    try:
        with open(path, 'r', encoding=encoding, errors='surrogateescape', newline='') as f:
            for line in f:
                entry = parse_line(line)
                if entry is None:
                    continue
                index.insert(entry)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read index file {path}: {e}")
        return None

    logger.info(f"Loaded {len(index)} words from {path}")
    return index

