import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass
class Webpage:
    """One crawled page."""
    url: str
    depth: int
    html: str


class PageLoader:
    """
    Reads and writes the page files of a crawler directory.

    Each document lives in `<page_dir>/<doc_id>`:

        <url>
        <depth>
        <html length in bytes>
        <exactly that many bytes of HTML>
    """

    def __init__(self, page_dir: Union[str, Path], encoding: str = 'utf-8'):
        """
        Args:
            page_dir: Crawler output directory
            encoding: Encoding of the HTML body
        """
        self.page_dir = Path(page_dir)
        self.encoding = encoding

    def page_path(self, doc_id: int) -> Path:
        return self.page_dir / str(doc_id)

    def load(self, doc_id: int) -> Optional[Webpage]:
        """
        Load a page file.

        Args:
            doc_id: Document identifier

        Returns:
            Webpage, or None if the file is missing or malformed
        """
        path = self.page_path(doc_id)
        if not path.is_file():
            return None

        try:
            with open(path, 'rb') as f:
                url = f.readline().strip().decode(self.encoding)
                depth = int(f.readline())
                html_len = int(f.readline())
                body = f.read(html_len)
        except (OSError, ValueError) as e:
            logger.warning(f"Malformed page file {path}: {e}")
            return None

        if not url or html_len < 0 or len(body) != html_len:
            logger.warning(f"Malformed page file {path}: expected {html_len} bytes of HTML, got {len(body)}")
            return None

        return Webpage(url=url, depth=depth, html=body.decode(self.encoding, errors='replace'))

    def save(self, page: Webpage, doc_id: int) -> bool:
        """
        Write a page file.

        Args:
            page: Page to save
            doc_id: Document identifier

        Returns:
            True on success, False if the file could not be written
        """
        path = self.page_path(doc_id)
        body = page.html.encode(self.encoding)

        try:
            with open(path, 'wb') as f:
                f.write(f"{page.url}\n{page.depth}\n{len(body)}\n".encode(self.encoding))
                f.write(body)
        except OSError as e:
            logger.error(f"Cannot write page file {path}: {e}")
            return False
        return True

    def is_valid_corpus(self) -> bool:
        """A crawler directory is valid when its first page can be loaded."""
        return self.load(1) is not None

    def iter_pages(self, start: int = 1) -> Iterator[Tuple[int, Webpage]]:
        """
        Iterate pages in doc_id order.
        Stops at the first doc_id that cannot be loaded.

        Yields:
            Tuples of (doc_id, Webpage)
        """
        doc_id = start
        while True:
            page = self.load(doc_id)
            if page is None:
                break
            yield doc_id, page
            doc_id += 1

    def count_pages(self, start: int = 1) -> int:
        """Count consecutive page files from `start`, without parsing them."""
        count = 0
        while self.page_path(start + count).is_file():
            count += 1
        return count
