from typing import List, Optional, Tuple

from bs4 import BeautifulSoup
from nltk.tokenize import RegexpTokenizer


def normalize_word(token: str, min_length: int = 3) -> Optional[str]:
    """
    Canonicalize a raw token into an indexable word.

    Args:
        token: Raw token from a page
        min_length: Shortest word that may be indexed

    Returns:
        Lowercased word, or None if it is too short or holds a non-letter
    """
    if token is None or len(token) < min_length:
        return None
    if not (token.isascii() and token.isalpha()):
        return None
    return token.lower()


def _clean(text: str, max_len: int) -> str:
    text = text[:max_len]
    return text.replace('\r', ' ').replace('\n', ' ')


def extract_page_metadata(html: str, title_max_len: int = 200,
                          description_max_len: int = 128) -> Tuple[Optional[str], Optional[str]]:
    """
    Pull the <title> and meta description out of a page for display.

    Args:
        html: Raw HTML of the page
        title_max_len: Title is truncated to this many characters
        description_max_len: Description is truncated to this many characters

    Returns:
        (title, description); either is None when the page lacks it
    """
    if not html:
        return None, None

    soup = BeautifulSoup(html, 'html.parser')

    title = None
    if soup.title is not None and soup.title.get_text():
        title = _clean(soup.title.get_text(), title_max_len)

    description = None
    meta = soup.find('meta', attrs={'name': 'description'})
    if meta is not None and meta.get('content'):
        description = _clean(meta['content'], description_max_len)

    return title, description


class TextPreprocessor:
    """Turns page HTML into the normalized word stream that gets indexed."""

    def __init__(self, config):
        """
        Initialize preprocessor with configuration.

        Args:
            config: Hydra config object with preprocessing settings
        """
        self.config = config
        self.min_word_length = config.preprocessing.min_word_length
        # Maximal runs of letters and digits, like the crawler's word scanner
        self.tokenizer = RegexpTokenizer(r'[^\W_]+')

    def extract_words(self, html: str) -> List[str]:
        """
        Extract the raw words of a page, tags removed.

        Args:
            html: Raw HTML

        Returns:
            Raw tokens in document order
        """
        if not html:
            return []

        text = BeautifulSoup(html, 'html.parser').get_text(separator=' ')
        return self.tokenizer.tokenize(text)

    def preprocess(self, html: str) -> List[str]:
        """
        Extract and normalize the words of a page.

        Args:
            html: Raw HTML

        Returns:
            Normalized words in document order; rejected tokens are dropped
        """
        tokens = []
        for raw in self.extract_words(html):
            word = normalize_word(raw, self.min_word_length)
            if word is not None:
                tokens.append(word)
        return tokens
