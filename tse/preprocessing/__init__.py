"""Text preprocessing: HTML word extraction and word normalization."""

from .text_preprocessor import TextPreprocessor, normalize_word, extract_page_metadata

__all__ = ['TextPreprocessor', 'normalize_word', 'extract_page_metadata']
