"""Corpus access."""

from .page_loader import PageLoader, Webpage

__all__ = ['PageLoader', 'Webpage']
