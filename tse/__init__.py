"""Tiny search engine: inverted index, text persistence and boolean querying."""
