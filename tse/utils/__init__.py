"""Utility functions."""

from .query_parser import BooleanQueryParser, InvalidQueryError, QueryToken, TokenType

__all__ = ['BooleanQueryParser', 'InvalidQueryError', 'QueryToken', 'TokenType']
