import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)


class TokenType(Enum):
    WORD = 'word'
    AND = 'and'
    OR = 'or'


@dataclass(frozen=True)
class QueryToken:
    """A single validated query token."""
    type: TokenType
    value: str

    @property
    def is_operator(self) -> bool:
        return self.type is not TokenType.WORD

    def __str__(self):
        return self.value


class InvalidQueryError(ValueError):
    """Raised when a query line is syntactically invalid."""


class BooleanQueryParser:
    """
    Parse and validate boolean query lines.
    Supports: implicit and explicit AND, OR. Operators are reserved words.
    """

    def __init__(self, max_tokens: Optional[int] = None):
        """
        Args:
            max_tokens: Longest accepted query, in tokens (None for no limit)
        """
        self.operators = {'and': TokenType.AND, 'or': TokenType.OR}
        self.max_tokens = max_tokens

    def _tokenize(self, line: str) -> List[str]:
        """Split a query line on whitespace."""
        return line.split()

    def _operator_type(self, token: str) -> Optional[TokenType]:
        return self.operators.get(token.lower())

    @staticmethod
    def validate_word(token: str) -> Optional[str]:
        """
        Check that a query word is purely alphabetic and lowercase it.
        Short words are accepted here; retrieval ignores them.

        Returns:
            The lowercased word, or None if it holds a non-letter
        """
        if not (token.isascii() and token.isalpha()):
            return None
        return token.lower()

    def parse(self, line: str) -> List[QueryToken]:
        """
        Parse and validate a query line.

        Args:
            line: Raw query line (e.g. "dartmouth and college or computer")

        Returns:
            List of QueryToken; empty for a blank line

        Raises:
            InvalidQueryError: if the line is not a valid query
        """
        raw_tokens = self._tokenize(line)
        if not raw_tokens:
            return []

        if self.max_tokens is not None and len(raw_tokens) > self.max_tokens:
            raise InvalidQueryError(f"Query exceeds {self.max_tokens} words/operators")

        if self._operator_type(raw_tokens[0]) is not None:
            raise InvalidQueryError("Query cannot begin with an operator")
        if self._operator_type(raw_tokens[-1]) is not None:
            raise InvalidQueryError("Query cannot end with an operator")

        tokens: List[QueryToken] = []
        last_was_operator = False

        for raw in raw_tokens:
            op_type = self._operator_type(raw)
            if op_type is not None:
                if last_was_operator:
                    raise InvalidQueryError("Cannot have adjacent operators")
                tokens.append(QueryToken(op_type, op_type.value))
                last_was_operator = True
            else:
                word = self.validate_word(raw)
                if word is None:
                    raise InvalidQueryError(f"Invalid characters in '{raw}' (must be letters)")
                tokens.append(QueryToken(TokenType.WORD, word))
                last_was_operator = False

        return tokens

    @staticmethod
    def format_query(tokens: List[QueryToken]) -> str:
        """Render parsed tokens as a normalized query line."""
        return ' '.join(str(token) for token in tokens)
