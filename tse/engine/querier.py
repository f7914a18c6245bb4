"""
Querier: reads query lines, evaluates them and prints ranked matches.
"""

import logging
import sys
from typing import Iterable, List, Optional, TextIO

from tse.selfindex import BooleanQueryProcessor, QueryResult
from tse.utils.query_parser import BooleanQueryParser, InvalidQueryError
from .result_printer import ResultPrinter

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 47


class Querier:
    """
    Read-evaluate-print loop over query lines.

    Quiet mode drops the prompt, the echoed and normalized query and the
    separators; match output is always printed.
    """

    def __init__(self, parser: BooleanQueryParser, processor: BooleanQueryProcessor,
                 printer: ResultPrinter, quiet: bool = False, stream: Optional[TextIO] = None):
        self.parser = parser
        self.processor = processor
        self.printer = printer
        self.quiet = quiet
        self.stream = stream

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def _chrome(self, text: str, end: str = "\n"):
        if not self.quiet:
            print(text, end=end, file=self._out(), flush=True)

    def handle_line(self, line: str) -> Optional[List[QueryResult]]:
        """
        Evaluate and print one query line.

        Args:
            line: Raw query line

        Returns:
            The query's results, or None if the line was invalid
        """
        query = line.rstrip("\r\n")
        self._chrome(f"Query: {query}")

        try:
            tokens = self.parser.parse(line)
        except InvalidQueryError as e:
            logger.warning(f"Invalid query: {e}")
            print("[invalid query]", file=self._out())
            return None

        if not tokens:
            return []

        self._chrome(f"Normalized: {self.parser.format_query(tokens)}")

        results = self.processor.process_query(tokens)
        self.printer.print_results(results)
        return results

    def run(self, lines: Optional[Iterable[str]] = None) -> int:
        """
        Process query lines until end of input.

        Args:
            lines: Source of query lines (defaults to standard input)

        Returns:
            Number of lines processed
        """
        if lines is None:
            lines = sys.stdin

        processed = 0
        self._chrome("> ", end="")
        for line in lines:
            self.handle_line(line)
            processed += 1
            self._chrome(f"{SEPARATOR}\n> ", end="")
        self._chrome("")

        return processed
