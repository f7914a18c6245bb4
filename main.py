#!/usr/bin/env python
"""
Main entry point for the tiny search engine.
Uses Fire for CLI and Hydra for configuration management.
"""

import io
import logging
import sys
from pathlib import Path
import fire
import hydra
from omegaconf import DictConfig, OmegaConf
from dotenv import load_dotenv

# Load .env variables (e.g. TSE_LOG_LEVEL)
load_dotenv()

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from tse.data.page_loader import PageLoader
from tse.engine import Indexer, Querier, ResultPrinter
from tse.preprocessing.text_preprocessor import TextPreprocessor
from tse.selfindex import BooleanQueryProcessor, load_index
from tse.utils.query_parser import BooleanQueryParser


class TinySearchCLI:
    """CLI for building and querying a tiny search engine index."""

    def __init__(self, config_path: str = "tse/conf", config_name: str = "config"):
        """
        Initialize CLI with configuration.

        Args:
            config_path: Path to config directory, relative to this file
            config_name: Name of main config file
        """
        self.config_path = config_path
        self.config_name = config_name
        self.config: DictConfig = None
        self.logger = None

    def _init_config(self, overrides=None):
        """Initialize Hydra configuration."""
        with hydra.initialize(version_base=None, config_path=self.config_path):
            if overrides:
                self.config = hydra.compose(config_name=self.config_name, overrides=list(overrides))
            else:
                self.config = hydra.compose(config_name=self.config_name)

        # Setup logging
        logging.basicConfig(
            level=getattr(logging, str(self.config.logging.level).upper()),
            format=self.config.logging.format
        )
        self.logger = logging.getLogger(__name__)

    def index(self, page_dir: str, index_file: str, *overrides):
        """
        Build an index from a crawler directory.

        Args:
            page_dir: Directory of page files named 1, 2, 3, ...
            index_file: Output index file
            overrides: Hydra overrides (e.g. indexing.show_progress=true)
        """
        self._init_config(overrides)

        page_loader = PageLoader(page_dir, encoding=self.config.paths.encoding)
        indexer = Indexer(
            page_loader,
            TextPreprocessor(self.config),
            first_doc_id=self.config.indexing.first_doc_id,
            show_progress=self.config.indexing.show_progress,
            encoding=self.config.paths.encoding
        )

        index = indexer.run(index_file)
        if index is None:
            self.logger.error("Failed to build index.")
            sys.exit(1)

        print(f"Index saved to {index_file}")

    def query(self, page_dir: str, index_file: str, *overrides, quiet: bool = False):
        """
        Answer queries read from standard input.

        Args:
            page_dir: Directory of page files the index was built from
            index_file: Index file written by `index`
            overrides: Hydra overrides (e.g. query.max_tokens=null)
            quiet: Suppress prompt, echoed query and separators
        """
        self._init_config(overrides)

        page_loader = PageLoader(page_dir, encoding=self.config.paths.encoding)
        if not page_loader.is_valid_corpus():
            self.logger.error(f"'{page_dir}' is not a valid crawler directory.")
            sys.exit(1)

        index = load_index(index_file, encoding=self.config.paths.encoding)
        if index is None:
            self.logger.error(f"Failed to load index from '{index_file}'.")
            sys.exit(1)

        printer = ResultPrinter(
            page_loader,
            title_max_len=self.config.display.title_max_len,
            description_max_len=self.config.display.description_max_len
        )
        querier = Querier(
            BooleanQueryParser(max_tokens=self.config.query.max_tokens),
            BooleanQueryProcessor(index, min_word_length=self.config.query.min_word_length),
            printer,
            quiet=quiet
        )

        # Undecodable bytes become U+FFFD, which the parser rejects per line
        lines = sys.stdin
        if hasattr(sys.stdin, 'buffer'):
            lines = io.TextIOWrapper(sys.stdin.buffer, encoding=self.config.paths.encoding,
                                     errors='replace')
        querier.run(lines)

    def show_config(self, *overrides):
        """
        Display current configuration.

        Args:
            overrides: Hydra overrides to apply before printing
        """
        self._init_config(overrides)
        print(OmegaConf.to_yaml(self.config))


def main():
    """Main entry point."""
    fire.Fire(TinySearchCLI)


if __name__ == "__main__":
    main()
