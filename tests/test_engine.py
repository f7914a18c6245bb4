"""
Tests for corpus access, preprocessing, indexing and the query loop.
Run with: pytest tests/test_engine.py -v
"""

import io
import pytest
import sys
from pathlib import Path
from omegaconf import OmegaConf

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tse.data.page_loader import PageLoader, Webpage
from tse.engine import Indexer, Querier, ResultPrinter, rank_results
from tse.preprocessing.text_preprocessor import TextPreprocessor, extract_page_metadata
from tse.selfindex import BooleanQueryProcessor, QueryResult, load_index
from tse.utils.query_parser import BooleanQueryParser


PAGES = [
    Webpage(
        url="http://example.com/cats",
        depth=0,
        html=(
            "<html><head><title>All About Cats</title>"
            '<meta name="description" content="Cats and more cats">'
            "</head><body>Cats are great. A cat is a CAT! dog</body></html>"
        ),
    ),
    Webpage(
        url="http://example.com/dogs",
        depth=1,
        html="<html><body><p>Dog dog dog dog dog</p><a href='x'>cat</a></body></html>",
    ),
    Webpage(
        url="http://example.com/mixed",
        depth=1,
        html="<html><head><title>Mixed\nPets</title></head><body>cat fish fish</body></html>",
    ),
]


@pytest.fixture
def config():
    return OmegaConf.create({'preprocessing': {'min_word_length': 3}})


@pytest.fixture
def page_dir(tmp_path):
    """A crawler directory holding PAGES as docs 1..3."""
    directory = tmp_path / "pages"
    directory.mkdir()
    loader = PageLoader(directory)
    for doc_id, page in enumerate(PAGES, start=1):
        assert loader.save(page, doc_id)
    return directory


class TestPageLoader:
    """Test reading and writing page files."""

    def test_save_format(self, tmp_path):
        """Header lines followed by exactly the HTML bytes."""
        loader = PageLoader(tmp_path)
        loader.save(Webpage("http://a.b/", 2, "<p>hé</p>"), 7)

        raw = (tmp_path / "7").read_bytes()
        assert raw == b"http://a.b/\n2\n10\n<p>h\xc3\xa9</p>"

    def test_load_round_trip(self, page_dir):
        loader = PageLoader(page_dir)
        assert loader.load(2) == PAGES[1]

    def test_load_missing(self, page_dir):
        assert PageLoader(page_dir).load(99) is None

    def test_load_truncated_body(self, tmp_path):
        """A body shorter than its declared length is malformed."""
        (tmp_path / "1").write_bytes(b"http://a.b/\n0\n100\n<html>")
        assert PageLoader(tmp_path).load(1) is None

    def test_load_bad_header(self, tmp_path):
        (tmp_path / "1").write_bytes(b"http://a.b/\nnot-a-number\n3\nabc")
        assert PageLoader(tmp_path).load(1) is None

    def test_iter_pages_stops_at_gap(self, page_dir):
        """A missing doc_id ends the corpus."""
        loader = PageLoader(page_dir)
        loader.save(Webpage("http://example.com/late", 2, "late"), 5)

        assert [doc_id for doc_id, _ in loader.iter_pages()] == [1, 2, 3]
        assert loader.count_pages() == 3

    def test_is_valid_corpus(self, page_dir, tmp_path):
        assert PageLoader(page_dir).is_valid_corpus()
        assert not PageLoader(tmp_path / "nowhere").is_valid_corpus()


class TestTextPreprocessor:
    """Test HTML word extraction."""

    def test_extract_words_skips_tags(self, config):
        preprocessor = TextPreprocessor(config)
        words = preprocessor.extract_words("<p class='x'>Hello <b>big</b> world</p>")
        assert words == ["Hello", "big", "world"]

    def test_preprocess_normalizes(self, config):
        preprocessor = TextPreprocessor(config)
        words = preprocessor.preprocess("<p>A CAT met 3 cats and e-mail abc123</p>")
        assert words == ["cat", "met", "cats", "and", "mail"]

    def test_empty_html(self, config):
        assert TextPreprocessor(config).preprocess("") == []

    def test_extract_page_metadata(self):
        title, description = extract_page_metadata(PAGES[0].html)
        assert title == "All About Cats"
        assert description == "Cats and more cats"

    def test_metadata_missing(self):
        assert extract_page_metadata(PAGES[1].html) == (None, None)

    def test_metadata_newlines_and_truncation(self):
        title, _ = extract_page_metadata(PAGES[2].html, title_max_len=8)
        assert title == "Mixed Pe"


class TestIndexer:
    """Test building and saving the index."""

    def test_build_index_counts(self, page_dir, config):
        indexer = Indexer(PageLoader(page_dir), TextPreprocessor(config))
        index = indexer.build_index()

        cat = index.get_postings("cat")
        assert cat.get_doc_ids() == [1, 2, 3]
        assert [p.count for p in cat] == [2, 1, 1]
        # title and body both hold "Cats"
        assert index.get_postings("cats").get_count(1) == 2
        assert index.get_postings("dog").get_count(2) == 5
        assert index.get_postings("fish").get_doc_ids() == [3]
        assert index.get_postings("are").get_doc_ids() == [1]
        assert not index.contains_term("a")
        assert not index.contains_term("is")
        assert index.num_documents == 3

    def test_build_index_logs_statistics(self, page_dir, config, caplog):
        indexer = Indexer(PageLoader(page_dir), TextPreprocessor(config))
        with caplog.at_level("INFO", logger="tse.engine.indexer"):
            indexer.build_index()

        assert "Indexed 3 pages" in caplog.text
        assert "avg postings length" in caplog.text

    def test_run_saves_index(self, page_dir, config, tmp_path):
        index_file = tmp_path / "index.dat"
        indexer = Indexer(PageLoader(page_dir), TextPreprocessor(config))

        assert indexer.run(index_file) is not None
        loaded = load_index(index_file)
        assert loaded.get_postings("dog").get_doc_ids() == [1, 2]

    def test_run_invalid_corpus(self, tmp_path, config):
        indexer = Indexer(PageLoader(tmp_path / "empty"), TextPreprocessor(config))
        assert indexer.run(tmp_path / "index.dat") is None
        assert not (tmp_path / "index.dat").exists()

    def test_run_unwritable_index(self, page_dir, config, tmp_path):
        indexer = Indexer(PageLoader(page_dir), TextPreprocessor(config))
        assert indexer.run(tmp_path / "no_dir" / "index.dat") is None


class TestResultPrinter:
    """Test ranking and display."""

    def test_rank_results_stable(self):
        results = [QueryResult(1, 2), QueryResult(2, 5), QueryResult(3, 2), QueryResult(4, 5)]
        assert [r.doc_id for r in rank_results(results)] == [2, 4, 1, 3]

    def test_no_match(self, page_dir):
        out = io.StringIO()
        printed = ResultPrinter(PageLoader(page_dir), stream=out).print_results([])
        assert printed == 0
        assert out.getvalue() == "No documents match.\n"

    def test_prints_in_rank_order(self, page_dir):
        out = io.StringIO()
        printer = ResultPrinter(PageLoader(page_dir), stream=out)
        printer.print_results([QueryResult(2, 1), QueryResult(1, 3)])

        assert out.getvalue() == (
            "Matches 2 documents (ranked):\n"
            "\nAll About Cats\nhttp://example.com/cats\nCats and more cats\nRank: 3\n"
            "\nNo Title\nhttp://example.com/dogs\nNo Description\nRank: 1\n"
        )

    def test_unreadable_document_skipped(self, page_dir):
        out = io.StringIO()
        printer = ResultPrinter(PageLoader(page_dir), stream=out)
        printed = printer.print_results([QueryResult(42, 9), QueryResult(3, 1)])

        assert printed == 1
        assert "http://example.com/mixed" in out.getvalue()
        assert "Rank: 9" not in out.getvalue()


class TestQuerier:
    """Test the read-evaluate-print loop."""

    def make_querier(self, page_dir, config, tmp_path, quiet):
        index_file = tmp_path / "index.dat"
        Indexer(PageLoader(page_dir), TextPreprocessor(config)).run(index_file)
        out = io.StringIO()
        printer = ResultPrinter(PageLoader(page_dir), stream=out)
        querier = Querier(
            BooleanQueryParser(),
            BooleanQueryProcessor(load_index(index_file)),
            printer,
            quiet=quiet,
            stream=out
        )
        return querier, out

    def test_quiet_mode_output(self, page_dir, config, tmp_path):
        querier, out = self.make_querier(page_dir, config, tmp_path, quiet=True)
        processed = querier.run(["fish\n", "and dog\n", "zebra\n"])

        assert processed == 3
        assert out.getvalue() == (
            "Matches 1 documents (ranked):\n"
            "\nMixed Pets\nhttp://example.com/mixed\nNo Description\nRank: 2\n"
            "[invalid query]\n"
            "No documents match.\n"
        )

    def test_invalid_queries_do_not_stop_loop(self, page_dir, config, tmp_path):
        querier, out = self.make_querier(page_dir, config, tmp_path, quiet=True)
        querier.run(["and dog\n", "cat and\n", "cat and and dog\n", "fish\n"])

        assert out.getvalue().count("[invalid query]") == 3
        assert "Rank: 2" in out.getvalue()

    def test_interactive_chrome(self, page_dir, config, tmp_path):
        querier, out = self.make_querier(page_dir, config, tmp_path, quiet=False)
        querier.run(["Fish\n"])

        text = out.getvalue()
        assert text.startswith("> Query: Fish\nNormalized: fish\n")
        assert "-" * 47 + "\n> " in text
        assert "Rank: 2" in text

    def test_crlf_line_echo(self, page_dir, config, tmp_path):
        querier, out = self.make_querier(page_dir, config, tmp_path, quiet=False)
        querier.run(["Fish\r\n"])

        assert out.getvalue().startswith("> Query: Fish\nNormalized: fish\n")

    def test_blank_line_prints_nothing(self, page_dir, config, tmp_path):
        querier, out = self.make_querier(page_dir, config, tmp_path, quiet=True)
        assert querier.handle_line("   \n") == []
        assert out.getvalue() == ""

    def test_or_ranking_end_to_end(self, page_dir, config, tmp_path):
        querier, out = self.make_querier(page_dir, config, tmp_path, quiet=True)
        results = querier.handle_line("dog or cat\n")

        assert {r.doc_id: r.rank for r in results} == {1: 3, 2: 6, 3: 1}
        text = out.getvalue()
        assert text.index("Rank: 6") < text.index("Rank: 3") < text.index("Rank: 1")
