"""
Unit tests for StopWordRemover and load_stopwords.
"""

import pytest

from conftest import make_document


class TestLoadStopwords:
    """Tests for load_stopwords."""

    def test_loads_lowercase_words(self, tmp_path):
        """Words are stripped and lowercased; comments and blanks are skipped."""
        from lda_pipeline.annotators.stopword_remover import load_stopwords

        path = tmp_path / "sw.txt"
        path.write_text("# comment\nThe\n\n  and \nOF\n", encoding="utf-8")

        assert load_stopwords(path) == frozenset({"the", "and", "of"})

    def test_missing_file_raises_config_error(self, tmp_path):
        """An unreadable resource is a ConfigError."""
        from lda_pipeline.annotators.stopword_remover import load_stopwords
        from lda_pipeline.exceptions import ConfigError

        with pytest.raises(ConfigError):
            load_stopwords(tmp_path / "missing.txt")

    def test_bundled_english_list(self):
        """The bundled stopwords_en.txt holds common function words."""
        from lda_pipeline.annotators.stopword_remover import load_stopwords, stopword_resource_path

        words = load_stopwords(stopword_resource_path("en"))

        assert {"the", "a", "and", "of", "on"} <= words
        assert "cat" not in words


class TestStopWordRemover:
    """Tests for StopWordRemover.process."""

    def test_marks_stop_words(self, the_stopword_file):
        """Tokens in the list are marked removed, others kept."""
        from lda_pipeline.annotators.stopword_remover import StopWordRemover

        document = make_document("the cat sat", segment=True)

        StopWordRemover(stopword_location=str(the_stopword_file)).process(document)

        assert [t.removed for t in document.tokens] == [True, False, False]

    def test_matching_is_case_insensitive(self, the_stopword_file):
        """'The' matches 'the'."""
        from lda_pipeline.annotators.stopword_remover import StopWordRemover

        document = make_document("The cat", segment=True)

        StopWordRemover(stopword_location=str(the_stopword_file)).process(document)

        assert document.tokens[0].removed is True

    def test_idempotent(self, the_stopword_file):
        """Filtering a filtered document changes nothing."""
        from lda_pipeline.annotators.stopword_remover import StopWordRemover

        remover = StopWordRemover(stopword_location=str(the_stopword_file))
        document = remover.process(make_document("The cat saw the dog.", segment=True))
        once = [(t.begin, t.end, t.removed) for t in document.tokens]

        remover.process(document)

        assert [(t.begin, t.end, t.removed) for t in document.tokens] == once

    def test_never_unmarks_tokens(self, the_stopword_file):
        """Tokens already removed stay removed."""
        from lda_pipeline.annotators.stopword_remover import StopWordRemover

        document = make_document("the cat sat", segment=True)
        document.tokens[1].removed = True

        StopWordRemover(stopword_location=str(the_stopword_file)).process(document)

        assert [t.removed for t in document.tokens] == [True, True, False]

    def test_preserves_token_order_and_offsets(self, the_stopword_file):
        """Tokens are flagged in place, never dropped."""
        from lda_pipeline.annotators.stopword_remover import StopWordRemover

        document = make_document("the cat sat on the mat", segment=True)
        before = [(t.begin, t.end) for t in document.tokens]

        StopWordRemover(stopword_location=str(the_stopword_file)).process(document)

        assert [(t.begin, t.end) for t in document.tokens] == before

    def test_uses_bundled_list_by_language(self):
        """Without an explicit file, stopwords_<language>.txt is used."""
        from lda_pipeline.annotators.stopword_remover import StopWordRemover

        document = make_document("the cat sat on a mat", segment=True)

        StopWordRemover().process(document)

        kept = [document.covered_text(t) for t in document.tokens if not t.removed]
        assert kept == ["cat", "sat", "mat"]

    def test_custom_resource_dir(self, tmp_path):
        """Per-language files are looked up in resource_dir."""
        from lda_pipeline.annotators.stopword_remover import StopWordRemover

        (tmp_path / "stopwords_en.txt").write_text("cat\n", encoding="utf-8")
        document = make_document("the cat sat", segment=True)

        StopWordRemover(resource_dir=tmp_path).process(document)

        assert [t.removed for t in document.tokens] == [False, True, False]

    def test_missing_language_resource_raises(self, tmp_path):
        """No stopwords_<language>.txt is a ConfigError."""
        from lda_pipeline.annotators.stopword_remover import StopWordRemover
        from lda_pipeline.exceptions import ConfigError

        document = make_document("la casa", language="es")

        with pytest.raises(ConfigError):
            StopWordRemover(resource_dir=tmp_path).process(document)

    def test_stopwords_loaded_once(self, the_stopword_file):
        """The stop-word set is cached per language."""
        from lda_pipeline.annotators.stopword_remover import StopWordRemover

        remover = StopWordRemover(stopword_location=str(the_stopword_file))

        assert remover.get_stopwords("en") is remover.get_stopwords("en")
