"""
Pytest configuration and shared fixtures for the LDA estimation pipeline.

This module provides reusable fixtures for testing the pipeline stages.
"""

import pytest
from typing import List, Optional


# =============================================================================
# Test Helpers
# =============================================================================

def make_document(
    text: str,
    document_id: str = "doc.txt",
    language: str = "en",
    segment: bool = False,
):
    """
    Helper to create a Document for tests.

    Args:
        text: Document text
        document_id: Identifier (default: "doc.txt")
        language: Language code (default: "en")
        segment: Run the SpacySegmenter on the document before returning it

    Returns:
        Document instance
    """
    from lda_pipeline.models import Document
    document = Document(document_id=document_id, text=text, language=language)
    if segment:
        from lda_pipeline.annotators.segmenter import SpacySegmenter
        SpacySegmenter().process(document)
    return document


def write_corpus(directory, texts: List[str], prefix: str = "doc") -> List[str]:
    """Write one file per text into directory and return the paths in order."""
    paths = []
    for i, text in enumerate(texts):
        path = directory / f"{prefix}{i:02d}.txt"
        path.write_text(text, encoding="utf-8")
        paths.append(str(path))
    return paths


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def example_texts() -> List[str]:
    """The two-document example corpus."""
    return ["the cat sat", "dogs run fast"]


@pytest.fixture
def sample_texts() -> List[str]:
    """Small multi-sentence corpus with two obvious themes."""
    return [
        "The cat sat on the warm mat. Cats sleep in the sun all afternoon. "
        "A hungry kitten chased the string across the kitchen floor.",
        "Dogs run fast across the field. The dog fetched the ball again. "
        "Puppies learn commands during short training sessions.",
        "Our cat and the neighbour's dog watched the birds from the window.",
    ]


@pytest.fixture
def corpus_dir(tmp_path, example_texts):
    """Directory holding the two-document example corpus."""
    directory = tmp_path / "corpus"
    directory.mkdir()
    write_corpus(directory, example_texts)
    return directory


@pytest.fixture
def sample_corpus_dir(tmp_path, sample_texts):
    """Directory holding the multi-sentence sample corpus."""
    directory = tmp_path / "sample_corpus"
    directory.mkdir()
    write_corpus(directory, sample_texts)
    return directory


@pytest.fixture
def the_stopword_file(tmp_path):
    """Stop-word file containing only "the"."""
    path = tmp_path / "stopwords_test.txt"
    path.write_text("# test list\nthe\n", encoding="utf-8")
    return path


@pytest.fixture
def target_path(tmp_path):
    """Model output path inside a not-yet-existing directory."""
    return tmp_path / "target" / "model.mallet"


@pytest.fixture
def example_config(corpus_dir, the_stopword_file, target_path):
    """PipelineConfig for the two-document example (K=2, I=10)."""
    from lda_pipeline.config import PipelineConfig
    return PipelineConfig(
        source_location=str(corpus_dir),
        language="en",
        stopword_location=str(the_stopword_file),
        n_topics=2,
        n_iterations=10,
        random_seed=7,
        target_location=str(target_path),
    )


# =============================================================================
# Model Fixtures
# =============================================================================

@pytest.fixture
def small_model():
    """Hand-built TrainedTopicModel with 2 topics over 3 words."""
    import numpy as np
    from lda_pipeline.models import TrainedTopicModel

    return TrainedTopicModel(
        vocabulary=["cat", "dog", "ball"],
        topic_word=np.array([
            [0.7, 0.2, 0.1],
            [0.1, 0.3, 0.6],
        ]),
        doc_topic=np.array([
            [0.9, 0.1],
            [0.25, 0.75],
        ]),
        instance_ids=["a.txt#0", "b.txt#0"],
        n_topics=2,
        n_iterations=5,
        metadata={"alpha_sum": 1.0, "beta": 0.01, "random_seed": 42, "language": "en"},
    )
