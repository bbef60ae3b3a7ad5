"""
Per-document annotators for the LDA estimation pipeline.

Available annotators:
    - SpacySegmenter: Sentence and token spans
    - StopWordRemover: Marks stop-word tokens as removed
"""

from lda_pipeline.annotators.segmenter import SpacySegmenter
from lda_pipeline.annotators.stopword_remover import StopWordRemover, load_stopwords

__all__ = ["SpacySegmenter", "StopWordRemover", "load_stopwords"]
