"""
Corpus readers for the LDA estimation pipeline.

Available readers:
    - TextReader: Plain-text files from a directory or glob pattern
"""

from lda_pipeline.readers.text_reader import TextReader

__all__ = ["TextReader"]
