"""
SpacySegmenter - Sentence and token segmentation.

Design:
    - Blank spaCy pipeline per language plus the rule-based "sentencizer",
      so no statistical model download is needed
    - Sentence spans skip whitespace-only sentences
    - Token spans skip whitespace tokens and never cross a sentence boundary
    - Re-running on a segmented document replaces its annotations
"""

import logging
from typing import Dict

import spacy

from lda_pipeline.exceptions import ConfigError, ProcessingError
from lda_pipeline.interfaces import Annotator
from lda_pipeline.models import Document, Sentence, Token

logger = logging.getLogger(__name__)


class SpacySegmenter(Annotator):
    """
    Split documents into Sentence and Token spans with spaCy.

    One spaCy pipeline is built per language on first use and reused.
    """

    name = "segmenter"

    def __init__(self):
        self._pipelines: Dict[str, "spacy.language.Language"] = {}

    def _get_nlp(self, language: str) -> "spacy.language.Language":
        """Build (once) the blank pipeline for a language."""
        if language not in self._pipelines:
            try:
                nlp = spacy.blank(language)
            except ImportError as e:
                raise ConfigError(f"No spaCy language support for {language!r}") from e
            nlp.add_pipe("sentencizer")
            self._pipelines[language] = nlp
            logger.debug(f"Initialized spaCy sentencizer for language {language!r}")
        return self._pipelines[language]

    def process(self, document: Document) -> Document:
        """
        Annotate a document with sentences and tokens.

        Raises:
            ConfigError: If spaCy does not support the document language
            ProcessingError: If the text holds undecodable bytes or spaCy fails
        """
        try:
            document.text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ProcessingError(
                f"Text contains undecodable bytes at offset {e.start}",
                document_id=document.document_id,
            ) from e

        nlp = self._get_nlp(document.language)
        if not document.text.strip():
            document.sentences = []
            document.tokens = []
            logger.debug(f"Skipping empty document {document.document_id}")
            return document

        # max_length only matters for parser and NER components
        if len(document.text) >= nlp.max_length:
            nlp.max_length = len(document.text) + 1

        try:
            doc = nlp(document.text)
        except Exception as e:
            raise ProcessingError(
                f"Segmentation failed: {e}", document_id=document.document_id
            ) from e

        sentences = []
        tokens = []
        for sent in doc.sents:
            sent_tokens = [tok for tok in sent if not tok.is_space]
            if not sent_tokens:
                continue
            sentences.append(Sentence(begin=sent_tokens[0].idx, end=sent_tokens[-1].idx + len(sent_tokens[-1])))
            tokens.extend(Token(begin=tok.idx, end=tok.idx + len(tok)) for tok in sent_tokens)

        document.sentences = sentences
        document.tokens = tokens

        logger.debug(
            f"Segmented {document.document_id}: "
            f"{len(sentences)} sentences, {len(tokens)} tokens"
        )
        return document
