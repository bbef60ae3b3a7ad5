"""
Data models for the LDA estimation pipeline.

These dataclasses define the contract between pipeline stages:
    - Document: one input text plus the annotations attached by each stage
    - Sentence / Token: character-offset spans over a document's text
    - TrainedTopicModel: the artifact produced by the trainer

Annotations only grow or get flagged; nothing is renumbered once the
segmenter has written it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np


@dataclass
class Sentence:
    """
    Sentence span over a document's text.

    Attributes:
        begin: Offset of the first character (inclusive)
        end: Offset after the last character (exclusive)
    """

    begin: int
    end: int


@dataclass
class Token:
    """
    Token span over a document's text.

    Attributes:
        begin: Offset of the first character (inclusive)
        end: Offset after the last character (exclusive)
        removed: True once the stop-word filter has marked the token
        form: Normalized surface form. None means the covered text is used.
    """

    begin: int
    end: int
    removed: bool = False
    form: Optional[str] = None


@dataclass
class Document:
    """
    A single source text and its annotations.

    Attributes:
        document_id: Source file path
        text: Raw document text
        language: Language code (e.g., "en")
        sentences: Sentence spans in offset order
        tokens: Token spans in offset order
    """

    document_id: str
    text: str
    language: str
    sentences: List[Sentence] = field(default_factory=list)
    tokens: List[Token] = field(default_factory=list)

    def covered_text(self, span) -> str:
        """Return the text covered by a Sentence or Token span."""
        return self.text[span.begin:span.end]

    def surface_form(self, token: Token) -> str:
        """Return the token's normalized form, or its covered text."""
        if token.form is not None:
            return token.form
        return self.covered_text(token)

    def tokens_in(self, begin: int, end: int) -> List[Token]:
        """
        Get tokens lying entirely inside [begin, end).

        Args:
            begin: Start offset of the covering span
            end: End offset of the covering span

        Returns:
            Tokens in document order
        """
        return [t for t in self.tokens if t.begin >= begin and t.end <= end]

    def covering_spans(self, covering_type: str) -> List[Tuple[int, int]]:
        """
        Get the (begin, end) spans of the requested covering unit.

        Args:
            covering_type: "sentence" or "document"

        Returns:
            List of (begin, end) offsets in document order
        """
        if covering_type == "document":
            return [(0, len(self.text))]
        if covering_type == "sentence":
            return [(s.begin, s.end) for s in self.sentences]
        raise ValueError(f"Unknown covering type: {covering_type}")


@dataclass
class TrainedTopicModel:
    """
    Trained LDA topic model.

    Required Attributes:
        vocabulary: Distinct word forms, in order of first appearance
        topic_word: (n_topics, n_words) - P(word | topic), rows sum to 1
        doc_topic: (n_instances, n_topics) - P(topic | instance), rows sum to 1
        instance_ids: One id per training instance ("<document_id>#<unit>")
        n_topics: Number of latent topics (K)
        n_iterations: Number of Gibbs sampling iterations (I)

    Optional Attributes:
        metadata: Sampler hyperparameters and run settings
    """

    vocabulary: List[str]
    topic_word: np.ndarray
    doc_topic: np.ndarray
    instance_ids: List[str]
    n_topics: int
    n_iterations: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    def top_words(self, topic_id: int, n: int = 10) -> List[str]:
        """
        Get the most probable words of a topic.

        Ties are broken by vocabulary order so the result is reproducible.

        Args:
            topic_id: Topic index in [0, n_topics)
            n: Number of words to return

        Returns:
            Up to n words, most probable first
        """
        row = self.topic_word[topic_id]
        order = np.argsort(-row, kind="stable")[:n]
        return [self.vocabulary[i] for i in order]
