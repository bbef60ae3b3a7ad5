"""
Abstract interfaces for the LDA estimation pipeline.

These interfaces enable:
    - DocumentSource: Swappable corpus readers (plain-text files, in-memory)
    - Annotator: Swappable per-document stages (segmenter, stop-word filter)
    - ModelTrainer: Swappable topic model estimators

Design Philosophy:
    - Orchestration only talks to these contracts
    - Dependency injection for testing and flexibility
"""

from abc import ABC, abstractmethod
from typing import List

from lda_pipeline.models import Document, TrainedTopicModel


class DocumentSource(ABC):
    """
    Abstract interface for corpus readers.

    Implementations:
        - TextReader: Plain-text files from a directory or glob pattern
    """

    @abstractmethod
    def read_documents(self) -> List[Document]:
        """
        Read the whole corpus.

        Returns:
            Documents in a stable order, one per source item

        Raises:
            PipelineIOError: If the source matches nothing or cannot be read
        """
        pass

    def close(self) -> None:
        """
        Clean up resources.

        Default implementation is a no-op. Override if your source
        keeps handles open.
        """
        pass


class Annotator(ABC):
    """
    Abstract interface for per-document processing stages.

    Contract: annotate the document in place and return it. Annotators
    never reorder documents or renumber existing annotations.

    Implementations:
        - SpacySegmenter: Sentence and token spans
        - StopWordRemover: Marks stop-word tokens as removed
    """

    name = "annotator"

    @abstractmethod
    def process(self, document: Document) -> Document:
        """
        Annotate a single document.

        Args:
            document: Document to annotate (modified in place)

        Returns:
            The same document
        """
        pass


class ModelTrainer(ABC):
    """
    Abstract interface for topic model estimators.

    Implementations:
        - LDATopicModelTrainer: Collapsed Gibbs sampling LDA
    """

    @abstractmethod
    def train(self, documents: List[Document]) -> TrainedTopicModel:
        """
        Estimate a topic model over the annotated corpus.

        Args:
            documents: Segmented and filtered documents

        Returns:
            TrainedTopicModel with vocabulary, distributions and metadata

        Raises:
            ConfigError: If there is nothing to train on
        """
        pass
