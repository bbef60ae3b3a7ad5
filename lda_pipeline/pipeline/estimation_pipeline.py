"""
EstimationPipeline - Reader -> segmenter -> stop-word filter -> LDA trainer.

Each stage runs over the whole document collection before the next one
starts. Any PipelineError escaping a stage is tagged with the stage name
and re-raised; nothing is written unless training succeeds.
"""

import logging
from typing import List, Optional

from lda_pipeline.annotators.segmenter import SpacySegmenter
from lda_pipeline.annotators.stopword_remover import StopWordRemover
from lda_pipeline.config import PipelineConfig
from lda_pipeline.exceptions import PipelineError
from lda_pipeline.interfaces import Annotator, DocumentSource, ModelTrainer
from lda_pipeline.models import Document, TrainedTopicModel
from lda_pipeline.readers.text_reader import TextReader
from lda_pipeline.topic_models.lda_model import LDATopicModelTrainer
from lda_pipeline.topic_models.serialization import save_model

logger = logging.getLogger(__name__)


class EstimationPipeline:
    """
    Fixed four-stage LDA estimation pipeline.

    Stages not injected are built from the config:
        - source: TextReader(source_location, language, encoding)
        - annotators: [SpacySegmenter(), StopWordRemover(stopword_location)]
        - trainer: LDATopicModelTrainer.from_config(config)

    Usage:
        pipeline = EstimationPipeline(PipelineConfig(n_topics=5))
        model = pipeline.run()

    Args:
        config: Run configuration (validated on construction)
        source: Optional DocumentSource override
        annotators: Optional list of Annotators, applied in order
        trainer: Optional ModelTrainer override
    """

    def __init__(
        self,
        config: PipelineConfig,
        source: Optional[DocumentSource] = None,
        annotators: Optional[List[Annotator]] = None,
        trainer: Optional[ModelTrainer] = None,
    ):
        self.config = config.validate()

        self.source = source or TextReader(
            config.source_location, config.language, encoding=config.encoding
        )
        if annotators is None:
            annotators = [
                SpacySegmenter(),
                StopWordRemover(stopword_location=config.stopword_location),
            ]
        self.annotators = annotators
        self.trainer = trainer or LDATopicModelTrainer.from_config(config)

    def read(self) -> List[Document]:
        """Stage 1: read the corpus."""
        try:
            documents = self.source.read_documents()
        except PipelineError as e:
            _tag(e, "reader")
            raise
        finally:
            self.source.close()
        return documents

    def annotate(self, documents: List[Document]) -> List[Document]:
        """Stages 2-3: run every annotator over every document, in order."""
        for annotator in self.annotators:
            stage = getattr(annotator, "name", type(annotator).__name__)
            for document in documents:
                try:
                    annotator.process(document)
                except PipelineError as e:
                    _tag(e, stage, document.document_id)
                    raise
            logger.info(f"Stage {stage} finished on {len(documents)} documents")

        n_sentences = sum(len(d.sentences) for d in documents)
        n_tokens = sum(len(d.tokens) for d in documents)
        n_removed = sum(1 for d in documents for t in d.tokens if t.removed)
        logger.info(
            f"Annotated {len(documents)} documents: {n_sentences} sentences, "
            f"{n_tokens} tokens ({n_removed} removed)"
        )
        return documents

    def train(self, documents: List[Document]) -> TrainedTopicModel:
        """Stage 4: estimate the topic model."""
        try:
            return self.trainer.train(documents)
        except PipelineError as e:
            _tag(e, "trainer")
            raise

    def run(self) -> TrainedTopicModel:
        """
        Run all stages and write the model to config.target_location.

        Returns:
            The trained model (also persisted)

        Raises:
            PipelineIOError: Unreadable corpus or unwritable output
            ConfigError: Bad parameters, missing stop words, empty training set
            ProcessingError: A document could not be segmented
        """
        logger.info("=" * 60)
        logger.info("LDA ESTIMATION PIPELINE")
        logger.info("=" * 60)

        documents = self.read()
        documents = self.annotate(documents)
        model = self.train(documents)

        try:
            save_model(model, self.config.target_location)
        except PipelineError as e:
            _tag(e, "writer")
            raise

        logger.info(
            f"Pipeline complete: {model.n_topics} topics over "
            f"{len(model.instance_ids)} instances -> {self.config.target_location}"
        )
        return model


def _tag(error: PipelineError, stage: str, document_id: Optional[str] = None) -> None:
    """Attach stage (and document) to an error unless it already has them."""
    if error.stage is None:
        error.stage = stage
    if error.document_id is None and document_id is not None:
        error.document_id = document_id


def run_pipeline(config: PipelineConfig) -> TrainedTopicModel:
    """Run the estimation pipeline for a config."""
    return EstimationPipeline(config).run()
