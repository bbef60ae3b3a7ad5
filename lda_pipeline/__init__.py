"""
LDA Estimation Pipeline

Trains an LDA topic model over a corpus of plain-text files and writes
the model to disk.

Core modules:
    - models: Data classes (Document, Sentence, Token, TrainedTopicModel)
    - interfaces: Abstract interfaces (DocumentSource, Annotator, ModelTrainer)
    - config: PipelineConfig
    - readers / annotators / topic_models: Stage implementations
    - pipeline: EstimationPipeline orchestration
"""

from lda_pipeline.config import PipelineConfig
from lda_pipeline.exceptions import (
    ConfigError,
    PipelineError,
    PipelineIOError,
    ProcessingError,
)
from lda_pipeline.interfaces import Annotator, DocumentSource, ModelTrainer
from lda_pipeline.models import Document, Sentence, Token, TrainedTopicModel

__version__ = "1.0.0"

__all__ = [
    "PipelineConfig",
    "PipelineError",
    "PipelineIOError",
    "ConfigError",
    "ProcessingError",
    "Document",
    "Sentence",
    "Token",
    "TrainedTopicModel",
    "DocumentSource",
    "Annotator",
    "ModelTrainer",
]
