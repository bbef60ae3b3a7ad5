"""
Topic model implementations for the LDA estimation pipeline.

Available models:
    - LDATopicModelTrainer: LDA trained with tomotopy's Gibbs sampler

Persistence:
    - save_model / load_model: Atomic JSON model files
"""

from lda_pipeline.topic_models.lda_model import (
    LDATopicModelTrainer,
    build_instances,
    build_vocabulary,
)
from lda_pipeline.topic_models.serialization import load_model, save_model

__all__ = [
    "LDATopicModelTrainer",
    "build_instances",
    "build_vocabulary",
    "load_model",
    "save_model",
]
