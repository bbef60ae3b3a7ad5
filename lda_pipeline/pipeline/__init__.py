"""
Pipeline package for LDA estimation.

This package contains:
    - EstimationPipeline: Orchestration of reader, annotators and trainer
    - run_pipeline: Functional shortcut for a single run
"""

from lda_pipeline.pipeline.estimation_pipeline import EstimationPipeline, run_pipeline

__all__ = ["EstimationPipeline", "run_pipeline"]
