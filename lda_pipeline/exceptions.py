"""
Exception hierarchy for the LDA estimation pipeline.

Every failure the pipeline knows how to describe is a PipelineError. The
orchestrator tags errors with the stage they came from, and the CLI turns
them into a non-zero exit code.
"""

from typing import Optional


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        document_id: Optional[str] = None,
    ):
        self.message = message
        self.stage = stage
        self.document_id = document_id
        super().__init__(message)

    def __str__(self) -> str:
        prefix = f"[{self.stage}] " if self.stage else ""
        if self.document_id:
            return f"{prefix}{self.document_id}: {self.message}"
        return f"{prefix}{self.message}"


class PipelineIOError(PipelineError):
    """Raised when the corpus cannot be read or the model cannot be written."""
    pass


class ConfigError(PipelineError):
    """Raised for invalid parameters, missing resources or an empty training set."""
    pass


class ProcessingError(PipelineError):
    """Raised when a single document cannot be processed."""
    pass
