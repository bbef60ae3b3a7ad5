"""
Pipeline configuration.

All run parameters live in one PipelineConfig passed into the
orchestrator, so several independent runs can coexist in one process and
tests can override any value. The CLI builds its config from the bundled
resources/default.yaml.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from lda_pipeline.exceptions import ConfigError

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).parent / "resources"
DEFAULT_CONFIG_FILE = RESOURCES_DIR / "default.yaml"
DEFAULT_SOURCE_LOCATION = str(RESOURCES_DIR / "texts" / "*")
DEFAULT_TARGET_LOCATION = "target/model.mallet"

COVERING_TYPES = ("sentence", "document")

INT_FIELDS = (
    "n_topics",
    "n_iterations",
    "min_token_length",
    "display_n_topic_words",
    "display_interval",
)
NUMBER_FIELDS = ("alpha_sum", "beta")
STRING_FIELDS = ("language", "encoding", "covering_type")
PATH_FIELDS = ("source_location", "target_location")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class PipelineConfig:
    """
    Configuration for one estimation run.

    Attributes:
        source_location: Directory or glob pattern of input text files
        language: Language code given to every document
        encoding: Text encoding of the input files
        stopword_location: Explicit stop-word file. None means the bundled
                           stopwords_<language>.txt
        covering_type: Annotation that bounds one training instance
        n_topics: Number of latent topics (K)
        n_iterations: Number of Gibbs sampling iterations (I)
        alpha_sum: Sum of the symmetric document-topic prior
        beta: Symmetric topic-word prior
        random_seed: Sampler seed. None draws fresh entropy (not reproducible)
        min_token_length: Shorter tokens are not used for training
        display_n_topic_words: Words per topic in progress logs
        display_interval: Iterations between progress logs (0 disables)
        target_location: Path of the serialized model
    """

    source_location: str = DEFAULT_SOURCE_LOCATION
    language: str = "en"
    encoding: str = "utf-8"
    stopword_location: Optional[str] = None
    covering_type: str = "sentence"
    n_topics: int = 10
    n_iterations: int = 100
    alpha_sum: float = 1.0
    beta: float = 0.01
    random_seed: Optional[int] = 42
    min_token_length: int = 3
    display_n_topic_words: int = 7
    display_interval: int = 50
    target_location: str = DEFAULT_TARGET_LOCATION

    def validate(self) -> "PipelineConfig":
        """
        Check parameter ranges.

        Returns:
            self, for chaining

        Raises:
            ConfigError: On the first invalid value
        """
        self._check_types()

        if self.n_topics < 1:
            raise ConfigError(f"n_topics must be >= 1, got {self.n_topics}")
        if self.n_iterations < 1:
            raise ConfigError(f"n_iterations must be >= 1, got {self.n_iterations}")
        if self.alpha_sum <= 0:
            raise ConfigError(f"alpha_sum must be > 0, got {self.alpha_sum}")
        if self.beta <= 0:
            raise ConfigError(f"beta must be > 0, got {self.beta}")
        if self.min_token_length < 1:
            raise ConfigError(f"min_token_length must be >= 1, got {self.min_token_length}")
        if self.covering_type not in COVERING_TYPES:
            raise ConfigError(
                f"covering_type must be one of {', '.join(COVERING_TYPES)}, "
                f"got {self.covering_type!r}"
            )
        if self.display_n_topic_words < 1:
            raise ConfigError(
                f"display_n_topic_words must be >= 1, got {self.display_n_topic_words}"
            )
        if self.display_interval < 0:
            raise ConfigError(f"display_interval must be >= 0, got {self.display_interval}")
        if not self.language:
            raise ConfigError("language must not be empty")
        return self

    def _check_types(self) -> None:
        """Reject values of the wrong type, e.g. quoted numbers in YAML."""
        for name in INT_FIELDS:
            value = getattr(self, name)
            if not _is_int(value):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if self.random_seed is not None and not _is_int(self.random_seed):
            raise ConfigError(f"random_seed must be an integer or null, got {self.random_seed!r}")
        for name in NUMBER_FIELDS:
            value = getattr(self, name)
            if not _is_number(value):
                raise ConfigError(f"{name} must be a number, got {value!r}")
        for name in STRING_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")
        for name in PATH_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (str, os.PathLike)):
                raise ConfigError(f"{name} must be a path, got {value!r}")
        if self.stopword_location is not None and not isinstance(
            self.stopword_location, (str, os.PathLike)
        ):
            raise ConfigError(
                f"stopword_location must be a path or null, got {self.stopword_location!r}"
            )

    def with_overrides(self, **overrides: Any) -> "PipelineConfig":
        """Return a copy with the given fields replaced."""
        return self.from_dict({**dataclasses.asdict(self), **overrides})

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PipelineConfig":
        """
        Build a config from a dict. Missing keys use defaults.

        Raises:
            ConfigError: If the dict has unknown keys
        """
        data = data or {}
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path) -> "PipelineConfig":
        """
        Load a config from a YAML file.

        Args:
            path: Path to a YAML mapping of PipelineConfig fields

        Raises:
            ConfigError: If the file is missing, unparsable or not a mapping
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse config file {path}: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        logger.info(f"Loaded config from: {path}")
        return cls.from_dict(data)


def load_default_config() -> PipelineConfig:
    """Load the bundled default configuration."""
    return PipelineConfig.from_yaml(DEFAULT_CONFIG_FILE)
