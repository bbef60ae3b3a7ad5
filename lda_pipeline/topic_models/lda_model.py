"""
LDATopicModelTrainer - LDA estimation backed by tomotopy.

Design:
    - One training instance per covering unit (sentence or whole document)
      holding the forms of its surviving tokens, in document order
    - Vocabulary in order of first appearance; tomotopy's internal word ids
      are mapped back onto it
    - Symmetric priors alpha = alpha_sum / K and eta = beta, with
      hyperparameter optimization switched off
    - Single worker, no parallel scheme, so a fixed seed gives identical
      results run to run
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import tomotopy as tp

from lda_pipeline.config import COVERING_TYPES, PipelineConfig
from lda_pipeline.exceptions import ConfigError
from lda_pipeline.interfaces import ModelTrainer
from lda_pipeline.models import Document, TrainedTopicModel

logger = logging.getLogger(__name__)


def build_instances(
    documents: List[Document],
    covering_type: str = "sentence",
    min_token_length: int = 1,
) -> Tuple[List[str], List[List[str]]]:
    """
    Group surviving tokens into bag-of-words training instances.

    A token survives when it is not marked removed and its form is at
    least min_token_length characters long. Covering units without a
    surviving token produce no instance.

    Args:
        documents: Segmented (and usually filtered) documents
        covering_type: "sentence" or "document"
        min_token_length: Minimum form length used for training

    Returns:
        Tuple of:
            - instance ids ("<document_id>#<unit index>")
            - instances, each a list of word forms in document order
    """
    if covering_type not in COVERING_TYPES:
        raise ConfigError(f"Unknown covering type: {covering_type!r}")

    instance_ids = []
    instances = []
    for document in documents:
        for unit_index, (begin, end) in enumerate(document.covering_spans(covering_type)):
            words = []
            for token in document.tokens_in(begin, end):
                if token.removed:
                    continue
                form = document.surface_form(token)
                if len(form) < min_token_length:
                    continue
                words.append(form)
            if words:
                instance_ids.append(f"{document.document_id}#{unit_index}")
                instances.append(words)
    return instance_ids, instances



def build_vocabulary(instances: List[List[str]]) -> List[str]:
    """Distinct word forms of all instances, in order of first appearance."""
    seen: Dict[str, None] = {}
    for words in instances:
        for word in words:
            seen.setdefault(word, None)
    return list(seen)


def _normalize_rows(matrix: np.ndarray) -> np.ndarray:
    """Rescale rows to sum to 1 (tomotopy returns float32 distributions)."""
    matrix = np.asarray(matrix, dtype=np.float64)
    return matrix / matrix.sum(axis=1, keepdims=True)


class LDATopicModelTrainer(ModelTrainer):
    """
    LDA implementation of the ModelTrainer interface.

    This implementation:
        1. Builds one bag-of-words instance per covering unit
        2. Adds every instance to a tomotopy LDAModel
        3. Trains for n_iterations Gibbs sampling iterations
        4. Reads topic-word and instance-topic distributions back, with
           topic-word columns in first-appearance vocabulary order

    Args:
        n_topics: Number of latent topics (K)
        n_iterations: Number of sampling iterations (I)
        covering_type: "sentence" or "document"
        alpha_sum: Sum of the symmetric document-topic prior
        beta: Symmetric topic-word prior
        random_seed: Sampler seed (None = not reproducible)
        min_token_length: Shorter token forms are not used for training
        display_n_topic_words: Words per topic in progress logs
        display_interval: Iterations between progress logs (0 disables)
        language: Recorded in the model metadata
    """

    def __init__(
        self,
        n_topics: int = 10,
        n_iterations: int = 100,
        covering_type: str = "sentence",
        alpha_sum: float = 1.0,
        beta: float = 0.01,
        random_seed: Optional[int] = 42,
        min_token_length: int = 3,
        display_n_topic_words: int = 7,
        display_interval: int = 50,
        language: Optional[str] = None,
    ):
        if n_topics < 1:
            raise ConfigError(f"n_topics must be >= 1, got {n_topics}")
        if n_iterations < 1:
            raise ConfigError(f"n_iterations must be >= 1, got {n_iterations}")
        if covering_type not in COVERING_TYPES:
            raise ConfigError(f"Unknown covering type: {covering_type!r}")

        self.n_topics = n_topics
        self.n_iterations = n_iterations
        self.covering_type = covering_type
        self.alpha_sum = alpha_sum
        self.beta = beta
        self.random_seed = random_seed
        self.min_token_length = min_token_length
        self.display_n_topic_words = display_n_topic_words
        self.display_interval = display_interval
        self.language = language

        logger.info(
            f"Initialized LDATopicModelTrainer: {n_topics} topics, "
            f"{n_iterations} iterations, covering type {covering_type!r}"
        )

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "LDATopicModelTrainer":
        """Build a trainer from a PipelineConfig."""
        return cls(
            n_topics=config.n_topics,
            n_iterations=config.n_iterations,
            covering_type=config.covering_type,
            alpha_sum=config.alpha_sum,
            beta=config.beta,
            random_seed=config.random_seed,
            min_token_length=config.min_token_length,
            display_n_topic_words=config.display_n_topic_words,
            display_interval=config.display_interval,
            language=config.language,
        )

    def _create_model(self) -> "tp.LDAModel":
        """Create an untrained tomotopy model with fixed symmetric priors."""
        kwargs = dict(
            tw=tp.TermWeight.ONE,
            min_cf=0,
            rm_top=0,
            k=self.n_topics,
            alpha=self.alpha_sum / self.n_topics,
            eta=self.beta,
        )
        if self.random_seed is not None:
            kwargs["seed"] = self.random_seed
        model = tp.LDAModel(**kwargs)
        model.optim_interval = 0
        return model

    def _train_iterations(self, model: "tp.LDAModel") -> None:
        """Train in display_interval chunks, logging progress after each one."""
        chunk = self.display_interval or self.n_iterations
        done = 0
        while done < self.n_iterations:
            step = min(chunk, self.n_iterations - done)
            model.train(step, workers=1, parallel=tp.ParallelScheme.NONE)
            done += step
            if self.display_interval and done % self.display_interval == 0:
                self._log_progress(model, done)

    def _log_progress(self, model: "tp.LDAModel", iteration: int) -> None:
        logger.info(
            f"Iteration {iteration}/{self.n_iterations} "
            f"LL per word: {model.ll_per_word:.5f}"
        )
        if not logger.isEnabledFor(logging.DEBUG):
            return
        for topic_id in range(self.n_topics):
            words = " ".join(
                word for word, _ in model.get_topic_words(topic_id, top_n=self.display_n_topic_words)
            )
            logger.debug(f"  topic {topic_id}: {words}")

    def train(self, documents: List[Document]) -> TrainedTopicModel:
        """
        Estimate an LDA model over the annotated documents.

        Raises:
            ConfigError: If no covering unit has a surviving token
        """
        instance_ids, instances = build_instances(
            documents, self.covering_type, self.min_token_length
        )
        if not instances:
            raise ConfigError(
                f"No training instances: no {self.covering_type} has a surviving token"
            )

        vocabulary = build_vocabulary(instances)
        n_tokens = sum(len(words) for words in instances)
        logger.info(
            f"Training LDA on {len(instances)} instances, "
            f"{n_tokens} tokens, vocabulary size {len(vocabulary)}"
        )

        lda = self._create_model()
        for words in instances:
            lda.add_doc(words)
        self._train_iterations(lda)

        model = TrainedTopicModel(
            vocabulary=vocabulary,
            topic_word=self._topic_word(lda, vocabulary),
            doc_topic=_normalize_rows([doc.get_topic_dist() for doc in lda.docs]),
            instance_ids=instance_ids,
            n_topics=self.n_topics,
            n_iterations=self.n_iterations,
            metadata=self._metadata(),
        )

        for topic_id in range(self.n_topics):
            logger.debug(
                f"Topic {topic_id}: {' '.join(model.top_words(topic_id, self.display_n_topic_words))}"
            )
        logger.info(f"Finished LDA training after {self.n_iterations} iterations")
        return model

    def _topic_word(self, lda: "tp.LDAModel", vocabulary: List[str]) -> np.ndarray:
        """(K, V) topic-word matrix with columns in vocabulary order."""
        word_ids = {word: i for i, word in enumerate(lda.used_vocabs)}
        columns = [word_ids[word] for word in vocabulary]
        rows = [np.asarray(lda.get_topic_word_dist(k))[columns] for k in range(self.n_topics)]
        return _normalize_rows(rows)

    def _metadata(self) -> Dict[str, Any]:
        """Run settings stored alongside the model."""
        return {
            "model": "lda",
            "sampler": "tomotopy.LDAModel",
            "alpha_sum": self.alpha_sum,
            "beta": self.beta,
            "random_seed": self.random_seed,
            "covering_type": self.covering_type,
            "min_token_length": self.min_token_length,
            "language": self.language,
        }
