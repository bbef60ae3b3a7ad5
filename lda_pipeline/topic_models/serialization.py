"""
Model file persistence.

The model file is a single JSON document holding the vocabulary, both
distributions and the run metadata. Keys are sorted and no timestamps are
written, so equal models give byte-identical files. Floats use repr
precision, which makes load_model(save_model(model)) exact.

Writes go to a temporary file in the target directory that is renamed
onto the final path only after it has been fully written.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

import numpy as np

from lda_pipeline.exceptions import PipelineIOError
from lda_pipeline.models import TrainedTopicModel

logger = logging.getLogger(__name__)

MODEL_FORMAT = "lda-pipeline/1"


def model_to_dict(model: TrainedTopicModel) -> Dict[str, Any]:
    """Convert a model to a JSON-serializable dict."""
    return {
        "format": MODEL_FORMAT,
        "n_topics": model.n_topics,
        "n_iterations": model.n_iterations,
        "vocabulary": list(model.vocabulary),
        "instance_ids": list(model.instance_ids),
        "topic_word": np.asarray(model.topic_word, dtype=np.float64).tolist(),
        "doc_topic": np.asarray(model.doc_topic, dtype=np.float64).tolist(),
        "metadata": model.metadata,
    }


def model_from_dict(data: Dict[str, Any]) -> TrainedTopicModel:
    """
    Rebuild a model from model_to_dict output.

    Raises:
        ValueError: If the format marker is missing or unknown
        KeyError: If a required key is missing
    """
    if data.get("format") != MODEL_FORMAT:
        raise ValueError(f"Unsupported model format: {data.get('format')!r}")

    n_topics = int(data["n_topics"])
    vocabulary = list(data["vocabulary"])
    topic_word = np.array(data["topic_word"], dtype=np.float64).reshape(n_topics, len(vocabulary))
    doc_topic = np.array(data["doc_topic"], dtype=np.float64).reshape(-1, n_topics)

    return TrainedTopicModel(
        vocabulary=vocabulary,
        topic_word=topic_word,
        doc_topic=doc_topic,
        instance_ids=list(data["instance_ids"]),
        n_topics=n_topics,
        n_iterations=int(data["n_iterations"]),
        metadata=dict(data.get("metadata", {})),
    )


def save_model(model: TrainedTopicModel, target_location) -> Path:
    """
    Atomically write a model file.

    Args:
        model: Trained model to persist
        target_location: Final path of the model file

    Returns:
        Path of the written file

    Raises:
        PipelineIOError: If the directory or file cannot be written
    """
    target = Path(target_location)
    payload = model_to_dict(model)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PipelineIOError(f"Cannot create output directory {target.parent}: {e}") from e

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = f.name
            json.dump(payload, f, sort_keys=True, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target)
    except BaseException as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        if isinstance(e, OSError):
            raise PipelineIOError(f"Cannot write model file {target}: {e}") from e
        raise

    logger.info(f"Saved model to {target}")
    return target


def load_model(path) -> TrainedTopicModel:
    """
    Load a model file written by save_model.

    Raises:
        PipelineIOError: If the file cannot be read or is not a model file
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise PipelineIOError(f"Cannot read model file {path}: {e}") from e
    except ValueError as e:
        raise PipelineIOError(f"Model file {path} is not valid JSON: {e}") from e

    try:
        model = model_from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise PipelineIOError(f"Malformed model file {path}: {e}") from e

    logger.debug(f"Loaded model from {path}")
    return model
