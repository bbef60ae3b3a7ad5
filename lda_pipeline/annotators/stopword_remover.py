"""
StopWordRemover - Marks stop-word tokens as removed.

Design:
    - One stop-word set per language, loaded once and cached
    - Resource file: one word per line, "#" comments and blank lines ignored
    - Matching is on the lowercased surface form
    - Tokens are flagged, never deleted, so offsets stay stable and a
      second pass changes nothing
"""

import logging
from pathlib import Path
from typing import Dict, FrozenSet, Optional

from lda_pipeline.config import RESOURCES_DIR
from lda_pipeline.exceptions import ConfigError
from lda_pipeline.interfaces import Annotator
from lda_pipeline.models import Document

logger = logging.getLogger(__name__)


def stopword_resource_path(language: str, resource_dir=RESOURCES_DIR) -> Path:
    """Return the path of the bundled stop-word file for a language."""
    return Path(resource_dir) / f"stopwords_{language}.txt"


def load_stopwords(path) -> FrozenSet[str]:
    """
    Load a stop-word list.

    Args:
        path: Text file with one word per line

    Returns:
        Frozen set of lowercase words

    Raises:
        ConfigError: If the file cannot be read or decoded
    """
    try:
        with open(path, encoding="utf-8") as fh:
            words = frozenset(
                line.strip().lower()
                for line in fh
                if line.strip() and not line.lstrip().startswith("#")
            )
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot load stop-word list {path}: {e}") from e

    logger.info(f"Stop-word list loaded from {path} - size={len(words)}")
    return words


class StopWordRemover(Annotator):
    """
    Flag tokens whose lowercased form is a stop word.

    Args:
        stopword_location: Explicit stop-word file used for every language.
                           None means stopwords_<language>.txt from resource_dir.
        resource_dir: Directory holding the per-language resource files
    """

    name = "stopword_remover"

    def __init__(self, stopword_location: Optional[str] = None, resource_dir=RESOURCES_DIR):
        self.stopword_location = stopword_location
        self.resource_dir = resource_dir
        self._stopwords: Dict[str, FrozenSet[str]] = {}

    def get_stopwords(self, language: str) -> FrozenSet[str]:
        """
        Get the (cached) stop-word set for a language.

        Raises:
            ConfigError: If the resource cannot be located or read
        """
        if language not in self._stopwords:
            if self.stopword_location is not None:
                path = Path(self.stopword_location)
            else:
                path = stopword_resource_path(language, self.resource_dir)

            if not path.is_file():
                raise ConfigError(f"Stop-word resource not found for language {language!r}: {path}")

            self._stopwords[language] = load_stopwords(path)
        return self._stopwords[language]

    def process(self, document: Document) -> Document:
        """Mark stop-word tokens of a document as removed."""
        stopwords = self.get_stopwords(document.language)

        n_removed = 0
        for token in document.tokens:
            if token.removed:
                continue
            if document.surface_form(token).lower() in stopwords:
                token.removed = True
                n_removed += 1

        logger.debug(
            f"Filtered {document.document_id}: "
            f"{n_removed} of {len(document.tokens)} tokens marked as stop words"
        )
        return document
