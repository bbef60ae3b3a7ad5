"""
TextReader - Plain-text corpus reader.

Design:
    - Source location is a directory (every regular file directly inside)
      or a glob pattern ("**" matches recursively)
    - Files are enumerated in sorted path order so runs are reproducible
    - One Document per file, tagged with the configured language
    - Undecodable bytes are kept as surrogate escapes; the segmenter
      reports them against the offending document
"""

import glob
import logging
import os
from typing import List

from lda_pipeline.exceptions import ConfigError, PipelineIOError
from lda_pipeline.interfaces import DocumentSource
from lda_pipeline.models import Document

logger = logging.getLogger(__name__)


class TextReader(DocumentSource):
    """
    Read plain-text files into Documents.

    Args:
        source_location: Directory path or glob pattern
        language: Language code for every document
        encoding: File encoding (default: utf-8)
    """

    def __init__(self, source_location: str, language: str, encoding: str = "utf-8"):
        self.source_location = source_location
        self.language = language
        self.encoding = encoding

    def list_files(self) -> List[str]:
        """
        Resolve the source location to a sorted list of files.

        Raises:
            PipelineIOError: If the directory cannot be listed or nothing matches
        """
        location = os.path.expanduser(self.source_location)

        if os.path.isdir(location):
            try:
                names = os.listdir(location)
            except OSError as e:
                raise PipelineIOError(f"Cannot list source directory: {e}") from e
            # hidden files are skipped, as glob's "*" skips them
            candidates = [
                os.path.join(location, name) for name in names if not name.startswith(".")
            ]
        else:
            candidates = glob.glob(location, recursive=True)

        files = sorted(path for path in candidates if os.path.isfile(path))
        if not files:
            raise PipelineIOError(f"No files match source location: {self.source_location}")

        logger.debug(f"Discovered {len(files)} files in {self.source_location}")
        return files

    def read_documents(self) -> List[Document]:
        """
        Read every matched file.

        Returns:
            Documents in sorted path order

        Raises:
            PipelineIOError: If nothing matches or a file cannot be read
        """
        documents = []
        for path in self.list_files():
            try:
                with open(path, encoding=self.encoding, errors="surrogateescape") as f:
                    text = f.read()
            except LookupError as e:
                raise ConfigError(f"Unknown encoding {self.encoding!r}") from e
            except OSError as e:
                raise PipelineIOError(f"Cannot read file: {e}", document_id=path) from e

            documents.append(Document(document_id=path, text=text, language=self.language))
            logger.debug(f"Read {path} ({len(text)} characters)")

        logger.info(f"Read {len(documents)} documents from {self.source_location}")
        return documents
