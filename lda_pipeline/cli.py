#!/usr/bin/env python3
"""
Train an LDA topic model over a directory of plain-text files.

The run settings come from the bundled resources/default.yaml: language
"en", 10 topics, 100 iterations, model written to target/model.mallet.

Usage:
    # Bundled sample texts
    lda-estimate

    # Custom corpus (directory or glob pattern)
    lda-estimate "corpus/*.txt"
    python -m lda_pipeline.cli corpus/
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from lda_pipeline.config import DEFAULT_SOURCE_LOCATION, load_default_config
from lda_pipeline.exceptions import PipelineError
from lda_pipeline.pipeline import EstimationPipeline

logger = logging.getLogger("lda-pipeline")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (one optional positional argument)."""
    parser = argparse.ArgumentParser(
        prog="lda-estimate",
        description="Estimate an LDA topic model from plain-text files.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help=f"Directory or glob pattern of input texts (default: {DEFAULT_SOURCE_LOCATION})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    start_time = time.time()
    try:
        config = load_default_config()
        if args.source:
            config = config.with_overrides(source_location=args.source)

        EstimationPipeline(config).run()
    except PipelineError as e:
        logger.error(f"Pipeline failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Pipeline failed with unexpected error: {e}")
        return 1

    elapsed = time.time() - start_time
    logger.info(f"Pipeline completed in {elapsed:.1f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
