"""
Logging setup for scripts driving the extractor.
"""

import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(verbose: bool = False, stream: Optional[object] = None) -> logging.Logger:
    """Configure the root logger once; DEBUG when verbose, INFO otherwise."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(stream)],
        force=True,
    )
    return logging.getLogger("haml_localizer")
