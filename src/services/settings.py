"""
Settings and configuration for the translator services.

Every value can be overridden through an environment variable.
"""

import logging
import os
from pathlib import Path

# Data directory paths
PROJECT_DIR = Path(__file__).resolve().parent.parent.parent
DATA_DIR = Path(os.environ.get("JETRANSLATOR_DATA_DIR", PROJECT_DIR / "data"))

# Explicit JMdict file (jmdict-simplified JSON, optionally gzipped)
_jmdict_env = os.environ.get("JMDICT_PATH")
JMDICT_PATH = Path(_jmdict_env) if _jmdict_env else None

# Fetch the latest jmdict-simplified release when no local file is found
JMDICT_AUTO_DOWNLOAD = os.environ.get("JMDICT_AUTO_DOWNLOAD", "1").lower() in ("1", "true", "yes")

# SudachiPy dictionary flavour (core, small, full) and split mode (A, B, C)
SUDACHI_DICT = os.environ.get("SUDACHI_DICT", "core")
SUDACHI_SPLIT_MODE = os.environ.get("SUDACHI_SPLIT_MODE", "A").upper()

# Maximum nesting of phrase decomposition
MAX_DECOMPOSITION_DEPTH = int(os.environ.get("MAX_DECOMPOSITION_DEPTH", "16"))

LOG_LEVEL = os.environ.get("JETRANSLATOR_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Set up root logging for the CLI and the API process."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
