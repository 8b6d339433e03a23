"""Runtime configuration, read from the environment."""

from __future__ import annotations

import os

SOURCE_ENCODING = os.environ.get("FTLDOC_SOURCE_ENCODING", "UTF-8")
OUTPUT_ENCODING = os.environ.get("FTLDOC_OUTPUT_ENCODING", "UTF-8")
LOG_LEVEL = os.environ.get("FTLDOC_LOG_LEVEL", "WARNING").upper()
SORT_FILES = os.environ.get("FTLDOC_SORT_FILES", "").lower() in ("1", "true")

# First character of a comment body that marks it as a doc comment (<#--- ... -->)
DOC_MARKER = "-"

