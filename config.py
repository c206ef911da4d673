# -*- coding: utf-8 -*-
import os

from png_chunks import MAX_CHUNK_LENGTH

APP_NAME = "PNGSECRET"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Hide, read and remove messages in PNG chunks"

# Logging
LOGGING_SETTINGS = {
    "level": os.environ.get("PNGSECRET_LOG_LEVEL", "INFO"),  # DEBUG/INFO/WARNING/ERROR
    "log_dir": "logs",
    "log_file": "pngsecret.log",
    "max_bytes": 2 * 1024 * 1024,
    "backup_count": 3,
}

# Chunk defaults
CHUNK_SETTINGS = {
    "default_chunk_type": "ruSt",  # ancillary, private, safe to copy
    "max_length": MAX_CHUNK_LENGTH,  # largest message the encode command accepts
}
