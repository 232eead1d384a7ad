# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Loading ``.env`` files into the process environment.

Variables that are already set are never overridden, so when several files
define the same variable the first one loaded wins.
"""

import errno
import logging
import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class LoadConfig:
    """Options for loading env files.

    Attributes:
        ignore_missing_file: Skip files that do not exist instead of failing
    """
    ignore_missing_file: bool = True

    def with_ignore_missing_file(self, ignore: bool) -> "LoadConfig":
        return replace(self, ignore_missing_file=ignore)

    def load(self, *filenames: PathLike) -> None:
        """Load env files into ``os.environ``.

        Args:
            *filenames: Files to load in order (defaults to ".env")

        Raises:
            FileNotFoundError: If a file is missing and ``ignore_missing_file`` is false
        """
        for filename in filenames or (DEFAULT_ENV_FILE,):
            path = Path(filename)
            if not path.is_file():
                if self.ignore_missing_file:
                    logger.debug("Env file not found, skipping: %s", path)
                    continue
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))

            load_dotenv(path, override=False)
            logger.debug("Loaded env file: %s", path)

    def must_load(self, *filenames: PathLike) -> None:
        """Like ``load``, but exits the process on failure."""
        try:
            self.load(*filenames)
        except Exception as exc:
            logger.error("Failed to load env files: %s", exc, exc_info=True)
            sys.exit(1)


DEFAULT_LOAD_CONFIG = LoadConfig()


def load(*filenames: PathLike) -> None:
    DEFAULT_LOAD_CONFIG.load(*filenames)


def must_load(*filenames: PathLike) -> None:
    DEFAULT_LOAD_CONFIG.must_load(*filenames)
