"""Exiftool wrapper for reading file dates."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class MetadataSource(Protocol):
    """External capability returning a file's modification date string."""

    def file_modify_date(self, path: Path) -> str:
        """Return the date as text, or an empty string when unavailable."""


class ExiftoolRunner:
    """Wrapper for exiftool command execution."""

    DATE_FORMAT = "%Y_%m_%d_%H_%M_%S"

    def __init__(self, tag: str = "FileModifyDate", timeout: float | None = None) -> None:
        self.tag = tag
        self.timeout = timeout
        self._available: bool | None = None

    @property
    def available(self) -> bool:
        if self._available is None:
            self._available = shutil.which("exiftool") is not None
            if not self._available:
                logger.warning(
                    "exiftool not found; files without a date in their name fall back "
                    "to the epoch. Install exiftool: https://exiftool.org/install.html"
                )
        return self._available

    def file_modify_date(self, path: Path) -> str:
        if not self.available:
            return ""

        cmd = ["exiftool", "-s3", f"-{self.tag}", "-d", self.DATE_FORMAT, str(path)]

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("exiftool timed out after %ss on %s", self.timeout, path)
            return ""
        except OSError as e:
            logger.warning("exiftool failed on %s: %s", path, e)
            return ""

        if result.returncode != 0:
            logger.debug("exiftool exited %d on %s: %s", result.returncode, path, result.stderr)
            return ""

        return result.stdout.strip()
