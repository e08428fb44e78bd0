# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-28
# Description: BugreportTextLoader
# -----------------------------------------------------------------------------
import logging
import time
import zipfile
from pathlib import Path
from typing import Optional

from utility.logging_utils import get_class_logger


class BugreportTextLoader:
    """
    Reads bugreport text from disk.

    Provides:
      - load_text(): plain .txt files, or the largest .txt entry of a bugreport .zip
      - trim(): cap text length for single-shot summaries
    """

    def __init__(self, *, logger: logging.Logger | None = None):
        self.logger = logger or get_class_logger(self.__class__)

    def _largest_txt_in_zip(self, path: Path) -> str:
        with zipfile.ZipFile(path) as zf:
            entries = [i for i in zf.infolist() if not i.is_dir() and i.filename.lower().endswith(".txt")]
            if not entries:
                raise ValueError(f"No .txt entry found in bugreport archive {path.name}")

            largest = max(entries, key=lambda i: i.file_size)
            self.logger.info(
                "Using '%s' (%d bytes) from archive '%s' (%d txt entries)",
                largest.filename,
                largest.file_size,
                path.name,
                len(entries),
            )
            return zf.read(largest).decode("utf-8", errors="replace")

    def load_text(self, path: Path | str) -> str:
        p = Path(path)
        if not p.is_file():
            raise FileNotFoundError(f"Bugreport not found: {p}")

        start_time = time.time()
        if zipfile.is_zipfile(p):
            text = self._largest_txt_in_zip(p)
        else:
            text = p.read_text(encoding="utf-8", errors="replace")

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info("Loaded bugreport '%s': %d chars (%.1f ms)", p.name, len(text), elapsed)
        return text

    @staticmethod
    def trim(text: str, max_chars: Optional[int]) -> str:
        if max_chars is None or len(text) <= max_chars:
            return text
        return text[:max_chars]
