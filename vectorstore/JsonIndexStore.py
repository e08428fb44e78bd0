# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: JsonIndexStore
# -----------------------------------------------------------------------------
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from document.BugreportIndex import BugreportIndex
from utility.errors import IndexCorrupt
from utility.logging_utils import get_class_logger

INDEX_SUFFIX = "-index.json"
DEFAULT_SOURCE_NAME = "bugreport"

_ARCHIVE_SUFFIX_RE = re.compile(r"(\.(zip|txt))+$", re.IGNORECASE)
_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_source_id(source_id: str) -> str:
    """
    File-system safe stem for an index file:
    base name only, .zip/.txt removed, anything outside [A-Za-z0-9._-] -> "_".
    """
    base = re.split(r"[\\/]", source_id or "")[-1].strip()
    base = _ARCHIVE_SUFFIX_RE.sub("", base)
    base = _UNSAFE_CHARS_RE.sub("_", base)
    if not base:
        return DEFAULT_SOURCE_NAME
    return base


class JsonIndexStore:
    """
    One JSON file per build:  <sanitizedSourceId>-<YYYYMMDD-HHmmss>-index.json

    Load never raises for a bad file: it logs IndexCorrupt and returns None so the
    caller can decide to rebuild. Single writer assumed for load_latest.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = datetime.now,
        logger: logging.Logger | None = None,
    ):
        self.clock = clock
        self.logger = logger or get_class_logger(self.__class__)

    def file_name_for(self, index: BugreportIndex) -> str:
        timestamp = self.clock().strftime("%Y%m%d-%H%M%S")
        return f"{sanitize_source_id(index.source_id)}-{timestamp}{INDEX_SUFFIX}"

    def save(self, index: BugreportIndex, directory: Path | str) -> Path:
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)

        target = target_dir / self.file_name_for(index)
        payload = json.dumps(index.to_dict(), ensure_ascii=False, separators=(",", ":"))
        target.write_text(payload, encoding="utf-8")

        self.logger.info(
            "Saved index to %s, chunks=%d, embeddings=%d, model=%s",
            target,
            len(index.chunks),
            len(index.embeddings),
            index.model,
        )
        return target

    def _read(self, path: Path) -> BugreportIndex:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return BugreportIndex.from_dict(data)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise IndexCorrupt(f"{path}: {type(e).__name__}: {e}") from e

    def load(self, path: Path | str) -> Optional[BugreportIndex]:
        ipath = Path(path)
        try:
            index = self._read(ipath)
        except IndexCorrupt as e:
            self.logger.warning("Failed to load index from %s: %s", ipath, e)
            return None

        self.logger.info(
            "Loaded index %s (source=%r chunks=%d embeddings=%d)",
            ipath.name,
            index.source_id,
            len(index.chunks),
            len(index.embeddings),
        )
        return index

    def list_indexes(self, directory: Path | str) -> List[Path]:
        """Index files in directory, newest modification time first."""
        d = Path(directory)
        if not d.is_dir():
            return []

        files = [p for p in d.iterdir() if p.is_file() and p.name.endswith(INDEX_SUFFIX)]
        if not files:
            files = [p for p in d.iterdir() if p.is_file() and p.suffix.lower() == ".json"]

        return sorted(files, key=lambda p: p.stat().st_mtime, reverse=True)

    def load_latest(self, directory: Path | str) -> Optional[BugreportIndex]:
        files = self.list_indexes(directory)
        if not files:
            self.logger.info("No index files found in %s", directory)
            return None
        return self.load(files[0])
