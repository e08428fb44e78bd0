# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: BugreportIndexStore
# -----------------------------------------------------------------------------

from pathlib import Path
from typing import List, Optional, Protocol, runtime_checkable

from document.BugreportIndex import BugreportIndex


@runtime_checkable
class BugreportIndexStore(Protocol):
    def save(self, index: BugreportIndex, directory: Path | str) -> Path:
        ...

    def load(self, path: Path | str) -> Optional[BugreportIndex]:
        ...

    def load_latest(self, directory: Path | str) -> Optional[BugreportIndex]:
        ...

    def list_indexes(self, directory: Path | str) -> List[Path]:
        ...
