"""
File-backed storage slot: the collection lives in one JSON file.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from booking_ledger.services.interfaces.storage import StorageAdapter


class FileStorage(StorageAdapter):
    """Local JSON file, the desktop equivalent of a browser localStorage key."""

    name = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file first so a crash never leaves half a slot
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
