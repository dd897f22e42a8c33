"""
JSON file store used to persist small documents such as the source list.
Every write replaces the whole file atomically.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Reads and writes one JSON document at a fixed path."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Any:
        """Load the document. Raises OSError or ValueError on failure."""
        with self.path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def write(self, data: Any) -> None:
        """Serialize ``data`` to a temp file and move it over the target."""
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent or Path(".")),
            prefix=f".{self.path.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

        logger.debug(f"Wrote JSON document to {self.path}")
