"""Per-user progress persistence (JSON + fcntl.flock + atomic write)."""

import fcntl
import json
import os
import re
import tempfile
from pathlib import Path

from ..models.progress import ProgressRecord


class ProgressStore:
    """One JSON file per user under ``directory``."""

    def __init__(self, directory: Path):
        self.directory = directory
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, user_id: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", user_id)
        return self.directory / f"{safe}.json"

    def load(self, user_id: str) -> ProgressRecord:
        path = self.path_for(user_id)
        if not path.exists():
            return ProgressRecord()
        with open(path) as f:
            fcntl.flock(f, fcntl.LOCK_SH)
            data = json.load(f)
            fcntl.flock(f, fcntl.LOCK_UN)
        return ProgressRecord.model_validate(data)

    def save(self, user_id: str, record: ProgressRecord) -> None:
        path = self.path_for(user_id)
        with tempfile.NamedTemporaryFile("w", dir=path.parent, delete=False, suffix=".json") as tmp:
            json.dump(record.to_client(), tmp)
        os.replace(tmp.name, path)
