"""Account persistence and login sessions."""

import fcntl
import json
import os
import secrets
import tempfile
from pathlib import Path

from ..models.account import Account

ACCOUNTS_FILENAME = "users.json"


class AccountStore:
    """Accounts keyed by email in a single JSON file.

    Writes take an exclusive lock on a sidecar lock file and replace the
    data file atomically.
    """

    def __init__(self, directory: Path):
        self.directory = directory
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path = directory / ACCOUNTS_FILENAME
        self.lock_path = directory / (ACCOUNTS_FILENAME + ".lock")

    def _read(self) -> dict[str, dict]:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text())

    def get(self, email: str) -> Account | None:
        data = self._read().get(email)
        return Account.model_validate(data) if data else None

    def get_by_id(self, user_id: str) -> Account | None:
        for data in self._read().values():
            if data.get("id") == user_id:
                return Account.model_validate(data)
        return None

    def add(self, account: Account) -> bool:
        """Store a new account. Returns False if the email is already taken."""
        with open(self.lock_path, "w") as lock_file:
            fcntl.flock(lock_file, fcntl.LOCK_EX)

            data = self._read()
            if account.email in data:
                return False
            data[account.email] = account.model_dump(mode="json")

            with tempfile.NamedTemporaryFile(
                "w", dir=self.directory, delete=False, suffix=".json"
            ) as tmp:
                json.dump(data, tmp, indent=2)
            os.replace(tmp.name, self.path)
        return True

    def __len__(self) -> int:
        return len(self._read())


class SessionRegistry:
    """In-memory session id to user id mapping, owned by one app instance."""

    def __init__(self) -> None:
        self._sessions: dict[str, str] = {}

    def open(self, user_id: str) -> str:
        session_id = secrets.token_urlsafe(24)
        self._sessions[session_id] = user_id
        return session_id

    def user_for(self, session_id: str | None) -> str | None:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def close(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
