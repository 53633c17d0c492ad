"""In-memory credential table shared by every request handler."""

import asyncio
from typing import Dict, Optional


class CredentialStore:
    """Maps account email to password hash.

    Callers hold ``lock`` around any check-then-act sequence, e.g. the
    duplicate check and insert during registration. The map methods
    themselves do not lock so they can be composed under one acquisition.
    """

    def __init__(self) -> None:
        self._hashes: Dict[str, str] = {}
        self.lock = asyncio.Lock()

    def get(self, email: str) -> Optional[str]:
        return self._hashes.get(email)

    def contains(self, email: str) -> bool:
        return email in self._hashes

    def insert(self, email: str, password_hash: str) -> None:
        # Records are write-once.
        if email in self._hashes:
            raise KeyError(email)
        self._hashes[email] = password_hash

    def __len__(self) -> int:
        return len(self._hashes)
