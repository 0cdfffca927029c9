import json
import logging
import os
from typing import Dict, Optional

from client.ports.token_storage_port import TokenStoragePort

logger = logging.getLogger(__name__)


class MemoryTokenStorage(TokenStoragePort):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._tokens: Dict[str, str] = dict(initial or {})

    def get(self, kind: str) -> Optional[str]:
        return self._tokens.get(kind)

    def set(self, kind: str, token: str) -> None:
        self._tokens[kind] = token

    def clear(self, kind: str) -> None:
        self._tokens.pop(kind, None)


class JsonFileTokenStorage(TokenStoragePort):
    """
    Persists tokens in a small JSON file so a session survives restarts
    (the desktop counterpart of browser local storage).
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("Token file %s is unreadable; starting without stored tokens", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp = f"{self.path}.tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp, self.path)

    def get(self, kind: str) -> Optional[str]:
        return self._read().get(kind)

    def set(self, kind: str, token: str) -> None:
        data = self._read()
        data[kind] = token
        self._write(data)

    def clear(self, kind: str) -> None:
        data = self._read()
        if data.pop(kind, None) is not None:
            self._write(data)
