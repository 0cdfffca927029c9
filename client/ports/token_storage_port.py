from typing import Optional, Protocol

ADMIN = "admin"
USER = "user"


class TokenStoragePort(Protocol):
    def get(self, kind: str) -> Optional[str]: ...

    def set(self, kind: str, token: str) -> None: ...

    def clear(self, kind: str) -> None: ...
