"""
Outbound calls to the catalog API.

One ``CatalogApiClient`` is built by whoever composes the application and is
passed down explicitly. Tokens live in an injected ``TokenStoragePort``:

- ``/api/user/*`` requests carry the end-user token,
- ``/api/admin/login`` carries none,
- every other request carries the admin token when one is stored.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from client.adapters.token_storage import MemoryTokenStorage
from client.ports.token_storage_port import ADMIN, USER, TokenStoragePort

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

# name -> (filename, content, content_type)
UploadFiles = Mapping[str, Tuple[str, bytes, str]]


class NetworkError(Exception):
    """A request failed, timed out, or came back with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500

    @property
    def is_unreachable(self) -> bool:
        """True when the server never answered (transport failure or timeout)."""
        return self.status_code is None


class CatalogApiClient:
    def __init__(
        self,
        base_url: str,
        storage: Optional[TokenStoragePort] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage = storage or MemoryTokenStorage()
        self.timeout = timeout
        self._http = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "CatalogApiClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ---------- Session ----------

    @property
    def is_admin(self) -> bool:
        return bool(self.storage.get(ADMIN))

    @property
    def is_user(self) -> bool:
        return bool(self.storage.get(USER))

    def logout(self, kind: str = USER) -> None:
        self.storage.clear(kind)

    def _token_for(self, path: str) -> Optional[str]:
        if path.startswith("/api/user/"):
            return self.storage.get(USER)
        if path == "/api/admin/login":
            return None
        return self.storage.get(ADMIN)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        token = self._token_for(path)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            r = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out after %.1fs", method, path, self.timeout)
            raise NetworkError("request timed out") from e
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(f"request failed: {e}") from e

        if r.is_error:
            detail: Any = None
            try:
                body = r.json()
                detail = body.get("detail") if isinstance(body, dict) else body
            except ValueError:
                detail = r.text or None
            logger.info("%s %s -> %s %s", method, path, r.status_code, detail)
            raise NetworkError(str(detail or f"HTTP {r.status_code}"), status_code=r.status_code, detail=detail)

        if not r.content:
            return None
        return r.json()

    # ---------- Documentaries ----------

    async def get_documentaries(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"category": category} if category else None
        return await self._request("GET", "/api/documentaries", params=params)

    async def get_documentary(self, documentary_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/api/documentaries/{documentary_id}")

    async def create_documentary(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/api/documentaries", json=payload)

    async def upload_documentary(self, fields: Dict[str, Any], files: UploadFiles) -> Dict[str, Any]:
        data = {k: str(v) for k, v in fields.items() if v is not None}
        return await self._request("POST", "/api/documentaries/upload", data=data, files=dict(files))

    async def delete_documentary(self, documentary_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/documentaries/{documentary_id}")

    async def track_download(self, documentary_id: int) -> Dict[str, Any]:
        return await self._request("POST", f"/api/documentaries/{documentary_id}/download")

    # ---------- Comments ----------

    async def get_comments(
        self, status: Optional[str] = None, documentary_id: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {}
        if status:
            params["status"] = status
        if documentary_id is not None:
            params["documentary_id"] = documentary_id
        return await self._request("GET", "/api/comments", params=params or None)

    async def add_comment(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/api/comments", json=payload)

    # ---------- Auth ----------

    async def admin_login(self, username: str, password: str) -> Dict[str, Any]:
        data = await self._request("POST", "/api/admin/login", json={"username": username, "password": password})
        self.storage.set(ADMIN, data["token"])
        return data

    async def user_login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self._request("POST", "/api/user/login", json={"email": email, "password": password})
        self.storage.set(USER, data["token"])
        return data

    async def user_register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        data = await self._request(
            "POST", "/api/user/register", json={"name": name, "email": email, "password": password}
        )
        self.storage.set(USER, data["token"])
        return data

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/user/me")

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    # ---------- Lenient list helpers ----------

    async def list_documentaries_or_empty(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        try:
            return await self.get_documentaries(category)
        except NetworkError:
            return []

    async def list_comments_or_empty(self, documentary_id: Optional[int] = None) -> List[Dict[str, Any]]:
        try:
            return await self.get_comments(documentary_id=documentary_id)
        except NetworkError:
            return []
