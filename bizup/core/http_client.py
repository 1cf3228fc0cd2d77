import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import httpx

from bizup.core.config import API_BASE_URL, REQUEST_TIMEOUT
from bizup.core.exceptions import ApiError, ApiTransportError

log = logging.getLogger("bizup.http")

# A path on disk, or an already-read (filename, content) pair
FileInput = Union[str, Path, Tuple[str, bytes]]


def _error_message(response: httpx.Response) -> str:
    """
    Picks the most useful message out of an error response.
    Order: FastAPI style `detail`, then an `error.message` envelope, then the status text.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str) and detail:
            return detail
        # 422 responses carry a list of validation problems
        if isinstance(detail, list) and detail and isinstance(detail[0], dict) and detail[0].get("msg"):
            return str(detail[0]["msg"])
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])

    return response.reason_phrase or f"HTTP error! status: {response.status_code}"


def _file_part(file: FileInput) -> Tuple[str, bytes]:
    if isinstance(file, tuple):
        return file
    path = Path(file)
    return path.name, path.read_bytes()


class ApiClient:
    """
    Thin async wrapper over the upstream REST API.
    One attempt per call, no retries. Construct it explicitly and pass it to the resource APIs;
    tests inject an httpx transport instead of patching anything global.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, endpoint, **kwargs)
        except httpx.HTTPError as e:
            log.error(f"API Error [{endpoint}]: {e!r}")
            raise ApiTransportError(str(e) or e.__class__.__name__, endpoint, e) from e

        if not response.is_success:
            error = ApiError(_error_message(response), response.status_code, endpoint)
            log.error(f"API Error [{endpoint}]: {response.status_code} {error.message}")
            raise error

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            log.error(f"API Error [{endpoint}]: invalid JSON body: {e}")
            raise ApiError("Invalid JSON in response", response.status_code, endpoint) from e

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        # Only defined values make it into the query string
        query = {key: value for key, value in (params or {}).items() if value is not None}
        return await self._request("GET", endpoint, params=query)

    async def post(self, endpoint: str, body: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        query = {key: value for key, value in (params or {}).items() if value is not None}
        return await self._request("POST", endpoint, json=body, params=query)

    async def put(self, endpoint: str, body: Any = None) -> Any:
        return await self._request("PUT", endpoint, json=body)

    async def delete(self, endpoint: str) -> Any:
        return await self._request("DELETE", endpoint)

    async def post_file(self, endpoint: str, file: FileInput) -> Any:
        """Uploads a single file as multipart form data under the field name 'file'."""
        return await self._request("POST", endpoint, files={"file": _file_part(file)})
