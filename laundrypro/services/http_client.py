"""HTTP gateway for the LaundryPro REST API."""
import asyncio
import json
import logging
import time
import uuid
from typing import Any, Dict, Mapping, Optional

import aiohttp

from laundrypro.config.settings import Settings, get_settings
from laundrypro.core.exceptions import ApiError, ServerError, TransportError
from laundrypro.schemas.common import ApiEnvelope
from laundrypro.schemas.service import FileUpload

logger = logging.getLogger(__name__)

SESSION_EXPIRED_STATUS = 410
REFRESH_PATH = "/users/refresh-token"


class ApiClient:
    """
    Single shared client for every call to the LaundryPro API.

    Every request carries the session cookies kept in the client's cookie jar.
    When a response reports an expired session (410), the client refreshes the
    session once and replays the original request exactly once. The retry flag
    belongs to the request, so concurrent requests refresh independently.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.session: Optional[aiohttp.ClientSession] = None
        self._cookie_jar: Optional[aiohttp.CookieJar] = None

        if not self.base_url:
            raise ValueError("API base URL must be provided")

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session is created."""
        if self.session is None or self.session.closed:
            if self._cookie_jar is None:
                # unsafe=True keeps cookies issued by IP-addressed hosts (local APIs)
                self._cookie_jar = aiohttp.CookieJar(unsafe=True)
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                cookie_jar=self._cookie_jar,
                headers={"Accept": "application/json"},
            )
        return self.session

    async def close(self):
        """Close the aiohttp session."""
        if self.session and not self.session.closed:
            await self.session.close()

    @property
    def cookies(self) -> Dict[str, str]:
        """Current session cookies by name."""
        if self._cookie_jar is None:
            return {}
        return {cookie.key: cookie.value for cookie in self._cookie_jar}

    def clear_cookies(self):
        if self._cookie_jar is not None:
            self._cookie_jar.clear()

    # Public verbs

    async def get(self, path: str, params: Optional[Mapping[str, str]] = None) -> ApiEnvelope:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        form: Optional[Dict[str, Any]] = None,
    ) -> ApiEnvelope:
        return await self.request("POST", path, data=data, form=form)

    async def put(
        self,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        form: Optional[Dict[str, Any]] = None,
    ) -> ApiEnvelope:
        return await self.request("PUT", path, data=data, form=form)

    async def patch(self, path: str, data: Optional[Dict[str, Any]] = None) -> ApiEnvelope:
        return await self.request("PATCH", path, data=data)

    async def delete(self, path: str) -> ApiEnvelope:
        return await self.request("DELETE", path)

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Mapping[str, str]] = None,
        form: Optional[Dict[str, Any]] = None,
    ) -> ApiEnvelope:
        """
        Send a request, transparently recovering one expired session.

        Raises:
            TransportError: timeout or connectivity failure
            ApiError: error status (subclass chosen by status code)
        """
        request_id = uuid.uuid4().hex[:8]
        retried = False

        while True:
            try:
                status, payload = await self._send(method, path, request_id, data, params, form)
            except ApiError as error:
                if (
                    error.status_code != SESSION_EXPIRED_STATUS
                    or retried
                    or path == REFRESH_PATH
                ):
                    raise
                retried = True
                logger.info(
                    f"Session expired on {method} {path}, refreshing",
                    extra={"request_id": request_id},
                )
                try:
                    await self.refresh_session()
                except Exception:
                    logger.warning(
                        f"Session refresh failed for {method} {path}",
                        extra={"request_id": request_id},
                    )
                    raise
                continue

            return self._to_envelope(status, payload, method, path)

    async def refresh_session(self) -> ApiEnvelope:
        """POST the refresh endpoint once, without the expiry interceptor."""
        status, payload = await self._send("POST", REFRESH_PATH, uuid.uuid4().hex[:8], None, None, None)
        return self._to_envelope(status, payload, "POST", REFRESH_PATH)

    async def _send(
        self,
        method: str,
        path: str,
        request_id: str,
        data: Optional[Dict[str, Any]],
        params: Optional[Mapping[str, str]],
        form: Optional[Dict[str, Any]],
    ):
        """Make one HTTP round trip; return (status, parsed body)."""
        session = await self._ensure_session()
        url = f"{self.base_url}/{path.lstrip('/')}"

        kwargs: Dict[str, Any] = {"params": params}
        if form is not None:
            # FormData is single-use, so it is rebuilt for every attempt
            kwargs["data"] = self._build_form(form)
        elif data is not None:
            kwargs["json"] = data

        started = time.monotonic()
        try:
            async with session.request(method, url, **kwargs) as response:
                response_text = await response.text()
                status = response.status
        except asyncio.TimeoutError:
            logger.error(f"API timeout {method} {url}", extra={"request_id": request_id})
            raise TransportError(f"Request timed out after {self.timeout:g}s")
        except aiohttp.ClientError as e:
            logger.error(f"API client error {method} {url}: {e}", extra={"request_id": request_id})
            raise TransportError(f"Network error: {str(e)}")

        duration = round((time.monotonic() - started) * 1000, 1)
        logger.info(
            f"API {method} {url} - Status: {status}",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "status": status,
                "duration": duration,
            },
        )

        payload = self._parse_body(response_text)

        if status >= 400:
            if status >= 500:
                logger.error(f"API server error: {status} - {response_text[:500]}")
            raise ApiError.from_response(status, payload if isinstance(payload, dict) else None)

        return status, payload

    @staticmethod
    def _parse_body(text: str) -> Any:
        if not text:
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return None

    @staticmethod
    def _to_envelope(status: int, payload: Any, method: str, path: str) -> ApiEnvelope:
        if not isinstance(payload, dict):
            logger.error(f"Malformed response for {method} {path} (status {status})")
            raise ServerError("Malformed response from server", status_code=status)
        return ApiEnvelope.from_dict(payload)

    @staticmethod
    def _build_form(fields: Dict[str, Any]) -> aiohttp.FormData:
        """Render multipart fields; None values are skipped."""
        form = aiohttp.FormData(default_to_multipart=True)
        for key, value in fields.items():
            if value is None:
                continue
            if isinstance(value, FileUpload):
                form.add_field(
                    key,
                    value.content,
                    filename=value.filename,
                    content_type=value.content_type,
                )
            elif isinstance(value, bool):
                form.add_field(key, "true" if value else "false")
            else:
                form.add_field(key, str(value))
        return form
