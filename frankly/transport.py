"""Generic request dispatcher over requests."""

import json
import logging
from typing import Any, Optional, Sequence, Union

import requests

from .auth import (
    AuthState,
    Credential,
    base_headers,
    build_headers,
    build_params,
    require_credential,
)
from .config import make_base_address
from .exceptions import ContentLengthMismatch, InvalidResponse, RequestError, TransportError
from .version import USER_AGENT

logger = logging.getLogger(__name__)

RequestPath = Union[str, Sequence[Any]]


def build_url(base_url: str, path: RequestPath) -> str:
    """Join path segments with '/' and append them to the base origin."""
    if isinstance(path, str):
        suffix = path.lstrip("/")
    else:
        suffix = "/".join(str(segment) for segment in path)
    return base_url + suffix


class Dispatcher:
    """
    Performs one HTTP round trip per call against the Frankly API.

    Features:
    - Credential-driven headers and ``token`` query parameter
    - JSON request/response bodies, raw bytes for file uploads
    - Non-2xx statuses surfaced verbatim as RequestError
    - Dependency-injected requests.Session

    No retries are attempted; callers wanting retry semantics wrap calls
    themselves.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: str = USER_AGENT,
    ):
        self.base_url = make_base_address(base_url)
        self.timeout = timeout
        self.user_agent = user_agent
        self._http = http or requests.Session()
        self._owns_http = http is None

    def close(self) -> None:
        """Close the HTTP session if owned."""
        if self._owns_http:
            self._http.close()

    def request(
        self,
        state: AuthState,
        method: str,
        path: RequestPath,
        params: Optional[dict[str, Any]] = None,
        payload: Any = None,
    ) -> Any:
        """
        Send an authenticated JSON request.

        Args:
            state: Current auth state; must be Open
            method: HTTP verb
            path: Path segments (or a preformatted path string)
            params: Query parameters
            payload: JSON-serializable body, None for no body

        Returns:
            Parsed JSON body, or None for an empty body

        Raises:
            NotAuthenticated: If state is Closed
            RequestError: On a non-2xx status
            TransportError: On network failure
        """
        credential = require_credential(state)
        headers = build_headers(credential, self.user_agent)
        query = build_params(credential, params)
        data = json.dumps(payload) if payload is not None else None

        response = self._send(method, build_url(self.base_url, path), headers, query, data)
        return self._parse(response)

    def handshake(
        self,
        method: str,
        path: RequestPath,
        credential: Optional[Credential] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> requests.Response:
        """
        Send an authentication request, which needs no session.

        Returns the raw response so the caller can pick up cookies as well
        as the body.
        """
        if credential is None:
            headers = base_headers(self.user_agent)
        else:
            headers = build_headers(credential, self.user_agent)
        return self._send(method, build_url(self.base_url, path), headers, params or {}, None)

    def upload(
        self,
        state: AuthState,
        url: str,
        data: bytes,
        content_length: int,
        content_type: str,
        content_encoding: Optional[str] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        PUT raw bytes to a pre-issued absolute URL.

        The declared content length must equal len(data); requests always
        transmits the real length, so a mismatch is rejected here.
        """
        if content_length != len(data):
            raise ContentLengthMismatch(content_length, len(data))

        credential = require_credential(state)
        headers = build_headers(credential, self.user_agent)
        headers["content-length"] = str(content_length)
        headers["content-type"] = content_type
        if content_encoding:
            headers["content-encoding"] = content_encoding
        query = build_params(credential, params)

        response = self._send("PUT", url, headers, query, data)
        return self._parse(response)

    def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, Any],
        data: Any,
    ) -> requests.Response:
        method = method.upper()
        logger.debug(f"{method} {url}")

        try:
            response = self._http.request(
                method,
                url,
                headers=headers,
                params=params,
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}", cause=e) from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"{method} {url} -> HTTP {response.status_code}")
            raise RequestError(response.status_code, response.text, method, url)

        return response

    @staticmethod
    def _parse(response: requests.Response) -> Any:
        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponse(f"Response body is not JSON: {e}", response.text) from e
