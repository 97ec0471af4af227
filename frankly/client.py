"""
Frankly Client - Main entry point for the SDK.

Provides a high-level interface to the Frankly REST API.
"""

import logging
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

import requests

from .auth import CLOSED, AuthBy, AuthState, Credential, Open
from .config import FranklyConfig
from .exceptions import InvalidResponse
from .files import detect_content_type, get_file_size, read_and_close
from .routes import ROUTES_BY_NAME, bind_routes
from .session import Session, fetch_nonce, open_session
from .transport import Dispatcher, RequestPath

logger = logging.getLogger(__name__)


def _content_url(created: Any) -> str:
    """Upload URL of a file returned by create_file."""
    url = created.get("url") if isinstance(created, dict) else None
    if not url:
        raise InvalidResponse("create_file returned no url", str(created))
    return url


@bind_routes
class FranklyClient:
    """
    Main Frankly SDK client.

    Instances hold the authentication state required by the API's
    security policies and expose one method per API resource route
    (see frankly.routes) on top of the generic create/read/update/delete.

    Usage:
        client = FranklyClient()
        client.open(KeySecret(app_key, app_secret))

        room = client.create_room({"title": "Hi", "status": "active"})
        client.create_room_message(room["id"], {
            "contents": [{"type": "text/plain", "value": "Hello World!"}],
        })

        client.close()

    A single instance is not safe for concurrent use; serialize calls or
    create one client per thread.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        config: Optional[FranklyConfig] = None,
        http: Optional[requests.Session] = None,
    ):
        if config is None:
            config = FranklyConfig(base_url=base_url) if base_url is not None else FranklyConfig()
        self.config = config

        self._dispatcher = Dispatcher(
            config.base_address,
            http=http,
            timeout=config.timeout,
            user_agent=config.user_agent,
        )
        self._state: AuthState = CLOSED

    @property
    def base_url(self) -> str:
        """Origin every request path is appended to."""
        return self._dispatcher.base_url

    @property
    def state(self) -> AuthState:
        """Current authentication state (Closed or Open)."""
        return self._state

    @property
    def is_open(self) -> bool:
        return isinstance(self._state, Open)

    @property
    def session(self) -> Optional[Session]:
        """Session returned by the last successful open(), if any."""
        return self._state.session if isinstance(self._state, Open) else None

    # Authentication

    def open(self, auth: AuthBy) -> Session:
        """
        Authenticate and store the session credential.

        Args:
            auth: KeySecret(app_key, app_secret) to sign an admin identity
                token locally, or IdentityToken(token) for a token signed
                elsewhere

        Returns:
            The session granted by the server

        Raises:
            InvalidCredential: If the key/secret or token is empty
            RequestError: If the server rejects the handshake
        """
        if self.is_open:
            logger.debug("Replacing existing session")

        self._state = open_session(self._dispatcher, auth)
        return self._state.session

    def nonce(self, credential: Optional[Credential] = None) -> str:
        """Fetch a one-time server nonce, e.g. to sign an identity token elsewhere."""
        return fetch_nonce(self._dispatcher, credential)

    def close(self) -> None:
        """Forget the session credential; later calls raise NotAuthenticated."""
        self._state = CLOSED
        logger.info("Closed session")

    # Generic operations

    def request(
        self,
        method: str,
        path: RequestPath,
        params: Optional[dict[str, Any]] = None,
        payload: Any = None,
    ) -> Any:
        """
        Send a request to any resource path.

        Returns:
            Parsed JSON body, or None when the response is empty
        """
        return self._dispatcher.request(self._state, method, path, params, payload)

    def create(self, path: RequestPath, params: Optional[dict] = None, payload: Any = None) -> Any:
        """Create a resource (POST)."""
        return self.request("POST", path, params, payload)

    def read(self, path: RequestPath, params: Optional[dict] = None, payload: Any = None) -> Any:
        """Read a resource (GET)."""
        return self.request("GET", path, params, payload)

    def update(self, path: RequestPath, params: Optional[dict] = None, payload: Any = None) -> Any:
        """Update a resource (PUT)."""
        return self.request("PUT", path, params, payload)

    def delete(self, path: RequestPath, params: Optional[dict] = None, payload: Any = None) -> Any:
        """Delete a resource (DELETE)."""
        return self.request("DELETE", path, params, payload)

    def upload(
        self,
        url: str,
        params: Optional[dict],
        payload: bytes,
        content_length: int,
        content_type: str,
        content_encoding: Optional[str] = None,
    ) -> Any:
        """PUT raw bytes to a pre-issued URL."""
        return self._dispatcher.upload(
            self._state,
            url,
            payload,
            content_length,
            content_type,
            content_encoding,
            params,
        )

    # Messages

    def create_room_message(self, room_id: Any, payload: dict[str, Any]) -> Any:
        """
        Publish a message to a room.

        Passing ``{"announcement": announcement_id}`` publishes an existing
        announcement instead; the id travels as a query parameter.
        """
        body = dict(payload)
        params = {}
        if "announcement" in body:
            params["announcement"] = body.pop("announcement")

        path = ROUTES_BY_NAME["create_room_message"].path(room_id)
        return self.request("POST", path, params=params, payload=body)

    # Files

    def update_file(
        self,
        destination_url: str,
        file_obj: BinaryIO,
        file_size: int,
        mime_type: str,
        encoding: Optional[str] = None,
    ) -> Any:
        """
        Set the content of a file created with create_file.

        The stream is read fully and closed before the upload is sent.
        """
        data = read_and_close(file_obj)
        return self.upload(destination_url, None, data, file_size, mime_type, encoding)

    def update_file_from_path(self, destination_url: str, file_path: Union[str, Path]) -> Any:
        """Set the content of a file from a local path."""
        mime_type, encoding = detect_content_type(file_path)
        size = get_file_size(file_path)
        return self.update_file(destination_url, open(file_path, "rb"), size, mime_type, encoding)

    def upload_file(
        self,
        file_obj: BinaryIO,
        file_size: int,
        mime_type: str,
        encoding: Optional[str] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Create a file object and set its content in one call.

        Args:
            file_obj: Binary stream with the content (closed afterwards)
            file_size: Content length in bytes
            mime_type: Content type of the data
            encoding: Content encoding ('gzip' for example)
            params: File properties, e.g. {"category": "useravatar", "type": "image"}

        Returns:
            The newly created file
        """
        with file_obj:
            created = self.create_file(params or {})
            self.update_file(_content_url(created), file_obj, file_size, mime_type, encoding)
        return created

    def upload_file_from_path(
        self,
        file_path: Union[str, Path],
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Create a file object with content read from a local path."""
        created = self.create_file(params or {})
        self.update_file_from_path(_content_url(created), file_path)
        return created

    def __enter__(self) -> "FranklyClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
        self._dispatcher.close()

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"FranklyClient({self.base_url}, {status})"
