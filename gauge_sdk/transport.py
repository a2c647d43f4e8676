"""
Transport for delivering measurements to the metrics service.

Two delivery modes are supported by ``Transport.post``:

- synchronous: an HTTPS request through ``requests`` that waits for the
  response and returns its decoded JSON body.
- asynchronous (fire-and-forget): the request is written to a fresh TLS
  socket which is closed right away. No response is read. ``True`` only
  means that bytes were handed to the socket; it says nothing about whether
  the service received or accepted them.

Every call opens and tears down its own connection.
"""
import logging
import socket
import ssl
from typing import Any, Dict, Iterable, Optional, Union

import requests
from requests.auth import HTTPBasicAuth

from . import config
from .config import Credentials, TransportConfig, default_config, default_credentials
from .encoding import build_query, normalize_tags
from .errors import TransportError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'
PAYLOAD_TYPES = ('json', 'form')


def serialize_request(request: requests.PreparedRequest) -> bytes:
    """
    Render a prepared request as raw HTTP/1.1 bytes.

    Args:
        request (requests.PreparedRequest): The request to render

    Returns:
        bytes: Request line, headers, blank line and body
    """
    lines = [f"{request.method} {request.path_url} HTTP/1.1"]
    lines.extend(f"{key}: {value}" for key, value in request.headers.items())
    head = "\r\n".join(lines) + "\r\n\r\n"

    body = request.body or b''
    if isinstance(body, str):
        body = body.encode('utf-8')
    return head.encode('latin-1') + body


class Transport:
    """Sends payloads to and queries the metrics service."""

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        credentials: Optional[Credentials] = None,
        ssl_context: Optional[ssl.SSLContext] = None
    ):
        """
        Initialize the transport.

        Args:
            config (TransportConfig, optional): Connection settings.
                Defaults to config.default_config().
            credentials (Credentials, optional): Basic-Auth credentials.
                Defaults to config.default_credentials().
            ssl_context (ssl.SSLContext, optional): Context for the raw TLS
                socket of the asynchronous mode.
        """
        self.config = config or default_config()
        self.credentials = credentials or default_credentials()
        self.ssl_context = ssl_context or ssl.create_default_context()

    def post(
        self,
        payload: Dict[str, Any],
        async_: Optional[bool] = None,
        type: str = 'json'
    ) -> Any:
        """
        Post a payload to the metrics endpoint.

        Args:
            payload (dict): Data to submit, e.g. ``{'gauges': [...]}``
            async_ (bool, optional): Fire-and-forget delivery. Defaults to
                the config's ``async_default``.
            type (str): Body encoding of the synchronous mode, ``json`` or
                ``form``. The asynchronous mode always sends a form body.

        Returns:
            The decoded response body in synchronous mode, a bool in
            asynchronous mode.

        Raises:
            ValueError: If ``type`` is not supported
            TransportError: If the synchronous request fails
        """
        if type not in PAYLOAD_TYPES:
            raise ValueError(f"Unsupported payload type: {type}")
        if async_ is None:
            async_ = self.config.async_default

        if async_:
            return self._async_post(config.METRICS_PATH, payload)

        if type == 'json':
            body = {'json': payload}
        else:
            body = {'data': build_query(payload), 'headers': {'Content-Type': FORM_CONTENT_TYPE}}
        return self._request('post', config.METRICS_PATH, **body)

    def get(
        self,
        name: Optional[str] = None,
        tags: Optional[Union[str, Iterable[str]]] = None
    ) -> Any:
        """
        List the metrics known to the service.

        Args:
            name (str, optional): Case-insensitive substring filter on names
            tags (str or iterable, optional): Tag filter; a single string
                counts as one tag

        Returns:
            The decoded response body, as returned by the service

        Raises:
            TransportError: If the request fails
        """
        query = build_query({'name': name or None, 'tags': normalize_tags(tags)})
        return self._request('get', config.METRICS_PATH, params=query or None)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """Make a synchronous request and decode its JSON body."""
        url = f"https://{self.config.host}{path}"
        label = f"{method.upper()} {path}"

        try:
            response = requests.request(
                method,
                url,
                auth=HTTPBasicAuth(self.credentials.username, self.credentials.token),
                timeout=self.config.timeout,
                **kwargs
            )
        except (requests.exceptions.RequestException, UnicodeError) as e:
            logger.error(f"{label} to {self.config.host} failed: {str(e)}")
            raise TransportError(f"{label} failed: {e}", method=method.upper(), path=path) from e

        if not response.ok:
            logger.warning(f"{label} returned HTTP {response.status_code}")
        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{label} returned a body that is not JSON: {str(e)}")
            raise TransportError(f"{label} returned invalid JSON", method=method.upper(), path=path) from e

    def build_async_request(self, path: str, payload: Dict[str, Any]) -> requests.PreparedRequest:
        """
        Prepare the form-encoded POST sent in asynchronous mode.

        Content-Length and the Basic Authorization header are filled in by
        ``requests``.
        """
        host = self.config.host
        request = requests.Request(
            'POST',
            f"https://{host}{path}",
            headers={
                'Host': host,
                'Accept': '*/*',
                'Content-Type': FORM_CONTENT_TYPE,
                'Connection': 'Close',
            },
            data=build_query(payload).encode('ascii'),
            auth=HTTPBasicAuth(self.credentials.username, self.credentials.token),
        )
        return request.prepare()

    def _connect(self, host: str, timeout: float) -> ssl.SSLSocket:
        """Open a TLS socket to the service; the handshake completes here."""
        raw = socket.create_connection((host, config.ASYNC_PORT), timeout=timeout)
        try:
            return self.ssl_context.wrap_socket(raw, server_hostname=host)
        except OSError:
            raw.close()
            raise

    def _async_post(self, path: str, payload: Dict[str, Any]) -> bool:
        """
        Write the request to a fresh socket and close it without reading.

        The request is built before connecting, so a payload or credentials
        that cannot be encoded never open a socket.

        Returns:
            bool: True if more than zero bytes were written, False if
            building the request, the connection or the write failed
        """
        host = self.config.host
        try:
            data = serialize_request(self.build_async_request(path, payload))
        except (TypeError, ValueError, requests.exceptions.RequestException) as e:
            logger.warning(f"Could not build metrics request for {host}: {str(e)}")
            return False

        try:
            sock = self._connect(host, self.config.timeout)
        except OSError as e:
            logger.warning(f"Could not connect to {host}:{config.ASYNC_PORT}: {str(e)}")
            return False

        try:
            with sock:
                bytes_sent = sock.send(data)
        except OSError as e:
            logger.warning(f"Failed to write metrics to {host}: {str(e)}")
            return False

        logger.debug(f"Wrote {bytes_sent} of {len(data)} bytes to {host}")
        return bytes_sent > 0
