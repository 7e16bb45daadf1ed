"""
HTTP transport.

The transport performs network I/O only. It never signs, retries or
interprets responses; the Authorization header arrives ready-made in
the headers argument.
"""
import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Sequence, Tuple, Union

import aiohttp

from .config import APIConfig
from ..exceptions import TransportError
from ..logging import get_logger
from ..utils.encoding import ParameterList, Parameters, to_pairs

MultipartFields = Sequence[Tuple[str, Union[str, bytes]]]


@dataclass(frozen=True)
class TwapiResponse:
    """
    Raw response from the Twitter API.

    Attributes:
        status_code: HTTP status
        body: Raw body bytes
        headers: Response headers
    """
    status_code: int
    body: bytes = b''
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """Returns True for 2xx responses."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    @property
    def json(self) -> Optional[Any]:
        """Parsed JSON body, or None when the body is empty or not JSON."""
        if not self.body:
            return None
        try:
            return json.loads(self.body)
        except ValueError:
            return None


class Transport(Protocol):
    """Protocol for the network collaborator."""

    async def get(
        self,
        uri: str,
        query: Parameters = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TwapiResponse: ...

    async def post(
        self,
        uri: str,
        query: Parameters = None,
        form: Parameters = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TwapiResponse: ...

    async def put(
        self,
        uri: str,
        query: Parameters = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TwapiResponse: ...

    async def delete(
        self,
        uri: str,
        query: Parameters = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TwapiResponse: ...

    async def post_json(
        self,
        uri: str,
        query: Parameters = None,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TwapiResponse: ...

    async def post_multipart(
        self,
        uri: str,
        query: Parameters = None,
        fields: MultipartFields = (),
        headers: Optional[Dict[str, str]] = None
    ) -> TwapiResponse: ...

    async def close(self) -> None: ...


class AiohttpTransport:
    """
    Transport backed by a shared aiohttp session.

    Example:
        >>> async with AiohttpTransport(APIConfig.default()) as transport:
        ...     response = await transport.get('https://api.twitter.com/1.1/help/configuration.json')
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize transport.

        Args:
            config: API configuration (uses defaults if not provided)
            session: Optional shared session; not closed by this transport
        """
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger('twapi.api')

    async def __aenter__(self) -> 'AiohttpTransport':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(**self._config.get_connector_kwargs())
            self._session = aiohttp.ClientSession(
                connector=connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def get(self, uri, query=None, headers=None) -> TwapiResponse:
        return await self._send('GET', uri, query, headers=headers)

    async def post(self, uri, query=None, form=None, headers=None) -> TwapiResponse:
        data = aiohttp.FormData(to_pairs(form)) if form else None
        return await self._send('POST', uri, query, data=data, headers=headers)

    async def put(self, uri, query=None, headers=None) -> TwapiResponse:
        return await self._send('PUT', uri, query, headers=headers)

    async def delete(self, uri, query=None, headers=None) -> TwapiResponse:
        return await self._send('DELETE', uri, query, headers=headers)

    async def post_json(self, uri, query=None, body=None, headers=None) -> TwapiResponse:
        return await self._send('POST', uri, query, json_body=body, headers=headers)

    async def post_multipart(self, uri, query=None, fields=(), headers=None) -> TwapiResponse:
        return await self._send(
            'POST', uri, query, data=self.build_multipart(fields), headers=headers
        )

    @staticmethod
    def build_multipart(fields: MultipartFields) -> aiohttp.MultipartWriter:
        """Build a multipart/form-data body; bytes values become file parts."""
        writer = aiohttp.MultipartWriter('form-data')
        for name, value in fields:
            if isinstance(value, (bytes, bytearray, memoryview)):
                part = writer.append(bytes(value), {'Content-Type': 'application/octet-stream'})
                part.set_content_disposition('form-data', name=name, filename=name)
            else:
                part = writer.append(str(value), {'Content-Type': 'text/plain; charset=utf-8'})
                part.set_content_disposition('form-data', name=name)
        return writer

    async def _send(
        self,
        method: str,
        uri: str,
        query: Parameters = None,
        data: Any = None,
        json_body: Any = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TwapiResponse:
        session = await self._ensure_session()
        params: ParameterList = to_pairs(query)
        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

        self._logger.debug(f"{method} {uri} ({len(params)} query params)")

        try:
            async with session.request(
                method,
                uri,
                params=params or None,
                data=data,
                json=json_body,
                headers=headers,
                proxy=proxy
            ) as response:
                body = await response.read()
                self._logger.debug(f"{method} {uri} -> HTTP {response.status} ({len(body)} bytes)")
                return TwapiResponse(
                    status_code=response.status,
                    body=body,
                    headers=dict(response.headers)
                )
        except asyncio.TimeoutError as e:
            self._logger.error(f"Timeout on {method} {uri}")
            raise TransportError(f"Timeout on {method} {uri}", e) from e
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error on {method} {uri}: {e}")
            raise TransportError(f"Network error on {method} {uri}: {e}", e) from e
