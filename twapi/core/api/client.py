"""
Authorized API client.

Computes the Authorization header for every call and hands the request
to the transport.
"""
from typing import Any, Dict

from .transport import MultipartFields, Transport, TwapiResponse
from ..utils.encoding import Parameters, to_pairs
from ..oauth.strategies import SigningStrategy


class APIClient:
    """
    Signs requests with a SigningStrategy and sends them through a Transport.

    Signature coverage follows OAuth1: query parameters are always signed,
    form-urlencoded bodies are signed, JSON and multipart bodies are not.
    """

    def __init__(self, transport: Transport, strategy: SigningStrategy):
        """
        Initialize API client.

        Args:
            transport: Network collaborator
            strategy: OAuth1 credentials or OAuth2 bearer
        """
        self._transport = transport
        self._strategy = strategy

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def strategy(self) -> SigningStrategy:
        return self._strategy

    def _headers(self, method: str, uri: str, signed: Parameters) -> Dict[str, str]:
        return {'Authorization': self._strategy.authorization_header(method, uri, signed)}

    async def get(self, uri: str, query: Parameters = None) -> TwapiResponse:
        query = to_pairs(query)
        return await self._transport.get(uri, query, headers=self._headers('GET', uri, query))

    async def post(
        self,
        uri: str,
        query: Parameters = None,
        form: Parameters = None
    ) -> TwapiResponse:
        query, form = to_pairs(query), to_pairs(form)
        headers = self._headers('POST', uri, query + form)
        return await self._transport.post(uri, query, form, headers=headers)

    async def put(self, uri: str, query: Parameters = None) -> TwapiResponse:
        query = to_pairs(query)
        return await self._transport.put(uri, query, headers=self._headers('PUT', uri, query))

    async def delete(self, uri: str, query: Parameters = None) -> TwapiResponse:
        query = to_pairs(query)
        return await self._transport.delete(uri, query, headers=self._headers('DELETE', uri, query))

    async def post_json(
        self,
        uri: str,
        body: Any,
        query: Parameters = None
    ) -> TwapiResponse:
        query = to_pairs(query)
        headers = self._headers('POST', uri, query)
        return await self._transport.post_json(uri, query, body, headers=headers)

    async def post_multipart(
        self,
        uri: str,
        fields: MultipartFields,
        query: Parameters = None
    ) -> TwapiResponse:
        query = to_pairs(query)
        headers = self._headers('POST', uri, query)
        return await self._transport.post_multipart(uri, query, fields, headers=headers)

    async def close(self) -> None:
        await self._transport.close()
