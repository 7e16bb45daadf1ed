"""
OAuth1 three-legged token exchange.

Performs the request-token and access-token handshakes. Both calls are a
POST authorized by header parameters only, answered with a form-urlencoded
body.
"""
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlencode

from ..utils.encoding import parse_query
from .signer import OAuth1Signer
from .strategies import OAuth1Credentials
from ..api.config import EndpointConfig
from ..api.transport import Transport, TwapiResponse
from ..exceptions import MalformedResponseError, TokenExchangeError
from ..logging import get_logger

logger = get_logger('twapi.oauth')


@dataclass(frozen=True)
class RequestToken:
    """Temporary credentials returned by the request-token step."""
    oauth_token: str
    oauth_token_secret: str
    authorize_uri: str


@dataclass(frozen=True)
class AccessToken:
    """User credentials returned by the access-token step."""
    oauth_token: str
    oauth_token_secret: str
    user_id: str
    screen_name: str

    def to_credentials(self, consumer_key: str, consumer_secret: str) -> OAuth1Credentials:
        """Combine with the application keys into signing credentials."""
        return OAuth1Credentials(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            token=self.oauth_token,
            token_secret=self.oauth_token_secret,
        )


class TokenExchanger:
    """
    Runs the two fixed OAuth1 handshake calls.

    Example:
        >>> exchanger = TokenExchanger(transport, 'consumer-key', 'consumer-secret')
        >>> request = await exchanger.request_token('https://example.com/callback')
        >>> # send the user to request.authorize_uri, receive oauth_verifier
        >>> access = await exchanger.access_token(
        ...     request.oauth_token, request.oauth_token_secret, verifier)
    """

    def __init__(
        self,
        transport: Transport,
        consumer_key: str,
        consumer_secret: str,
        endpoints: Optional[EndpointConfig] = None,
        signer: Optional[OAuth1Signer] = None
    ):
        """
        Initialize token exchanger.

        Args:
            transport: Network collaborator
            consumer_key: Application key
            consumer_secret: Application secret
            endpoints: Endpoint URLs (defaults to api.twitter.com)
            signer: OAuth1 signer
        """
        self._transport = transport
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._endpoints = endpoints or EndpointConfig()
        self._signer = signer or OAuth1Signer()

    async def request_token(
        self,
        callback_uri: str,
        access_type: Optional[str] = None
    ) -> RequestToken:
        """
        Obtain temporary credentials and the URI the user must visit.

        Args:
            callback_uri: oauth_callback ('oob' for PIN-based flows)
            access_type: Optional x_auth_access_type ('read' or 'write')

        Returns:
            RequestToken

        Raises:
            TokenExchangeError: On non-2xx response
            MalformedResponseError: If a token field is missing
            TransportError: On network failure
        """
        header_params = [('oauth_callback', callback_uri)]
        if access_type:
            header_params.append(('x_auth_access_type', access_type))

        key = OAuth1Signer.signing_key(self._consumer_secret)
        fields = await self._execute(self._endpoints.request_token_url, key, header_params)

        oauth_token = self._require(fields, 'oauth_token')
        authorize_uri = f"{self._endpoints.authorize_url}?{urlencode({'oauth_token': oauth_token})}"
        logger.info("Request token obtained")
        return RequestToken(
            oauth_token=oauth_token,
            oauth_token_secret=self._require(fields, 'oauth_token_secret'),
            authorize_uri=authorize_uri,
        )

    async def access_token(
        self,
        oauth_token: str,
        oauth_token_secret: str,
        oauth_verifier: str
    ) -> AccessToken:
        """
        Exchange an authorized request token for user credentials.

        Args:
            oauth_token: Request token
            oauth_token_secret: Request token secret
            oauth_verifier: Verifier from the callback (or PIN)

        Returns:
            AccessToken

        Raises:
            TokenExchangeError: On non-2xx response
            MalformedResponseError: If a field is missing
            TransportError: On network failure
        """
        key = OAuth1Signer.signing_key(self._consumer_secret, oauth_token_secret)
        fields = await self._execute(
            self._endpoints.access_token_url,
            key,
            [('oauth_token', oauth_token), ('oauth_verifier', oauth_verifier)]
        )
        access = AccessToken(
            oauth_token=self._require(fields, 'oauth_token'),
            oauth_token_secret=self._require(fields, 'oauth_token_secret'),
            user_id=self._require(fields, 'user_id'),
            screen_name=self._require(fields, 'screen_name'),
        )
        logger.info(f"Access token obtained for @{access.screen_name}")
        return access

    async def _execute(self, uri: str, signing_key: str, header_params) -> Dict[str, str]:
        authorization = self._signer.sign(
            signing_key, self._consumer_key, header_params, 'POST', uri
        )
        response: TwapiResponse = await self._transport.post(
            uri, headers={'Authorization': authorization}
        )
        if not response.is_success:
            logger.error(f"Token exchange at {uri} failed: HTTP {response.status_code}")
            raise TokenExchangeError(response.status_code, response.text)
        return parse_query(response.body)

    @staticmethod
    def _require(fields: Dict[str, str], name: str) -> str:
        try:
            return fields[name]
        except KeyError:
            raise MalformedResponseError(name, fields) from None
