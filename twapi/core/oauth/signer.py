"""
OAuth1 HMAC-SHA1 request signer.

Produces the value of the Authorization header for a single request.
The random source and the clock are injected so signatures can be
reproduced in tests.
"""
import base64
import string
import time
from typing import Callable, Optional, Sequence

from Crypto.Hash import HMAC, SHA1
from Crypto.Random.random import StrongRandom

from .canonical import Canonicalizer
from ..utils.encoding import PercentEncoder, ParameterList, Parameters
from ..logging import get_logger

logger = get_logger('twapi.oauth')


class OAuth1Signer:
    """
    Stateless OAuth1 signer.

    Safe to share between tasks: the only state is the injected random
    source and clock, both read-only from the signer's point of view.

    Example:
        >>> signer = OAuth1Signer()
        >>> key = OAuth1Signer.signing_key('consumer-secret', 'token-secret')
        >>> header = signer.sign(key, 'consumer-key', [('oauth_token', 'tok')],
        ...                      'GET', 'https://api.twitter.com/1.1/search/tweets.json',
        ...                      [('q', 'python')])
    """

    NONCE_LENGTH = 32
    NONCE_ALPHABET: Sequence[str] = string.ascii_letters + string.digits
    SIGNATURE_METHOD = 'HMAC-SHA1'
    VERSION = '1.0'

    def __init__(
        self,
        rng=None,
        clock: Optional[Callable[[], float]] = None,
        canonicalizer: Optional[Canonicalizer] = None
    ):
        """
        Initialize signer.

        Args:
            rng: Random source exposing choice(seq) (default: StrongRandom)
            clock: Callable returning Unix time in seconds (default: time.time)
            canonicalizer: Parameter canonicalizer
        """
        self._rng = rng or StrongRandom()
        self._clock = clock or time.time
        self._canonicalizer = canonicalizer or Canonicalizer()
        self._encoder = PercentEncoder()

    def nonce(self) -> str:
        """Returns a fresh 32-character alphanumeric nonce."""
        return ''.join(
            self._rng.choice(self.NONCE_ALPHABET) for _ in range(self.NONCE_LENGTH)
        )

    def timestamp(self) -> str:
        """Returns the current Unix time in whole seconds."""
        return str(int(self._clock()))

    @staticmethod
    def signing_key(consumer_secret: str, token_secret: str = '') -> str:
        """Builds the HMAC key enc(consumer_secret)&enc(token_secret)."""
        enc = PercentEncoder.encode
        return f"{enc(consumer_secret)}&{enc(token_secret or '')}"

    @staticmethod
    def signature(base_string: str, signing_key: str) -> str:
        """Returns base64(HMAC-SHA1(signing_key, base_string))."""
        mac = HMAC.new(signing_key.encode('utf-8'), digestmod=SHA1)
        mac.update(base_string.encode('utf-8'))
        return base64.b64encode(mac.digest()).decode('ascii')

    def oauth_parameters(
        self,
        consumer_key: str,
        header_params: Parameters = None,
        nonce: Optional[str] = None,
        timestamp: Optional[str] = None
    ) -> ParameterList:
        """
        Build the encoded oauth_* parameters that go into the header.

        Args:
            consumer_key: Application consumer key
            header_params: Extra protocol parameters (oauth_token, oauth_callback, ...)
            nonce: Fixed nonce (generated when omitted)
            timestamp: Fixed timestamp (current time when omitted)

        Returns:
            Encoded (name, value) pairs, fixed parameters first
        """
        fixed = [
            ('oauth_consumer_key', consumer_key),
            ('oauth_nonce', nonce if nonce is not None else self.nonce()),
            ('oauth_signature_method', self.SIGNATURE_METHOD),
            ('oauth_timestamp', timestamp if timestamp is not None else self.timestamp()),
            ('oauth_version', self.VERSION),
        ]
        return (
            self._canonicalizer.encode_pairs(fixed)
            + self._canonicalizer.encode_pairs(header_params)
        )

    def base_string(
        self,
        method: str,
        uri: str,
        oauth_params: ParameterList,
        request_params: Parameters = None
    ) -> str:
        """Signature base string over the oauth and request parameters."""
        target, query = self._canonicalizer.split_uri(uri)
        encoded = (
            oauth_params
            + self._canonicalizer.encode_pairs(query)
            + self._canonicalizer.encode_pairs(request_params)
        )
        return self._canonicalizer.base_string(method, target, encoded)

    def sign(
        self,
        signing_key: str,
        consumer_key: str,
        header_params: Parameters,
        method: str,
        uri: str,
        request_params: Parameters = None,
        nonce: Optional[str] = None,
        timestamp: Optional[str] = None
    ) -> str:
        """
        Compute the Authorization header value for one request.

        Request parameters take part in the signature but are never
        copied into the header.

        Args:
            signing_key: Key from signing_key()
            consumer_key: Application consumer key
            header_params: Extra oauth_* parameters for the header
            method: HTTP method
            uri: Request URI
            request_params: Query and form-urlencoded body parameters
            nonce: Fixed nonce (tests)
            timestamp: Fixed timestamp (tests)

        Returns:
            'OAuth name="value", ...'
        """
        oauth_params = self.oauth_parameters(consumer_key, header_params, nonce, timestamp)
        base = self.base_string(method, uri, oauth_params, request_params)
        signature = self.signature(base, signing_key)
        logger.debug(f"Signed {method.upper()} {uri}")

        header_params = oauth_params + [('oauth_signature', self._encoder.encode(signature))]
        rendered = ', '.join(f'{name}="{value}"' for name, value in header_params)
        return f"OAuth {rendered}"
