"""OAuth module - request signing and token exchange."""
from .canonical import Canonicalizer
from .signer import OAuth1Signer
from .strategies import SigningStrategy, OAuth1Credentials, OAuth2Bearer, Credentials
from .token_exchange import TokenExchanger, RequestToken, AccessToken

__all__ = [
    'Canonicalizer',
    'OAuth1Signer',
    'SigningStrategy',
    'OAuth1Credentials',
    'OAuth2Bearer',
    'Credentials',
    'TokenExchanger',
    'RequestToken',
    'AccessToken',
]
