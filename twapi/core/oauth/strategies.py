"""
Signing strategies.

Two credential kinds authorize requests: OAuth1 user credentials, which
sign every request, and an OAuth2 application bearer token, which is sent
as-is. Both satisfy SigningStrategy so request code treats them alike.
"""
import os
from dataclasses import dataclass, field
from typing import Protocol, Union, runtime_checkable

from ..utils.encoding import Parameters
from .signer import OAuth1Signer


@runtime_checkable
class SigningStrategy(Protocol):
    """Protocol for anything that can authorize a request."""

    def authorization_header(
        self,
        method: str,
        uri: str,
        params: Parameters = None
    ) -> str:
        """
        Compute the Authorization header value.

        Args:
            method: HTTP method
            uri: Request URI
            params: Parameters covered by the signature

        Returns:
            Header value
        """
        ...


@dataclass(frozen=True)
class OAuth1Credentials:
    """
    OAuth1 user credentials.

    Attributes:
        consumer_key: Application key
        consumer_secret: Application secret
        token: User access token (empty during the request-token step)
        token_secret: User access token secret
    """
    consumer_key: str
    consumer_secret: str
    token: str = ''
    token_secret: str = ''
    signer: OAuth1Signer = field(default_factory=OAuth1Signer, compare=False, repr=False)

    ENV_PREFIX = 'TWAPI_'

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> 'OAuth1Credentials':
        """Load credentials from environment variables.

        Expected env vars:
            TWAPI_CONSUMER_KEY, TWAPI_CONSUMER_SECRET,
            TWAPI_ACCESS_TOKEN, TWAPI_ACCESS_TOKEN_SECRET
        """
        return cls(
            consumer_key=os.environ[f"{prefix}CONSUMER_KEY"],
            consumer_secret=os.environ[f"{prefix}CONSUMER_SECRET"],
            token=os.environ.get(f"{prefix}ACCESS_TOKEN", ''),
            token_secret=os.environ.get(f"{prefix}ACCESS_TOKEN_SECRET", ''),
        )

    @property
    def signing_key(self) -> str:
        return OAuth1Signer.signing_key(self.consumer_secret, self.token_secret)

    def authorization_header(
        self,
        method: str,
        uri: str,
        params: Parameters = None
    ) -> str:
        header_params = [('oauth_token', self.token)] if self.token else []
        return self.signer.sign(
            self.signing_key,
            self.consumer_key,
            header_params,
            method,
            uri,
            params
        )


@dataclass(frozen=True)
class OAuth2Bearer:
    """Application-only bearer token."""
    bearer_token: str

    def authorization_header(
        self,
        method: str,
        uri: str,
        params: Parameters = None
    ) -> str:
        return f"Bearer {self.bearer_token}"


Credentials = Union[OAuth1Credentials, OAuth2Bearer]
