"""
twapi - Async Python library for the Twitter v1.1 API.

Usage:
    >>> from twapi import TwitterClient, OAuth1Credentials
    >>>
    >>> async with TwitterClient(OAuth1Credentials.from_env()) as client:
    ...     response = await client.verify_credentials()
    ...     print(response.json['screen_name'])
"""
import logging
from .client import TwitterClient

# Signing and token exchange
from .core.oauth import (
    Canonicalizer,
    OAuth1Signer,
    SigningStrategy,
    OAuth1Credentials,
    OAuth2Bearer,
    Credentials,
    TokenExchanger,
    RequestToken,
    AccessToken
)

# Configuration and transport
from .core.api import (
    APIClient,
    APIConfig,
    EndpointConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    Transport,
    AiohttpTransport,
    TwapiResponse
)

# Media upload
from .core.upload import (
    CHUNK_SIZE,
    ChunkedUploader,
    MediaUploadConfig,
    MediaUploadResult,
    UploadProgress,
    UploadState,
    upload_media_simple
)

from .core.exceptions import (
    TwapiException,
    TransportError,
    TokenExchangeError,
    MalformedResponseError,
    UploadStageError,
    FileIOError,
    ProcessingTimeoutError
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for twapi modules.

    This ensures that all twapi loggers are properly configured
    to show log messages at the specified level.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'twapi',
        'twapi.client',
        'twapi.oauth',
        'twapi.api',
        'twapi.upload',
        'twapi.upload.file',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Ensure propagation is enabled
        logger.propagate = True


__all__ = [
    'TwitterClient',
    'setup_logging',

    # OAuth
    'Canonicalizer',
    'OAuth1Signer',
    'SigningStrategy',
    'OAuth1Credentials',
    'OAuth2Bearer',
    'Credentials',
    'TokenExchanger',
    'RequestToken',
    'AccessToken',

    # API
    'APIClient',
    'APIConfig',
    'EndpointConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'Transport',
    'AiohttpTransport',
    'TwapiResponse',

    # Upload
    'CHUNK_SIZE',
    'ChunkedUploader',
    'MediaUploadConfig',
    'MediaUploadResult',
    'UploadProgress',
    'UploadState',
    'upload_media_simple',

    # Exceptions
    'TwapiException',
    'TransportError',
    'TokenExchangeError',
    'MalformedResponseError',
    'UploadStageError',
    'FileIOError',
    'ProcessingTimeoutError',
]
