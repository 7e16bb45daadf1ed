"""
High-level Twitter client.

Bundles a transport, a signing strategy and the media uploader behind a
single async context manager.

Example:
    >>> from twapi import TwitterClient, OAuth1Credentials
    >>>
    >>> async with TwitterClient(OAuth1Credentials.from_env()) as client:
    ...     me = await client.verify_credentials()
    ...     result = await client.upload_media_chunked(
    ...         'clip.mp4', 'video/mp4', 'tweet_video')
    ...     await client.post(client.endpoints.api('statuses/update.json'),
    ...                       form={'status': 'hi', 'media_ids': result.media_id})
"""
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

from .core.api import APIClient, APIConfig, AiohttpTransport, EndpointConfig, Transport, TwapiResponse
from .core.api.transport import MultipartFields
from .core.logging import get_logger
from .core.oauth import AccessToken, Credentials, RequestToken, TokenExchanger
from .core.upload import (
    ChunkedUploader,
    MediaUploadConfig,
    MediaUploadResult,
    UploadProgress,
    upload_media_simple,
)
from .core.utils.encoding import Parameters


class TwitterClient:
    """
    Async client for the Twitter v1.1 REST and media endpoints.

    Works with either OAuth1 user credentials or an OAuth2 bearer token.
    The aiohttp session opens on the first request. The transport is
    closed with the client unless it was supplied by the caller.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        config: Optional[APIConfig] = None,
        transport: Optional[Transport] = None
    ):
        """
        Initialize Twitter client.

        Args:
            credentials: OAuth1Credentials or OAuth2Bearer
            config: Optional API configuration
            transport: Optional transport (an AiohttpTransport is built from config otherwise)
        """
        self._config = config or APIConfig.default()
        self._credentials = credentials
        self._transport = transport or AiohttpTransport(self._config)
        self._owns_transport = transport is None
        self._api = APIClient(self._transport, credentials)
        self._logger = get_logger('twapi.client')

    @property
    def endpoints(self) -> EndpointConfig:
        return self._config.endpoints

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def api(self) -> APIClient:
        """Underlying authorized API client."""
        return self._api

    # =========================================================================
    # Context manager
    # =========================================================================

    async def __aenter__(self) -> 'TwitterClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context - cleanup."""
        await self.close()

    async def close(self):
        """Close the client and release resources."""
        if self._owns_transport:
            await self._transport.close()

    # =========================================================================
    # Generic requests
    # =========================================================================

    async def get(self, uri: str, query: Parameters = None) -> TwapiResponse:
        return await self._api.get(uri, query)

    async def post(self, uri: str, query: Parameters = None, form: Parameters = None) -> TwapiResponse:
        return await self._api.post(uri, query, form)

    async def put(self, uri: str, query: Parameters = None) -> TwapiResponse:
        return await self._api.put(uri, query)

    async def delete(self, uri: str, query: Parameters = None) -> TwapiResponse:
        return await self._api.delete(uri, query)

    async def post_json(self, uri: str, body: Any, query: Parameters = None) -> TwapiResponse:
        return await self._api.post_json(uri, body, query)

    async def post_multipart(
        self,
        uri: str,
        fields: MultipartFields,
        query: Parameters = None
    ) -> TwapiResponse:
        return await self._api.post_multipart(uri, fields, query)

    async def verify_credentials(self) -> TwapiResponse:
        """GET account/verify_credentials.json for the authorized user."""
        return await self._api.get(self.endpoints.api('account/verify_credentials.json'))

    # =========================================================================
    # Media
    # =========================================================================

    async def upload_media(
        self,
        file_path: Union[str, Path],
        additional_owners: Optional[str] = None
    ) -> TwapiResponse:
        """
        Upload a small image in a single request.

        Args:
            file_path: Local image
            additional_owners: Optional comma-separated user IDs

        Returns:
            Raw upload response
        """
        return await upload_media_simple(
            self._api,
            file_path,
            additional_owners=additional_owners,
            upload_url=self.endpoints.upload_url
        )

    async def upload_media_chunked(
        self,
        file_path: Union[str, Path],
        media_type: str,
        media_category: str,
        additional_owners: Optional[Union[str, Iterable[str]]] = None,
        max_poll_attempts: Optional[int] = None,
        max_processing_wait: Optional[float] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> MediaUploadResult:
        """
        Upload a file with the INIT/APPEND/FINALIZE/STATUS sequence.

        Args:
            file_path: Local media file
            media_type: MIME type
            media_category: tweet_image, tweet_gif or tweet_video
            additional_owners: User IDs allowed to use the media
            max_poll_attempts: Maximum STATUS checks (None = unbounded)
            max_processing_wait: Maximum seconds waited between checks (None = unbounded)
            progress_callback: Called after every APPEND

        Returns:
            MediaUploadResult in state SUCCEEDED or FAILED

        Example:
            # Video with a progress bar
            await client.upload_media_chunked(
                "clip.mp4", "video/mp4", "tweet_video",
                progress_callback=lambda p: print(f"{p.percentage:.0f}%"))
        """
        config = MediaUploadConfig(
            file_path=file_path,
            media_type=media_type,
            media_category=media_category,
            additional_owners=additional_owners,
            max_poll_attempts=max_poll_attempts,
            max_processing_wait=max_processing_wait
        )
        uploader = ChunkedUploader(
            self._api,
            upload_url=self.endpoints.upload_url,
            progress_callback=progress_callback
        )
        result = await uploader.upload(config)
        self._logger.info(f"Media {result.media_id} finished in state {result.state.value}")
        return result

    async def media_status(self, media_id: str) -> TwapiResponse:
        """Raw STATUS response for an uploaded medium."""
        uploader = ChunkedUploader(self._api, upload_url=self.endpoints.upload_url)
        return await uploader.status(media_id)

    async def create_media_metadata(self, media_id: str, alt_text: str) -> TwapiResponse:
        """Attach alt text to an uploaded medium."""
        body = {'media_id': media_id, 'alt_text': {'text': alt_text}}
        return await self._api.post_json(self.endpoints.metadata_url, body)

    # =========================================================================
    # Token exchange
    # =========================================================================

    @staticmethod
    async def request_token(
        transport: Transport,
        consumer_key: str,
        consumer_secret: str,
        callback_uri: str,
        access_type: Optional[str] = None,
        endpoints: Optional[EndpointConfig] = None
    ) -> RequestToken:
        """Shortcut for TokenExchanger.request_token."""
        exchanger = TokenExchanger(transport, consumer_key, consumer_secret, endpoints)
        return await exchanger.request_token(callback_uri, access_type)

    @staticmethod
    async def access_token(
        transport: Transport,
        consumer_key: str,
        consumer_secret: str,
        oauth_token: str,
        oauth_token_secret: str,
        oauth_verifier: str,
        endpoints: Optional[EndpointConfig] = None
    ) -> AccessToken:
        """Shortcut for TokenExchanger.access_token."""
        exchanger = TokenExchanger(transport, consumer_key, consumer_secret, endpoints)
        return await exchanger.access_token(oauth_token, oauth_token_secret, oauth_verifier)
