"""
API configuration module.

Provides configuration for the Twitter transport and endpoints.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import ssl


@dataclass
class EndpointConfig:
    """
    Endpoint URLs.

    Overridable for API proxies and test servers.
    """
    api_base: str = 'https://api.twitter.com/1.1/'
    upload_url: str = 'https://upload.twitter.com/1.1/media/upload.json'
    metadata_url: str = 'https://upload.twitter.com/1.1/media/metadata/create.json'
    request_token_url: str = 'https://api.twitter.com/oauth/request_token'
    access_token_url: str = 'https://api.twitter.com/oauth/access_token'
    authorize_url: str = 'https://api.twitter.com/oauth/authorize'

    def api(self, path: str) -> str:
        """Absolute URL for a REST path such as 'account/verify_credentials.json'."""
        return self.api_base.rstrip('/') + '/' + path.lstrip('/')


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP, HTTPS, and SOCKS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password:
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """SSL/TLS configuration."""
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Granular control over different timeout types.
    """
    total: float = 300.0  # Whole request, including a 5 MB chunk body
    connect: float = 30.0
    sock_read: float = 60.0
    sock_connect: float = 30.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the transport and client.
    """
    endpoints: EndpointConfig = field(default_factory=EndpointConfig)

    user_agent: str = 'twapi/1.0.0'

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
