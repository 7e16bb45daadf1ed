"""Twitter API module - configuration, transport and authorized client."""
from .config import APIConfig, EndpointConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .transport import Transport, AiohttpTransport, TwapiResponse, MultipartFields
from .client import APIClient

__all__ = [
    # Client
    'APIClient',
    
    # Transport
    'Transport',
    'AiohttpTransport',
    'TwapiResponse',
    'MultipartFields',
    
    # Configuration
    'APIConfig',
    'EndpointConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
]
