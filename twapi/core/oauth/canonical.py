"""
Request canonicalization for OAuth1 signatures.

Builds the signature base string described in RFC 5849 section 3.4.1:
parameters are percent-encoded, sorted by encoded name then encoded value,
joined with '&', and combined with the method and the base URI.
"""
from typing import List, Tuple
from urllib.parse import urlsplit, urlunsplit, parse_qsl

from ..utils.encoding import PercentEncoder, ParameterList, Parameters, to_pairs

_DEFAULT_PORTS = {'http': 80, 'https': 443}


class Canonicalizer:
    """Percent-encodes, orders and joins request parameters."""

    def __init__(self, encoder: PercentEncoder = None):
        self._encoder = encoder or PercentEncoder()

    def encode_pairs(self, params: Parameters) -> ParameterList:
        """Percent-encodes both the name and the value of every pair."""
        enc = self._encoder.encode
        return [(enc(name), enc(value)) for name, value in to_pairs(params)]

    @staticmethod
    def sort(encoded: ParameterList) -> ParameterList:
        """Sorts encoded pairs by name, then value.

        Encoded pairs are pure ASCII, so string ordering is byte ordering.
        """
        return sorted(encoded)

    @staticmethod
    def join(encoded: ParameterList, separator: str = '&') -> str:
        """Joins encoded pairs as name=value."""
        return separator.join(f"{name}={value}" for name, value in encoded)

    def parameter_string(self, encoded: ParameterList) -> str:
        """Sorted, '&'-joined parameter string of already-encoded pairs."""
        return self.join(self.sort(encoded))

    @staticmethod
    def split_uri(uri: str) -> Tuple[str, List[Tuple[str, str]]]:
        """
        Split a request URI into its base string URI and query pairs.

        Scheme and host are lowercased, default ports dropped, and the
        query string and fragment removed.

        Args:
            uri: Request URI, possibly carrying a query string

        Returns:
            Tuple of (base URI, decoded query pairs)
        """
        parts = urlsplit(uri)
        scheme = parts.scheme.lower()
        host = (parts.hostname or '').lower()
        if ':' in host:
            # IPv6 literal
            host = f"[{host}]"
        netloc = host
        if parts.port is not None and parts.port != _DEFAULT_PORTS.get(scheme):
            netloc = f"{host}:{parts.port}"
        path = parts.path or '/'
        base = urlunsplit((scheme, netloc, path, '', ''))
        query = parse_qsl(parts.query, keep_blank_values=True)
        return base, query

    def base_string(self, method: str, uri: str, encoded: ParameterList) -> str:
        """
        Build the signature base string.

        Args:
            method: HTTP method (any case)
            uri: Base string URI, without query string
            encoded: Complete list of already-encoded parameter pairs

        Returns:
            METHOD&enc(uri)&enc(parameter_string)
        """
        enc = self._encoder.encode
        return '&'.join((
            method.upper(),
            enc(uri),
            enc(self.parameter_string(encoded)),
        ))
