"""Encoding utilities."""
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, parse_qsl

ParameterList = List[Tuple[str, str]]
Parameters = Optional[Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]]


class PercentEncoder:
    """RFC 3986 percent-encoder (OAuth1 flavour)."""
    
    @staticmethod
    def encode(value: Union[str, bytes]) -> str:
        """Escapes every byte except A-Z a-z 0-9 - . _ ~ (space becomes %20)."""
        if isinstance(value, str):
            value = value.encode('utf-8')
        return quote(value, safe='~')


def to_pairs(params: Parameters) -> ParameterList:
    """Normalizes a mapping or a sequence of pairs into (str, str) pairs.
    
    Order and repeated names are preserved. Non-string values are
    converted with str().
    """
    if not params:
        return []
    items = params.items() if isinstance(params, Mapping) else params
    return [(str(name), str(value)) for name, value in items]


def parse_query(body: Union[str, bytes]) -> dict:
    """Parses an application/x-www-form-urlencoded body into a dict."""
    if isinstance(body, bytes):
        body = body.decode('utf-8', errors='replace')
    return dict(parse_qsl(body.strip(), keep_blank_values=True))
