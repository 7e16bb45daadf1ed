"""Shared encoding helpers."""
from .encoding import PercentEncoder, ParameterList, Parameters, to_pairs, parse_query

__all__ = [
    'PercentEncoder',
    'ParameterList',
    'Parameters',
    'to_pairs',
    'parse_query',
]
