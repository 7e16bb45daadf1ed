"""Pytest fixtures for twapi tests."""
import json
import os
import random
import tempfile
from pathlib import Path

import pytest

from twapi.core.api.transport import TwapiResponse
from twapi.core.oauth import OAuth1Credentials, OAuth1Signer


def json_response(status_code=200, body=None):
    """Build a TwapiResponse with a JSON body."""
    payload = b'' if body is None else json.dumps(body).encode('utf-8')
    return TwapiResponse(status_code=status_code, body=payload)


class FakeTransport:
    """
    Transport double.

    Records every call as (method, uri, query, payload, headers) and
    answers with the queued responses in order. A queued exception is
    raised instead of returned.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.closed = False

    def queue(self, *responses):
        self.responses.extend(responses)

    async def _answer(self, method, uri, query, payload, headers):
        self.calls.append((method, uri, list(query or []), payload, headers or {}))
        if not self.responses:
            raise AssertionError(f"Unexpected {method} {uri}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def get(self, uri, query=None, headers=None):
        return await self._answer('GET', uri, query, None, headers)

    async def post(self, uri, query=None, form=None, headers=None):
        return await self._answer('POST', uri, query, form, headers)

    async def put(self, uri, query=None, headers=None):
        return await self._answer('PUT', uri, query, None, headers)

    async def delete(self, uri, query=None, headers=None):
        return await self._answer('DELETE', uri, query, None, headers)

    async def post_json(self, uri, query=None, body=None, headers=None):
        return await self._answer('POST_JSON', uri, query, body, headers)

    async def post_multipart(self, uri, query=None, fields=(), headers=None):
        return await self._answer('POST_MULTIPART', uri, query, list(fields), headers)

    async def close(self):
        self.closed = True


@pytest.fixture
def transport():
    """Empty recording transport."""
    return FakeTransport()


@pytest.fixture
def signer():
    """Signer with a seeded random source and a frozen clock."""
    return OAuth1Signer(rng=random.Random(1234), clock=lambda: 1318622958)


@pytest.fixture
def credentials(signer):
    """OAuth1 user credentials with a deterministic signer."""
    return OAuth1Credentials(
        consumer_key='xvz1evFS4wEEPTGEFPHBog',
        consumer_secret='kAcSOqF21Fu85e7zjz7ZN2U4ZRhfV3WpwPAoE3Z7kBw',
        token='370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb',
        token_secret='LswwdoUaIvS8ltyTt5jkRh4J50vUPVVHtR2YPi5kE',
        signer=signer,
    )


@pytest.fixture
def temp_media():
    """Factory for temporary files of a given size.

    Files larger than a few kilobytes are created sparse so that
    multi-segment uploads stay cheap.
    """
    paths = []

    def make(size, content=None):
        fd, path = tempfile.mkstemp(suffix='.mp4')
        with os.fdopen(fd, 'wb') as f:
            if content is not None:
                f.write(content)
            else:
                f.truncate(size)
        paths.append(Path(path))
        return Path(path)

    yield make

    for path in paths:
        if path.exists():
            path.unlink()
