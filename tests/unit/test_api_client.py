"""Tests for the authorized API client."""
import pytest

from conftest import json_response
from twapi.core.api import APIClient
from twapi.core.oauth import OAuth2Bearer

URI = 'https://api.twitter.com/1.1/statuses/update.json'


class RecordingStrategy:
    """Signing strategy that records what it was asked to sign."""

    def __init__(self):
        self.calls = []

    def authorization_header(self, method, uri, params=None):
        self.calls.append((method, uri, list(params or [])))
        return 'Signed'


class TestAPIClient:
    """Test suite for APIClient."""

    @pytest.fixture
    def strategy(self):
        return RecordingStrategy()

    @pytest.fixture
    def client(self, transport, strategy):
        transport.queue(json_response(200, {}))
        return APIClient(transport, strategy)

    @pytest.mark.asyncio
    async def test_get_signs_query(self, client, transport, strategy):
        """Test GET signs and sends the query."""
        await client.get(URI, {'count': 5})

        assert strategy.calls == [('GET', URI, [('count', '5')])]
        assert transport.calls[0][2] == [('count', '5')]
        assert transport.calls[0][4] == {'Authorization': 'Signed'}

    @pytest.mark.asyncio
    async def test_post_signs_query_and_form(self, client, transport, strategy):
        """Test form-urlencoded body is signed."""
        await client.post(URI, [('trim_user', 'true')], [('status', 'hi')])

        assert strategy.calls == [('POST', URI, [('trim_user', 'true'), ('status', 'hi')])]
        method, _, query, form, _ = transport.calls[0]
        assert method == 'POST'
        assert query == [('trim_user', 'true')]
        assert form == [('status', 'hi')]

    @pytest.mark.asyncio
    async def test_put_and_delete_sign_query(self, transport, strategy):
        """Test PUT and DELETE sign the query."""
        transport.queue(json_response(200), json_response(200))
        client = APIClient(transport, strategy)

        await client.put(URI, [('a', '1')])
        await client.delete(URI, [('b', '2')])

        assert strategy.calls == [('PUT', URI, [('a', '1')]), ('DELETE', URI, [('b', '2')])]

    @pytest.mark.asyncio
    async def test_json_body_not_signed(self, client, transport, strategy):
        """Test JSON body stays out of the signature."""
        await client.post_json(URI, {'media_id': '1'}, [('x', 'y')])

        assert strategy.calls == [('POST', URI, [('x', 'y')])]
        assert transport.calls[0][3] == {'media_id': '1'}

    @pytest.mark.asyncio
    async def test_multipart_not_signed(self, client, transport, strategy):
        """Test multipart fields stay out of the signature."""
        await client.post_multipart(URI, [('command', 'INIT'), ('media', b'data')])

        assert strategy.calls == [('POST', URI, [])]
        assert transport.calls[0][3] == [('command', 'INIT'), ('media', b'data')]

    @pytest.mark.asyncio
    async def test_bearer(self, transport):
        """Test bearer strategy header."""
        transport.queue(json_response(200))
        client = APIClient(transport, OAuth2Bearer('AAAA'))

        await client.get(URI)

        assert transport.calls[0][4] == {'Authorization': 'Bearer AAAA'}

    @pytest.mark.asyncio
    async def test_close(self, client, transport):
        """Test close closes the transport."""
        await client.close()

        assert transport.closed
