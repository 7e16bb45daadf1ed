"""Tests for the OAuth1 HMAC-SHA1 signer."""
import random
import re

import pytest

from twapi.core.oauth import OAuth1Signer

CONSUMER_KEY = 'xvz1evFS4wEEPTGEFPHBog'
CONSUMER_SECRET = 'kAcSOqF21Fu85e7zjz7ZN2U4ZRhfV3WpwPAoE3Z7kBw'
TOKEN = '370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb'
TOKEN_SECRET = 'LswwdoUaIvS8ltyTt5jkRh4J50vUPVVHtR2YPi5kE'
NONCE = 'kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg'
TIMESTAMP = '1318622958'
URI = 'https://api.twitter.com/1.1/statuses/update.json'
PARAMS = [
    ('include_entities', 'true'),
    ('status', 'Hello Ladies + Gentlemen, a signed OAuth request!'),
]


def header_fields(header):
    """Parse 'OAuth a="b", ...' into an ordered list of pairs."""
    assert header.startswith('OAuth ')
    return re.findall(r'(\w+)="([^"]*)"', header[len('OAuth '):])


class TestKnownVector:
    """Published Twitter signing example."""

    @pytest.fixture
    def header(self, signer):
        key = OAuth1Signer.signing_key(CONSUMER_SECRET, TOKEN_SECRET)
        return signer.sign(
            key, CONSUMER_KEY, [('oauth_token', TOKEN)], 'POST', URI, PARAMS,
            nonce=NONCE, timestamp=TIMESTAMP
        )

    def test_signing_key(self):
        """Test key is enc(consumer_secret)&enc(token_secret)."""
        key = OAuth1Signer.signing_key(CONSUMER_SECRET, TOKEN_SECRET)

        assert key == f"{CONSUMER_SECRET}&{TOKEN_SECRET}"

    def test_base_string(self, signer):
        """Test base string matches the published one."""
        oauth = signer.oauth_parameters(CONSUMER_KEY, [('oauth_token', TOKEN)], NONCE, TIMESTAMP)
        base = signer.base_string('POST', URI, oauth, PARAMS)

        assert base == (
            'POST&https%3A%2F%2Fapi.twitter.com%2F1.1%2Fstatuses%2Fupdate.json&'
            'include_entities%3Dtrue%26oauth_consumer_key%3Dxvz1evFS4wEEPTGEFPHBog%26'
            'oauth_nonce%3DkYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg%26'
            'oauth_signature_method%3DHMAC-SHA1%26oauth_timestamp%3D1318622958%26'
            'oauth_token%3D370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb%26'
            'oauth_version%3D1.0%26'
            'status%3DHello%2520Ladies%2520%252B%2520Gentlemen%252C%2520a%2520signed%2520OAuth%2520request%2521'
        )

    def test_signature(self, header):
        """Test the published signature is produced."""
        fields = dict(header_fields(header))

        assert fields['oauth_signature'] == 'hCtSmYh%2BiHYCEqBWrE7C7hYmtUk%3D'

    def test_header_layout(self, header):
        """Test fixed parameters first, header parameters next, signature last."""
        names = [name for name, _ in header_fields(header)]

        assert names == [
            'oauth_consumer_key',
            'oauth_nonce',
            'oauth_signature_method',
            'oauth_timestamp',
            'oauth_version',
            'oauth_token',
            'oauth_signature',
        ]
        assert ', oauth_nonce="' + NONCE + '", ' in header

    def test_request_params_not_in_header(self, header):
        """Test request parameters are signed but never rendered."""
        assert 'status' not in header
        assert 'include_entities' not in header


class TestSigner:
    """Test suite for OAuth1Signer."""

    def test_nonce_shape(self, signer):
        """Test nonce is 32 alphanumerics."""
        nonce = signer.nonce()

        assert len(nonce) == 32
        assert nonce.isalnum()

    def test_nonce_fresh(self, signer):
        """Test consecutive nonces differ."""
        assert signer.nonce() != signer.nonce()

    def test_nonce_deterministic_with_seed(self):
        """Test injected rng makes nonces reproducible."""
        first = OAuth1Signer(rng=random.Random(7)).nonce()
        second = OAuth1Signer(rng=random.Random(7)).nonce()

        assert first == second

    def test_default_rng(self):
        """Test default random source works."""
        assert len(OAuth1Signer().nonce()) == 32

    def test_timestamp_whole_seconds(self):
        """Test timestamp truncates the clock."""
        signer = OAuth1Signer(clock=lambda: 1318622958.9)

        assert signer.timestamp() == '1318622958'

    def test_generated_nonce_and_timestamp_used(self, signer):
        """Test header carries the injected clock's time."""
        header = signer.sign('a&b', 'key', [], 'GET', 'https://example.com/')
        fields = dict(header_fields(header))

        assert fields['oauth_timestamp'] == '1318622958'
        assert len(fields['oauth_nonce']) == 32

    def test_empty_token_secret(self):
        """Test signing key with no token secret ends with '&'."""
        assert OAuth1Signer.signing_key('sec ret') == 'sec%20ret&'

    def test_header_params_encoded(self, signer):
        """Test header parameter values are percent-encoded."""
        header = signer.sign(
            'a&', 'key', [('oauth_callback', 'http://localhost/cb')], 'POST',
            'https://api.twitter.com/oauth/request_token', nonce='n', timestamp='1'
        )

        assert 'oauth_callback="http%3A%2F%2Flocalhost%2Fcb"' in header

    def test_method_case_insensitive(self, signer):
        """Test lowercase and uppercase methods sign alike."""
        lower = signer.sign('a&b', 'key', [], 'post', URI, PARAMS, nonce='n', timestamp='1')
        upper = signer.sign('a&b', 'key', [], 'POST', URI, PARAMS, nonce='n', timestamp='1')

        assert lower == upper

    def test_uri_query_is_signed(self, signer):
        """Test query in the URI signs like explicit parameters."""
        inline = signer.sign('a&b', 'key', [], 'GET', URI + '?count=5', nonce='n', timestamp='1')
        explicit = signer.sign('a&b', 'key', [], 'GET', URI, [('count', '5')], nonce='n', timestamp='1')

        assert inline == explicit

    def test_params_change_signature(self, signer):
        """Test request parameters take part in the signature."""
        plain = signer.sign('a&b', 'key', [], 'GET', URI, nonce='n', timestamp='1')
        with_params = signer.sign('a&b', 'key', [], 'GET', URI, [('q', 'x')], nonce='n', timestamp='1')

        assert plain != with_params

    def test_param_order_irrelevant(self, signer):
        """Test canonical ordering makes input order irrelevant."""
        forward = signer.sign('a&b', 'key', [], 'GET', URI, PARAMS, nonce='n', timestamp='1')
        backward = signer.sign('a&b', 'key', [], 'GET', URI, PARAMS[::-1], nonce='n', timestamp='1')

        assert forward == backward
