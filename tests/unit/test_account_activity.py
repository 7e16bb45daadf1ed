"""Tests for Account Activity webhook helpers."""
import base64
import hashlib
import hmac
import json

from twapi.core.account_activity import calc_hmac, check_signature, make_crc_token_response


class TestAccountActivity:
    """Test suite for CRC and signature helpers."""

    def test_calc_hmac(self):
        """Test base64 HMAC-SHA256."""
        expected = base64.b64encode(
            hmac.new(b'Jefe', b'what do ya want for nothing?', hashlib.sha256).digest()
        ).decode('ascii')

        assert calc_hmac('Jefe', 'what do ya want for nothing?') == expected

    def test_crc_response(self):
        """Test CRC answer is sha256=<hmac of the token>."""
        body = json.loads(make_crc_token_response('consumer-secret', 'crc-token'))

        assert body == {'response_token': f"sha256={calc_hmac('consumer-secret', 'crc-token')}"}

    def test_check_signature_valid(self):
        """Test matching signature."""
        payload = '{"for_user_id": "2244994945"}'
        signature = f"sha256={calc_hmac('secret', payload)}"

        assert check_signature(signature, 'secret', payload)

    def test_check_signature_tampered(self):
        """Test body change invalidates the signature."""
        signature = f"sha256={calc_hmac('secret', 'original')}"

        assert not check_signature(signature, 'secret', 'tampered')

    def test_check_signature_wrong_secret(self):
        """Test wrong secret."""
        signature = f"sha256={calc_hmac('secret', 'body')}"

        assert not check_signature(signature, 'other', 'body')
