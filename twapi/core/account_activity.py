"""
Account Activity webhook helpers.

Twitter proves webhook ownership with a CRC challenge and signs every
delivered event with HMAC-SHA256 of the body, keyed by the consumer secret.
"""
import base64
import hmac
import json

from Crypto.Hash import HMAC, SHA256


def calc_hmac(key: str, message: str) -> str:
    """Returns base64(HMAC-SHA256(key, message))."""
    mac = HMAC.new(key.encode('utf-8'), digestmod=SHA256)
    mac.update(message.encode('utf-8'))
    return base64.b64encode(mac.digest()).decode('ascii')


def check_signature(signature: str, consumer_secret: str, body: str) -> bool:
    """
    Verify the x-twitter-webhooks-signature header of a delivered event.

    Args:
        signature: Header value, 'sha256=<base64>'
        consumer_secret: Application secret
        body: Raw request body

    Returns:
        True if the signature matches
    """
    expected = f"sha256={calc_hmac(consumer_secret, body)}"
    return hmac.compare_digest(signature.encode('utf-8'), expected.encode('utf-8'))


def make_crc_token_response(consumer_secret: str, crc_token: str) -> str:
    """Build the JSON body answering a GET ?crc_token= challenge."""
    token = calc_hmac(consumer_secret, crc_token)
    return json.dumps({'response_token': f"sha256={token}"})
