"""
Sign requests with OAuth1 credentials
"""
import asyncio
from twapi import TwitterClient, OAuth1Credentials, OAuth1Signer


async def main():
    # Reads TWAPI_CONSUMER_KEY, TWAPI_CONSUMER_SECRET,
    # TWAPI_ACCESS_TOKEN and TWAPI_ACCESS_TOKEN_SECRET
    credentials = OAuth1Credentials.from_env()

    # Just the header, for use with any HTTP library
    header = credentials.authorization_header(
        'GET',
        'https://api.twitter.com/1.1/search/tweets.json',
        {'q': 'python'}
    )
    print(f"Authorization: {header}")

    # Fixed nonce and timestamp reproduce a signature exactly
    signer = OAuth1Signer()
    header = signer.sign(
        credentials.signing_key,
        credentials.consumer_key,
        [('oauth_token', credentials.token)],
        'POST',
        'https://api.twitter.com/1.1/statuses/update.json',
        [('status', 'Hello')],
        nonce='kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg',
        timestamp='1318622958'
    )
    print(header)

    # Or let the client sign every call
    async with TwitterClient(credentials) as client:
        response = await client.verify_credentials()
        if response.is_success:
            print(f"Logged in as @{response.json['screen_name']}")
        else:
            print(f"HTTP {response.status_code}: {response.text}")

        response = await client.get(
            client.endpoints.api('search/tweets.json'),
            {'q': 'python', 'count': 10}
        )
        for status in (response.json or {}).get('statuses', []):
            print(status['text'])


if __name__ == "__main__":
    asyncio.run(main())
