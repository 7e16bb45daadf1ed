"""
Three-legged OAuth: obtain user credentials with a PIN
"""
import asyncio
import os
from twapi import AiohttpTransport, TokenExchanger, TwitterClient


async def main():
    consumer_key = os.environ['TWAPI_CONSUMER_KEY']
    consumer_secret = os.environ['TWAPI_CONSUMER_SECRET']

    async with AiohttpTransport() as transport:
        exchanger = TokenExchanger(transport, consumer_key, consumer_secret)

        # 'oob' selects the PIN flow
        request = await exchanger.request_token('oob', access_type='write')
        print(f"Open {request.authorize_uri} and authorize the app")
        pin = input("PIN: ").strip()

        access = await exchanger.access_token(
            request.oauth_token, request.oauth_token_secret, pin
        )
        print(f"Authorized @{access.screen_name} ({access.user_id})")

    credentials = access.to_credentials(consumer_key, consumer_secret)
    async with TwitterClient(credentials) as client:
        response = await client.verify_credentials()
        print(response.json)


if __name__ == "__main__":
    asyncio.run(main())
