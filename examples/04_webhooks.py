"""
Answer Account Activity CRC challenges and verify event signatures
"""
import os
from aiohttp import web
from twapi.core.account_activity import check_signature, make_crc_token_response

CONSUMER_SECRET = os.environ['TWAPI_CONSUMER_SECRET']


async def crc(request):
    body = make_crc_token_response(CONSUMER_SECRET, request.query['crc_token'])
    return web.Response(text=body, content_type='application/json')


async def event(request):
    body = await request.text()
    signature = request.headers.get('x-twitter-webhooks-signature', '')
    if not check_signature(signature, CONSUMER_SECRET, body):
        return web.Response(status=403)
    print(body)
    return web.Response(status=200)


app = web.Application()
app.add_routes([web.get('/webhook', crc), web.post('/webhook', event)])


if __name__ == "__main__":
    web.run_app(app, port=8080)
