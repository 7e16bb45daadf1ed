"""twapi CLI - Main commands."""
import asyncio
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

app = typer.Typer(
    name="twapi",
    help="Twitter API signing and media upload CLI",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def parse_params(params: Optional[List[str]]) -> List[Tuple[str, str]]:
    """Turn name=value arguments into pairs, keeping order and repeats."""
    pairs = []
    for param in params or []:
        name, sep, value = param.partition('=')
        if not sep or not name:
            raise typer.BadParameter(f"expected name=value, got '{param}'")
        pairs.append((name, value))
    return pairs


def _credentials(consumer_key, consumer_secret, token='', token_secret=''):
    from twapi import OAuth1Credentials
    return OAuth1Credentials(
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token=token or '',
        token_secret=token_secret or ''
    )


ConsumerKey = typer.Option(..., "--consumer-key", envvar="TWAPI_CONSUMER_KEY", help="Application consumer key")
ConsumerSecret = typer.Option(..., "--consumer-secret", envvar="TWAPI_CONSUMER_SECRET", help="Application consumer secret")
AccessToken = typer.Option(None, "--token", envvar="TWAPI_ACCESS_TOKEN", help="User access token")
AccessTokenSecret = typer.Option(None, "--token-secret", envvar="TWAPI_ACCESS_TOKEN_SECRET", help="User access token secret")


@app.command("request-token")
def request_token(
    consumer_key: str = ConsumerKey,
    consumer_secret: str = ConsumerSecret,
    callback: str = typer.Option("oob", "--callback", "-c", help="oauth_callback ('oob' for PIN flow)"),
    access_type: str = typer.Option(None, "--access-type", help="x_auth_access_type (read or write)"),
):
    """Obtain a request token and the authorization URL."""
    from twapi import AiohttpTransport, TokenExchanger, TwapiException

    async def do_request():
        async with AiohttpTransport() as transport:
            exchanger = TokenExchanger(transport, consumer_key, consumer_secret)
            try:
                token = await exchanger.request_token(callback, access_type)
            except TwapiException as e:
                console.print(f"[red]Request token failed: {e}[/red]")
                raise typer.Exit(1)

        console.print(f"[bold]oauth_token:[/bold] {token.oauth_token}")
        console.print(f"[bold]oauth_token_secret:[/bold] {token.oauth_token_secret}")
        console.print(f"Authorize at: [cyan]{token.authorize_uri}[/cyan]")

    run_async(do_request())


@app.command("access-token")
def access_token(
    oauth_token: str = typer.Option(..., "--oauth-token", help="Request token"),
    oauth_token_secret: str = typer.Option(..., "--oauth-token-secret", help="Request token secret"),
    verifier: str = typer.Option(..., "--verifier", "-v", help="oauth_verifier or PIN"),
    consumer_key: str = ConsumerKey,
    consumer_secret: str = ConsumerSecret,
):
    """Exchange an authorized request token for an access token."""
    from twapi import AiohttpTransport, TokenExchanger, TwapiException

    async def do_exchange():
        async with AiohttpTransport() as transport:
            exchanger = TokenExchanger(transport, consumer_key, consumer_secret)
            try:
                access = await exchanger.access_token(oauth_token, oauth_token_secret, verifier)
            except TwapiException as e:
                console.print(f"[red]Access token failed: {e}[/red]")
                raise typer.Exit(1)

        table = Table()
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("screen_name", access.screen_name)
        table.add_row("user_id", access.user_id)
        table.add_row("TWAPI_ACCESS_TOKEN", access.oauth_token)
        table.add_row("TWAPI_ACCESS_TOKEN_SECRET", access.oauth_token_secret)
        console.print(table)

    run_async(do_exchange())


@app.command()
def sign(
    method: str = typer.Argument(..., help="HTTP method"),
    uri: str = typer.Argument(..., help="Request URI"),
    params: Optional[List[str]] = typer.Argument(None, help="Signed parameters as name=value"),
    consumer_key: str = ConsumerKey,
    consumer_secret: str = ConsumerSecret,
    token: str = AccessToken,
    token_secret: str = AccessTokenSecret,
    nonce: str = typer.Option(None, "--nonce", help="Fixed oauth_nonce"),
    timestamp: str = typer.Option(None, "--timestamp", help="Fixed oauth_timestamp"),
):
    """Print the OAuth1 Authorization header for a request."""
    credentials = _credentials(consumer_key, consumer_secret, token, token_secret)
    header_params = [('oauth_token', credentials.token)] if credentials.token else []

    header = credentials.signer.sign(
        credentials.signing_key,
        credentials.consumer_key,
        header_params,
        method,
        uri,
        parse_params(params),
        nonce=nonce,
        timestamp=timestamp
    )
    typer.echo(header)


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Media file to upload", exists=True),
    media_type: str = typer.Option(..., "--media-type", "-t", help="MIME type, e.g. video/mp4"),
    category: str = typer.Option("tweet_video", "--category", "-c", help="media_category"),
    owners: str = typer.Option(None, "--owners", help="additional_owners (comma separated)"),
    max_polls: int = typer.Option(None, "--max-polls", help="Give up after this many STATUS checks"),
    max_wait: float = typer.Option(None, "--max-wait", help="Give up after waiting this many seconds"),
    consumer_key: str = ConsumerKey,
    consumer_secret: str = ConsumerSecret,
    token: str = AccessToken,
    token_secret: str = AccessTokenSecret,
):
    """Upload media with the chunked INIT/APPEND/FINALIZE sequence."""
    from twapi import TwitterClient, TwapiException, UploadProgress

    async def do_upload():
        credentials = _credentials(consumer_key, consumer_secret, token, token_secret)
        async with TwitterClient(credentials) as client:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file_path.name}", total=100)

                def on_progress(p: UploadProgress):
                    progress.update(task, completed=p.percentage)

                try:
                    result = await client.upload_media_chunked(
                        file_path,
                        media_type,
                        category,
                        additional_owners=owners,
                        max_poll_attempts=max_polls,
                        max_processing_wait=max_wait,
                        progress_callback=on_progress
                    )
                except TwapiException as e:
                    console.print(f"[red]Upload failed: {e}[/red]")
                    raise typer.Exit(1)

        if not result.is_success:
            error = result.processing_info.error if result.processing_info else None
            console.print(f"[red]Processing failed for {result.media_id}: {error}[/red]")
            raise typer.Exit(1)

        console.print(f"[green]Uploaded:[/green] {file_path.name}")
        console.print(f"media_id: {result.media_id}")
        console.print(f"Segments: {result.segments}, status checks: {result.status_checks}")

    run_async(do_upload())


@app.command()
def status(
    media_id: str = typer.Argument(..., help="media_id_string"),
    consumer_key: str = ConsumerKey,
    consumer_secret: str = ConsumerSecret,
    token: str = AccessToken,
    token_secret: str = AccessTokenSecret,
):
    """Show the processing status of an uploaded medium."""
    from twapi import TwitterClient, TwapiException

    async def do_status():
        credentials = _credentials(consumer_key, consumer_secret, token, token_secret)
        async with TwitterClient(credentials) as client:
            try:
                response = await client.media_status(media_id)
            except TwapiException as e:
                console.print(f"[red]Status failed: {e}[/red]")
                raise typer.Exit(1)

        if not response.is_success:
            console.print(f"[red]HTTP {response.status_code}: {response.text}[/red]")
            raise typer.Exit(1)
        console.print_json(response.text)

    run_async(do_status())


@app.command()
def crc(
    crc_token: str = typer.Argument(..., help="crc_token sent by the webhook challenge"),
    consumer_secret: str = ConsumerSecret,
):
    """Print the JSON answer to an Account Activity CRC challenge."""
    from twapi.core.account_activity import make_crc_token_response

    typer.echo(make_crc_token_response(consumer_secret, crc_token))


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
