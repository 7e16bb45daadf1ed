"""
Upload media to Twitter
"""
import asyncio
from twapi import TwitterClient, OAuth1Credentials, ProcessingTimeoutError, UploadStageError


async def main():
    async with TwitterClient(OAuth1Credentials.from_env()) as client:

        # Small image in a single request
        response = await client.upload_media("photo.jpg")
        print(f"Image media_id: {response.json['media_id_string']}")

        # Video with INIT/APPEND/FINALIZE and processing
        def on_progress(progress):
            print(f"Progress: {progress.percentage:.1f}%")

        try:
            result = await client.upload_media_chunked(
                "clip.mp4",
                media_type="video/mp4",
                media_category="tweet_video",
                max_processing_wait=300,
                progress_callback=on_progress
            )
        except UploadStageError as e:
            print(f"{e.stage} failed with HTTP {e.status_code}")
            return
        except ProcessingTimeoutError as e:
            print(f"Still processing after {e.attempts} checks")
            return

        if not result.is_success:
            print(f"Processing failed: {result.processing_info.error}")
            return

        # Alt text, then tweet
        await client.create_media_metadata(result.media_id, "A short clip")
        response = await client.post(
            client.endpoints.api('statuses/update.json'),
            form={'status': 'Uploaded with twapi', 'media_ids': result.media_id}
        )
        print(f"Tweeted: HTTP {response.status_code}")


if __name__ == "__main__":
    asyncio.run(main())
