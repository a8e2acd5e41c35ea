"""
Example: transcribe a WAV file.

Environment variables:
- ATT_APP_KEY
- ATT_APP_SECRET
- ATT_API_BASE (optional)

Usage: python stt.py path/to/audio.wav
"""
import sys

from att_speech import Resource, SpeechClient, SpeechConfig, SpeechError


def main() -> None:
    if len(sys.argv) != 2:
        raise SystemExit("usage: stt.py <audio.wav>")
    config = SpeechConfig.from_env()
    if not (config.app_key and config.app_secret):
        raise SystemExit("Set ATT_APP_KEY and ATT_APP_SECRET.")

    with SpeechClient(config) as client, open(sys.argv[1], "rb") as audio:
        try:
            client.set_auth_tokens()
            request = client.new_request(Resource.STT)
            request.content_type = "audio/x-wav"
            request.data = audio
            result = client.speech_to_text(request)
        except SpeechError as exc:
            raise SystemExit(str(exc))

    print(f"{result.status}: {result.text}")


if __name__ == "__main__":
    main()
