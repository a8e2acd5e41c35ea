"""
Example: convert text to speech.

Environment variables:
- ATT_APP_KEY
- ATT_APP_SECRET
- ATT_API_BASE (optional)
"""
from pathlib import Path

from att_speech import Resource, SpeechClient, SpeechConfig, SpeechError


def main() -> None:
    config = SpeechConfig.from_env()
    if not (config.app_key and config.app_secret):
        raise SystemExit("Set ATT_APP_KEY and ATT_APP_SECRET.")

    with SpeechClient(config) as client:
        try:
            client.set_auth_tokens()
            request = client.new_request(Resource.TTS)
            request.accept = "audio/x-wav"
            request.text = "I want to be an airborne ranger, I want to live the life of danger."
            audio = client.text_to_speech(request)
        except SpeechError as exc:
            raise SystemExit(str(exc))

    output = Path("tts_test.wav")
    output.write_bytes(audio)
    print(f"Wrote synthesized audio to {output}")


if __name__ == "__main__":
    main()
