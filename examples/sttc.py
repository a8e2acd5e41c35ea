"""
Example: transcribe a WAV file against a custom grammar and dictionary.

Environment variables:
- ATT_APP_KEY
- ATT_APP_SECRET
- ATT_API_BASE (optional)

Usage: python sttc.py path/to/audio.wav
"""
import os
import sys

from att_speech import Resource, SpeechClient, SpeechConfig, SpeechError

PLS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<lexicon version="1.0" alphabet="sampa" xml:lang="en-US">
  <lexeme>
    <grapheme>star</grapheme>
    <phoneme>tS { n</phoneme>
  </lexeme>
</lexicon>"""

SRGS_XML = """<grammar root="top" xml:lang="en-US">
  <rule id="CONTACT">
    <one-of>
      <item>star</item>
      <item>key</item>
    </one-of>
  </rule>
  <rule id="top" scope="public">
    <item>
      <one-of>
        <item>greeting</item>
        <item>the administration menu</item>
      </one-of>
    </item>
    <ruleref uri="#CONTACT"/>
  </rule>
</grammar>"""


def main() -> None:
    if len(sys.argv) != 2:
        raise SystemExit("usage: sttc.py <audio.wav>")
    config = SpeechConfig.from_env()
    if not (config.app_key and config.app_secret):
        raise SystemExit("Set ATT_APP_KEY and ATT_APP_SECRET.")

    with SpeechClient(config) as client, open(sys.argv[1], "rb") as audio:
        try:
            client.set_auth_tokens()
            request = client.new_request(Resource.STTC)
            request.content_type = "audio/x-wav"
            request.filename = os.path.basename(sys.argv[1])
            request.data = audio
            result = client.speech_to_text_custom(request, SRGS_XML, PLS_XML)
        except SpeechError as exc:
            raise SystemExit(str(exc))

    for hypothesis in result.nbest:
        print(f"{hypothesis.confidence:.2f} {hypothesis.result_text}")


if __name__ == "__main__":
    main()
