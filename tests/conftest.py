import json

import httpx
import pytest

from att_speech import SpeechClient, SpeechConfig
from att_speech.client import client_x_arg

API_BASE = "https://speech.test"

OAUTH_JSON = {
    "access_token": "123",
    "token_type": "bearer",
    "expires_in": 500,
    "refresh_token": "456",
}

RECOGNITION_JSON = {
    "Recognition": {
        "Info": {"metrics": {"audioBytes": 92102, "audioTime": 11.5100002}},
        "NBest": [
            {
                "Confidence": 0.667999999,
                "Grade": "accept",
                "Hypothesis": "press the star key",
                "LanguageId": "en-US",
                "ResultText": "Press the star key.",
                "WordScores": [1, 1, 0.449, 0.37],
                "Words": ["Press", "the", "star", "key."],
            }
        ],
        "ResponseId": "cf928a1adb259abf409da1993543fcdc",
        "Status": "OK",
    }
}

CUSTOM_RECOGNITION_JSON = {
    "Recognition": {
        "NBest": [
            {
                "Confidence": 0.78,
                "Grade": "accept",
                "Hypothesis": "greeting key",
                "LanguageId": "en-US",
                "ResultText": "greeting key",
                "WordScores": [0.689, 0.819],
                "Words": ["greeting", "key"],
            }
        ],
        "ResponseId": "c7a420e9cdc50645412311b7c0365e34",
        "Status": "OK",
    }
}

CONTENT_TYPE_ERROR_JSON = {
    "RequestError": {
        "ServiceException": {
            "MessageId": "SVC0002",
            "Text": "Invalid input value for message part %1",
            "Variables": "Content-Type",
        }
    }
}

POLICY_ERROR_JSON = {
    "RequestError": {
        "PolicyException": {
            "MessageId": "SVC0002",
            "Text": "Policy error",
            "Variables": "Content-Type",
        }
    }
}

SRGS_XML = """<grammar root="top" xml:lang="en-US">
  <rule id="CONTACT"><one-of><item>star</item><item>key</item></one-of></rule>
  <rule id="top" scope="public">
    <item><one-of><item>greeting</item><item>the administration menu</item></one-of></item>
    <ruleref uri="#CONTACT"/>
  </rule>
</grammar>"""

PLS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<lexicon version="1.0" alphabet="sampa" xml:lang="en-US">
  <lexeme><grapheme>star</grapheme><phoneme>tS { n</phoneme></lexeme>
</lexicon>"""

TTS_AUDIO = b"RIFF\x24\x00\x00\x00WAVEfmt "

DEFAULT_X_ARG = client_x_arg("PyLibForATTSpeech")


def check_headers(request: httpx.Request) -> None:
    assert request.headers["X-Arg"].startswith(DEFAULT_X_ARG)
    assert request.headers["User-Agent"] == "att-speech-python/0.1"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["Authorization"] == "Bearer 123"


def speech_api(request: httpx.Request) -> httpx.Response:
    """Fake Speech API routing on the request path."""
    path = request.url.path
    if path == "/oauth/access_token":
        return httpx.Response(200, json=OAUTH_JSON)
    if path == "/speech/v3/speechToTextCustom":
        check_headers(request)
        return httpx.Response(200, json=CUSTOM_RECOGNITION_JSON)
    if path == "/speech/v3/speechToText":
        check_headers(request)
        if request.headers["Content-Type"] == "foo/bar":
            return httpx.Response(400, json=CONTENT_TYPE_ERROR_JSON)
        return httpx.Response(200, json=RECOGNITION_JSON)
    if path == "/speech/v3/textToSpeech":
        check_headers(request)
        if request.headers["Content-Type"] == "foo/bar":
            return httpx.Response(400, content=json.dumps(CONTENT_TYPE_ERROR_JSON).encode())
        return httpx.Response(200, content=TTS_AUDIO)
    return httpx.Response(404)


def make_client(handler=speech_api) -> SpeechClient:
    config = SpeechConfig(app_key="foo", app_secret="bar", api_base=API_BASE)
    return SpeechClient(config, transport=httpx.MockTransport(handler))


@pytest.fixture
def client():
    speech_client = make_client()
    speech_client.set_auth_tokens()
    yield speech_client
    speech_client.close()
