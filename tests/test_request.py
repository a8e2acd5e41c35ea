import io

import pytest

from att_speech import APIRequest, Resource, ValidationError, to_dash
from att_speech.request import HEADER_FIELDS, PAYLOAD_FIELDS

from conftest import DEFAULT_X_ARG


@pytest.mark.parametrize(
    "name, header",
    [
        ("Foobar", "Foobar"),
        ("FooBar", "Foo-Bar"),
        ("FooBarBaz", "Foo-BarBaz"),
        ("Text", "Text"),
        ("ContentType", "Content-Type"),
        ("TransferEncoding", "Transfer-Encoding"),
        ("XArg", "X-Arg"),
        ("XSpeechContext", "X-SpeechContext"),
    ],
)
def test_to_dash(name, header):
    assert to_dash(name) == header


def test_to_dash_is_idempotent():
    assert to_dash(to_dash("ContentLanguage")) == "Content-Language"


def test_header_table_excludes_payload_fields():
    names = {field.name for field in HEADER_FIELDS}
    assert not names & PAYLOAD_FIELDS
    assert not names & {"VoiceName", "Volume", "Tempo"}
    assert [field.header for field in HEADER_FIELDS][:3] == ["Authorization", "Content-Type", "Accept"]


def test_tts_arguments_added_to_x_arg(client):
    request = client.new_request(Resource.TTS)
    request.content_type = "audio/x-wav"
    request.text = "foobar"
    request.voice_name = "alberto"
    request.volume = "100"
    request.tempo = "0"

    assert request.headers()["X-Arg"] == DEFAULT_X_ARG + ",Tempo=0,VoiceName=alberto,Volume=100"


def test_additional_x_arg_params_preserved(client):
    request = client.new_request(Resource.TTS)
    request.voice_name = "alberto"
    request.volume = "100"
    request.tempo = "0"
    request.x_arg += ",ShowWordTokens=true"

    assert request.headers()["X-Arg"] == (
        DEFAULT_X_ARG + ",ShowWordTokens=true,Tempo=0,VoiceName=alberto,Volume=100"
    )


def test_headers_include_empty_values_and_wire_headers_drop_them():
    request = APIRequest(accept="application/json", x_arg="ClientApp=test")
    request.filename = "test.wav"
    request.text = "hello"

    headers = request.headers()
    assert headers["Content-Type"] == ""
    assert headers["X-SpeechContext"] == ""
    assert "Text" not in headers
    assert "Filename" not in headers
    assert "Data" not in headers

    assert request.wire_headers() == {"Accept": "application/json", "X-Arg": "ClientApp=test"}


def test_x_arg_only_from_tts_arguments():
    request = APIRequest(tempo="2")
    assert request.wire_headers() == {"X-Arg": ",Tempo=2"}


def test_read_data_accepts_bytes_and_streams():
    assert APIRequest().read_data() == b""
    assert APIRequest(data=b"abc").read_data() == b"abc"
    assert APIRequest(data=bytearray(b"abc")).read_data() == b"abc"

    stream = io.BytesIO(b"abc")
    request = APIRequest(data=stream)
    assert request.read_data() == b"abc"
    assert request.read_data() == b""


@pytest.mark.parametrize("header", ["Content-Type", "X-Arg", "Foo-Bar", "X-SpeechContext"])
def test_to_dash_leaves_header_names_alone(header):
    assert to_dash(header) == header


def test_non_ascii_header_value_rejected():
    request = APIRequest(x_arg="ClientApp=test", voice_name="crystál")

    with pytest.raises(ValidationError) as exc:
        request.wire_headers()
    assert exc.value.field == "VoiceName"
