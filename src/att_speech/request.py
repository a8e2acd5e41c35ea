import re
from dataclasses import dataclass
from typing import BinaryIO, Dict, NamedTuple, Optional, Union

from .errors import ValidationError

Payload = Union[bytes, bytearray, BinaryIO]

_WORD_BOUNDARY = re.compile(r"(?<=.)(?=[A-Z])")


def to_dash(value: str) -> str:
    """Convert a CapWords field name into a header name.

    Only the boundary after the first capitalized run is dashed, so
    ``ContentType`` becomes ``Content-Type`` and ``XSpeechContext`` becomes
    ``X-SpeechContext``.
    """
    if "-" in value:
        return value
    words = _WORD_BOUNDARY.split(value)
    if len(words) < 2:
        return value
    return words[0] + "-" + "".join(words[1:])


class HeaderField(NamedTuple):
    attribute: str
    name: str
    header: str


def _field(attribute: str, name: str) -> HeaderField:
    return HeaderField(attribute, name, to_dash(name))


# Declaration order of APIRequest; Data, Text and Filename are payload, never headers.
HEADER_FIELDS = (
    _field("authorization", "Authorization"),
    _field("content_type", "ContentType"),
    _field("accept", "Accept"),
    _field("transfer_encoding", "TransferEncoding"),
    _field("user_agent", "UserAgent"),
    _field("x_arg", "XArg"),
    _field("content_language", "ContentLanguage"),
    _field("content_length", "ContentLength"),
    _field("x_speech_context", "XSpeechContext"),
    _field("x_speech_sub_context", "XSpeechSubContext"),
)
PAYLOAD_FIELDS = frozenset({"Data", "Text", "Filename"})

# Folded into X-Arg as ",Name=value" in this order instead of being sent as headers.
TTS_ARGUMENTS = (
    ("tempo", "Tempo"),
    ("voice_name", "VoiceName"),
    ("volume", "Volume"),
)


@dataclass
class APIRequest:
    """Parameters of a single Speech API call.

    Build one with ``SpeechClient.new_request`` so the resource defaults and
    bearer token are filled in, then set the payload fields. When extending
    ``x_arg``, append to it: replacing it drops the ClientApp, ClientVersion,
    DeviceType and DeviceOs values.

    ``data`` is read to completion by the call that consumes it; reset or
    replace a stream before reusing the request.
    """

    authorization: str = ""
    content_type: str = ""
    accept: str = ""
    voice_name: str = ""
    text: str = ""
    volume: str = ""
    tempo: str = ""
    transfer_encoding: str = ""
    user_agent: str = ""
    x_arg: str = ""
    filename: str = ""
    content_language: str = ""
    content_length: str = ""
    x_speech_context: str = ""
    x_speech_sub_context: str = ""
    data: Optional[Payload] = None

    def headers(self) -> Dict[str, str]:
        """Return every header derived from the request, empty values included."""
        headers: Dict[str, str] = {}
        for field in HEADER_FIELDS:
            headers[field.header] = getattr(self, field.attribute)
        extra = ""
        for attribute, name in TTS_ARGUMENTS:
            value = getattr(self, attribute)
            if value:
                extra += f",{name}={value}"
        headers["X-Arg"] += extra
        return headers

    def wire_headers(self) -> Dict[str, str]:
        """Return the headers that carry a value.

        Raises:
            ValidationError: if a header value is not ASCII
        """
        fields = [(field.attribute, field.name) for field in HEADER_FIELDS] + list(TTS_ARGUMENTS)
        for attribute, name in fields:
            try:
                getattr(self, attribute).encode("ascii")
            except UnicodeEncodeError:
                raise ValidationError(f"{name} must contain only ASCII characters", field=name) from None
        return {name: value for name, value in self.headers().items() if value}

    def read_data(self) -> bytes:
        """Read the audio payload to completion."""
        if self.data is None:
            return b""
        if isinstance(self.data, (bytes, bytearray)):
            return bytes(self.data)
        return self.data.read()
