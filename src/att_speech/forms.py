from typing import List, Tuple

import httpx

from .request import APIRequest

DICTIONARY_FILENAME = "speech_alpha.pls"
DICTIONARY_CONTENT_TYPE = "application/pls+xml"
GRAMMAR_CONTENT_TYPE = "application/srgs+xml"
FORM_MEDIA_TYPE = "multipart/form-data"
SRGS_AUDIO_MEDIA_TYPE = "multipart/x-srgs-audio"


def build_form(request: APIRequest, grammar: str, dictionary: str = "") -> Tuple[bytes, str]:
    """Build the multipart body of a speechToTextCustom request.

    Parts are ``x-dictionary`` (only when a dictionary is given), ``x-grammar``
    and ``x-voice``, in that order. The audio payload is read to completion.

    Returns:
        The encoded body and its content type, ``multipart/x-srgs-audio`` with
        the generated boundary.
    """
    files: List[Tuple[str, tuple]] = []
    if dictionary:
        files.append(
            ("x-dictionary", (DICTIONARY_FILENAME, (dictionary + "\n").encode("utf-8"), DICTIONARY_CONTENT_TYPE))
        )
    files.append(("x-grammar", (None, (grammar + "\n").encode("utf-8"), GRAMMAR_CONTENT_TYPE)))
    files.append(("x-voice", (request.filename, request.read_data(), request.content_type)))

    # Only used for httpx's multipart encoder, never sent.
    encoded = httpx.Request("POST", "http://localhost/", files=files)
    body = encoded.read()
    content_type = encoded.headers["Content-Type"].replace(FORM_MEDIA_TYPE, SRGS_AUDIO_MEDIA_TYPE, 1)
    return body, content_type
