"""
Python client for the AT&T Speech REST API.

Covers speech-to-text, grammar-customized speech-to-text and text-to-speech,
plus the OAuth client-credentials tokens those calls need.
"""
from .client import Resource, SpeechClient
from .config import VERSION, SpeechConfig
from .errors import (
    AuthenticationError,
    RemoteServiceError,
    ResponseParseError,
    ServiceErrorPayload,
    SpeechError,
    TransportError,
    UnparseableRemoteError,
    ValidationError,
)
from .forms import build_form
from .models import Hypothesis, OutComposite, RecognitionResult, Token
from .request import APIRequest, to_dash

__version__ = VERSION

__all__ = [
    "APIRequest",
    "AuthenticationError",
    "Hypothesis",
    "OutComposite",
    "RecognitionResult",
    "RemoteServiceError",
    "Resource",
    "ResponseParseError",
    "ServiceErrorPayload",
    "SpeechClient",
    "SpeechConfig",
    "SpeechError",
    "Token",
    "TransportError",
    "UnparseableRemoteError",
    "VERSION",
    "ValidationError",
    "build_form",
    "to_dash",
]
