import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from ._logging import get_logger

logger = get_logger(__name__)

UNPARSEABLE_ERROR_MESSAGE = "Could not parse JSON error from the AT&T Speech API"


class SpeechError(Exception):
    """Base class for every error raised by att_speech."""


class ValidationError(SpeechError, ValueError):
    """Raised when a required request field is missing, before any network call."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class TransportError(SpeechError):
    """Raised when the underlying HTTP call fails (connection, DNS, TLS, timeout)."""


class AuthenticationError(SpeechError):
    """Raised when an OAuth token cannot be acquired or is not cached."""


class ResponseParseError(SpeechError):
    """Raised when a successful response body cannot be decoded."""


class RemoteServiceError(SpeechError):
    """Raised when the Speech API returns a non-200 response."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        *,
        message_id: str = "",
        text: str = "",
        variables: str = "",
        details: Optional[dict] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message_id = message_id
        self.text = text
        self.variables = variables
        self.details = details or {}


class UnparseableRemoteError(RemoteServiceError):
    """Raised when a non-200 body matches neither known error shape."""


@dataclass(frozen=True)
class ExceptionDetail:
    message_id: str = ""
    text: str = ""
    variables: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "ExceptionDetail":
        if not isinstance(data, dict):
            return cls()
        return cls(
            message_id=str(data.get("MessageId") or ""),
            text=str(data.get("Text") or ""),
            variables=str(data.get("Variables") or ""),
        )

    def is_empty(self) -> bool:
        return not (self.message_id or self.text or self.variables)

    def message(self) -> str:
        return f"{self.message_id} - {self.text} - {self.variables}"


@dataclass(frozen=True)
class ServiceErrorPayload:
    """The ``RequestError`` document returned with failed requests.

    Exactly one of the two shapes is normally populated.
    """

    service_exception: ExceptionDetail = field(default_factory=ExceptionDetail)
    policy_exception: ExceptionDetail = field(default_factory=ExceptionDetail)

    @classmethod
    def from_json(cls, data: Any) -> "ServiceErrorPayload":
        request_error = data.get("RequestError") if isinstance(data, dict) else None
        if not isinstance(request_error, dict):
            return cls()
        return cls(
            service_exception=ExceptionDetail.from_json(request_error.get("ServiceException")),
            policy_exception=ExceptionDetail.from_json(request_error.get("PolicyException")),
        )

    def detail(self) -> Optional[ExceptionDetail]:
        """Return the populated shape, preferring the service exception."""
        if not self.service_exception.is_empty():
            return self.service_exception
        if not self.policy_exception.is_empty():
            return self.policy_exception
        return None

    def message(self) -> str:
        detail = self.detail()
        if detail is None:
            return UNPARSEABLE_ERROR_MESSAGE
        return detail.message()


def map_error(status_code: Optional[int], body: Union[bytes, str]) -> RemoteServiceError:
    """Turn the body of a failed response into a RemoteServiceError.

    The STTC endpoint is known to answer some failures with invalid JSON; those
    bodies, and bodies matching neither exception shape, produce an
    UnparseableRemoteError with a fixed message.
    """
    details: Dict = {}
    try:
        decoded = json.loads(body)
    except ValueError:
        decoded = None
    if isinstance(decoded, dict):
        details = decoded

    detail = ServiceErrorPayload.from_json(details).detail()
    if detail is None:
        logger.warning("Unparseable error payload (status=%s)", status_code)
        return UnparseableRemoteError(UNPARSEABLE_ERROR_MESSAGE, status_code, details=details)

    message = detail.message()
    logger.warning("Speech API error (status=%s): %s", status_code, message)
    return RemoteServiceError(
        message,
        status_code,
        message_id=detail.message_id,
        text=detail.text,
        variables=detail.variables,
        details=details,
    )
