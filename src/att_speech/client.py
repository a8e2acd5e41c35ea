import platform
import sys
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Union

import httpx

from ._logging import get_logger
from .config import VERSION, SpeechConfig
from .errors import (
    AuthenticationError,
    ResponseParseError,
    TransportError,
    ValidationError,
    map_error,
)
from .forms import build_form
from .models import RecognitionResult, Token
from .request import APIRequest

logger = get_logger(__name__)


class Resource(Enum):
    """Remote resources a request can be prepared for."""

    STT = "stt"
    STTC = "sttc"
    TTS = "tts"
    OAUTH = "oauth"


# Scope whose bearer token authorizes each resource.
RESOURCE_SCOPES = {
    Resource.STT: "SPEECH",
    Resource.STTC: "STTC",
    Resource.TTS: "TTS",
}


def client_x_arg(client_app: str) -> str:
    """Return the X-Arg value identifying this library and the host device."""
    return (
        f"ClientApp={client_app},"
        f"ClientVersion={VERSION},"
        f"DeviceType={platform.machine()},"
        f"DeviceOs={sys.platform}"
    )


class SpeechClient:
    """Client for the AT&T Speech REST API.

    Call ``set_auth_tokens`` once, then build each request with
    ``new_request`` and pass it to one of the speech operations. The token
    cache is not synchronized; share a client between threads only behind a
    lock.
    """

    def __init__(
        self,
        config: SpeechConfig,
        *,
        timeout: float = 15.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        config.validate()
        self.config = config
        self._tokens: Dict[str, Token] = {}
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SpeechClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def tokens(self) -> Mapping[str, Token]:
        """Cached tokens keyed by scope (read-only view)."""
        return MappingProxyType(self._tokens)

    def set_auth_tokens(self) -> None:
        """Acquire one client-credentials token per configured scope.

        The cache is replaced only when every scope succeeds; on any failure
        the previously cached tokens are kept.

        Raises:
            AuthenticationError: if a token request fails or returns an
                unusable body
        """
        headers = self.new_request(Resource.OAUTH).wire_headers()
        tokens: Dict[str, Token] = {}
        for scope in self.config.scopes:
            params = {
                "grant_type": "client_credentials",
                "client_id": self.config.app_key,
                "client_secret": self.config.app_secret,
                "scope": scope,
            }
            logger.debug("Requesting OAuth token (scope=%s)", scope)
            try:
                response = self._client.post(self.config.oauth_url, params=params, headers=headers)
            except httpx.HTTPError as exc:
                raise AuthenticationError(f"Token request for scope {scope} failed: {exc}") from exc
            if response.status_code != 200:
                error = map_error(response.status_code, response.content)
                raise AuthenticationError(
                    f"Token request for scope {scope} failed with status {response.status_code}: {error}"
                ) from error
            try:
                tokens[scope] = Token.from_json(response.json())
            except (TypeError, ValueError) as exc:
                raise AuthenticationError(f"Invalid token response for scope {scope}: {exc}") from exc
        self._tokens = tokens
        logger.info("Acquired OAuth tokens for scopes %s", ", ".join(tokens))

    def tokens_expired(self, margin: float = 30.0) -> List[str]:
        """Return the configured scopes whose token is stale or missing."""
        return [
            scope
            for scope in self.config.scopes
            if scope not in self._tokens or self._tokens[scope].is_expired(margin)
        ]

    def new_request(self, resource: Union[Resource, str]) -> APIRequest:
        """Create an APIRequest carrying the defaults of ``resource``.

        Args:
            resource: A Resource member or one of the configured resource paths

        Returns:
            APIRequest with Accept, User-Agent, X-Arg and, for the speech
            resources, the bearer token of the matching scope

        Raises:
            AuthenticationError: if the resource needs a token that is not cached
        """
        resource = self._resolve_resource(resource)
        request = APIRequest(
            accept="application/json",
            user_agent=self.config.user_agent,
            x_arg=client_x_arg(self.config.client_app),
        )
        if resource is Resource.OAUTH:
            request.content_type = "application/x-www-form-urlencoded"
            return request

        request.authorization = f"Bearer {self._access_token(RESOURCE_SCOPES[resource])}"
        if resource is Resource.STT:
            request.transfer_encoding = "chunked"
        elif resource is Resource.TTS:
            request.content_type = "text/plain"
        return request

    def speech_to_text(self, request: APIRequest) -> RecognitionResult:
        """Transcribe the audio in ``request.data``.

        Raises:
            ValidationError: if the content type or data is missing
            TransportError: if the HTTP call fails
            RemoteServiceError: if the service rejects the request
        """
        if not request.content_type:
            raise ValidationError("a content type must be provided", field="ContentType")
        if request.data is None:
            raise ValidationError("data to convert to text must be provided", field="Data")

        response = self._post(self.config.stt_url, request.read_data(), request)
        return self._recognition(response)

    def speech_to_text_custom(
        self,
        request: APIRequest,
        grammar: str,
        dictionary: str = "",
    ) -> RecognitionResult:
        """Transcribe audio constrained by an SRGS grammar and optional PLS dictionary.

        ``request.data`` and ``request.content_type`` are replaced by the
        multipart form that is sent.

        Raises:
            ValidationError: for the first missing of grammar, data, filename
                and content type
            TransportError: if the HTTP call fails
            RemoteServiceError: if the service rejects the request
        """
        if not grammar:
            raise ValidationError("a grammar must be provided", field="Grammar")
        if request.data is None:
            raise ValidationError("data must be provided", field="Data")
        if not request.filename:
            raise ValidationError("filename must be provided", field="Filename")
        if not request.content_type:
            raise ValidationError("content type must be provided", field="ContentType")

        request.data, request.content_type = build_form(request, grammar, dictionary)
        response = self._post(self.config.sttc_url, request.data, request)
        return self._recognition(response)

    def text_to_speech(self, request: APIRequest) -> bytes:
        """Synthesize ``request.text`` and return the audio bytes.

        Raises:
            ValidationError: if no text is set
            TransportError: if the HTTP call fails
            RemoteServiceError: if the service rejects the request
        """
        if not request.text:
            raise ValidationError("text to convert to speech must be provided", field="Text")

        response = self._post(self.config.tts_url, request.text.encode("utf-8"), request)
        return response.content

    def _resolve_resource(self, resource: Union[Resource, str]) -> Resource:
        if isinstance(resource, Resource):
            return resource
        paths = {
            self.config.stt_resource: Resource.STT,
            self.config.sttc_resource: Resource.STTC,
            self.config.tts_resource: Resource.TTS,
            self.config.oauth_resource: Resource.OAUTH,
        }
        try:
            return paths[resource]
        except KeyError:
            try:
                return Resource(resource)
            except ValueError:
                raise ValueError(f"Unknown resource: {resource!r}") from None

    def _access_token(self, scope: str) -> str:
        token = self._tokens.get(scope)
        if token is None:
            raise AuthenticationError(f"No token cached for scope {scope}; call set_auth_tokens() first.")
        return token.access_token

    def _post(self, url: str, body: bytes, request: APIRequest) -> httpx.Response:
        headers = request.wire_headers()
        content: Union[bytes, Iterable[bytes]] = body
        if headers.get("Transfer-Encoding", "").lower() == "chunked":
            # httpx frames iterable content as chunked and sets the header itself.
            del headers["Transfer-Encoding"]
            content = iter([body])

        logger.debug("POST %s (%d bytes)", url, len(body))
        try:
            response = self._client.post(url, headers=headers, content=content)
        except httpx.HTTPError as exc:
            raise TransportError(str(exc)) from exc
        logger.debug("POST %s -> %s", url, response.status_code)

        if response.status_code != 200:
            raise map_error(response.status_code, response.content)
        return response

    def _recognition(self, response: httpx.Response) -> RecognitionResult:
        try:
            data = response.json()
        except ValueError as exc:
            raise ResponseParseError(f"Invalid recognition response: {exc}") from exc
        try:
            return RecognitionResult.from_json(data)
        except (TypeError, ValueError) as exc:
            raise ResponseParseError(f"Invalid recognition response: {exc}") from exc
