import os
from typing import Optional, Tuple

VERSION = "0.1"
DEFAULT_API_BASE = "https://api.att.com"
DEFAULT_SCOPES = ("SPEECH", "STTC", "TTS")


class SpeechConfig:
    """Configuration for the AT&T Speech REST endpoints.

    One instance is owned by each client; endpoint paths live here rather than
    in module-level state so several differently configured clients can share
    a process.
    """

    def __init__(
        self,
        *,
        app_key: str,
        app_secret: str,
        api_base: Optional[str] = None,
        stt_resource: str = "/speech/v3/speechToText",
        sttc_resource: str = "/speech/v3/speechToTextCustom",
        tts_resource: str = "/speech/v3/textToSpeech",
        oauth_resource: str = "/oauth/access_token",
        scopes: Tuple[str, ...] = DEFAULT_SCOPES,
        client_app: str = "PyLibForATTSpeech",
        user_agent: str = f"att-speech-python/{VERSION}",
    ) -> None:
        """Initialize SpeechConfig.

        Args:
            app_key: Application key, sent as the OAuth ``client_id``
            app_secret: Application secret, sent as the OAuth ``client_secret``
            api_base: Base URL of the API (defaults to https://api.att.com)
            stt_resource: Path of the speech-to-text resource
            sttc_resource: Path of the grammar-customized speech-to-text resource
            tts_resource: Path of the text-to-speech resource
            oauth_resource: Path of the OAuth token resource
            scopes: Scopes requested from the token endpoint, one call each
            client_app: Application name reported in the X-Arg header
            user_agent: Value of the User-Agent header
        """
        self.app_key = app_key
        self.app_secret = app_secret
        self.api_base = api_base or DEFAULT_API_BASE
        self.stt_resource = stt_resource
        self.sttc_resource = sttc_resource
        self.tts_resource = tts_resource
        self.oauth_resource = oauth_resource
        self.scopes = tuple(scopes)
        self.client_app = client_app
        self.user_agent = user_agent

    @classmethod
    def from_env(cls, **kwargs) -> "SpeechConfig":
        """Create SpeechConfig from ATT_APP_KEY, ATT_APP_SECRET and ATT_API_BASE.

        Args:
            **kwargs: Additional configuration options, overriding the environment

        Returns:
            SpeechConfig instance
        """
        kwargs.setdefault("app_key", os.environ.get("ATT_APP_KEY", ""))
        kwargs.setdefault("app_secret", os.environ.get("ATT_APP_SECRET", ""))
        kwargs.setdefault("api_base", os.environ.get("ATT_API_BASE"))
        return cls(**kwargs)

    @property
    def _base(self) -> str:
        return self.api_base.rstrip("/")

    @property
    def stt_url(self) -> str:
        return f"{self._base}{self.stt_resource}"

    @property
    def sttc_url(self) -> str:
        return f"{self._base}{self.sttc_resource}"

    @property
    def tts_url(self) -> str:
        return f"{self._base}{self.tts_resource}"

    @property
    def oauth_url(self) -> str:
        return f"{self._base}{self.oauth_resource}"

    def validate(self) -> None:
        if not self.api_base:
            raise ValueError("api_base is required for SpeechConfig")
        if not (self.app_key and self.app_secret):
            raise ValueError("Both app_key and app_secret must be provided.")
        if not self.scopes:
            raise ValueError("At least one OAuth scope must be configured.")
