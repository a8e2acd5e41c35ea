import time
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .errors import ResponseParseError


@dataclass(frozen=True)
class Token:
    """OAuth token returned by the access_token resource."""

    access_token: str
    token_type: str = ""
    expires_in: int = 0
    refresh_token: str = ""
    acquired_at: float = field(default_factory=time.monotonic, compare=False)

    @classmethod
    def from_json(cls, data: Any) -> "Token":
        if not isinstance(data, dict):
            raise ValueError("token response is not a JSON object")
        if not data.get("access_token"):
            raise ValueError("token response missing 'access_token' field")
        return cls(
            access_token=str(data["access_token"]),
            token_type=str(data.get("token_type") or ""),
            expires_in=int(data.get("expires_in") or 0),
            refresh_token=str(data.get("refresh_token") or ""),
        )

    def is_expired(self, margin: float = 30.0) -> bool:
        """Report whether the token is past ``expires_in`` (minus ``margin`` seconds).

        A token without an ``expires_in`` value never expires.
        """
        if self.expires_in <= 0:
            return False
        return time.monotonic() >= self.acquired_at + self.expires_in - margin


@dataclass
class OutComposite:
    grammar: str
    out: str


@dataclass
class Hypothesis:
    hypothesis: str
    language_id: str
    confidence: float
    grade: str
    result_text: str
    words: List[str]
    word_scores: List[float]
    nlu_hypothesis: List[OutComposite] = field(default_factory=list)


@dataclass
class RecognitionResult:
    status: str
    response_id: str
    nbest: List[Hypothesis]
    raw: Dict

    @property
    def text(self) -> str:
        return self.nbest[0].result_text if self.nbest else ""

    @classmethod
    def from_json(cls, data: Any) -> "RecognitionResult":
        """Build a RecognitionResult from a decoded recognition response.

        Raises:
            ResponseParseError: if the document is not a recognition or a
                hypothesis has a different number of words and word scores
        """
        if not isinstance(data, dict) or not isinstance(data.get("Recognition"), dict):
            raise ResponseParseError("response does not contain a Recognition object")
        recognition = data["Recognition"]
        nbest: List[Hypothesis] = []
        for index, item in enumerate(recognition.get("NBest") or []):
            if not isinstance(item, dict):
                continue
            words = [str(word) for word in item.get("Words") or []]
            scores = [float(score) for score in item.get("WordScores") or []]
            if len(words) != len(scores):
                raise ResponseParseError(
                    f"hypothesis {index} has {len(words)} words but {len(scores)} word scores"
                )
            nlu = item.get("NluHypothesis")
            if not isinstance(nlu, dict):
                nlu = {}
            composites = [
                OutComposite(grammar=entry.get("Grammar") or "", out=entry.get("Out") or "")
                for entry in nlu.get("OutComposite") or []
                if isinstance(entry, dict)
            ]
            nbest.append(
                Hypothesis(
                    hypothesis=item.get("Hypothesis") or "",
                    language_id=item.get("LanguageId") or "",
                    confidence=float(item.get("Confidence") or 0.0),
                    grade=item.get("Grade") or "",
                    result_text=item.get("ResultText") or "",
                    words=words,
                    word_scores=scores,
                    nlu_hypothesis=composites,
                )
            )
        return cls(
            status=recognition.get("Status") or "",
            response_id=recognition.get("ResponseId") or "",
            nbest=nbest,
            raw=data,
        )
