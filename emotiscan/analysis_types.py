from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal


SentimentLabel = Literal["positive", "negative", "neutral"]

SENTIMENT_LABELS: tuple[SentimentLabel, ...] = ("positive", "negative", "neutral")


@dataclass(frozen=True)
class EmotionResult:
    """One emotion label with its classifier score in [0, 1]."""

    label: str
    score: float


@dataclass(frozen=True)
class SentimentLabelScore:
    """
    One scored candidate from the sentiment classifier.

    label is normally positive|negative|neutral, but is kept as a plain str so
    an unexpected label from the service can still be carried to the resolver.
    """

    label: str
    score: float


@dataclass(frozen=True)
class SentimentAnalysis:
    """
    Sparse encoding of a single sentiment decision.

    - exactly one field holds the winning score, the other two are 0.0
    - all three are 0.0 when the winning label was not a known one
    - not a probability distribution (fields need not sum to 1)
    """

    positive: float
    negative: float
    neutral: float

    def to_dict(self) -> dict[str, float]:
        return {"positive": self.positive, "negative": self.negative, "neutral": self.neutral}


@dataclass(frozen=True)
class AnalysisResults:
    emotions: tuple[EmotionResult, ...]
    sentiment: SentimentAnalysis

    def to_dict(self) -> dict[str, Any]:
        return {
            "emotions": [{"label": e.label, "score": e.score} for e in self.emotions],
            "sentiment": self.sentiment.to_dict(),
        }


@dataclass(frozen=True)
class AnalyzedText:
    """
    What the caller gets back: the input text, the selected target language
    and the analysis results.

    target_language is not used by the analysis itself.
    """

    text: str
    target_language: str
    results: AnalysisResults

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "target_language": self.target_language,
            "results": self.results.to_dict(),
        }
