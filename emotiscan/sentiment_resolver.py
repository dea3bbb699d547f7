from __future__ import annotations

import logging
from typing import Any, Sequence

from emotiscan.analysis_types import SENTIMENT_LABELS, SentimentAnalysis, SentimentLabelScore
from emotiscan.classifier_client import TransportError, unwrap_batch

logger = logging.getLogger(__name__)


def resolve(raw: Any, endpoint_id: str = "sentiment") -> SentimentAnalysis:
    """
    Reduce a raw sentiment response to a single dominant sentiment.

    Raises:
        TransportError: if the response is empty or an entry is malformed
    """
    candidates = _parse_candidates(unwrap_batch(raw, endpoint_id), endpoint_id)
    if not candidates:
        raise TransportError(f"Empty sentiment response from {endpoint_id}", endpoint_id)
    return project(pick_dominant(candidates))


def pick_dominant(candidates: Sequence[SentimentLabelScore]) -> SentimentLabelScore:
    """
    Highest score wins. A later candidate only replaces the current one when
    its score is strictly greater, so the first-seen candidate wins ties.

    Raises:
        ValueError: if candidates is empty
    """
    if not candidates:
        raise ValueError("candidates must not be empty")

    dominant = candidates[0]
    for candidate in candidates[1:]:
        if candidate.score > dominant.score:
            dominant = candidate
    return dominant


def project(dominant: SentimentLabelScore) -> SentimentAnalysis:
    """
    Put the winning score in its label's slot and 0.0 in the others.

    An unknown label yields all zeros.
    """
    if dominant.label not in SENTIMENT_LABELS:
        logger.warning(
            "Unknown dominant sentiment label: label=%s score=%.4f",
            dominant.label,
            dominant.score,
        )

    return SentimentAnalysis(
        positive=dominant.score if dominant.label == "positive" else 0.0,
        negative=dominant.score if dominant.label == "negative" else 0.0,
        neutral=dominant.score if dominant.label == "neutral" else 0.0,
    )


def _parse_candidates(items: Sequence[Any], endpoint_id: str) -> list[SentimentLabelScore]:
    out: list[SentimentLabelScore] = []
    for item in items:
        try:
            out.append(SentimentLabelScore(label=str(item["label"]), score=float(item["score"])))
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise TransportError(f"Malformed sentiment entry: {item!r}", endpoint_id) from e
    return out
