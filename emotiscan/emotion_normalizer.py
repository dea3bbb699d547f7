from __future__ import annotations

from typing import Any

from emotiscan.analysis_types import EmotionResult
from emotiscan.classifier_client import TransportError, unwrap_batch


def normalize(raw: Any, endpoint_id: str = "emotion") -> list[EmotionResult]:
    """
    Map a raw emotion response to EmotionResult items.

    - keeps every label (no filtering or threshold)
    - keeps the order the classifier returned

    Raises:
        TransportError: if the response or an entry has an unexpected shape
    """
    items = unwrap_batch(raw, endpoint_id)

    out: list[EmotionResult] = []
    for item in items:
        try:
            out.append(EmotionResult(label=str(item["label"]), score=float(item["score"])))
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise TransportError(f"Malformed emotion entry: {item!r}", endpoint_id) from e
    return out
