from __future__ import annotations

import json
import threading
from typing import Any

import pytest

from emotiscan.analysis_pipeline import AnalysisError, AnalysisOrchestrator
from emotiscan.analysis_types import AnalysisResults, EmotionResult, SentimentAnalysis
from emotiscan.classifier_client import TransportError

EMOTION_MODEL = "org/emotion"
SENTIMENT_MODEL = "org/sentiment"

EMOTION_RAW = [[{"label": "joy", "score": 0.8}, {"label": "anger", "score": 0.1}]]
SENTIMENT_RAW = [[
    {"label": "negative", "score": 0.2},
    {"label": "positive", "score": 0.9},
    {"label": "neutral", "score": 0.1},
]]


class _FakeClassifier:
    def __init__(self, responses: dict[str, Any]):
        self._responses = responses
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def classify(self, endpoint_id: str, text: str) -> Any:
        with self._lock:
            self.calls.append((endpoint_id, text))
        resp = self._responses[endpoint_id]
        if isinstance(resp, Exception):
            raise resp
        return resp


def _orchestrator(responses: dict[str, Any], parallel: bool = False) -> tuple[AnalysisOrchestrator, _FakeClassifier]:
    fake = _FakeClassifier(responses)
    return AnalysisOrchestrator(fake, EMOTION_MODEL, SENTIMENT_MODEL, parallel=parallel), fake


@pytest.mark.parametrize("parallel", [False, True])
def test_analyze_assembles_results(parallel):
    orch, fake = _orchestrator({EMOTION_MODEL: EMOTION_RAW, SENTIMENT_MODEL: SENTIMENT_RAW}, parallel)

    results = orch.analyze("what a day", "de")

    assert results == AnalysisResults(
        emotions=(EmotionResult("joy", 0.8), EmotionResult("anger", 0.1)),
        sentiment=SentimentAnalysis(positive=0.9, negative=0.0, neutral=0.0),
    )
    assert sorted(fake.calls) == [(EMOTION_MODEL, "what a day"), (SENTIMENT_MODEL, "what a day")]


def test_analyze_sequential_calls_emotion_first():
    orch, fake = _orchestrator({EMOTION_MODEL: EMOTION_RAW, SENTIMENT_MODEL: SENTIMENT_RAW})
    orch.analyze("text")
    assert [endpoint for endpoint, _ in fake.calls] == [EMOTION_MODEL, SENTIMENT_MODEL]


@pytest.mark.parametrize("parallel", [False, True])
def test_analyze_fails_when_emotion_call_fails(parallel):
    err = TransportError("down", EMOTION_MODEL, status_code=503)
    orch, _ = _orchestrator({EMOTION_MODEL: err, SENTIMENT_MODEL: SENTIMENT_RAW}, parallel)

    with pytest.raises(AnalysisError) as exc_info:
        orch.analyze("text")
    assert exc_info.value.__cause__ is err


def test_analyze_sequential_stops_after_emotion_failure():
    err = TransportError("down", EMOTION_MODEL)
    orch, fake = _orchestrator({EMOTION_MODEL: err, SENTIMENT_MODEL: SENTIMENT_RAW})
    with pytest.raises(AnalysisError):
        orch.analyze("text")
    assert fake.calls == [(EMOTION_MODEL, "text")]


@pytest.mark.parametrize("parallel", [False, True])
def test_analyze_fails_when_sentiment_call_fails_after_emotion_succeeds(parallel):
    err = TransportError("down", SENTIMENT_MODEL)
    orch, _ = _orchestrator({EMOTION_MODEL: EMOTION_RAW, SENTIMENT_MODEL: err}, parallel)

    with pytest.raises(AnalysisError):
        orch.analyze("text")


def test_analyze_fails_on_empty_sentiment_response():
    orch, _ = _orchestrator({EMOTION_MODEL: EMOTION_RAW, SENTIMENT_MODEL: [[]]})
    with pytest.raises(AnalysisError):
        orch.analyze("text")


def test_analyze_fails_on_unexpected_emotion_shape():
    orch, _ = _orchestrator({EMOTION_MODEL: {"error": "Model is loading"}, SENTIMENT_MODEL: SENTIMENT_RAW})
    with pytest.raises(AnalysisError):
        orch.analyze("text")


def test_analyze_is_idempotent():
    orch, _ = _orchestrator({EMOTION_MODEL: EMOTION_RAW, SENTIMENT_MODEL: SENTIMENT_RAW})
    first = orch.analyze("same text", "fr")
    second = orch.analyze("same text", "fr")
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_target_language_does_not_change_results():
    orch, _ = _orchestrator({EMOTION_MODEL: EMOTION_RAW, SENTIMENT_MODEL: SENTIMENT_RAW})
    assert orch.analyze("text", "fr") == orch.analyze("text", "xx")


def test_analyze_text_bundles_inputs_with_results():
    orch, _ = _orchestrator({EMOTION_MODEL: EMOTION_RAW, SENTIMENT_MODEL: SENTIMENT_RAW})

    analyzed = orch.analyze_text("hello", "es")

    assert analyzed.text == "hello"
    assert analyzed.target_language == "es"
    assert analyzed.to_dict()["results"] == {
        "emotions": [{"label": "joy", "score": 0.8}, {"label": "anger", "score": 0.1}],
        "sentiment": {"positive": 0.9, "negative": 0.0, "neutral": 0.0},
    }


def test_analyze_text_uses_default_language():
    orch, _ = _orchestrator({EMOTION_MODEL: EMOTION_RAW, SENTIMENT_MODEL: SENTIMENT_RAW})
    assert orch.analyze_text("hello").target_language == "fr"


def test_analyze_fails_on_score_too_large_for_float():
    huge = json.loads('[[{"label": "joy", "score": 1' + "0" * 400 + "}]]")
    orch, _ = _orchestrator({EMOTION_MODEL: huge, SENTIMENT_MODEL: SENTIMENT_RAW})
    with pytest.raises(AnalysisError):
        orch.analyze("text")
