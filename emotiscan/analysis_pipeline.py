from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional, Protocol

from emotiscan.analysis_types import AnalysisResults, AnalyzedText, EmotionResult, SentimentAnalysis
from emotiscan.classifier_client import ClassifierClient, ClassifierConfig, TransportError
from emotiscan.emotion_normalizer import normalize
from emotiscan.languages import is_supported
from emotiscan.sentiment_resolver import resolve
from emotiscan.settings import EmotiscanSettings

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Analysis failed as a whole. The original error is chained as __cause__."""


class Classifier(Protocol):
    def classify(self, endpoint_id: str, text: str) -> Any: ...


class AnalysisOrchestrator:
    """
    Runs the emotion and sentiment classifiers on one text and merges their
    outputs into AnalysisResults.

    - all or nothing: any failure raises AnalysisError, never a partial result
    - no retries
    - holds no per-call state, so overlapping calls are independent
    """

    def __init__(
            self,
            client: Classifier,
            emotion_model_id: str,
            sentiment_model_id: str,
            parallel: bool = False,
            default_target_language: str = "fr",
    ):
        self._client = client
        self._emotion_model_id = emotion_model_id
        self._sentiment_model_id = sentiment_model_id
        self._parallel = parallel
        self._default_target_language = default_target_language

    @classmethod
    def from_settings(cls, s: EmotiscanSettings) -> "AnalysisOrchestrator":
        client = ClassifierClient(
            ClassifierConfig(
                base_url=s.hf_api_base_url,
                api_token=s.hf_api_token,
                timeout_sec=s.request_timeout_sec,
                user_agent=s.user_agent,
            )
        )
        return cls(
            client,
            emotion_model_id=s.emotion_model_id,
            sentiment_model_id=s.sentiment_model_id,
            parallel=s.parallel_requests,
            default_target_language=s.default_target_language,
        )

    def analyze(self, text: str, target_language: Optional[str] = None) -> AnalysisResults:
        """
        Classify text for emotions and sentiment.

        target_language is accepted for a future translation step and does not
        change the result.

        Raises:
            AnalysisError: if either classifier call, normalization or
                resolution fails
        """
        lang = target_language or self._default_target_language
        if not is_supported(lang):
            logger.warning("Unsupported target language (ignored): lang=%s", lang)

        try:
            if self._parallel:
                emotions, sentiment = self._run_parallel(text)
            else:
                emotions = self._emotions(text)
                sentiment = self._sentiment(text)
        except (TransportError, KeyError, TypeError, ValueError, OverflowError) as e:
            logger.error("Analysis failed: lang=%s chars=%s err=%s", lang, len(text), e)
            raise AnalysisError(f"Analysis failed: {e}") from e

        results = AnalysisResults(emotions=tuple(emotions), sentiment=sentiment)
        logger.info(
            "Analysis done: lang=%s chars=%s emotions=%s",
            lang,
            len(text),
            len(results.emotions),
        )
        return results

    def analyze_text(self, text: str, target_language: Optional[str] = None) -> AnalyzedText:
        """Run analyze and bundle the inputs with the results for the caller."""
        lang = target_language or self._default_target_language
        return AnalyzedText(text=text, target_language=lang, results=self.analyze(text, lang))

    def _emotions(self, text: str) -> list[EmotionResult]:
        raw = self._client.classify(self._emotion_model_id, text)
        return normalize(raw, self._emotion_model_id)

    def _sentiment(self, text: str) -> SentimentAnalysis:
        raw = self._client.classify(self._sentiment_model_id, text)
        return resolve(raw, self._sentiment_model_id)

    def _run_parallel(self, text: str) -> tuple[list[EmotionResult], SentimentAnalysis]:
        # Both futures finish before the executor exits; the first error wins.
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="classifier") as pool:
            emotions_future = pool.submit(self._emotions, text)
            sentiment_future = pool.submit(self._sentiment, text)
            return emotions_future.result(), sentiment_future.result()
