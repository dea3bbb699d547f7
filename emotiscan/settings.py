from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmotiscanSettings(BaseSettings):
    """
    Environment-driven settings for the remote classifiers.

    The API token is read once and kept as a SecretStr so it never shows up in
    reprs or logs.
    """

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # ---- Hugging Face Inference API ----
    hf_api_token: SecretStr = Field(alias="HF_API_TOKEN")
    hf_api_base_url: str = Field(
        default="https://api-inference.huggingface.co/models",
        alias="HF_API_BASE_URL",
    )

    emotion_model_id: str = Field(
        default="j-hartmann/emotion-english-distilroberta-base",
        alias="EMOTION_MODEL_ID",
    )
    sentiment_model_id: str = Field(
        default="cardiffnlp/twitter-roberta-base-sentiment-latest",
        alias="SENTIMENT_MODEL_ID",
    )

    request_timeout_sec: float = Field(default=30.0, alias="CLASSIFIER_REQUEST_TIMEOUT_SEC")

    # Issue the emotion and sentiment calls concurrently
    parallel_requests: bool = Field(default=False, alias="CLASSIFIER_PARALLEL_REQUESTS")

    user_agent: str = Field(default="emotiscan/0.1", alias="CLASSIFIER_USER_AGENT")

    # ---- Collaborator defaults ----
    # fr | es | de | it | ar
    default_target_language: str = Field(default="fr", alias="DEFAULT_TARGET_LANGUAGE")


def load_settings() -> EmotiscanSettings:
    return EmotiscanSettings()
