from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TargetLanguage:
    code: str
    name: str
    translation_model_id: str


# English -> target translation models. Nothing in the pipeline translates yet;
# the table backs the language selector and validates the selected code.
TARGET_LANGUAGES: dict[str, TargetLanguage] = {
    lang.code: lang
    for lang in (
        TargetLanguage("fr", "French", "Helsinki-NLP/opus-mt-en-fr"),
        TargetLanguage("es", "Spanish", "Helsinki-NLP/opus-mt-en-es"),
        TargetLanguage("de", "German", "Helsinki-NLP/opus-mt-en-de"),
        TargetLanguage("it", "Italian", "Helsinki-NLP/opus-mt-en-it"),
        TargetLanguage("ar", "Arabic", "Helsinki-NLP/opus-mt-en-ar"),
    )
}


def is_supported(code: str) -> bool:
    return code in TARGET_LANGUAGES
