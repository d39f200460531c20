"""
Typed result shapes for the DeepL API responses.

Each shape is a dataclass with a `from_json` constructor that takes the
already-parsed JSON value. Unknown fields are ignored, missing fields take
zero-value defaults, and a field of the wrong JSON type raises `TypeError`.
Field names are matched exactly first and then case-insensitively, since the
service and older fixtures disagree on capitalisation (`Translations`).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


def _lookup(data: Dict[str, Any], name: str) -> Any:
    if name in data:
        return data[name]
    lowered = name.lower()
    for key, value in data.items():
        if isinstance(key, str) and key.lower() == lowered:
            return value
    return None


def _expect_object(data: Any, shape: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object for {shape}, got {type(data).__name__}")
    return data


def _get_str(data: Dict[str, Any], name: str) -> str:
    value = _lookup(data, name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field '{name}' should be a string, got {type(value).__name__}")
    return value


def _get_int(data: Dict[str, Any], name: str) -> int:
    value = _lookup(data, name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field '{name}' should be an integer, got {type(value).__name__}")
    return value


def _get_bool(data: Dict[str, Any], name: str) -> bool:
    value = _lookup(data, name)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"field '{name}' should be a boolean, got {type(value).__name__}")
    return value


def _get_list(data: Dict[str, Any], name: str) -> List[Any]:
    value = _lookup(data, name)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"field '{name}' should be an array, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Translation:
    detected_source_language: str = ""
    text: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Translation":
        data = _expect_object(data, "translation")
        return cls(
            detected_source_language=_get_str(data, "detected_source_language"),
            text=_get_str(data, "text"),
        )


@dataclass(frozen=True)
class TranslationResult:
    """The body of a successful `/translate` call."""
    translations: List[Translation] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "TranslationResult":
        data = _expect_object(data, "translation result")
        return cls(translations=[Translation.from_json(item) for item in _get_list(data, "translations")])

    @property
    def texts(self) -> List[str]:
        return [t.text for t in self.translations]


@dataclass(frozen=True)
class Usage:
    """Usage counters for the current billing period, from `/usage`.

    Attributes:
        character_count: Characters translated so far.
        character_limit: Maximum number of characters per period.
        document_limit: Maximum number of documents per period.
        document_count: Documents translated so far.
        team_document_limit: Maximum number of documents for the whole team.
        team_document_count: Documents translated by the whole team so far.
    """
    character_count: int = 0
    character_limit: int = 0
    document_limit: int = 0
    document_count: int = 0
    team_document_limit: int = 0
    team_document_count: int = 0

    @classmethod
    def from_json(cls, data: Any) -> "Usage":
        data = _expect_object(data, "usage")
        return cls(
            character_count=_get_int(data, "character_count"),
            character_limit=_get_int(data, "character_limit"),
            document_limit=_get_int(data, "document_limit"),
            document_count=_get_int(data, "document_count"),
            team_document_limit=_get_int(data, "team_document_limit"),
            team_document_count=_get_int(data, "team_document_count"),
        )


@dataclass(frozen=True)
class Language:
    language: str = ""
    name: str = ""
    supports_formality: bool = False

    @classmethod
    def from_json(cls, data: Any) -> "Language":
        data = _expect_object(data, "language")
        return cls(
            language=_get_str(data, "language"),
            name=_get_str(data, "name"),
            supports_formality=_get_bool(data, "supports_formality"),
        )


@dataclass(frozen=True)
class LanguageList:
    """The body of a `/languages` call, which is a bare JSON array."""
    languages: List[Language] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "LanguageList":
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array of languages, got {type(data).__name__}")
        return cls(languages=[Language.from_json(item) for item in data])


@dataclass(frozen=True)
class GlossaryLanguagePair:
    source_lang: str = ""
    target_lang: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "GlossaryLanguagePair":
        data = _expect_object(data, "glossary language pair")
        return cls(
            source_lang=_get_str(data, "source_lang"),
            target_lang=_get_str(data, "target_lang"),
        )


@dataclass(frozen=True)
class GlossaryLanguagePairs:
    """The body of a `/glossary-language-pairs` call.

    The service wraps the pairs in a `supported_languages` object; a bare
    array of pairs is accepted as well.
    """
    pairs: List[GlossaryLanguagePair] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "GlossaryLanguagePairs":
        if isinstance(data, list):
            items = data
        else:
            items = _get_list(_expect_object(data, "glossary language pairs"), "supported_languages")
        return cls(pairs=[GlossaryLanguagePair.from_json(item) for item in items])
