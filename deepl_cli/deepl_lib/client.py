from typing import List, Optional

import requests

from .api_client import (
    GLOSSARY_LANGUAGE_PAIRS_PATH,
    LANGUAGES_PATH,
    TRANSLATE_PATH,
    USAGE_PATH,
    api_call,
    get_endpoint,
)
from .exceptions import EmptyInputError
from .models import GlossaryLanguagePairs, LanguageList, TranslationResult, Usage
from .options import TranslationOptions


class DeepLClient:
    """Client for the DeepL REST API.

    Each public method performs exactly one request through `api_call` and
    returns a typed result. The client holds no state besides its immutable
    key, tier and debug level, so one instance can be shared freely.

    Args:
        auth_key: The DeepL authentication key.
        pro: If True, the Pro plan endpoint is used instead of the Free one.
        debug: Debug level passed down to the transport.
        session: An optional `requests.Session` used for every request, e.g.
                 to reuse connections or to substitute another transport.
    """

    def __init__(self, auth_key: str, pro: bool = False, debug: int = 0, session: Optional[requests.Session] = None):
        self.auth_key = auth_key
        self.pro = pro
        self.debug = debug
        self.session = session

    def _endpoint(self, path: str) -> str:
        return get_endpoint(path, pro=self.pro)

    def translate(self, text: str, options: TranslationOptions) -> List[str]:
        """Translates `text` with the language pair and formatting in `options`.

        Returns:
            The translated text of every item in the response, in order.

        Raises:
            EmptyInputError: If `text` is empty or only whitespace. No request
                             is sent in that case.
        """
        if not text or not text.strip():
            raise EmptyInputError("There is no text to translate.")
        result = api_call(
            "POST", self._endpoint(TRANSLATE_PATH), self.auth_key, options.to_params(text),
            TranslationResult, session=self.session, debug=self.debug,
        )
        return result.texts

    def usage(self) -> Usage:
        """Retrieves usage and limits for the current billing period."""
        return api_call(
            "GET", self._endpoint(USAGE_PATH), self.auth_key, {},
            Usage, session=self.session, debug=self.debug,
        )

    def languages(self, languages_type: str = "source") -> LanguageList:
        """Retrieves the languages supported as `source` or `target` language."""
        return api_call(
            "GET", self._endpoint(LANGUAGES_PATH), self.auth_key, {"type": languages_type},
            LanguageList, session=self.session, debug=self.debug,
        )

    def glossary_language_pairs(self) -> GlossaryLanguagePairs:
        """Retrieves the language pairs supported by the glossary feature."""
        return api_call(
            "GET", self._endpoint(GLOSSARY_LANGUAGE_PAIRS_PATH), self.auth_key, {},
            GlossaryLanguagePairs, session=self.session, debug=self.debug,
        )


def format_usage(usage: Usage) -> str:
    return (
        f"Character Count: {usage.character_count}; "
        f"Character Limit: {usage.character_limit}; "
        f"Document Limit: {usage.document_limit}; "
        f"Document Count: {usage.document_count}; "
        f"Team Document Limit: {usage.team_document_limit}; "
        f"Team Document Count: {usage.team_document_count}."
    )


def format_languages(language_list: LanguageList) -> str:
    """Formats one `<code>: <name>` line per language, marking formality support."""
    lines = []
    for lang in language_list.languages:
        line = f"{lang.language}: {lang.name}"
        if lang.supports_formality:
            line += " (+ formality)"
        lines.append(line)
    return "\n".join(lines)


def format_glossary_language_pairs(pairs: GlossaryLanguagePairs) -> str:
    return "\n".join(f"{pair.source_lang} ⇒ {pair.target_lang}" for pair in pairs.pairs)
