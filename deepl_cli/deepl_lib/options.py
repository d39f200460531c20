from dataclasses import dataclass
from typing import Dict, Optional

@dataclass
class TranslationOptions:
    """A data class to hold all settings for a translation request.

    This class centralizes the options that control a `/translate` call, from
    the language pair to the DeepL formatting parameters, together with the
    few settings the command-line front end needs to run the job.

    Attributes:
        source_lang: Language code of the input text (e.g. "EN").
        target_lang: Language code to translate into (e.g. "JA").
        tag_handling: "xml" or "html" to enable tag-aware translation; None
            for plain text.
        split_sentences: "0", "1" or "nonewlines"; None for the service
            default, which depends on `tag_handling`.
        preserve_formatting: "0" or "1"; None for the service default.
        outline_detection: "0" disables automatic XML structure detection;
            None for the service default.
        non_splitting_tags: Comma-separated XML tags which never split
            sentences.
        splitting_tags: Comma-separated XML tags which always split sentences.
        ignore_tags: Comma-separated XML tags whose content is not translated.
        input_path: Optional path of the file to translate. If None, the
            text is read from stdin.
        pro: If True, the Pro plan endpoint is used instead of the Free one.
        quiet: If True, suppresses all non-essential output.
        debug: Debug level; 0 is off, higher values print more to stderr.
    """
    source_lang: str
    target_lang: str
    tag_handling: Optional[str] = None
    split_sentences: Optional[str] = None
    preserve_formatting: Optional[str] = None
    outline_detection: Optional[str] = None
    non_splitting_tags: Optional[str] = None
    splitting_tags: Optional[str] = None
    ignore_tags: Optional[str] = None
    input_path: Optional[str] = None
    pro: bool = False
    quiet: bool = False
    debug: int = 0

    def to_params(self, text: str) -> Dict[str, str]:
        """Builds the `/translate` form parameters for `text`.

        Optional parameters that are unset or empty are left out of the
        request entirely; they are never sent as empty strings.
        """
        params = {
            "target_lang": self.target_lang,
            "text": text,
        }
        optional = {
            "source_lang": self.source_lang,
            "tag_handling": self.tag_handling,
            "split_sentences": self.split_sentences,
            "preserve_formatting": self.preserve_formatting,
            "outline_detection": self.outline_detection,
            "non_splitting_tags": self.non_splitting_tags,
            "splitting_tags": self.splitting_tags,
            "ignore_tags": self.ignore_tags,
        }
        params.update({name: value for name, value in optional.items() if value})
        return params
