import json
import os
from typing import Any, Dict, Mapping, Optional

from .exceptions import SettingsError

AUTH_KEY_ENV_VAR = "DEEPL_TOKEN"
PLACEHOLDER = "FILLIN"

# Keys understood in the settings file. The auth key is never read from or
# written to the file.
SETTING_KEYS = (
    "source_lang",
    "target_lang",
    "tag_handling",
    "split_sentences",
    "preserve_formatting",
    "outline_detection",
    "non_splitting_tags",
    "splitting_tags",
    "ignore_tags",
    "debug",
)


def default_settings_path() -> str:
    """Returns `~/.config/deepl-translate-cli/setting.json`."""
    return os.path.join(os.path.expanduser("~"), ".config", "deepl-translate-cli", "setting.json")


def get_auth_key(environ: Optional[Mapping[str, str]] = None) -> str:
    """Reads the DeepL authentication key from the environment.

    Raises:
        SettingsError: If `DEEPL_TOKEN` is unset or empty.
    """
    env = os.environ if environ is None else environ
    auth_key = env.get(AUTH_KEY_ENV_VAR, "")
    if not auth_key:
        raise SettingsError(
            f"No DeepL token is set; use the environment variable `{AUTH_KEY_ENV_VAR}` to set it."
        )
    return auth_key


def initialize_settings_file(settings_path: str) -> None:
    """Creates a minimal settings file with placeholder languages.

    The parent directory is created if needed.

    Raises:
        SettingsError: If the directory or the file cannot be written.
    """
    try:
        os.makedirs(os.path.dirname(settings_path), exist_ok=True)
        with open(settings_path, 'w', encoding='utf-8') as f:
            json.dump({"source_lang": PLACEHOLDER, "target_lang": PLACEHOLDER}, f, indent=2)
    except OSError as e:
        raise SettingsError(f"Could not create settings file {settings_path}: {e}") from e


def load_settings_file(settings_path: str, automake: bool = True) -> Dict[str, Any]:
    """Loads the settings file, creating a template for the user if missing.

    Unknown keys in the file are ignored.

    Args:
        settings_path: Path of the JSON settings file.
        automake: If True and the file does not exist, a template with
                  placeholder languages is written before failing.

    Returns:
        A dictionary with the recognised settings found in the file.

    Raises:
        SettingsError: If the file is missing, cannot be parsed, or still
                       holds the placeholder languages.
    """
    if not os.path.exists(settings_path):
        if automake:
            initialize_settings_file(settings_path)
            raise SettingsError(
                f"Settings file does not exist: {settings_path}\n"
                f"\tIt was autogenerated, please edit it to reflect your preferences."
            )
        raise SettingsError(f"Settings file does not exist: {settings_path}")

    try:
        with open(settings_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SettingsError(f"{e} (occurred while loading setting.json)") from e
    except OSError as e:
        raise SettingsError(f"Could not read settings file {settings_path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {settings_path} must contain a JSON object.")

    if PLACEHOLDER in (data.get("source_lang"), data.get("target_lang")):
        raise SettingsError(f"Did you edit the settings file? ({settings_path})")

    return {key: data[key] for key in SETTING_KEYS if data.get(key) not in (None, "")}


def resolve_settings(
    overrides: Mapping[str, Any],
    settings_path: Optional[str] = None,
    automake: bool = True
) -> Dict[str, Any]:
    """Merges command-line values over the settings file.

    The settings file is only read when the source or the target language is
    missing from `overrides`. Values in `overrides` that are None are treated
    as not given.

    Args:
        overrides: Values given on the command line, keyed like the file.
        settings_path: Path of the settings file; defaults to
                       `default_settings_path()`.
        automake: Passed to `load_settings_file`.

    Returns:
        The merged settings, with `source_lang` and `target_lang` set.

    Raises:
        SettingsError: If the file is needed but unusable, or if the source
                       and target languages are identical.
    """
    given = {key: value for key, value in overrides.items() if value is not None}
    settings: Dict[str, Any] = {}
    if not given.get("source_lang") or not given.get("target_lang"):
        settings.update(load_settings_file(settings_path or default_settings_path(), automake=automake))
    settings.update(given)

    source_lang = str(settings.get("source_lang", ""))
    target_lang = str(settings.get("target_lang", ""))
    if not source_lang or not target_lang:
        raise SettingsError("Both a source and a target language must be set.")
    if source_lang.upper() == target_lang.upper():
        raise SettingsError(f"Cannot have identical source lang ({source_lang}) and target lang ({target_lang}).")
    return settings
