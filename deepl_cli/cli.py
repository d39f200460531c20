import argparse
import os
import sys
from typing import Any, Dict, List, Optional

if __name__ == "__main__" and not __package__:
    parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if parent_dir not in sys.path:
        sys.path.insert(0, parent_dir)
    import deepl_cli
    __package__ = "deepl_cli"

from .deepl_lib.client import DeepLClient, format_glossary_language_pairs, format_languages, format_usage
from .deepl_lib.options import TranslationOptions
from .deepl_lib import settings as settings_loader
from .deepl_lib.exceptions import DeepLError, SettingsError
from .version_info import VersionInfo, collect_version_info
from . import color_console as cc

COMMANDS = ("translate", "trans", "usage", "u", "languages", "glossary-language-pairs")
DEFAULT_COMMAND = "translate"

# Global options that consume a value.
_GLOBAL_VALUE_OPTIONS = ("--source_lang", "--target_lang", "--settings-file")
_GLOBAL_FLAG_OPTIONS = ("--pro", "--debug", "--quiet")
_SHORT_FLAGS = "qd"
_SHORT_VALUE_OPTIONS = "st"


def _global_option_width(argv: List[str], i: int) -> int:
    """Returns how many arguments the global option at `argv[i]` spans, or 0 if it is not one.

    Short options may be clustered (`-qd`, `-qsEN`) and may carry their value
    attached (`-sEN`, `-s=EN`).
    """
    arg = argv[i]
    if arg.startswith("--"):
        if arg in _GLOBAL_FLAG_OPTIONS:
            return 1
        if arg in _GLOBAL_VALUE_OPTIONS:
            return 2
        if arg.split("=", 1)[0] in _GLOBAL_VALUE_OPTIONS:
            return 1
        return 0
    if len(arg) < 2 or arg[0] != "-":
        return 0
    rest = arg[1:].lstrip(_SHORT_FLAGS)
    if not rest:
        return 1
    if rest[0] in _SHORT_VALUE_OPTIONS:
        return 1 if len(rest) > 1 else 2
    return 0


def _insert_default_command(argv: List[str]) -> List[str]:
    """Inserts `translate` when no command is named, e.g. `deepl-translate-cli file.txt`."""
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in COMMANDS or arg in ("-h", "--help", "--version"):
            return argv
        width = _global_option_width(argv, i)
        if not width:
            break
        i += width
    if i > len(argv):
        # A trailing value option without its value; let argparse report it.
        return argv
    return argv[:i] + [DEFAULT_COMMAND] + argv[i:]


def _validate_args(args: argparse.Namespace, parser: argparse.ArgumentParser):
    """Performs validation checks on parsed command-line arguments."""
    input_file = getattr(args, "input_file", None)
    if input_file and not os.path.isfile(input_file):
        parser.error(f"Input file does not exist: {input_file}")


def _read_input(input_file: Optional[str]) -> str:
    """Reads the text to translate from a file, a pipe, or the terminal.

    From a terminal only a single line is read.
    """
    if input_file:
        with open(input_file, 'r', encoding='utf-8') as f:
            return f.read()
    if sys.stdin.isatty():
        try:
            return input()
        except EOFError:
            return ""
    return sys.stdin.read()


def _debug_level(args: argparse.Namespace, settings: Dict[str, Any]) -> int:
    if args.debug:
        return args.debug
    try:
        return int(settings.get("debug") or 0)
    except (TypeError, ValueError) as e:
        raise SettingsError(f"Invalid debug level in settings file: {settings.get('debug')!r}") from e


def _build_translation_options(args: argparse.Namespace) -> TranslationOptions:
    """Assembles the TranslationOptions object from arguments and the settings file."""
    overrides = {
        "source_lang": args.source_lang,
        "target_lang": args.target_lang,
        "tag_handling": args.tag_handling,
        "split_sentences": args.split_sentences,
        "preserve_formatting": args.preserve_formatting,
        "outline_detection": args.outline_detection,
        "non_splitting_tags": args.non_splitting_tags,
        "splitting_tags": args.splitting_tags,
        "ignore_tags": args.ignore_tags,
    }
    settings = settings_loader.resolve_settings(overrides, settings_path=args.settings_file)

    def _opt(key: str) -> Optional[str]:
        value = settings.get(key)
        return str(value) if value not in (None, "") else None

    return TranslationOptions(
        source_lang=str(settings["source_lang"]),
        target_lang=str(settings["target_lang"]),
        tag_handling=_opt("tag_handling"),
        split_sentences=_opt("split_sentences"),
        preserve_formatting=_opt("preserve_formatting"),
        outline_detection=_opt("outline_detection"),
        non_splitting_tags=_opt("non_splitting_tags"),
        splitting_tags=_opt("splitting_tags"),
        ignore_tags=_opt("ignore_tags"),
        input_path=args.input_file,
        pro=args.pro,
        quiet=args.quiet,
        debug=_debug_level(args, settings),
    )


def run_translate(args: argparse.Namespace, auth_key: str) -> None:
    """Handles the `translate` command."""
    options = _build_translation_options(args)
    if options.debug > 1:
        print(f"--- DEBUG: Translation Options ---\n{options}\n------------------------------------", file=sys.stderr)

    text = _read_input(options.input_path)
    client = DeepLClient(auth_key, pro=options.pro, debug=options.debug)
    cc.print_info(f"Translating from {options.source_lang} to {options.target_lang}...", quiet=options.quiet)
    translations = client.translate(text, options)
    if not translations:
        cc.print_warning("The service returned no translations.", quiet=options.quiet)
        return
    cc.print_translation("".join(translations), quiet=options.quiet)
    cc.print_success("Translation complete.", quiet=options.quiet)


def run_usage(args: argparse.Namespace, auth_key: str) -> None:
    """Handles the `usage` command."""
    client = DeepLClient(auth_key, pro=args.pro, debug=args.debug)
    cc.print_result(format_usage(client.usage()))


def run_languages(args: argparse.Namespace, auth_key: str) -> None:
    """Handles the `languages` command."""
    client = DeepLClient(auth_key, pro=args.pro, debug=args.debug)
    cc.print_result(format_languages(client.languages(args.type)))


def run_glossary_language_pairs(args: argparse.Namespace, auth_key: str) -> None:
    """Handles the `glossary-language-pairs` command."""
    client = DeepLClient(auth_key, pro=args.pro, debug=args.debug)
    cc.print_result(format_glossary_language_pairs(client.glossary_language_pairs()))


def main_logic(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Orchestrates the main application workflow after argument parsing."""
    _validate_args(args, parser)
    auth_key = settings_loader.get_auth_key()
    args.handler(args, auth_key)


def build_parser(version_info: VersionInfo) -> argparse.ArgumentParser:
    """Defines the command-line interface for the DeepL client."""
    parser = argparse.ArgumentParser(
        prog="deepl-translate-cli",
        description="Translate text using the DeepL API.\n"
                    "The authentication key is read from the DEEPL_TOKEN environment variable.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="Example usage:\n"
               "  # Translate a file from English to Japanese\n"
               "  deepl-translate-cli -s EN -t JA trans --tag_handling xml my_file.xml\n\n"
               "  # Translate from a pipe using the languages in the settings file\n"
               "  echo 'Hello' | deepl-translate-cli\n\n"
               "  # Check usage and limits on the Pro plan\n"
               "  deepl-translate-cli --pro usage"
    )

    lang_group = parser.add_argument_group('Languages')
    lang_group.add_argument("-s", "--source_lang", default=None, help="Source language, overriding the settings file.")
    lang_group.add_argument("-t", "--target_lang", default=None, help="Target language, overriding the settings file.")

    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument("--pro", action="store_true", help="Use the Pro plan's endpoint.")
    config_group.add_argument("--settings-file", default=None, help=f"Path to the settings file (default: {settings_loader.default_settings_path()}).")

    info_group = parser.add_argument_group('General')
    info_group.add_argument("-d", "--debug", action="count", default=0, help="Enable debug output; repeat to increase verbosity.")
    info_group.add_argument("--quiet", "-q", action="store_true", help="Suppress all informational output.")
    info_group.add_argument('--version', action='version', version=f'%(prog)s {version_info}')

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    trans = subparsers.add_parser(
        "translate", aliases=["trans"],
        help="Translate text into another language (default command).",
        description="Only UTF-8 plain text is supported. The total request size must not exceed 128 KiB;\n"
                    "split larger texts into multiple calls.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    trans.add_argument("input_file", nargs="?", default=None, help="File to translate; reads stdin if omitted.")
    trans.add_argument("--tag_handling", "--tag", choices=["xml", "html"], default=None, help="Enable XML or HTML aware translation.")
    trans.add_argument("--split_sentences", "--split", choices=["0", "1", "nonewlines"], default=None,
                       help="Sentence splitting: 0 (none), 1 (punctuation and newlines), nonewlines (punctuation only).")
    trans.add_argument("--preserve_formatting", "--preserve", choices=["0", "1"], default=None, help="Respect the original formatting.")
    trans.add_argument("--outline_detection", "--outline", choices=["0", "1"], default=None,
                       help="Set to 0 to disable automatic XML structure detection.")
    trans.add_argument("--non_splitting_tags", "--never", default=None, help="Comma-separated XML tags which never split sentences.")
    trans.add_argument("--splitting_tags", "--always", default=None, help="Comma-separated XML tags which always split sentences.")
    trans.add_argument("--ignore_tags", "--ignore", default=None, help="Comma-separated XML tags whose content is not translated.")
    trans.set_defaults(handler=run_translate)

    usage = subparsers.add_parser("usage", aliases=["u"], help="Check usage and limits for the current billing period.")
    usage.set_defaults(handler=run_usage)

    languages = subparsers.add_parser("languages", help="List the languages supported for translation.")
    languages.add_argument("--type", choices=["source", "target"], default="source",
                           help="List source languages (default) or target languages.")
    languages.set_defaults(handler=run_languages)

    pairs = subparsers.add_parser("glossary-language-pairs", help="List the language pairs supported by glossaries.")
    pairs.set_defaults(handler=run_glossary_language_pairs)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Defines and executes the command-line interface for the translator."""
    version_info = collect_version_info()
    parser = build_parser(version_info)
    argv = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(_insert_default_command(argv))

    try:
        main_logic(args, parser)
    except DeepLError as e:
        cc.print_error(f"\n---FATAL ERROR---\n{e}\n-------------------\n")
        sys.exit(1)
    except Exception as e:
        cc.print_error(f"\n---UNEXPECTED FATAL ERROR---\n{e}\n-------------------\n")
        sys.exit(1)

if __name__ == "__main__":
    main()
