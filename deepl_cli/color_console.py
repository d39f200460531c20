import sys
from typing import Optional

import colorama

colorama.init()

# Define color constants
COLOR_SUCCESS = colorama.Fore.GREEN
COLOR_WARNING = colorama.Fore.YELLOW
COLOR_ERROR = colorama.Fore.RED
COLOR_INFO = colorama.Fore.CYAN
COLOR_RESET = colorama.Style.RESET_ALL

IS_TTY = sys.stdout.isatty()


def _is_quiet(quiet_arg: Optional[bool]) -> bool:
    """Helper to determine if output should be suppressed."""
    return quiet_arg is True


def _print_colored(message: str, color: str, file=None, quiet: Optional[bool] = False):
    """Internal function to print a message with a specified color."""
    if _is_quiet(quiet):
        return

    if IS_TTY:
        print(f"{color}{message}{COLOR_RESET}", file=file)
    else:
        print(message, file=file)


def print_success(message: str, quiet: Optional[bool] = False):
    """Prints a message in the 'success' color (green) to stderr."""
    _print_colored(message, COLOR_SUCCESS, file=sys.stderr, quiet=quiet)


def print_warning(message: str, quiet: Optional[bool] = False):
    """Prints a message in the 'warning' color (yellow) to stderr."""
    _print_colored(message, COLOR_WARNING, file=sys.stderr, quiet=quiet)


def print_error(message: str, quiet: Optional[bool] = False):
    """Prints a message in the 'error' color (red) to stderr."""
    _print_colored(message, COLOR_ERROR, file=sys.stderr, quiet=quiet)


def print_info(message: str, quiet: Optional[bool] = False):
    """Prints a message in the 'info' color (cyan) to stderr."""
    _print_colored(message, COLOR_INFO, file=sys.stderr, quiet=quiet)


def print_result(content: str):
    """Prints a utility call result (usage, languages, ...) to stdout."""
    print(content)


def print_translation(content: str, quiet: Optional[bool] = False):
    """Prints the translated content, either plainly or with a header.

    When stdout is not a terminal, or in quiet mode, the content is written
    as is so it can be piped into other programs.
    """
    end = "" if content.endswith("\n") else "\n"
    if _is_quiet(quiet) or not IS_TTY:
        print(content, end=end)
        return

    print(f"\n{COLOR_INFO}--- Translated Content ---{COLOR_RESET}")
    print(content, end=end)
    print(f"{COLOR_INFO}--------------------------{COLOR_RESET}")
