"""
Plain-text rendering of reports

Renders an Outcome/Aggregate tree as tab-indented lines with ANSI colors, one
marker per state. Used for console output when rich rendering is not wanted.
"""

from typing import Any
from seriesflow.core.types import ResultState

GREEN = '\u001b[32m'
RED = '\u001b[1;31m'
PURPLE = '\u001b[1;35m'
BLACK = '\u001b[0m'
END = BLACK
SEPARATOR = ': '

STATE_STARTS = {
    ResultState.SUCCESS: GREEN + '✓ ',
    ResultState.FAILURE: RED + '✕ ',
    ResultState.UNKNOWN: PURPLE + '? ',
    ResultState.INVALID: PURPLE + '??? ',
}


def get_indented(indent: int) -> str:
    """Get an indentation prefix of ``indent`` tabs"""
    return '\t' * indent if indent and indent > 0 else ''


def get_printable(result: Any, message: str, indent: int = 0) -> str:
    """
    Wrap a message in the color and marker of the result's state:
    ``<indent><START> message <END>``
    """
    return get_indented(indent) + STATE_STARTS[result.state] + message + END


def format_result(result: Any, indent: int = 0) -> str:
    """
    Render a report or any node of it

    Args:
        result: Outcome or Aggregate
        indent: Indentation level of the first line

    Returns:
        Multi-line colored string
    """
    if hasattr(result, "results"):
        lines = get_printable(result, result.key + SEPARATOR, indent) + '\n'
        lines += get_indented(indent) + '{\n'
        for child in result.results.values():
            lines += format_result(child, indent + 1) + ',\n'
        lines += get_indented(indent) + '}'
        return lines

    message = result.key
    if result.message:
        message += SEPARATOR + str(result.message)
    return get_printable(result, message, indent)
