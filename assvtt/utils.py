"""
Shared utility functions for assvtt.

Provides the small text transforms applied to every dialogue line:
timestamp normalization, HTML entity escaping and ASS whitespace
substitutions.
"""

import re

DEFAULT_TIMESTAMP = "0:00:00.00"
LINE_TERMINATOR = "\r\n"

# ASS escapes are matched case-insensitively, so \n is treated like \N
_FORCED_BREAK_PATTERN = re.compile(r'\\N', re.IGNORECASE)
_HARD_SPACE_PATTERN = re.compile(r'\\h', re.IGNORECASE)
_SOFT_BREAK_PATTERN = re.compile(r'\r?\n')


def normalize_timestamp(timestamp: str) -> str:
    """
    Convert an ASS H:MM:SS.CC timestamp to VTT HH:MM:SS.mmm format.

    Args:
        timestamp: Timestamp string as captured from a Dialogue line.
            Blank values fall back to 0:00:00.00.

    Returns:
        Timestamp string in HH:MM:SS.mmm format

    Example:
        >>> normalize_timestamp("0:00:02.00")
        '00:00:02.000'
        >>> normalize_timestamp("12:00:02.00")
        '12:00:02.000'
    """
    if not timestamp or not timestamp.strip():
        timestamp = DEFAULT_TIMESTAMP

    hours = timestamp.split(':', 1)[0]
    if len(hours) <= 1:
        timestamp = f"0{timestamp}"

    # Centiseconds become milliseconds
    return f"{timestamp}0"


def escape_entities(text: str) -> str:
    """
    Escape characters that are reserved in WebVTT cue text.

    '&' is replaced first so the entities produced for '<' and '>'
    are not escaped a second time.

    Example:
        >>> escape_entities("a < b & c")
        'a &lt; b &amp; c'
    """
    return (
        text.replace('&', '&amp;')
        .replace('<', '&lt;')
        .replace('>', '&gt;')
    )


def replace_whitespace(text: str) -> str:
    """
    Apply ASS whitespace escapes to cue text.

    - \\N (forced line break) becomes a CRLF line break
    - literal line feeds collapse into a single space
    - \\h (hard space) becomes &nbsp;
    """
    text = _SOFT_BREAK_PATTERN.sub(' ', text)
    text = _FORCED_BREAK_PATTERN.sub(LINE_TERMINATOR, text)
    return _HARD_SPACE_PATTERN.sub('&nbsp;', text)
