"""
Single line ASS to VTT conversion.

Matches one ASS Dialogue line, runs its text through entity escaping,
override tag rewriting and whitespace substitution, and assembles the
resulting WebVTT cue.
"""

import re
from typing import Optional

from .models import Cue, DialogueRecord
from .overrides import OverrideTagStack, rewrite_override_tags, strip_override_tags
from .utils import escape_entities, normalize_timestamp, replace_whitespace

# Dialogue: Layer,Start,End,Style,Name,MarginL,MarginR,MarginV,Effect,Text
DIALOGUE_PATTERN = re.compile(
    r'Dialogue:\s*\d+,'
    r'(\d+:\d\d:\d\d\.\d\d),(\d+:\d\d:\d\d\.\d\d),'
    r'([^,]*),([^,]*),'
    r'(?:[^,]*,){4}'
    r'(.*)$',
    re.IGNORECASE | re.DOTALL,
)

_TRAILING_TERMINATOR_PATTERN = re.compile(r'(?:\r\n|\r|\n)\Z')


def parse_dialogue_line(line: Optional[str]) -> Optional[DialogueRecord]:
    """
    Parse an ASS Dialogue line into its fields.

    The text field is everything after the ninth comma, so it may itself
    contain commas. One trailing line terminator is ignored.

    Args:
        line: Raw input line

    Returns:
        DialogueRecord, or None if the line is blank or not a Dialogue line

    Example:
        >>> record = parse_dialogue_line("Dialogue: 0,0:00:02.00,0:00:05.00,Default,,0,0,0,,Hi, you")
        >>> record.style, record.text
        ('Default', 'Hi, you')
    """
    if not line or not line.strip():
        return None

    line = _TRAILING_TERMINATOR_PATTERN.sub('', line)
    match = DIALOGUE_PATTERN.search(line)
    if not match:
        return None

    start, end, style, speaker, text = match.groups()
    return DialogueRecord(start=start, end=end, style=style, speaker=speaker, text=text)


def build_cue(
    record: DialogueRecord,
    disable_styles: bool = False,
    index: Optional[int] = None
) -> Cue:
    """
    Convert a parsed dialogue record into a Cue.

    Args:
        record: Parsed Dialogue fields
        disable_styles: If True, override blocks are removed without producing
            any markup or cue settings
        index: Optional cue identifier written before the timing line

    Returns:
        Cue with normalized timestamps and balanced markup
    """
    text = escape_entities(record.text)

    if disable_styles:
        text = strip_override_tags(text)
        position = ""
        stack = OverrideTagStack()
    else:
        result = rewrite_override_tags(text)
        text, position, stack = result.text, result.position, result.stack

    text = replace_whitespace(text)

    if record.speaker.strip():
        voice = record.speaker
    elif record.style.strip():
        voice = record.style
    else:
        voice = None

    return Cue(
        start=normalize_timestamp(record.start),
        end=normalize_timestamp(record.end),
        text=text + stack.drain(),
        position=position,
        voice=voice,
        index=index,
    )


def convert_line(
    line: Optional[str],
    disable_styles: bool = False,
    line_number: Optional[int] = None
) -> Optional[str]:
    """
    Convert a single ASS Dialogue line to a WebVTT cue.

    Args:
        line: Input line (starting with "Dialogue: ")
        disable_styles: Whether to drop the override tags embedded in the line
        line_number: Cue identifier written before the timestamp, or None to omit

    Returns:
        Cue text terminated by CRLF, or None if the line is not a Dialogue line

    Example:
        >>> convert_line("Dialogue: 0,0:00:02.00,0:00:05.00,,,0,0,0,,This is the {\\\\b1}first{\\\\b0} subtitle.")
        '00:00:02.000 --> 00:00:05.000\\r\\nThis is the <b>first</b> subtitle.\\r\\n'
    """
    record = parse_dialogue_line(line)
    if record is None:
        return None

    return build_cue(record, disable_styles=disable_styles, index=line_number).to_vtt()
