"""
ASS to VTT document conversion for assvtt.

Feeds the lines of a stream, string or file through the single line
converter, numbers the cues that convert successfully and writes the
WEBVTT header once before the first cue.
"""

import logging
import os
import re
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, TextIO, Union, Dict, Any

from .converter import convert_line
from .models import ConvertConfig
from .utils import LINE_TERMINATOR

logger = logging.getLogger(__name__)

VTT_HEADER = f"WEBVTT{LINE_TERMINATOR}{LINE_TERMINATOR}"

CueCallback = Callable[[str], None]

_LINE_BREAK_PATTERN = re.compile(r'\r\n|\r|\n')


def convert_lines(
    lines: Iterable[str],
    print_header: bool = True,
    disable_styles: bool = False,
    callback: Optional[CueCallback] = None
) -> Iterator[str]:
    """
    Convert ASS lines and yield the VTT output in chunks.

    Lines that are not Dialogue lines are skipped. Cue numbers count
    converted cues only, starting at 1.

    Args:
        lines: Input lines, with or without line terminators
        print_header: Whether to emit the WEBVTT header before the first cue
        disable_styles: Whether to drop override tags instead of converting them
        callback: Invoked with each converted cue after it has been yielded

    Yields:
        Header, separators and numbered cues, in output order
    """
    cue_number = 1

    for line_number, line in enumerate(lines, start=1):
        converted = convert_line(line.rstrip('\r\n'), disable_styles=disable_styles)
        if not converted:
            logger.debug(f"Skipping line {line_number}: not a Dialogue line")
            continue

        if cue_number == 1:
            if print_header:
                yield VTT_HEADER
        else:
            yield LINE_TERMINATOR

        yield f"{cue_number}{LINE_TERMINATOR}{converted}"

        if callback is not None:
            callback(converted)

        cue_number += 1


def convert_stream(
    input_stream: TextIO,
    output_stream: TextIO,
    callback: Optional[CueCallback] = None,
    print_header: bool = True,
    disable_styles: bool = False
) -> int:
    """
    Convert an ASS text stream to VTT, writing to ``output_stream``.

    The output is flushed after every cue. Read and write errors are not
    handled here and propagate to the caller.

    Args:
        input_stream: Readable text stream with ASS content
        output_stream: Writable text stream. Open it with newline='' so the
            CRLF terminators are written unchanged.
        callback: Invoked with each converted cue
        print_header: Whether to emit the WEBVTT header (default: True)
        disable_styles: Whether to drop override tags

    Returns:
        Number of cues written
    """
    cues_count = 0

    def _count(cue: str) -> None:
        nonlocal cues_count
        cues_count += 1
        if callback is not None:
            callback(cue)

    chunks = convert_lines(
        input_stream,
        print_header=print_header,
        disable_styles=disable_styles,
        callback=_count
    )
    for chunk in chunks:
        output_stream.write(chunk)
        output_stream.flush()

    logger.debug(f"Stream conversion complete: {cues_count} cues")
    return cues_count


def convert_string(
    content: Union[str, bytes],
    encoding: str = "utf-8",
    print_header: bool = False,
    callback: Optional[CueCallback] = None,
    disable_styles: bool = False
) -> str:
    """
    Convert ASS content held in memory to a VTT string.

    Args:
        content: ASS script text. Bytes are decoded with ``encoding``.
        encoding: Encoding of ``content`` when it is bytes (default: utf-8)
        print_header: Whether to emit the WEBVTT header (default: False)
        callback: Invoked with each converted cue
        disable_styles: Whether to drop override tags

    Returns:
        Converted VTT content

    Example:
        >>> ass = "Dialogue: 0,0:00:01.00,0:00:02.00,,,0,0,0,,Hello"
        >>> convert_string(ass, print_header=True)
        'WEBVTT\\r\\n\\r\\n1\\r\\n00:00:01.000 --> 00:00:02.000\\r\\nHello\\r\\n'
    """
    if isinstance(content, bytes):
        content = content.decode(encoding)
    content = content.lstrip('\ufeff')

    # splitlines() also breaks on characters such as U+2028, so split on
    # CRLF, CR and LF only
    lines = _LINE_BREAK_PATTERN.split(content)

    return "".join(convert_lines(
        lines,
        print_header=print_header,
        disable_styles=disable_styles,
        callback=callback
    ))


def convert_file(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    encoding: str = "utf-8-sig",
    output_encoding: str = "utf-8",
    print_header: bool = True,
    disable_styles: bool = False,
    callback: Optional[CueCallback] = None
) -> Dict[str, Any]:
    """
    Convert an ASS file to a VTT file.

    Args:
        input_path: Path to the .ass/.ssa script
        output_path: Path of the VTT file to write (default: input path with .vtt suffix)
        encoding: Encoding of the input file (default: utf-8-sig, which also reads plain UTF-8)
        output_encoding: Encoding of the output file (default: utf-8)
        print_header: Whether to emit the WEBVTT header (default: True)
        disable_styles: Whether to drop override tags
        callback: Invoked with each converted cue

    Returns:
        Dictionary with output_path and cues_count

    Example:
        >>> result = convert_file("episode01.ass")
        >>> print(f"Wrote {result['cues_count']} cues to {result['output_path']}")
    """
    input_path = Path(input_path)
    if output_path is None:
        output_path = input_path.with_suffix(".vtt")
    output_path = Path(output_path)

    logger.info(f"Converting ASS file: {input_path}")

    os.makedirs(output_path.parent, exist_ok=True)
    with open(input_path, 'r', encoding=encoding) as source, \
            open(output_path, 'w', encoding=output_encoding, newline='') as sink:
        cues_count = convert_stream(
            source,
            sink,
            callback=callback,
            print_header=print_header,
            disable_styles=disable_styles
        )

    logger.info(f"ASS conversion complete: {cues_count} cues written to {output_path}")

    return {
        "output_path": str(output_path),
        "cues_count": cues_count,
    }


def convert_from_config(config: ConvertConfig) -> Dict[str, Any]:
    """Convert an ASS file using a ConvertConfig object."""
    return convert_file(
        input_path=config.input_path,
        output_path=config.output_path,
        encoding=config.encoding,
        output_encoding=config.output_encoding,
        print_header=config.print_header,
        disable_styles=config.disable_styles,
    )