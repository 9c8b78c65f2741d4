"""
assvtt - ASS/SSA to WebVTT conversion

Converts Advanced SubStation Alpha dialogue lines into WebVTT cues,
translating inline override tags into balanced WebVTT markup.

Features:
- Convert single Dialogue lines, text streams, strings and files
- Map \\b, \\i and \\u override tags to <b>, <i> and <u>
- Map \\an and legacy \\a alignment to cue line/align settings
- Speaker or style name as the cue voice
- Download remote ASS scripts and convert them

Example usage:
    >>> from assvtt import convert_line, convert_file
    >>>
    >>> convert_line("Dialogue: 0,0:00:02.00,0:00:05.00,Style1,,0,0,0,,Hello.")
    '00:00:02.000 --> 00:00:05.000\\r\\n<v Style1>Hello.\\r\\n'
    >>>
    >>> result = convert_file("episode01.ass", "episode01.vtt")
"""

import logging

__version__ = "0.1.0"
__author__ = "assvtt Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Text utilities
from .utils import normalize_timestamp, escape_entities, replace_whitespace

# Override tag handling
from .overrides import (
    OverrideTagStack,
    OverrideResult,
    rewrite_override_tags,
    strip_override_tags,
    tokenize_override_block,
)

# Line conversion
from .converter import convert_line, parse_dialogue_line, build_cue

# Document conversion
from .driver import (
    convert_lines,
    convert_stream,
    convert_string,
    convert_file,
    convert_from_config,
)

# Remote scripts
from .downloader import ASSDownloader, ASSDownloadError, download_ass_content

# Data models
from .models import Cue, DialogueRecord, ConvertConfig

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Line conversion
    "convert_line",
    "parse_dialogue_line",
    "build_cue",

    # Document conversion
    "convert_lines",
    "convert_stream",
    "convert_string",
    "convert_file",
    "convert_from_config",

    # Utility functions
    "normalize_timestamp",
    "escape_entities",
    "replace_whitespace",
    "rewrite_override_tags",
    "strip_override_tags",
    "tokenize_override_block",

    # Classes
    "OverrideTagStack",
    "OverrideResult",
    "ASSDownloader",
    "ASSDownloadError",
    "download_ass_content",

    # Models
    "Cue",
    "DialogueRecord",
    "ConvertConfig",
]
