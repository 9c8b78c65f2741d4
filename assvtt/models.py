"""
Data models for assvtt.

Defines the core data structures used throughout the package.
"""

from dataclasses import dataclass
from typing import Optional

from .utils import LINE_TERMINATOR


@dataclass
class DialogueRecord:
    """Fields captured from one ASS Dialogue line."""
    start: str  # H:MM:SS.CC, as written in the script
    end: str
    style: str = ""
    speaker: str = ""
    text: str = ""


@dataclass(frozen=True)
class Cue:
    """A converted WebVTT cue."""
    start: str  # HH:MM:SS.mmm
    end: str    # HH:MM:SS.mmm
    text: str
    position: str = ""
    voice: Optional[str] = None
    index: Optional[int] = None

    def to_vtt(self) -> str:
        """Serialize the cue with CRLF line terminators."""
        parts = []
        if self.index is not None:
            parts.append(f"{self.index}{LINE_TERMINATOR}")
        parts.append(f"{self.start} --> {self.end}{self.position}{LINE_TERMINATOR}")
        if self.voice:
            parts.append(f"<v {self.voice}>")
        parts.append(self.text)
        parts.append(LINE_TERMINATOR)
        return "".join(parts)


@dataclass
class ConvertConfig:
    """Configuration for ASS to VTT file conversion."""
    input_path: str
    output_path: Optional[str] = None  # defaults to input_path with .vtt suffix
    encoding: str = "utf-8-sig"
    output_encoding: str = "utf-8"
    print_header: bool = True
    disable_styles: bool = False
