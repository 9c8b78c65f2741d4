"""
ASS override tag handling for assvtt.

Scans the {...} override blocks of a dialogue line from left to right and
rewrites each one into WebVTT markup. Text decoration commands (\\b, \\i, \\u)
become <b>, <i> and <u> tags kept balanced by an explicit tag stack, and
alignment commands (\\an, \\a) become cue settings for the timing line.
"""

import re
from dataclasses import dataclass, field
from typing import List, Tuple

# Strikethrough (\s) is parsed but has no WebVTT equivalent
DECORATION_TAGS = ("b", "i", "u", "s")
UNSUPPORTED_TAGS = ("s",)

_BLOCK_PATTERN = re.compile(r'\{([^}]*)\}')
_TAG_NAME_PATTERN = re.compile(r'[a-zA-Z]+')
_POSITION_CODE_PATTERN = re.compile(r'\d{1,2}')
_BOLD_WEIGHT_PATTERN = re.compile(r'\d{3}')

BOLD_WEIGHT_THRESHOLD = 500


class OverrideTagStack:
    """
    Last-in-first-out stack of currently open decoration tags.

    Closing a tag that has other tags nested inside it closes those too,
    so the markup produced stays properly nested.
    """

    def __init__(self):
        self._tags: List[str] = []

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: str) -> bool:
        return tag in self._tags

    @property
    def tags(self) -> Tuple[str, ...]:
        """Open tags, outermost first."""
        return tuple(self._tags)

    def push(self, tag: str) -> str:
        """Open a tag and return its opening markup."""
        self._tags.append(tag)
        return f"<{tag}>"

    def close_through(self, tag: str) -> Tuple[str, List[str]]:
        """
        Close open tags down to and including ``tag``.

        Args:
            tag: Tag to close. Must be open.

        Returns:
            Tuple of (closing_markup, tags_to_reopen)
            - closing_markup: closing tags, innermost first
            - tags_to_reopen: tags that were nested inside ``tag``, outermost
              first, which the caller is expected to open again

        Example:
            >>> stack = OverrideTagStack()
            >>> _ = stack.push("b"), stack.push("i")
            >>> stack.close_through("b")
            ('</i></b>', ['i'])
        """
        if tag not in self._tags:
            raise ValueError(f"Tag is not open: {tag}")

        markup = []
        reopen = []
        while self._tags:
            current = self._tags.pop()
            markup.append(f"</{current}>")
            if current == tag:
                break
            reopen.insert(0, current)

        return "".join(markup), reopen

    def close_all(self) -> str:
        """Close every open tag (innermost first) and return the markup."""
        markup = "".join(f"</{tag}>" for tag in reversed(self._tags))
        self._tags.clear()
        return markup

    def drain(self) -> str:
        """Close whatever is still open at the end of a cue."""
        return self.close_all()


@dataclass
class OverrideResult:
    """Result of rewriting the override blocks of one dialogue line."""
    text: str
    position: str = ""  # cue settings, e.g. " line:0 align:start"
    stack: OverrideTagStack = field(default_factory=OverrideTagStack)


def tokenize_override_block(content: str) -> List[str]:
    """
    Split the content of an override block into individual commands.

    Anything before the first backslash is not a command and is dropped.

    Example:
        >>> tokenize_override_block("\\\\b1\\\\an8")
        ['b1', 'an8']
    """
    if not content.strip():
        return []
    return content.split('\\')[1:]


def numpad_position(code: int) -> str:
    """
    Map an \\an<code> numpad alignment (1-9) to VTT cue settings.

    Bottom row and center column are the WebVTT defaults, so they add
    nothing.
    """
    settings = ""

    line_band = (code - 1) // 3
    if line_band == 1:
        settings += " line:50%"
    elif line_band == 2:
        settings += " line:0"

    alignment = code % 3
    if alignment == 1:
        settings += " align:start"
    elif alignment == 2:
        settings += " align:end"

    return settings


def legacy_position(code: int) -> str:
    """Map a legacy SSA \\a<code> alignment to VTT cue settings."""
    settings = ""

    if code > 8:
        settings += " line:50%"
    elif code > 4:
        settings += " line:0"

    alignment = (code - 1) % 4
    if alignment == 0:
        settings += " align:start"
    elif alignment == 2:
        settings += " align:end"

    return settings


def _is_disabling(tag: str, argument: str) -> bool:
    # \b0, \i0 ... or a numeric font weight below 500 for \b
    if argument[:1] == "0":
        return True
    if tag == "b":
        weight = _BOLD_WEIGHT_PATTERN.match(argument)
        if weight and int(weight.group(0)) < BOLD_WEIGHT_THRESHOLD:
            return True
    return False


def _rewrite_block(content: str, stack: OverrideTagStack) -> Tuple[str, str]:
    """
    Rewrite one override block.

    Returns:
        Tuple of (markup, position_settings)
    """
    closing = []
    to_open: List[str] = []
    position = ""

    for command in tokenize_override_block(content):
        name_match = _TAG_NAME_PATTERN.match(command)
        if not name_match:
            continue

        tag = name_match.group(0)
        argument = command[name_match.end():]

        if tag == "an":
            code = _POSITION_CODE_PATTERN.match(argument)
            if code:
                position += numpad_position(int(code.group(0)))

        elif tag == "a":
            code = _POSITION_CODE_PATTERN.match(argument)
            if code:
                position += legacy_position(int(code.group(0)))

        elif tag in DECORATION_TAGS:
            if _is_disabling(tag, argument):
                if tag in to_open:
                    to_open.remove(tag)
                elif tag in stack:
                    markup, reopen = stack.close_through(tag)
                    closing.append(markup)
                    to_open = reopen + to_open
            elif tag not in UNSUPPORTED_TAGS and tag not in stack and tag not in to_open:
                to_open.append(tag)

        elif tag.startswith("r"):
            # \r or \r<style>: style switching is not supported, only the reset
            closing.append(stack.close_all())
            to_open = []

    opening = [stack.push(tag) for tag in to_open]
    return "".join(closing) + "".join(opening), position


def rewrite_override_tags(text: str) -> OverrideResult:
    """
    Replace every override block in ``text`` with WebVTT markup.

    Blocks are processed left to right. Unknown or malformed commands are
    ignored; the remaining commands of the same block still apply. Tags left
    open at the end are kept on the returned stack so the caller can close
    them after any trailing text.

    Args:
        text: Dialogue text, already entity-escaped

    Returns:
        OverrideResult with the rewritten text, accumulated cue settings
        and the stack of still-open tags

    Example:
        >>> result = rewrite_override_tags("{\\\\an8}the {\\\\i1}end")
        >>> result.text, result.position, result.stack.drain()
        ('the <i>end', ' line:0', '</i>')
    """
    stack = OverrideTagStack()
    position = ""
    parts = []
    cursor = 0

    for block in _BLOCK_PATTERN.finditer(text):
        parts.append(text[cursor:block.start()])
        markup, block_position = _rewrite_block(block.group(1), stack)
        parts.append(markup)
        position += block_position
        cursor = block.end()

    parts.append(text[cursor:])
    return OverrideResult(text="".join(parts), position=position, stack=stack)


def strip_override_tags(text: str) -> str:
    """Remove every override block without producing any markup."""
    return _BLOCK_PATTERN.sub('', text)
