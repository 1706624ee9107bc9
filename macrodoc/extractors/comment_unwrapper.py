"""
Comment unwrapping for annotated macro files.

Macro files store their script text entity-escaped, so every line is first
reverted (&amp; &lt; &gt;) and then classified as a block start marker, an
annotation comment line, a blank line or something else.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

ENTITY_REPLACEMENTS = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
}

ENTITY_PATTERN = re.compile("|".join(ENTITY_REPLACEMENTS))


def unescape_entities(line: str) -> str:
    """Revert the reserved entities of an escaped line (single pass, so &amp;lt; gives &lt;)."""
    return ENTITY_PATTERN.sub(lambda m: ENTITY_REPLACEMENTS[m.group(0)], line)


class LineKind(str, Enum):
    BLOCK_START = "block_start"
    ANNOTATION = "annotation"
    BLANK = "blank"
    OTHER = "other"


@dataclass
class LineEvent:
    """Classification of one input line."""
    kind: LineKind
    text: Optional[str] = None  # annotation text, ANNOTATION only


class CommentUnwrapper:
    """
    Classify input lines and recover annotation text.

    Example (defaults):
        "  # %DRC%"           -> BLOCK_START
        "# @brief Some text"  -> ANNOTATION "@brief Some text"
        ""                    -> BLANK
        "x = 1"               -> OTHER
    """

    BLANK_PATTERN = re.compile(r'^\s*$')

    def __init__(self, block_key: str = "%DRC%", comment_prefix: str = "#"):
        """
        Initialize the unwrapper.

        Args:
            block_key: Marker that follows the comment prefix on a block start line
            comment_prefix: Comment syntax of the input file
        """
        self.block_key = block_key
        self.comment_prefix = comment_prefix

        prefix = re.escape(comment_prefix)
        self.block_start_pattern = re.compile(
            r'^\s*' + prefix + r'\s*' + re.escape(block_key)
        )
        # Only the single separator after the prefix is dropped so that
        # indentation inside verbatim regions survives; prose lines are
        # left-stripped when rendered.
        self.annotation_pattern = re.compile(r'^\s*' + prefix + r'[ \t]?(.*)$')

    def classify(self, line: str) -> LineEvent:
        """
        Classify one raw input line.

        Args:
            line: Line as read from the file (line ending optional)

        Returns:
            LineEvent
        """
        line = unescape_entities(line.rstrip('\r\n'))

        if self.block_start_pattern.match(line):
            return LineEvent(LineKind.BLOCK_START)

        match = self.annotation_pattern.match(line)
        if match:
            return LineEvent(LineKind.ANNOTATION, match.group(1).rstrip())

        if self.BLANK_PATTERN.match(line):
            return LineEvent(LineKind.BLANK)

        return LineEvent(LineKind.OTHER)
