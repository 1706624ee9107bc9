"""
Parsing of annotation blocks into documentation items.

A block is a list of annotation lines. Directive lines set structured fields:

    @brief <text>      one-line summary
    @name <text>       item name
    @synopsis <text>   usage line (repeatable)
    @scope             marks the block as a scope (handled by the Collector)

Everything else is body text. Blank lines separate paragraphs, and text
between @code and @/code is copied without directive interpretation.
"""

import re
from typing import Iterable, List, Optional

from macrodoc.schemas import DocItem, Paragraph

BRIEF_PATTERN = re.compile(r'^\s*@brief\s+(.*?)\s*$')
NAME_PATTERN = re.compile(r'^\s*@name\s+(.*?)\s*$')
SYNOPSIS_PATTERN = re.compile(r'^\s*@synopsis\s+(.*?)\s*$')
SCOPE_PATTERN = re.compile(r'^\s*@scope\b')
BLANK_PATTERN = re.compile(r'^\s*$')

# Group 1 is set for the end marker. An escaped \@code is not a marker.
VERBATIM_MARKER_PATTERN = re.compile(r'(?<!\\)@(/)?code\b')


def verbatim_state_after(line: str, in_verbatim: bool) -> bool:
    """Return whether a verbatim region is open after `line`."""
    for match in VERBATIM_MARKER_PATTERN.finditer(line):
        is_end = match.group(1) is not None
        if in_verbatim and is_end:
            in_verbatim = False
        elif not in_verbatim and not is_end:
            in_verbatim = True
    return in_verbatim


def is_scope_block(lines: Iterable[str]) -> bool:
    """True if any line of the block carries the @scope directive."""
    return any(SCOPE_PATTERN.match(line) for line in lines)


class DocItemParser:
    """Turn one raw block into a DocItem."""

    def parse(self, lines: Iterable[str]) -> DocItem:
        """
        Parse annotation lines.

        Args:
            lines: Annotation lines of one block

        Returns:
            DocItem (name and brief may be None)
        """
        item = DocItem()
        para: Optional[List[str]] = None
        in_verbatim = False

        for line in lines:
            if in_verbatim:
                para.append(line)
                in_verbatim = verbatim_state_after(line, in_verbatim)
                continue

            brief = BRIEF_PATTERN.match(line)
            if brief:
                item.brief = brief.group(1)
                continue

            name = NAME_PATTERN.match(line)
            if name:
                item.name = name.group(1)
                continue

            synopsis = SYNOPSIS_PATTERN.match(line)
            if synopsis:
                item.synopsis.append(synopsis.group(1))
                continue

            if SCOPE_PATTERN.match(line):
                continue

            if BLANK_PATTERN.match(line):
                if para:
                    item.paragraphs.append(Paragraph(lines=para))
                para = None
                continue

            if para is None:
                para = []
            para.append(line)
            in_verbatim = verbatim_state_after(line, in_verbatim)

        if para:
            item.paragraphs.append(Paragraph(lines=para))

        return item


def parse_doc_item(lines: Iterable[str]) -> DocItem:
    """Convenience function to parse one block."""
    return DocItemParser().parse(lines)
