"""
Markup transformation for documentation text.

Converts annotation text into the XML dialect of the reference documents.
The conversion is an ordered list of pattern -> replacement rules; order is
part of the output contract:

1. Escape &, < and > (ampersand first)
2. \\Page#anchor and \\anchor references become <a href="..."> links
3. <Namespace>::Class references become <class_doc> links

Paragraph lines additionally get, in this order:

4. \\@ stays a literal @
5. @code / @/code become <pre> / </pre> (text inside is only escaped and
   keeps \\@ as @; an escaped \\@code is not a marker)
6. @img(URL) / @/img become <img src="URL"/> / </img>
7. any other @word / @/word becomes <word> / </word>

Unknown or unmatched markup is passed through, the transformer never fails.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Tuple, Union
import logging

from macrodoc.schemas import Paragraph

logger = logging.getLogger(__name__)

# Placeholder for an escaped at-sign while the tag rules run. Cannot occur in
# escaped input since a literal & is already &amp; at that point.
AT_PLACEHOLDER = "&at;"

VERBATIM_SPLIT_PATTERN = re.compile(r'[ \t]*(?<!\\)@(/)?code\b[ \t]*')


@dataclass
class MarkupRule:
    """One step of the transformation pipeline."""
    name: str
    pattern: "re.Pattern"
    replacement: Union[str, Callable[["re.Match"], str]]

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _literal(name: str, old: str, new: str) -> MarkupRule:
    return MarkupRule(name, re.compile(re.escape(old)), new.replace('\\', r'\\'))


ESCAPE_RULES = [
    _literal("escape_amp", "&", "&amp;"),
    _literal("escape_lt", "<", "&lt;"),
    _literal("escape_gt", ">", "&gt;"),
]

PARAGRAPH_RULES = [
    MarkupRule("protect_at", re.compile(r'\\@'), AT_PLACEHOLDER),
    MarkupRule("image_open", re.compile(r'@img\(([^)]*)\)\s*'), r'<img src="\1"/>'),
    MarkupRule("image_close", re.compile(r'\s*@/img\b'), '</img>'),
    MarkupRule("tag_open", re.compile(r'@(\w+)\s*'), r'<\1>'),
    MarkupRule("tag_close", re.compile(r'\s*@/(\w+)'), r'</\1>'),
    MarkupRule("restore_at", re.compile(re.escape(AT_PLACEHOLDER)), '@'),
]


class MarkupTransformer:
    """
    Apply the markup rule pipeline to documentation text.

    Args:
        location: Logical location slug, the prefix of cross-page links
        class_namespace: Namespace of class documentation references
    """

    def __init__(self, location: str = "about/drc_ref", class_namespace: str = "RBA"):
        self.location = location
        self.class_namespace = class_namespace

        self.inline_rules: List[MarkupRule] = ESCAPE_RULES + [
            MarkupRule("reference", re.compile(r'\\([\w#]+)'), self._reference_link),
            MarkupRule(
                "class_reference",
                re.compile(re.escape(class_namespace) + r'::([\w#]+)'),
                self._class_doc_link
            ),
        ]
        self.paragraph_rules: List[MarkupRule] = PARAGRAPH_RULES

    def _reference_link(self, match: "re.Match") -> str:
        target = match.group(1)
        page, sep, anchor = target.rpartition('#')
        if sep and page:
            href = f"/{self.location}_{page.lower()}.xml#{anchor}"
        else:
            href = f"#{anchor}"
        return f'<a href="{href}">{target}</a>'

    @staticmethod
    def _class_doc_link(match: "re.Match") -> str:
        target = match.group(1)
        return f'<class_doc href="{target}">{target}</class_doc>'

    def escape(self, text: str) -> str:
        """Escape &, < and > only."""
        for rule in ESCAPE_RULES:
            text = rule.apply(text)
        return text

    def escape_verbatim(self, text: str) -> str:
        """Escape text inside a verbatim region; \\@ still becomes @."""
        return self.escape(text).replace("\\@", "@")

    @staticmethod
    def escape_attribute(text: str) -> str:
        """Escape a value for use inside a double-quoted attribute."""
        return (
            text.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
        )

    def transform(self, text: str) -> str:
        """Escape text and resolve references (titles, headings, synopsis)."""
        for rule in self.inline_rules:
            text = rule.apply(text)
        return text

    def transform_prose(self, text: str) -> str:
        """Full paragraph pipeline for text outside verbatim regions."""
        text = self.transform(text)
        for rule in self.paragraph_rules:
            text = rule.apply(text)
        return text

    def render_line(self, line: str, in_verbatim: bool = False) -> Tuple[str, bool]:
        """
        Render one paragraph line.

        Args:
            line: Raw annotation line
            in_verbatim: Whether a verbatim region is open before the line

        Returns:
            (rendered text, whether a verbatim region is open after the line)
        """
        parts = []
        pos = 0

        # Indentation is only significant inside verbatim regions.
        if not in_verbatim:
            line = line.lstrip()

        for match in VERBATIM_SPLIT_PATTERN.finditer(line):
            is_end = match.group(1) is not None
            if in_verbatim == is_end:
                segment = line[pos:match.start()]
                if in_verbatim:
                    parts.append(self.escape_verbatim(segment))
                    parts.append("</pre>")
                else:
                    parts.append(self.transform_prose(segment))
                    parts.append("<pre>")
                in_verbatim = not in_verbatim
                pos = match.end()

        tail = line[pos:]
        parts.append(self.escape_verbatim(tail) if in_verbatim else self.transform_prose(tail))

        return "".join(parts), in_verbatim

    def render_lines(self, lines: List[str]) -> List[str]:
        """Render the lines of one paragraph, tracking verbatim regions."""
        rendered = []
        in_verbatim = False
        for line in lines:
            text, in_verbatim = self.render_line(line, in_verbatim)
            rendered.append(text)
        if in_verbatim:
            logger.debug("Verbatim region left open at end of paragraph")
        return rendered

    def render_paragraphs(self, paragraphs: List[Paragraph]) -> str:
        """
        Render body paragraphs into <p> elements.

        Returns:
            "" for no paragraphs, otherwise "<p>\\n...</p><p>\\n...</p>\\n"
        """
        if not paragraphs:
            return ""

        doc = "<p>\n"
        for i, paragraph in enumerate(paragraphs):
            if i > 0:
                doc += "</p><p>\n"
            for text in self.render_lines(paragraph.lines):
                doc += text + "\n"
        doc += "</p>\n"

        return doc
