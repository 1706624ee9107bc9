"""
Scope document formatter.

Renders a Scope into one complete reference document:

<doc>
  <title>brief</title>
  <keyword name="name"/>
  <p>...</p>                 scope introduction
  <h2-index/>
  <h2>"item" - brief</h2>    one section per item, sorted by name
  <keyword name="item"/>
  <a name="item"/>
  <p>Usage:</p><ul>...</ul>  only for items with a synopsis
  <p>...</p>                 item body
</doc>
"""

from typing import List, Optional
import logging

from macrodoc.formatters.markup import MarkupTransformer
from macrodoc.schemas import DocItem, IncompleteDocItemError, Scope

logger = logging.getLogger(__name__)


def document_header(command_line: str, dtd: str) -> str:
    """
    Fixed boilerplate at the top of every generated document.

    "--" may not appear inside an XML comment, so it is written as "- -".
    """
    safe_command = command_line
    while "--" in safe_command:
        safe_command = safe_command.replace("--", "- -")

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<!DOCTYPE language SYSTEM "{dtd}">\n'
        '\n'
        f'<!-- generated by {safe_command} -->\n'
        '<!-- DO NOT EDIT! -->\n'
        '\n'
    )


class ScopeFormatter:
    """Render scopes into reference documents."""

    def __init__(
        self,
        transformer: MarkupTransformer,
        command_line: str,
        dtd: str = "klayout_doc.dtd"
    ):
        self.transformer = transformer
        self.command_line = command_line
        self.dtd = dtd

    def format(self, scope: Scope) -> str:
        """
        Render a complete scope document.

        Args:
            scope: Scope with its items

        Returns:
            Document text

        Raises:
            IncompleteDocItemError: scope or item without @name or @brief
        """
        self._check(scope.intro, scope.name or "", None)
        for key, item in scope.sorted_items():
            self._check(item, key, scope.name)

        t = self.transformer
        attr = t.escape_attribute

        doc = document_header(self.command_line, self.dtd)
        doc += "<doc>\n"
        doc += f"<title>{t.transform(scope.brief)}</title>\n"
        doc += f'<keyword name="{attr(scope.name)}"/>\n'

        doc += t.render_paragraphs(scope.intro.paragraphs)

        doc += "<h2-index/>\n"

        for _, item in scope.sorted_items():
            doc += self._format_item(item)

        doc += "</doc>\n"

        logger.debug(f"Rendered scope {scope.name} ({len(scope.items)} items)")
        return doc

    def _format_item(self, item: DocItem) -> str:
        t = self.transformer
        attr = t.escape_attribute

        lines = [
            f'<h2>"{t.transform(item.name)}" - {t.transform(item.brief)}</h2>',
            f'<keyword name="{attr(item.name)}"/>',
            f'<a name="{attr(item.name)}"/>',
        ]

        if item.synopsis:
            lines.append("<p>Usage:</p>")
            lines.append("<ul>")
            for synopsis in item.synopsis:
                lines.append(f"<li><tt>{t.transform(synopsis)}</tt></li>")
            lines.append("</ul>")

        return "\n".join(lines) + "\n" + t.render_paragraphs(item.paragraphs)

    @staticmethod
    def _check(item: DocItem, key: str, scope_name: Optional[str]):
        missing: List[str] = item.missing_fields()
        if missing:
            raise IncompleteDocItemError(key, missing, scope_name)
