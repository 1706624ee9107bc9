"""Index document formatter: one topic entry per scope document."""

from typing import Iterable

from macrodoc.formatters.markup import MarkupTransformer
from macrodoc.formatters.scope_formatter import document_header


class IndexFormatter:
    """Render the topic index of all scope documents."""

    def __init__(
        self,
        transformer: MarkupTransformer,
        command_line: str,
        dtd: str = "klayout_doc.dtd"
    ):
        self.transformer = transformer
        self.command_line = command_line
        self.dtd = dtd

    def format(self, title: str, topic_hrefs: Iterable[str]) -> str:
        """
        Render the index document.

        Args:
            title: Index title, also used as keyword
            topic_hrefs: Links to the scope documents, in display order

        Returns:
            Document text
        """
        attr = self.transformer.escape_attribute

        doc = document_header(self.command_line, self.dtd)
        doc += "<doc>\n"
        doc += f"<title>{self.transformer.transform(title)}</title>\n"
        doc += f'<keyword name="{attr(title)}"/>\n'

        doc += "<topics>\n"
        for href in topic_hrefs:
            doc += f'<topic href="{attr(href)}"/>\n'
        doc += "</topics>\n"

        doc += "</doc>\n"
        return doc
