"""
Block collector.

Routes annotation blocks, in file order, either into a new Scope or into
the current Scope as a plain DocItem. Blocks that arrive before the first
scope are dropped.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple
import logging

from macrodoc.extractors.doc_item_parser import DocItemParser, is_scope_block
from macrodoc.schemas import Scope

logger = logging.getLogger(__name__)


class Collector:
    """All scopes of one generation run, keyed by scope name."""

    def __init__(self, parser: Optional[DocItemParser] = None):
        self.parser = parser or DocItemParser()
        self.scopes: Dict[str, Scope] = {}
        self.current_scope: Optional[Scope] = None
        self.orphan_blocks = 0

    def add_block(self, lines: List[str]):
        """
        Route one raw block.

        Args:
            lines: Annotation lines of the block
        """
        if is_scope_block(lines):
            scope = Scope(intro=self.parser.parse(lines))
            key = scope.name or ""
            if key in self.scopes:
                logger.warning(f"Scope {key!r} declared again, replacing earlier declaration")
            self.scopes[key] = scope
            self.current_scope = scope
            logger.debug(f"Opened scope {key!r}")
            return

        if self.current_scope is None:
            self.orphan_blocks += 1
            logger.debug("Dropping block outside of any scope")
            return

        item = self.parser.parse(lines)
        replaced = self.current_scope.add_item(item)
        if replaced is not None:
            logger.debug(
                f"Item {item.name!r} replaces an earlier item in scope "
                f"{self.current_scope.name!r}"
            )

    def collect(self, blocks: Iterable) -> "Collector":
        """
        Add every block of an iterable.

        Accepts RawBlock objects or plain lists of lines.
        """
        for block in blocks:
            self.add_block(getattr(block, "lines", block))
        return self

    def sorted_scopes(self) -> Iterator[Tuple[str, Scope]]:
        """Yield (name, scope) pairs in ascending name order."""
        for name in sorted(self.scopes):
            yield name, self.scopes[name]

    @property
    def total_items(self) -> int:
        return sum(len(scope.items) for scope in self.scopes.values())
