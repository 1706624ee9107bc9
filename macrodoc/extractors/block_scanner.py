"""
Block extraction from annotated macro files.

Drives the CommentUnwrapper over an input stream and yields each completed
annotation block in file order. A block opens at a start marker, collects
the annotation lines that follow and is delivered on the next blank line.
Blocks that never see a blank line are dropped.
"""

from pathlib import Path
from typing import Iterable, Iterator, List, Optional
from dataclasses import dataclass, field
import logging

from macrodoc.extractors.comment_unwrapper import CommentUnwrapper, LineKind

logger = logging.getLogger(__name__)


@dataclass
class RawBlock:
    """Annotation lines of one block, comment syntax already removed."""
    lines: List[str] = field(default_factory=list)
    line_number: int = 0  # line of the start marker (1-based)


class BlockScanner:
    """
    Two-state scanner: no block open / block open.

    Lines that are neither annotations nor blank are ignored and keep an
    open block open.
    """

    def __init__(self, unwrapper: Optional[CommentUnwrapper] = None):
        self.unwrapper = unwrapper or CommentUnwrapper()
        self.dropped_blocks = 0

    def scan_lines(self, lines: Iterable[str]) -> Iterator[RawBlock]:
        """
        Yield completed blocks from a sequence of lines.

        Args:
            lines: Input lines (with or without line endings)

        Yields:
            RawBlock objects in file order
        """
        block: Optional[RawBlock] = None

        for line_number, line in enumerate(lines, 1):
            event = self.unwrapper.classify(line)

            if event.kind == LineKind.BLOCK_START:
                if block is not None:
                    self._drop(block, "superseded by a new block start")
                block = RawBlock(line_number=line_number)

            elif event.kind == LineKind.ANNOTATION:
                if block is not None:
                    block.lines.append(event.text)

            elif event.kind == LineKind.BLANK:
                if block is not None:
                    logger.debug(
                        f"Block at line {block.line_number} complete "
                        f"({len(block.lines)} lines)"
                    )
                    yield block
                    block = None

        if block is not None:
            self._drop(block, "unterminated at end of input")

    def scan_file(self, path: Path, encoding: str = "utf-8") -> Iterator[RawBlock]:
        """
        Yield completed blocks from a file.

        Args:
            path: Input file
            encoding: File encoding

        Yields:
            RawBlock objects in file order
        """
        logger.info(f"Scanning {path}")
        with open(path, 'r', encoding=encoding) as f:
            yield from self.scan_lines(f)

    def _drop(self, block: RawBlock, reason: str):
        self.dropped_blocks += 1
        logger.debug(f"Dropping block at line {block.line_number}: {reason}")


def scan_blocks(
    path: Path,
    block_key: str = "%DRC%",
    comment_prefix: str = "#",
    encoding: str = "utf-8"
) -> List[RawBlock]:
    """
    Convenience function to extract all blocks of a file.

    Example:
        >>> blocks = scan_blocks(Path("drc.lym"))
        >>> blocks[0].lines[0]
        '@scope'
    """
    scanner = BlockScanner(CommentUnwrapper(block_key, comment_prefix))
    return list(scanner.scan_file(path, encoding))
