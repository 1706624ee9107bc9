"""Extraction components for macrodoc."""

from .comment_unwrapper import CommentUnwrapper, LineEvent, LineKind, unescape_entities
from .block_scanner import BlockScanner, RawBlock, scan_blocks
from .doc_item_parser import DocItemParser, parse_doc_item, is_scope_block

__all__ = [
    "CommentUnwrapper",
    "LineEvent",
    "LineKind",
    "unescape_entities",
    "BlockScanner",
    "RawBlock",
    "scan_blocks",
    "DocItemParser",
    "parse_doc_item",
    "is_scope_block",
]
