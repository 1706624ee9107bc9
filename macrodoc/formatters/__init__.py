"""Output formatters for macrodoc."""

from .markup import MarkupRule, MarkupTransformer
from .scope_formatter import ScopeFormatter, document_header
from .index_formatter import IndexFormatter

__all__ = [
    "MarkupRule",
    "MarkupTransformer",
    "ScopeFormatter",
    "document_header",
    "IndexFormatter",
]
