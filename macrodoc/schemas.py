"""
Pydantic schemas for the macrodoc system.

This module defines the data models used while extracting annotation blocks
from a macro definition file and rendering them into reference documents.

Architecture:
- Paragraph: Raw body lines of one paragraph (may contain a verbatim region)
- DocItem: One documented entity (name, brief, synopsis, paragraphs)
- Scope: A named group of DocItems that renders into its own document
- GeneratedFile / GenerationResult: What a generation run produced
"""

from pydantic import BaseModel, Field
from typing import List, Dict, Optional, Literal, Iterator, Tuple


# ============================================================================
# ERRORS
# ============================================================================

class IncompleteDocItemError(ValueError):
    """Raised when an item lacks a mandatory directive at render time."""

    def __init__(self, key: str, missing: List[str], scope_name: Optional[str] = None):
        self.key = key
        self.missing = list(missing)
        self.scope_name = scope_name

        where = f" in scope {scope_name!r}" if scope_name else ""
        super().__init__(
            f"Missing {' and '.join(self.missing)} for item {key!r}{where}"
        )


# ============================================================================
# DOCUMENTATION ITEMS
# ============================================================================

class Paragraph(BaseModel):
    """One body paragraph, kept as raw annotation lines."""
    lines: List[str] = Field(default_factory=list, description="Raw lines in input order")


class DocItem(BaseModel):
    """
    One documented entity parsed from an annotation block.

    `name` and `brief` are optional at parse time; they become mandatory
    when the item is rendered (see IncompleteDocItemError).
    """
    name: Optional[str] = Field(None, description="Item name, unique within its scope")
    brief: Optional[str] = Field(None, description="One-line summary")
    synopsis: List[str] = Field(
        default_factory=list,
        description="Usage signatures in declaration order"
    )
    paragraphs: List[Paragraph] = Field(
        default_factory=list,
        description="Body paragraphs in declaration order"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "area",
                "brief": "Computes area",
                "synopsis": ["area(x,y)"],
                "paragraphs": [{"lines": ["Returns the area."]}]
            }
        }

    def missing_fields(self) -> List[str]:
        """Return the mandatory directives this item lacks."""
        missing = []
        if not self.name:
            missing.append("@name")
        if not self.brief:
            missing.append("@brief")
        return missing


class Scope(BaseModel):
    """
    A named group of documentation items.

    The scope's own introductory text lives in `intro`. Child items are kept
    in a plain dict; rendering order comes from sorted_items(), never from
    insertion order.
    """
    intro: DocItem = Field(description="The scope's own brief, name and body")
    items: Dict[str, DocItem] = Field(
        default_factory=dict,
        description="Child items keyed by item name"
    )

    @property
    def name(self) -> Optional[str]:
        return self.intro.name

    @property
    def brief(self) -> Optional[str]:
        return self.intro.brief

    def add_item(self, item: DocItem) -> Optional[DocItem]:
        """
        Insert an item keyed by its name.

        Returns:
            The item previously registered under the same name, if any
        """
        key = item.name or ""
        replaced = self.items.get(key)
        self.items[key] = item
        return replaced

    def sorted_items(self) -> Iterator[Tuple[str, DocItem]]:
        """Yield (key, item) pairs in ascending key order."""
        for key in sorted(self.items):
            yield key, self.items[key]


# ============================================================================
# OUTPUT SCHEMAS
# ============================================================================

class GeneratedFile(BaseModel):
    """A file written by a generation run."""
    path: str = Field(description="Path of the written file")
    kind: Literal["scope", "index"] = Field(description="Document type")
    scope_name: Optional[str] = Field(None, description="Scope rendered into the file")
    item_count: int = Field(default=0, description="Items (or topics) in the document")


class GenerationResult(BaseModel):
    """
    Summary of one generation run.

    Returned by ReferenceGenerator.generate(); never written to disk so that
    repeated runs produce identical output trees.
    """
    input_file: str = Field(description="Source definition file that was scanned")
    output_dir: str = Field(description="Root directory of the generated files")
    command_line: str = Field(description="Command line echoed into file headers")
    files: List[GeneratedFile] = Field(default_factory=list, description="Files written, in order")
    total_scopes: int = Field(default=0, description="Scopes rendered")
    total_items: int = Field(default=0, description="Items rendered across all scopes")
    dropped_blocks: int = Field(
        default=0,
        description="Blocks discarded as unterminated or outside any scope"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "input_file": "src/drc/drc/built-in-macros/drc.lym",
                "output_dir": "src/lay/lay/doc",
                "command_line": "macrodoc generate",
                "files": [
                    {
                        "path": "src/lay/lay/doc/about/drc_ref_layer.xml",
                        "kind": "scope",
                        "scope_name": "Layer",
                        "item_count": 42
                    }
                ],
                "total_scopes": 1,
                "total_items": 42,
                "dropped_blocks": 0
            }
        }

    @property
    def index_file(self) -> Optional[GeneratedFile]:
        for generated in self.files:
            if generated.kind == "index":
                return generated
        return None
