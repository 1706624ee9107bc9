"""
macrodoc - Reference documentation from annotated macro files.

Extracts the tagged comment blocks of a macro definition file and renders
them into cross-linked XML reference documents plus a topic index.

Main Components:
- Extractors: Comment unwrapping, block scanning, item parsing
- Collector: Groups items into scopes
- Formatters: Markup transformation, scope documents, index document
- Generator: Orchestrates a full run

Usage:
    from macrodoc import ReferenceGenerator, load_config

    generator = ReferenceGenerator(load_config())
    result = generator.generate()
"""

from .schemas import (
    Paragraph,
    DocItem,
    Scope,
    GeneratedFile,
    GenerationResult,
    IncompleteDocItemError,
)
from .config import GeneratorConfig, load_config
from .collector import Collector
from .generator import ReferenceGenerator

__all__ = [
    # Main generator
    "ReferenceGenerator",
    "Collector",

    # Configuration
    "GeneratorConfig",
    "load_config",

    # Schemas
    "Paragraph",
    "DocItem",
    "Scope",
    "GeneratedFile",
    "GenerationResult",
    "IncompleteDocItemError",
]

__version__ = "0.1.0"
