"""
Reference Generator - Main orchestration logic.

Ties together scanning, collection and formatting for one full run:
1. Scan the input file into annotation blocks
2. Collect blocks into scopes and items
3. Write one document per scope
4. Write the topic index

Every run regenerates all files. A failure halts the run; files written
before the failure are left in place.
"""

import sys
from pathlib import Path
from typing import List, Optional
import logging

from macrodoc.collector import Collector
from macrodoc.config import GeneratorConfig
from macrodoc.extractors import BlockScanner, CommentUnwrapper, DocItemParser
from macrodoc.formatters import IndexFormatter, MarkupTransformer, ScopeFormatter
from macrodoc.schemas import GeneratedFile, GenerationResult

logger = logging.getLogger(__name__)


class ReferenceGenerator:
    """
    Main generator for reference documents.

    Each instance owns the state of a single run; nothing is shared between
    instances.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None, command_line: Optional[str] = None):
        """
        Initialize the generator.

        Args:
            config: Run configuration (default: GeneratorConfig())
            command_line: Text echoed into file headers (default: sys.argv)
        """
        self.config = config or GeneratorConfig()
        self.command_line = command_line if command_line is not None else " ".join(sys.argv)

        self.transformer = MarkupTransformer(
            location=self.config.location,
            class_namespace=self.config.class_namespace
        )
        self.scope_formatter = ScopeFormatter(self.transformer, self.command_line, self.config.dtd)
        self.index_formatter = IndexFormatter(self.transformer, self.command_line, self.config.dtd)

        self.dropped_blocks = 0

    def collect(self) -> Collector:
        """Scan the input file and collect all scopes."""
        scanner = BlockScanner(
            CommentUnwrapper(self.config.block_key, self.config.comment_prefix)
        )
        collector = Collector(DocItemParser())
        collector.collect(scanner.scan_file(self.config.input_file, self.config.encoding))

        self.dropped_blocks = scanner.dropped_blocks + collector.orphan_blocks

        logger.info(
            f"Collected {len(collector.scopes)} scopes with "
            f"{collector.total_items} items"
        )
        if self.dropped_blocks:
            logger.info(f"Dropped {self.dropped_blocks} blocks")

        return collector

    def write_scopes(self, collector: Collector) -> List[GeneratedFile]:
        """Render and write one document per scope."""
        written = []

        for name, scope in collector.sorted_scopes():
            doc = self.scope_formatter.format(scope)
            outfile = self.config.scope_path(name)
            self._write(outfile, doc)
            logger.info(f"---> {outfile} written.")

            written.append(GeneratedFile(
                path=str(outfile),
                kind="scope",
                scope_name=name,
                item_count=len(scope.items)
            ))

        return written

    def write_index(self, collector: Collector) -> GeneratedFile:
        """Render and write the topic index."""
        hrefs = [self.config.topic_href(name) for name, _ in collector.sorted_scopes()]
        doc = self.index_formatter.format(self.config.title, hrefs)

        outfile = self.config.index_path
        self._write(outfile, doc)
        logger.info(f"---> Index file {outfile} written.")

        return GeneratedFile(path=str(outfile), kind="index", item_count=len(hrefs))

    def generate(self) -> GenerationResult:
        """
        Run the complete generation pipeline.

        Returns:
            GenerationResult with the written files
        """
        logger.info("=" * 80)
        logger.info(f"Generating {self.config.title}")
        logger.info("=" * 80)

        collector = self.collect()

        files = self.write_scopes(collector)
        files.append(self.write_index(collector))

        return GenerationResult(
            input_file=str(self.config.input_file),
            output_dir=str(self.config.output_dir),
            command_line=self.command_line,
            files=files,
            total_scopes=len(collector.scopes),
            total_items=collector.total_items,
            dropped_blocks=self.dropped_blocks
        )

    def _write(self, path: Path, content: str):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding=self.config.encoding, newline='\n') as f:
            f.write(content)
