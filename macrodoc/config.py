"""
Configuration for macrodoc generation runs.

All settings are fixed per build: they come from model defaults, an optional
JSON config file, MACRODOC_* environment variables (a .env file is picked up
via python-dotenv) and finally explicit overrides from the caller.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "MACRODOC_"


class GeneratorConfig(BaseModel):
    """Settings for one reference generation run."""
    input_file: Path = Field(
        Path("src/drc/drc/built-in-macros/drc.lym"),
        description="Source definition file carrying the annotation blocks"
    )
    output_dir: Path = Field(
        Path("src/lay/lay/doc"),
        description="Root directory of the generated documents"
    )
    location: str = Field(
        "about/drc_ref",
        description="Logical location slug used for filenames and links"
    )
    title: str = Field("DRC Reference", description="Title and keyword of the index document")
    block_key: str = Field("%DRC%", description="Marker that opens an annotation block")
    comment_prefix: str = Field("#", description="Comment syntax of the input file")
    class_namespace: str = Field(
        "RBA",
        description="Namespace whose Namespace::Class references become class links"
    )
    dtd: str = Field("klayout_doc.dtd", description="DOCTYPE system identifier")
    encoding: str = Field("utf-8", description="Encoding of input and output files")

    class Config:
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "input_file": "src/lvs/lvs/built-in-macros/lvs.lym",
                "output_dir": "src/lay/lay/doc",
                "location": "about/lvs_ref",
                "title": "LVS Reference",
                "block_key": "%LVS%"
            }
        }

    @classmethod
    def from_json(cls, path: Path) -> "GeneratorConfig":
        """
        Load a configuration from a JSON file.

        Args:
            path: Path to JSON file with GeneratorConfig fields

        Returns:
            GeneratorConfig with file values over the defaults
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file does not exist: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a JSON object: {path}")

        return cls(**data)

    def scope_path(self, scope_name: str) -> Path:
        """Output path of the document for a scope."""
        return self.output_dir / f"{self.location}_{scope_name.lower()}.xml"

    @property
    def index_path(self) -> Path:
        return self.output_dir / f"{self.location}.xml"

    def topic_href(self, scope_name: str) -> str:
        """Link from the index document to a scope document."""
        return f"/{self.location}_{scope_name.lower()}.xml"


def _env_overrides() -> Dict[str, str]:
    """Collect MACRODOC_<FIELD> environment variables."""
    overrides = {}
    for field_name in GeneratorConfig.model_fields:
        value = os.getenv(ENV_PREFIX + field_name.upper())
        if value is not None:
            overrides[field_name] = value
    return overrides


def load_config(
    config_file: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    use_env: bool = True
) -> GeneratorConfig:
    """
    Build the effective configuration.

    Args:
        config_file: Optional JSON config file
        overrides: Explicit values (None entries are ignored)
        use_env: Read .env and MACRODOC_* environment variables

    Returns:
        GeneratorConfig
    """
    values: Dict[str, Any] = {}

    if config_file:
        values.update(
            GeneratorConfig.from_json(config_file).model_dump(exclude_unset=True)
        )
        logger.debug(f"Loaded config file: {config_file}")

    if use_env:
        load_dotenv(find_dotenv(usecwd=True))
        env_values = _env_overrides()
        if env_values:
            logger.debug(f"Environment overrides: {', '.join(sorted(env_values))}")
        values.update(env_values)

    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    return GeneratorConfig(**values)
