"""End-to-end tests for ReferenceGenerator."""

from pathlib import Path

import pytest

from macrodoc.config import GeneratorConfig
from macrodoc.generator import ReferenceGenerator
from macrodoc.schemas import IncompleteDocItemError


def read(path) -> str:
    return Path(path).read_text(encoding="utf-8")


def test_generate_writes_scope_files_and_index(config: GeneratorConfig):
    result = ReferenceGenerator(config, command_line="macrodoc generate").generate()

    doc_dir = config.output_dir / "about"
    assert sorted(p.name for p in doc_dir.iterdir()) == [
        "drc_ref.xml",
        "drc_ref_geom.xml",
        "drc_ref_layer.xml",
    ]

    assert [f.kind for f in result.files] == ["scope", "scope", "index"]
    assert [f.scope_name for f in result.files[:2]] == ["Geom", "Layer"]
    assert result.index_file.path == str(config.index_path)
    assert result.total_scopes == 2
    assert result.total_items == 3
    assert result.dropped_blocks == 1


def test_scope_document_content(config: GeneratorConfig):
    ReferenceGenerator(config, command_line="macrodoc generate").generate()
    doc = read(config.scope_path("Geom"))

    assert "<!-- generated by macrodoc generate -->" in doc
    assert "<title>Geometry operations</title>" in doc
    assert 'See <a href="/about/drc_ref_layer.xml#size">Layer#size</a>.' in doc
    assert doc.index('<h2>"area" - Computes area</h2>') < doc.index('<h2>"perimeter"')
    assert '<h2>"perimeter" - Computes the perimeter &amp; more</h2>' in doc
    assert (
        'Uses <b>all</b> edges of <class_doc href="Region">Region</class_doc>.\n'
        "<pre>\n"
        "  l = perimeter\n"
        "  @b not a tag\n"
        "</pre>\n"
    ) in doc


def test_index_document_content(config: GeneratorConfig):
    ReferenceGenerator(config, command_line="macrodoc generate").generate()
    doc = read(config.index_path)

    assert "<title>DRC Reference</title>" in doc
    assert (
        "<topics>\n"
        '<topic href="/about/drc_ref_geom.xml"/>\n'
        '<topic href="/about/drc_ref_layer.xml"/>\n'
        "</topics>\n"
    ) in doc


def test_generation_is_idempotent(config: GeneratorConfig):
    first = ReferenceGenerator(config, command_line="macrodoc generate").generate()
    contents = {f.path: Path(f.path).read_bytes() for f in first.files}

    second = ReferenceGenerator(config, command_line="macrodoc generate").generate()

    assert [f.path for f in second.files] == list(contents)
    for path, data in contents.items():
        assert Path(path).read_bytes() == data


def test_existing_files_are_overwritten(config: GeneratorConfig):
    target = config.scope_path("Geom")
    target.parent.mkdir(parents=True)
    target.write_text("stale", encoding="utf-8")

    ReferenceGenerator(config, command_line="x").generate()

    assert read(target).startswith("<?xml")


def test_incomplete_item_halts_run(tmp_path: Path):
    source = tmp_path / "broken.lym"
    source.write_text(
        "# %DRC%\n# @scope\n# @name Alpha\n# @brief A\n\n"
        "# %DRC%\n# @name fine\n# @brief ok\n\n"
        "# %DRC%\n# @scope\n# @name Beta\n# @brief B\n\n"
        "# %DRC%\n# @name nobrief\n\n",
        encoding="utf-8",
    )
    config = GeneratorConfig(input_file=source, output_dir=tmp_path / "out")

    with pytest.raises(IncompleteDocItemError) as excinfo:
        ReferenceGenerator(config, command_line="x").generate()

    assert excinfo.value.key == "nobrief"
    assert excinfo.value.scope_name == "Beta"
    assert config.scope_path("Alpha").exists()
    assert not config.scope_path("Beta").exists()
    assert not config.index_path.exists()


def test_missing_input_halts_run(tmp_path: Path):
    config = GeneratorConfig(input_file=tmp_path / "nope.lym", output_dir=tmp_path / "out")
    with pytest.raises(FileNotFoundError):
        ReferenceGenerator(config, command_line="x").generate()


def test_empty_input_writes_empty_index(tmp_path: Path):
    source = tmp_path / "empty.lym"
    source.write_text("nothing here\n", encoding="utf-8")
    config = GeneratorConfig(input_file=source, output_dir=tmp_path / "out")

    result = ReferenceGenerator(config, command_line="x").generate()

    assert [f.kind for f in result.files] == ["index"]
    assert "<topics>\n</topics>\n" in read(config.index_path)
