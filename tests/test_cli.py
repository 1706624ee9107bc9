"""Tests for the typer command-line interface."""

import json
from pathlib import Path

from typer.testing import CliRunner

from macrodoc.cli import app

runner = CliRunner()


def test_generate(sample_macro: Path, tmp_path: Path):
    out = tmp_path / "doc"
    result = runner.invoke(app, ["generate", "--input", str(sample_macro), "--output-dir", str(out)])

    assert result.exit_code == 0, result.output
    assert (out / "about" / "drc_ref_geom.xml").exists()
    assert (out / "about" / "drc_ref_layer.xml").exists()
    assert (out / "about" / "drc_ref.xml").exists()
    assert "Generation Complete" in result.output


def test_generate_with_config_file(sample_macro: Path, tmp_path: Path):
    config_path = tmp_path / "cfg.json"
    config_path.write_text(json.dumps({
        "input_file": str(sample_macro),
        "output_dir": str(tmp_path / "out"),
        "location": "ref",
        "title": "My Reference",
    }))

    result = runner.invoke(app, ["generate", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    index = (tmp_path / "out" / "ref.xml").read_text(encoding="utf-8")
    assert "<title>My Reference</title>" in index
    assert '<topic href="/ref_geom.xml"/>' in index


def test_generate_missing_input_fails(tmp_path: Path):
    result = runner.invoke(app, ["generate", "--input", str(tmp_path / "missing.lym")])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_generate_authoring_error_fails(tmp_path: Path):
    source = tmp_path / "bad.lym"
    source.write_text("# %DRC%\n# @scope\n# @name S\n# @brief s\n\n# %DRC%\n# @name x\n\n")

    result = runner.invoke(app, ["generate", "--input", str(source), "--output-dir", str(tmp_path / "o")])

    assert result.exit_code == 1
    assert "Authoring error" in result.output


def test_inspect_lists_scopes_without_writing(sample_macro: Path, tmp_path: Path):
    result = runner.invoke(app, ["inspect", "--input", str(sample_macro)])

    assert result.exit_code == 0, result.output
    assert "Geom" in result.output
    assert "Layer" in result.output
    assert not (tmp_path / "src").exists()


def test_show_config(tmp_path: Path):
    result = runner.invoke(app, ["show-config", "--location", "about/lvs_ref"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["location"] == "about/lvs_ref"
    assert data["title"] == "DRC Reference"
