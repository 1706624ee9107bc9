"""Shared fixtures for macrodoc tests."""

from pathlib import Path

import pytest

from macrodoc.config import GeneratorConfig

SAMPLE_MACRO = """\
<?xml version="1.0" encoding="utf-8"?>
<klayout-macro>
 <text>
# %DRC%
# @scope
# @brief Geometry operations
# @name Geom
#
# Operations on shapes. See \\Layer#size.

# %DRC%
# @name perimeter
# @brief Computes the perimeter &amp; more
# @synopsis perimeter
#
# Uses @b all @/b edges of RBA::Region.
# @code
#   l = perimeter
#   @b not a tag
# @/code

def perimeter
  0
end

# %DRC%
# @name area
# @brief Computes area
# @synopsis area(x,y)
#
# Returns the area.

# %DRC%
# @scope
# @name Layer
# @brief Layer objects

# %DRC%
# @name size
# @brief Sizes a layer

# %DRC%
# @name dangling
# @brief Never terminated
 </text>
</klayout-macro>
"""


@pytest.fixture
def sample_macro(tmp_path: Path) -> Path:
    path = tmp_path / "drc.lym"
    path.write_text(SAMPLE_MACRO, encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path: Path, sample_macro: Path) -> GeneratorConfig:
    return GeneratorConfig(
        input_file=sample_macro,
        output_dir=tmp_path / "doc",
        location="about/drc_ref",
        title="DRC Reference",
    )


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """Keep a developer's .env and MACRODOC_* variables out of the tests."""
    for field_name in GeneratorConfig.model_fields:
        monkeypatch.delenv("MACRODOC_" + field_name.upper(), raising=False)
    monkeypatch.chdir(tmp_path)
