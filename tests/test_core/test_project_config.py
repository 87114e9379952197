from __future__ import annotations

import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from ownversion.models import ConfigRecord
from ownversion.exceptions import ProjectFileError
from ownversion.core.project_config import ProjectConfigReader


PEP621_PYPROJECT = """\
[project]
name = "demo"
version = "1.2.3"
"""

POETRY_PYPROJECT = """\
[tool.poetry]
name = "demo-poetry"
version = "0.4.0"
"""

SETUP_CFG = """\
[metadata]
name = demo-setuptools
version = 2.0.0
"""


@pytest.mark.unit
class TestProjectConfigReaderPyproject:
    """Tests for pyproject.toml records."""

    def test_reads_pep621_project_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(PEP621_PYPROJECT, encoding="utf-8")

        records = ProjectConfigReader(tmp_path).read_records()

        assert records == [
            ConfigRecord(
                name="demo",
                version="1.2.3",
                source=(tmp_path / "pyproject.toml").resolve(),
                section="project",
            )
        ]

    def test_reads_poetry_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(POETRY_PYPROJECT, encoding="utf-8")

        records = ProjectConfigReader(tmp_path).read_records()

        assert len(records) == 1
        assert records[0].name == "demo-poetry"
        assert records[0].version == "0.4.0"
        assert records[0].section == "tool.poetry"

    def test_project_table_precedes_poetry_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            PEP621_PYPROJECT + "\n" + POETRY_PYPROJECT, encoding="utf-8"
        )

        records = ProjectConfigReader(tmp_path).read_records()

        assert [r.section for r in records] == ["project", "tool.poetry"]

    def test_dynamic_version_yields_record_without_version(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "demo"\ndynamic = ["version"]\n', encoding="utf-8"
        )

        records = ProjectConfigReader(tmp_path).read_records()

        assert records[0].name == "demo"
        assert records[0].version is None

    def test_non_string_values_are_absent(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            "[project]\nname = 42\nversion = 1.5\n", encoding="utf-8"
        )

        records = ProjectConfigReader(tmp_path).read_records()

        assert records[0].name is None
        assert records[0].version is None

    def test_blank_values_are_absent(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "  "\nversion = " 1.0.0 "\n', encoding="utf-8"
        )

        records = ProjectConfigReader(tmp_path).read_records()

        assert records[0].name is None
        assert records[0].version == "1.0.0"

    def test_pyproject_without_metadata_tables(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[build-system]\nrequires = ["setuptools"]\n', encoding="utf-8"
        )

        assert ProjectConfigReader(tmp_path).read_records() == []

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[project\nname=", encoding="utf-8")

        with pytest.raises(ProjectFileError) as exc_info:
            ProjectConfigReader(tmp_path).read_records()

        assert "invalid toml" in str(exc_info.value).lower()
        assert exc_info.value.original_error is not None


@pytest.mark.unit
class TestProjectConfigReaderSetupCfg:
    """Tests for setup.cfg records."""

    def test_reads_metadata_section(self, tmp_path: Path) -> None:
        (tmp_path / "setup.cfg").write_text(SETUP_CFG, encoding="utf-8")

        records = ProjectConfigReader(tmp_path).read_records()

        assert records == [
            ConfigRecord(
                name="demo-setuptools",
                version="2.0.0",
                source=(tmp_path / "setup.cfg").resolve(),
                section="metadata",
            )
        ]

    def test_setup_cfg_without_metadata(self, tmp_path: Path) -> None:
        (tmp_path / "setup.cfg").write_text("[flake8]\nmax-line-length = 100\n", encoding="utf-8")

        assert ProjectConfigReader(tmp_path).read_records() == []

    def test_pyproject_precedes_setup_cfg(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(PEP621_PYPROJECT, encoding="utf-8")
        (tmp_path / "setup.cfg").write_text(SETUP_CFG, encoding="utf-8")

        records = ProjectConfigReader(tmp_path).read_records()

        assert [r.name for r in records] == ["demo", "demo-setuptools"]

    def test_malformed_setup_cfg_raises(self, tmp_path: Path) -> None:
        (tmp_path / "setup.cfg").write_text("name = orphan\n", encoding="utf-8")

        with pytest.raises(ProjectFileError) as exc_info:
            ProjectConfigReader(tmp_path).read_records()

        assert "setup.cfg" in str(exc_info.value)


@pytest.mark.unit
class TestProjectConfigReaderDiscovery:
    """Tests for locating the project files."""

    def test_no_metadata_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectFileError) as exc_info:
            ProjectConfigReader(tmp_path).read_records()

        assert "no project metadata file" in str(exc_info.value).lower()

    def test_defaults_to_current_directory(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(PEP621_PYPROJECT, encoding="utf-8")

        with patch("ownversion.core.project_config.Path.cwd", return_value=tmp_path):
            records = ProjectConfigReader().read_records()

        assert records[0].name == "demo"

    def test_oversized_file_raises(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(PEP621_PYPROJECT, encoding="utf-8")

        with patch("ownversion.core.project_config.MAX_FILE_SIZE", 10):
            with pytest.raises(ProjectFileError) as exc_info:
                ProjectConfigReader(tmp_path).read_records()

        assert "too large" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_async_entry_point_returns_records(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(PEP621_PYPROJECT, encoding="utf-8")

        records = await ProjectConfigReader(tmp_path).read_project_config()

        assert [r.name for r in records] == ["demo"]

    @pytest.mark.asyncio
    async def test_async_entry_point_reads_off_the_event_loop(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(PEP621_PYPROJECT, encoding="utf-8")
        reader = ProjectConfigReader(tmp_path)
        seen = []
        read_records = reader.read_records

        def recording_read():
            seen.append(threading.get_ident())
            return read_records()

        with patch.object(reader, "read_records", recording_read):
            records = await reader.read_project_config()

        assert records[0].name == "demo"
        assert seen and seen[0] != threading.get_ident()

    @pytest.mark.asyncio
    async def test_async_entry_point_propagates_errors(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectFileError):
            await ProjectConfigReader(tmp_path).read_project_config()
