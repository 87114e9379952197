from __future__ import annotations

import sys
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from ownversion.__main__ import _print_startup_error, main


@pytest.mark.unit
class TestModuleEntrypoint:
    """Tests for ``python -m ownversion``."""

    @pytest.mark.parametrize("code", [0, 1, 130])
    def test_forwards_cli_exit_code(self, code: int) -> None:
        calls = []

        def fake_main() -> int:
            calls.append(True)
            return code

        with patch.dict(sys.modules, {"ownversion.cli": SimpleNamespace(main=fake_main)}):
            assert main() == code

        assert calls == [True]

    def test_broken_cli_import(self, capsys: pytest.CaptureFixture) -> None:
        with patch.dict(sys.modules, {"ownversion.cli": None}):
            assert main() == 1

        err = capsys.readouterr().err
        assert err.startswith("ownversion CLI could not be started.")
        assert "ImportError:" in err


@pytest.mark.unit
class TestStartupErrorReport:
    """Tests for the report printed when the CLI cannot be imported."""

    def test_includes_package_version(self, capsys: pytest.CaptureFixture) -> None:
        fake_version = SimpleNamespace(__version__="9.8.7")

        with patch.dict(sys.modules, {"ownversion.__version__": fake_version}):
            _print_startup_error(ImportError("No module named 'rich'"))

        out, err = capsys.readouterr()
        assert out == ""
        assert "ownversion version: 9.8.7" in err
        assert "ImportError: No module named 'rich'" in err

    def test_unknown_package_version(self, capsys: pytest.CaptureFixture) -> None:
        with patch.dict(sys.modules, {"ownversion.__version__": None}):
            _print_startup_error(ImportError("broken"))

        err = capsys.readouterr().err
        assert "ownversion version: <unknown>" in err
        assert "Python version" in err
