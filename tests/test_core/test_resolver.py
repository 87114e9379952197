from __future__ import annotations

import pytest

from ownversion.models import ConfigRecord
from ownversion.core.resolver import resolve_identity_record


@pytest.mark.unit
class TestResolveIdentityRecord:
    """Tests for resolve_identity_record."""

    def test_empty_sequence_returns_none(self) -> None:
        assert resolve_identity_record([]) is None

    def test_no_named_record_returns_none(self) -> None:
        records = [ConfigRecord(version="1.0.0"), ConfigRecord()]

        assert resolve_identity_record(records) is None

    def test_empty_name_is_skipped(self) -> None:
        named = ConfigRecord(name="demo", version="2.0.0")
        records = [ConfigRecord(name="", version="1.0.0"), named]

        assert resolve_identity_record(records) is named

    def test_first_named_record_wins(self) -> None:
        """Test earlier records take precedence over later ones."""
        first = ConfigRecord(name="first", version="1.0.0")
        second = ConfigRecord(name="second", version="2.0.0")

        assert resolve_identity_record([first, second]) is first

    def test_version_is_not_considered(self) -> None:
        """Test a named record without version is still selected."""
        versionless = ConfigRecord(name="demo")
        complete = ConfigRecord(name="demo", version="1.0.0")

        assert resolve_identity_record([versionless, complete]) is versionless

    def test_accepts_any_iterable(self) -> None:
        named = ConfigRecord(name="demo")

        assert resolve_identity_record(iter([ConfigRecord(), named])) is named
