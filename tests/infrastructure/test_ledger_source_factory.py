"""Tests for ledger source backend selection."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from gnc_ledger.infrastructure import ledger_source_factory as factory
from gnc_ledger.infrastructure.settings import LedgerSettings
from gnc_ledger.infrastructure.sql_ledger_source import SqlAlchemyLedgerSource


def test_factory_defaults_to_sqlalchemy() -> None:
    source = factory.create_ledger_source(
        MagicMock(),
        logger=MagicMock(),
        settings=LedgerSettings(),
    )

    assert isinstance(source, SqlAlchemyLedgerSource)


def test_factory_uses_piecash_backend(monkeypatch, tmp_path: Path) -> None:
    dummy_source = object()

    def _fake_source(path, logger=None):
        assert path == tmp_path
        assert logger is not None
        return dummy_source

    monkeypatch.setattr(factory, "PieCashLedgerSource", _fake_source)
    settings = LedgerSettings(backend="piecash", piecash_file=tmp_path)

    assert factory.create_ledger_source(
        MagicMock(),
        settings=settings,
    ) is dummy_source


def test_factory_requires_piecash_file() -> None:
    with pytest.raises(RuntimeError):
        factory.create_ledger_source(
            MagicMock(),
            logger=MagicMock(),
            settings=LedgerSettings(backend="piecash"),
        )


def test_factory_rejects_unknown_backend() -> None:
    with pytest.raises(ValueError):
        factory.create_ledger_source(
            MagicMock(),
            logger=MagicMock(),
            settings=LedgerSettings(backend="xml"),
        )
