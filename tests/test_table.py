"""Tests for RecordTable."""

from pathlib import Path

import pytest

from rnastruct.core.table import RecordTable
from rnastruct.parsers.base import Field
from rnastruct.parsers.file import StructureFile, StructureRecord

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def table() -> RecordTable:
    fields = (Field.SEQ, Field.ID, Field.STRUCTURE, Field.ENERGY, Field.OFFSET, Field.COMMENT)
    return RecordTable.from_records(StructureFile(FIXTURES / "sample.dbn", fields=fields))


def test_columns_and_count(table: RecordTable) -> None:
    assert list(table.df.columns) == list(RecordTable.COLUMNS)
    assert table.count() == 3


def test_values(table: RecordTable) -> None:
    row = table.df.iloc[0]
    assert row["id"] == "hairpin"
    assert row["length"] == 12
    assert row["n_pairs"] == 4
    assert row["offset"] == 0


def test_mean_energy_skips_missing(table: RecordTable) -> None:
    assert table.mean_energy() == pytest.approx(-4.3)


def test_mean_length(table: RecordTable) -> None:
    assert table.mean_length() == pytest.approx((12 + 8 + 6) / 3)


def test_empty() -> None:
    t = RecordTable.from_records([])
    assert t.count() == 0
    assert t.mean_energy() is None
    assert t.mean_length() is None


def test_no_energies() -> None:
    t = RecordTable.from_records([StructureRecord(sequence="AC", structure="..")])
    assert t.mean_energy() is None


def test_parquet_roundtrip(table: RecordTable, tmp_path: Path) -> None:
    out = tmp_path / "nested" / "records.parquet"
    table.save_parquet(out)
    loaded = RecordTable.load_parquet(out)
    assert loaded.count() == 3
    assert loaded.df["id"].tolist() == ["hairpin", "", "ambiguous"]


def test_save_csv(table: RecordTable, tmp_path: Path) -> None:
    out = tmp_path / "records.csv"
    table.save_csv(out)
    header = out.read_text().splitlines()[0]
    assert header.split(",") == list(RecordTable.COLUMNS)
