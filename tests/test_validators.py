"""Tests for argument validators."""

import pytest
import typer

from rnastruct.core.exceptions import ValidationError
from rnastruct.core.validators import (
    ArithmeticRangeValidator,
    FileExtensionValidator,
    RegexValidator,
    ValueListValidator,
    as_typer_callback,
)


class TestArithmeticRange:
    def test_accept_and_reject(self):
        v = ArithmeticRangeValidator(1, 10)
        v(1)
        v(10)
        with pytest.raises(ValidationError, match="not in range"):
            v(11)

    def test_sequence_elementwise(self):
        v = ArithmeticRangeValidator(0, 1)
        assert v.is_valid([0, 0.5, 1])
        assert not v.is_valid([0, 2])

    def test_help(self):
        assert ArithmeticRangeValidator(1, 10).help == "Value must be in range [1,10]."

    def test_empty_range(self):
        with pytest.raises(ValueError):
            ArithmeticRangeValidator(5, 1)


class TestValueList:
    def test_accept_and_reject(self):
        v = ValueListValidator("rna4", "rna5")
        v("rna5")
        with pytest.raises(ValidationError):
            v("dna4")

    def test_help(self):
        assert ValueListValidator(1, 2).help == "Value must be one of [1,2]."


class TestRegex:
    def test_full_match(self):
        v = RegexValidator(r"[ACGU]+")
        assert v.is_valid("ACGU")
        assert not v.is_valid("ACGUX")
        assert "[ACGU]+" in v.help


class TestFileExtension:
    def test_explicit(self):
        v = FileExtensionValidator([".CSV", "parquet"])
        assert v.extensions == ["csv", "parquet"]
        assert v.is_valid("out.csv")
        assert v.is_valid("OUT.PARQUET")
        assert not v.is_valid("out.txt")

    def test_registry_default(self):
        v = FileExtensionValidator()
        assert v.is_valid("rfam.dbn")
        assert v.is_valid("trna.bpseq.gz")
        assert not v.is_valid("notes.txt")
        assert "bpseq" in v.help


class TestTyperCallback:
    def test_passes_value_through(self):
        cb = as_typer_callback(ValueListValidator("a"))
        assert cb("a") == "a"
        assert cb(None) is None

    def test_bad_parameter(self):
        cb = as_typer_callback(ValueListValidator("a"))
        with pytest.raises(typer.BadParameter):
            cb("b")
