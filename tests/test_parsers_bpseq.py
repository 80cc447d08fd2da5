"""Tests for the BPSEQ format."""

import io
from pathlib import Path

import pytest

from rnastruct.alphabet import decompose
from rnastruct.core.exceptions import NumericOverflowError, ParseError, UnexpectedEndOfInput
from rnastruct.parsers.base import IGNORE, ScalarBuffer, StructureFileInputOptions
from rnastruct.parsers.bpseq import BpseqFormat
from rnastruct.parsers.stream import LineStream

FIXTURES = Path(__file__).resolve().parent / "fixtures"
OPTIONS = StructureFileInputOptions()


def read_full(source, options=OPTIONS):
    seq, id, bpp, structure, comment = [], [], [], [], []
    energy, react, react_err, offset = ScalarBuffer(), ScalarBuffer(), ScalarBuffer(), ScalarBuffer()
    stream = io.StringIO(source) if isinstance(source, str) else source
    BpseqFormat().read(stream, options, seq, id, bpp, structure, energy,
                       react, react_err, comment, offset)
    return {
        "seq": "".join(seq),
        "id": "".join(id),
        "bpp": bpp,
        "structure": "".join(structure),
        "comment": "".join(comment),
        "energy": energy.value,
        "offset": offset.value,
    }


class TestBpseqFixture:
    @pytest.fixture
    def record(self):
        with open(FIXTURES / "sample.bpseq") as f:
            return read_full(f)

    def test_sequence(self, record):
        assert record["seq"] == "GGACACCAG"

    def test_id_and_comment(self, record):
        assert record["id"] == "tiny_pk"
        assert record["comment"] == "Organism: synthetic\npseudoknotted toy"

    def test_structure_with_pseudoknot(self, record):
        assert record["structure"] == "((.[.)).]"

    def test_bpp_zero_based(self, record):
        assert record["bpp"][0] == {(1.0, 6)}
        assert record["bpp"][2] == set()
        assert record["bpp"][3] == {(1.0, 8)}

    def test_offset_and_energy(self, record):
        assert record["offset"] == 0
        assert record["energy"] is None


class TestBpseqRecords:
    def test_offset_from_first_index(self):
        r = read_full("5 G 7\n6 A 0\n7 C 5\n")
        assert r["offset"] == 4
        assert r["structure"] == "(.)"
        assert r["bpp"][0] == {(1.0, 2)}

    def test_no_header(self):
        r = read_full("1 A 0\n2 U 0\n")
        assert r["id"] == ""
        assert r["comment"] == ""
        assert r["seq"] == "AU"

    def test_t_converted(self):
        assert read_full("1 T 0\n")["seq"] == "U"

    def test_records_split_by_blank_line(self):
        lines = LineStream(io.StringIO("Filename: a\n1 G 2\n2 C 1\n\nFilename: b\n1 A 0\n"))
        first = read_full(lines)
        second = read_full(lines)
        assert (first["id"], first["structure"]) == ("a", "()")
        assert (second["id"], second["structure"]) == ("b", ".")

    def test_records_split_by_header(self):
        lines = LineStream(io.StringIO("Filename: a\n1 G 0\nFilename: b\n1 C 0\n"))
        assert read_full(lines)["id"] == "a"
        assert read_full(lines)["id"] == "b"

    def test_combined(self):
        opts = StructureFileInputOptions(structured_seq_combined=True)
        structured, offset = [], ScalarBuffer()
        BpseqFormat().read(
            io.StringIO("1 G 3\n2 A 0\n3 C 1\n"), opts,
            structured, IGNORE, IGNORE, structured, IGNORE, IGNORE, IGNORE, IGNORE, offset,
        )
        seq, struct = decompose(structured)
        assert "".join(seq) == "GAC"
        assert "".join(struct) == "(.)"
        assert offset.value == 0


class TestBpseqErrors:
    def test_asymmetric_pair(self):
        with pytest.raises(ParseError, match="does not pair back"):
            read_full("1 G 3\n2 A 0\n3 C 0\n")

    def test_partner_outside_record(self):
        with pytest.raises(ParseError, match="outside the record"):
            read_full("1 G 9\n2 C 0\n")

    def test_non_consecutive(self):
        with pytest.raises(ParseError, match="expected index 2"):
            read_full("1 G 0\n3 C 0\n")

    def test_index_zero(self):
        with pytest.raises(ParseError):
            read_full("0 G 0\n")

    def test_overflow(self):
        with pytest.raises(NumericOverflowError):
            read_full("1 G 99999999999999999999999\n")

    def test_wrong_column_count(self):
        with pytest.raises(ParseError, match="columns"):
            read_full("1 G\n")

    def test_negative_partner(self):
        with pytest.raises(ParseError, match="negative"):
            read_full("1 G -1\n")

    @pytest.mark.parametrize("text", ["1 G 0\n-2 C 0\n", "-1 G 0\n", "Filename: x\n+1 G 0\n-2 C 0\n"])
    def test_signed_index_row(self, text):
        with pytest.raises(ParseError, match="negative"):
            read_full(text)

    def test_undecodable_bytes(self):
        with pytest.raises(ParseError, match="undecodable"):
            read_full(io.BytesIO(b"1 G 0\n2 \xff 0\n"))

    def test_multi_char_base(self):
        with pytest.raises(ParseError, match="single character"):
            read_full("1 GA 0\n")

    def test_illegal_base(self):
        with pytest.raises(ParseError):
            read_full("1 Z 0\n")

    def test_pseudoknot_needs_deeper_alphabet(self):
        opts = StructureFileInputOptions(structure_alphabet="dot_bracket")
        with pytest.raises(ParseError, match="pseudoknot depth"):
            read_full("1 G 3\n2 G 4\n3 C 1\n4 C 2\n", opts)

    @pytest.mark.parametrize("text", ["", "\n", "Filename: x\n# nothing else\n"])
    def test_end_of_stream(self, text):
        with pytest.raises(UnexpectedEndOfInput):
            read_full(text)
