"""Tests for nucleotide/structure alphabets and the combined StructuredRNA element."""

import pytest

from rnastruct.alphabet import (
    DNA5,
    DOT_BRACKET,
    RNA4,
    RNA5,
    RNA15,
    WUSS51,
    StructuredRNA,
    combine,
    decompose,
    get_alphabet,
    get_structure_alphabet,
    nucleotides,
    structures,
    wuss,
)
from rnastruct.core.exceptions import ParseError


# -- Nucleotide alphabets ----------------------------------------------------


class TestNucleotideAlphabet:
    def test_rna5_convert(self):
        assert [RNA5.convert(c) for c in "acgut"] == ["A", "C", "G", "U", "U"]

    def test_rna5_unknown_becomes_n(self):
        assert RNA5.convert("R") == "N"
        assert RNA5.convert("Y") == "N"

    def test_rna4_unknown_becomes_a(self):
        assert RNA4.convert("N") == "A"

    def test_dna5_maps_u_to_t(self):
        assert DNA5.convert("U") == "T"

    def test_legal_check(self):
        assert RNA15.is_char_valid("R")
        assert RNA15.is_char_valid("t")
        assert not RNA15.is_char_valid("Z")
        assert not RNA4.is_char_valid("N")
        assert not RNA5.is_char_valid("AC")

    def test_contains(self):
        assert "a" in RNA5
        assert "J" not in RNA5
        assert 3 not in RNA5

    def test_rank_and_len(self):
        assert len(RNA5) == 5
        assert RNA5.rank("U") == 4

    def test_get_alphabet(self):
        assert get_alphabet("RNA5") is RNA5
        assert get_alphabet(RNA4) is RNA4
        with pytest.raises(KeyError, match="Unknown alphabet"):
            get_alphabet("protein")


# -- Structure alphabets -----------------------------------------------------


class TestStructureAlphabet:
    def test_wuss51_size(self):
        assert len(WUSS51) == 51
        assert WUSS51.name == "wuss51"
        assert WUSS51.max_pseudoknot_depth == 22

    def test_small_wuss(self):
        w = wuss(2)
        assert w.pairs == (("<", ">"), ("(", ")"))
        assert w.name == "wuss11"

    def test_predicates(self):
        assert WUSS51.is_pair_open("<")
        assert WUSS51.is_pair_close("a")
        assert WUSS51.is_unpaired(":")
        assert not WUSS51.is_unpaired("(")
        assert WUSS51.pseudoknot_id("A") == 4
        assert WUSS51.pseudoknot_id(".") is None

    def test_partner_table_nested(self):
        assert DOT_BRACKET.partner_table("((.))") == [4, 3, None, 1, 0]

    def test_partner_table_pseudoknot(self):
        assert WUSS51.partner_table("([)]") == [2, 3, 0, 1]

    def test_partner_table_unterminated(self):
        with pytest.raises(ParseError, match="unterminated"):
            DOT_BRACKET.partner_table("((.)")

    def test_partner_table_unmatched_close(self):
        with pytest.raises(ParseError, match="unmatched"):
            DOT_BRACKET.partner_table("(.))")

    def test_partner_table_foreign_symbol(self):
        with pytest.raises(ParseError):
            DOT_BRACKET.partner_table("<..>")

    def test_render_nested(self):
        assert WUSS51.render([4, 3, None, 1, 0]) == "((.))"

    def test_render_pseudoknot_layer(self):
        partners = [6, 5, None, 8, None, 1, 0, None, 3]
        assert WUSS51.render(partners) == "((.[.)).]"

    def test_render_too_deep_for_dot_bracket(self):
        with pytest.raises(ParseError, match="pseudoknot depth"):
            DOT_BRACKET.render([2, 3, 0, 1])

    def test_render_asymmetric(self):
        with pytest.raises(ParseError, match="does not pair back"):
            WUSS51.render([2, None, None])

    def test_render_roundtrip_wuss(self):
        s = "((.[.)).]"
        assert WUSS51.render(WUSS51.partner_table(s)) == s

    def test_get_structure_alphabet(self):
        assert get_structure_alphabet("db") is DOT_BRACKET
        assert get_structure_alphabet("WUSS") is WUSS51
        with pytest.raises(KeyError):
            get_structure_alphabet("bpseq")


# -- StructuredRNA -----------------------------------------------------------


class TestStructuredRNA:
    def test_accessors(self):
        e = StructuredRNA("G", "(")
        assert e.nucleotide == "G"
        assert e.structure == "("
        nuc, struct = e
        assert (nuc, struct) == ("G", "(")

    def test_equality(self):
        assert StructuredRNA("A", ".") == StructuredRNA("A", ".")
        assert StructuredRNA("A", ".") != StructuredRNA("A", "(")
        assert StructuredRNA("A", ".", DOT_BRACKET) == StructuredRNA("A", ".", WUSS51)

    def test_hashable(self):
        assert len({StructuredRNA("A", "."), StructuredRNA("A", ".")}) == 1

    def test_ordering(self):
        items = [StructuredRNA("G", "."), StructuredRNA("A", ")"), StructuredRNA("A", "(")]
        assert sorted(items) == [
            StructuredRNA("A", "("),
            StructuredRNA("A", ")"),
            StructuredRNA("G", "."),
        ]

    def test_frozen(self):
        e = StructuredRNA("A", ".")
        with pytest.raises(AttributeError):
            e.nucleotide = "C"

    def test_rejects_multi_char(self):
        with pytest.raises(ValueError):
            StructuredRNA("AC", ".")

    def test_pair_predicates(self):
        assert StructuredRNA("G", "(").is_pair_open
        assert StructuredRNA("C", ")").is_pair_close
        assert StructuredRNA("A", ".").is_unpaired

    def test_combine_decompose(self):
        combined = combine("ACGU", "(())")
        assert len(combined) == 4
        seq, struct = decompose(combined)
        assert seq == list("ACGU")
        assert struct == list("(())")
        assert "".join(nucleotides(combined)) == "ACGU"
        assert "".join(structures(combined)) == "(())"

    def test_combine_length_mismatch(self):
        with pytest.raises(ValueError, match="differ in length"):
            combine("ACGU", "((.))")
