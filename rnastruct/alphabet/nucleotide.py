"""Nucleotide alphabets.

An alphabet answers two questions for a sequence reader: is a character legal
at all, and which symbol does it become. The reader checks characters against
the *legal* alphabet and converts them with the *output* alphabet, so e.g. an
RNA15 legal alphabet paired with RNA5 output accepts IUPAC codes and stores
them as ``N``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union


@dataclass(frozen=True)
class Alphabet:
    """A set of single-character residue symbols."""

    name: str
    symbols: str
    unknown: str = ""  # symbol for characters outside `symbols`; "" means none
    aliases: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, char: object) -> bool:
        return isinstance(char, str) and self.is_char_valid(char)

    def is_char_valid(self, char: str) -> bool:
        """Whether `char` is a symbol or an alias of one (case-insensitive)."""
        if len(char) != 1:
            return False
        c = char.upper()
        return c in self.symbols or c in self.aliases

    def convert(self, char: str) -> str:
        """Map a character onto this alphabet.

        Raises:
            ValueError: if the character is not representable and the
                alphabet has no unknown symbol.
        """
        c = char.upper()
        if len(c) == 1 and c in self.symbols:
            return c
        if c in self.aliases:
            return self.aliases[c]
        if self.unknown:
            return self.unknown
        raise ValueError(f"'{char}' is not a symbol of {self.name}")

    def rank(self, symbol: str) -> int:
        return self.symbols.index(symbol)


RNA4 = Alphabet("rna4", "ACGU", unknown="A", aliases={"T": "U"})
RNA5 = Alphabet("rna5", "ACGNU", unknown="N", aliases={"T": "U"})
RNA15 = Alphabet("rna15", "ABCDGHKMNRSUVWY", unknown="N", aliases={"T": "U"})
DNA4 = Alphabet("dna4", "ACGT", unknown="A", aliases={"U": "T"})
DNA5 = Alphabet("dna5", "ACGNT", unknown="N", aliases={"U": "T"})

ALPHABETS: dict[str, Alphabet] = {a.name: a for a in (RNA4, RNA5, RNA15, DNA4, DNA5)}


def get_alphabet(alphabet: Union[str, Alphabet]) -> Alphabet:
    """Resolve an alphabet name (e.g. ``"rna5"``) or pass an Alphabet through."""
    if isinstance(alphabet, Alphabet):
        return alphabet
    try:
        return ALPHABETS[alphabet.lower()]
    except KeyError:
        raise KeyError(f"Unknown alphabet '{alphabet}'. Available: {sorted(ALPHABETS)}") from None
