"""Combined sequence/structure element.

When ``structured_seq_combined`` is set, a format stores one StructuredRNA per
position instead of filling separate sequence and structure buffers. The
helpers below convert between the two layouts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from rnastruct.alphabet.structure import WUSS51, StructureAlphabet


@dataclass(frozen=True, order=True)
class StructuredRNA:
    """A nucleotide and its structure symbol at one position.

    Ordering compares the nucleotide first, then the structure symbol.
    """

    nucleotide: str
    structure: str
    structure_alphabet: StructureAlphabet = field(
        default=WUSS51, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        if len(self.nucleotide) != 1 or len(self.structure) != 1:
            raise ValueError(
                f"StructuredRNA takes single symbols, got {self.nucleotide!r}, {self.structure!r}"
            )

    def __iter__(self) -> Iterator[str]:
        yield self.nucleotide
        yield self.structure

    @property
    def is_pair_open(self) -> bool:
        return self.structure_alphabet.is_pair_open(self.structure)

    @property
    def is_pair_close(self) -> bool:
        return self.structure_alphabet.is_pair_close(self.structure)

    @property
    def is_unpaired(self) -> bool:
        return self.structure_alphabet.is_unpaired(self.structure)


def combine(
    sequence: Sequence[str],
    structure: Sequence[str],
    structure_alphabet: StructureAlphabet = WUSS51,
) -> list[StructuredRNA]:
    """Zip a sequence and its structure into combined elements."""
    if len(sequence) != len(structure):
        raise ValueError(
            f"sequence ({len(sequence)}) and structure ({len(structure)}) differ in length"
        )
    return [StructuredRNA(n, s, structure_alphabet) for n, s in zip(sequence, structure)]


def nucleotides(structured_seq: Iterable[StructuredRNA]) -> Iterator[str]:
    return (e.nucleotide for e in structured_seq)


def structures(structured_seq: Iterable[StructuredRNA]) -> Iterator[str]:
    return (e.structure for e in structured_seq)


def decompose(structured_seq: Iterable[StructuredRNA]) -> tuple[list[str], list[str]]:
    """Split combined elements back into a sequence list and a structure list."""
    seq: list[str] = []
    struct: list[str] = []
    for e in structured_seq:
        seq.append(e.nucleotide)
        struct.append(e.structure)
    return seq, struct
