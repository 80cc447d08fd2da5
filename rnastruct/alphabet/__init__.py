"""rnastruct.alphabet: residue and structure alphabets.

    - nucleotide.py: Alphabet + RNA4/RNA5/RNA15/DNA4/DNA5
    - structure.py: StructureAlphabet + DOT_BRACKET/WUSS51, partner tables
    - structured_rna.py: StructuredRNA combined element
"""

from rnastruct.alphabet.nucleotide import (
    ALPHABETS,
    DNA4,
    DNA5,
    RNA4,
    RNA5,
    RNA15,
    Alphabet,
    get_alphabet,
)
from rnastruct.alphabet.structure import (
    DOT_BRACKET,
    STRUCTURE_ALPHABETS,
    WUSS51,
    StructureAlphabet,
    get_structure_alphabet,
    wuss,
)
from rnastruct.alphabet.structured_rna import (
    StructuredRNA,
    combine,
    decompose,
    nucleotides,
    structures,
)

__all__ = [
    "Alphabet",
    "ALPHABETS",
    "RNA4",
    "RNA5",
    "RNA15",
    "DNA4",
    "DNA5",
    "get_alphabet",
    "StructureAlphabet",
    "STRUCTURE_ALPHABETS",
    "DOT_BRACKET",
    "WUSS51",
    "wuss",
    "get_structure_alphabet",
    "StructuredRNA",
    "combine",
    "decompose",
    "nucleotides",
    "structures",
]
