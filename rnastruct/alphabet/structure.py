"""RNA secondary-structure alphabets and pairing helpers.

Two alphabets are provided:

    dot_bracket   "." unpaired, "()" paired
    wuss          WUSS notation: ".,:;_-~" unpaired, "<>", "()", "[]", "{}"
                  and the letter pairs Aa..Rr for pseudoknots

Positions and partners are 0-based throughout this module.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from rnastruct.core.exceptions import ParseError


@dataclass(frozen=True)
class StructureAlphabet:
    """Structure symbols split into unpaired symbols and bracket pairs."""

    name: str
    unpaired: str
    pairs: tuple[tuple[str, str], ...]

    @property
    def symbols(self) -> str:
        return self.unpaired + "".join(o + c for o, c in self.pairs)

    @property
    def max_pseudoknot_depth(self) -> int:
        return len(self.pairs)

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, char: object) -> bool:
        return isinstance(char, str) and self.is_char_valid(char)

    def is_char_valid(self, char: str) -> bool:
        return len(char) == 1 and char in self.symbols

    def is_unpaired(self, char: str) -> bool:
        return len(char) == 1 and char in self.unpaired

    def is_pair_open(self, char: str) -> bool:
        return any(char == o for o, _ in self.pairs)

    def is_pair_close(self, char: str) -> bool:
        return any(char == c for _, c in self.pairs)

    def pseudoknot_id(self, char: str) -> Optional[int]:
        """Index of the bracket layer `char` belongs to, None if unpaired."""
        for i, (o, c) in enumerate(self.pairs):
            if char in (o, c):
                return i
        return None

    def partner_table(self, structure: Union[str, Sequence[str]]) -> list[Optional[int]]:
        """Resolve brackets into a partner table.

        Returns a list with, for every position, the 0-based index of its
        partner or None if unpaired.

        Raises:
            ParseError: on a symbol outside the alphabet or unbalanced brackets.
        """
        partners: list[Optional[int]] = [None] * len(structure)
        stacks: list[list[int]] = [[] for _ in self.pairs]
        for pos, char in enumerate(structure):
            if self.is_unpaired(char):
                continue
            layer = self.pseudoknot_id(char)
            if layer is None:
                raise ParseError(f"'{char}' at position {pos} is not a {self.name} symbol")
            if char == self.pairs[layer][0]:
                stacks[layer].append(pos)
                continue
            if not stacks[layer]:
                raise ParseError(f"unmatched closing '{char}' at position {pos}")
            partner = stacks[layer].pop()
            partners[partner] = pos
            partners[pos] = partner
        for layer, stack in enumerate(stacks):
            if stack:
                raise ParseError(
                    f"unterminated '{self.pairs[layer][0]}' at position {stack[-1]}"
                )
        return partners

    def render(self, partners: Sequence[Optional[int]]) -> str:
        """Render a partner table as a bracket string.

        Nested pairs use the first bracket pair; each pair crossing another is
        pushed to the next layer that has no crossing (pseudoknots). The
        preferred layer order is ``()``, ``[]``, ``{}``, ``<>``, then letters.

        Raises:
            ParseError: if the table is asymmetric or needs more layers than
                the alphabet provides.
        """
        layers = _render_order(self.pairs)
        out = [self.unpaired[0]] * len(partners)
        placed: list[list[tuple[int, int]]] = [[] for _ in layers]
        for i, j in enumerate(partners):
            if j is None:
                continue
            if j == i or not 0 <= j < len(partners) or partners[j] != i:
                raise ParseError(f"position {i} pairs with {j}, which does not pair back")
            if j < i:
                continue
            for layer, existing in enumerate(placed):
                if not any(_crosses((i, j), p) for p in existing):
                    existing.append((i, j))
                    out[i], out[j] = layers[layer]
                    break
            else:
                raise ParseError(
                    f"pseudoknot depth exceeds the {len(layers)} bracket layers of {self.name}"
                )
        return "".join(out)


def _crosses(a: tuple[int, int], b: tuple[int, int]) -> bool:
    (i, j), (k, l) = a, b
    return i < k < j < l or k < i < l < j


_PREFERRED = (("(", ")"), ("[", "]"), ("{", "}"), ("<", ">"))


def _render_order(pairs: tuple[tuple[str, str], ...]) -> list[tuple[str, str]]:
    head = [p for p in _PREFERRED if p in pairs]
    return head + [p for p in pairs if p not in head]


def wuss(depth: int = 22) -> StructureAlphabet:
    """WUSS alphabet with `depth` bracket layers (4 brackets + letter pairs)."""
    letters = tuple((u, u.lower()) for u in string.ascii_uppercase[: max(0, depth - 4)])
    pairs = (("<", ">"), ("(", ")"), ("[", "]"), ("{", "}")) + letters
    return StructureAlphabet(f"wuss{7 + 2 * len(pairs[:depth])}", ".:,-_~;", pairs[:depth])


DOT_BRACKET = StructureAlphabet("dot_bracket", ".", (("(", ")"),))
WUSS51 = wuss(22)

STRUCTURE_ALPHABETS: dict[str, StructureAlphabet] = {
    "dot_bracket": DOT_BRACKET,
    "db": DOT_BRACKET,
    "wuss": WUSS51,
    "wuss51": WUSS51,
}


def get_structure_alphabet(alphabet: Union[str, StructureAlphabet]) -> StructureAlphabet:
    if isinstance(alphabet, StructureAlphabet):
        return alphabet
    try:
        return STRUCTURE_ALPHABETS[alphabet.lower()]
    except KeyError:
        raise KeyError(
            f"Unknown structure alphabet '{alphabet}'. Available: {sorted(STRUCTURE_ALPHABETS)}"
        ) from None
