"""BPSEQ format (one base per line with its pairing partner).

    Filename: tRNA-Phe        header: sets the id
    # any other text          header: goes to the comment ('#' stripped)
    1 G 72                    index, base, partner (0 = unpaired)
    2 C 71
    ...

Indices are 1-based and consecutive. ``offset`` is ``first_index - 1``, i.e. the
0-based position of the first base. BPP partners are 0-based relative to the
record. A record ends at a blank line, the next header line, or end of stream.
"""

from __future__ import annotations

import re
from typing import IO, Any, Optional

from rnastruct.core.exceptions import NumericOverflowError, ParseError, UnexpectedEndOfInput
from rnastruct.core.logging_utils import get_logger
from rnastruct.parsers.base import StructureFileInputFormat, StructureFileInputOptions
from rnastruct.parsers.stream import LineStream

logger = get_logger(__name__)

INDEX_MAX = 2**64 - 1
_DATA_LINE = re.compile(r"^\s*[+-]?\d+(?:\s|$)")


def _is_data_line(line: str) -> bool:
    """Rows start with an integer; a sign is accepted here and rejected by _parse_index."""
    return _DATA_LINE.match(line) is not None


def _parse_index(text: str, what: str, line_number: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ParseError(f"{what} '{text}' is not an integer", line_number) from None
    if value < 0:
        raise ParseError(f"{what} {value} is negative", line_number)
    if value > INDEX_MAX:
        raise NumericOverflowError(f"{what} {value} exceeds {INDEX_MAX}", line_number)
    return value


class BpseqFormat(StructureFileInputFormat):
    """Read BPSEQ records (.bpseq)."""

    file_extensions = ("bpseq",)

    def read(
        self,
        stream: IO,
        options: StructureFileInputOptions,
        seq: Any,
        id: Any,
        bpp: Any,
        structure: Any,
        energy: Any,
        react: Any,
        react_err: Any,
        comment: Any,
        offset: Any,
    ) -> None:
        self.check_buffers(
            options, seq, id, bpp, structure, energy, react, react_err, comment, offset
        )
        lines = LineStream.wrap(stream)
        lines.skip_blank_lines()
        if lines.at_eof():
            raise UnexpectedEndOfInput("no BPSEQ record left in stream")

        record_id = ""
        comments: list[str] = []
        while True:
            line = lines.peek()
            if line is None:
                raise UnexpectedEndOfInput("BPSEQ header is not followed by base lines")
            if _is_data_line(line):
                break
            lines.readline()
            text = line.strip()
            if not text:
                continue
            if text.lower().startswith("filename:"):
                record_id = text.split(":", 1)[1].strip()
            else:
                comments.append(text.lstrip("#").strip())

        bases: list[str] = []
        raw_partners: list[int] = []
        first_index: Optional[int] = None
        while True:
            line = lines.peek()
            if line is None or not _is_data_line(line):
                break
            lines.readline()
            index, base, partner = self._parse_row(line, lines.line_number)
            if first_index is None:
                if index == 0:
                    raise ParseError("base indices start at 1", lines.line_number)
                first_index = index
            expected = first_index + len(bases)
            if index != expected:
                raise ParseError(f"expected index {expected}, got {index}", lines.line_number)
            bases.extend(self.decode_sequence(options, base, lines.line_number))
            raw_partners.append(partner)

        if first_index is None:
            raise UnexpectedEndOfInput("BPSEQ record has no base lines")
        last_index = first_index + len(bases) - 1
        partners: list[Optional[int]] = []
        for pos, p in enumerate(raw_partners):
            if p == 0:
                partners.append(None)
                continue
            if not first_index <= p <= last_index:
                raise ParseError(
                    f"base {first_index + pos} pairs with {p}, outside the record "
                    f"({first_index}-{last_index})"
                )
            partners.append(p - first_index)

        symbols = options.structure_alphabet.render(partners)

        id.extend(record_id)
        comment.extend("\n".join(comments))
        self.store_sequence_and_structure(options, seq, structure, bases, symbols)
        bpp.extend(self.bpp_from_partners(partners))
        offset.set(first_index - 1)
        logger.debug("Read BPSEQ record '%s' (%d nt)", record_id, len(bases))

    @staticmethod
    def _parse_row(line: str, line_number: int) -> tuple[int, str, int]:
        parts = line.split()
        if len(parts) != 3:
            raise ParseError(
                f"expected 'index base partner', got {len(parts)} columns", line_number
            )
        index = _parse_index(parts[0], "index", line_number)
        if len(parts[1]) != 1:
            raise ParseError(f"base '{parts[1]}' is not a single character", line_number)
        partner = _parse_index(parts[2], "partner", line_number)
        return index, parts[1], partner
