"""Vienna (dot-bracket) format, as written by RNAfold and friends.

Record grammar::

    >identifier              optional header line
    GGGAAACCC                sequence, one line
    (((...))) (-1.20)        structure, optionally followed by an energy

Blank lines between records are skipped. BPP is derived from the structure
(probability 1.0 for every annotated pair, partners 0-based). The format has
no offset, so offset is always set to 0; react, react_err and comment are
never written.
"""

from __future__ import annotations

import math
import re
from typing import IO, Any, Optional

from rnastruct.core.exceptions import NumericOverflowError, ParseError, UnexpectedEndOfInput
from rnastruct.core.logging_utils import get_logger
from rnastruct.parsers.base import StructureFileInputFormat, StructureFileInputOptions
from rnastruct.parsers.stream import LineStream

logger = get_logger(__name__)

_STRUCTURE_LINE = re.compile(r"^\s*(\S+)(?:\s+\(\s*([^()]*?)\s*\))?\s*$")


def parse_energy(text: str, line_number: Optional[int] = None) -> float:
    try:
        value = float(text)
    except ValueError:
        raise ParseError(f"energy '{text}' is not a number", line_number) from None
    if math.isinf(value):
        raise NumericOverflowError(f"energy '{text}' does not fit a float", line_number)
    if math.isnan(value):
        raise ParseError(f"energy '{text}' is not a number", line_number)
    return value


class ViennaFormat(StructureFileInputFormat):
    """Read Vienna dot-bracket records (.dbn, .db, .fasta, .fa)."""

    file_extensions = ("dbn", "db", "fasta", "fa")

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

        line = lines.readline()
        if line is None:
            raise UnexpectedEndOfInput("no Vienna record left in stream")
        record_id = ""
        if line.startswith(">"):
            record_id = line[1:].strip()
            line = lines.readline()
            if line is None:
                raise UnexpectedEndOfInput(f"record '{record_id}' ends after its header")

        seq_text = line.strip()
        if not seq_text:
            raise ParseError("empty sequence line", lines.line_number)
        residues = self.decode_sequence(options, seq_text, lines.line_number)

        line = lines.readline()
        if line is None:
            raise UnexpectedEndOfInput(f"record '{record_id}' has no structure line")
        symbols, energy_value = self._parse_structure_line(line, lines.line_number)
        if len(symbols) != len(residues):
            raise ParseError(
                f"sequence ({len(residues)}) and structure ({len(symbols)}) "
                "differ in length",
                lines.line_number,
            )
        try:
            partners = options.structure_alphabet.partner_table(symbols)
        except ParseError as e:
            raise ParseError(str(e), lines.line_number) from e

        id.extend(record_id)
        self.store_sequence_and_structure(options, seq, structure, residues, symbols)
        bpp.extend(self.bpp_from_partners(partners))
        if energy_value is not None:
            energy.set(energy_value)
        offset.set(0)
        logger.debug("Read Vienna record '%s' (%d nt)", record_id, len(residues))

    @staticmethod
    def _parse_structure_line(line: str, line_number: int) -> tuple[str, Optional[float]]:
        m = _STRUCTURE_LINE.match(line)
        if m is None:
            raise ParseError(f"malformed structure line '{line}'", line_number)
        energy_text = m.group(2)
        if energy_text is None:
            return m.group(1), None
        return m.group(1), parse_energy(energy_text, line_number)
