"""StructureFile: iterate the records of a structure file.

Picks the format by file extension (or takes one explicitly for open streams),
allocates buffers for the requested fields only, and passes IGNORE for the
rest. Every record is read into fresh buffers, so a failing record never
leaks a partial result.

Usage::

    from rnastruct.parsers import Field, StructureFile

    with StructureFile("rfam.dbn", fields=(Field.ID, Field.SEQ, Field.STRUCTURE)) as f:
        for rec in f:
            print(rec.id, rec.sequence, rec.structure)
"""

from __future__ import annotations

import gzip
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Iterable, Iterator, Optional, Union

from rnastruct.alphabet.structure import WUSS51, StructureAlphabet
from rnastruct.alphabet.structured_rna import StructuredRNA
from rnastruct.core.exceptions import StructureFileError
from rnastruct.core.logging_utils import get_logger
from rnastruct.parsers.base import (
    IGNORE,
    Field,
    ScalarBuffer,
    StructureFileInputFormat,
    StructureFileInputOptions,
)
from rnastruct.parsers.registry import format_for_path
from rnastruct.parsers.stream import LineStream

logger = get_logger(__name__)

DEFAULT_FIELDS = (Field.SEQ, Field.ID, Field.STRUCTURE)

_LIST_FIELDS = (Field.SEQ, Field.ID, Field.BPP, Field.STRUCTURE, Field.COMMENT)
_TEXT_FIELDS = (Field.SEQ, Field.ID, Field.STRUCTURE, Field.COMMENT)


@dataclass
class StructureRecord:
    """One record; fields that were not requested stay None."""

    sequence: Optional[str] = None
    id: Optional[str] = None
    bpp: Optional[list[set[tuple[float, int]]]] = None
    structure: Optional[str] = None
    structured_seq: Optional[list[StructuredRNA]] = None
    energy: Optional[float] = None
    react: Optional[float] = None
    react_err: Optional[float] = None
    comment: Optional[str] = None
    offset: Optional[int] = None
    structure_alphabet: StructureAlphabet = field(default=WUSS51, repr=False, compare=False)

    def __getitem__(self, key: Field) -> Any:
        return getattr(self, _ATTRS[key])

    @property
    def sequence_string(self) -> Optional[str]:
        """Sequence as text, from either storage layout."""
        if self.sequence is not None:
            return self.sequence
        if self.structured_seq is not None:
            return "".join(e.nucleotide for e in self.structured_seq)
        return None

    @property
    def structure_string(self) -> Optional[str]:
        if self.structure is not None:
            return self.structure
        if self.structured_seq is not None:
            return "".join(e.structure for e in self.structured_seq)
        return None

    @property
    def n_pairs(self) -> Optional[int]:
        s = self.structure_string
        if s is None:
            return None
        return sum(1 for c in s if self.structure_alphabet.is_pair_open(c))

    def __len__(self) -> int:
        s = self.sequence_string or self.structure_string
        return len(s) if s is not None else 0

    def to_dict(self) -> dict:
        return {attr: getattr(self, attr) for attr in _ATTRS.values()}


_ATTRS = {
    Field.SEQ: "sequence",
    Field.ID: "id",
    Field.BPP: "bpp",
    Field.STRUCTURE: "structure",
    Field.STRUCTURED_SEQ: "structured_seq",
    Field.ENERGY: "energy",
    Field.REACT: "react",
    Field.REACT_ERR: "react_err",
    Field.COMMENT: "comment",
    Field.OFFSET: "offset",
}


def _check_fields(fields: tuple[Field, ...], options: StructureFileInputOptions) -> None:
    if not fields:
        raise ValueError("at least one field must be requested")
    combined = Field.STRUCTURED_SEQ in fields
    if combined and (Field.SEQ in fields or Field.STRUCTURE in fields):
        raise ValueError("STRUCTURED_SEQ replaces SEQ and STRUCTURE; do not request both")
    if combined != options.structured_seq_combined:
        raise ValueError(
            "Field.STRUCTURED_SEQ must be requested exactly when "
            "options.structured_seq_combined is set"
        )


class StructureFile:
    """Iterable reader over the records of one structure file or stream."""

    def __init__(
        self,
        source: Union[str, Path, IO],
        fields: Iterable[Field] = DEFAULT_FIELDS,
        options: Optional[StructureFileInputOptions] = None,
        format: Optional[StructureFileInputFormat] = None,
    ):
        self._fields = tuple(dict.fromkeys(fields))
        self._options = options or StructureFileInputOptions()
        _check_fields(self._fields, self._options)

        self._path: Optional[Path] = None
        self._owns_stream = False
        if isinstance(source, (str, Path)):
            self._path = Path(source)
            self._format = format or format_for_path(self._path)
            stream = self._open(self._path)
            self._owns_stream = True
        else:
            if format is None:
                raise ValueError("a format is required when reading from an open stream")
            self._format = format
            stream = source
        self._stream = stream
        self._lines = LineStream.wrap(stream)
        self._records_read = 0
        logger.debug(
            "Opened %s as %s (fields=%s)",
            self.name, type(self._format).__name__, [f.name for f in self._fields],
        )

    @staticmethod
    def _open(path: Path) -> IO:
        opener = gzip.open if path.suffix.lower() == ".gz" else open
        return opener(path, "rt", encoding="utf-8")

    @property
    def name(self) -> str:
        return str(self._path) if self._path is not None else "<stream>"

    @property
    def format(self) -> StructureFileInputFormat:
        return self._format

    @property
    def options(self) -> StructureFileInputOptions:
        return self._options

    @property
    def fields(self) -> tuple[Field, ...]:
        return self._fields

    @property
    def records_read(self) -> int:
        return self._records_read

    def read_record(self) -> StructureRecord:
        """Read the next record. Raises UnexpectedEndOfInput when none is left."""
        buffers = self._allocate()
        args = [
            buffers.get(f, IGNORE)
            for f in (Field.SEQ, Field.ID, Field.BPP, Field.STRUCTURE, Field.ENERGY,
                      Field.REACT, Field.REACT_ERR, Field.COMMENT, Field.OFFSET)
        ]
        if Field.STRUCTURED_SEQ in buffers:
            args[0] = args[3] = buffers[Field.STRUCTURED_SEQ]
        try:
            self._format.read(self._lines, self._options, *args)
        except StructureFileError as e:
            logger.error(
                "Failed to read record %d of %s: %s", self._records_read + 1, self.name, e
            )
            raise
        self._records_read += 1
        return self._to_record(buffers, self._options.structure_alphabet)

    def _allocate(self) -> dict[Field, Any]:
        buffers: dict[Field, Any] = {}
        for f in self._fields:
            if f in _LIST_FIELDS or f is Field.STRUCTURED_SEQ:
                buffers[f] = []
            else:
                buffers[f] = ScalarBuffer()
        return buffers

    @staticmethod
    def _to_record(
        buffers: dict[Field, Any], structure_alphabet: StructureAlphabet
    ) -> StructureRecord:
        values: dict[str, Any] = {"structure_alphabet": structure_alphabet}
        for f, buf in buffers.items():
            if f in _TEXT_FIELDS:
                values[_ATTRS[f]] = "".join(buf)
            elif isinstance(buf, ScalarBuffer):
                values[_ATTRS[f]] = buf.value
            else:
                values[_ATTRS[f]] = buf
        return StructureRecord(**values)

    def __iter__(self) -> Iterator[StructureRecord]:
        while True:
            self._lines.skip_blank_lines()
            if self._lines.at_eof():
                logger.debug("Read %d records from %s", self._records_read, self.name)
                return
            yield self.read_record()

    def to_list(self) -> list[StructureRecord]:
        return list(self)

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()
            self._owns_stream = False

    def __enter__(self) -> "StructureFile":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"<StructureFile {self.name} format={type(self._format).__name__} "
            f"fields={[f.name for f in self._fields]}>"
        )
