"""Abstract interfaces for structure file input formats.

A format reads one record from a stream and appends each field into a
caller-supplied buffer. Any buffer may be replaced by ``IGNORE``: the field is
still parsed and validated, just not kept.

Buffers, in the fixed order of ``read``:

    seq         list-like of residue symbols       (append / extend)
    id          list-like of characters            (extend)
    bpp         list-like of set[(prob, partner)]  (append / extend)
    structure   list-like of structure symbols     (extend)
    energy      ScalarBuffer[float]                (set)
    react       ScalarBuffer[float]                (set)
    react_err   ScalarBuffer[float]                (set)
    comment     list-like of characters            (extend)
    offset      ScalarBuffer[int]                  (set)

With ``structured_seq_combined`` the same list of StructuredRNA is passed as
both ``seq`` and ``structure``.
"""

from __future__ import annotations

import enum
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import IO, Any, ClassVar, Generic, Iterable, Optional, Sequence, TypeVar, Union

from rnastruct.alphabet.nucleotide import RNA5, RNA15, Alphabet, get_alphabet
from rnastruct.alphabet.structure import WUSS51, StructureAlphabet, get_structure_alphabet
from rnastruct.alphabet.structured_rna import StructuredRNA
from rnastruct.core.exceptions import BufferShapeError, NoFieldsRequestedError, ParseError

T = TypeVar("T")


class Field(enum.Enum):
    """Logical fields of a structure record."""

    SEQ = "seq"
    ID = "id"
    BPP = "bpp"
    STRUCTURE = "structure"
    ENERGY = "energy"
    REACT = "react"
    REACT_ERR = "react_err"
    COMMENT = "comment"
    OFFSET = "offset"
    STRUCTURED_SEQ = "structured_seq"


# ======================================================================
# Buffers
# ======================================================================

class Ignore:
    """Sink that accepts every buffer operation and keeps nothing."""

    _instance: ClassVar[Optional["Ignore"]] = None

    def __new__(cls) -> "Ignore":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def append(self, value: Any) -> None:
        pass

    def extend(self, values: Iterable[Any]) -> None:
        pass

    def set(self, value: Any) -> None:
        pass

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "IGNORE"


IGNORE = Ignore()


def is_ignored(buffer: Any) -> bool:
    return buffer is IGNORE


class ScalarBuffer(Generic[T]):
    """Mutable holder for a single per-record value (energy, offset, ...)."""

    __slots__ = ("value",)

    def __init__(self, value: Optional[T] = None):
        self.value = value

    def set(self, value: T) -> None:
        self.value = value

    def reset(self) -> None:
        self.value = None

    @property
    def is_set(self) -> bool:
        return self.value is not None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ScalarBuffer):
            return self.value == other.value
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ScalarBuffer({self.value!r})"


# ======================================================================
# Options
# ======================================================================

@dataclass(frozen=True)
class StructureFileInputOptions:
    """Read options shared by every record of one input source.

    legal_alphabet decides which sequence characters are accepted; accepted
    characters are converted into `alphabet`. Alphabet names are resolved
    on construction.
    """

    legal_alphabet: Union[str, Alphabet] = RNA15
    alphabet: Union[str, Alphabet] = RNA5
    structure_alphabet: Union[str, StructureAlphabet] = WUSS51
    structured_seq_combined: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "legal_alphabet", get_alphabet(self.legal_alphabet))
        object.__setattr__(self, "alphabet", get_alphabet(self.alphabet))
        object.__setattr__(
            self, "structure_alphabet", get_structure_alphabet(self.structure_alphabet)
        )


# ======================================================================
# Format contract
# ======================================================================

class StructureFileInputFormat(ABC):
    """Read one record per ``read`` call.

    Subclasses declare ``file_extensions`` and implement ``read``. Errors are
    raised, never returned: ParseError, NumericOverflowError,
    BufferShapeError, UnexpectedEndOfInput, NoFieldsRequestedError.
    """

    file_extensions: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
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
        """Read the next record from `stream` into the given buffers."""
        ...

    # -- helpers for implementations -----------------------------------

    @staticmethod
    def check_buffers(options: StructureFileInputOptions, *buffers: Any) -> None:
        """Reject the all-IGNORE call and a seq/structure shape that disagrees
        with ``options.structured_seq_combined``. `buffers` are the nine field
        buffers in ``read`` order.
        """
        if all(is_ignored(b) for b in buffers):
            raise NoFieldsRequestedError("every field is IGNORE; nothing to read")
        seq, structure = buffers[0], buffers[3]
        shared = seq is structure and not is_ignored(seq)
        if options.structured_seq_combined:
            if not shared and not (is_ignored(seq) and is_ignored(structure)):
                raise BufferShapeError(
                    "structured_seq_combined is set: pass the same structured "
                    "sequence buffer as seq and structure"
                )
        elif shared:
            raise BufferShapeError(
                "the same buffer was passed as seq and structure; set "
                "structured_seq_combined to read a structured sequence"
            )

    @staticmethod
    def decode_sequence(
        options: StructureFileInputOptions, text: str, line_number: Optional[int] = None
    ) -> list[str]:
        legal = options.legal_alphabet
        out = options.alphabet
        residues = []
        for col, char in enumerate(text, start=1):
            if not legal.is_char_valid(char):
                raise ParseError(
                    f"unexpected character '{char}' in sequence (column {col}), "
                    f"not legal in {legal.name}",
                    line_number,
                )
            residues.append(out.convert(char))
        return residues

    @staticmethod
    def store_sequence_and_structure(
        options: StructureFileInputOptions,
        seq: Any,
        structure: Any,
        residues: Sequence[str],
        symbols: Sequence[str],
    ) -> None:
        if options.structured_seq_combined:
            seq.extend(
                StructuredRNA(n, s, options.structure_alphabet)
                for n, s in zip(residues, symbols)
            )
            return
        seq.extend(residues)
        structure.extend(symbols)

    @staticmethod
    def bpp_from_partners(partners: Sequence[Optional[int]]) -> list[set[tuple[float, int]]]:
        return [set() if p is None else {(1.0, p)} for p in partners]


# ======================================================================
# Conformance
# ======================================================================

READ_PARAMETERS = (
    "stream", "options", "seq", "id", "bpp", "structure",
    "energy", "react", "react_err", "comment", "offset",
)


def _required_shapes() -> list[tuple[Any, ...]]:
    structured: list[StructuredRNA] = []
    return [
        # full extraction
        ([], [], [], [], ScalarBuffer(), ScalarBuffer(), ScalarBuffer(), [], ScalarBuffer()),
        # sequence, id, bpp, structure only
        ([], [], [], [], IGNORE, IGNORE, IGNORE, IGNORE, IGNORE),
        # combined structured sequence
        (structured, [], IGNORE, structured, ScalarBuffer(), IGNORE, IGNORE, IGNORE, IGNORE),
        # nothing requested; must be accepted here, may fail when called
        (IGNORE,) * 9,
    ]


def is_structure_file_input_format(candidate: Any) -> bool:
    """Whether `candidate` (a class or instance) satisfies the format contract.

    Checks the declared extensions and binds every required buffer shape
    against the signature of ``read``; ``read`` itself is never called.
    """
    cls = candidate if isinstance(candidate, type) else type(candidate)
    if inspect.isabstract(cls):
        return False

    exts = getattr(cls, "file_extensions", None)
    if isinstance(exts, (str, bytes)) or not isinstance(exts, (tuple, list, frozenset, set)):
        return False
    if not exts or not all(isinstance(e, str) and e for e in exts):
        return False

    raw = inspect.getattr_static(cls, "read", None)
    read = getattr(cls, "read", None)
    if raw is None or not callable(read):
        return False
    try:
        sig = inspect.signature(read)
    except (TypeError, ValueError):
        return False
    if sig.return_annotation not in (inspect.Signature.empty, None, "None"):
        return False

    leading: tuple[Any, ...] = (None, None)
    if not isinstance(raw, (staticmethod, classmethod)):
        leading = (None,) + leading  # self
    for shape in _required_shapes():
        try:
            sig.bind(*leading, *shape)
        except TypeError:
            return False
    return True
