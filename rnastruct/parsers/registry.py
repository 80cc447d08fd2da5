"""Format registry: the conformance gate plus extension-based dispatch.

Formats enter the registry only through ``register_format``, which rejects any
class that does not satisfy the input format contract. New formats can be
added without touching the reader.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, TypeVar

from rnastruct.core.logging_utils import get_logger
from rnastruct.parsers.base import StructureFileInputFormat, is_structure_file_input_format

logger = get_logger(__name__)

F = TypeVar("F", bound=type)

_REGISTRY: dict[str, type[StructureFileInputFormat]] = {}
_BUILTINS_LOADED = False


def is_format_list(formats: Iterable[Any]) -> bool:
    """True iff every candidate satisfies the input format contract."""
    return all(is_structure_file_input_format(f) for f in formats)


def require_formats(*formats: Any) -> None:
    """Raise TypeError naming the first candidate that is not a conforming format."""
    for f in formats:
        if not is_structure_file_input_format(f):
            name = getattr(f, "__name__", type(f).__name__)
            raise TypeError(f"{name} does not satisfy the structure file input format contract")


def register_format(format_cls: F) -> F:
    """Register a format class for its declared extensions. Usable as a decorator."""
    require_formats(format_cls)
    for ext in format_cls.file_extensions:
        key = ext.lower().lstrip(".")
        previous = _REGISTRY.get(key)
        if previous is not None and previous is not format_cls:
            logger.warning(
                "Extension '%s' re-registered: %s replaces %s",
                key, format_cls.__name__, previous.__name__,
            )
        _REGISTRY[key] = format_cls
    return format_cls


def _ensure_registry() -> None:
    global _BUILTINS_LOADED
    if _BUILTINS_LOADED:
        return
    from rnastruct.parsers.bpseq import BpseqFormat
    from rnastruct.parsers.vienna import ViennaFormat

    _BUILTINS_LOADED = True
    require_formats(ViennaFormat, BpseqFormat)
    # formats registered before first use keep their extensions
    for cls in (ViennaFormat, BpseqFormat):
        for ext in cls.file_extensions:
            _REGISTRY.setdefault(ext, cls)


def registered_formats() -> dict[str, type[StructureFileInputFormat]]:
    """Extension -> format class."""
    _ensure_registry()
    return dict(_REGISTRY)


def supported_extensions() -> list[str]:
    return sorted(registered_formats())


def format_for_path(path: str | Path) -> StructureFileInputFormat:
    """Return a format instance for a file path, matched by extension.

    A trailing ``.gz`` is ignored; the longest matching extension wins.
    """
    _ensure_registry()
    name = str(path).lower()
    if name.endswith(".gz"):
        name = name[: -len(".gz")]
    for ext in sorted(_REGISTRY, key=len, reverse=True):
        if name.endswith("." + ext):
            return _REGISTRY[ext]()
    raise ValueError(f"No format for '{path}'. Supported: {supported_extensions()}")
