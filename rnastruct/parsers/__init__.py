"""rnastruct.parsers: structure file input formats.

Architecture:
    - base.py: Field, IGNORE, ScalarBuffer, StructureFileInputOptions,
      StructureFileInputFormat (the format contract) + conformance check
    - stream.py: LineStream (line lookahead over text or byte streams)
    - vienna.py: ViennaFormat (dot-bracket, .dbn/.db/.fasta/.fa)
    - bpseq.py: BpseqFormat (.bpseq)
    - registry.py: register_format / format_for_path / is_format_list
    - file.py: StructureFile + StructureRecord (record-level reader)

Usage::

    from rnastruct.parsers import Field, IGNORE, ScalarBuffer, ViennaFormat
    from rnastruct.parsers import StructureFileInputOptions

    seq, id, structure, energy = [], [], [], ScalarBuffer()
    with open("hairpin.dbn") as f:
        ViennaFormat().read(f, StructureFileInputOptions(), seq, id, IGNORE,
                            structure, energy, IGNORE, IGNORE, IGNORE, IGNORE)

    # Record level, format chosen by extension
    from rnastruct.parsers import StructureFile
    for rec in StructureFile("hairpin.dbn"):
        print(rec.id, rec.sequence, rec.structure)
"""

from rnastruct.parsers.base import (
    IGNORE,
    Field,
    Ignore,
    ScalarBuffer,
    StructureFileInputFormat,
    StructureFileInputOptions,
    is_ignored,
    is_structure_file_input_format,
)
from rnastruct.parsers.stream import LineStream
from rnastruct.parsers.vienna import ViennaFormat
from rnastruct.parsers.bpseq import BpseqFormat
from rnastruct.parsers.registry import (
    format_for_path,
    is_format_list,
    register_format,
    registered_formats,
    require_formats,
    supported_extensions,
)
from rnastruct.parsers.file import DEFAULT_FIELDS, StructureFile, StructureRecord

__all__ = [
    # Contract
    "Field",
    "IGNORE",
    "Ignore",
    "is_ignored",
    "ScalarBuffer",
    "StructureFileInputOptions",
    "StructureFileInputFormat",
    "is_structure_file_input_format",
    "LineStream",
    # Concrete formats
    "ViennaFormat",
    "BpseqFormat",
    # Registry
    "format_for_path",
    "is_format_list",
    "register_format",
    "registered_formats",
    "require_formats",
    "supported_extensions",
    # Record-level reader
    "DEFAULT_FIELDS",
    "StructureFile",
    "StructureRecord",
]
