from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from rnastruct.parsers.base import StructureFileInputOptions

_env_path = Path(__file__).resolve().parents[1] / ".env"
if _env_path.is_file():
    load_dotenv(_env_path, override=False)


@dataclass
class RnastructSettings:
    """Configuration loaded from RNASTRUCT_* environment variables.

    Reading:
      RNASTRUCT_ALPHABET=rna5
      RNASTRUCT_LEGAL_ALPHABET=rna15
      RNASTRUCT_STRUCTURE_ALPHABET=wuss
      RNASTRUCT_STRUCTURED_SEQ_COMBINED=false

    Logging:
      RNASTRUCT_LOG_LEVEL=INFO
    """

    alphabet: str = "rna5"
    legal_alphabet: str = "rna15"
    structure_alphabet: str = "wuss"
    structured_seq_combined: bool = False
    log_level: str = "INFO"

    def to_options(self, **overrides: Any) -> StructureFileInputOptions:
        """Build read options; keyword overrides replace individual settings."""
        s = replace(self, **overrides)
        return StructureFileInputOptions(
            legal_alphabet=s.legal_alphabet,
            alphabet=s.alphabet,
            structure_alphabet=s.structure_alphabet,
            structured_seq_combined=s.structured_seq_combined,
        )


def load_settings() -> RnastructSettings:
    """Load settings from environment variables."""
    return RnastructSettings(
        alphabet=os.environ.get("RNASTRUCT_ALPHABET", "rna5"),
        legal_alphabet=os.environ.get("RNASTRUCT_LEGAL_ALPHABET", "rna15"),
        structure_alphabet=os.environ.get("RNASTRUCT_STRUCTURE_ALPHABET", "wuss"),
        structured_seq_combined=os.environ.get(
            "RNASTRUCT_STRUCTURED_SEQ_COMBINED", "false"
        ).lower() in ("true", "1", "yes"),
        log_level=os.environ.get("RNASTRUCT_LOG_LEVEL", "INFO").upper(),
    )
