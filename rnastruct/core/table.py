from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Iterable, Optional

import numpy as np
import pandas as pd

from rnastruct.parsers.file import StructureRecord


@dataclass(frozen=True)
class RecordTable:
    """Per-record summary table.

    Convention:
      - one row per record, in file order
      - missing fields are NaN / None, never dropped
    """

    df: pd.DataFrame

    COLUMNS: ClassVar[tuple[str, ...]] = (
        "id", "length", "sequence", "structure", "energy", "offset", "n_pairs", "comment",
    )

    @classmethod
    def from_records(cls, records: Iterable[StructureRecord]) -> "RecordTable":
        rows = [
            {
                "id": r.id,
                "length": len(r),
                "sequence": r.sequence_string,
                "structure": r.structure_string,
                "energy": r.energy,
                "offset": r.offset,
                "n_pairs": r.n_pairs,
                "comment": r.comment,
            }
            for r in records
        ]
        return cls(pd.DataFrame(rows, columns=list(cls.COLUMNS)))

    def save_parquet(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.df.to_parquet(path, index=False)

    def save_csv(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.df.to_csv(path, index=False)

    @staticmethod
    def load_parquet(path: Path) -> "RecordTable":
        return RecordTable(pd.read_parquet(path))

    def count(self) -> int:
        return int(len(self.df))

    def mean_length(self) -> Optional[float]:
        if self.df.empty:
            return None
        return float(self.df["length"].mean())

    def mean_energy(self) -> Optional[float]:
        energies = pd.to_numeric(self.df["energy"], errors="coerce").to_numpy(dtype=float)
        if energies.size == 0 or np.isnan(energies).all():
            return None
        return float(np.nanmean(energies))
