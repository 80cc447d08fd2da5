#!/usr/bin/env python3
"""Count base-pair types (GC, AU, GU, other) across a structure file.

Reads sequence and structure into one combined buffer and the base-pair
table into another, skipping every other field. Plain and gzipped inputs
are both accepted.

Usage:
    python examples/count_pair_types.py --input tests/fixtures/sample.dbn
"""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from pathlib import Path

from rnastruct.parsers import Field, StructureFile, StructureFileInputOptions

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
logger = logging.getLogger(__name__)

CANONICAL = {frozenset("GC"): "GC", frozenset("AU"): "AU", frozenset("GU"): "GU"}


def main() -> None:
    p = argparse.ArgumentParser(description="Count base-pair types in a structure file")
    p.add_argument("--input", required=True, help="Vienna (.dbn) or BPSEQ (.bpseq) file, optionally .gz")
    args = p.parse_args()

    path = Path(args.input)
    options = StructureFileInputOptions(structured_seq_combined=True)
    counts: Counter[str] = Counter()

    with StructureFile(path, fields=(Field.STRUCTURED_SEQ, Field.BPP), options=options) as f:
        for rec in f:
            for i, pairs in enumerate(rec.bpp):
                for _, j in pairs:
                    if j <= i:
                        continue
                    bases = frozenset((rec.structured_seq[i].nucleotide, rec.structured_seq[j].nucleotide))
                    counts[CANONICAL.get(bases, "other")] += 1
        n_records = f.records_read

    logger.info("Read %d records from %s", n_records, path)
    for kind in ("GC", "AU", "GU", "other"):
        print(f"{kind}\t{counts[kind]}")


if __name__ == "__main__":
    main()
