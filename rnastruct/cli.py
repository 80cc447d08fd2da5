from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import typer
from tqdm import tqdm

from rnastruct.alphabet.nucleotide import ALPHABETS
from rnastruct.config import load_settings
from rnastruct.core.exceptions import StructureFileError
from rnastruct.core.logging_utils import get_logger, set_level
from rnastruct.core.table import RecordTable
from rnastruct.core.validators import (
    FileExtensionValidator,
    ValueListValidator,
    as_typer_callback,
)
from rnastruct.parsers.base import Field, StructureFileInputOptions
from rnastruct.parsers.file import StructureFile, StructureRecord
from rnastruct.parsers.registry import registered_formats

logger = get_logger(__name__)
app = typer.Typer(no_args_is_help=True)

_path_check = as_typer_callback(FileExtensionValidator())
_alphabet_check = as_typer_callback(ValueListValidator(*sorted(ALPHABETS)))
_table_check = as_typer_callback(FileExtensionValidator(["parquet", "csv"]))

_ALL_FIELDS = (
    Field.SEQ, Field.ID, Field.BPP, Field.STRUCTURE, Field.ENERGY,
    Field.REACT, Field.REACT_ERR, Field.COMMENT, Field.OFFSET,
)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging.")):
    level = "DEBUG" if verbose else load_settings().log_level
    set_level(level)


def _options(alphabet: Optional[str], combined: bool) -> StructureFileInputOptions:
    settings = load_settings()
    return settings.to_options(
        alphabet=alphabet or settings.alphabet,
        structured_seq_combined=combined or settings.structured_seq_combined,
    )


def _storage_fields(fields: Iterable[Field], combined: bool) -> tuple[Field, ...]:
    """Swap SEQ and STRUCTURE for STRUCTURED_SEQ when storage is combined."""
    fields = list(fields)
    if combined:
        fields = [f for f in fields if f not in (Field.SEQ, Field.STRUCTURE)]
        fields.insert(0, Field.STRUCTURED_SEQ)
    return tuple(fields)


def _parse_fields(spec: str, combined: bool) -> tuple[Field, ...]:
    fields = []
    for name in spec.split(","):
        name = name.strip()
        if not name:
            continue
        try:
            fields.append(Field[name.upper()])
        except KeyError:
            raise typer.BadParameter(
                f"Unknown field '{name}'. Choose from {[f.value for f in Field]}."
            ) from None
    return _storage_fields(fields, combined)


def _read_all(path: Path, fields: tuple[Field, ...], options: StructureFileInputOptions) -> list[StructureRecord]:
    try:
        with StructureFile(path, fields=fields, options=options) as f:
            return list(tqdm(f, desc=path.name, unit="rec", disable=None))
    except StructureFileError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    except ValueError as e:
        # field selection that does not fit the options
        raise typer.BadParameter(str(e)) from e


@app.command("formats")
def formats():
    """List the registered formats and their file extensions."""
    for ext, cls in sorted(registered_formats().items()):
        typer.echo(f"{ext}\t{cls.__name__}")


@app.command("show")
def show(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, callback=_path_check, help="Structure file."),
    fields: str = typer.Option("id,seq,structure,energy", help="Comma-separated fields to read."),
    alphabet: Optional[str] = typer.Option(None, callback=_alphabet_check, help="Output nucleotide alphabet."),
    combined: bool = typer.Option(False, help="Store sequence and structure combined."),
):
    """Print the records of a structure file."""
    options = _options(alphabet, combined)
    selected = _parse_fields(fields, options.structured_seq_combined)
    for rec in _read_all(path, selected, options):
        if rec.id is not None:
            typer.echo(f">{rec.id}")
        if rec.sequence_string is not None:
            typer.echo(rec.sequence_string)
        struct = rec.structure_string
        if struct is not None:
            typer.echo(struct if rec.energy is None else f"{struct} ({rec.energy:.2f})")
        if rec.comment:
            typer.echo(f"# {rec.comment}")


@app.command("stats")
def stats(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, callback=_path_check, help="Structure file."),
    alphabet: Optional[str] = typer.Option(None, callback=_alphabet_check, help="Output nucleotide alphabet."),
):
    """Print record count, mean length and mean energy."""
    options = _options(alphabet, False)
    records = _read_all(path, _storage_fields(_ALL_FIELDS, options.structured_seq_combined), options)
    table = RecordTable.from_records(records)
    mean_len = table.mean_length()
    mean_energy = table.mean_energy()
    typer.echo(f"records\t{table.count()}")
    typer.echo(f"mean_length\t{'NA' if mean_len is None else f'{mean_len:.2f}'}")
    typer.echo(f"mean_energy\t{'NA' if mean_energy is None else f'{mean_energy:.2f}'}")


@app.command("table")
def table(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, callback=_path_check, help="Structure file."),
    out: Path = typer.Option(..., callback=_table_check, help="Output table (.parquet or .csv)."),
    alphabet: Optional[str] = typer.Option(None, callback=_alphabet_check, help="Output nucleotide alphabet."),
):
    """Write a per-record summary table."""
    options = _options(alphabet, False)
    records = _read_all(path, _storage_fields(_ALL_FIELDS, options.structured_seq_combined), options)
    t = RecordTable.from_records(records)
    if out.suffix.lower() == ".csv":
        t.save_csv(out)
    else:
        t.save_parquet(out)
    logger.info("Wrote %d records to %s", t.count(), out)
