from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich import print
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

# If not installed in editable mode, add repo root to PYTHONPATH
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from unitlabels.config import get_settings
from unitlabels.numbering.next_available import next_available_label
from unitlabels.numbering.sequence import generate_next
from unitlabels.patterns.catalog import CATALOG
from unitlabels.patterns.detect import detect_pattern
from unitlabels.patterns.floors import validate_floor_correlation
from unitlabels.patterns.schema import SchemeId
from unitlabels.validate.consistency import (
    find_batch_duplicates,
    validate_pattern_consistency,
)
from unitlabels.validate.requests import (
    BatchPatternValidationRequest,
    PatternValidationRequest,
    SuggestionRequest,
    UnitUpdateRequest,
    export_json_schema,
)
from unitlabels.validate.update import validate_unit_number_update

app = typer.Typer(add_completion=False, help="Unit label toolkit (lean CLI)")


def _fail(msg: str) -> None:
    typer.secho(msg, fg="red")
    raise typer.Exit(1)


def _load_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        _fail(f"Cannot read {path}: {e}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    """
    Detect, validate and generate unit labels.
    Log level: --verbose > UNITLABELS_LOG_LEVEL > WARNING.
    """
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@app.command()
def detect(labels: List[str] = typer.Argument(..., help="One or more unit labels")):
    """Print the naming scheme of each label."""
    for label in labels:
        print(f"{escape(label)}\t[cyan]{detect_pattern(label)}[/cyan]")


@app.command()
def floor(
    label: str = typer.Argument(..., help="Unit label"),
    floor_: int = typer.Option(..., "--floor", help="Floor the unit is assigned to"),
):
    """Check that the floor implied by LABEL matches --floor."""
    try:
        req = PatternValidationRequest(label=label, floor=floor_)
    except ValidationError as e:
        _fail(str(e))
    verdict = validate_floor_correlation(req.label, req.floor)
    typer.echo(verdict.model_dump_json(indent=2))
    if not verdict.is_valid:
        raise typer.Exit(1)


@app.command("next")
def next_label(
    scheme: SchemeId = typer.Option(SchemeId.SEQUENTIAL, "--scheme", help="Target scheme"),
    floor_: int = typer.Option(1, "--floor", help="Floor to number for"),
    existing: Optional[List[str]] = typer.Option(
        None, "--existing", "-e", help="Label already in use (repeatable)"
    ),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Prefix for custom labels"),
    hint: Optional[str] = typer.Option(None, "--hint", help="Preferred first label"),
):
    """Suggest the next label of a scheme."""
    try:
        req = SuggestionRequest(
            scheme=scheme,
            existing=existing or [],
            custom_prefix=prefix,
            current_floor=floor_,
            suggested_label=hint,
        )
    except ValidationError as e:
        _fail(str(e))
    suggestion = generate_next(
        req.existing, req.scheme, req.current_floor, req.custom_prefix, req.suggested_label
    )
    typer.echo(suggestion.model_dump_json(indent=2))


@app.command()
def available(
    mode: str = typer.Option("sequential", "--mode", help="sequential | floorBased | custom"),
    existing: Optional[List[str]] = typer.Option(
        None, "--existing", "-e", help="Label already in use (repeatable)"
    ),
):
    """Next free label using the simple three-mode numbering."""
    try:
        label = next_available_label(existing or [], mode)  # type: ignore[arg-type]
    except ValueError as e:
        _fail(str(e))
    typer.echo(label)


@app.command("check-batch")
def check_batch(json_path: Path = typer.Argument(..., help="JSON file: {\"units\": [...]}")):
    """Check a batch of proposed units for mixed schemes and duplicate labels."""
    data = _load_json(json_path)
    try:
        req = BatchPatternValidationRequest(**data)
    except (ValidationError, TypeError) as e:
        _fail(str(e))

    result = validate_pattern_consistency(req.units)
    dupes = find_batch_duplicates(req.units)

    colour = "green" if result.is_consistent else "yellow"
    print(f"[{colour}]{escape(result.recommendation)}[/{colour}]")
    if dupes:
        _fail(f"Duplicate unit numbers found in batch: {', '.join(dupes)}")


@app.command("validate-update")
def validate_update(
    label: str = typer.Argument(..., help="Proposed label"),
    floor_: int = typer.Option(..., "--floor", help="Floor the unit is assigned to"),
    units: Optional[Path] = typer.Option(
        None, "--units", help="JSON list of existing units of the property"
    ),
    exclude_id: Optional[str] = typer.Option(
        None, "--exclude-id", help="Id of the unit being updated"
    ),
):
    """Run conflict and floor checks for one proposed label."""
    existing = _load_json(units) if units else []
    try:
        req = UnitUpdateRequest(
            label=label,
            floor=floor_,
            units=existing,
            exclude_id=exclude_id,
        )
    except ValidationError as e:
        _fail(str(e))

    verdict = validate_unit_number_update(req.label, req.floor, req.units, req.exclude_id)
    typer.echo(verdict.model_dump_json(indent=2))
    if not verdict.is_valid:
        raise typer.Exit(1)


@app.command()
def patterns():
    """List the scheme catalog."""
    table = Table(title="Unit label schemes")
    table.add_column("id", style="cyan", no_wrap=True)
    table.add_column("name")
    table.add_column("example")
    table.add_column("property types")
    for sid, d in CATALOG.items():
        table.add_row(str(sid), d.name, d.example, ", ".join(d.property_types) or "-")
    print(table)


@app.command("export-schema")
def export_schema(
    out: Path = typer.Option(Path("schema/unitlabels.schema.json"), "--out", help="Output file"),
):
    """Write JSON Schemas of the request payloads and results."""
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(export_json_schema(), indent=2), encoding="utf-8")
    print(f"[green]✓[/green] wrote {out}")


if __name__ == "__main__":
    app()
