"""CLI for tiered-context: planning queries and context aggregation."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.table import Table

from tiered_context import create_engine
from tiered_context.context.prefix import StaticPrefixProvider
from tiered_context.core.config import AppSettings, ObservabilityConfig
from tiered_context.core.logging_config import setup_logging
from tiered_context.exceptions import TieredContextError
from tiered_context.planning import DependencyPlanner
from tiered_context.registry import build_default_registry
from tiered_context.stores import GeneratedArtifactRecord, MemoryArtifactStore
from tiered_context.tiers import build_default_tier_configs, validate_tier_assignment

app = typer.Typer(name="tierctx", help="Tiered context aggregation over the artifact dependency graph")
console = Console()

_RECORDS = TypeAdapter(list[GeneratedArtifactRecord])


def _have_option() -> Any:
    return typer.Option(
        None,
        "--have",
        "-a",
        help="Artifact or input id the user already has (repeatable, comma-separated allowed)",
    )


def _configure(verbose: bool) -> AppSettings:
    settings = AppSettings()
    if verbose:
        setup_logging(ObservabilityConfig(log_level="DEBUG", json_logs=False))
    return settings


def _available(have: Optional[list[str]]) -> set[str]:
    return {part.strip() for item in have or [] for part in item.split(",") if part.strip()}


def _load_records(artifacts_file: Path) -> list[GeneratedArtifactRecord]:
    """Load artifact records from a JSON array file."""
    try:
        return _RECORDS.validate_json(artifacts_file.read_bytes())
    except ValidationError as exc:
        raise typer.BadParameter(f"Expected JSON array of artifact records in {artifacts_file}: {exc}") from exc


def _fail(exc: TieredContextError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(code=1)


@app.command()
def order(
    target: str = typer.Argument(..., help="Target resource id"),
    have: Optional[list[str]] = _have_option(),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the generation order for a target's missing prerequisites."""
    _configure(verbose)
    planner = DependencyPlanner(build_default_registry())
    try:
        steps = planner.suggested_order(target, _available(have))
    except TieredContextError as exc:
        raise _fail(exc) from exc

    for i, resource_id in enumerate(steps, start=1):
        console.print(f"{i}. {resource_id} ({planner.registry.display_name(resource_id)})")


@app.command()
def validate(
    targets: list[str] = typer.Argument(..., help="One or more target resource ids"),
    have: Optional[list[str]] = _have_option(),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Report missing required and optional dependencies."""
    _configure(verbose)
    planner = DependencyPlanner(build_default_registry())
    try:
        batch = planner.validate_batch(targets, _available(have))
    except TieredContextError as exc:
        raise _fail(exc) from exc

    for result in batch.validations:
        status = "[green]ready[/green]" if result.valid else "[red]blocked[/red]"
        console.print(f"[bold]{result.target_id}[/bold]: {status}")
        if result.missing_required:
            console.print(f"  missing required: {', '.join(result.missing_required)}")
        if result.missing_optional:
            console.print(f"  missing optional: {', '.join(result.missing_optional)}")

    summary = batch.summary
    console.print(
        f"\n{summary.valid}/{summary.total} ready, total cost to complete: ${summary.total_cost:.2f}"
    )
    if not batch.valid:
        raise typer.Exit(code=2)


@app.command()
def cost(
    target: str = typer.Argument(..., help="Target resource id"),
    have: Optional[list[str]] = _have_option(),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Estimate the cost to generate a target from what the user has."""
    _configure(verbose)
    planner = DependencyPlanner(build_default_registry())
    try:
        result = planner.calculate_generation_cost(target, _available(have))
    except TieredContextError as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    table = Table(title=f"Generation cost: {result.target.resource_name}")
    table.add_column("Resource", style="cyan", no_wrap=True)
    table.add_column("Cost", justify="right")
    table.add_column("Tokens", justify="right")
    for line in [*result.missing_dependencies, result.target]:
        table.add_row(line.resource_id, f"${line.cost:.2f}", str(line.estimated_tokens))
    console.print(table)

    if result.missing_inputs:
        console.print(f"Missing inputs: {', '.join(result.missing_inputs)}")
    console.print(f"Resources to generate: {result.resource_count}")
    console.print(f"Total cost: ${result.total_cost:.2f}")


def _resource_table(title: str, resources: list) -> Table:
    table = Table(title=title)
    table.add_column("Tier", justify="right")
    table.add_column("Resource", style="cyan", no_wrap=True)
    table.add_column("Category")
    table.add_column("Cost", justify="right")
    table.add_column("Optional gaps", justify="right")
    for r in resources:
        table.add_row(str(r.tier), r.resource_id, r.category, f"${r.estimated_cost:.2f}", str(r.optional_missing_count))
    return table


@app.command()
def available(
    have: Optional[list[str]] = _have_option(),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """List resources whose required dependencies are all present."""
    _configure(verbose)
    planner = DependencyPlanner(build_default_registry())
    resources = planner.available_resources(_available(have))
    console.print(_resource_table("Available resources", resources))
    console.print(f"{len(resources)} resources available")


@app.command()
def recommend(
    have: Optional[list[str]] = _have_option(),
    limit: int = typer.Option(5, help="Maximum number of recommendations"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Recommend the next resources to generate."""
    _configure(verbose)
    planner = DependencyPlanner(build_default_registry())
    for i, r in enumerate(planner.recommended_next(_available(have), limit), start=1):
        console.print(f"{i}. {r.resource_id} (tier {r.tier}, {r.category})")
        if r.impact_statement:
            console.print(f"   {r.impact_statement}")


@app.command()
def tiers(
    target: Optional[str] = typer.Argument(None, help="Target resource id; omit to check every assignment"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Show a target's tier assignment, or check every hand-tuned assignment."""
    settings = _configure(verbose)
    registry = build_default_registry()
    configs = build_default_tier_configs(registry, settings)

    if target is None:
        for assignment in configs.assignments():
            report = validate_tier_assignment(
                assignment,
                max_recommended_total=settings.aggregation.max_recommended_total,
                registry=registry,
            )
            mark = "[green]ok[/green]" if report.valid and not report.warnings else "[yellow]check[/yellow]"
            console.print(f"{assignment.target_id}: total {assignment.token_budget.total} {mark}")
            for problem in [*report.errors, *report.warnings]:
                console.print(f"  {problem}")
        console.print(f"\n{len(configs)} hand-tuned assignments")
        return

    try:
        assignment, is_default = configs.resolve(target)
    except TieredContextError as exc:
        raise _fail(exc) from exc

    console.print(f"[bold]{target}[/bold] ({'default' if is_default else 'explicit'} assignment)")
    budget = assignment.token_budget
    rows = [
        ("tier1_critical", assignment.tier1_critical, budget.tier1),
        ("tier2_required", assignment.tier2_required, budget.tier2),
        ("tier3_optional", assignment.tier3_optional, budget.tier3),
        ("tier4_skip", assignment.tier4_skip, 0),
    ]
    for name, ids, tokens in rows:
        console.print(f"{name} [{tokens} tokens]: {', '.join(ids) or '-'}")
    console.print(f"total budget: {budget.total}")


def _build_engine(
    settings: AppSettings,
    user: str,
    artifacts_file: Path,
    prefix_file: Optional[Path],
):
    store = MemoryArtifactStore({user: _load_records(artifacts_file)})
    prefix = StaticPrefixProvider(prefix_file.read_text(encoding="utf-8")) if prefix_file else None
    return create_engine(settings, artifact_store=store, cache=None, prefix_provider=prefix)


@app.command()
def aggregate(
    target: str = typer.Argument(..., help="Target resource id"),
    artifacts_file: Path = typer.Argument(..., help="JSON array of the user's artifact records"),
    user: str = typer.Option("cli-user", help="User id the records belong to"),
    prefix_file: Optional[Path] = typer.Option(None, help="Text file placed before all tiers"),
    output: Optional[Path] = typer.Option(None, help="Write the full result JSON here"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Build the tiered context for a target and print the formatted text."""
    settings = _configure(verbose)
    engine = _build_engine(settings, user, artifacts_file, prefix_file)

    try:
        result = asyncio.run(engine.aggregate(user, target, use_cache=False))
    except TieredContextError as exc:
        raise _fail(exc) from exc

    if output:
        output.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        console.print(f"[green]Context saved to {output}[/green]")
    else:
        typer.echo(result.formatted_text)

    b = result.token_breakdown
    console.print(
        f"[bold]{result.total_tokens} tokens[/bold] "
        f"(T1: {b.tier1}, T2: {b.tier2}, T3: {b.tier3}, external: {b.external})"
    )
    for notice in result.notices:
        console.print(f"[yellow]{notice.kind.value}[/yellow] {notice.resource_id or ''} {notice.detail}".rstrip())


@app.command()
def analytics(
    target: str = typer.Argument(..., help="Target resource id"),
    artifacts_file: Path = typer.Argument(..., help="JSON array of the user's artifact records"),
    user: str = typer.Option("cli-user", help="User id the records belong to"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Report token usage, cost, and savings against sending every artifact."""
    settings = _configure(verbose)
    engine = _build_engine(settings, user, artifacts_file, None)

    try:
        report = asyncio.run(engine.analytics(user, target))
    except TieredContextError as exc:
        raise _fail(exc) from exc

    table = Table(title=f"Context analytics: {target}")
    table.add_column("Tier")
    table.add_column("Resources", justify="right")
    table.add_column("Tokens", justify="right")
    for tier_name, usage in report.breakdown.items():
        table.add_row(tier_name, str(usage.resources), str(usage.tokens))
    console.print(table)

    opt = report.optimization
    console.print(f"Estimated tokens: {report.estimated_tokens}")
    console.print(f"Estimated cost: ${report.estimated_cost:.6f}")
    console.print(f"Naive total: {opt.naive_total_tokens} tokens, saved {opt.tokens_saved} ({opt.savings_percent}%)")


if __name__ == "__main__":
    app()
