"""CLI for the workout plan engine.

Developer CLI that runs the same orchestrator code path an application
would, against a YAML exercise catalog.
"""

import asyncio
import json
from dataclasses import asdict

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from liftplan.catalog import CatalogLoadError, InMemoryExerciseCatalog, load_catalog
from liftplan.config.settings import settings
from liftplan.core.logger import setup_logger
from liftplan.planner import (
    ExperienceLevel,
    FitnessGoal,
    FlexibilityFlags,
    GenerationOrchestrator,
    GenerationRequest,
    WorkoutPlan,
    WorkoutPlanEngine,
)
from liftplan.planner.muscle_selector import select_muscle_groups
from liftplan.planner.parameters import resolve_training_parameters
from liftplan.planner.time_budget import plan_time_budget

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="liftplan",
    help="LiftPlan CLI - generate time-budgeted strength workouts",
    add_completion=False,
)


def _setup_logging(debug: bool = False, quiet: bool = False) -> None:
    if debug:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = settings.log_level
    setup_logger(level=level, log_file=settings.log_file)


def _load_catalog_or_exit(catalog_path: str | None) -> InMemoryExerciseCatalog:
    path = catalog_path or settings.catalog_path
    try:
        return load_catalog(path)
    except CatalogLoadError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(1) from e


def plan_to_dict(plan: WorkoutPlan) -> dict:
    """JSON-ready representation of a plan."""
    data = asdict(plan)
    data["estimated_minutes"] = plan.estimated_minutes
    data["breakdown"]["total"] = plan.breakdown.total
    return data


def _render_plan(plan: WorkoutPlan) -> None:
    table = Table(title=f"Workout plan - {', '.join(plan.muscle_groups)}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Exercise", style="cyan")
    table.add_column("Muscle group")
    table.add_column("Type")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Rest (s)", justify="right")

    for index, exercise in enumerate(plan.ordered_exercises, start=1):
        table.add_row(
            str(index),
            exercise.name,
            exercise.muscle_group,
            "compound" if exercise.is_compound else "isolation",
            str(exercise.sets),
            str(exercise.reps),
            str(exercise.rest_seconds),
        )
    console.print(table)

    for title, block in (("Warm-up", plan.warm_up_exercises), ("Cool-down", plan.cool_down_exercises)):
        if block:
            names = ", ".join(f"{e.name} {e.sets}x{e.reps}" for e in block)
            console.print(f"[green]{title}:[/green] {names}")

    breakdown = plan.breakdown
    console.print(
        f"[yellow]Estimated:[/yellow] {plan.estimated_minutes} min "
        f"(requested {plan.requested_duration_minutes} min; "
        f"warm-up {breakdown.warmup}s, work {breakdown.work}s, "
        f"cool-down {breakdown.cooldown}s, buffer {breakdown.buffer}s)"
    )


@app.command()
def generate(
    duration: int = typer.Option(..., "--duration", "-d", help="Session length in minutes"),
    goal: FitnessGoal = typer.Option(FitnessGoal.GENERAL, "--goal", "-g", help="Training goal"),
    experience: ExperienceLevel = typer.Option(ExperienceLevel.INTERMEDIATE, "--experience", "-e", help="Experience level"),
    muscle: list[str] | None = typer.Option(None, "--muscle", "-m", help="Target muscle group (repeatable)"),
    equipment: list[str] | None = typer.Option(None, "--equipment", help="Available equipment (repeatable; omit for no restriction)"),
    avoid: list[int] | None = typer.Option(None, "--avoid", help="Exercise id to exclude (repeatable)"),
    warm_up: bool = typer.Option(False, "--warm-up/--no-warm-up", help="Attach a warm-up block"),
    cool_down: bool = typer.Option(False, "--cool-down/--no-cool-down", help="Attach a cool-down block"),
    catalog_path: str | None = typer.Option(None, "--catalog", help="Catalog YAML file (default: LIFTPLAN_CATALOG_PATH)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for rep selection"),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Generate one workout plan and print it."""
    _setup_logging(debug=debug, quiet=as_json)
    catalog = _load_catalog_or_exit(catalog_path)

    app_settings = settings if seed is None else settings.model_copy(update={"rep_seed": seed})
    engine = WorkoutPlanEngine.from_settings(catalog, app_settings)
    orchestrator = GenerationOrchestrator.from_settings(engine, app_settings, target="cli")
    request = GenerationRequest(
        duration_minutes=duration,
        muscle_groups=tuple(muscle) if muscle else None,
        goal=goal,
        experience_level=experience,
        equipment_filter=tuple(equipment) if equipment else None,
        avoided_exercise_ids=frozenset(avoid or ()),
        flexibility=FlexibilityFlags(warm_up=warm_up, cool_down=cool_down),
    )

    plan = asyncio.run(orchestrator.regenerate(request))
    if plan is None:
        failure = orchestrator.last_failure
        reason = failure.failure.value if failure is not None and failure.failure else "unknown"
        logger.error(f"No plan generated: {reason}")
        console.print(f"[red]No plan generated:[/red] {reason}", style="bold red")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(plan_to_dict(plan), indent=2, ensure_ascii=False))
    else:
        _render_plan(plan)


@app.command()
def budget(
    duration: int = typer.Option(..., "--duration", "-d", help="Session length in minutes"),
    goal: FitnessGoal = typer.Option(FitnessGoal.GENERAL, "--goal", "-g", help="Training goal"),
    experience: ExperienceLevel = typer.Option(ExperienceLevel.INTERMEDIATE, "--experience", "-e", help="Experience level"),
    muscle: list[str] | None = typer.Option(None, "--muscle", "-m", help="Target muscle group (repeatable)"),
) -> None:
    """Show the time budget a session would be planned against."""
    if duration <= 0:
        console.print(f"[red]Error:[/red] duration must be positive, got {duration}", style="bold red")
        raise typer.Exit(1)

    muscle_groups = select_muscle_groups(goal, custom=muscle, limit=settings.max_muscle_groups)
    params = resolve_training_parameters(goal, experience)
    time_budget = plan_time_budget(duration, len(muscle_groups), params)

    table = Table(title=f"Time budget - {duration} min, {goal.value}, {experience.value}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Warm-up (s)", str(time_budget.warmup_seconds))
    table.add_row("Available for exercises (s)", str(time_budget.available_exercise_seconds))
    table.add_row("Seconds per exercise", f"{time_budget.seconds_per_exercise:.1f}")
    table.add_row("Target exercises", str(time_budget.target_total_exercises))
    table.add_row("Max per muscle group", str(time_budget.target_per_muscle))
    for group, count in zip(muscle_groups, time_budget.per_muscle_counts, strict=True):
        table.add_row(f"  {group}", str(count))
    console.print(table)


@app.command()
def catalog(
    muscle: str | None = typer.Option(None, "--muscle", "-m", help="Only entries targeting this muscle group"),
    catalog_path: str | None = typer.Option(None, "--catalog", help="Catalog YAML file (default: LIFTPLAN_CATALOG_PATH)"),
) -> None:
    """List catalog entries."""
    exercise_catalog = _load_catalog_or_exit(catalog_path)
    entries = [entry for entry in exercise_catalog.entries if muscle is None or entry.targets(muscle)]

    table = Table(title=f"Catalog ({len(entries)} exercises)")
    table.add_column("Id", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Muscle groups")
    table.add_column("Equipment")
    table.add_column("Pattern")
    for entry in entries:
        table.add_row(
            str(entry.id),
            entry.name,
            entry.category.value,
            ", ".join(entry.muscle_groups),
            ", ".join(entry.equipment) or "bodyweight",
            entry.movement_pattern.value if entry.movement_pattern else "-",
        )
    console.print(table)


if __name__ == "__main__":
    app()
