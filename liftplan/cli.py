"""
Command-line interface for the training planner.

Provides commands for:
- Volume landmark tables
- Mesocycle generation and export
- Readiness-based workout adjustment
- Session-to-session progression
- Exercise substitution
- Template program scheduling
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import IntPrompt
from rich.table import Table

from liftplan.autoregulation import AutoregulationUnit
from liftplan.catalog import ExerciseCatalog, load_default_catalog
from liftplan.config import EngineConfig
from liftplan.landmarks import LandmarkCalculator
from liftplan.plan_schemas import (
    Mesocycle,
    PlanDuration,
    ProgramTemplate,
    WorkoutPrescription,
)
from liftplan.planner import MesocyclePlanner, generate_program_plan
from liftplan.progression import ProgressionPlanner
from liftplan.schemas import AthleteProfile, ExerciseLog, ReadinessSnapshot
from liftplan.substitution import SubstitutionEngine
from liftplan.trace import save_mesocycle

# Initialize Typer app and Rich console
app = typer.Typer(
    help="Adaptive resistance-training planner - volume landmarks, mesocycles and autoregulation"
)
console = Console()

# Global options, set by the callback
state = {"config": None, "catalog": None}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logging"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to engine config JSON overrides", exists=True
    ),
    catalog: Optional[Path] = typer.Option(
        None, "--catalog", help="Path to exercise catalog JSON", exists=True
    ),
):
    """Adaptive resistance-training planner."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    state["config"] = config
    state["catalog"] = catalog


# ===== LOADING HELPERS =====


def _load_config() -> EngineConfig:
    if state["config"] is None:
        return EngineConfig()
    try:
        return EngineConfig.from_file(state["config"])
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]✗ Failed to load config: {e}[/red]")
        raise typer.Exit(1)


def _load_catalog() -> ExerciseCatalog:
    try:
        if state["catalog"] is None:
            return load_default_catalog()
        return ExerciseCatalog.from_file(state["catalog"])
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]✗ Failed to load exercise catalog: {e}[/red]")
        raise typer.Exit(1)


def _load_model(path: Path, model, label: str):
    """Load a JSON file into a pydantic model, exiting with code 1 on failure."""
    try:
        with open(path) as f:
            return model(**json.load(f))
    except (OSError, json.JSONDecodeError, ValidationError, TypeError) as e:
        console.print(f"[red]✗ Failed to load {label}: {e}[/red]")
        raise typer.Exit(1)


def _load_profile(path: Path) -> AthleteProfile:
    profile = _load_model(path, AthleteProfile, "profile")
    console.print(f"✓ Loaded profile: [green]{profile.athlete_id}[/green]")
    return profile


# ===== DISPLAY HELPER FUNCTIONS =====


def _display_workout(workout: WorkoutPrescription, title: Optional[str] = None):
    table = Table(title=title or workout.name, box=box.ROUNDED)
    table.add_column("Exercise", style="cyan")
    table.add_column("Muscle")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("RIR", justify="right")
    table.add_column("RPE", justify="right")

    for exercise in workout.exercises:
        table.add_row(
            exercise.name,
            exercise.muscle_group or "-",
            str(exercise.sets),
            str(exercise.target_reps),
            str(exercise.target_rir) if exercise.target_rir is not None else "-",
            f"{exercise.target_rpe:g}" if exercise.target_rpe is not None else "-",
        )
    console.print(table)


def _display_mesocycle_summary(mesocycle: Mesocycle):
    """
    Display mesocycle volume progression and the first week's days.

    Args:
        mesocycle: Generated mesocycle
    """
    console.print(
        f"\n✓ Generated [green]{mesocycle.split_name}[/green] mesocycle: "
        f"{len(mesocycle.progression_weeks)} weeks + deload"
    )

    table = Table(title="Weekly Sets per Muscle", box=box.ROUNDED)
    table.add_column("Muscle", style="cyan")
    for week in mesocycle.weeks:
        table.add_column(
            f"W{week.week_number}" + (" (D)" if week.is_deload else ""), justify="right"
        )
    for muscle in mesocycle.weeks[0].muscle_targets:
        table.add_row(muscle, *[str(v) for v in mesocycle.get_volume_progression(muscle)])
    console.print(table)

    first_week = mesocycle.weeks[0]
    console.print(f"\n[bold]Week {first_week.week_number}:[/bold]")
    for day in first_week.days:
        _display_workout(day.to_workout())


# ===== CLI COMMANDS =====


@app.command()
def landmarks(
    profile: Path = typer.Option(
        ..., "--profile", "-p", help="Path to athlete profile JSON file", exists=True
    ),
    muscle: Optional[List[str]] = typer.Option(
        None, "--muscle", "-m", help="Muscle group (repeatable; default: all catalog groups)"
    ),
    frequency: int = typer.Option(2, "--frequency", "-f", min=1, help="Sessions per week per muscle"),
):
    """
    Show MV/MEV/MAV/MRV per muscle group for an athlete.
    """
    athlete = _load_profile(profile)
    calculator = LandmarkCalculator(athlete, _load_config())
    muscles = muscle or _load_catalog().muscle_groups()

    console.print(
        f"Training age factor: [yellow]{calculator.training_age_factor():.2f}[/yellow]  "
        f"Recovery capacity: [yellow]{calculator.recovery_capacity_score():.2f}[/yellow]\n"
    )

    table = Table(title=f"Volume Landmarks (sets/week, {frequency}x/week)", box=box.ROUNDED)
    table.add_column("Muscle", style="cyan")
    for column in ("MV", "MEV", "MAV", "MRV"):
        table.add_column(column, justify="right")

    for lm in calculator.landmarks_for(muscles, {m: frequency for m in muscles}):
        table.add_row(lm.muscle_group, str(lm.mv), str(lm.mev), str(lm.mav), str(lm.mrv))
    console.print(table)


@app.command()
def generate_plan(
    profile: Path = typer.Option(
        ..., "--profile", "-p", help="Path to athlete profile JSON file", exists=True
    ),
    days: Optional[int] = typer.Option(
        None, "--days", "-d", min=1, max=7, help="Training days per week (default: profile)"
    ),
    weeks: int = typer.Option(5, "--weeks", "-w", min=1, max=12, help="Progression weeks before the deload"),
    recent: Optional[List[str]] = typer.Option(
        None, "--recent", help="Recently used exercise id, most recent first (repeatable)"
    ),
    save_plan: bool = typer.Option(True, "--save-plan/--no-save", help="Save plan to file"),
    plan_format: str = typer.Option(
        "json", "--format", "-f", help="Plan output format (json or markdown)"
    ),
    output_dir: Path = typer.Option(Path("plans"), "--output-dir", "-o", help="Directory for saved plans"),
):
    """
    Generate a mesocycle: progression weeks for a weekly split plus a deload week.
    """
    console.print("\n[bold cyan]Mesocycle Generator[/bold cyan]\n")

    athlete = _load_profile(profile)
    planner = MesocyclePlanner(athlete, _load_catalog(), _load_config())
    mesocycle = planner.generate(days_per_week=days, mesocycle_length=weeks, recent_exercises=recent)

    _display_mesocycle_summary(mesocycle)

    if save_plan:
        try:
            path = save_mesocycle(mesocycle, output_dir, format=plan_format)
        except ValueError as e:
            console.print(f"[red]✗ {e}[/red]")
            raise typer.Exit(1)
        console.print(f"\n✓ Plan saved: [cyan]{path}[/cyan]")


@app.command()
def readiness(
    workout: Optional[Path] = typer.Option(
        None, "--workout", "-w", help="Path to planned workout JSON file", exists=True
    ),
    sleep: Optional[int] = typer.Option(None, "--sleep", min=1, max=10, help="Sleep quality (1-10)"),
    energy: Optional[int] = typer.Option(None, "--energy", min=1, max=10, help="Energy level (1-10)"),
    motivation: Optional[int] = typer.Option(None, "--motivation", min=1, max=10, help="Motivation (1-10)"),
    soreness: Optional[int] = typer.Option(
        None, "--soreness", min=1, max=10, help="Muscle soreness (1-10, higher = more sore)"
    ),
):
    """
    Score a readiness questionnaire and adjust today's workout.

    Ratings not given as options are asked for interactively.
    """
    def ask(value: Optional[int], prompt: str) -> int:
        while value is None or not 1 <= value <= 10:
            value = IntPrompt.ask(prompt)
        return value

    snapshot = ReadinessSnapshot(
        sleep_quality=ask(sleep, "Sleep quality (1-10)"),
        energy_level=ask(energy, "Energy level (1-10)"),
        motivation=ask(motivation, "Motivation (1-10)"),
        muscle_soreness=ask(soreness, "Muscle soreness (1-10)"),
    )

    unit = AutoregulationUnit(_load_catalog(), _load_config())
    score = unit.recovery_score(snapshot)
    if score < unit.rules.low_readiness_threshold:
        color = "red"
    elif score > unit.rules.high_readiness_threshold:
        color = "green"
    else:
        color = "yellow"
    console.print(f"\n[bold]Recovery Score: [{color}]{score:.2f}[/{color}][/bold]\n")

    if workout is None:
        return

    planned = _load_model(workout, WorkoutPrescription, "workout")
    adjusted, note = unit.adjust_workout(planned, score)
    console.print(Panel(note, border_style=color, padding=(1, 2)))
    _display_workout(adjusted, title=f"{adjusted.name} (adjusted)")


@app.command()
def progress(
    log: Optional[Path] = typer.Option(
        None, "--log", "-l", help="Path to last session's exercise log JSON", exists=True
    ),
    profile: Optional[Path] = typer.Option(
        None, "--profile", "-p", help="Athlete profile (sets the weekly progression rate)", exists=True
    ),
    previous_load: Optional[float] = typer.Option(None, "--previous-load", help="Last session's load"),
    last_effort: Optional[float] = typer.Option(None, "--last-effort", help="Last session's RIR or RPE"),
    target_effort: Optional[float] = typer.Option(None, "--target-effort", help="Planned RIR or RPE"),
    scale: str = typer.Option("rir", "--scale", help="Effort scale (rir or rpe)"),
):
    """
    Next-session targets from a logged session, or a load step from one effort rating.
    """
    taf = 1.0
    if profile is not None:
        taf = LandmarkCalculator(_load_profile(profile)).training_age_factor()
    planner = ProgressionPlanner(taf, _load_config())

    if log is not None:
        exercise_log = _load_model(log, ExerciseLog, "exercise log")
        decision = planner.calculate_progression(exercise_log)

        table = Table(title=exercise_log.exercise_name or "Progression", box=box.ROUNDED)
        table.add_column("Action", style="cyan")
        table.add_column("Load", justify="right")
        table.add_column("Reps", justify="right")
        table.add_row(
            decision.action.value.replace("_", " "),
            f"{decision.target_load:g}" if decision.target_load is not None else "-",
            str(decision.target_reps),
        )
        console.print(table)
        console.print(f"\n{decision.note}")
        return

    if previous_load is None or last_effort is None or target_effort is None:
        console.print(
            "[red]✗ Provide --log, or all of --previous-load, --last-effort and --target-effort[/red]"
        )
        raise typer.Exit(1)

    try:
        new_load = planner.suggest_load_progression(previous_load, last_effort, target_effort, scale)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)
    console.print(f"Next load: [green]{new_load:.1f}[/green] (was {previous_load:g})")


@app.command()
def substitute(
    exercise: str = typer.Argument(..., help="Exercise name or id to replace"),
    equipment: Optional[List[str]] = typer.Option(
        None, "--equipment", "-e", help="Available equipment (repeatable)"
    ),
    profile: Optional[Path] = typer.Option(
        None, "--profile", "-p", help="Use the profile's available equipment", exists=True
    ),
):
    """
    Rank alternatives to an exercise that the available equipment allows.

    With neither --equipment nor --profile only bodyweight exercises are considered.
    """
    catalog = _load_catalog()
    original = catalog.get(exercise) or catalog.find_by_name(exercise)
    if original is None:
        console.print(f"[red]✗ Exercise not found in catalog: {exercise}[/red]")
        raise typer.Exit(1)

    available = equipment or []
    if not equipment and profile is not None:
        available = _load_profile(profile).available_equipment

    engine = SubstitutionEngine(catalog, _load_config())
    try:
        ranked = engine.substitutions_for(original, available)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)

    if not ranked:
        console.print("[yellow]No substitutes available with this equipment.[/yellow]")
        return

    table = Table(title=f"Substitutes for {original.name}", box=box.ROUNDED)
    table.add_column("Exercise", style="cyan")
    table.add_column("Muscle")
    table.add_column("Pattern")
    table.add_column("Score", justify="right", style="yellow")
    for item in ranked:
        table.add_row(
            item.exercise.name,
            item.exercise.muscle_group,
            item.exercise.movement_pattern,
            f"{item.score:g}",
        )
    console.print(table)


@app.command()
def program(
    template: Path = typer.Option(
        ..., "--template", "-t", help="Path to program template JSON file", exists=True
    ),
    weeks: Optional[int] = typer.Option(None, "--weeks", "-w", min=1, help="Duration in weeks"),
    days: Optional[int] = typer.Option(None, "--days", "-d", min=1, help="Duration in sessions"),
    start_index: int = typer.Option(0, "--start-index", "-s", min=0, help="Template to start from"),
):
    """
    Rotate a template program's workouts into a scheduled day list.
    """
    program_template = _load_model(template, ProgramTemplate, "program template")

    if (weeks is None) == (days is None):
        console.print("[red]✗ Provide exactly one of --weeks or --days[/red]")
        raise typer.Exit(1)
    duration = PlanDuration(type="weeks", value=weeks) if weeks else PlanDuration(type="days", value=days)

    try:
        plan = generate_program_plan(program_template, duration, start_index)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"{plan.name}: {plan.total_sessions} sessions", box=box.ROUNDED)
    table.add_column("Day", justify="right", style="cyan")
    table.add_column("Workout")
    table.add_column("Exercises", justify="right")
    for day in plan.days:
        table.add_row(str(day.day), day.workout.name, str(len(day.workout.exercises)))
    console.print(table)


if __name__ == "__main__":
    app()
