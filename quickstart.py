#!/usr/bin/env python3
"""
Quick start script to demonstrate the adaptive training planner.

This script walks through one training block:
1. Build an athlete profile and compute volume landmarks
2. Generate a mesocycle and export it
3. Autoregulate the first workout from a readiness check
4. Derive next-session targets from a logged exercise
5. Find substitutes for a home gym
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from liftplan.autoregulation import AutoregulationUnit
from liftplan.catalog import load_default_catalog
from liftplan.landmarks import LandmarkCalculator
from liftplan.planner import MesocyclePlanner
from liftplan.progression import ProgressionPlanner
from liftplan.schemas import AthleteProfile, ExerciseLog, ReadinessSnapshot, SetRecord
from liftplan.substitution import SubstitutionEngine
from liftplan.trace import save_mesocycle

console = Console()


def print_header(title: str):
    """Print a formatted header."""
    console.print(f"\n[bold cyan]{title}[/bold cyan]")
    console.print("=" * len(title))


def main():
    """Run the complete demonstration workflow."""
    console.print("\n[bold magenta]🏋 Adaptive Training Planner[/bold magenta]")
    console.print("[dim]One block from landmarks to substitutions[/dim]\n")

    catalog = load_default_catalog()

    # ===== STEP 1: Profile and Landmarks =====
    print_header("Step 1: Athlete Profile and Volume Landmarks")

    profile = AthleteProfile(
        athlete_id="demo_athlete",
        age=29,
        sex="female",
        training_months=18,
        sleep_hours=7.5,
        stress_level=4,
        days_per_week=4,
        weak_muscles=["glutes"],
        available_equipment=["dumbbell", "bench"],
    )
    calculator = LandmarkCalculator(profile)

    console.print(f"✓ Athlete: [green]{profile.athlete_id}[/green]")
    console.print(f"  Training age factor: {calculator.training_age_factor():.2f}")
    console.print(f"  Recovery capacity: {calculator.recovery_capacity_score():.2f}")

    table = Table(title="Landmarks at 2x/week", box=box.ROUNDED)
    table.add_column("Muscle", style="cyan")
    for column in ("MV", "MEV", "MAV", "MRV"):
        table.add_column(column, justify="right")
    for muscle in ("chest", "back", "glutes", "quads"):
        lm = calculator.volume_landmarks(muscle)
        table.add_row(muscle, str(lm.mv), str(lm.mev), str(lm.mav), str(lm.mrv))
    console.print(table)

    # ===== STEP 2: Mesocycle =====
    print_header("Step 2: Generate Mesocycle")

    planner = MesocyclePlanner(profile, catalog)
    mesocycle = planner.generate(mesocycle_length=4)

    console.print(
        f"✓ {mesocycle.split_name}: {len(mesocycle.progression_weeks)} weeks + deload"
    )
    for muscle in ("chest", "glutes"):
        volumes = " → ".join(str(v) for v in mesocycle.get_volume_progression(muscle))
        console.print(f"  {muscle}: {volumes}")

    plan_path = save_mesocycle(mesocycle, Path("plans"), format="markdown")
    console.print(f"\n✓ Plan saved to: [cyan]{plan_path}[/cyan]")

    # ===== STEP 3: Autoregulation =====
    print_header("Step 3: Readiness Check")

    unit = AutoregulationUnit(catalog)
    snapshot = ReadinessSnapshot(sleep_quality=4, energy_level=5, motivation=6, muscle_soreness=7)
    score = unit.recovery_score(snapshot)
    planned = mesocycle.weeks[0].days[0].to_workout()
    adjusted, note = unit.adjust_workout(planned, score)

    console.print(f"Recovery score: [yellow]{score:.2f}[/yellow]")
    console.print(f"[dim]{note}[/dim]")
    console.print(
        f"  {planned.name}: {planned.total_sets()} sets planned, {adjusted.total_sets()} after adjustment"
    )

    # ===== STEP 4: Progression =====
    print_header("Step 4: Next-Session Targets")

    log = ExerciseLog(
        exercise_name="Dumbbell Bench Press",
        target_rir=2,
        target_reps=10,
        completed_sets=[
            SetRecord(weight=50, reps=10, rir=2),
            SetRecord(weight=50, reps=11, rir=2),
            SetRecord(weight=50, reps=12, rir=2),
        ],
    )
    decision = ProgressionPlanner(calculator.training_age_factor()).calculate_progression(log)
    console.print(f"{log.exercise_name}: [green]{decision.action.value}[/green]")
    console.print(f"  {decision.note}")

    # ===== STEP 5: Substitution =====
    print_header("Step 5: Home Gym Substitutes")

    original = catalog.find_by_name("Barbell Bench Press")
    engine = SubstitutionEngine(catalog)
    for item in engine.substitutions_for(original, profile.available_equipment):
        console.print(f"  {item.exercise.name} [dim](score {item.score:g})[/dim]")

    # ===== COMPLETION =====
    console.print("\n")
    panel = Panel(
        "[green]✓[/green] Demonstration complete!\n\n"
        "Next block's base MEV table:\n"
        + ", ".join(f"{m} {v}" for m, v in calculator.adapt_base_mev().items()),
        title="[bold green]Success[/bold green]",
        border_style="green",
    )
    console.print(panel)

    console.print("\n[bold cyan]Next Steps:[/bold cyan]")
    console.print("  • Review the generated plan in plans/")
    console.print("  • Run CLI: liftplan generate-plan --profile <your-profile.json>")
    console.print("  • Start the API: uvicorn liftplan.api.main:app --reload")
    console.print("  • Run tests: python3 -m pytest\n")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        console.print(f"\n[red]Error: {e}[/red]")
        console.print("[dim]Install the package first: pip install -e .[/dim]")
        raise
