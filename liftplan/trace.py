"""
Mesocycle export.

Writes generated mesocycles to JSON (lossless, reloadable) or Markdown
(human-readable, including the plan decisions recorded during generation).
"""

import json
from pathlib import Path

from liftplan.plan_schemas import Mesocycle


class PlanExporter:
    """
    Exports a mesocycle and its decision trail.

    The Markdown report shows:
    - The split and block length
    - Weekly volume targets per muscle
    - Every training day with sets, reps and effort targets
    - The decisions made while generating the block
    """

    def __init__(self, mesocycle: Mesocycle):
        self.mesocycle = mesocycle

    def export_to_json(self) -> dict:
        """
        Export the mesocycle to a JSON-serializable dictionary.

        Returns:
            Dictionary representation of the mesocycle
        """
        return self.mesocycle.model_dump(mode="json")

    def export_to_markdown(self) -> str:
        """
        Export the mesocycle to a Markdown report.

        Returns:
            Markdown-formatted plan
        """
        meso = self.mesocycle
        lines = []

        lines.append("# Mesocycle")
        lines.append("")
        lines.append(f"**Created:** {meso.created_at.strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append(f"**Athlete:** `{meso.athlete_id}`")
        lines.append(f"**Split:** {meso.split_name} ({meso.days_per_week} days/week)")
        lines.append(
            f"**Length:** {len(meso.progression_weeks)} progression weeks + 1 deload week"
        )
        lines.append("")
        lines.append("---")
        lines.append("")

        # Volume overview
        lines.append("## Weekly Volume Targets")
        lines.append("")
        muscles = list(meso.weeks[0].muscle_targets)
        header = ["Muscle"] + [
            f"W{w.week_number}{' (deload)' if w.is_deload else ''}" for w in meso.weeks
        ]
        lines.append("| " + " | ".join(header) + " |")
        lines.append("|" + "---|" * len(header))
        for muscle in muscles:
            row = [muscle] + [str(v) for v in meso.get_volume_progression(muscle)]
            lines.append("| " + " | ".join(row) + " |")
        lines.append("")
        lines.append("---")
        lines.append("")

        # Week by week
        for week in meso.weeks:
            title = f"## Week {week.week_number}"
            if week.is_deload:
                title += " (Deload)"
            lines.append(title)
            lines.append("")
            for day in week.days:
                lines.append(f"### {day.name}")
                lines.append(f"*{', '.join(day.muscle_groups)}*")
                lines.append("")
                if not day.exercises:
                    lines.append("*No exercises scheduled*")
                    lines.append("")
                    continue
                for exercise in day.exercises:
                    effort = []
                    if exercise.target_rir is not None:
                        effort.append(f"RIR {exercise.target_rir}")
                    if exercise.target_rpe is not None:
                        effort.append(f"RPE {exercise.target_rpe:g}")
                    suffix = f" @ {', '.join(effort)}" if effort else ""
                    lines.append(
                        f"- **{exercise.name}**: {exercise.sets} x {exercise.target_reps}{suffix}"
                    )
                lines.append("")

        lines.append("---")
        lines.append("")

        # Decision trail
        lines.append("## Plan Decisions")
        lines.append("")
        if not meso.plan_decisions:
            lines.append("*No decisions recorded*")
            lines.append("")
        for i, decision in enumerate(meso.plan_decisions, 1):
            lines.append(f"### {i}. {decision.decision_point}")
            lines.append(f"- **Inputs:** {'; '.join(decision.input_factors)}")
            lines.append(f"- **Reasoning:** {decision.reasoning}")
            lines.append(f"- **Outcome:** {decision.outcome}")
            lines.append("")

        return "\n".join(lines)

    def save_to_file(self, output_dir: Path, format: str = "json") -> Path:
        """
        Save the mesocycle to a file.

        Args:
            output_dir: Directory to save into (created if missing)
            format: Output format ("json" or "markdown")

        Returns:
            Path to saved file

        Raises:
            ValueError: If format is not supported
        """
        output_dir.mkdir(parents=True, exist_ok=True)

        timestamp_str = self.mesocycle.created_at.strftime("%Y%m%d_%H%M%S")
        athlete_id = self.mesocycle.athlete_id.replace(" ", "_")

        if format == "json":
            filepath = output_dir / f"mesocycle_{athlete_id}_{timestamp_str}.json"
            with open(filepath, "w") as f:
                json.dump(self.export_to_json(), f, indent=2)
        elif format == "markdown":
            filepath = output_dir / f"mesocycle_{athlete_id}_{timestamp_str}.md"
            with open(filepath, "w") as f:
                f.write(self.export_to_markdown())
        else:
            raise ValueError(f"Unsupported format: {format}. Use 'json' or 'markdown'")

        return filepath


def save_mesocycle(mesocycle: Mesocycle, output_dir: Path, format: str = "json") -> Path:
    """Convenience wrapper around PlanExporter.save_to_file."""
    return PlanExporter(mesocycle).save_to_file(output_dir, format)


def load_mesocycle_from_file(filepath: Path) -> Mesocycle:
    """
    Load a mesocycle from a JSON export.

    Args:
        filepath: Path to mesocycle JSON file

    Returns:
        Mesocycle object

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid
    """
    if not filepath.exists():
        raise FileNotFoundError(f"Mesocycle file not found: {filepath}")

    with open(filepath, "r") as f:
        data = json.load(f)

    try:
        mesocycle = Mesocycle(**data)
    except Exception as e:
        raise ValueError(f"Invalid mesocycle file: {e}")

    return mesocycle
