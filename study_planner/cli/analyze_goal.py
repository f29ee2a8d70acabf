"""CLI tool to analyze a study goal and store the result."""
import argparse
import json
import logging
import sys
from pathlib import Path
from rich.console import Console
from rich.table import Table
from dotenv import load_dotenv

from study_planner.config import PlannerSettings
from study_planner.errors import PlannerError
from study_planner.models.goal import GOAL_TYPES, SKILL_LEVELS
from study_planner.tools.goal_analysis import analyze_and_store_goal
from study_planner.tools.plan_store import JsonFileRecordStore


console = Console()


def main():
    load_dotenv()
    parser = argparse.ArgumentParser(
        description="Analyze whether a study goal is feasible"
    )
    parser.add_argument("--user-id", type=str, required=True, help="Learner ID")
    parser.add_argument("--goal-type", choices=GOAL_TYPES, required=True, help="What the learner is preparing for")
    parser.add_argument("--subject", type=str, required=True, help="Subject to study (e.g. Python)")
    parser.add_argument("--target-date", type=str, required=True, help="Deadline as an ISO date (YYYY-MM-DD)")
    parser.add_argument("--daily-hours", type=float, required=True, help="Hours available per day")
    parser.add_argument("--level", choices=SKILL_LEVELS, required=True, help="Current skill level")
    parser.add_argument(
        "--topic",
        action="append",
        dest="topics",
        help="Specific topic to cover (repeatable)"
    )
    parser.add_argument(
        "--state-dir",
        type=Path,
        help="Override STUDY_PLANNER_STATE_DIR"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full analysis as JSON"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    # Configure logging
    if args.debug:
        log_level = logging.DEBUG
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif args.verbose:
        log_level = logging.INFO
        log_format = "%(asctime)s - %(levelname)s - %(message)s"
    else:
        log_level = logging.WARNING
        log_format = "%(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    settings = PlannerSettings()
    if args.state_dir:
        settings = settings.model_copy(update={"state_dir": args.state_dir})

    request = {
        "userId": args.user_id,
        "goalType": args.goal_type,
        "subject": args.subject,
        "targetDate": args.target_date,
        "availableDailyHours": args.daily_hours,
        "currentLevel": args.level,
    }
    if args.topics:
        request["specificTopics"] = args.topics

    try:
        result = analyze_and_store_goal(request, JsonFileRecordStore(settings.records_dir), settings=settings)
    except PlannerError as e:
        console.print(f"\n[red]✗ {e.message}[/red]")
        for detail in getattr(e, "errors", []):
            console.print(f"  • {detail}")
        sys.exit(1)

    if args.json:
        console.print_json(json.dumps(result.to_json_dict()))
        return

    verdict = "[green]feasible[/green]" if result.is_feasible else "[red]not feasible[/red]"
    console.print(f"\n[bold cyan]Goal {result.goal_id}[/bold cyan] is {verdict}\n")

    table = Table(title="Goal Analysis")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta", justify="right")

    table.add_row("Feasibility score", f"{result.feasibility_score}/100")
    table.add_row("Topics", str(result.topic_count))
    table.add_row("Hours per topic", f"{result.estimated_hours_per_topic:g}")
    table.add_row("Required hours", f"{result.topic_count * result.estimated_hours_per_topic:g}")
    table.add_row("Available hours", f"{result.time_constraints.total_hours:g}")
    table.add_row("Days until target", str(result.time_constraints.total_days))
    table.add_row("Estimated completion", result.estimated_completion_date.date().isoformat())

    console.print(table)

    console.print("\n[bold]Recommendations:[/bold]")
    for recommendation in result.recommendations:
        console.print(f"  • {recommendation}")

    if result.alternatives:
        alt_table = Table(title="Alternative Timelines")
        alt_table.add_column("Option", style="yellow")
        alt_table.add_column("Target date")
        alt_table.add_column("Hours/day", justify="right")
        alt_table.add_column("Days", justify="right")
        alt_table.add_column("Score", style="magenta", justify="right")

        for alt in result.alternatives:
            alt_table.add_row(
                alt.description,
                alt.adjusted_target_date.date().isoformat(),
                f"{alt.adjusted_daily_hours:g}",
                str(alt.adjusted_total_days),
                str(alt.feasibility_score)
            )
        console.print()
        console.print(alt_table)


if __name__ == "__main__":
    main()
