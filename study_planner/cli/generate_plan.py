"""CLI tool to generate a study plan for an analyzed goal."""
import argparse
import json
import logging
import sys
from pathlib import Path
from rich.console import Console
from rich.table import Table
from dotenv import load_dotenv
from pydantic import ValidationError

from study_planner.config import PlannerSettings
from study_planner.errors import PlanNotFeasible, PlannerError
from study_planner.models.plan import StudyPlanRequest
from study_planner.tools.plan_generator import generate_and_store_plan
from study_planner.tools.plan_store import JsonFileRecordStore
from study_planner.tools.syllabus_topics import FileSyllabusTopicSource, extract_syllabus_topics


console = Console()


def main():
    load_dotenv()
    parser = argparse.ArgumentParser(
        description="Generate a day-by-day study plan for an analyzed goal"
    )
    parser.add_argument("--user-id", type=str, required=True, help="Learner ID")
    parser.add_argument("--goal-id", type=str, required=True, help="Goal ID from analyze_goal")
    parser.add_argument(
        "--topic",
        action="append",
        dest="topics",
        help="Custom topic name (repeatable; overrides syllabus and catalog topics)"
    )
    parser.add_argument(
        "--syllabus-id",
        action="append",
        dest="syllabus_ids",
        default=[],
        help="Document ID of previously extracted syllabus topics (repeatable)"
    )
    parser.add_argument(
        "--syllabus-file",
        type=Path,
        action="append",
        dest="syllabus_files",
        default=[],
        help="Plain-text syllabus to extract topics from first (document ID = file stem)"
    )
    parser.add_argument(
        "--state-dir",
        type=Path,
        help="Override STUDY_PLANNER_STATE_DIR"
    )
    parser.add_argument(
        "--days",
        type=int,
        default=7,
        help="Number of days to show in the schedule preview (0 = all)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full plan as JSON"
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

    syllabus_source = FileSyllabusTopicSource(settings.syllabus_topics_dir)
    syllabus_ids = list(args.syllabus_ids)

    for syllabus_file in args.syllabus_files:
        if not syllabus_file.exists():
            console.print(f"[red]✗ Syllabus file not found: {syllabus_file}[/red]")
            sys.exit(1)
        syllabus = extract_syllabus_topics(syllabus_file.stem, syllabus_file.read_text(), model=settings.model)
        syllabus_source.save(syllabus)
        syllabus_ids.append(syllabus.document_id)
        console.print(f"Extracted {len(syllabus.topics)} topics from [yellow]{syllabus_file.name}[/yellow] ({syllabus.method})")

    try:
        request = StudyPlanRequest(
            user_id=args.user_id,
            goal_id=args.goal_id,
            syllabus_document_ids=syllabus_ids or None,
            custom_topics=args.topics,
        )
        plan = generate_and_store_plan(
            request,
            JsonFileRecordStore(settings.records_dir),
            syllabus_source=syllabus_source,
            settings=settings
        )
    except PlanNotFeasible as e:
        console.print(f"\n[red]✗ {e.message}[/red]")
        for suggestion in e.suggestions:
            console.print(f"  • {suggestion}")
        sys.exit(1)
    except ValidationError as e:
        console.print(f"\n[red]✗ Invalid plan request: {e.error_count()} error(s)[/red]")
        for error in e.errors():
            console.print(f"  • {'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}")
        sys.exit(1)
    except PlannerError as e:
        console.print(f"\n[red]✗ {e.message}[/red]")
        sys.exit(1)

    if args.json:
        console.print_json(json.dumps(plan.to_json_dict()))
        return

    total_hours = sum(session.total_hours for session in plan.daily_sessions)
    console.print(f"\n[bold green]Plan {plan.plan_id} created![/bold green]\n")

    table = Table(title="Study Plan Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta", justify="right")

    table.add_row("Days", str(plan.total_duration))
    table.add_row("Topics", str(len(plan.topic_sequence)))
    table.add_row("Scheduled hours", f"{total_hours:.1f}")
    table.add_row("Estimated completion", plan.estimated_completion.date().isoformat())
    table.add_row("Milestones", str(len(plan.milestones)))

    console.print(table)

    sessions = plan.daily_sessions if args.days <= 0 else plan.daily_sessions[:args.days]
    schedule = Table(title="Schedule")
    schedule.add_column("Day", justify="right")
    schedule.add_column("Date")
    schedule.add_column("Focus", style="yellow")
    schedule.add_column("Hours", justify="right")

    for session in sessions:
        schedule.add_row(str(session.day), session.date, session.focus_area, f"{session.total_hours:g}")

    console.print()
    console.print(schedule)
    if len(sessions) < len(plan.daily_sessions):
        console.print(f"  ... {len(plan.daily_sessions) - len(sessions)} more day(s), use --days 0 to show all")

    console.print("\n[bold]Milestones:[/bold]")
    for milestone in plan.milestones:
        console.print(f"  • Day {milestone.day}: {milestone.description} ({milestone.checkpoint_type})")


if __name__ == "__main__":
    main()
