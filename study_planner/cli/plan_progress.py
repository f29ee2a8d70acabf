"""CLI tool to log progress on a study plan and show where it stands."""
import argparse
import logging
import sys
from pathlib import Path
from rich.console import Console
from rich.table import Table
from dotenv import load_dotenv
from pydantic import ValidationError

from study_planner.config import PlannerSettings
from study_planner.errors import PlannerError
from study_planner.models.progress import ProgressUpdate
from study_planner.tools.plan_store import JsonFileRecordStore
from study_planner.tools.progress_tracker import get_plan_progress, record_topic_progress, update_plan_status


console = Console()


def main():
    load_dotenv()
    parser = argparse.ArgumentParser(
        description="Log topic progress, change plan status, and show plan progress"
    )
    parser.add_argument("--user-id", type=str, required=True, help="Learner ID")
    parser.add_argument("--plan-id", type=str, required=True, help="Plan ID from generate_plan")
    parser.add_argument("--topic-id", type=str, help="Topic to log progress for")
    parser.add_argument(
        "--status",
        choices=["not_started", "in_progress", "completed", "skipped"],
        help="New topic status (requires --topic-id)"
    )
    parser.add_argument("--hours", type=float, default=0.0, help="Hours spent in this entry")
    parser.add_argument("--notes", type=str, help="Note to append")
    parser.add_argument("--confidence", type=int, choices=range(1, 6), help="Self-rated confidence 1-5")
    parser.add_argument(
        "--set-status",
        choices=["active", "paused", "completed"],
        help="Pause, resume or complete the plan"
    )
    parser.add_argument(
        "--state-dir",
        type=Path,
        help="Override STUDY_PLANNER_STATE_DIR"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    if args.status and not args.topic_id:
        parser.error("--status requires --topic-id")

    settings = PlannerSettings()
    if args.state_dir:
        settings = settings.model_copy(update={"state_dir": args.state_dir})
    store = JsonFileRecordStore(settings.records_dir)

    try:
        if args.topic_id:
            update = ProgressUpdate(
                topic_id=args.topic_id,
                status=args.status or "in_progress",
                hours_spent=args.hours,
                notes=args.notes,
                confidence=args.confidence,
            )
            topic = record_topic_progress(store, args.user_id, args.plan_id, update)
            console.print(f"✓ [green]Logged[/green] {topic.topic_name}: {topic.status}, {topic.hours_spent:g}h")

        if args.set_status:
            plan = update_plan_status(store, args.user_id, args.plan_id, args.set_status)
            console.print(f"✓ [green]Plan status:[/green] {plan.status}")

        progress = get_plan_progress(store, args.user_id, args.plan_id)
    except ValidationError as e:
        console.print(f"\n[red]✗ Invalid progress update: {e.error_count()} error(s)[/red]")
        for error in e.errors():
            console.print(f"  • {'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}")
        sys.exit(1)
    except PlannerError as e:
        console.print(f"\n[red]✗ {e.message}[/red]")
        sys.exit(1)

    table = Table(title=f"Progress for {args.plan_id}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta", justify="right")

    table.add_row("Overall progress", f"{progress.overall_progress}%")
    table.add_row("Completed topics", f"{progress.completed_topics}/{progress.total_topics}")
    table.add_row("In progress", str(progress.in_progress_topics))
    table.add_row("Skipped", str(progress.skipped_topics))
    table.add_row("Hours spent", f"{progress.total_hours_spent:g} / {progress.total_hours_allocated:g}")
    table.add_row("Day", str(progress.current_day))
    table.add_row("Days remaining", str(progress.days_remaining))
    table.add_row("On track", "yes" if progress.on_track else "no")

    console.print(table)

    if progress.topic_progress:
        topics = Table(title="Topics")
        topics.add_column("Topic", style="yellow")
        topics.add_column("Status")
        topics.add_column("Hours", justify="right")
        topics.add_column("Confidence", justify="right")
        for topic in progress.topic_progress:
            topics.add_row(
                topic.topic_name,
                topic.status,
                f"{topic.hours_spent:g}/{topic.hours_allocated:g}",
                str(topic.confidence)
            )
        console.print(topics)


if __name__ == "__main__":
    main()
