"""Command-line interface for the campus planner."""

import argparse
import sys
from datetime import date, datetime, time, timedelta
from typing import Optional

from campusplanner.config import PlannerConfig, get_config
from campusplanner.domain.models import Activity, ActivityType, Group
from campusplanner.errors import ConfigurationError, PlannerError
from campusplanner.logging import setup_logging
from campusplanner.output.grid_generator import GridGenerator
from campusplanner.output.pdf_generator import PDFGenerator
from campusplanner.planner import CampusPlanner, OperationResult
from campusplanner.storage.json_store import JsonFileStore
from campusplanner.storage.memory import InMemoryStore


def create_sample_groups(
    count: int = 6,
    start: Optional[date] = None,
    campus_id: str = "UCD",
) -> list[Group]:
    """Create sample groups for the demo.

    Args:
        count: Number of groups to create.
        start: Arrival day of the first group. If None, next Monday is used.
        campus_id: Campus the groups are affiliated with.
    """
    if start is None:
        today = date.today()
        start = today + timedelta(days=7 - today.weekday())

    names = [
        "Madrid Juniors", "Lyon Lycée", "Milano Summer", "Berlin Gymnasium",
        "Porto Explorers", "Vienna Academy", "Krakow Scholars", "Sevilla Camp",
    ]
    clients = ["EuroLingua", "StudyAbroad SA", "Kids&Co", "Atlantic Tours"]

    groups = []
    for i in range(count):
        name = names[i % len(names)]
        if i >= len(names):
            name = f"{name} {i // len(names) + 1}"

        # Stagger arrivals over the first week, stays of 1 to 3 weeks
        arrival = start + timedelta(days=(i * 2) % 7)
        departure = arrival + timedelta(days=7 * (1 + i % 3))

        groups.append(
            Group(
                id=f"G{i + 1}",
                name=name,
                client=clients[i % len(clients)],
                student_count=15 + (i * 7) % 30,
                leader_count=2 + i % 3,
                arrival=datetime.combine(arrival, time(14, 0)),
                departure=datetime.combine(departure, time(10, 0)),
                campus_id=campus_id,
                arrival_airport="DUB",
                departure_airport="DUB",
            )
        )

    return groups


def create_sample_activities() -> list[Activity]:
    """Activities used by the demo."""
    return [
        Activity(id="a1", name="Orientation", type=ActivityType.HALF_DAY, location="Campus"),
        Activity(id="a2", name="City Walking Tour", type=ActivityType.HALF_DAY, location="Dublin"),
        Activity(id="a3", name="Trinity College", type=ActivityType.HALF_DAY, location="Dublin"),
        Activity(id="a4", name="Glendalough", type=ActivityType.FULL_DAY, location="Wicklow"),
        Activity(id="a5", name="Galway Day Trip", type=ActivityType.FULL_DAY, location="Galway"),
    ]


def _print_result(label: str, result: Optional[OperationResult]) -> bool:
    """Print an operation outcome. Returns True on success."""
    if result is None:
        print(f"  {label}: already in progress")
        return False

    print(f"  {label}: {len(result.written)} cells written")
    for diagnostic in result.diagnostics[:5]:
        print(f"    - {diagnostic}")
    if len(result.diagnostics) > 5:
        print(f"    ... and {len(result.diagnostics) - 5} more diagnostics")

    if not result.ok:
        print(f"  ERROR: {result.error}")
        return False
    return True


def _print_hours(planner: CampusPlanner) -> None:
    hours = planner.total_hours()
    print("\nTotal class hours:")
    for group in planner.sorted_groups:
        print(f"  {group.name:<24} {hours.get(group.id, 0):>4}")


def _print_validation(planner: CampusPlanner) -> bool:
    result = planner.validate()
    if result.is_valid:
        print("\n  Validation: PASSED")
    else:
        print(f"\n  Validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")
    for warning in result.warnings[:5]:
        print(f"    warning: {warning}")
    return result.is_valid


def run_demo(group_count: int = 6, output_path: Optional[str] = None) -> int:
    """Run a demo on an in-memory store."""
    print(f"Scheduling demo campus with {group_count} groups...")

    groups = create_sample_groups(group_count)
    store = InMemoryStore.from_models(groups, create_sample_activities())
    planner = CampusPlanner(store)
    if not planner.load("UCD"):
        print(f"  ERROR: {planner.error}")
        return 1

    print(f"  Loaded {len(planner.groups)} groups over {len(planner.date_range)} days")
    _print_result("Auto schedule", planner.auto_schedule())
    _print_result("Orientation", planner.assign_orientations())

    _print_hours(planner)
    _print_validation(planner)

    grid = GridGenerator(tz=planner.tz)
    print()
    print(grid.generate_to_string(
        planner.sorted_groups, planner.date_range, planner.schedule, planner.total_hours()
    ))

    if output_path:
        group = planner.sorted_groups[0]
        print(f"Generating PDF for {group.name}: {output_path}")
        PDFGenerator(tz=planner.tz).generate(
            group, planner.schedule, output_path, planner.total_hours()[group.id]
        )
        print("  PDF created successfully!")
    return 0


def open_planner(
    config: PlannerConfig,
    store_path: Optional[str],
    campus_id: str,
) -> CampusPlanner:
    """Load the planner of a campus from a JSON store.

    Raises:
        ConfigurationError: If the campus is not configured.
        StorageError: If the store file cannot be read or loaded.
    """
    campus_id = campus_id.upper()
    if campus_id not in config.campus_ids:
        raise ConfigurationError(
            f"Unknown campus {campus_id!r} (configured: {', '.join(config.campus_ids)})"
        )

    store = JsonFileStore(store_path or config.store_path)
    planner = CampusPlanner(store, config=config)
    if not planner.load(campus_id):
        raise PlannerError(planner.error)
    return planner


def run_auto_schedule(planner: CampusPlanner) -> int:
    print(f"Auto-scheduling {planner.campus_id} ({len(planner.groups)} groups)...")
    ok = _print_result("Auto schedule", planner.auto_schedule())
    return 0 if ok else 1


def run_assign_orientation(planner: CampusPlanner) -> int:
    print(f"Assigning orientations for {planner.campus_id}...")
    ok = _print_result("Orientation", planner.assign_orientations())
    return 0 if ok else 1


def run_hours(planner: CampusPlanner) -> int:
    _print_hours(planner)
    return 0


def run_grid(planner: CampusPlanner, output_path: Optional[str] = None) -> int:
    grid = GridGenerator(tz=planner.tz)
    groups = planner.sorted_groups
    hours = planner.total_hours()
    if output_path:
        grid.generate(groups, planner.date_range, planner.schedule, output_path, hours)
        print(f"Grid written to {output_path}")
    else:
        print(grid.generate_to_string(groups, planner.date_range, planner.schedule, hours))
    return 0


def run_print_group(planner: CampusPlanner, group_id: str, output_path: str) -> int:
    group = next((g for g in planner.groups if g.id == group_id), None)
    if group is None:
        print(f"ERROR: group {group_id!r} not found on campus {planner.campus_id}")
        return 1

    print(f"Generating PDF for {group.name}: {output_path}")
    PDFGenerator(tz=planner.tz).generate(
        group, planner.schedule, output_path, planner.total_hours()[group.id]
    )
    print("  PDF created successfully!")
    return 0


def run_validate(planner: CampusPlanner) -> int:
    for diagnostic in planner.diagnostics:
        print(f"  skipped: {diagnostic}")
    return 0 if _print_validation(planner) else 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Campus Planner - Class Scheduling for Student Groups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                              Run demo with 6 groups
  %(prog)s demo --count 10 --output g1.pdf   Demo with 10 groups and a PDF

  %(prog)s auto-schedule --campus UCD        Balance classes for UCD
  %(prog)s assign-orientation --campus UCD   Place orientation sessions
  %(prog)s hours --campus DCU                Total class hours per group
  %(prog)s grid --campus ATU -o grid.txt     Write the schedule grid
  %(prog)s print-group --campus UCD --group G1 -o g1.pdf
  %(prog)s validate --campus UCD             Audit the stored schedule
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demo on an in-memory store")
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=6,
        help="Number of groups to generate (default: 6)",
    )
    demo_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output PDF file path for the first group",
    )

    # Campus commands share the store and campus options
    campus_options = argparse.ArgumentParser(add_help=False)
    campus_options.add_argument(
        "--store", "-s",
        type=str,
        help="JSON store path (default: CAMPUS_PLANNER_STORE_PATH or data/planner.json)",
    )
    campus_options.add_argument(
        "--campus",
        type=str,
        required=True,
        help="Campus id, e.g. UCD",
    )

    subparsers.add_parser(
        "auto-schedule",
        parents=[campus_options],
        help="Balance Morning/Afternoon classes and save them",
    )
    subparsers.add_parser(
        "assign-orientation",
        parents=[campus_options],
        help="Write orientation on each group's first weekday",
    )
    subparsers.add_parser(
        "hours",
        parents=[campus_options],
        help="Show total class hours per group",
    )

    grid_parser = subparsers.add_parser(
        "grid",
        parents=[campus_options],
        help="Print the date x group schedule grid",
    )
    grid_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Write the grid to a file instead of stdout",
    )

    print_parser = subparsers.add_parser(
        "print-group",
        parents=[campus_options],
        help="Generate a printable PDF schedule for one group",
    )
    print_parser.add_argument(
        "--group", "-g",
        type=str,
        required=True,
        help="Group id",
    )
    print_parser.add_argument(
        "--output", "-o",
        type=str,
        required=True,
        help="Output PDF file path",
    )

    subparsers.add_parser(
        "validate",
        parents=[campus_options],
        help="Audit the stored schedule",
    )

    args = parser.parse_args(argv)

    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "demo":
        return run_demo(args.count, args.output)

    try:
        planner = open_planner(config, args.store, args.campus)
    except PlannerError as exc:
        print(f"ERROR: {exc}")
        return 2

    if args.command == "auto-schedule":
        return run_auto_schedule(planner)
    elif args.command == "assign-orientation":
        return run_assign_orientation(planner)
    elif args.command == "hours":
        return run_hours(planner)
    elif args.command == "grid":
        return run_grid(planner, args.output)
    elif args.command == "print-group":
        return run_print_group(planner, args.group, args.output)
    elif args.command == "validate":
        return run_validate(planner)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
