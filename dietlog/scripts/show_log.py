#!/usr/bin/env python
"""Print the meal log dashboard and listing.

Usage:
    python -m dietlog.scripts.show_log --category dairy --sort oldest
    python -m dietlog.scripts.show_log --demo --symptoms with-symptoms

Exit codes:
    0 success
    1 store failure
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Sequence

import structlog

from dietlog.application.meal_log.view_cache import MealLogView
from dietlog.config import Settings, get_settings
from dietlog.domain.meal.filters import FilterCriteria, SymptomStatus
from dietlog.domain.meal.ports import IMealStore
from dietlog.domain.meal.presentation import count_label, date_range_label, describe_entry
from dietlog.domain.meal.sorting import SortKey
from dietlog.domain.shared.errors import StoreError
from dietlog.infrastructure.meal_api.api_client import MealApiClient
from dietlog.infrastructure.meal_api.in_memory_store import InMemoryMealStore
from dietlog.logging_config import configure_logging

logger = structlog.get_logger(__name__)

TRACKED_CATEGORIES = ("dairy", "red-meat")


def demo_records(now: datetime) -> list[dict[str, Any]]:
    """Sample store content, in the store's mixed category shapes."""
    return [
        {
            "id": "demo-1",
            "foodName": "Cheeseburger",
            "categories": ["Dairy", "Red-Meat"],
            "timestamp": (now - timedelta(minutes=45)).isoformat(),
            "symptom": "bloating",
            "severity": 6,
        },
        {
            "id": "demo-2",
            "foodName": "Oatmeal",
            "categories": "grains, fruit",
            "timestamp": (now - timedelta(hours=5)).isoformat(),
        },
        {
            "id": "demo-3",
            "foodName": "Latte",
            "categories": "dairy",
            "timestamp": (now - timedelta(days=2)).isoformat(),
            "symptom": "cramps",
            "severity": "3",
            "notes": "Oat milk was sold out",
        },
        {
            "id": "demo-4",
            "foodName": "Steak",
            "categories": "red-meat",
            "timestamp": (now - timedelta(days=10)).isoformat(),
        },
        {"id": "demo-5", "foodName": "", "timestamp": "not-a-date"},
    ]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the meal log")
    parser.add_argument("--start", type=date.fromisoformat, help="First day (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, help="Last day (YYYY-MM-DD)")
    parser.add_argument("--category", help="Only meals in this category")
    parser.add_argument(
        "--symptoms",
        choices=[status.value for status in SymptomStatus],
        default=SymptomStatus.ANY.value,
    )
    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SortKey.NEWEST.value,
    )
    parser.add_argument("--delete", metavar="ID", help="Delete a meal before listing")
    parser.add_argument("--demo", action="store_true", help="Use sample data instead of the API")
    return parser


def print_view(view: MealLogView, now: datetime) -> None:
    stats = view.stats
    print(f"Meals: {stats.total}  With symptoms: {stats.with_symptoms}  " f"No symptoms: {stats.without_symptoms}")
    print("  ".join(f"{tag}: {stats.count_for(tag)}" for tag in TRACKED_CATEGORIES))

    print("\nRecent entries")
    for record in view.recent():
        entry = describe_entry(record, now, view.tz)
        print(f"  {entry.title} ({entry.time_label}) {entry.category_label} | {entry.reaction_label}")

    print(f"\nLogs {date_range_label(view.criteria)} {count_label(len(view.derived_view))}")
    for record in view.derived_view:
        entry = describe_entry(record, now, view.tz, relative=False)
        marker = "!" if entry.warning else " "
        print(f" {marker} [{entry.id}] {entry.title} - {entry.time_label}")
        print(f"     {entry.category_label} | {entry.reaction_label}")
        if entry.notes:
            print(f"     Notes: {entry.notes}")


async def run(args: argparse.Namespace, store: IMealStore, settings: Settings) -> int:
    now = datetime.now(timezone.utc)
    view = MealLogView(store, tz=settings.timezone, recent_limit=settings.recent_limit)

    try:
        report = await view.refresh()
        if args.delete:
            await view.remove(args.delete)
    except StoreError as e:
        print(f"Error loading logs: {e}", file=sys.stderr)
        return 1

    if report.rejected_count:
        logger.warning("Some meals could not be shown", rejected=report.rejected_count)

    view.apply_filter_and_sort(
        FilterCriteria(
            start_date=args.start,
            end_date=args.end,
            category=args.category,
            symptom_status=args.symptoms,
        ),
        args.sort,
    )
    print_view(view, now)
    return 0


async def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    if args.demo:
        store = InMemoryMealStore(demo_records(datetime.now(timezone.utc)))
        return await run(args, store, settings)

    async with MealApiClient(
        settings.api_base_url,
        timeout_seconds=settings.timeout_seconds,
        max_retries=settings.max_retries,
    ) as client:
        return await run(args, client, settings)


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
