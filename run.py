# run.py
# Command line: python run.py --start "New York, NY" --dest "Miami, FL" --days 3

import argparse
import json
import logging
import random
import sys

from dotenv import load_dotenv

load_dotenv()  # ← .env is read once, at import

from rich import print
from rich.logging import RichHandler

from ai.gateway import create_gateway
from core.config import load_settings
from core.errors import TripPlannerError
from core.models import TripRequest
from services.display import booking_url, day_image, hop_label
from services.planner import plan_trip


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Plan a road trip with an LLM.")
    p.add_argument("--start", "--from", dest="start", required=True)
    p.add_argument("--dest", "--to", dest="dest", required=True)
    p.add_argument("--days", type=int, default=3)
    p.add_argument("--no-images", action="store_true",
                   help="skip the per-day image generation")
    p.add_argument("--seed", type=int, default=None,
                   help="seed for the fallback travel-time estimates")
    p.add_argument("--json", action="store_true", help="print the raw itinerary JSON")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def print_plan(plan) -> None:
    req = plan.request
    print(f"[bold green]{req.start_location} → {req.destination}[/] "
          f"({req.duration} days)\n")
    for d in plan.itinerary:
        print(f"[yellow]Day {d.day}[/]  {d.from_} → {d.to}")
        if d.travel_time:
            print(f"  Drive time : {d.travel_time}")
        for i, attraction in enumerate(d.attractions):
            print(f"  {i + 1}. {attraction}")
            label = hop_label(d, i)
            if label:
                print(f"     [dim]{label}[/]")
        print(f"  Overnight  : {d.overnight}")
        print(f"  Book hotel : {booking_url(d.overnight)}")
        if req.generate_images:
            print(f"  Image      : {day_image(d)}")
        print()
    for w in plan.warnings:
        print(f"[bold yellow]⚠ {w}[/]")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        req = TripRequest(
            start_location=args.start,
            destination=args.dest,
            duration=args.days,
            generate_images=not args.no_images,
        )
        gateway = create_gateway(load_settings(dotenv=False))
        if not args.json:
            print("[bold cyan]→ Planning itinerary…[/]")
        plan = plan_trip(gateway, req, rng=rng)
    except (TripPlannerError, ValueError) as e:
        print(f"[bold red]Error:[/] {e}")
        return 1

    if args.json:
        sys.stdout.write(json.dumps(plan.to_dict(), indent=2, ensure_ascii=False) + "\n")
    else:
        print_plan(plan)
    return 0


if __name__ == "__main__":
    sys.exit(main())
