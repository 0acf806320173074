from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import PROJECT_NAME, PROJECT_VERSION, load_settings
from .explain.quotes import random_quote
from .explain.report_generator import generate_report
from .planner.catalog import load_catalog_from_json
from .planner.generator import DEFAULT_PLAN_NAME, generate_farm_plan
from .planner.ids import random_id_factory
from .schemas.inputs import LABOR_TYPES, WATER_SOURCES, FarmGoal, FarmResources

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Generates a farm plan from a goal and the available resources.")
    p.add_argument("--income", type=float, required=True, help="Target income (USD)")
    p.add_argument("--timeframe", type=int, required=True, help="Timeframe in months")
    p.add_argument("--land", type=float, required=True, help="Land size in acres")
    p.add_argument("--budget", type=float, required=True, help="Available budget (USD)")
    p.add_argument("--water", type=str, choices=WATER_SOURCES, default="rain-fed")
    p.add_argument("--labor", type=str, choices=LABOR_TYPES, default="family")
    p.add_argument("--name", type=str, default=DEFAULT_PLAN_NAME)
    p.add_argument("--catalog", type=str, default=None, help="Optional path to a catalog JSON")
    p.add_argument("--settings", type=str, default=None, help="Optional path to a planner settings JSON")
    p.add_argument("--seed", type=int, default=None, help="Seed for plan/task ids and the quote")
    p.add_argument("--lenient", action="store_true", help="Skip unknown catalog ids instead of failing")
    p.add_argument("--json", action="store_true", help="Print the plan as JSON instead of the report")
    p.add_argument("--plot", type=str, default=None, help="Directory for land-use and financial charts")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(Path(args.settings) if args.settings else None)
        if args.lenient:
            settings = replace(settings, strict_catalog=False)
        catalog = load_catalog_from_json(Path(args.catalog)) if args.catalog else load_catalog_from_json()

        plan = generate_farm_plan(
            args.name,
            FarmGoal(target_income=args.income, timeframe=args.timeframe, land_size=args.land),
            FarmResources(budget=args.budget, water_source=args.water, labor_type=args.labor),
            catalog,
            id_factory=random_id_factory(args.seed),
            settings=settings,
        )
    except FileNotFoundError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"❌ Invalid input: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(plan.to_dict(), ensure_ascii=False, indent=2))
    else:
        quote = random_quote(random.Random(args.seed))
        print(
            generate_report(
                PROJECT_NAME,
                PROJECT_VERSION,
                plan,
                catalog,
                quote=quote,
                weeks_per_month=settings.weeks_per_month,
            )
        )

    if args.plot:
        # imported here so report-only runs do not load matplotlib
        from .visualization import plot_financials, plot_land_use

        out_dir = Path(args.plot)
        plot_land_use(plan, catalog, show=False, save_path=str(out_dir / f"{plan.plan_id}_land_use.png"))
        plot_financials(plan, show=False, save_path=str(out_dir / f"{plan.plan_id}_financials.png"))
        logger.info("Charts saved to %s", out_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
