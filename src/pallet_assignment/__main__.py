import argparse
import json
import logging
import sys
from dataclasses import replace
from importlib import metadata
from typing import List, Optional

from pallet_assignment.algorithms import PLACEMENT_RULES
from pallet_assignment.data import load_item_vpns, load_units_per_pallet
from pallet_assignment.plan_io import (
    get_plan_dir,
    list_plans,
    load_plan,
    load_shipments,
    plans_payload,
    save_plan,
)
from pallet_assignment.planner import Shipment, plan_shipments
from pallet_assignment.policy import load_policy

logger = logging.getLogger("pallet_assignment")


def _get_app_version() -> str:
    try:
        return metadata.version("pallet-assignment")
    except metadata.PackageNotFoundError:
        return "dev"


def apply_item_master(shipments: List[Shipment], items_path: str, location: Optional[str]) -> None:
    """Fill units per pallet and VPNs the shipments do not carry themselves."""
    upp = load_units_per_pallet(items_path, location)
    vpns = load_item_vpns(items_path)
    for shipment in shipments:
        for carton in shipment.cartons:
            key = str(carton.item_id)
            if carton.item_id not in shipment.units_per_pallet and key in upp:
                shipment.units_per_pallet[carton.item_id] = upp[key]
            if carton.item_id not in shipment.item_vpn and key in vpns:
                shipment.item_vpn[carton.item_id] = vpns[key]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pallet_assignment",
        description="Assign shipment cartons to mixed-item pallets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m pallet_assignment shipments.json
  python -m pallet_assignment shipments.json --items items.xml --location 3
  python -m pallet_assignment shipments.json --strategy best_fit --save week42
  python -m pallet_assignment --list
  python -m pallet_assignment --show week42
        """,
    )
    parser.add_argument("input", nargs="?", help="shipment JSON file")
    parser.add_argument("--items", help="item master XML with units per pallet")
    parser.add_argument("--location", help="location used to pick item master rows")
    parser.add_argument("--strategy", choices=sorted(PLACEMENT_RULES), help="placement rule")
    parser.add_argument("--settings", help="settings YAML file")
    parser.add_argument("--save", metavar="NAME", help="also save the plan under this name")
    saved = parser.add_mutually_exclusive_group()
    saved.add_argument("--list", action="store_true", help="list saved plans and exit")
    saved.add_argument("--show", metavar="NAME", help="print a saved plan and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_app_version()}")
    return parser


def _print_json(payload) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.input is None and not (args.list or args.show):
        parser.error("an input file is required unless --list or --show is given")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.list:
        for name in list_plans():
            sys.stdout.write(f"{name}\n")
        return 0
    if args.show:
        try:
            _print_json(load_plan(args.show))
        except FileNotFoundError:
            logger.error("No saved plan named %r in %s", args.show, get_plan_dir())
            return 1
        return 0

    try:
        policy = load_policy(args.settings)
        if args.strategy:
            policy = replace(policy, strategy=args.strategy)
        shipments = load_shipments(args.input)
        if args.items:
            apply_item_master(shipments, args.items, args.location)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1

    plans = plan_shipments(shipments, policy)
    payload = plans_payload(plans)
    if args.save:
        path = save_plan(args.save, payload)
        logger.info("Plan saved to %s", path)
    _print_json(payload)
    return 0 if len(plans) == len(shipments) else 2


if __name__ == "__main__":
    sys.exit(main())
