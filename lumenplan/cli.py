from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from lumenplan.config import Settings, load_settings
from lumenplan.core.logging import setup_logging
from lumenplan.database.catalog import default_catalog
from lumenplan.export.pdf_report import build_calculation_pdf
from lumenplan.models.room import ContaminationLevel, LightingRequirements, RoomDimensions
from lumenplan.project.presets import (
    CONTAMINATION_DESCRIPTIONS,
    ROOM_TYPES,
    default_requirements,
    default_room,
    recommended_illuminance,
)
from lumenplan.project.validator import LightingInputError
from lumenplan.results.store import CalculationStore, write_grid_csv
from lumenplan.runner import compute_lighting


def _store(settings: Settings, args: argparse.Namespace) -> CalculationStore:
    path = Path(args.store).expanduser() if getattr(args, "store", None) else settings.calculations_path
    return CalculationStore(path)


def _print_results(computation) -> None:
    res = computation.results
    lay = res.layout
    dist = res.illuminance_distribution
    energy = res.energy_metrics
    print("Lumenplan")
    print(f"  Room cavity ratio: {res.room_cavity_ratio:.2f}")
    print(f"  Coefficient of utilization: {res.coefficient_of_utilization:.3f}")
    print(f"  Maintenance factor: {res.maintenance_factor:.2f}")
    print(f"  Fixtures: {res.number_of_lamps} ({lay.rows} rows x {lay.columns} columns)")
    print(f"  Spacing: {lay.length_spacing:.2f} m x {lay.width_spacing:.2f} m")
    print(
        f"  Illuminance: avg {dist.average:.2f} lx, min {dist.minimum:.2f} lx, "
        f"max {dist.maximum:.2f} lx, uniformity {dist.uniformity:.2f}"
    )
    label = f" [{energy.fixture_label}]" if energy.fixture_label else ""
    print(
        f"  Energy: {energy.total_power:.2f} W, {energy.power_density:.2f} W/m², "
        f"{energy.efficiency_rating}{label}"
    )
    print("  Bill of materials:")
    for item in res.bill_of_materials:
        print(f"    {item.name}: {item.quantity:g} {item.unit}")


def _cmd_compute(args: argparse.Namespace, settings: Settings) -> int:
    catalog = default_catalog()
    try:
        fixture = None
        flux = args.flux
        if args.fixture:
            fixture = catalog.get(args.fixture)
            if fixture is None:
                print(f"[ERROR] Unknown fixture: {args.fixture}", file=sys.stderr)
                print("        Run `lumenplan catalog` to list fixture keys.", file=sys.stderr)
                return 2
            flux = fixture.flux_lm

        target = args.lux
        if args.room_type:
            try:
                target = recommended_illuminance(args.room_type)
            except ValueError as e:
                print(f"[ERROR] {e}", file=sys.stderr)
                return 2

        room = RoomDimensions(
            length=args.length,
            width=args.width,
            height=args.height,
            workplane_height=args.workplane,
        )
        requirements = LightingRequirements(
            target_illuminance=target,
            flux_per_lamp=flux,
            contamination_level=args.contamination,
            maintenance_interval=args.interval,
            ceiling_reflectance=args.ceiling_reflectance,
            wall_reflectance=args.wall_reflectance,
        )

        try:
            computation = compute_lighting(
                room,
                requirements,
                catalog=catalog,
                fixture=fixture,
                grid_size=settings.grid_size,
                mount_clearance=settings.mount_clearance_m,
                fallback_efficacy=settings.fallback_efficacy_lm_per_w,
            )
        except LightingInputError as e:
            print("[ERROR] Invalid input:", file=sys.stderr)
            for msg in e.errors:
                print(f"        {msg}", file=sys.stderr)
            return 2
    finally:
        catalog.close()

    if args.json:
        print(json.dumps(computation.to_dict(), indent=2, sort_keys=True))
    else:
        _print_results(computation)

    if args.grid_csv:
        path = write_grid_csv(Path(args.grid_csv).expanduser(), list(computation.illuminance_grid))
        print(f"  Saved: {path}", file=sys.stderr if args.json else sys.stdout)
    if args.pdf:
        paths = build_calculation_pdf(computation, room, requirements, Path(args.pdf), name=args.save)
        print(f"  Saved: {paths.pdf_path}", file=sys.stderr if args.json else sys.stdout)
    if args.save:
        if not args.user:
            print("[ERROR] --save requires --user", file=sys.stderr)
            return 2
        record = _store(settings, args).create(args.user, args.save, room, requirements, computation.results)
        print(f"  Saved calculation: {record.id}", file=sys.stderr if args.json else sys.stdout)
    return 0


def _cmd_catalog(args: argparse.Namespace, settings: Settings) -> int:
    catalog = default_catalog()
    try:
        records = catalog.search(fixture_type=args.type) if args.type else catalog.list_all()
    finally:
        catalog.close()
    for r in records:
        print(f"{r.key:<22} {r.label:<24} {r.flux_lm:>7g} lm {r.wattage_w:>6g} W {r.efficacy:>6.1f} lm/W")
    return 0


def _cmd_presets(args: argparse.Namespace, settings: Settings) -> int:
    print("Room types:")
    for preset in ROOM_TYPES:
        print(f"  {preset.key:<12} {preset.label:<18} {preset.recommended_lux:g} lx")
    print("Contamination levels:")
    for level, desc in CONTAMINATION_DESCRIPTIONS.items():
        print(f"  {level.value:<12} {desc}")
    return 0


def _cmd_calculations(args: argparse.Namespace, settings: Settings) -> int:
    store = _store(settings, args)
    if args.action == "list":
        records = store.list_by_user(args.user) if args.user else store.list_all()
        if not records:
            print("No saved calculations.")
            return 0
        for rec in records:
            res = rec.results
            print(
                f"{rec.id}  {rec.name}  {rec.created_at}  "
                f"{res.number_of_lamps} fixtures, {res.illuminance_distribution.average:.1f} lx"
            )
        return 0
    if args.action == "delete":
        if not args.id:
            print("[ERROR] delete requires a calculation id", file=sys.stderr)
            return 2
        try:
            store.delete(args.id, user_id=args.user)
        except KeyError:
            print(f"[ERROR] Calculation not found: {args.id}", file=sys.stderr)
            return 3
        except PermissionError as e:
            print(f"[ERROR] {e}", file=sys.stderr)
            return 4
        print(f"Deleted calculation: {args.id}")
        return 0
    return 2


def build_parser() -> argparse.ArgumentParser:
    room = default_room()
    req = default_requirements()

    p = argparse.ArgumentParser(prog="lumenplan", description="Lumen-method lighting layout calculator")
    p.add_argument("--settings", default=None, help="Path to a JSON settings file")
    p.add_argument("--log-level", default=None, help="Override the configured log level")
    p.add_argument("--log-file", default=None, help="Also write logs to this file")
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("compute", help="Compute fixture count, layout and energy metrics for a room")
    c.add_argument("--length", type=float, default=room.length, help="Room length (m)")
    c.add_argument("--width", type=float, default=room.width, help="Room width (m)")
    c.add_argument("--height", type=float, default=room.height, help="Room height (m)")
    c.add_argument("--workplane", type=float, default=room.workplane_height, help="Workplane height (m)")
    lux_group = c.add_mutually_exclusive_group()
    lux_group.add_argument("--lux", type=float, default=req.target_illuminance, help="Target illuminance (lx)")
    lux_group.add_argument("--room-type", default=None, help="Use the recommended illuminance of a room type")
    c.add_argument("--flux", type=float, default=req.flux_per_lamp, help="Flux per lamp (lm)")
    c.add_argument("--fixture", default=None, help="Catalog fixture key; overrides --flux")
    c.add_argument(
        "--contamination",
        default=req.contamination_level.value,
        choices=[level.value for level in ContaminationLevel],
    )
    c.add_argument("--interval", type=int, default=req.maintenance_interval, help="Maintenance interval (years, 1-6)")
    c.add_argument("--ceiling-reflectance", type=float, default=req.ceiling_reflectance)
    c.add_argument("--wall-reflectance", type=float, default=req.wall_reflectance)
    c.add_argument("--json", action="store_true", help="Print the full result as JSON")
    c.add_argument("--grid-csv", default=None, help="Write the illuminance grid to CSV")
    c.add_argument("--pdf", default=None, help="Write a PDF report")
    c.add_argument("--save", default=None, help="Save the calculation under this name")
    c.add_argument("--user", default=None, help="Owner id for --save")
    c.add_argument("--store", default=None, help="Calculations JSON file (default: data dir)")
    c.set_defaults(func=_cmd_compute)

    cat = sub.add_parser("catalog", help="List catalog fixtures")
    cat.add_argument("--type", default=None, help="Filter by fixture type (LED, Fluorescent, ...)")
    cat.set_defaults(func=_cmd_catalog)

    pr = sub.add_parser("presets", help="List room types and contamination levels")
    pr.set_defaults(func=_cmd_presets)

    calc = sub.add_parser("calculations", help="List or delete saved calculations")
    calc.add_argument("action", choices=["list", "delete"])
    calc.add_argument("id", nargs="?", default=None)
    calc.add_argument("--user", default=None)
    calc.add_argument("--store", default=None, help="Calculations JSON file (default: data dir)")
    calc.set_defaults(func=_cmd_calculations)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(args.settings)
        setup_logging(args.log_level or settings.log_level, log_file=args.log_file)
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    return int(args.func(args, settings))


if __name__ == "__main__":
    raise SystemExit(main())
