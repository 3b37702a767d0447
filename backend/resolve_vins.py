#!/usr/bin/env python3
"""
Resolve VINs from the command line.

Usage:
    python resolve_vins.py --vin 1HGCM82633A004352
    python resolve_vins.py --file vins.csv
    python resolve_vins.py --file vins.csv --concurrency 3
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from vinlookup.services.batch import resolve_batch
from vinlookup.services.resolver import resolve_vin


async def run(vin: str | None, filepath: str | None, concurrency: int | None) -> int:
    if vin:
        outcome = await resolve_vin(vin)
        print(outcome.model_dump_json(indent=2))
        return 0 if outcome.status != "failure" else 1

    path = Path(filepath)
    if not path.exists():
        print(f"Error: file not found: {path}")
        return 1
    text = path.read_text(encoding="utf-8", errors="replace")
    result = await resolve_batch(text, concurrency=concurrency)
    print(result.model_dump_json(indent=2))
    if result.invalid_summary:
        print(result.invalid_summary, file=sys.stderr)
    return 0


def main():
    parser = argparse.ArgumentParser(description="Decode VINs and look up NHTSA recalls")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--vin", help="Single VIN: decode and look up recalls")
    group.add_argument("--file", help="CSV of VINs (comma and/or newline separated): decode only, first 50")
    parser.add_argument("--concurrency", type=int, default=None, help="Max decode requests in flight (bulk mode)")
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args.vin, args.file, args.concurrency)))


if __name__ == "__main__":
    main()
