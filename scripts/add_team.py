#!/usr/bin/env python3
"""
Create (or overwrite) a team in the configured storage backend.

Usage:
  python scripts/add_team.py --name "Blue Jays" [--age-group 10U] [--season "Spring 2025"] [--id team-1] [--select]
"""
from __future__ import annotations

import argparse
import sys

from roster.core.config import get_settings
from roster.core.logging import configure_logging
from roster.domain.models import Team, new_id
from roster.services.storage_service import build_storage_service


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Create a team in the roster storage")
    ap.add_argument("--name", required=True, help="Team display name")
    ap.add_argument("--age-group", default="", help="Age group (ex.: 10U)")
    ap.add_argument("--season", default="", help="Season label (ex.: Spring 2025)")
    ap.add_argument("--id", help="Team id (default: random uuid)")
    ap.add_argument("--select", action="store_true", help="Also make it the current team")
    args = ap.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)
    storage = build_storage_service(settings)

    team_id = (args.id or "").strip() or new_id()
    if storage.team.get_team(team_id):
        print(f"Team '{team_id}' exists and will be overwritten")
    result = storage.team.save_team(Team(id=team_id, name=args.name, age_group=args.age_group, season=args.season))
    if not result:
        sys.stderr.write(f"Error: {result.error.value}: {result.message}\n")
        return 1
    if args.select:
        selected = storage.team.set_current_team_id(team_id)
        if not selected:
            sys.stderr.write(f"Error: {selected.error.value}: {selected.message}\n")
            return 1

    team = result.value
    print("OK: team saved")
    print(f"  ID: {team.id}")
    print(f"  Name: {team.full_name}")
    print(f"  Backend: {settings.storage_backend}")
    if args.select:
        print("  Selected as current team")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
