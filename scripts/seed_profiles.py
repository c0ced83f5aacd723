#!/usr/bin/env python3
"""
Load founder profiles from a JSON file into the database.

Usage:
    python scripts/seed_profiles.py --json data/profiles.json --db data/foundermatch.db

The file holds {"profiles": [{"user_id": 1, "founder_status": ..., ...}, ...]}.
"""

import argparse
import json
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from foundermatch.database import init_database, session_factory
from foundermatch.errors import ErrorKind, MatchingError
from foundermatch.logger import get_logger
from foundermatch.profiles import ProfileService
from foundermatch.schema import validate_profile


def seed(json_path: Path, db_path: Path, dry_run: bool = False) -> bool:
    """
    Create a profile for every entry in the JSON file.

    Args:
        json_path: Path to JSON file with a "profiles" list
        db_path: Path to SQLite database file
        dry_run: If True, only validate entries

    Returns:
        True if no entry failed with an unexpected error
    """
    print(f"Loading profiles from {json_path}...")
    with open(json_path) as f:
        data = json.load(f)

    entries = data.get("profiles", [])
    print(f"Found {len(entries)} profiles in file")

    if dry_run:
        print("\n[DRY RUN] Validation results:")
        for entry in entries:
            payload = dict(entry)
            user_id = payload.pop("user_id", None)
            errors = validate_profile(payload)
            status = "ok" if errors == [] and user_id is not None else "invalid"
            print(f"  user {user_id}: {status}")
            for e in errors:
                print(f"     - {e}")
        return True

    print(f"\nInitializing database at {db_path}...")
    init_database(db_path)
    service = ProfileService(session_factory(db_path), logger=get_logger(enable_file=False))

    created = skipped = failed = 0

    for entry in entries:
        payload = dict(entry)
        user_id = payload.pop("user_id", None)
        if not isinstance(user_id, int):
            print(f"⚠️  Skipping entry without integer user_id: {user_id!r}")
            skipped += 1
            continue

        try:
            service.create(user_id, payload)
            created += 1
        except MatchingError as e:
            if e.kind in (ErrorKind.CONFLICT, ErrorKind.VALIDATION):
                print(f"⚠️  Skipping user {user_id}: {e.message}")
                for detail in e.details:
                    print(f"     - {detail}")
                skipped += 1
            else:
                print(f"❌ Error seeding user {user_id}: {e.message}")
                failed += 1

    print(f"\n✅ Seeding complete!")
    print(f"   Created: {created}")
    print(f"   Skipped: {skipped}")
    print(f"   Errors:  {failed}")
    return failed == 0


def main():
    parser = argparse.ArgumentParser(description="Seed founder profiles from JSON")
    parser.add_argument("--json", type=Path, default=Path("data/profiles.json"),
                       help="Path to profiles JSON file")
    parser.add_argument("--db", type=Path, default=Path("data/foundermatch.db"),
                       help="Path to SQLite database file")
    parser.add_argument("--dry-run", action="store_true",
                       help="Validate entries without writing")

    args = parser.parse_args()

    if not args.json.exists():
        print(f"❌ JSON file not found: {args.json}")
        sys.exit(1)

    success = seed(args.json, args.db, dry_run=args.dry_run)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
