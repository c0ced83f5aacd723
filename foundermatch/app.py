import argparse
import json
import sys
from pathlib import Path

from . import __version__
from . import env
from .database import MatchStatus, init_database, session_factory
from .errors import ErrorKind, MatchingError
from .logger import get_logger
from .matches import MatchService
from .profiles import ProfileService
from .schema import validate_profile

EXIT_CODES = {
    ErrorKind.OPERATIONAL: 1,
    ErrorKind.VALIDATION: 2,
    ErrorKind.PRECONDITION: 2,
    ErrorKind.NOT_FOUND: 3,
    ErrorKind.FORBIDDEN: 4,
    ErrorKind.CONFLICT: 5,
}


def _read_json(path_str: str) -> dict:
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _print(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _db(args: argparse.Namespace) -> Path:
    db_path = Path(args.db) if args.db else env.db_path()
    init_database(db_path)
    return db_path


def _profiles(args: argparse.Namespace) -> ProfileService:
    return ProfileService(session_factory(_db(args)))


def _matches(args: argparse.Namespace) -> MatchService:
    return MatchService(session_factory(_db(args)))


def cmd_init_db(args: argparse.Namespace) -> None:
    db_path = _db(args)
    print(f"Database ready: {db_path}")


def cmd_validate(args: argparse.Namespace) -> None:
    errors = validate_profile(_read_json(args.input))
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_create_profile(args: argparse.Namespace) -> None:
    _print(_profiles(args).create(args.user, _read_json(args.input)))


def cmd_show_profile(args: argparse.Namespace) -> None:
    _print(_profiles(args).get(args.user))


def cmd_delete_profile(args: argparse.Namespace) -> None:
    _profiles(args).remove(args.user)
    print(f"Profile removed for user {args.user}")


def cmd_generate(args: argparse.Namespace) -> None:
    service = _matches(args)
    results = service.generate_matches(args.user)
    if not results:
        print("No matches above threshold.")
        return
    print(f"Found {len(results)} matches:\n")
    for match in results:
        _print_match_line(match)
    service.logger.log_metrics_summary()


def cmd_list(args: argparse.Namespace) -> None:
    results = _matches(args).get_matches(args.user)
    if not results:
        print("No matches yet. Run 'generate' first.")
        return
    for match in results:
        _print_match_line(match)


def cmd_show(args: argparse.Namespace) -> None:
    _print(_matches(args).get_match(args.id, args.user))


def cmd_status(args: argparse.Namespace) -> None:
    match = _matches(args).update_match_status(args.id, args.user, args.status)
    print(f"Match {match['id']}: {match['status']}")


def _print_match_line(match: dict) -> None:
    details = match["matched_founder_details"]
    print(
        f"[{match['status']}] #{match['id']} "
        f"score={match['overall_score']:.2f} "
        f"profile={match['matched_founder_id']} "
        f"({details['founder_status']}, {details['industry']}, {details['location']})"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="foundermatch", description="Co-founder matching CLI")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", help="Path to SQLite database (default: $FOUNDERMATCH_DB or data/foundermatch.db)")

    subparsers = parser.add_subparsers(dest="command")

    ini = subparsers.add_parser("init-db", help="Create the database and tables")
    ini.set_defaults(func=cmd_init_db)

    val = subparsers.add_parser("validate", help="Validate a profile JSON against the vocabularies")
    val.add_argument("--input", required=True, help="Path to profile JSON input")
    val.set_defaults(func=cmd_validate)

    crp = subparsers.add_parser("create-profile", help="Create the profile of record for a user")
    crp.add_argument("--user", type=int, required=True, help="Authenticated user id")
    crp.add_argument("--input", required=True, help="Path to profile JSON input")
    crp.set_defaults(func=cmd_create_profile)

    shp = subparsers.add_parser("show-profile", help="Show a user's profile")
    shp.add_argument("--user", type=int, required=True, help="Authenticated user id")
    shp.set_defaults(func=cmd_show_profile)

    dlp = subparsers.add_parser("delete-profile", help="Delete a user's profile and its matches")
    dlp.add_argument("--user", type=int, required=True, help="Authenticated user id")
    dlp.set_defaults(func=cmd_delete_profile)

    gen = subparsers.add_parser("generate", help="Score the user against everyone and store matches")
    gen.add_argument("--user", type=int, required=True, help="Authenticated user id")
    gen.set_defaults(func=cmd_generate)

    lst = subparsers.add_parser("list", help="List the user's matches, best first")
    lst.add_argument("--user", type=int, required=True, help="Authenticated user id")
    lst.set_defaults(func=cmd_list)

    shw = subparsers.add_parser("show", help="Show one match")
    shw.add_argument("--user", type=int, required=True, help="Authenticated user id")
    shw.add_argument("--id", type=int, required=True, help="Match id")
    shw.set_defaults(func=cmd_show)

    sts = subparsers.add_parser("status", help="Accept or reject a match")
    sts.add_argument("--user", type=int, required=True, help="Authenticated user id")
    sts.add_argument("--id", type=int, required=True, help="Match id")
    sts.add_argument("--status", required=True, choices=[s.value for s in MatchStatus], help="New status")
    sts.set_defaults(func=cmd_status)

    return parser


def main(argv=None):
    # Load .env if present (FOUNDERMATCH_DB, FOUNDERMATCH_LOG_LEVEL, ...)
    env.load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    get_logger(level=env.log_level(), log_dir=env.log_dir())
    try:
        args.func(args)
    except MatchingError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        for detail in e.details:
            print(f" - {detail}", file=sys.stderr)
        raise SystemExit(EXIT_CODES[e.kind])


if __name__ == "__main__":
    main()
