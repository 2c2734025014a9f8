#!/usr/bin/env python3
"""
langredirect/main.py - LangRedirect command line
Run:
  python -m langredirect.main resolve "https://example.org/#changelog" --language de-DE
  python -m langredirect.main build --out dist/index.html
  python -m langredirect.main audit dist/index.html
  python -m langredirect.main check --host example.org
  python -m langredirect.main matrix --host example.org
"""
import os
import sys
import time
import argparse

from langredirect.analytics.matrix_builder import OUT_PATH as MATRIX_PATH
from langredirect.analytics.matrix_builder import (
    build_resolution_matrix,
    summarize_destinations,
    write_resolution_matrix,
)
from langredirect.checker import REPORTS_DIR, locale_landing_urls, run_checker
from langredirect.context import RedirectContext
from langredirect.locales.loader import LocaleConfigError, load_tables
from langredirect.logger import get_logger, phase, timing
from langredirect.page import write_redirect_page
from langredirect.resolver import find_destination
from langredirect.validators.link_validator import check_destination
from langredirect.validators.page_auditor import audit_page

logger = get_logger("langredirect.main")

BASE_HOST = os.getenv("BASE_HOST", "localhost")
DEFAULT_PAGE = os.path.join("dist", "index.html")


def cmd_resolve(args, tables) -> int:
    ctx = RedirectContext.from_url(args.url, user_language=args.user_language, language=args.language)
    destination = find_destination(ctx, tables)
    print(destination)
    if args.verify:
        result = check_destination(destination)
        print(f"{result['status']} ({result['reason']})")
        return 0 if result["status"] in ("OK", "IGNORED_403") else 1
    return 0


def cmd_build(args, tables) -> int:
    write_redirect_page(args.out, tables, title=args.title)
    return 0


def cmd_audit(args, tables) -> int:
    try:
        result = audit_page(args.page, tables)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.page, e)
        return 1
    for code in result["missing"]:
        print(f"missing  {code}")
    for code in result["extra"]:
        print(f"extra    {code}")
    for code in result["duplicates"]:
        print(f"repeated {code}")
    print("OK" if result["ok"] else "MISMATCH")
    return 0 if result["ok"] else 1


def cmd_check(args, tables) -> int:
    phase(logger, f"destination check for {args.host}")
    urls = locale_landing_urls(args.host, tables)
    report_path, broken, _, _ = run_checker(urls, output_dir=args.output_dir, max_concurrency=args.max_concurrency)
    for r in broken:
        print(f"{r['status']:<8} {r['url']}  {r['reason']}")
    logger.info("Report -> %s", report_path)
    return 1 if broken else 0


def cmd_matrix(args, tables) -> int:
    df = build_resolution_matrix(args.host, tables)
    write_resolution_matrix(df, args.out)
    for _, row in summarize_destinations(df).head(args.top).iterrows():
        logger.info("%-9s %4d  %s", row["route"], row["pairs"], row["destination"])
    return 0


def parse_args(argv=None):
    config_help = "locales.json override (default: data/locales.json)"
    p = argparse.ArgumentParser(prog="langredirect", description="Locale redirect tooling")
    p.add_argument("--config", default=None, help=config_help)

    # also accepted after the subcommand; SUPPRESS leaves a top-level value in place
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=argparse.SUPPRESS, help=config_help)

    sub = p.add_subparsers(dest="command", required=True)

    r = sub.add_parser("resolve", parents=[common], help="print the destination for a landing URL")
    r.add_argument("url", help="landing page URL including ?lang= and #fragment")
    r.add_argument("--user-language", default=None, help="navigator.userLanguage")
    r.add_argument("--language", default=None, help="navigator.language")
    r.add_argument("--verify", action="store_true", help="also check that the destination responds")
    r.set_defaults(func=cmd_resolve)

    b = sub.add_parser("build", parents=[common], help="write the static redirect page")
    b.add_argument("--out", default=DEFAULT_PAGE)
    b.add_argument("--title", default="My Expenses")
    b.set_defaults(func=cmd_build)

    a = sub.add_parser("audit", parents=[common], help="compare a page's fallback links with the site locales")
    a.add_argument("page")
    a.set_defaults(func=cmd_audit)

    c = sub.add_parser("check", parents=[common], help="check every redirect destination is reachable")
    c.add_argument("--host", default=BASE_HOST)
    c.add_argument("--max-concurrency", type=int, default=None)
    c.add_argument("--output-dir", default=REPORTS_DIR)
    c.set_defaults(func=cmd_check)

    m = sub.add_parser("matrix", parents=[common], help="export fragment x locale -> destination as CSV")
    m.add_argument("--host", default=BASE_HOST)
    m.add_argument("--out", default=MATRIX_PATH)
    m.add_argument("--top", type=int, default=10)
    m.set_defaults(func=cmd_matrix)

    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    start = time.time()

    try:
        tables = load_tables(args.config)
    except LocaleConfigError as e:
        logger.error("Invalid locale tables: %s", e)
        return 2

    code = args.func(args, tables)
    timing(logger, args.command, start)
    return code


if __name__ == "__main__":
    sys.exit(main())
