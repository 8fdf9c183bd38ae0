import argparse
import json
import os
import uuid as _uuid

from config.settings import get_settings
from db import schema
from db.connection import get_connection
from db.repos.talents_repo import TalentsRepo
from pipelines.runner import Pipeline, RunContext
from pipelines.steps.bootstrap_store import BootstrapStore
from pipelines.steps.scrape_talents import ScrapeTalents
from services.local_api_client import LocalApiTalentSink
from services.reporting import print_summary
from sources.registry import DEFAULT_SOURCE, get_source
from utils.logging_setup import init_logging
import sources  # noqa: F401 ensure registration


def cmd_bootstrap(args):
    conn = get_connection(args.db)
    try:
        schema.bootstrap(conn)
    finally:
        conn.close()
    print("Schema ready")


def cmd_scrape(args):
    settings = get_settings()
    if not os.getenv("RUN_ID"):
        os.environ["RUN_ID"] = _uuid.uuid4().hex

    start_page = settings.start_page if args.start_page is None else args.start_page
    end_page = settings.end_page if args.end_page is None else args.end_page
    source = get_source(args.source)

    steps = []
    conn = None
    if args.via_api:
        sink = LocalApiTalentSink(url=args.api_url)
    else:
        conn = get_connection(args.db)
        steps.append(BootstrapStore(conn))
        sink = TalentsRepo(conn)

    def _progress(cur, total, talent_id, name):
        print(f"[{cur}/{total}] Scraping talent_id={talent_id} name={name}")

    steps.append(
        ScrapeTalents(
            source,
            sink,
            delay_ms=args.delay_ms,
            empty_page_policy=args.empty_page_policy,
            on_progress=_progress if args.progress else None,
        )
    )
    ctx = RunContext(start_page=start_page, end_page=end_page, location=args.location, run_id=os.environ["RUN_ID"])
    try:
        ctx = Pipeline(steps).run(ctx)
    finally:
        if conn is not None:
            conn.close()

    usage = source.get_api_usage() if hasattr(source, "get_api_usage") else None
    print_summary(ctx.totals, start_page, end_page, usage)
    print(json.dumps(ctx.totals.as_dict()))


def cmd_report_talents(args):
    conn = get_connection(args.db)
    schema.bootstrap(conn)
    try:
        listing = TalentsRepo(conn).list_talents(page=args.page, limit=args.limit, search=args.search, role=args.role)
    finally:
        conn.close()
    print(json.dumps(listing.to_response(), indent=2, ensure_ascii=False))


def cmd_report_talent(args):
    conn = get_connection(args.db)
    schema.bootstrap(conn)
    try:
        doc = TalentsRepo(conn).get(args.id)
    finally:
        conn.close()
    if not doc:
        print("No record found for talent")
        return
    print(json.dumps(doc, indent=2, ensure_ascii=False))


def cmd_serve(args):
    import uvicorn

    # The API opens its own connections from settings.db_path
    os.environ["DB_PATH"] = args.db
    get_settings.cache_clear()
    uvicorn.run("api.app:app", host=args.host, port=args.port, log_level=get_settings().log_level.lower())


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="Talent scraper CLI")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create the talents table and indexes")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_scr = sub.add_parser("scrape", help="Scrape talent pages into the store")
    p_scr.add_argument("--start-page", type=int, default=None, help=f"First page (default: {settings.start_page})")
    p_scr.add_argument("--end-page", type=int, default=None, help=f"Last page, inclusive (default: {settings.end_page})")
    p_scr.add_argument("--delay-ms", type=int, default=None, help=f"Pause after each talent and page (default: {settings.delay_ms})")
    p_scr.add_argument("--location", default=None, help=f"Location filter (default: {settings.talent_location})")
    p_scr.add_argument("--source", "-s", default=DEFAULT_SOURCE, help="Registered source name")
    p_scr.add_argument("--empty-page-policy", choices=["continue", "stop"], default=None, help="What an empty results page does")
    p_scr.add_argument("--via-api", action="store_true", help="Save through PUT on the local API instead of writing the DB")
    p_scr.add_argument("--api-url", default=None, help=f"Local API URL for --via-api (default: {settings.local_api_url})")
    p_scr.add_argument("--progress", action="store_true", help="Print progress for each talent")
    p_scr.set_defaults(func=cmd_scrape)

    p_rt = sub.add_parser("report-talents", help="List stored talents with search and role filters")
    p_rt.add_argument("--page", type=int, default=1)
    p_rt.add_argument("--limit", type=int, default=20)
    p_rt.add_argument("--search", default="", help="Case-insensitive match on name/title/headline/location")
    p_rt.add_argument("--role", default="", help="Exact role name")
    p_rt.set_defaults(func=cmd_report_talents)

    p_one = sub.add_parser("report-talent", help="Show one stored talent document")
    p_one.add_argument("--id", type=int, required=True, help="Talent id")
    p_one.set_defaults(func=cmd_report_talent)

    p_srv = sub.add_parser("serve", help="Run the local talent API")
    p_srv.add_argument("--host", default=settings.api_host)
    p_srv.add_argument("--port", type=int, default=settings.api_port)
    p_srv.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
