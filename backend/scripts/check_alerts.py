#!/usr/bin/env python3
"""
Run tee time checks once from the command line (same code path as the periodic job).
Run: cd backend && python scripts/check_alerts.py            # all active alerts
     cd backend && python scripts/check_alerts.py --id <id>  # one alert, active or paused
"""
import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from tee_alerts.config import settings
from tee_alerts.db.session import SessionLocal, init_db
from tee_alerts.scheduler.alert_check_job import run_due_checks
from tee_alerts.services.alert_store import AlertStore
from tee_alerts.services.check_service import run_guarded_check
from tee_alerts.services.check_status import CheckStatusBoard


async def _run(store: AlertStore, alert_id: str | None, max_concurrent: int) -> int:
    board = CheckStatusBoard()
    if alert_id:
        alert = store.get_request(alert_id)
        if alert is None:
            print(f"Alert not found: {alert_id}")
            return 1
        events = [await run_guarded_check(alert, store, board)]
    else:
        events = await run_due_checks(store, board, max_concurrent=max_concurrent)
    if not events:
        print("No active alerts to check.")
    for e in events:
        print(f"[{e.kind}] {e.request_id}: {e.message}")
    return 1 if any(e.kind == "error" for e in events) else 0


def main():
    parser = argparse.ArgumentParser(description="Check tee time alerts once.")
    parser.add_argument("--id", dest="alert_id", help="Check only this alert id")
    parser.add_argument("--max-concurrent", type=int, default=settings.max_concurrent_checks)
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if settings.openai_api_key:
        os.environ["OPENAI_API_KEY"] = settings.openai_api_key
    init_db()
    store = AlertStore(SessionLocal)
    sys.exit(asyncio.run(_run(store, args.alert_id, args.max_concurrent)))


if __name__ == "__main__":
    main()
