"""Quick smoke check for the configured Apps Script endpoint.

Run with `python scripts/check_endpoint.py` to fetch the dashboard payload
(or the sample dataset when APPS_SCRIPT_URL is unset) and print a summary.
The package must be installed first (`pip install -e .`): only `scripts/`
lands on sys.path, not the repository root.
"""

from __future__ import annotations

import logging

from indicator_dashboard.bootstrap_env import ensure_env
from indicator_dashboard.config import Settings
from indicator_dashboard.data.client import RemoteDataClient, build_payload_summary
from indicator_dashboard.data.errors import RemoteError
from indicator_dashboard.data.loader import dedupe_dashboard
from indicator_dashboard.data.models import indicators_of
from indicator_dashboard.data.sample import load_sample_dashboard
from indicator_dashboard.data.summation import should_sum
from indicator_dashboard.logging_setup import configure_logging

logger = logging.getLogger("check_endpoint")


def main() -> None:
    ensure_env()
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if settings.has_endpoint:
        client = RemoteDataClient(timeout=settings.request_timeout)
        try:
            data = client.fetch_dashboard(settings.apps_script_url)
        except RemoteError as exc:
            raise SystemExit(f"Endpoint check failed: {exc}")
        source = "Apps Script"
    else:
        logger.warning("APPS_SCRIPT_URL not set; checking the sample dataset instead")
        data = load_sample_dashboard()
        source = "sample"

    raw_summary = build_payload_summary(data)
    deduped = dedupe_dashboard(data)
    summary = build_payload_summary(deduped)
    summed = [indicator.name for indicator in indicators_of(deduped.sectors) if should_sum(indicator.original_id)]

    print(f"Source: {source}")
    print(f"Title: {data.title} | last updated {data.last_updated.isoformat()}")
    print(f"Sectors: {summary['sectors']} (raw {raw_summary['sectors']})")
    print(f"Indicators: {summary['indicators']} (raw {raw_summary['indicators']})")
    print(f"Summed aggregates: {', '.join(summed) or 'none'}")


if __name__ == "__main__":
    main()
