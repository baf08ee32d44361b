"""
AirAlert — Polling Loop Entry Point

Every poll interval:
    1. Fetch the station feed from WAQI
    2. Classify the AQI into a severity tier
    3. Push a Bark notification for any tier above GOOD
    4. Wait for the next interval (or a shutdown signal)

A failed fetch is logged as "AQI unknown" and skipped; it is never treated
as good air. SIGINT/SIGTERM set the stop event and the loop exits after the
current cycle.

Run:  python -m airalert.main [--once] [--interval SECONDS]
"""

import argparse
import dataclasses
import logging
import signal
import sys
import threading
from typing import List, Optional

from airalert.classification.classifier import SeverityTier, classify
from airalert.config import ConfigError, Settings, load_env, load_settings, resolve_log_level
from airalert.ingestion.waqi_connector import WAQIClient
from airalert.notify.bark_notifier import BarkNotifier
from airalert.rules.alert_rules import build_alert

LOG_FORMAT = "%(asctime)s [AIRALERT] %(levelname)s %(name)s — %(message)s"

logger = logging.getLogger("airalert.main")


def run_cycle(client: WAQIClient, notifier: BarkNotifier) -> Optional[SeverityTier]:
    """
    Run one fetch → classify → notify pass.

    Returns:
        The tier that was acted on, or None when the AQI could not be fetched.
    """
    snapshot = client.fetch()
    if snapshot is None:
        logger.warning("AQI unknown this cycle — fetch failed, no classification")
        return None

    tier = classify(snapshot.aqi)
    alert = build_alert(tier, snapshot.aqi)
    if alert is None:
        logger.info("Air quality normal: AQI=%d tier=%d (%s)", snapshot.aqi, tier, tier.label)
        return tier

    logger.warning("Air quality alert: AQI=%d tier=%d (%s)", snapshot.aqi, tier, tier.label)
    notifier.notify(alert.title, alert.body)
    return tier


def run(
    settings: Settings,
    stop_event: Optional[threading.Event] = None,
    client: Optional[WAQIClient] = None,
    notifier: Optional[BarkNotifier] = None,
    max_cycles: Optional[int] = None,
) -> int:
    """
    Poll until stop_event is set or max_cycles have run.

    Clients passed in are left open; clients created here are closed on exit.

    Returns:
        Number of cycles executed.
    """
    if stop_event is None:
        stop_event = threading.Event()

    owned = []
    if client is None:
        client = WAQIClient(settings)
        owned.append(client)
    if notifier is None:
        notifier = BarkNotifier(settings)
        owned.append(notifier)

    cycles = 0
    try:
        while not stop_event.is_set():
            try:
                run_cycle(client, notifier)
            except Exception as exc:
                logger.error("Check failed: %s", exc)
            cycles += 1

            if max_cycles is not None and cycles >= max_cycles:
                break
            if stop_event.wait(settings.poll_interval):
                break
            logger.info("Starting next check")
    finally:
        for resource in owned:
            resource.close()

    logger.info("Stopped after %d check(s)", cycles)
    return cycles


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="airalert",
        description="Poll a WAQI station and push Bark alerts when air quality degrades.",
    )
    parser.add_argument("--once", action="store_true", help="run a single check and exit")
    parser.add_argument(
        "--interval", type=int, metavar="SECONDS",
        help="seconds between checks (overrides POLL_INTERVAL_SECONDS)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    load_env()

    try:
        level = resolve_log_level()
        level_error = None
    except ConfigError as exc:
        level, level_error = logging.INFO, exc

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stdout,
    )
    if level_error is not None:
        logger.error("Configuration error: %s", level_error)
        return 1

    try:
        settings = load_settings()
        if args.interval is not None:
            if args.interval <= 0:
                raise ConfigError(f"--interval must be greater than zero, got {args.interval}")
            settings = dataclasses.replace(settings, poll_interval=args.interval)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    stop_event = threading.Event()

    def _shutdown(sig, frame):
        logger.info("Shutdown signal (%s) — stopping after current check.", sig)
        stop_event.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    logger.info(
        "AirAlert running — station %s, checking every %ds",
        settings.station, settings.poll_interval,
    )
    run(settings, stop_event=stop_event, max_cycles=1 if args.once else None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
