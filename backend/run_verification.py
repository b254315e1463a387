import argparse
import logging
import sys
from datetime import date

import pandas as pd

import config
from compliance import verify_schedule
from compliance.dates import coerce_date
from compliance.types import IssueSeverity
from schedule_matrix import build_schedule_matrix
from snapshot import SnapshotError, load_snapshot, snapshot_reference_date

_logging_configured = False

LOG_LEVELS = {
    IssueSeverity.ERROR: logging.ERROR,
    IssueSeverity.WARNING: logging.WARNING,
    IssueSeverity.SUCCESS: logging.INFO,
}


def setup_logging():
    global _logging_configured
    if _logging_configured:
        return

    logger = logging.getLogger()
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        console = logging.StreamHandler()
        console.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))
        console.setFormatter(logging.Formatter('%(name)-12s: %(levelname)-8s %(message)s'))
        logger.addHandler(console)

    _logging_configured = True


def main(snapshot_path: str, reference_date: date | None = None, locale: str | None = None) -> int:
    """
    Verify a saved snapshot and log the findings and the schedule grid.

    Returns:
        Process exit status: 0 when export is allowed, 1 when any issue
        blocks it, 2 when the snapshot cannot be loaded
    """
    setup_logging()

    try:
        snapshot = load_snapshot(snapshot_path)
        reference = reference_date or snapshot_reference_date(snapshot, fallback=date.today())
    except SnapshotError as e:
        logging.error(str(e))
        return 2

    rules = config.apply_rule_defaults(snapshot.scheduling_rules.to_rules_dict())
    issues = verify_schedule(snapshot.schedule, snapshot.employees, reference, rules)

    logging.info(f"Verification for {reference:%Y-%m}:")
    for issue in issues:
        prefix = f"[{issue.issue.value}] " if issue.issue else ""
        logging.log(LOG_LEVELS[issue.severity], f"\t{prefix}{issue.message}")

    matrix = build_schedule_matrix(
        employees=snapshot.employees,
        schedule=snapshot.schedule,
        reference_date=reference,
        bank_holidays=[h.model_dump() for h in snapshot.bank_holidays],
        locale=locale or config.MATRIX_LOCALE,
    )
    with pd.option_context("display.max_columns", None, "display.width", None):
        logging.info(f"{matrix.title}\n{matrix.to_frame()}")

    blocking = [i for i in issues if i.blocking]
    if blocking:
        logging.warning(f"{len(blocking)} blocking issue(s): export is not allowed")
        return 1
    return 0


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Verify a saved shift schedule against the labor rules.")
    parser.add_argument("snapshot", help="Path to the saved schedule JSON")
    parser.add_argument("--date", dest="reference_date", type=coerce_date, default=None,
                        help="Any day of the month to verify (defaults to the snapshot's currentDate)")
    parser.add_argument("--locale", choices=["en", "pl"], default=None)
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = _parse_args()
    sys.exit(main(args.snapshot, args.reference_date, args.locale))
