#!/usr/bin/env python3
"""Audit the stored employee list against the form rules.

Records are only ever saved through the validated draft form, but the
stored JSON can be edited by hand or written by an older build. Run from
the backend/ directory:

    python3 scripts/check_records.py [--storage-dir DIR] [--key KEY] [--verbose]

Exits with status 1 when at least one stored record would be rejected.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from employee_registry.core.config import Settings  # noqa: E402
from employee_registry.core.storage import FileStorage  # noqa: E402
from employee_registry.models.employee import Employee  # noqa: E402
from employee_registry.services.formatting import format_bytes  # noqa: E402
from employee_registry.services.record_store import RecordStore  # noqa: E402
from employee_registry.services.validator import validate  # noqa: E402

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = Settings()
    parser = argparse.ArgumentParser(
        description="Report stored employee records that fail the form rules",
    )
    parser.add_argument(
        "--storage-dir",
        default=settings.STORAGE_DIR,
        help=f"Directory of the file storage (default: {settings.STORAGE_DIR})",
    )
    parser.add_argument(
        "--key",
        default=settings.STORAGE_KEY,
        help=f"Storage key of the employee list (default: {settings.STORAGE_KEY})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


def describe_violations(record: Employee) -> dict[str, list[str]]:
    return {field: sorted(rules) for field, rules in validate(record.form_values()).items()}


def check_records(args: argparse.Namespace) -> int:
    """Log every failing record and return how many failed."""
    store = RecordStore(FileStorage(args.storage_dir), key=args.key)
    records = store.load()

    failed = 0
    for index, record in enumerate(records):
        violations = describe_violations(record)
        if not violations:
            logger.debug("#%d %s: ok", index, record.name)
            continue
        failed += 1
        details = "; ".join(f"{field}: {', '.join(rules)}" for field, rules in violations.items())
        logger.warning("#%d %s: %s", index, record.name or "<no name>", details)

    attached = sum(doc.size for record in records for doc in record.documents)
    logger.info("=" * 50)
    logger.info("Records checked: %d", len(records))
    logger.info("Records failing: %d", failed)
    logger.info("Attached documents: %s", format_bytes(attached))
    return failed


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")
    return 1 if check_records(args) else 0


if __name__ == "__main__":
    sys.exit(main())
