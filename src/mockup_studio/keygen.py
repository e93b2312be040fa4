"""Command-line tool for issuing unlock keys.

An administrator runs this with the device identifier a user reports from
the out-of-credits panel and the number of credits to grant::

    mockup-keygen lx2k9q1c4f7h0a3bz 10
    UNLOCK-10-ZB3A0H7F

The hash is computed with the same :func:`~mockup_studio.core.credits.validation_hash`
the application uses to verify keys.
"""

from __future__ import annotations

import argparse
import sys

from mockup_studio.core.credits import issue_unlock_key
from mockup_studio.core.errors import UnlockKeyError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mockup-keygen",
        description="Issue an unlock key that adds credits on one device.",
    )
    parser.add_argument("device_id", help="Device ID shown in the user's out-of-credits panel")
    parser.add_argument("credits", type=int, help="Number of credits to grant (positive)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``mockup-keygen`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        key = issue_unlock_key(args.device_id, args.credits)
    except UnlockKeyError as e:
        parser.error(str(e))

    print(key)
    return 0


if __name__ == "__main__":
    sys.exit(main())
