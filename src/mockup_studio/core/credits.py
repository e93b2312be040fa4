"""Generation credits and unlock keys.

Each device starts with a small number of credits; every successful
generation consumes one.  More credits are added by redeeming an unlock key
issued by an administrator for a specific device identifier::

    UNLOCK-<amount>-<hash>

where ``<hash>`` is :func:`validation_hash` of the device identifier.  Keys
are case-insensitive and each one can be redeemed only once per device.

Known Weakness
--------------
The hash has no secret: it is the device identifier reversed, truncated to
eight characters and uppercased.  Anyone who knows a device identifier can
mint any number of valid keys offline.  The scheme is kept bit-for-bit
because already-issued keys and the companion issuing tool
(:mod:`mockup_studio.keygen`) depend on it.  Keys that differ only in how
the amount is written (``05`` vs ``5``) are distinct strings and are each
redeemable once.
"""

from __future__ import annotations

import logging
import random
import re
import time
from dataclasses import dataclass, replace

from .errors import (
    AlreadyUsedError,
    DeviceIdMissingError,
    HashMismatchError,
    InvalidAmountError,
    MalformedKeyError,
    OutOfCreditsError,
)

logger = logging.getLogger(__name__)

KEY_TAG = "UNLOCK"
HASH_LENGTH = 8

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class CreditState:
    """Credits left, keys already redeemed, and this device's identifier."""

    credits: int
    used_keys: tuple[str, ...] = ()
    device_id: str = ""

    @property
    def has_credits(self) -> bool:
        return self.credits > 0


def validation_hash(device_id: str) -> str:
    """Derive the key hash for a device identifier.

    Reverses the identifier, keeps the first eight characters and
    uppercases them.  Identifiers shorter than eight characters yield a
    hash of the same length.

    Example:
        >>> validation_hash("abc123")
        '321CBA'
    """
    return device_id[::-1][:HASH_LENGTH].upper()


def issue_unlock_key(device_id: str, amount: int) -> str:
    """Issue the unlock key granting *amount* credits to *device_id*.

    Raises:
        DeviceIdMissingError: If the device identifier is empty.
        InvalidAmountError: If *amount* is not positive.
    """
    device_id = device_id.strip()
    if not device_id:
        raise DeviceIdMissingError("Please enter a Device ID.")
    if amount <= 0:
        raise InvalidAmountError("Please enter a valid number of credits.")
    return f"{KEY_TAG}-{amount}-{validation_hash(device_id)}"


def _parse_amount(segment: str) -> int | None:
    # Leading sign and digits only; trailing characters are ignored.
    match = _LEADING_INT.match(segment)
    if match is None:
        return None
    return int(match.group(1))


def apply_unlock_key(raw_key: str, state: CreditState) -> CreditState:
    """Redeem an unlock key against the current credit state.

    Args:
        raw_key: Key as typed by the user; surrounding whitespace and case
            are ignored.
        state: Current credit state.

    Returns:
        New state with the key's amount added and the normalised key
        recorded as used.  The caller is responsible for persisting it.

    Raises:
        DeviceIdMissingError: If the state has no device identifier.
        AlreadyUsedError: If the key was redeemed before.
        MalformedKeyError: If the key is not ``UNLOCK-<amount>-<hash>``.
        InvalidAmountError: If the amount is not a positive integer.
        HashMismatchError: If the hash was not issued for this device.
    """
    if not state.device_id:
        raise DeviceIdMissingError()

    key = raw_key.strip().upper()

    if key in state.used_keys:
        raise AlreadyUsedError()

    segments = key.split("-")
    if len(segments) != 3 or segments[0] != KEY_TAG:
        raise MalformedKeyError()

    amount = _parse_amount(segments[1])
    if amount is None or amount <= 0:
        raise InvalidAmountError()

    if segments[2] != validation_hash(state.device_id):
        logger.warning("Unlock key rejected: hash does not match this device")
        raise HashMismatchError()

    logger.info(f"Unlock key accepted: +{amount} credits")
    return replace(
        state,
        credits=state.credits + amount,
        used_keys=state.used_keys + (key,),
    )


def consume_credit(state: CreditState) -> CreditState:
    """Spend one credit for a successfully generated image.

    Raises:
        OutOfCreditsError: If no credits are left.
    """
    if not state.has_credits:
        raise OutOfCreditsError()
    return replace(state, credits=state.credits - 1)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_device_id() -> str:
    """Create a new device identifier.

    A base-36 millisecond timestamp followed by a base-36 random token, e.g.
    ``"lx2k9q1c4f7h0a3bz"``.
    """
    timestamp = _to_base36(int(time.time() * 1000))
    token = _to_base36(random.getrandbits(52))
    return timestamp + token
