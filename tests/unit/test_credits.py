"""Unit tests for credits and unlock keys."""

import re

import pytest

from mockup_studio.core.credits import (
    CreditState,
    _to_base36,
    apply_unlock_key,
    consume_credit,
    generate_device_id,
    issue_unlock_key,
    validation_hash,
)
from mockup_studio.core.errors import (
    AlreadyUsedError,
    DeviceIdMissingError,
    HashMismatchError,
    InvalidAmountError,
    MalformedKeyError,
    OutOfCreditsError,
)


class TestValidationHash:
    """Tests for the device-bound key hash."""

    def test_short_id(self):
        assert validation_hash("abc123") == "321CBA"

    def test_long_id_is_truncated(self):
        assert validation_hash("lx2k9q1c4f7h0a3bz") == "ZB3A0H7F"

    def test_empty_id(self):
        assert validation_hash("") == ""


class TestApplyUnlockKey:
    """Tests for apply_unlock_key."""

    def test_valid_key_adds_credits(self, credits):
        result = apply_unlock_key("UNLOCK-5-321CBA", credits)
        assert result.credits == 8
        assert result.used_keys == ("UNLOCK-5-321CBA",)
        assert result.device_id == credits.device_id

    def test_key_is_single_use(self, credits):
        once = apply_unlock_key("UNLOCK-5-321CBA", credits)
        with pytest.raises(AlreadyUsedError):
            apply_unlock_key("UNLOCK-5-321CBA", once)

    def test_case_and_whitespace_insensitive(self, credits):
        once = apply_unlock_key("  unlock-5-321cba \n", credits)
        assert once.credits == 8
        with pytest.raises(AlreadyUsedError):
            apply_unlock_key("UNLOCK-5-321CBA", once)

    def test_input_state_unchanged(self, credits):
        apply_unlock_key("UNLOCK-5-321CBA", credits)
        assert credits.credits == 3
        assert credits.used_keys == ()

    @pytest.mark.parametrize(
        "key",
        ["FOO-5-XXXXXXXX", "UNLOCK-5", "UNLOCK-5-321CBA-X", "", "UNLOCK"],
    )
    def test_malformed(self, credits, key):
        with pytest.raises(MalformedKeyError) as exc_info:
            apply_unlock_key(key, credits)
        assert str(exc_info.value) == "Invalid key format. Expected: UNLOCK-AMOUNT-HASH"

    @pytest.mark.parametrize("amount", ["0", "abc", ""])
    def test_invalid_amount(self, credits, amount):
        with pytest.raises(InvalidAmountError):
            apply_unlock_key(f"UNLOCK-{amount}-321CBA", credits)

    def test_amount_uses_leading_digits(self, credits):
        assert apply_unlock_key("UNLOCK-7X-321CBA", credits).credits == 10

    def test_hash_for_other_device(self, credits):
        with pytest.raises(HashMismatchError) as exc_info:
            apply_unlock_key("UNLOCK-5-ZZZZZZ", credits)
        assert str(exc_info.value) == "Invalid key for this device."

    def test_missing_device_id(self):
        with pytest.raises(DeviceIdMissingError):
            apply_unlock_key("UNLOCK-5-321CBA", CreditState(credits=0))

    def test_used_check_precedes_format_check(self):
        state = CreditState(credits=0, used_keys=("GARBAGE",), device_id="abc123")
        with pytest.raises(AlreadyUsedError):
            apply_unlock_key("garbage", state)


class TestIssueUnlockKey:
    """Tests for the key issuing helper."""

    def test_round_trip(self):
        device_id = generate_device_id()
        state = CreditState(credits=0, device_id=device_id)
        key = issue_unlock_key(device_id, 10)
        assert apply_unlock_key(key, state).credits == 10

    def test_key_rejected_on_other_device(self):
        key = issue_unlock_key("device-one-0001", 10)
        with pytest.raises(HashMismatchError):
            apply_unlock_key(key, CreditState(credits=0, device_id="device-two-0002"))

    def test_format(self):
        assert issue_unlock_key("abc123", 5) == "UNLOCK-5-321CBA"

    def test_rejects_empty_device(self):
        with pytest.raises(DeviceIdMissingError):
            issue_unlock_key("  ", 5)

    @pytest.mark.parametrize("amount", [0, -3])
    def test_rejects_non_positive_amount(self, amount):
        with pytest.raises(InvalidAmountError):
            issue_unlock_key("abc123", amount)


class TestConsumeCredit:
    """Tests for consume_credit."""

    def test_decrements(self, credits):
        assert consume_credit(credits).credits == 2

    def test_out_of_credits(self):
        with pytest.raises(OutOfCreditsError) as exc_info:
            consume_credit(CreditState(credits=0, device_id="abc123"))
        assert str(exc_info.value) == "You're out of credits!"

    def test_has_credits(self):
        assert CreditState(credits=1).has_credits
        assert not CreditState(credits=0).has_credits


class TestDeviceId:
    """Tests for device identifier generation."""

    def test_base36(self):
        assert _to_base36(0) == "0"
        assert _to_base36(35) == "z"
        assert _to_base36(36) == "10"

    def test_shape(self):
        device_id = generate_device_id()
        assert re.fullmatch(r"[0-9a-z]{9,}", device_id)
        assert len(validation_hash(device_id)) == 8

    def test_unique(self):
        assert len({generate_device_id() for _ in range(50)}) == 50
