"""
Tests for bundle validation and storage (BundleBuilder).
"""

from __future__ import annotations

import json

import pytest

from backend_bundlebot.bundles import BundleBuilder
from backend_bundlebot.bundles.builder import is_valid_address, is_valid_amount
from backend_bundlebot.core.exceptions import (
    EmptyBundle,
    InvalidAddress,
    InvalidAmount,
    TooManyTransfers,
    ValidationError,
)
from backend_bundlebot.database import JsonStore

USER_ID = "42"
ADDR_1 = "11111111111111111111111111111112"
ADDR_2 = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
ADDR_3 = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"


@pytest.fixture
def builder(tmp_path) -> BundleBuilder:
    return BundleBuilder(JsonStore(tmp_path / "bundles.json"))


def test_valid_pairs_keep_order_and_count(builder):
    bundle = builder.build_bundle(USER_ID, [(ADDR_1, "0.5"), (ADDR_2, "1"), (ADDR_3, "2.25")])
    assert len(bundle) == 3
    assert [t.address for t in bundle] == [ADDR_1, ADDR_2, ADDR_3]
    assert [t.amount for t in bundle] == ["0.5", "1", "2.25"]
    assert bundle.user_id == USER_ID


def test_incomplete_pairs_are_skipped(builder):
    bundle = builder.build_bundle(
        USER_ID,
        [(ADDR_1, "0.5"), (ADDR_2, None), (None, "3"), ("", ""), (ADDR_3, "1")],
    )
    assert [t.address for t in bundle] == [ADDR_1, ADDR_3]


@pytest.mark.parametrize(
    "address",
    [
        "0" * 32,  # 0 not in base58
        "O" + "1" * 31,
        "I" + "1" * 31,
        "l" + "1" * 31,
        "1" * 31,  # too short
        "1" * 45,  # too long
        "not-a-valid-pubkey",
    ],
)
def test_invalid_address_rejected_even_with_valid_amount(builder, address):
    with pytest.raises(InvalidAddress) as exc:
        builder.build_bundle(USER_ID, [(address, "1")])
    assert address in str(exc.value)


def test_address_checked_before_amount(builder):
    with pytest.raises(InvalidAddress):
        builder.build_bundle(USER_ID, [("bad", "-1")])


@pytest.mark.parametrize("amount", ["0", "-1", "-0.0001", "abc", "nan", "inf", "1e400", " "])
def test_invalid_amount_rejected(builder, amount):
    with pytest.raises(InvalidAmount):
        builder.build_bundle(USER_ID, [(ADDR_1, amount)])


def test_empty_bundle_rejected(builder):
    with pytest.raises(EmptyBundle):
        builder.build_bundle(USER_ID, [(None, None), (ADDR_1, None)])


def test_more_than_five_pairs_rejected(builder):
    with pytest.raises(TooManyTransfers):
        builder.build_bundle(USER_ID, [(ADDR_1, "1")] * 6)


def test_validation_errors_share_base_class():
    for cls in (InvalidAddress, InvalidAmount, EmptyBundle, TooManyTransfers):
        assert issubclass(cls, ValidationError)


def test_new_bundle_replaces_previous(builder, tmp_path):
    builder.build_bundle(USER_ID, [(ADDR_1, "1"), (ADDR_2, "2")])
    builder.build_bundle(USER_ID, [(ADDR_3, "3")])
    current = builder.current_bundle(USER_ID)
    assert current is not None
    assert [t.address for t in current] == [ADDR_3]
    on_disk = json.loads((tmp_path / "bundles.json").read_text(encoding="utf-8"))
    assert on_disk == {USER_ID: [{"address": ADDR_3, "amount": "3"}]}


def test_failed_validation_keeps_previous_bundle(builder):
    builder.build_bundle(USER_ID, [(ADDR_1, "1")])
    with pytest.raises(InvalidAmount):
        builder.build_bundle(USER_ID, [(ADDR_2, "zero")])
    assert [t.address for t in builder.current_bundle(USER_ID)] == [ADDR_1]


def test_current_bundle_none_for_new_user(builder):
    assert builder.current_bundle("nobody") is None


def test_validators():
    assert is_valid_address(ADDR_2)
    assert not is_valid_address(ADDR_2 + "0")
    assert is_valid_amount("0.000001")
    assert not is_valid_amount("")
