"""
Tests for balance filtering (lsp5_received_assets.read.balance and the reader's
balance queries).

Tests cover:
- STRICT vs TOLERANT policies
- plain accounts (no code) and reverting balanceOf
- list form (order preserving) and vector form (aligned to all_entries)
- holder resolution
"""

import logging

import pytest

from lsp5_received_assets import (
    BalancePolicy,
    IndexedRegistryRead,
    InMemoryBalanceOracle,
    OracleCallError,
    RegistryResolutionError,
)
from lsp5_received_assets.read.balance import check_balance

from .helpers.factories import (
    ASSET_A,
    ASSET_B,
    ASSET_C,
    ASSET_D,
    PROFILE,
    build_oracle,
    build_store,
)


class TestInMemoryBalanceOracle:
    """Tests for InMemoryBalanceOracle."""

    def test_balance_of_contract(self) -> None:
        """A registered contract reports the holder's balance."""
        oracle = build_oracle({ASSET_A: 10})
        assert oracle.has_code(ASSET_A)
        assert oracle.balance_of(ASSET_A, PROFILE) == 10
        assert oracle.balance_of(ASSET_A, ASSET_B) == 0

    def test_plain_account_fails(self) -> None:
        """balanceOf on an account with no code fails."""
        oracle = InMemoryBalanceOracle()
        assert not oracle.has_code(ASSET_B)
        with pytest.raises(OracleCallError, match="has no code"):
            oracle.balance_of(ASSET_B, PROFILE)

    def test_reverting_contract(self) -> None:
        """A contract registered as reverting fails its lookup."""
        oracle = build_oracle({}, reverting=[ASSET_C])
        assert oracle.has_code(ASSET_C)
        with pytest.raises(OracleCallError, match="reverted"):
            oracle.balance_of(ASSET_C, PROFILE)


class TestCheckBalance:
    """Tests for check_balance under both policies."""

    def test_strict_propagates(self) -> None:
        """STRICT lets the lookup failure propagate."""
        with pytest.raises(OracleCallError):
            check_balance(
                InMemoryBalanceOracle(),
                asset=ASSET_B,
                holder=PROFILE,
                policy=BalancePolicy.STRICT,
            )

    def test_tolerant_skips_call_without_code(self) -> None:
        """TOLERANT treats an account with no code as zero without calling it."""
        class NoCallOracle:
            def has_code(self, account: object) -> bool:
                return False

            def balance_of(self, asset: object, holder: object) -> int:
                raise AssertionError("balance_of must not be called")

        assert not check_balance(
            NoCallOracle(), asset=ASSET_B, holder=PROFILE, policy=BalancePolicy.TOLERANT
        )

    def test_tolerant_logs_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """TOLERANT logs a warning for a failed lookup."""
        oracle = build_oracle({}, reverting=[ASSET_C])
        with caplog.at_level(logging.WARNING):
            assert not check_balance(
                oracle, asset=ASSET_C, holder=PROFILE, policy=BalancePolicy.TOLERANT
            )
        assert "treating as zero" in caplog.text

    def test_tolerant_does_not_catch_other_errors(self) -> None:
        """TOLERANT only absorbs oracle call failures."""
        class BrokenOracle:
            def has_code(self, account: object) -> bool:
                return True

            def balance_of(self, asset: object, holder: object) -> int:
                raise KeyError("provider bug")

        with pytest.raises(KeyError):
            check_balance(
                BrokenOracle(),
                asset=ASSET_A,
                holder=PROFILE,
                policy=BalancePolicy.TOLERANT,
            )

    def test_zero_balance_is_false(self) -> None:
        """A zero balance is not a positive balance under either policy."""
        oracle = build_oracle({ASSET_A: 0})
        for policy in BalancePolicy:
            assert not check_balance(
                oracle, asset=ASSET_A, holder=PROFILE, policy=policy
            )


class TestReaderBalances:
    """Tests for validate_balances and entries_with_balance."""

    def test_plain_account_scenario(self) -> None:
        """An entry that is a plain account raises under STRICT and is dropped under TOLERANT."""
        # A holds 10; B is a plain account with no code.
        store = build_store([ASSET_A, ASSET_B])
        oracle = build_oracle({ASSET_A: 10})
        r = IndexedRegistryRead(store=store)

        with pytest.raises(OracleCallError):
            r.entries_with_balance(oracle, policy=BalancePolicy.STRICT)
        assert r.entries_with_balance(oracle, policy=BalancePolicy.TOLERANT) == [
            ASSET_A
        ]
        assert r.validate_balances(oracle, policy=BalancePolicy.TOLERANT) == [
            True,
            False,
        ]

    def test_strict_succeeds_when_all_lookups_succeed(self) -> None:
        """STRICT returns normally when every lookup succeeds."""
        store = build_store([ASSET_A, ASSET_B, ASSET_C])
        oracle = build_oracle({ASSET_A: 1, ASSET_B: 0, ASSET_C: 5})
        r = IndexedRegistryRead(store=store)
        assert r.entries_with_balance(oracle) == [ASSET_A, ASSET_C]
        assert r.validate_balances(oracle) == [True, False, True]

    def test_strict_raises_on_revert(self) -> None:
        """STRICT raises when any lookup reverts."""
        store = build_store([ASSET_A, ASSET_C])
        oracle = build_oracle({ASSET_A: 1}, reverting=[ASSET_C])
        r = IndexedRegistryRead(store=store)
        with pytest.raises(OracleCallError):
            r.validate_balances(oracle, policy=BalancePolicy.STRICT)

    def test_tolerant_never_raises_for_failing_lookups(self) -> None:
        """TOLERANT reports failing lookups as False."""
        entries = [ASSET_A, ASSET_B, ASSET_C, ASSET_D]
        store = build_store(entries)
        # B: no code, C: reverts, D: no code, A: balance 3
        oracle = build_oracle({ASSET_A: 3}, reverting=[ASSET_C])
        r = IndexedRegistryRead(store=store)
        assert r.validate_balances(oracle, policy=BalancePolicy.TOLERANT) == [
            True,
            False,
            False,
            False,
        ]

    def test_order_preserved(self) -> None:
        """Entries with balance keep their relative order."""
        entries = [ASSET_D, ASSET_B, ASSET_A, ASSET_C]
        store = build_store(entries)
        oracle = build_oracle({ASSET_D: 1, ASSET_B: 0, ASSET_A: 2, ASSET_C: 9})
        r = IndexedRegistryRead(store=store)
        assert r.entries_with_balance(oracle) == [ASSET_D, ASSET_A, ASSET_C]

    def test_vector_aligned_with_all_entries(self) -> None:
        """The balance vector has one flag per entry."""
        store = build_store([ASSET_A, ASSET_B, ASSET_C])
        oracle = build_oracle({ASSET_B: 4})
        r = IndexedRegistryRead(store=store)
        vector = r.validate_balances(oracle, policy=BalancePolicy.TOLERANT)
        assert len(vector) == r.count()
        filtered = r.entries_with_balance(oracle, policy=BalancePolicy.TOLERANT)
        assert filtered == [a for a, ok in zip(r.all_entries(), vector) if ok]

    def test_explicit_holder(self) -> None:
        """An explicit holder overrides the configured one."""
        store = build_store([ASSET_A])
        oracle = build_oracle({ASSET_A: 7}, holder=ASSET_D)
        r = IndexedRegistryRead(store=store)
        assert r.entries_with_balance(oracle) == []
        assert r.entries_with_balance(oracle, holder=ASSET_D) == [ASSET_A]

    def test_holder_from_reader_config(self) -> None:
        """The reader's holder is used when none is passed."""
        store = build_store([ASSET_A], address=None)
        oracle = build_oracle({ASSET_A: 7})
        r = IndexedRegistryRead(store=store, holder=PROFILE)
        assert r.entries_with_balance(oracle) == [ASSET_A]

    def test_missing_holder_raises(self) -> None:
        """Without any holder the query cannot run."""
        store = build_store([ASSET_A], address=None)
        r = IndexedRegistryRead(store=store)
        with pytest.raises(RegistryResolutionError, match="holder"):
            r.entries_with_balance(build_oracle({ASSET_A: 1}))
