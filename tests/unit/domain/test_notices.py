"""Tests for the warn-once ledger."""

from attune.domain.notices import NoticeLedger


def test_first_is_true_only_once_per_key():
    ledger = NoticeLedger()
    assert ledger.first("a")
    assert not ledger.first("a")
    assert ledger.first(("b", 1))


def test_every_occurrence_is_counted():
    ledger = NoticeLedger()
    for _ in range(3):
        ledger.first("a")
    assert ledger.count("a") == 3
    assert ledger.count("never") == 0


def test_reset_forgets_notices():
    ledger = NoticeLedger()
    ledger.first("a")
    ledger.reset()
    assert ledger.first("a")
