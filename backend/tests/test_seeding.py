"""Tests for demo data generation."""

import random
from datetime import datetime, timedelta, timezone

from waitlyst.referral import ReferralLedger
from waitlyst.seeding import demo_email, generate_demo_entries, seed_demo_data

NOW = datetime(2026, 5, 1, tzinfo=timezone.utc)


def test_generated_entries_respect_ledger_invariants():
    entries = generate_demo_entries(147, rng=random.Random(7), now=NOW)

    assert [e.position for e in entries] == list(range(1, 148))
    assert len({e.email for e in entries}) == 147
    assert len({e.referral_code for e in entries}) == 147

    for entry in entries:
        referred = [e for e in entries if e.referred_by == entry.referral_code]
        assert entry.referral_count == len(referred)

    times = [e.created_at for e in entries]
    assert times == sorted(times)
    assert all(NOW - timedelta(days=30) <= t <= NOW for t in times)


def test_only_later_signups_are_referred():
    entries = generate_demo_entries(40, rng=random.Random(1), now=NOW)
    first_codes = {e.referral_code for e in entries[:10]}

    assert all(e.referred_by is None for e in entries[:11])
    assert all(e.referred_by in first_codes for e in entries[11:])


def test_demo_email():
    assert demo_email(0) == "sarah@gmail.com"
    assert demo_email(50) == "sarah1@hey.com"


def test_seed_only_fills_empty_store(store):
    assert seed_demo_data(store, count=20, rng=random.Random(3)) == 20
    assert store.total_signups() == 20
    assert seed_demo_data(store, count=20) == 0
    assert store.total_signups() == 20


def test_signup_after_seeding_continues_positions(store, ledger):
    seed_demo_data(store, count=15, rng=random.Random(5))
    top = store.list_all()[0]

    entry = ledger.signup("fresh@x.com", top.referral_code)

    assert entry.position == 16
    assert store.find_by_referral_code(top.referral_code).referral_count == top.referral_count + 1


def test_same_seed_gives_identical_entries():
    first = generate_demo_entries(20, rng=random.Random(7), now=NOW)
    second = generate_demo_entries(20, rng=random.Random(7), now=NOW)

    assert [e.referral_code for e in first] == [e.referral_code for e in second]
    assert [e.id for e in first] == [e.id for e in second]
    assert [e.referred_by for e in first] == [e.referred_by for e in second]
    assert len({e.id for e in first}) == 20


def test_different_seeds_give_different_codes():
    first = generate_demo_entries(5, rng=random.Random(1), now=NOW)
    second = generate_demo_entries(5, rng=random.Random(2), now=NOW)

    assert [e.referral_code for e in first] != [e.referral_code for e in second]
