"""Referral ledger for the waitlist.

Every signup gets a referral code; signing up through someone's code bumps
their referral count by one.
"""

from waitlyst.referral.service import (
    DuplicateEmailError,
    QueueStatus,
    ReferralLedger,
    generate_referral_code,
)

__all__ = ["DuplicateEmailError", "QueueStatus", "ReferralLedger", "generate_referral_code"]
