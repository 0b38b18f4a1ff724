"""WaitLyst - waitlist signups with a referral growth loop."""

__version__ = "0.1.0"
