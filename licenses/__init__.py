"""
Licenses module - the license ledger.

This module handles:
- License entity and plan tiers
- Claiming an unclaimed key for a new user
- Extending access by redeeming a new key
- Reporting a user's active license
"""
