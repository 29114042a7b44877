"""
Accounts module - dashboard users.

This module handles:
- Signup gated by an unused license key
- Login and session tokens
- Password changes
- Per-user API key and Discord notification settings
"""
