"""
Authentication module for the hospital staff administration backend.

This module provides:
- Login with signed, time-limited bearer tokens
- User registration
- The Auth Gate dependency that resolves tokens to live accounts
- Role gates (admin-only, user-or-admin)
"""
