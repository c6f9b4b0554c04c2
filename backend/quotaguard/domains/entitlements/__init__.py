"""Entitlement domain — resolves an account's tier, status and limits."""
