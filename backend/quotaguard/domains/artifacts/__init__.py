"""Artifact domain: append-only records of admitted operations."""
