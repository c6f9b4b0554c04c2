"""Profile domain: read access to user profiles."""
