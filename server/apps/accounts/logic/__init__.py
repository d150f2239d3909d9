"""Business logic layer for accounts app."""
