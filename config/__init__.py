"""Configuration package - settings and user-facing text."""
