"""Command-line interface for Jot."""
