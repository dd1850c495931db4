"""Command-line interface for promocal."""
