"""Command-line interface for pveshell."""
