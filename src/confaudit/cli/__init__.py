"""Command-line interface for confaudit."""
