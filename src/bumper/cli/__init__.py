"""Command-line interface for bumper."""
