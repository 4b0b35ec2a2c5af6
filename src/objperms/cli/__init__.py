"""Command-line interface for objperms."""
