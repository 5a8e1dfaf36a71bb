"""Command-line interface for citadelctl."""
