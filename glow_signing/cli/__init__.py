"""Command-line interface for glow-signing."""
