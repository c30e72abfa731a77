"""Utility helpers for glow-signing."""
