"""Guided, resumable onboarding wizard engine."""

__version__ = "1.0.0"
