"""Endurance sessions: long and progression runs."""
