"""Aerobic maintenance: easy runs."""
