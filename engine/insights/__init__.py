"""Findings, improvement priorities and writing guidelines."""
