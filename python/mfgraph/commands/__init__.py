"""Inspection commands for saved dependency graphs."""
