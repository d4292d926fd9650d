"""Scoring core: parameters, formula, levels and engine."""
