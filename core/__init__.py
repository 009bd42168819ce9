"""Core domain logic for health signal scoring.

This package contains the scoring engine and domain models,
isolated from external dependencies for easy testing and reasoning.
"""
