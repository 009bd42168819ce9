"""
Core services for the application.

This package contains the scoring engine (CSS calculator, BP estimator,
health context assembler) and the service that wires it to storage.
"""

from .bp_estimator import categorize_bp, estimate_bp
from .css_calculator import compute_css
from .health_context import assemble_health_context
from .result import Result

__all__ = [
    "Result",
    "assemble_health_context",
    "categorize_bp",
    "compute_css",
    "estimate_bp",
]
