"""Route ordering pipeline."""

from .construction import nearest_neighbor_tour
from .errors import InsufficientStopsError, LegScoringError, ResolutionError
from .models import LegEstimate, OptimizationResult, RouteMetrics
from .optimizer import RouteOptimizer
from .refinement import two_opt

__all__ = [
    "RouteOptimizer",
    "OptimizationResult",
    "RouteMetrics",
    "LegEstimate",
    "InsufficientStopsError",
    "ResolutionError",
    "LegScoringError",
    "nearest_neighbor_tour",
    "two_opt",
]
