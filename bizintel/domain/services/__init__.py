"""Domain services: pure computations over domain entities."""

from .aggregation_engine import AggregationEngine, profit_margin, truncate_to_period
from .feature_extractor import FeatureExtractor

__all__ = [
    "AggregationEngine",
    "FeatureExtractor",
    "profit_margin",
    "truncate_to_period",
]
