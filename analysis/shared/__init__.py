"""
arbscan Shared - Common types and utilities for the analysis agents.
"""

from .config import (
    AggregatorConfig,
    ArbscanConfig,
    AssetClassConfig,
    ClassPolicy,
    CostConfig,
    FilterConfig,
    MonitoringConfig,
    ScoringConfig,
    get_config,
)
from .logger import ComponentLogger, configure_logging, log_context
from .normalize import normalize_asset, normalize_source, source_matches
from .numeric import is_usable_price, meets_minimum
from .types import (
    AssetCategory,
    Confidence,
    FilterReport,
    Opportunity,
    Quote,
    Recommendation,
    ValidationResult,
)

__all__ = [
    # Types
    "AssetCategory",
    "Confidence",
    "Recommendation",
    "Quote",
    "Opportunity",
    "ValidationResult",
    "FilterReport",
    # Normalization
    "normalize_asset",
    "normalize_source",
    "source_matches",
    # Numeric guards
    "is_usable_price",
    "meets_minimum",
    # Config
    "get_config",
    "ArbscanConfig",
    "AggregatorConfig",
    "AssetClassConfig",
    "ClassPolicy",
    "CostConfig",
    "FilterConfig",
    "MonitoringConfig",
    "ScoringConfig",
    # Logger
    "log_context",
    "configure_logging",
    "ComponentLogger",
]
