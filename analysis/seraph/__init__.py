"""
SERAPH - Anomaly Filter

"I protect that which matters most."

Guards the published list. Tests every candidate against asset-class
bounds, venue reliability and stablecoin pegs before letting it through.
"""

from .anomaly_filter import AnomalyFilter
from .asset_classes import ASSET_PROFILES, AssetClassProfile, AssetClassRegistry

__all__ = [
    "AnomalyFilter",
    "AssetClassProfile",
    "AssetClassRegistry",
    "ASSET_PROFILES",
]
