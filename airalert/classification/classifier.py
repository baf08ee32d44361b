"""
AQI Severity Classifier.

Maps an AQI integer onto six ordinal tiers using fixed breakpoints:
  TIER 1 (GOOD):                    aqi <= 50
  TIER 2 (MODERATE):                aqi <= 100
  TIER 3 (UNHEALTHY_FOR_SENSITIVE): aqi <= 150
  TIER 4 (UNHEALTHY):               aqi <= 200
  TIER 5 (VERY_UNHEALTHY):          aqi <= 250
  TIER 6 (HAZARDOUS):               aqi >  250

Stateless — no side effects. Zero and negative values fall into tier 1.
"""

import enum
from typing import List, Tuple


class SeverityTier(enum.IntEnum):
    GOOD = 1
    MODERATE = 2
    UNHEALTHY_FOR_SENSITIVE = 3
    UNHEALTHY = 4
    VERY_UNHEALTHY = 5
    HAZARDOUS = 6

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").lower()


# Inclusive upper bound of each tier; anything above the last is HAZARDOUS
TIER_BREAKPOINTS: List[Tuple[int, SeverityTier]] = [
    (50,  SeverityTier.GOOD),
    (100, SeverityTier.MODERATE),
    (150, SeverityTier.UNHEALTHY_FOR_SENSITIVE),
    (200, SeverityTier.UNHEALTHY),
    (250, SeverityTier.VERY_UNHEALTHY),
]


def classify(aqi: int) -> SeverityTier:
    """Return the severity tier for the given AQI."""
    for upper, tier in TIER_BREAKPOINTS:
        if aqi <= upper:
            return tier
    return SeverityTier.HAZARDOUS
