"""
Alert rules: which tiers notify, and with what text.

Tier 1 is silent. Tiers 2-4 send a health reminder advising a mask;
tiers 5-6 send a travel advisory advising staying indoors.
"""

from dataclasses import dataclass
from typing import Optional

from airalert.classification.classifier import SeverityTier

HEALTH_REMINDER_TITLE = "健康提醒"
HEALTH_REMINDER_BODY = "当前空气质量为轻度或中度污染，出门请佩戴口罩，当前AQI为：{aqi}"

TRAVEL_ADVISORY_TITLE = "出行建议"
TRAVEL_ADVISORY_BODY = "当前空气质量为重度或严重污染，建议尽量不要外出，当前AQI为：{aqi}"


@dataclass(frozen=True)
class Alert:
    title: str
    body: str
    tier: SeverityTier


def build_alert(tier: SeverityTier, aqi: int) -> Optional[Alert]:
    """Return the alert for this tier, or None when no notification is due."""
    if tier <= SeverityTier.GOOD:
        return None
    if tier <= SeverityTier.UNHEALTHY:
        return Alert(HEALTH_REMINDER_TITLE, HEALTH_REMINDER_BODY.format(aqi=aqi), tier)
    return Alert(TRAVEL_ADVISORY_TITLE, TRAVEL_ADVISORY_BODY.format(aqi=aqi), tier)
