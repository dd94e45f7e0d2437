"""Milestone badges earned by completing exchanges."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BadgeTier:
    id: str
    label: str
    threshold: int


# Ordered by threshold (ascending)
BADGE_TIERS = (
    BadgeTier(id='first', label='First Swipe', threshold=1),
    BadgeTier(id='helper', label='Helper', threshold=5),
    BadgeTier(id='regular', label='Regular', threshold=10),
    BadgeTier(id='allstar', label='All-Star', threshold=25),
    BadgeTier(id='legend', label='Legend', threshold=50),
)


def get_earned_badges(completed_count: int) -> list[BadgeTier]:
    return [tier for tier in BADGE_TIERS if completed_count >= tier.threshold]


def get_top_badge(completed_count: int) -> Optional[BadgeTier]:
    """Highest badge earned, or None before the first completion."""
    earned = get_earned_badges(completed_count)
    return earned[-1] if earned else None


def get_next_badge(completed_count: int) -> Optional[BadgeTier]:
    """Next badge to earn, or None once every tier is reached."""
    for tier in BADGE_TIERS:
        if completed_count < tier.threshold:
            return tier
    return None
