import numpy as np
from dataclasses import dataclass
from typing import Tuple, Union

from .models import PlayabilityResult, PlayerProfile, PlayStyle, ScoreBreakdown


@dataclass(frozen=True)
class CategoryBand:
    label: str
    min_factor: int
    recommendations: Tuple[str, ...]
    pro_tip: str


# Ordered from most to least forgiving; first band whose floor is met wins.
CATEGORY_BANDS: Tuple[CategoryBand, ...] = (
    CategoryBand(
        label="High Forgiveness",
        min_factor=70,
        recommendations=(
            "Game Improvement Irons (e.g., TaylorMade Stealth, Callaway Rogue ST Max)",
            "Oversized Driver with High MOI (460cc head)",
            "Hybrid Clubs (4H, 5H to replace long irons)",
            "Perimeter-weighted Cavity Back Irons",
            "High-loft Driver (10.5° - 12°)",
        ),
        pro_tip=(
            "Focus on forgiveness and distance. Consider getting fitted at a local pro shop "
            "to maximize your game improvement potential."
        ),
    ),
    CategoryBand(
        label="Moderate Forgiveness",
        min_factor=50,
        recommendations=(
            "Players Distance Irons (e.g., Ping G430, Mizuno JPX)",
            "Adjustable Driver (9.5° - 10.5° loft)",
            "One or Two Hybrids (3H, 4H)",
            "Progressive Set Design (cavity backs to muscle)",
            "Fairway Woods with Rail Design",
        ),
        pro_tip=(
            "You're in a great position to balance forgiveness with workability. "
            "A professional fitting can help you fine-tune your set makeup."
        ),
    ),
    CategoryBand(
        label="Low Forgiveness",
        min_factor=30,
        recommendations=(
            "Players Irons (e.g., Titleist T100, Mizuno MP)",
            "Low-spin Driver (8.5° - 9.5° loft)",
            "Blade-style Short Irons",
            "Traditional 3-wood and 5-wood",
            "Forged Cavity Back Long Irons",
        ),
        pro_tip=(
            "Your skill level allows for more precise clubs. Consider a mix of players irons "
            "with strategic forgiveness in long irons."
        ),
    ),
    CategoryBand(
        label="Tour Level",
        min_factor=0,
        recommendations=(
            "Blade Irons (e.g., Titleist MB, Mizuno MP-20)",
            "Low-loft Driver with Tour Shaft (8° - 9°)",
            "Classic Muscle Back Design",
            "Tour-caliber Woods and Hybrids",
            "High-control Wedge Setup (52°, 56°, 60°)",
        ),
        pro_tip=(
            "Tour-level equipment demands consistency. Work with a professional fitter "
            "to optimize shaft selection and club specifications."
        ),
    ),
)


def category_for(factor: float) -> CategoryBand:
    """Return the band a clamped factor falls into."""
    for band in CATEGORY_BANDS:
        if factor >= band.min_factor:
            return band
    return CATEGORY_BANDS[-1]


class PlayabilityEngine:
    """Rule-based playability factor on a 0-100 scale.

    Higher factor = the player needs more forgiving clubs.
    """

    MIN_FACTOR = 0
    MAX_FACTOR = 100
    YARDS_PER_MPH = 2.5

    def score(self, profile: PlayerProfile) -> PlayabilityResult:
        return self.compute(
            profile.swing_speed_mph,
            profile.handicap_index,
            profile.avg_driver_distance_yds,
            profile.play_style,
        )

    def compute(
        self,
        speed: float,
        handicap: float,
        avg_distance: float,
        play_style: Union[PlayStyle, str],
    ) -> PlayabilityResult:
        """Score raw values without going through profile validation."""
        breakdown = self.breakdown(speed, handicap, avg_distance, play_style)

        factor = int(round(float(np.clip(breakdown.raw_total, self.MIN_FACTOR, self.MAX_FACTOR))))
        band = category_for(factor)

        return PlayabilityResult(
            factor=factor,
            category=band.label,
            recommendations=band.recommendations,
            breakdown=breakdown,
        )

    def breakdown(
        self,
        speed: float,
        handicap: float,
        avg_distance: float,
        play_style: Union[PlayStyle, str],
    ) -> ScoreBreakdown:
        terms = {
            "swing_speed": self._swing_speed_term(speed),
            "handicap": self._handicap_term(handicap),
            "play_style": self._play_style_term(play_style),
            "distance_efficiency": self._distance_term(speed, avg_distance),
        }
        return ScoreBreakdown(raw_total=sum(terms.values()), **terms)

    def _swing_speed_term(self, speed: float) -> int:
        # Lower speed = more forgiveness needed
        if speed < 85:
            return 35
        elif speed < 95:
            return 25
        elif speed < 105:
            return 15
        return 5

    def _handicap_term(self, handicap: float) -> int:
        if handicap >= 20:
            return 35
        elif handicap >= 15:
            return 25
        elif handicap >= 10:
            return 15
        elif handicap >= 5:
            return 10
        return 5

    def _play_style_term(self, play_style: Union[PlayStyle, str]) -> int:
        style = PlayStyle(play_style) if not isinstance(play_style, PlayStyle) else play_style
        if style is PlayStyle.AGGRESSIVE:
            return -10
        elif style is PlayStyle.CONSERVATIVE:
            return 10
        return 0

    def _distance_term(self, speed: float, avg_distance: float) -> int:
        """Compare actual carry to what the swing speed should produce."""
        expected = speed * self.YARDS_PER_MPH
        if expected <= 0:
            # ratio undefined, skip the term
            return 0

        ratio = avg_distance / expected
        if ratio < 0.85:
            return 10
        elif ratio > 1.1:
            return -5
        return 0


playability_engine = PlayabilityEngine()


def score(profile: PlayerProfile) -> PlayabilityResult:
    return playability_engine.score(profile)
