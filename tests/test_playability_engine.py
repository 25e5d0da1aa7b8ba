"""
Tests for playability/engine.py.

What we test
------------
PlayabilityEngine.score():
  - Worked examples across the four bands.
  - The 95 mph boundary belongs to the 95-105 band (+15).
  - Handicap >= 20 always contributes +35.
  - Factor is an int in [0, 100]; raw totals below 0 clamp to 0.
  - Lowering swing speed across a band boundary never lowers the factor.
  - Zero swing speed skips the distance term instead of dividing by zero.
  - Repeated calls return equal results.

category_for():
  - Every integer factor in [0, 100] lands in exactly one band.
  - Band floors are inclusive.
"""

import pytest

from playability.engine import CATEGORY_BANDS, PlayabilityEngine, category_for, score
from playability.models import PlayStyle


@pytest.fixture
def engine() -> PlayabilityEngine:
    return PlayabilityEngine()


# ── Worked examples ───────────────────────────────────────────────────────────

def test_slow_high_handicap_aggressive_is_high_forgiveness(make_profile):
    result = score(make_profile(
        swing_speed_mph=70, handicap_index=30, avg_driver_distance_yds=140, play_style="aggressive",
    ))

    assert result.breakdown.swing_speed == 35
    assert result.breakdown.handicap == 35
    assert result.breakdown.play_style == -10
    assert result.breakdown.distance_efficiency == 10  # 140 / 175 = 0.8
    assert result.factor == 70
    assert result.category == "High Forgiveness"


def test_fast_scratch_conservative_is_tour_level(make_profile):
    result = score(make_profile(
        swing_speed_mph=115, handicap_index=2, avg_driver_distance_yds=310, play_style="conservative",
    ))

    assert result.breakdown.distance_efficiency == 0  # 310 / 287.5 ~ 1.078
    assert result.factor == 20
    assert result.category == "Tour Level"


def test_95_mph_is_in_the_95_to_105_band(make_profile):
    result = score(make_profile(swing_speed_mph=95, handicap_index=15, avg_driver_distance_yds=220))

    assert result.breakdown.swing_speed == 15
    assert result.breakdown.handicap == 25
    assert result.breakdown.distance_efficiency == 0  # 220 / 237.5 ~ 0.926
    assert result.factor == 40
    assert result.category == "Low Forgiveness"


def test_just_under_95_mph_is_moderate_forgiveness(make_profile):
    result = score(make_profile(swing_speed_mph=94, handicap_index=15, avg_driver_distance_yds=220))

    assert result.breakdown.swing_speed == 25
    assert result.factor == 50
    assert result.category == "Moderate Forgiveness"


def test_recommendations_come_from_the_band_table(make_profile):
    result = score(make_profile(swing_speed_mph=70, handicap_index=30, avg_driver_distance_yds=140))
    band = category_for(result.factor)

    assert result.recommendations == band.recommendations
    assert len(result.recommendations) == 5
    assert result.recommendations[0].startswith("Game Improvement Irons")


# ── Terms ─────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("handicap", [20, 20.1, 27.5, 36, 54])
@pytest.mark.parametrize("speed", [60, 90, 100, 120])
def test_handicap_of_20_or_more_adds_35(engine, handicap, speed):
    result = engine.compute(speed, handicap, 230, PlayStyle.BALANCED)
    assert result.breakdown.handicap == 35


@pytest.mark.parametrize(
    "handicap, expected",
    [(19.9, 25), (15, 25), (14.9, 15), (10, 15), (9.9, 10), (5, 10), (4.9, 5), (0, 5)],
)
def test_handicap_term_boundaries(engine, handicap, expected):
    assert engine.compute(100, handicap, 250, "balanced").breakdown.handicap == expected


@pytest.mark.parametrize(
    "style, expected",
    [("aggressive", -10), ("balanced", 0), ("conservative", 10), (PlayStyle.CONSERVATIVE, 10)],
)
def test_play_style_term(engine, style, expected):
    assert engine.compute(100, 10, 250, style).breakdown.play_style == expected


def test_distance_term_thresholds(engine):
    # expected distance at 100 mph is 250 yards
    assert engine.compute(100, 10, 200, "balanced").breakdown.distance_efficiency == 10   # 0.80
    assert engine.compute(100, 10, 212.5, "balanced").breakdown.distance_efficiency == 0  # 0.85
    assert engine.compute(100, 10, 275, "balanced").breakdown.distance_efficiency == 0    # 1.10
    assert engine.compute(100, 10, 280, "balanced").breakdown.distance_efficiency == -5   # 1.12


def test_zero_speed_skips_distance_term(engine):
    result = engine.compute(0, 10, 200, "balanced")

    assert result.breakdown.distance_efficiency == 0
    assert result.factor == 50


# ── Range and clamping ────────────────────────────────────────────────────────

def test_negative_raw_total_clamps_to_zero(engine):
    result = engine.compute(120, 0, 340, "aggressive")

    assert result.breakdown.raw_total == -5
    assert result.factor == 0
    assert result.category == "Tour Level"


@pytest.mark.parametrize("speed", [50, 84.9, 85, 94.9, 95, 104.9, 105, 130])
@pytest.mark.parametrize("handicap", [0, 4.9, 5, 12, 19.9, 20, 54])
@pytest.mark.parametrize("style", ["aggressive", "balanced", "conservative"])
def test_factor_is_int_between_0_and_100(engine, speed, handicap, style):
    for distance in (100, 200, 260, 350):
        result = engine.compute(speed, handicap, distance, style)
        assert isinstance(result.factor, int)
        assert 0 <= result.factor <= 100


@pytest.mark.parametrize("faster, slower", [(95, 84), (105, 94), (105, 104.9), (85, 84.9)])
def test_slower_swing_across_a_boundary_never_lowers_factor(engine, faster, slower):
    for handicap in (0, 7, 12, 17, 25):
        for style in ("aggressive", "balanced", "conservative"):
            for distance in range(100, 351, 10):
                fast = engine.compute(faster, handicap, distance, style)
                slow = engine.compute(slower, handicap, distance, style)
                assert slow.factor >= fast.factor


def test_score_is_idempotent(make_profile):
    profile = make_profile(swing_speed_mph=88, handicap_index=18.4, avg_driver_distance_yds=205)
    assert score(profile) == score(profile)


# ── Bands ─────────────────────────────────────────────────────────────────────

def test_every_factor_maps_to_exactly_one_band():
    for factor in range(0, 101):
        matches = [
            band for i, band in enumerate(CATEGORY_BANDS)
            if factor >= band.min_factor
            and (i == 0 or factor < CATEGORY_BANDS[i - 1].min_factor)
        ]
        assert len(matches) == 1
        assert category_for(factor) is matches[0]


@pytest.mark.parametrize(
    "factor, label",
    [
        (100, "High Forgiveness"),
        (70, "High Forgiveness"),
        (69, "Moderate Forgiveness"),
        (50, "Moderate Forgiveness"),
        (49, "Low Forgiveness"),
        (30, "Low Forgiveness"),
        (29, "Tour Level"),
        (0, "Tour Level"),
    ],
)
def test_band_floors_are_inclusive(factor, label):
    assert category_for(factor).label == label


def test_every_band_has_five_recommendations_and_a_tip():
    for band in CATEGORY_BANDS:
        assert len(band.recommendations) == 5
        assert band.pro_tip
