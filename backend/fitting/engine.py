from typing import Dict, Optional

from playability.models import BallFlight, Gender, HandgripIssue, HandSize, PlayerProfile
from .models import FittingAdvice

GRIP_LABELS = {
    "-1/64": "-1/64 (Undersize)",
    "standard": "Standard",
    "+1/64": "+1/64 (Midsize)",
    "+1/32": "+1/32 (Oversize)",
}

HAND_SIZE_GRIPS = {
    HandSize.SMALL: "-1/64",
    HandSize.MEDIUM: "standard",
    HandSize.LARGE: "+1/64",
    HandSize.EXTRA_LARGE: "+1/32",
}

JOINT_ISSUES = (HandgripIssue.ARTHRITIS, HandgripIssue.CARPAL_TUNNEL)


class FittingEngine:
    """Rule-based fitting advice from the secondary profile attributes.

    Nothing here feeds back into the playability factor.
    """

    def advise(self, profile: PlayerProfile) -> FittingAdvice:
        speed = profile.swing_speed_mph

        flex = self._shaft_flex(speed)
        material = self._shaft_material(speed, profile.shaft_preference, profile.handgrip_issues)
        length = self._length_adjustment(profile.wrist_to_floor_in, profile.club_length_adjustment)
        lie = self._lie_adjustment(profile.player_height_in, profile.lie_angle_adjustment)
        grip = self._grip_size(profile.hand_size, profile.handgrip_issues, profile.grip_sizes)

        advice = FittingAdvice(
            shaft_flex=flex,
            shaft_material=material,
            length_adjustment=length,
            lie_adjustment=lie,
            grip_size=GRIP_LABELS[grip],
        )
        advice.notes = self._advice_notes(profile, advice)
        return advice

    def _shaft_flex(self, speed: float) -> str:
        if speed < 80:
            return "L"
        elif speed < 90:
            return "A"
        elif speed < 95:
            return "R"
        elif speed < 105:
            return "S"
        return "X"

    def _shaft_material(
        self,
        speed: float,
        preference: str,
        grip_issue: Optional[HandgripIssue],
    ) -> str:
        if grip_issue in JOINT_ISSUES:
            return "graphite"  # dampens vibration
        if speed < 85:
            return "graphite"
        return preference

    def _length_adjustment(self, wrist_to_floor: Optional[float], selected: str) -> str:
        if selected != "standard":
            return selected
        if wrist_to_floor is None:
            return "standard"

        if wrist_to_floor < 30:
            return "-1"
        elif wrist_to_floor < 32:
            return "-1/2"
        elif wrist_to_floor < 35:
            return "standard"
        elif wrist_to_floor < 37:
            return "+1/2"
        return "+1"

    def _lie_adjustment(self, height: Optional[float], selected: str) -> str:
        if selected != "standard":
            return selected
        if height is None:
            return "standard"

        if height >= 74:
            return "upright"
        elif height <= 64:
            return "flat"
        return "standard"

    def _grip_size(
        self,
        hand_size: Optional[HandSize],
        grip_issue: Optional[HandgripIssue],
        selected: str,
    ) -> str:
        if selected != "standard":
            return selected

        grip = HAND_SIZE_GRIPS.get(hand_size, "standard")
        if grip_issue in JOINT_ISSUES and grip in ("-1/64", "standard"):
            grip = "+1/64"  # larger grips need less grip pressure
        return grip

    def _advice_notes(
        self,
        profile: PlayerProfile,
        advice: FittingAdvice,
    ) -> Dict[str, str]:
        """Plain-language notes behind each fitting choice, keyed by topic."""
        reasoning = {}

        speed = profile.swing_speed_mph

        reasoning["shaft"] = (
            f"{advice.shaft_flex} flex {advice.shaft_material} shafts suit a {speed:g} mph swing speed"
        )
        if profile.handgrip_issues in JOINT_ISSUES:
            reasoning["shaft"] += "; graphite reduces vibration into the hands and wrists"

        if advice.length_adjustment != "standard":
            source = "your selection" if profile.club_length_adjustment != "standard" else "your wrist-to-floor measurement"
            reasoning["length"] = f"Adjust club length {advice.length_adjustment} inch based on {source}"
        elif profile.wrist_to_floor_in is not None:
            reasoning["length"] = "Standard length fits your wrist-to-floor measurement"

        if advice.lie_adjustment == "upright":
            reasoning["lie"] = "Upright lie angle (+2°) keeps the toe from digging at address"
        elif advice.lie_adjustment == "flat":
            reasoning["lie"] = "Flat lie angle (-2°) keeps the heel from digging at address"

        if advice.grip_size != GRIP_LABELS["standard"]:
            reasoning["grip"] = f"{advice.grip_size} grips match your hand size and comfort"

        if profile.ball_flight_tendency is BallFlight.SLICE:
            reasoning["ball_flight"] = "Draw-biased driver and offset irons help straighten a slice"
        elif profile.ball_flight_tendency is BallFlight.HOOK:
            reasoning["ball_flight"] = "Neutral or fade-biased heads with minimal offset help tame a hook"

        if profile.swing_weight_adjustment == "heavier":
            reasoning["swing_weight"] = "Heavier head weighting promotes a smoother tempo"
        elif profile.swing_weight_adjustment == "lighter":
            reasoning["swing_weight"] = "Lighter head weighting makes the club easier to release"

        if profile.gender is Gender.FEMALE and speed < 90:
            reasoning["set"] = "Women's-length shafts (about 1 inch shorter) are a good starting point"

        return reasoning


fitting_engine = FittingEngine()
