from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlayStyle(str, Enum):
    AGGRESSIVE = "aggressive"
    BALANCED = "balanced"
    CONSERVATIVE = "conservative"


class HandSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extra-large"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class HandgripIssue(str, Enum):
    NONE = "none"
    ARTHRITIS = "arthritis"
    CARPAL_TUNNEL = "carpal-tunnel"
    OTHER = "other"


class BallFlight(str, Enum):
    STRAIGHT = "straight"
    SLICE = "slice"
    HOOK = "hook"
    FADE = "fade"
    DRAW = "draw"


class PlayerProfile(BaseModel):
    """Golfer attributes collected by the club finder form.

    Only the four basic fields feed the playability factor. The rest drive
    the auxiliary fitting advice.
    """

    model_config = ConfigDict(frozen=True)

    swing_speed_mph: float = Field(..., ge=50, le=130, description="Driver swing speed in mph")
    handicap_index: float = Field(..., ge=0, le=54, description="Handicap index")
    avg_driver_distance_yds: float = Field(..., ge=100, le=350, description="Average driver distance in yards")
    play_style: PlayStyle

    # Fitting information
    player_height_in: Optional[float] = Field(None, ge=48, le=90)
    wrist_to_floor_in: Optional[float] = Field(None, ge=28, le=42)
    hand_size: Optional[HandSize] = None
    gender: Optional[Gender] = None
    handgrip_issues: Optional[HandgripIssue] = None
    ball_flight_tendency: Optional[BallFlight] = None

    # Optional adjustments
    club_length_adjustment: str = Field("standard", pattern=r"^(standard|[+-]1/[24])$")
    lie_angle_adjustment: str = Field("standard", pattern=r"^(standard|upright|flat)$")
    shaft_preference: str = Field("steel", pattern=r"^(steel|graphite|iron)$")
    swing_weight_adjustment: str = Field("standard", pattern=r"^(standard|heavier|lighter)$")
    grip_sizes: str = Field("standard", pattern=r"^(standard|\+1/64|\+1/32|-1/64)$")

    @field_validator(
        "player_height_in", "wrist_to_floor_in", "hand_size", "gender",
        "handgrip_issues", "ball_flight_tendency",
        mode="before",
    )
    @classmethod
    def blank_is_unset(cls, v):
        # form fields arrive as text; an empty input means the field was skipped
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator(
        "club_length_adjustment", "lie_angle_adjustment", "shaft_preference",
        "swing_weight_adjustment", "grip_sizes",
        mode="before",
    )
    @classmethod
    def blank_is_default(cls, v, info):
        if v is None or (isinstance(v, str) and v.strip() == ""):
            return cls.model_fields[info.field_name].default
        return v


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    swing_speed: int
    handicap: int
    play_style: int
    distance_efficiency: int
    raw_total: int


class PlayabilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    factor: int = Field(..., ge=0, le=100)
    category: str
    recommendations: Tuple[str, ...]
    breakdown: Optional[ScoreBreakdown] = None


class ClubPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    club_condition: str = Field(..., pattern=r"^(new|like-new|used|any)$")
    grip_preference: str = Field(..., min_length=1)
    look_preference: str = Field(..., min_length=1)
    budget_range: str = Field(..., min_length=1)
    brand_preference: str = Field(..., min_length=1)
