from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from playability.models import ClubPreferences, PlayerProfile


class FeedbackSubmission(BaseModel):
    rating: int = Field(..., ge=1, le=5, description="Star rating, 1-5")
    name: Optional[str] = Field(None, max_length=120)
    feedback_text: Optional[str] = Field(None, max_length=5000)
    calculation_id: Optional[str] = None

    @field_validator("name", "feedback_text", mode="before")
    @classmethod
    def blank_is_unset(cls, v):
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


class FeedbackEntry(BaseModel):
    id: str
    created_at: str
    rating: int
    name: Optional[str] = None
    feedback_text: Optional[str] = None
    calculation_id: Optional[str] = None


class FeedbackSummary(BaseModel):
    total: int
    average_rating: float


class FeedbackReport(BaseModel):
    summary: FeedbackSummary
    entries: List[FeedbackEntry]


class ResultsEmailRequest(BaseModel):
    email: EmailStr
    profile: PlayerProfile
    preferences: Optional[ClubPreferences] = None
