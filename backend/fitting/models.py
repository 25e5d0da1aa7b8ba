from pydantic import BaseModel, Field
from typing import Dict


class FittingAdvice(BaseModel):
    shaft_flex: str = Field(..., description="L, A, R, S, X")
    shaft_material: str = Field(..., description="steel, graphite or iron-specific")
    length_adjustment: str = Field("standard", description="e.g. +1/2, -1/4")
    lie_adjustment: str = Field("standard", description="standard, upright, flat")
    grip_size: str = Field("standard", description="e.g. +1/64 (midsize)")
    notes: Dict[str, str] = {}
