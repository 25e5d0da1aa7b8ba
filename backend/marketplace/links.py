import re
from typing import List
from urllib.parse import quote

from pydantic import BaseModel

from playability.models import PlayabilityResult

USED_SETS_URL = "https://www.2ndswing.com/search"
NEW_SETS_URL = "https://www.pgatoursuperstore.com/search"
CUSTOM_FITTING_URL = "https://www.pgatoursuperstore.com/custom-fitting"


class MarketplaceLink(BaseModel):
    title: str
    description: str
    url: str
    badge: str


def utm_params(category: str) -> str:
    campaign = re.sub(r"\s+", "-", category.lower())
    return f"utm_source=clubfinder&utm_medium=referral&utm_campaign={campaign}"


def search_query(result: PlayabilityResult, top_n: int = 2) -> str:
    """First recommendations joined with OR, encoded like a URI component."""
    return quote(" OR ".join(result.recommendations[:top_n]), safe="!~*'()")


def build_links(result: PlayabilityResult) -> List[MarketplaceLink]:
    query = search_query(result)
    utm = utm_params(result.category)

    return [
        MarketplaceLink(
            title="Used Club Sets",
            description="Find quality used clubs matching your profile",
            url=f"{USED_SETS_URL}?q={query}&{utm}",
            badge="Best Value",
        ),
        MarketplaceLink(
            title="New Club Sets",
            description="Browse the latest club models",
            url=f"{NEW_SETS_URL}?q={query}&{utm}",
            badge="Latest Models",
        ),
        MarketplaceLink(
            title="Custom Shafts & Grips",
            description="Personalize your clubs with custom specifications",
            url=f"{CUSTOM_FITTING_URL}?{utm}",
            badge="Custom Fit",
        ),
    ]
