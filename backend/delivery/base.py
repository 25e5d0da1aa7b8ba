"""
Results sinks.

The scoring code never does I/O. Anything that leaves the process (database
rows, outgoing email) goes through one of these interfaces so the HTTP layer
can swap implementations per deployment or per test.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from playability.models import ClubPreferences, PlayabilityResult, PlayerProfile
from .models import FeedbackEntry, FeedbackSubmission, FeedbackSummary


class DeliveryError(Exception):
    """A results sink could not complete an operation."""


class StorageError(DeliveryError):
    pass


class EmailDeliveryError(DeliveryError):
    pass


class ResultsStore(ABC):

    @abstractmethod
    def save(self, profile: PlayerProfile, result: PlayabilityResult) -> str:
        """Persist a calculation and return its id."""

    @abstractmethod
    def attach_preferences(self, calculation_id: str, preferences: ClubPreferences) -> bool:
        """Store preferences on a saved calculation. False if the id is unknown."""

    @abstractmethod
    def get_calculation(self, calculation_id: str) -> dict:
        """Saved calculation as a flat dict, or an empty dict if the id is unknown."""

    @abstractmethod
    def save_feedback(self, submission: FeedbackSubmission) -> str:
        ...

    @abstractmethod
    def list_feedback(self) -> List[FeedbackEntry]:
        ...

    @abstractmethod
    def feedback_summary(self) -> FeedbackSummary:
        ...

    @abstractmethod
    def export_feedback_csv(self) -> str:
        ...


class ResultsMailer(ABC):

    @abstractmethod
    def send_results(
        self,
        address: str,
        profile: PlayerProfile,
        result: PlayabilityResult,
        preferences: Optional[ClubPreferences] = None,
    ) -> Optional[str]:
        """Email a result to the player. Returns the provider message id, if any."""

    @abstractmethod
    def send_feedback(self, submission: FeedbackSubmission) -> Optional[str]:
        ...
