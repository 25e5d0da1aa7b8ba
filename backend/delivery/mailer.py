import logging
from collections import deque
from datetime import datetime, timezone
from html import escape
from typing import List, Optional

import requests

from playability.models import ClubPreferences, PlayabilityResult, PlayerProfile
from .base import EmailDeliveryError, ResultsMailer
from .models import FeedbackSubmission

logger = logging.getLogger(__name__)

BRAND_COLOR = "#2C5F2D"
RESULTS_SUBJECT = "Your Golf Club Recommendations"


def _text(v) -> str:
    return escape(str(getattr(v, "value", v)))


def render_results_html(
    profile: PlayerProfile,
    result: PlayabilityResult,
    preferences: Optional[ClubPreferences] = None,
) -> str:
    profile_items = [
        f"<li><strong>Swing Speed:</strong> {profile.swing_speed_mph:g} mph</li>",
        f"<li><strong>Handicap:</strong> {profile.handicap_index:g}</li>",
        f"<li><strong>Average Distance:</strong> {profile.avg_driver_distance_yds:g} yards</li>",
        f"<li><strong>Play Style:</strong> {_text(profile.play_style)}</li>",
    ]
    if profile.gender is not None:
        profile_items.append(f"<li><strong>Gender:</strong> {_text(profile.gender)}</li>")

    recommendations = "".join(f"<li>{escape(rec)}</li>" for rec in result.recommendations)

    preferences_section = ""
    if preferences is not None:
        preferences_section = f"""
        <h3>Your Club Preferences</h3>
        <ul>
          <li><strong>Brand:</strong> {_text(preferences.brand_preference)}</li>
          <li><strong>Budget:</strong> {_text(preferences.budget_range)}</li>
          <li><strong>Condition:</strong> {_text(preferences.club_condition)}</li>
          <li><strong>Look:</strong> {_text(preferences.look_preference)}</li>
          <li><strong>Shaft:</strong> {_text(profile.shaft_preference)}</li>
          <li><strong>Grip:</strong> {_text(preferences.grip_preference)}</li>
        </ul>
        """

    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h1 style="color: {BRAND_COLOR};">Your Playability Factor Results</h1>
      <div style="background: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">
        <h2 style="color: {BRAND_COLOR};">Playability Factor: {result.factor:.1f}</h2>
        <p style="font-size: 18px;"><strong>Category:</strong> {escape(result.category)}</p>
      </div>
      <h3>Your Golf Profile</h3>
      <ul>{"".join(profile_items)}</ul>
      <h3>Recommended Clubs</h3>
      <ul>{recommendations}</ul>
      {preferences_section}
      <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #ddd; color: #666; font-size: 12px;">
        <p>Thank you for using Golf Club Finder!</p>
        <p>These recommendations are based on the Maltby Playability Factor (MPF) system.</p>
      </div>
    </div>
    """


def feedback_subject(submission: FeedbackSubmission) -> str:
    stars = "⭐" * submission.rating
    return f"New Feedback: {stars} ({submission.rating}/5)"


def render_feedback_html(submission: FeedbackSubmission, received_at: Optional[datetime] = None) -> str:
    received_at = received_at or datetime.now(timezone.utc)
    stars = "⭐" * submission.rating
    sender = escape(submission.name) if submission.name else "Anonymous"

    message = ""
    if submission.feedback_text:
        body = escape(submission.feedback_text).replace("\n", "<br>")
        message = f"""
        <div style="margin-top: 20px;">
          <h3 style="color: {BRAND_COLOR};">Feedback Message:</h3>
          <div style="background: #fff; padding: 15px; border-left: 4px solid {BRAND_COLOR};">
            {body}
          </div>
        </div>
        """

    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: {BRAND_COLOR};">New User Feedback Received</h2>
      <div style="background: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">
        <p style="font-size: 24px; margin: 0;">Rating: {stars}</p>
        <p style="font-size: 18px; color: #666; margin: 5px 0 0 0;">{submission.rating} out of 5 stars</p>
      </div>
      <p><strong>From:</strong> {sender}</p>
      {message}
      <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #ddd; color: #666; font-size: 12px;">
        <p>Received on: {received_at.strftime("%Y-%m-%d %H:%M:%S %Z")}</p>
      </div>
    </div>
    """


class ResendMailer(ResultsMailer):
    """Sends mail through the Resend HTTP API."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        feedback_sender: str,
        feedback_recipient: str,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.sender = sender
        self.feedback_sender = feedback_sender
        self.feedback_recipient = feedback_recipient
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, sender: str, to: List[str], subject: str, html: str) -> Optional[str]:
        payload = {"from": sender, "to": to, "subject": subject, "html": html}
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            r = self.session.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Email request failed: %s", e)
            raise EmailDeliveryError(f"Email request failed: {e}") from e

        if not r.ok:
            logger.error("Resend API error %s: %s", r.status_code, r.text)
            raise EmailDeliveryError(f"Resend API error: {r.text}")

        # the email is already accepted; an odd response body only costs the id
        try:
            body = r.json()
        except ValueError:
            body = None
        message_id = body.get("id") if isinstance(body, dict) else None
        logger.info("Email sent to %s (id=%s)", ", ".join(to), message_id)
        return message_id

    def send_results(
        self,
        address: str,
        profile: PlayerProfile,
        result: PlayabilityResult,
        preferences: Optional[ClubPreferences] = None,
    ) -> Optional[str]:
        html = render_results_html(profile, result, preferences)
        return self._post(self.sender, [address], RESULTS_SUBJECT, html)

    def send_feedback(self, submission: FeedbackSubmission) -> Optional[str]:
        html = render_feedback_html(submission)
        return self._post(self.feedback_sender, [self.feedback_recipient], feedback_subject(submission), html)


class LoggingMailer(ResultsMailer):
    """Stand-in used when no API key is configured: logs instead of sending.

    Only the last ``OUTBOX_LIMIT`` rendered messages are kept in ``outbox``,
    since a single instance lives for the whole process.
    """

    OUTBOX_LIMIT = 50

    def __init__(self):
        self.outbox = deque(maxlen=self.OUTBOX_LIMIT)

    def _record(self, to: str, subject: str, html: str) -> None:
        self.outbox.append({"to": to, "subject": subject, "html": html})
        logger.warning("Email delivery not configured; would send %r to %s", subject, to)

    def send_results(
        self,
        address: str,
        profile: PlayerProfile,
        result: PlayabilityResult,
        preferences: Optional[ClubPreferences] = None,
    ) -> Optional[str]:
        self._record(address, RESULTS_SUBJECT, render_results_html(profile, result, preferences))
        return None

    def send_feedback(self, submission: FeedbackSubmission) -> Optional[str]:
        self._record("admin", feedback_subject(submission), render_feedback_html(submission))
        return None
