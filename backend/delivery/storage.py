import csv
import logging
import sqlite3
import uuid
from contextlib import closing
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List

import pandas as pd

from playability.models import ClubPreferences, PlayabilityResult, PlayerProfile
from .base import ResultsStore, StorageError
from .models import FeedbackEntry, FeedbackSubmission, FeedbackSummary

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS saved_calculations (
    id                      TEXT PRIMARY KEY,
    created_at              TEXT NOT NULL,
    swing_speed             REAL NOT NULL,
    handicap                REAL NOT NULL,
    avg_distance            REAL NOT NULL,
    play_style              TEXT NOT NULL,
    playability_factor      INTEGER NOT NULL,
    category                TEXT NOT NULL,
    player_height           REAL,
    wrist_to_floor          REAL,
    hand_size               TEXT,
    gender                  TEXT,
    handgrip_issues         TEXT,
    ball_flight_tendency    TEXT,
    club_length_adjustment  TEXT,
    lie_angle_adjustment    TEXT,
    shaft_preference        TEXT,
    swing_weight_adjustment TEXT,
    grip_sizes              TEXT,
    club_condition          TEXT,
    grip_preference         TEXT,
    look_preference         TEXT,
    budget_range            TEXT,
    brand_preference        TEXT
);

CREATE TABLE IF NOT EXISTS user_feedback (
    id             TEXT PRIMARY KEY,
    created_at     TEXT NOT NULL,
    rating         INTEGER NOT NULL CHECK (rating BETWEEN 1 AND 5),
    name           TEXT,
    feedback_text  TEXT,
    calculation_id TEXT REFERENCES saved_calculations(id)
);
"""

CSV_HEADERS = ["Date", "Name", "Rating", "Feedback"]


def _value(v):
    return v.value if isinstance(v, Enum) else v


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteResultsStore(ResultsStore):
    """Calculations and feedback in a single SQLite file.

    A connection is opened per operation, so one instance can be shared
    across request threads. Needs a real file path; ":memory:" would give
    every operation its own empty database.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        with closing(self._connect()) as conn:
            conn.executescript(SCHEMA)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _execute(self, sql: str, params: tuple = ()) -> int:
        """Run a write statement in its own transaction; returns the row count."""
        try:
            with closing(self._connect()) as conn:
                with conn:
                    return conn.execute(sql, params).rowcount
        except sqlite3.Error as e:
            logger.error("Database error: %s", e)
            raise StorageError(f"Database error: {e}") from e

    def _query(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            with closing(self._connect()) as conn:
                return conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            logger.error("Database error: %s", e)
            raise StorageError(f"Database error: {e}") from e

    def save(self, profile: PlayerProfile, result: PlayabilityResult) -> str:
        calculation_id = str(uuid.uuid4())
        row = {
            "id": calculation_id,
            "created_at": _now(),
            "swing_speed": profile.swing_speed_mph,
            "handicap": profile.handicap_index,
            "avg_distance": profile.avg_driver_distance_yds,
            "play_style": _value(profile.play_style),
            "playability_factor": result.factor,
            "category": result.category,
            "player_height": profile.player_height_in,
            "wrist_to_floor": profile.wrist_to_floor_in,
            "hand_size": _value(profile.hand_size),
            "gender": _value(profile.gender),
            "handgrip_issues": _value(profile.handgrip_issues),
            "ball_flight_tendency": _value(profile.ball_flight_tendency),
            "club_length_adjustment": profile.club_length_adjustment,
            "lie_angle_adjustment": profile.lie_angle_adjustment,
            "shaft_preference": profile.shaft_preference,
            "swing_weight_adjustment": profile.swing_weight_adjustment,
            "grip_sizes": profile.grip_sizes,
        }
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        self._execute(
            f"INSERT INTO saved_calculations ({columns}) VALUES ({placeholders})",
            tuple(row.values()),
        )
        logger.info("Saved calculation %s (factor=%d, %s)", calculation_id, result.factor, result.category)
        return calculation_id

    def attach_preferences(self, calculation_id: str, preferences: ClubPreferences) -> bool:
        rowcount = self._execute(
            """
            UPDATE saved_calculations
               SET club_condition = ?, grip_preference = ?, look_preference = ?,
                   budget_range = ?, brand_preference = ?
             WHERE id = ?
            """,
            (
                preferences.club_condition,
                preferences.grip_preference,
                preferences.look_preference,
                preferences.budget_range,
                preferences.brand_preference,
                calculation_id,
            ),
        )
        updated = rowcount > 0
        if not updated:
            logger.warning("No saved calculation %s to attach preferences to", calculation_id)
        return updated

    def get_calculation(self, calculation_id: str) -> dict:
        rows = self._query("SELECT * FROM saved_calculations WHERE id = ?", (calculation_id,))
        return dict(rows[0]) if rows else {}

    def save_feedback(self, submission: FeedbackSubmission) -> str:
        feedback_id = str(uuid.uuid4())
        self._execute(
            """
            INSERT INTO user_feedback (id, created_at, rating, name, feedback_text, calculation_id)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                feedback_id,
                _now(),
                submission.rating,
                submission.name,
                submission.feedback_text,
                submission.calculation_id,
            ),
        )
        logger.info("Saved feedback %s (rating=%d)", feedback_id, submission.rating)
        return feedback_id

    def list_feedback(self) -> List[FeedbackEntry]:
        rows = self._query(
            "SELECT * FROM user_feedback ORDER BY created_at DESC, rowid DESC"
        )
        return [FeedbackEntry(**dict(row)) for row in rows]

    def feedback_summary(self) -> FeedbackSummary:
        row = self._query("SELECT COUNT(*) AS total, AVG(rating) AS average FROM user_feedback")[0]
        average = round(row["average"], 1) if row["average"] is not None else 0.0
        return FeedbackSummary(total=row["total"], average_rating=average)

    def export_feedback_csv(self) -> str:
        entries = self.list_feedback()
        df = pd.DataFrame(
            [
                [
                    e.created_at[:10],
                    e.name or "Anonymous",
                    e.rating,
                    e.feedback_text or "",
                ]
                for e in entries
            ],
            columns=CSV_HEADERS,
        )
        return df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
