"""SQLite-backed store for generated resumes and master CV profiles."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from resume_roast.errors import PersistenceError
from resume_roast.models.candidate import CandidateProfile
from resume_roast.models.resume import GeneratedResume

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".resume-roast" / "resumes.db"


class ResumeStore:
    """Generated resumes keyed by id, and one candidate profile per owner."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS generated_resumes (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    template TEXT NOT NULL,
                    ats_score INTEGER NOT NULL,
                    resume_json TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_generated_resumes_owner
                ON generated_resumes (owner_id, created_at)
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS candidate_profiles (
                    owner_id TEXT PRIMARY KEY,
                    profile_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def save_resume(self, resume: GeneratedResume) -> str:
        """Persist a generated resume and return its assigned id. Never retried."""
        resume_id = str(uuid.uuid4())
        stored = resume.model_copy(update={"id": resume_id})
        try:
            with self._connect() as conn:
                conn.execute(
                    """INSERT INTO generated_resumes
                       (id, owner_id, created_at, template, ats_score, resume_json)
                       VALUES (?, ?, ?, ?, ?, ?)""",
                    (
                        resume_id,
                        stored.owner_id,
                        stored.created_at.isoformat(),
                        stored.template.value,
                        stored.ats_score,
                        stored.model_dump_json(),
                    ),
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not save generated resume: {e}") from e
        logger.info("Generated resume stored: %s (owner=%s)", resume_id, stored.owner_id)
        return resume_id

    def get_resume(self, resume_id: str) -> GeneratedResume | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT resume_json FROM generated_resumes WHERE id = ?",
                    (resume_id,),
                ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not read generated resume: {e}") from e
        if row is None:
            return None
        return GeneratedResume.model_validate_json(row[0])

    def list_resumes(self, owner_id: str, limit: int = 20) -> list[GeneratedResume]:
        """Resumes generated for ``owner_id``, newest first."""
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    """SELECT resume_json FROM generated_resumes
                       WHERE owner_id = ? ORDER BY created_at DESC LIMIT ?""",
                    (owner_id, limit),
                ).fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not list generated resumes: {e}") from e
        return [GeneratedResume.model_validate_json(r[0]) for r in rows]

    def save_profile(self, owner_id: str, profile: CandidateProfile) -> None:
        """Store the owner's profile, replacing any earlier parse."""
        try:
            with self._connect() as conn:
                conn.execute(
                    """INSERT OR REPLACE INTO candidate_profiles
                       (owner_id, profile_json, updated_at) VALUES (?, ?, ?)""",
                    (owner_id, profile.model_dump_json(), datetime.now().isoformat()),
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not save candidate profile: {e}") from e

    def get_profile(self, owner_id: str) -> CandidateProfile | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT profile_json FROM candidate_profiles WHERE owner_id = ?",
                    (owner_id,),
                ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not read candidate profile: {e}") from e
        if row is None:
            return None
        try:
            return CandidateProfile.model_validate_json(row[0])
        except ValidationError as e:
            raise PersistenceError(f"Stored profile for {owner_id} is corrupt") from e
