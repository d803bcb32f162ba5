"""
User persistence helpers.
"""

from __future__ import annotations

from core.db import Database

USER_COLUMNS = "id, username, email, password, created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.db = database

    async def create_user(self, *, username: str, email: str, password_hash: str) -> dict:
        row = await self.db.fetch_one(
            f"""
            INSERT INTO users (username, email, password)
            VALUES (?, ?, ?)
            RETURNING {USER_COLUMNS}
            """,
            username.strip(),
            normalize_email(email),
            password_hash,
        )
        if row is None:
            raise RuntimeError("Failed to create user.")
        return row

    async def get_user_by_identifier(self, identifier: str) -> dict | None:
        """
        Look a user up by username or (case-insensitive) email.
        """
        return await self.db.fetch_one(
            f"""
            SELECT {USER_COLUMNS}
            FROM users
            WHERE username = ?
               OR lower(email) = ?
            LIMIT 1
            """,
            (identifier or "").strip(),
            normalize_email(identifier),
        )

    async def username_or_email_taken(self, *, username: str, email: str) -> bool:
        row = await self.db.fetch_one(
            """
            SELECT 1 AS taken
            FROM users
            WHERE username = ?
               OR lower(email) = ?
            LIMIT 1
            """,
            username.strip(),
            normalize_email(email),
        )
        return row is not None

    async def get_user_by_id(self, user_id: int) -> dict | None:
        return await self.db.fetch_one(
            f"""
            SELECT {USER_COLUMNS}
            FROM users
            WHERE id = ?
            """,
            user_id,
        )
