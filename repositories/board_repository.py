"""
repositories/board_repository.py
--------------------------------
Data access layer for bulletin-board posts.
All SQL touching the `board` table lives here.
"""

from typing import Any, Optional

from databases import Database
from starlette.concurrency import run_in_threadpool

from models.board import mark_edited
from security.passwords import PasswordHasher
from utils.logger import get_logger, log_db_error

logger = get_logger(__name__)

_SEARCH_CLAUSE = """
    WHERE LOWER(title) LIKE :pattern ESCAPE '\\'
       OR LOWER(content) LIKE :pattern ESCAPE '\\'
       OR LOWER(writer) LIKE :pattern ESCAPE '\\'
"""


def search_pattern(search: Optional[str]) -> Optional[str]:
    """Lower-cased LIKE pattern for a trimmed search term, or None to skip filtering."""
    if search is None:
        return None
    term = search.strip()
    if not term:
        return None
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class BoardRepository:
    """Repository for CRUD operations on the board table."""

    table = "board"

    def __init__(self, database: Database, hasher: PasswordHasher):
        self.database = database
        self.hasher = hasher

    # ── READ ──────────────────────────────────────────────

    async def count(self, search: Optional[str] = None) -> int:
        """게시판 총 개수 (검색어가 있으면 제목/내용/작성자 부분 일치)"""
        sql = f"SELECT COUNT(*) AS total_count FROM {self.table}"
        values: dict[str, Any] = {}
        pattern = search_pattern(search)
        if pattern is not None:
            sql += _SEARCH_CLAUSE
            values["pattern"] = pattern
        try:
            total = await self.database.fetch_val(sql, values)
            return int(total or 0)
        except Exception as e:
            log_db_error("board", self.table, "count", e)
            raise

    async def list(self, page_num: int = 1, rows_per_page: int = 10,
                   search: Optional[str] = None) -> list[dict]:
        """
        Fetch one page of post summaries, newest first.

        Args:
            page_num: 1-based page number.
            rows_per_page: Page size.
            search: Optional search term.

        Returns:
            Summaries without `content` and `password`.
        """
        sql = f"""
            SELECT id, title, writer, created_at, updated_at
            FROM {self.table}
        """
        values: dict[str, Any] = {}
        pattern = search_pattern(search)
        if pattern is not None:
            sql += _SEARCH_CLAUSE
            values["pattern"] = pattern
        sql += """
            ORDER BY id DESC
            LIMIT :limit OFFSET :offset
        """
        values["limit"] = rows_per_page
        values["offset"] = (page_num - 1) * rows_per_page
        try:
            rows = await self.database.fetch_all(sql, values)
        except Exception as e:
            log_db_error("board", self.table, "list", e)
            raise
        return [self._row_to_summary(r) for r in rows]

    async def get_by_id(self, post_id: int) -> Optional[dict]:
        sql = f"""
            SELECT id, title, content, writer, created_at, updated_at
            FROM {self.table}
            WHERE id = :id
        """
        try:
            row = await self.database.fetch_one(sql, {"id": post_id})
        except Exception as e:
            log_db_error("board", self.table, "get_by_id", e)
            raise
        if not row:
            return None
        detail = self._row_to_summary(row)
        detail["content"] = row["content"]
        return detail

    async def get_password_hash(self, post_id: int) -> Optional[str]:
        sql = f"SELECT password FROM {self.table} WHERE id = :id"
        try:
            return await self.database.fetch_val(sql, {"id": post_id})
        except Exception as e:
            log_db_error("board", self.table, "get_password_hash", e)
            raise

    # ── CREATE ────────────────────────────────────────────

    async def insert(self, title: str, content: str, writer: str, password: str) -> int:
        """Hash the password, store the post and return its generated id."""
        # bcrypt 는 이벤트 루프 밖에서
        hashed = await run_in_threadpool(self.hasher.hash_password, password)
        sql = f"""
            INSERT INTO {self.table} (title, content, writer, password)
            VALUES (:title, :content, :writer, :password)
            RETURNING id
        """
        try:
            new_id = await self.database.fetch_val(sql, {
                "title": title,
                "content": content,
                "writer": writer,
                "password": hashed,
            })
        except Exception as e:
            log_db_error("board", self.table, "insert", e)
            raise
        logger.info(f"Inserted board post #{new_id}")
        return int(new_id)

    # ── UPDATE ────────────────────────────────────────────

    async def update(self, post_id: int, title: str, content: str) -> int:
        sql = f"""
            UPDATE {self.table}
            SET title = :title,
                content = :content,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = :id
            RETURNING id
        """
        try:
            rows = await self.database.fetch_all(sql, {
                "title": mark_edited(title),
                "content": content,
                "id": post_id,
            })
        except Exception as e:
            log_db_error("board", self.table, "update", e)
            raise
        return len(rows)

    # ── DELETE ────────────────────────────────────────────

    async def delete(self, post_id: int) -> int:
        sql = f"DELETE FROM {self.table} WHERE id = :id RETURNING id"
        try:
            rows = await self.database.fetch_all(sql, {"id": post_id})
        except Exception as e:
            log_db_error("board", self.table, "delete", e)
            raise
        if rows:
            logger.info(f"Deleted board post #{post_id}")
        return len(rows)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_summary(row) -> dict:
        return {
            "id": row["id"],
            "title": row["title"],
            "writer": row["writer"],
            "createdAt": row["created_at"],
            "updatedAt": row["updated_at"],
        }
