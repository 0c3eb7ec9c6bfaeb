"""
services/board_service.py
-------------------------
Business rules for the board: result shaping (status + body) and the
password gate in front of update/delete.
"""

from dataclasses import dataclass
from typing import Any, Optional

from starlette.concurrency import run_in_threadpool

from repositories.board_repository import BoardRepository
from security.passwords import PasswordHasher
from utils.logger import get_logger

logger = get_logger(__name__)

NOT_FOUND = "NOT_FOUND"
INVALID_PASSWORD = "INVALID_PASSWORD"


@dataclass
class ServiceResult:
    status_code: int
    result: Any = None
    error: Optional[str] = None

    def body(self) -> dict:
        body = {}
        if self.result is not None:
            body["result"] = self.result
        if self.error is not None:
            body["error"] = self.error
        return body


class BoardService:
    def __init__(self, repository: BoardRepository, hasher: PasswordHasher):
        self.repository = repository
        self.hasher = hasher

    async def get_total_count(self, search: Optional[str] = None) -> int:
        return await self.repository.count(search)

    async def get_list(self, page_num: int, rows_per_page: int,
                       search: Optional[str] = None) -> list[dict]:
        return await self.repository.list(page_num, rows_per_page, search)

    async def get_detail(self, post_id: int) -> ServiceResult:
        # 없는 글은 404 가 아니라 422 로 응답 (기존 API 계약 유지)
        record = await self.repository.get_by_id(post_id)
        if not record:
            return ServiceResult(status_code=422, error=NOT_FOUND)
        return ServiceResult(status_code=200, result=record)

    async def insert_board(self, title: str, content: str, writer: str, password: str) -> ServiceResult:
        new_id = await self.repository.insert(title, content, writer, password)
        return ServiceResult(status_code=201, result=new_id)

    async def check_board_password(self, post_id: int, password: str) -> bool:
        """False for a wrong password and for a post that does not exist."""
        stored = await self.repository.get_password_hash(post_id)
        return await run_in_threadpool(self.hasher.verify_password, password, stored)

    async def delete_board(self, post_id: int, password: str) -> ServiceResult:
        if not await self.check_board_password(post_id, password):
            logger.warning(f"Rejected delete of board post #{post_id}: invalid password")
            return ServiceResult(status_code=422, error=INVALID_PASSWORD)
        affected = await self.repository.delete(post_id)
        return ServiceResult(status_code=200, result=affected)

    async def update_board(self, post_id: int, title: str, content: str, password: str) -> ServiceResult:
        if not await self.check_board_password(post_id, password):
            logger.warning(f"Rejected update of board post #{post_id}: invalid password")
            return ServiceResult(status_code=422, error=INVALID_PASSWORD)
        affected = await self.repository.update(post_id, title, content)
        return ServiceResult(status_code=200, result=affected)
