# models/board.py

from sqlalchemy import Table, Column, Integer, String, Text, DateTime, func
from database.connection import metadata

EDIT_MARKER = "[edited]"

board = Table(
    "board",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),           # 제목
    Column("content", Text, nullable=False),                # 본문
    Column("writer", String(100), nullable=False),          # 작성자 표시 이름
    Column("password", String(255), nullable=False),        # 2단계 해시, 응답에 절대 포함하지 않음
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    Column("updated_at", DateTime, nullable=True),          # 수정 시 storage 시각으로 갱신
    sqlite_autoincrement=True,                              # 삭제된 id 재사용 방지
)


def mark_edited(title: str) -> str:
    """수정된 글 제목에 마커를 한 번만 붙인다."""
    if title.startswith(EDIT_MARKER):
        return title
    return f"{EDIT_MARKER} {title}"
