# database/connection.py
from databases import Database
from sqlalchemy import MetaData
from sqlalchemy.schema import CreateTable

metadata = MetaData()


def build_database(settings) -> Database:
    return Database(settings.database_url)


async def create_tables(database: Database) -> None:
    # 모델 모듈이 metadata 에 테이블을 등록한다
    from models import board  # noqa: F401

    if not database.is_connected:
        await database.connect()

    for table in metadata.sorted_tables:
        await database.execute(CreateTable(table, if_not_exists=True))

    # databases 는 자동 커밋
