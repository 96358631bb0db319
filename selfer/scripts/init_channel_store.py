# selfer/scripts/init_channel_store.py
# 외부 KV(Postgres) 모드용 channel_kv 테이블 생성 스크립트

import argparse
import logging
import sys

from selfer.repositories.postgres.channel_store import CREATE_TABLE_SQL, TABLE_NAME, create_table
from selfer.utils.logging_helper import setup_logging

logger = logging.getLogger(__name__)


def run(database_url: str, dry_run: bool = False) -> int:
    if dry_run:
        print(CREATE_TABLE_SQL.strip())
        logger.info("(Dry-run) 실제 DB는 변경되지 않았습니다.")
        return 0

    if not database_url:
        logger.error("DATABASE_URL이 없습니다. --database-url 또는 환경변수를 지정하세요.")
        return 1

    from sqlalchemy import create_engine
    from sqlalchemy.orm import Session

    engine = create_engine(database_url, future=True)
    with Session(engine) as db:
        create_table(db)
    logger.info(f"테이블 준비 완료: {TABLE_NAME}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Channel KV table setup")
    parser.add_argument("--database-url", default=None, help="기본값: DATABASE_URL 환경변수")
    parser.add_argument("--dry-run", action="store_true", help="DDL만 출력")
    args = parser.parse_args(argv)

    setup_logging()

    database_url = args.database_url
    if database_url is None:
        from selfer.config import settings
        database_url = settings.database_url

    return run(database_url, dry_run=args.dry_run)


if __name__ == "__main__":
    sys.exit(main())
