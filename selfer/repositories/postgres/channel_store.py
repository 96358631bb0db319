# selfer/repositories/postgres/channel_store.py
from __future__ import annotations
import json
import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from selfer.models.channel import Channel, normalize_code

logger = logging.getLogger(__name__)

TABLE_NAME = "channel_kv"
KEY_PREFIX = "channel:"

CREATE_TABLE_SQL = f"""
    CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
        key VARCHAR(64) PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
"""


def channel_key(code: str) -> str:
    """channel:{CODE} 형태의 저장 키"""
    return f"{KEY_PREFIX}{normalize_code(code)}"


def create_table(db: Session) -> None:
    db.execute(text(CREATE_TABLE_SQL))
    db.commit()


class PostgresChannelStore:
    """
    외부 KV 저장소 (멀티 인스턴스 배포용)
    - 채널당 1 row, value는 채널 전체 JSON
    - 보조 인덱스/스키마 버전 없음
    """

    def __init__(self, db: Session):
        self.db = db

    def get_channel(self, code: str) -> Optional[Channel]:
        q = text(f"""
            SELECT value
            FROM {TABLE_NAME}
            WHERE key = :key
        """)
        row = self.db.execute(q, {"key": channel_key(code)}).mappings().one_or_none()
        if not row:
            return None
        try:
            return Channel.from_dict(json.loads(row["value"]))
        except (ValueError, KeyError, TypeError) as e:
            # 깨진 레코드는 없는 채널로 취급
            logger.error(f"[get_channel] 레코드 파싱 실패 (code={code}): {e}")
            return None

    def save_channel(self, channel: Channel) -> None:
        q = text(f"""
            INSERT INTO {TABLE_NAME} (key, value, updated_at)
            VALUES (:key, :value, CURRENT_TIMESTAMP)
            ON CONFLICT (key) DO UPDATE
            SET value = excluded.value,
                updated_at = excluded.updated_at
        """)
        payload = json.dumps(channel.to_dict(), ensure_ascii=False)
        self.db.execute(q, {"key": channel_key(channel.code), "value": payload})
        self.db.commit()

    def delete_channel(self, code: str) -> bool:
        q = text(f"""
            DELETE FROM {TABLE_NAME}
            WHERE key = :key
        """)
        res = self.db.execute(q, {"key": channel_key(code)})
        self.db.commit()
        return (res.rowcount or 0) > 0

    def channel_exists(self, code: str) -> bool:
        q = text(f"""
            SELECT 1
            FROM {TABLE_NAME}
            WHERE key = :key
        """)
        return self.db.execute(q, {"key": channel_key(code)}).first() is not None
