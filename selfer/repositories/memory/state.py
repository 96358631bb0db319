# selfer/repositories/memory/state.py

import copy
from typing import Dict, Optional

from selfer.models.channel import Channel, normalize_code


# 저장소 (프로세스 단위, 최초 import 시 생성)
channels: Dict[str, Channel] = {}


def get_channel(code: str) -> Optional[Channel]:
    """채널 조회 (저장본과 분리된 사본 반환)"""
    ch = channels.get(normalize_code(code))
    return copy.deepcopy(ch) if ch else None


def save_channel(channel: Channel) -> None:
    """채널 전체 덮어쓰기"""
    channels[normalize_code(channel.code)] = copy.deepcopy(channel)


def delete_channel(code: str) -> bool:
    """채널 삭제"""
    key = normalize_code(code)
    if key in channels:
        del channels[key]
        return True
    return False


def clear() -> None:
    channels.clear()
