# selfer/utils/logging_helper.py
import logging
import os
import sys
from typing import Iterable


def setup_logging(level_name: str | None = None) -> None:
    """
    목표:
    - 코드(selfer.*)는 LOG_LEVEL로 컨트롤 (dev=DEBUG 유지 가능)
    - 서드파티 noisy 로그(urllib3, httpx, google sdk, sqlalchemy 등)는 기본 WARNING 이상으로 올려서 조용히
    - 필요할 때만 ALLOW_THIRDPARTY_DEBUG=1 로 노이즈 로거를 INFO까지 풀 수 있음
    """

    # 1) UTF-8 stdout/stderr (한글 토픽 로그 깨짐 방지)
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    # 2) 앱 전체 레벨
    log_level_str = (level_name or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, log_level_str, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # 기존 핸들러 제거(중복 출력 방지)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root.addHandler(handler)

    def _set_level(names: Iterable[str], lvl: int) -> None:
        for n in names:
            logging.getLogger(n).setLevel(lvl)

    # 3) 기본: 서드파티는 조용히
    allow_thirdparty_debug = os.getenv("ALLOW_THIRDPARTY_DEBUG", "0") == "1"
    thirdparty_level = logging.INFO if allow_thirdparty_debug else logging.WARNING

    # --- HTTP/네트워크 ---
    _set_level(["urllib3", "urllib3.connectionpool", "httpx", "httpcore"], thirdparty_level)

    # --- Google SDK (vertexai/aiplatform/auth) ---
    _set_level(
        [
            "google",
            "google.auth",
            "google.auth.transport",
            "google.api_core",
            "google.cloud",
            "vertexai",
        ],
        thirdparty_level,
    )

    # --- DB(SQLAlchemy): SQL 쿼리/바인드 파라미터 로그 방지 ---
    _set_level(["sqlalchemy", "sqlalchemy.engine", "sqlalchemy.pool"], thirdparty_level)

    # --- Uvicorn: access 로그는 기본 조용히 (폴링 요청이 많음) ---
    logging.getLogger("uvicorn").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "logging initialized (LOG_LEVEL=%s, ALLOW_THIRDPARTY_DEBUG=%s)",
        log_level_str,
        allow_thirdparty_debug,
    )
