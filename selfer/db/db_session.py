# selfer/db/db_session.py
from sqlalchemy.orm import Session

from selfer.config import settings

DATABASE_URL = settings.database_url

# DATABASE_URL이 있을 때만 세션 팩토리 생성 (memory 모드면 None)
if DATABASE_URL:
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker

    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        future=True,
    )

    SessionLocal = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        future=True,
    )
else:
    engine = None
    SessionLocal = None


def get_db() -> Session:
    """
    FastAPI Depends로 사용:
      def endpoint(db: Session = Depends(get_db))
    """
    if SessionLocal is None:
        raise RuntimeError("DATABASE_URL is not set; database is not configured.")

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
