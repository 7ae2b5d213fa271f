from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from roundscore.config import DATABASE_URL

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # Needed for SQLite

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all database tables."""
    from roundscore.models import template, interview, feedback, question_bank  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
