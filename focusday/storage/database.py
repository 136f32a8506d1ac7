from sqlalchemy import create_engine, Column, String, Integer, Boolean, Text, DateTime
from sqlalchemy.orm import declarative_base, sessionmaker
from datetime import datetime
from focusday.config.settings import get_settings

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, pool_pre_ping=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, index=True)  # insertion order
    title = Column(String, nullable=False)
    duration = Column(Integer, nullable=False)
    priority = Column(String, nullable=False)
    energy = Column(String, nullable=False)
    category = Column(String, nullable=False)
    due_time = Column(Integer, nullable=True)  # minutes from midnight
    must_do = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, nullable=True)
    preferred_slot = Column(String, nullable=True)
    done = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class DayWindowModel(Base):
    __tablename__ = "day_window"

    id = Column(Integer, primary_key=True)
    day_start = Column(String(5), nullable=False)  # "HH:MM"
    day_end = Column(String(5), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


def init_db():
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
