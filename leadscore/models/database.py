"""SQLAlchemy database models and setup."""

import json
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    Text,
    ForeignKey,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from leadscore.config import settings

Base = declarative_base()


class DBScoringRun(Base):
    """One ranking run over a batch of companies."""

    __tablename__ = "scoring_runs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(String(36), unique=True, nullable=False, index=True)
    criteria = Column(Text, nullable=False)  # JSON
    preset = Column(String(100))
    status = Column(String(50), default="pending")  # pending, completed, failed
    started_at = Column(DateTime, default=datetime.utcnow)
    completed_at = Column(DateTime)
    total_scored = Column(Integer, default=0)
    total_results = Column(Integer, default=0)
    error_message = Column(Text)

    results = relationship(
        "DBScoredCompany",
        back_populates="scoring_run",
        order_by="DBScoredCompany.rank",
    )


class DBScoredCompany(Base):
    """A ranked company within a scoring run."""

    __tablename__ = "scored_companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    scoring_run_id = Column(Integer, ForeignKey("scoring_runs.id"), nullable=False)
    company_id = Column(String(255), nullable=False)
    company_name = Column(String(500))

    rank = Column(Integer)
    score = Column(Float, nullable=False)
    max_possible_score = Column(Float, nullable=False)
    normalized_score = Column(Integer, nullable=False)

    matching_summary = Column(Text)  # JSON dict
    record = Column(Text)  # JSON dict of the scored company record

    scored_at = Column(DateTime, default=datetime.utcnow)

    scoring_run = relationship("DBScoringRun", back_populates="results")

    __table_args__ = (
        Index("idx_scored_run", "scoring_run_id"),
        Index("idx_scored_company", "company_id"),
        Index("idx_scored_normalized", "normalized_score"),
    )

    def get_matching_summary(self) -> dict:
        return json.loads(self.matching_summary) if self.matching_summary else {}

    def get_record(self) -> dict:
        return json.loads(self.record) if self.record else {}


# Database initialization
def init_db(db_url: Optional[str] = None) -> sessionmaker:
    """Initialize database and return session maker."""
    url = db_url or settings.database_url
    engine = create_engine(url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)


def get_session(db_url: Optional[str] = None) -> Session:
    """Get a new database session."""
    SessionLocal = init_db(db_url)
    return SessionLocal()
