from sqlalchemy import Column, DateTime, Text
from sqlalchemy.sql import func
from alertwatch.core.db import Base

class AlertSnapshot(Base):
    __tablename__ = "alert_snapshots"

    alert_id = Column(Text, primary_key=True)

    header = Column(Text, nullable=True)
    period = Column(Text, nullable=True)

    first_seen_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_seen_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
