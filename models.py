from sqlalchemy import Column, Date, DateTime, Float, Index, JSON, Text, Uuid
from sqlalchemy.sql import func
from core.database import Base
import uuid


class SessionRecord(Base):
    """
    One past session, imported or from feedback.

    Both provenances share the table; ``provenance`` is the tag that decides
    how a row is read back (see services.history_store).
    """
    __tablename__ = "session_record"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    provenance = Column(Text, nullable=False)  # 'imported' | 'feedback'
    activity = Column(Text, nullable=False)
    activity_level = Column(Text, nullable=True)  # 'low' | 'medium' | 'high'

    # --- WHEN / WHERE ---
    session_date = Column(Date, nullable=False)
    session_time = Column(Text, nullable=True)  # "HH:MM", imported only
    recorded_at = Column(DateTime(timezone=True), nullable=True)  # feedback only
    location = Column(Text, nullable=True)

    # --- WEATHER (imperial) ---
    temperature = Column(Float, nullable=False)  # °F
    feels_like = Column(Float, nullable=False)  # °F
    humidity = Column(Float, nullable=False, default=0.0)
    pressure = Column(Float, nullable=False, default=0.0)
    precipitation = Column(Float, nullable=False, default=0.0)  # inches
    uv_index = Column(Float, nullable=False, default=0.0)
    wind_speed = Column(Float, nullable=False, default=0.0)  # mph
    cloud_cover = Column(Float, nullable=False, default=0.0)  # %
    description = Column(Text, nullable=True)

    # --- CLOTHING ---
    # Sparse {category: item}; only categories worn are present
    clothing = Column(JSON, nullable=False, default=dict)

    # --- FEEDBACK ---
    comfort = Column(Text, nullable=True)  # 'too_cold' | 'just_right' | 'too_hot'
    comments = Column(Text, nullable=True)

    __table_args__ = (
        Index("ix_session_record_activity_provenance", "activity", "provenance"),
        Index("ix_session_record_session_date", "session_date"),
    )
