# /sitebuilder/models/website_generation.py
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Boolean, DateTime, JSON
from sqlalchemy.dialects.mysql import LONGTEXT, DATETIME

from sitebuilder.core.database import Base

# LONGTEXT / DATETIME(fsp=6) on MySQL, portable types elsewhere
_LongText = Text().with_variant(LONGTEXT(), "mysql")
_Timestamp = DateTime().with_variant(DATETIME(fsp=6), "mysql")


class WebsiteGeneration(Base):
    """One persisted generation. Rows are inserted and deleted, never updated."""
    __tablename__ = "website_generations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)

    prompt: Mapped[str] = mapped_column(_LongText)
    generated_code: Mapped[str] = mapped_column(_LongText)

    has_backend: Mapped[bool] = mapped_column(Boolean, default=False)
    backend_code: Mapped[Optional[str]] = mapped_column(_LongText, nullable=True)
    database_schema: Mapped[Optional[str]] = mapped_column(_LongText, nullable=True)
    edge_functions: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    website_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    created_at: Mapped[datetime] = mapped_column(_Timestamp, default=datetime.utcnow, index=True)
