from sqlalchemy import Column, Integer, String, DateTime, Text, Index
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Portfolio(Base):
    __tablename__ = 'portfolios'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    owner_id = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    categories = relationship(
        "Category",
        back_populates="portfolio",
        cascade="all, delete-orphan",
        order_by="[Category.position, Category.created_at, Category.id]",
    )
    sections = relationship(
        "Section",
        back_populates="portfolio",
        cascade="all, delete-orphan",
        order_by="[Section.position, Section.created_at, Section.id]",
    )

    __table_args__ = (
        Index('idx_portfolios_owner_title', 'owner_id', 'title'),
    )
