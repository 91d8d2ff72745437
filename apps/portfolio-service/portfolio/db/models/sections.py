from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, Text, JSON
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Section(Base):
    __tablename__ = 'sections'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    portfolio_id = Column(Integer, ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False)
    owner_id = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    portfolio = relationship("Portfolio", back_populates="sections")
    contents = relationship(
        "SectionContent",
        back_populates="section",
        cascade="all, delete-orphan",
        order_by="[SectionContent.order, SectionContent.id]",
    )

    __table_args__ = (
        Index('idx_sections_portfolio_position', 'portfolio_id', 'position'),
        Index('idx_sections_type', 'type'),
    )


class SectionContent(Base):
    __tablename__ = 'section_contents'
    id = Column(Integer, primary_key=True, autoincrement=True)
    section_id = Column(Integer, ForeignKey('sections.id', ondelete='CASCADE'), nullable=False)
    # 'text' | 'image'
    type = Column(String(20), nullable=False, default='text')
    content = Column(Text, nullable=False)
    order = Column(Integer, nullable=False, default=0)
    # `metadata` is reserved on declarative classes
    metadata_json = Column('metadata', JSON, nullable=True)
    owner_id = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    section = relationship("Section", back_populates="contents")

    __table_args__ = (
        Index('idx_section_contents_section_order', 'section_id', 'order'),
    )
