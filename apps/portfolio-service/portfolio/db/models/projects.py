from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import relationship
from .base import Base, now_utc
from ..types import StringList


class Project(Base):
    __tablename__ = 'projects'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    images = Column(StringList(), nullable=True, default=list)
    main_image = Column(String(1024), nullable=True)
    skills = Column(StringList(), nullable=True, default=list)
    client = Column(String(255), nullable=True)
    link = Column(String(1024), nullable=True)
    position = Column(Integer, nullable=False, default=0)
    category_id = Column(Integer, ForeignKey('categories.id', ondelete='CASCADE'), nullable=False)
    owner_id = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    category = relationship("Category", back_populates="projects")

    __table_args__ = (
        Index('idx_projects_category_position', 'category_id', 'position'),
        Index('idx_projects_client', 'client'),
    )
