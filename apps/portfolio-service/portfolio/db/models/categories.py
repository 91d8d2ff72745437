from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Category(Base):
    __tablename__ = 'categories'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)
    portfolio_id = Column(Integer, ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False)
    owner_id = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    portfolio = relationship("Portfolio", back_populates="categories")
    projects = relationship(
        "Project",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="[Project.position, Project.created_at, Project.id]",
    )

    __table_args__ = (
        Index('idx_categories_portfolio_position', 'portfolio_id', 'position'),
    )
