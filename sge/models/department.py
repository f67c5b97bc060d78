"""Department model"""
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from sge.database import Base, utcnow


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    code = Column(String(20), unique=True, nullable=False, index=True)
    description = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    created_by = Column(String(255), nullable=False, default="")
    updated_by = Column(String(255), nullable=False, default="")

    # Relationships
    employees = relationship("Employee", back_populates="department")
