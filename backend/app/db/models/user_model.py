# backend/app/db/models/user_model.py
"""
Modelo de usuario (cuenta de acceso a la aplicación).
"""

from sqlalchemy import Column, String, DateTime

from app.db.database import Base
from app.db.models.client_model import _new_id, _utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, index=True, default=_new_id)
    username = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
