# backend/app/db/models/client_model.py
"""
Se encarga de definir el modelo de cliente para la aplicación.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime
from app.db.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(32), primary_key=True, index=True, default=_new_id)
    name = Column(String(255), nullable=False)
    # Único cuando está presente; varios clientes pueden no tener email
    email = Column(String(255), unique=True, index=True, nullable=True)
    phone = Column(String(50), nullable=True)
    # Contador desnormalizado de compras; caché de mejor esfuerzo, la fuente de verdad es la tabla purchases
    purchase_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.name}', purchase_count={self.purchase_count})>"
