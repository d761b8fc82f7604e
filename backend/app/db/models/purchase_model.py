# backend/app/db/models/purchase_model.py
"""
Este archivo contiene el modelo de compra (pedido) para la aplicación.

Una compra referencia a un cliente por su id, sin clave foránea: el pedido
puede apuntar a un cliente inexistente y borrar un cliente no elimina sus
compras. Los sub-documentos estructurados (dirección, receta óptica) se
guardan como JSON.
"""

from sqlalchemy import Column, String, Text, Boolean, Numeric, DateTime, JSON

from app.db.database import Base
from app.db.models.client_model import _new_id, _utcnow


class Purchase(Base):
    __tablename__ = "purchases"

    id = Column(String(32), primary_key=True, index=True, default=_new_id)
    client_id = Column(String(64), nullable=False, index=True)
    purchase_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    total_amount = Column(Numeric(12, 2), nullable=False)
    purchase_status = Column(Boolean, nullable=False, default=False)

    # Variante simple
    details = Column(Text, nullable=True)

    # Variante estructurada
    address = Column(JSON, nullable=True)
    tax_id = Column(String(20), nullable=True)
    payment_method = Column(String(20), nullable=True)
    prescription = Column(JSON, nullable=True)
    frame_ref = Column(String(255), nullable=True)
    lens_ref = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    deposit = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<Purchase(id={self.id}, client_id='{self.client_id}', status={self.purchase_status})>"
