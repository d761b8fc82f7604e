# backend/app/schemas/client_schema.py
"""
Esquemas Pydantic para el modelo Client.

Patrón de esquemas utilizado:
- ClientBase: Propiedades comunes compartidas
- ClientCreate: Para registrar nuevos clientes (POST)
- ClientUpdate: Para actualizaciones parciales (PUT)
- ClientResponse: Para respuestas de la API (GET)
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

# ========================================
# ESQUEMA BASE
# ========================================

class ClientBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de cliente."""
    name: str = Field(..., description="Nombre del cliente")
    email: Optional[EmailStr] = Field(None, description="Email del cliente (único si se informa)")
    phone: Optional[str] = Field(None, description="Teléfono de contacto")


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class ClientCreate(ClientBase):
    """Esquema para registrar un nuevo cliente. El id lo asigna el almacén."""
    pass


class ClientUpdate(ClientBase):
    """Esquema para actualizar un cliente. Solo se aplican los campos enviados."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class ClientResponse(ClientBase):
    """Esquema para las respuestas de la API al leer clientes."""
    id: str
    purchase_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
