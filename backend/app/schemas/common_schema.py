# backend/app/schemas/common_schema.py
"""Esquemas genéricos de respuesta compartidos por varios routers."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Respuesta con un único mensaje legible."""
    message: str
