# backend/app/schemas/purchase_schema.py
"""
Se encarga de definir los esquemas Pydantic para el modelo Purchase.

Una compra tiene un núcleo común (cliente, importe, fecha, estado) y dos formas
opcionales de detalle que conviven en la misma entidad:
- simple: una descripción libre en `details`
- estructurada: dirección, método de pago, receta óptica, referencias y seña
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime, timezone
import enum

from .client_schema import ClientResponse


class PaymentMethod(str, enum.Enum):
    """Métodos de pago aceptados."""
    CARD = "Card"
    INVOICE = "Invoice"
    CASH = "Cash"
    TRANSFER = "Transfer"
    PIX = "Pix"


# ========================================
# SUB-DOCUMENTOS DE LA VARIANTE ESTRUCTURADA
# ========================================

class Address(BaseModel):
    street: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None


class EyePrescription(BaseModel):
    """Valores de la receta para un ojo."""
    spherical: Optional[str] = None
    cylindrical: Optional[str] = None
    axis: Optional[str] = None


class EyePair(BaseModel):
    right: Optional[EyePrescription] = None
    left: Optional[EyePrescription] = None


class Prescription(BaseModel):
    """Receta óptica para visión de lejos y de cerca."""
    distance: Optional[EyePair] = None
    near: Optional[EyePair] = None


# ========================================
# ESQUEMA BASE
# ========================================

def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Las fechas sin zona se interpretan como UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PurchaseBase(BaseModel):
    """Propiedades de detalle compartidas entre esquemas de compra."""
    details: Optional[str] = Field(None, description="Descripción libre del pedido")
    address: Optional[Address] = Field(None, description="Dirección de entrega")
    tax_id: Optional[str] = Field(None, description="Documento fiscal del comprador")
    payment_method: Optional[PaymentMethod] = Field(None, description="Método de pago")
    prescription: Optional[Prescription] = Field(None, description="Receta óptica")
    frame_ref: Optional[str] = Field(None, description="Referencia de la montura")
    lens_ref: Optional[str] = Field(None, description="Referencia de la lente")
    notes: Optional[str] = Field(None, description="Otras observaciones")


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class PurchaseCreate(PurchaseBase):
    """Esquema para registrar un nuevo pedido."""
    client_id: str = Field(..., description="ID del cliente")
    total_amount: float = Field(..., allow_inf_nan=False, description="Monto total del pedido")
    purchase_date: Optional[datetime] = Field(None, description="Fecha del pedido; por defecto, ahora")
    purchase_status: bool = Field(False, description="Pagado/entregado")
    deposit: float = Field(0, ge=0, description="Seña abonada")

    @field_validator('purchase_date')
    @classmethod
    def normalize_purchase_date(cls, v):
        return _as_utc(v)


class PurchaseUpdate(PurchaseBase):
    """Esquema para enmendar un pedido. Solo se aplican los campos enviados."""
    client_id: Optional[str] = None
    total_amount: Optional[float] = Field(None, allow_inf_nan=False)
    purchase_date: Optional[datetime] = None
    purchase_status: Optional[bool] = None
    deposit: Optional[float] = Field(None, ge=0)

    @field_validator('purchase_date')
    @classmethod
    def normalize_purchase_date(cls, v):
        return _as_utc(v)


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class PurchaseResponse(PurchaseBase):
    """Esquema completo de respuesta para un pedido."""
    id: str
    client_id: str
    total_amount: float
    purchase_date: datetime
    purchase_status: bool
    deposit: float = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PurchaseDetail(PurchaseResponse):
    """Pedido con el cliente resuelto; `client` es null si el cliente ya no existe."""
    client: Optional[ClientResponse] = None


class ClientWithPurchases(BaseModel):
    """Cliente junto con todos los pedidos que lo referencian."""
    client: ClientResponse
    purchases: List[PurchaseResponse] = []
