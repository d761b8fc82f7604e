# backend/app/crud/client_crud.py
"""
Este archivo contiene las operaciones CRUD para el modelo Client.

Incluye el ajuste atómico del contador desnormalizado de compras y su
recálculo a partir de la tabla purchases.
"""

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional

from app.db.models.client_model import Client
from app.db.models.purchase_model import Purchase

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_client(db: AsyncSession, client_id: str) -> Optional[Client]:
    """Obtiene un cliente por su ID de forma asíncrona."""
    result = await db.execute(select(Client).filter(Client.id == client_id))
    return result.scalars().first()

async def get_client_by_email(db: AsyncSession, email: str) -> Optional[Client]:
    """
    Busca un cliente por su dirección de correo electrónico de forma asíncrona.
    """
    result = await db.execute(select(Client).filter(Client.email == email))
    return result.scalars().first()

async def get_clients(db: AsyncSession) -> List[Client]:
    """Obtiene todos los clientes, sin orden garantizado."""
    result = await db.execute(select(Client))
    return list(result.scalars().all())

# ========================================
# OPERACIONES DE ESCRITURA
# ========================================

async def create_client(db: AsyncSession, name: str, email: Optional[str] = None, phone: Optional[str] = None) -> Client:
    """
    Crea un nuevo cliente con el contador de compras a cero.
    """
    db_client = Client(name=name, email=email, phone=phone, purchase_count=0)
    db.add(db_client)
    await db.commit()
    await db.refresh(db_client)
    return db_client

async def update_client(db: AsyncSession, db_client: Client, update_data: Dict[str, Any]) -> Client:
    """Aplica solo los campos recibidos sobre un cliente existente."""
    for key, value in update_data.items():
        setattr(db_client, key, value)

    await db.commit()
    await db.refresh(db_client)
    return db_client

async def delete_client(db: AsyncSession, db_client: Client) -> Client:
    """Elimina un cliente. Sus compras no se tocan."""
    await db.delete(db_client)
    await db.commit()
    return db_client

# ========================================
# CONTADOR DESNORMALIZADO DE COMPRAS
# ========================================

async def adjust_purchase_count(db: AsyncSession, client_id: str, delta: int) -> int:
    """
    Suma `delta` al contador de compras del cliente en una única sentencia UPDATE.

    Los decrementos nunca bajan de cero: la condición del WHERE deja la fila
    intacta si el contador ya es 0. Devuelve el número de filas afectadas
    (0 si el cliente no existe o ya estaba a cero).
    """
    stmt = update(Client).where(Client.id == client_id)
    if delta < 0:
        stmt = stmt.where(Client.purchase_count >= -delta)
    stmt = stmt.values(purchase_count=Client.purchase_count + delta)

    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount

async def count_purchases_for_client(db: AsyncSession, client_id: str) -> int:
    """Cuenta las compras que referencian al cliente."""
    result = await db.execute(select(func.count(Purchase.id)).filter(Purchase.client_id == client_id))
    return result.scalar() or 0

async def set_purchase_count(db: AsyncSession, db_client: Client, value: int) -> Client:
    """Sobrescribe el contador con un valor recalculado."""
    db_client.purchase_count = value
    await db.commit()
    await db.refresh(db_client)
    return db_client
