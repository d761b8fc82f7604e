# backend/app/crud/purchase_crud.py
"""
Operaciones CRUD para el modelo Purchase.

Los listados se devuelven siempre ordenados por fecha de compra descendente
(lo más reciente primero).
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional

from app.db.models.purchase_model import Purchase

async def get_purchase(db: AsyncSession, purchase_id: str) -> Optional[Purchase]:
    """Obtiene un pedido por su ID de forma asíncrona."""
    result = await db.execute(select(Purchase).filter(Purchase.id == purchase_id))
    return result.scalars().first()

async def get_purchases(db: AsyncSession) -> List[Purchase]:
    """Obtiene todos los pedidos, del más reciente al más antiguo."""
    query = select(Purchase).order_by(Purchase.purchase_date.desc(), Purchase.created_at.desc())
    result = await db.execute(query)
    return list(result.scalars().all())

async def get_purchases_by_client(db: AsyncSession, client_id: str) -> List[Purchase]:
    """Obtiene los pedidos de un cliente, del más reciente al más antiguo."""
    query = (
        select(Purchase)
        .filter(Purchase.client_id == client_id)
        .order_by(Purchase.purchase_date.desc(), Purchase.created_at.desc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())

async def create_purchase(db: AsyncSession, data: Dict[str, Any]) -> Purchase:
    """Crea un nuevo pedido en la base de datos de forma asíncrona."""
    db_purchase = Purchase(**data)
    db.add(db_purchase)
    await db.commit()
    await db.refresh(db_purchase)
    return db_purchase

async def update_purchase(db: AsyncSession, db_purchase: Purchase, update_data: Dict[str, Any]) -> Purchase:
    """Aplica solo los campos recibidos sobre un pedido existente."""
    for key, value in update_data.items():
        setattr(db_purchase, key, value)

    await db.commit()
    await db.refresh(db_purchase)
    return db_purchase

async def delete_purchase(db: AsyncSession, db_purchase: Purchase) -> Purchase:
    """Elimina un pedido y confirma el borrado de inmediato."""
    await db.delete(db_purchase)
    await db.commit()
    return db_purchase
