# backend/app/services/client_service.py
"""
Servicio para operaciones de negocio relacionadas con clientes.

Gestiona el registro de clientes con email único, las consultas y
actualizaciones por id, la vista cliente + pedidos y la reparación explícita
del contador desnormalizado de compras.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.crud import client_crud, purchase_crud
from app.db.models.client_model import Client
from app.schemas import client_schema, purchase_schema

logger = logging.getLogger(__name__)


class ClientRegistry:
    """
    Registro de clientes ligado a una sesión de base de datos.

    Se construye por petición con la sesión que le inyecta FastAPI
    (ver app/api/deps.py); no guarda estado propio entre peticiones.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_by_id(self, client_id: str) -> Client:
        """
        Obtiene un cliente por su ID.

        Raises:
            ValidationError: si no se informa el id
            NotFoundError: si no existe ningún cliente con ese id
        """
        if not client_id:
            raise ValidationError("Client ID is required")
        client = await client_crud.get_client(self.db, client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    async def list_all(self) -> List[Client]:
        """Devuelve todos los clientes, en cualquier orden."""
        return await client_crud.get_clients(self.db)

    async def get_with_purchases(self, client_id: str) -> purchase_schema.ClientWithPurchases:
        """
        Devuelve el cliente junto con todos los pedidos que lo referencian.

        La lista de pedidos se obtiene filtrando la tabla purchases y es la
        fuente de verdad; una lista vacía es un resultado válido.
        """
        client = await self.get_by_id(client_id)
        purchases = await purchase_crud.get_purchases_by_client(self.db, client_id)
        return purchase_schema.ClientWithPurchases(
            client=client_schema.ClientResponse.model_validate(client),
            purchases=[purchase_schema.PurchaseResponse.model_validate(p) for p in purchases],
        )

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def register(self, client_in: client_schema.ClientCreate) -> Client:
        """
        Registra un nuevo cliente con el contador de compras a cero.

        El nombre se valida antes que el email: un nombre vacío falla con
        ValidationError aunque el email también esté duplicado.

        Raises:
            ValidationError: si falta el nombre
            ConflictError: si el email ya pertenece a otro cliente
        """
        name = (client_in.name or "").strip()
        if not name:
            raise ValidationError("Name is required")

        email = str(client_in.email) if client_in.email else None
        if email:
            existing = await client_crud.get_client_by_email(self.db, email)
            if existing:
                raise ConflictError("Email already registered")

        client = await client_crud.create_client(self.db, name=name, email=email, phone=client_in.phone)
        logger.info(f"Cliente registrado: {client.id}")
        return client

    async def update_by_id(self, client_id: str, client_in: client_schema.ClientUpdate) -> Client:
        """
        Aplica solo los campos enviados.

        No vuelve a comprobar la unicidad del email; si choca con otro cliente
        lo rechaza la restricción única de la tabla y se responde 500.
        """
        client = await self.get_by_id(client_id)
        update_data = client_in.model_dump(exclude_unset=True)

        if "name" in update_data:
            name = (update_data["name"] or "").strip()
            if not name:
                raise ValidationError("Name cannot be empty")
            update_data["name"] = name
        if update_data.get("email") is not None:
            update_data["email"] = str(update_data["email"])

        return await client_crud.update_client(self.db, client, update_data)

    async def delete_by_id(self, client_id: str) -> Client:
        """Elimina el cliente. Sus pedidos no se borran."""
        client = await self.get_by_id(client_id)
        deleted = await client_crud.delete_client(self.db, client)
        logger.info(f"Cliente eliminado: {client_id}")
        return deleted

    async def reconcile_purchase_count(self, client_id: str) -> Client:
        """
        Recalcula purchase_count contando los pedidos que referencian al cliente.

        Operación de reparación explícita; nunca se ejecuta de forma implícita.
        """
        client = await self.get_by_id(client_id)
        actual = await client_crud.count_purchases_for_client(self.db, client_id)
        if client.purchase_count != actual:
            logger.warning(
                f"Contador de compras desalineado para el cliente {client_id}: "
                f"{client.purchase_count} -> {actual}"
            )
        return await client_crud.set_purchase_count(self.db, client, actual)
