# backend/app/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from app.api.v1.endpoints import (
    users,
    clients,
    purchases
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# ROUTER DE USUARIOS
# Alta de cuentas, login y CRUD de usuarios
api_router_v1.include_router(
    users.router,
    prefix="/users",                # Prefijo: /api/v1/users
    tags=["Users"]
)

# ROUTER DE CLIENTES
# Registro de clientes y vista cliente + pedidos
api_router_v1.include_router(
    clients.router,
    prefix="/clients",
    tags=["Clients"]
)

# ROUTER DE PEDIDOS
# Ciclo de vida de los pedidos y contador de compras del cliente
api_router_v1.include_router(
    purchases.router,
    prefix="/purchases",
    tags=["Purchases"]
)
