# backend/app/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación FastAPI completa,
incluyendo la configuración de logging, middleware, rutas, manejadores de
errores y eventos del ciclo de vida de la aplicación.

Características principales:
- Configuración centralizada de la aplicación
- Registro de routers de la API con prefijos
- Traducción de errores de dominio a respuestas JSON {"error": ...}
- Creación de tablas al arrancar
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette import status

from app.core.config import settings  # Configuración centralizada de la aplicación
from app.core.exceptions import AppError, InternalError
from app.api.v1.api_router import api_router_v1  # Router principal de la API v1
from app.db.database import init_db

# ========================================
# LOGGING
# ========================================

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="API de gestión de tienda: usuarios, clientes y pedidos"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========================================
# REGISTRO DE ROUTERS DE LA API
# ========================================

app.include_router(api_router_v1, prefix=settings.API_V1_STR)

# ========================================
# MANEJADORES DE ERRORES
# ========================================

# Todas las respuestas de error llevan un único campo "error" legible

def _internal_error_response() -> JSONResponse:
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"❌ ERROR en {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    # Los detalles del almacén se quedan en el log del servidor
    logger.error(f"❌ ERROR de base de datos en {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _internal_error_response()


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"❌ ERROR inesperado en {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _internal_error_response()

# ========================================
# ENDPOINTS RAÍZ Y VERIFICACIÓN DE ESTADO
# ========================================

@app.get("/", tags=["Root"])
async def read_root():
    """
    Endpoint raíz para verificación básica del estado de la API.

    Returns:
        dict: Mensaje de bienvenida con nombre y versión del proyecto

    Example:
        GET /
        Response: {"message": "Welcome to Storedesk API v0.1.0"}
    """
    return {"message": f"Welcome to {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

# ========================================
# EVENTOS DEL CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@app.on_event("startup")
async def startup_event():
    """
    Evento ejecutado al iniciar la aplicación.

    Crea las tablas que falten. Si la base de datos no responde se registra
    el error y se vuelve a lanzar: la aplicación no arranca sin almacén.
    """
    try:
        await init_db()
        logger.info("✅ Conexión con la base de datos establecida y tablas verificadas")
    except Exception as e:
        logger.error(f"❌ Error de conexión con la base de datos: {e}")
        raise


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
