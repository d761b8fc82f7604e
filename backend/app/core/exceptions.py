# backend/app/core/exceptions.py
"""
Errores de dominio de la aplicación.

Los servicios lanzan estas excepciones y los manejadores registrados en
app/main.py las traducen a respuestas JSON con un único campo "error":

- ValidationError -> 400 (entrada ausente o mal formada)
- ConflictError   -> 400 (email duplicado)
- NotFoundError   -> 404 (id desconocido)
- AuthError       -> 401 (credenciales o token inválidos)
- InternalError   -> 500 (fallo del almacén o inesperado; los manejadores de
                    SQLAlchemyError y Exception responden con su mensaje)
"""

from starlette import status


class AppError(Exception):
    """Base de todos los errores de dominio. Lleva un mensaje legible y el código HTTP."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    # El contrato público responde 400 para emails duplicados, no 409
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
