# backend/app/services/email_service.py
"""
Servicio de Envío de Correo para la aplicación.

Envía las notificaciones transaccionales a los usuarios (bienvenida y
restablecimiento de contraseña) mediante FastMail. Los envíos se programan
como tareas en segundo plano: ningún fallo de correo se propaga a la
petición que lo originó.
"""

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from pydantic import EmailStr
from typing import Optional
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

# --- Configuración del Servicio de Correo ---

def _smtp_configured() -> bool:
    return all([settings.SMTP_HOST, settings.SMTP_PORT, settings.SMTP_USER,
                settings.SMTP_PASSWORD, settings.SENDER_EMAIL])


def _get_mailer() -> FastMail:
    """Construye el cliente de correo con los settings cargados desde el .env."""
    conf = ConnectionConfig(
        MAIL_USERNAME=settings.SMTP_USER,
        MAIL_PASSWORD=settings.SMTP_PASSWORD,
        MAIL_FROM=settings.SENDER_EMAIL,
        MAIL_PORT=settings.SMTP_PORT,
        MAIL_SERVER=settings.SMTP_HOST,
        MAIL_STARTTLS=False,
        MAIL_SSL_TLS=True,
        USE_CREDENTIALS=True,
        VALIDATE_CERTS=True,
    )
    return FastMail(conf)

# --- Plantillas ---

def _welcome_html(username: str) -> str:
    """Genera el cuerpo HTML del correo de bienvenida."""
    return f"""
    <html>
    <body style="font-family: 'Helvetica Neue', Helvetica, Arial, sans-serif; color: #333;">
        <div style="max-width: 600px; margin: 20px auto; padding: 20px; border: 1px solid #eee;">
            <h1 style="text-align: center;">Welcome to {settings.PROJECT_NAME}!</h1>
            <p>Hi {username},</p>
            <p>Your account has been created. From now on you can manage your store's clients and orders.</p>
            <p><a href="{settings.FRONTEND_URL}/login">Log in</a></p>
            <p>If you need any help, just reply to this email.</p>
        </div>
    </body>
    </html>
    """


def _password_reset_text(reset_token: str) -> str:
    return (
        "Hello,\n\n"
        "You requested a password reset. Use the link below to choose a new password:\n\n"
        f"{settings.FRONTEND_URL}/reset-password?token={reset_token}\n\n"
        "If you did not request this, you can ignore this email.\n"
    )

# --- Servicio de Envío de Correo ---

async def _send(message: MessageSchema, kind: str, email_to: str) -> bool:
    if not _smtp_configured():
        logger.warning(f"Configuración SMTP no encontrada. Saltando envío de correo de {kind}.")
        return False

    try:
        await _get_mailer().send_message(message)
        logger.info(f"Correo de {kind} enviado exitosamente a {email_to}")
        return True
    except Exception as e:
        logger.error(f"Error al enviar correo de {kind} a {email_to}: {e}", exc_info=True)
        return False


async def send_welcome_email(email_to: EmailStr, username: str) -> bool:
    """
    Envía el correo de bienvenida tras crear una cuenta.

    Devuelve True si el correo salió; False si se omitió o falló.
    """
    if not email_to or not username:
        logger.error("send_welcome_email requiere email y nombre de usuario")
        return False

    message = MessageSchema(
        subject=f"Welcome to {settings.PROJECT_NAME}",
        recipients=[email_to],
        body=_welcome_html(username),
        subtype=MessageType.html,
    )
    return await _send(message, "bienvenida", email_to)


async def send_password_reset_email(email_to: EmailStr, reset_token: Optional[str]) -> bool:
    """Envía el enlace de restablecimiento de contraseña."""
    if not email_to or not reset_token:
        logger.error("send_password_reset_email requiere email y token")
        return False

    message = MessageSchema(
        subject="Password reset",
        recipients=[email_to],
        body=_password_reset_text(reset_token),
        subtype=MessageType.plain,
    )
    return await _send(message, "restablecimiento de contraseña", email_to)
