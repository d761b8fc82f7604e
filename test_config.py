# test_config.py
"""Tests de la carga de configuración desde ficheros .env."""

from pathlib import Path

from app.core.config import Settings

ROOT = Path(__file__).parent


def test_env_example_loads():
    loaded = Settings(_env_file=ROOT / ".env.example")
    assert loaded.POSTGRES_DB == "storedesk_db"
    assert loaded.SMTP_PORT is None


def test_empty_env_values_count_as_unset(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SECRET_KEY=x\nSMTP_HOST=\nSMTP_PORT=\nSENDER_EMAIL=\n")
    loaded = Settings(_env_file=env_file)
    assert loaded.SMTP_PORT is None
    assert loaded.SMTP_HOST is None
    assert loaded.SENDER_EMAIL is None
