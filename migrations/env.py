# migrations/env.py
"""
Configuracao do ambiente Alembic para migrations.

Importa todos os modelos do projeto para que o autogenerate
enxergue o schema completo.
"""

import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

# Adiciona o diretorio raiz ao path para imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from config import DATABASE_URL
from database.connection import Base

# ==================================================
# IMPORTA TODOS OS MODELS PARA AUTOGENERATE
# ==================================================
from auth.models import Usuario, Role  # noqa: F401
from sistemas.livros.models import Livro  # noqa: F401

# ==================================================
# CONFIGURACAO DO ALEMBIC
# ==================================================

config = context.config

# Configura logging do arquivo ini (apenas quando chamado pela CLI)
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# URL do .env tem prioridade, exceto quando o chamador ja definiu outra
if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", DATABASE_URL)


def run_migrations_offline() -> None:
    """
    Executa migrations em modo 'offline'.

    Uso: alembic upgrade head --sql
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Executa migrations em modo 'online'.

    Uso: alembic upgrade head
    """
    connectable = config.attributes.get("connection")

    if connectable is not None:
        _run_with_connection(connectable)
        return

    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        _run_with_connection(connection)


def _run_with_connection(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
