# database/init_db.py
"""
Inicialização do banco de dados: migrations (Alembic), roles e usuário admin
"""

import time
from typing import Optional

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from auth.models import PerfilUsuario, Role, RoleType, StatusUsuario, Usuario
from auth.security import get_password_hash
from config import ADMIN_PASSWORD, ADMIN_USERNAME, BASE_DIR, RUN_MIGRATIONS_ON_STARTUP
from database.connection import SessionLocal, engine
from utils.logging_config import get_logger
from utils.timezone import now_utc

logger = get_logger(__name__)

TABELAS_LIVRARIA = {"tb_role", "tb_usuario", "tb_usuario_role", "tb_livro"}


def wait_for_db(max_retries=10, delay=3, bind: Optional[Engine] = None):
    """Aguarda o banco de dados ficar disponível"""
    bind = bind or engine
    for attempt in range(max_retries):
        try:
            with bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("banco_conectado")
            return True
        except OperationalError:
            if attempt < max_retries - 1:
                logger.warning("aguardando_banco", tentativa=attempt + 1, max_tentativas=max_retries)
                time.sleep(delay)
            else:
                logger.error("banco_indisponivel", max_tentativas=max_retries)
                raise
    return False


def alembic_config() -> Config:
    """Config do Alembic apontando para o alembic.ini do projeto."""
    cfg = Config(str(BASE_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(BASE_DIR / "migrations"))
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(bind: Optional[Engine] = None):
    """
    Aplica as migrations até head.

    Bancos criados antes do Alembic (tabelas presentes, sem alembic_version)
    são apenas marcados com stamp head.
    """
    bind = bind or engine
    cfg = alembic_config()

    tabelas = set(inspect(bind).get_table_names())

    with bind.begin() as connection:
        cfg.attributes["connection"] = connection
        if TABELAS_LIVRARIA <= tabelas and "alembic_version" not in tabelas:
            logger.info("migrations_baseline", acao="stamp_head")
            command.stamp(cfg, "head")
        else:
            command.upgrade(cfg, "head")

    logger.info("migrations_aplicadas")


def seed_roles(db: Optional[Session] = None):
    """Garante as roles de referência (ROLE_USUARIO e ROLE_ADMIN)."""
    sessao = db or SessionLocal()
    try:
        existentes = set(sessao.scalars(select(Role.role_nome)))
        faltantes = [role for role in RoleType if role not in existentes]
        for role_nome in faltantes:
            sessao.add(Role(role_nome=role_nome))
        if faltantes:
            sessao.commit()
            logger.info("roles_criadas", roles=[role.value for role in faltantes])
    finally:
        if db is None:
            sessao.close()


def seed_admin(db: Optional[Session] = None, nome: str = ADMIN_USERNAME, senha: str = ADMIN_PASSWORD):
    """Cria o administrador inicial quando ADMIN_USERNAME/ADMIN_PASSWORD estão definidos"""
    if not nome or not senha:
        logger.info("seed_admin_ignorado", motivo="credenciais_nao_configuradas")
        return

    sessao = db or SessionLocal()
    try:
        if sessao.scalar(select(Usuario).where(Usuario.nome == nome)) is not None:
            logger.info("admin_existente", nome=nome)
            return

        roles = list(sessao.scalars(select(Role).where(Role.role_nome.in_(list(RoleType)))))
        agora = now_utc()
        admin = Usuario(
            nome=nome,
            senha=get_password_hash(senha),
            status_usuario=StatusUsuario.ATIVO,
            perfil_usuario=PerfilUsuario.ADMINISTRADOR,
            data_criacao=agora,
            data_atualizacao=agora,
            roles=roles,
        )
        sessao.add(admin)
        sessao.commit()
        logger.info("admin_criado", nome=nome)
    finally:
        if db is None:
            sessao.close()


def init_database():
    """Inicializa o banco de dados completo"""
    logger.info("inicializando_banco")
    wait_for_db()
    if RUN_MIGRATIONS_ON_STARTUP:
        run_migrations()
    seed_roles()
    seed_admin()
    logger.info("banco_inicializado")


if __name__ == "__main__":
    init_database()
