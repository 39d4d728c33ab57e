# tests/conftest.py
"""
Configuração global do pytest para a API da livraria.

Este arquivo é executado automaticamente pelo pytest antes dos testes.

Banco: SQLite em memória compartilhado (StaticPool), recriado a cada teste,
com as roles de referência já cadastradas. A dependency get_db da aplicação
é substituída pela sessão de teste.
"""

import sys
import os

# Adiciona o diretório raiz do projeto ao PYTHONPATH
# para que os imports funcionem corretamente nos testes
tests_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(tests_dir)
for caminho in (project_root, tests_dir):
    if caminho not in sys.path:
        sys.path.insert(0, caminho)

# Configura variáveis de ambiente para testes
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-tests")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")


import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import auth.models  # noqa: F401
import sistemas.livros.models  # noqa: F401
from database.connection import Base, get_db
from database.init_db import seed_roles

from fabricas import auth_header, criar_usuario

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ==================================================
# BANCO E APLICAÇÃO
# ==================================================

@pytest.fixture
def db_session():
    """Sessão num banco limpo, com ROLE_USUARIO e ROLE_ADMIN cadastradas."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    seed_roles(db)
    try:
        yield db
    finally:
        db.rollback()
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(db_session):
    from main import app as fastapi_app

    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


# ==================================================
# USUÁRIOS
# ==================================================

@pytest.fixture
def usuario(db_session):
    return criar_usuario(db_session, "leitor_comum")


@pytest.fixture
def admin(db_session):
    return criar_usuario(db_session, "administrador", senha="Adm!n2024", admin=True)


@pytest.fixture
def headers_usuario(usuario):
    return auth_header(usuario.nome)


@pytest.fixture
def headers_admin(admin):
    return auth_header(admin.nome)
