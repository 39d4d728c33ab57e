# tests/test_init_db.py
"""
Testes da inicialização do banco: migrations Alembic, roles e admin inicial.

As migrations rodam num SQLite em arquivo temporário.
"""

import pytest
from sqlalchemy import create_engine, inspect, select, text
from sqlalchemy.orm import sessionmaker

from auth.models import PerfilUsuario, Role, RoleType, Usuario
from auth.security import verify_password
from database.connection import Base
from database.init_db import run_migrations, seed_admin, seed_roles, wait_for_db


@pytest.fixture
def engine_arquivo(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'livraria.db'}")
    yield engine
    engine.dispose()


class TestMigrations:

    def test_upgrade_cria_tabelas_e_roles(self, engine_arquivo):
        run_migrations(engine_arquivo)

        tabelas = set(inspect(engine_arquivo).get_table_names())
        assert {"tb_role", "tb_usuario", "tb_usuario_role", "tb_livro", "alembic_version"} <= tabelas

        with engine_arquivo.connect() as conn:
            roles = set(conn.scalars(text("SELECT role_nome FROM tb_role")))
        assert roles == {"ROLE_USUARIO", "ROLE_ADMIN"}

    def test_upgrade_e_idempotente(self, engine_arquivo):
        run_migrations(engine_arquivo)
        run_migrations(engine_arquivo)

        with engine_arquivo.connect() as conn:
            assert conn.scalar(text("SELECT COUNT(*) FROM tb_role")) == 2

    def test_banco_existente_sem_alembic_recebe_stamp(self, engine_arquivo):
        Base.metadata.create_all(bind=engine_arquivo)

        run_migrations(engine_arquivo)

        with engine_arquivo.connect() as conn:
            versao = conn.scalar(text("SELECT version_num FROM alembic_version"))
            assert versao == "3f1c2a9d7b10"
            # stamp não executa a migration: nenhuma role foi inserida
            assert conn.scalar(text("SELECT COUNT(*) FROM tb_role")) == 0

    def test_wait_for_db(self, engine_arquivo):
        assert wait_for_db(max_retries=1, delay=0, bind=engine_arquivo) is True


class TestSeeds:

    @pytest.fixture
    def sessao(self, engine_arquivo):
        Base.metadata.create_all(bind=engine_arquivo)
        db = sessionmaker(bind=engine_arquivo)()
        yield db
        db.close()

    def test_seed_roles_idempotente(self, sessao):
        seed_roles(sessao)
        seed_roles(sessao)

        roles = set(sessao.scalars(select(Role.role_nome)))
        assert roles == set(RoleType)

    def test_seed_admin(self, sessao):
        seed_roles(sessao)

        seed_admin(sessao, nome="admin_livraria", senha="Adm!n2024")

        admin = sessao.scalar(select(Usuario).where(Usuario.nome == "admin_livraria"))
        assert admin.perfil_usuario == PerfilUsuario.ADMINISTRADOR
        assert "ROLE_ADMIN" in admin.authorities
        assert verify_password("Adm!n2024", admin.senha)

    def test_seed_admin_nao_duplica(self, sessao):
        seed_roles(sessao)
        seed_admin(sessao, nome="admin_livraria", senha="Adm!n2024")
        seed_admin(sessao, nome="admin_livraria", senha="Outr@2024")

        assert sessao.scalar(select(Usuario).where(Usuario.nome == "admin_livraria")) is not None
        assert len(sessao.scalars(select(Usuario)).all()) == 1

    def test_seed_admin_sem_credenciais(self, sessao):
        seed_admin(sessao, nome="", senha="")
        assert sessao.scalars(select(Usuario)).all() == []
