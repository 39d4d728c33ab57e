# auth/models.py
"""
Modelos de usuário e permissões (roles)
"""

import enum
import uuid

from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, Table, Uuid
from sqlalchemy.orm import relationship

from database.connection import Base
from utils.timezone import now_utc


class StatusUsuario(str, enum.Enum):
    ATIVO = "ATIVO"
    INATIVO = "INATIVO"
    BLOQUEADO = "BLOQUEADO"


class PerfilUsuario(str, enum.Enum):
    USUARIO = "USUARIO"
    ADMINISTRADOR = "ADMINISTRADOR"


class RoleType(str, enum.Enum):
    ROLE_USUARIO = "ROLE_USUARIO"
    ROLE_ADMIN = "ROLE_ADMIN"


# Tabela associativa usuário <-> role
usuario_role = Table(
    "tb_usuario_role",
    Base.metadata,
    Column("usuario_id", Uuid, ForeignKey("tb_usuario.usuario_id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Uuid, ForeignKey("tb_role.role_id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """Permissão atribuível a usuários (dado de referência)"""

    __tablename__ = "tb_role"

    role_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    role_nome = Column(
        Enum(RoleType, native_enum=False, length=30),
        unique=True,
        nullable=False,
    )

    @property
    def authority(self) -> str:
        return self.role_nome.value

    def __repr__(self):
        return f"<Role(role_nome='{self.role_nome}')>"


class Usuario(Base):
    """Usuário do sistema"""

    __tablename__ = "tb_usuario"

    usuario_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    nome = Column(String(150), unique=True, index=True, nullable=False)
    # Hash bcrypt; a coluna mantém a restrição de unicidade do schema
    senha = Column(String(255), unique=True, nullable=False)
    status_usuario = Column(
        Enum(StatusUsuario, native_enum=False, length=20),
        nullable=False,
        default=StatusUsuario.ATIVO,
    )
    perfil_usuario = Column(
        Enum(PerfilUsuario, native_enum=False, length=20),
        nullable=False,
        default=PerfilUsuario.USUARIO,
    )
    data_criacao = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    data_atualizacao = Column(DateTime(timezone=True), nullable=False, default=now_utc)

    roles = relationship("Role", secondary=usuario_role, lazy="selectin")

    @property
    def authorities(self) -> list:
        return [role.authority for role in self.roles]

    @property
    def is_active(self) -> bool:
        return self.status_usuario == StatusUsuario.ATIVO

    def __repr__(self):
        return f"<Usuario(usuario_id={self.usuario_id}, nome='{self.nome}', status='{self.status_usuario}')>"
