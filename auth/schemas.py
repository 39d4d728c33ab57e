# auth/schemas.py
"""
Schemas Pydantic para autenticação e usuários

Cada operação tem o seu próprio schema de entrada (registro, atualização
de nome, troca de senha, status, role) e a projeção de saída nunca expõe
o hash da senha.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth.models import PerfilUsuario, RoleType, StatusUsuario
from utils.password_policy import validate_password


# ==========================================
# Schemas de Token / Login
# ==========================================

class TokenResponse(BaseModel):
    """Token JWT retornado no login"""
    token: str
    tipo: str = "Bearer"


class LoginRequest(BaseModel):
    """Request de login"""
    nome: str = Field(..., min_length=1)
    senha: str = Field(..., min_length=1)


# ==========================================
# Schemas de Usuário (entrada)
# ==========================================

class RegistroRequest(BaseModel):
    """Registro de novo usuário"""
    nome: str = Field(..., min_length=5, max_length=50)
    senha: str

    @field_validator("nome")
    @classmethod
    def nome_sem_bordas(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("O campo nome é obrigatório!")
        return v.strip()

    @field_validator("senha")
    @classmethod
    def senha_forte(cls, v: str) -> str:
        return validate_password(v)


class UsuarioUpdateRequest(BaseModel):
    """Atualização do nome do usuário"""
    nome: str = Field(..., min_length=5, max_length=50)


class SenhaUpdateRequest(BaseModel):
    """Troca de senha (exige a senha antiga)"""
    model_config = ConfigDict(populate_by_name=True)

    senha: str
    senha_antiga: str = Field(..., alias="senhaAntiga")

    @field_validator("senha", "senha_antiga")
    @classmethod
    def senha_forte(cls, v: str) -> str:
        return validate_password(v)


class StatusUsuarioRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status_usuario: StatusUsuario = Field(..., alias="statusUsuario")


class RoleUsuarioRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role_usuario: RoleType = Field(..., alias="roleUsuario")


# ==========================================
# Projeção de Usuário (saída)
# ==========================================

class UsuarioResponse(BaseModel):
    """Dados públicos do usuário"""
    model_config = ConfigDict(from_attributes=True)

    usuario_id: UUID = Field(..., serialization_alias="usuarioId")
    nome: str
    status_usuario: StatusUsuario = Field(..., serialization_alias="statusUsuario")
    perfil_usuario: PerfilUsuario = Field(..., serialization_alias="perfilUsuario")
    authorities: List[str] = Field(default_factory=list, serialization_alias="roles")
    data_criacao: Optional[datetime] = Field(None, serialization_alias="dataCriacao")
    data_atualizacao: Optional[datetime] = Field(None, serialization_alias="dataAtualizacao")


class MensagemResponse(BaseModel):
    mensagem: str
