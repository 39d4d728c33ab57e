# users/services.py
"""
Serviços de usuários e roles.

Regras de negócio do cadastro, atualização, troca de senha, status e
permissões. Os routers só traduzem HTTP para chamadas destes serviços.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from auth.models import PerfilUsuario, Role, RoleType, StatusUsuario, Usuario
from auth.security import get_password_hash, verify_password
from utils.errors import ConflitoError, NaoEncontradoError
from utils.logging_config import get_logger
from utils.paginacao import Paginacao, paginar
from utils.timezone import now_utc

logger = get_logger(__name__)

MSG_USUARIO_NAO_ENCONTRADO = "ERRO, USUÁRIO NÃO ENCONTRADO!"
MSG_USUARIO_EXISTENTE = "ERRO, USUARIO JÁ EXISTENTE!"
MSG_SENHA_EM_USO = "ERRO, ESSA SENHA JÁ ESTÁ EM USO!"
MSG_SENHA_ANTIGA_INCORRETA = "Senha antiga incorreta!"

COLUNAS_ORDENAVEIS = {
    "nome": Usuario.nome,
    "statusUsuario": Usuario.status_usuario,
    "dataCriacao": Usuario.data_criacao,
    "dataAtualizacao": Usuario.data_atualizacao,
}


@dataclass
class FiltroUsuario:
    usuario_id: Optional[UUID] = None
    nome: Optional[str] = None


def construir_consulta_usuarios(usuario_id: Optional[UUID] = None, nome: Optional[str] = None):
    """
    SELECT de usuários com filtros opcionais.

    usuario_id é comparado por igualdade; nome por trecho, sem diferenciar
    maiúsculas de minúsculas.
    """
    consulta = select(Usuario)
    if usuario_id is not None:
        consulta = consulta.where(Usuario.usuario_id == usuario_id)
    if nome:
        consulta = consulta.where(Usuario.nome.icontains(nome, autoescape=True))
    return consulta


class RoleService:
    """Acesso às roles de referência"""

    def __init__(self, db: Session):
        self.db = db

    def buscar_por_nome(self, role_nome: RoleType) -> Role:
        role = self.db.scalar(select(Role).where(Role.role_nome == role_nome))
        if role is None:
            raise NaoEncontradoError(f"Role {role_nome.value} não cadastrada!")
        return role


class UsuarioService:
    """Regras de negócio de usuários"""

    def __init__(self, db: Session):
        self.db = db
        self.roles = RoleService(db)

    # ==================================================
    # CONSULTAS
    # ==================================================

    def listar(self, filtro: FiltroUsuario, paginacao: Paginacao) -> dict:
        consulta = construir_consulta_usuarios(filtro.usuario_id, filtro.nome)
        return paginar(self.db, consulta, paginacao, COLUNAS_ORDENAVEIS, Usuario.data_criacao.desc())

    def buscar_por_id(self, usuario_id: UUID) -> Usuario:
        usuario = self.db.get(Usuario, usuario_id)
        if usuario is None:
            raise NaoEncontradoError(MSG_USUARIO_NAO_ENCONTRADO)
        return usuario

    def buscar_por_nome(self, nome: str) -> Optional[Usuario]:
        return self.db.scalar(select(Usuario).where(Usuario.nome == nome))

    def existe_por_nome(self, nome: str) -> bool:
        return self.db.scalar(select(Usuario.usuario_id).where(Usuario.nome == nome)) is not None

    def existe_por_senha_hash(self, valor: str) -> bool:
        """True se algum usuário tem exatamente este valor gravado na coluna de senha."""
        return self.db.scalar(select(Usuario.usuario_id).where(Usuario.senha == valor)) is not None

    # ==================================================
    # ESCRITA
    # ==================================================

    def registrar(self, nome: str, senha: str) -> Usuario:
        """
        Cria usuário ativo, com perfil USUARIO e role ROLE_USUARIO.

        Raises:
            ConflitoError: nome já cadastrado, ou senha igual a um valor já gravado
        """
        if self.existe_por_nome(nome):
            raise ConflitoError(MSG_USUARIO_EXISTENTE)
        if self.existe_por_senha_hash(senha):
            raise ConflitoError(MSG_SENHA_EM_USO)

        agora = now_utc()
        usuario = Usuario(
            nome=nome,
            senha=get_password_hash(senha),
            status_usuario=StatusUsuario.ATIVO,
            perfil_usuario=PerfilUsuario.USUARIO,
            data_criacao=agora,
            data_atualizacao=agora,
        )
        usuario.roles.append(self.roles.buscar_por_nome(RoleType.ROLE_USUARIO))

        self.db.add(usuario)
        self.db.commit()
        self.db.refresh(usuario)

        logger.info("usuario_registrado", usuario_id=str(usuario.usuario_id), nome=usuario.nome)
        return usuario

    def atualizar(self, usuario: Usuario, nome: str) -> Usuario:
        """Renomeia o usuário. Status, perfil e roles ficam como estão."""
        if nome != usuario.nome and self.existe_por_nome(nome):
            raise ConflitoError(MSG_USUARIO_EXISTENTE)

        usuario.nome = nome
        usuario.data_atualizacao = now_utc()
        self.db.commit()
        self.db.refresh(usuario)

        logger.info("usuario_atualizado", usuario_id=str(usuario.usuario_id))
        return usuario

    def atualizar_senha(self, usuario: Usuario, senha_antiga: str, senha_nova: str) -> Usuario:
        """
        Troca a senha após conferir a antiga.

        Raises:
            ConflitoError: senha antiga não confere
        """
        if not verify_password(senha_antiga, usuario.senha):
            logger.warning("senha_antiga_incorreta", usuario_id=str(usuario.usuario_id))
            raise ConflitoError(MSG_SENHA_ANTIGA_INCORRETA)

        usuario.senha = get_password_hash(senha_nova)
        usuario.data_atualizacao = now_utc()
        self.db.commit()
        self.db.refresh(usuario)

        logger.info("senha_atualizada", usuario_id=str(usuario.usuario_id))
        return usuario

    def atualizar_status(self, usuario: Usuario, status: StatusUsuario) -> Usuario:
        usuario.status_usuario = status
        usuario.data_atualizacao = now_utc()
        self.db.commit()
        self.db.refresh(usuario)

        logger.info("status_usuario_atualizado", usuario_id=str(usuario.usuario_id), status=status.value)
        return usuario

    def atualizar_role(self, usuario: Usuario, role_nome: RoleType) -> Usuario:
        """Substitui as roles do usuário; ROLE_ADMIN também muda o perfil."""
        role = self.roles.buscar_por_nome(role_nome)
        usuario.roles = [role]
        usuario.perfil_usuario = (
            PerfilUsuario.ADMINISTRADOR if role_nome == RoleType.ROLE_ADMIN else PerfilUsuario.USUARIO
        )
        usuario.data_atualizacao = now_utc()
        self.db.commit()
        self.db.refresh(usuario)

        logger.info("role_usuario_atualizada", usuario_id=str(usuario.usuario_id), role=role_nome.value)
        return usuario

    def deletar(self, usuario: Usuario) -> None:
        usuario_id = str(usuario.usuario_id)
        self.db.delete(usuario)
        self.db.commit()
        logger.info("usuario_deletado", usuario_id=usuario_id)
