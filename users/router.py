# users/router.py
"""
Endpoints de gestão de usuários

Listagem, exclusão, status e role exigem ROLE_ADMIN.
O nome só pode ser alterado pelo próprio usuário ou por ROLE_ADMIN.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from auth.dependencies import require_admin, require_proprio_ou_admin
from auth.schemas import (
    MensagemResponse, RoleUsuarioRequest, SenhaUpdateRequest,
    StatusUsuarioRequest, UsuarioResponse, UsuarioUpdateRequest,
)
from database.connection import get_db
from users.services import FiltroUsuario, UsuarioService
from utils.logging_config import get_logger
from utils.paginacao import Pagina, Paginacao, parametros_paginacao

logger = get_logger(__name__)

router = APIRouter(prefix="/usuarios", tags=["Usuários"])


@router.get("", response_model=Pagina[UsuarioResponse], dependencies=[Depends(require_admin)])
def listar_usuarios(
    usuario_id: Optional[UUID] = Query(None, alias="usuarioId"),
    nome: Optional[str] = Query(None),
    paginacao: Paginacao = Depends(parametros_paginacao),
    db: Session = Depends(get_db)
):
    """
    Lista usuários com paginação.

    **Acesso:** Apenas administradores
    """
    filtro = FiltroUsuario(usuario_id=usuario_id, nome=nome)
    return UsuarioService(db).listar(filtro, paginacao)


@router.get("/{usuario_id}", response_model=UsuarioResponse)
def buscar_usuario(usuario_id: UUID, db: Session = Depends(get_db)):
    logger.debug("consulta_usuario", usuario_id=str(usuario_id))
    return UsuarioService(db).buscar_por_id(usuario_id)


@router.delete("/{usuario_id}", response_model=MensagemResponse, dependencies=[Depends(require_admin)])
def deletar_usuario(usuario_id: UUID, db: Session = Depends(get_db)):
    """
    Exclui um usuário.

    **Acesso:** Apenas administradores
    """
    service = UsuarioService(db)
    service.deletar(service.buscar_por_id(usuario_id))
    return MensagemResponse(mensagem="Usuário deletado com sucesso!")


@router.put("/{usuario_id}/usuario", response_model=UsuarioResponse, dependencies=[Depends(require_proprio_ou_admin)])
def atualizar_usuario(
    usuario_id: UUID,
    dados: UsuarioUpdateRequest,
    db: Session = Depends(get_db)
):
    """Atualiza o nome do usuário; o status não muda."""
    service = UsuarioService(db)
    return service.atualizar(service.buscar_por_id(usuario_id), dados.nome)


@router.put("/{usuario_id}/senha", response_model=MensagemResponse)
def atualizar_senha(
    usuario_id: UUID,
    dados: SenhaUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Troca a senha do usuário.

    - 404 se o usuário não existir
    - 409 se a senha antiga não conferir
    """
    service = UsuarioService(db)
    service.atualizar_senha(service.buscar_por_id(usuario_id), dados.senha_antiga, dados.senha)
    return MensagemResponse(mensagem="Senha atualizada com sucesso!")


@router.put("/{usuario_id}/status", response_model=UsuarioResponse, dependencies=[Depends(require_admin)])
def atualizar_status(
    usuario_id: UUID,
    dados: StatusUsuarioRequest,
    db: Session = Depends(get_db)
):
    """**Acesso:** Apenas administradores"""
    service = UsuarioService(db)
    return service.atualizar_status(service.buscar_por_id(usuario_id), dados.status_usuario)


@router.put("/{usuario_id}/role", response_model=UsuarioResponse, dependencies=[Depends(require_admin)])
def atualizar_role(
    usuario_id: UUID,
    dados: RoleUsuarioRequest,
    db: Session = Depends(get_db)
):
    """**Acesso:** Apenas administradores"""
    service = UsuarioService(db)
    return service.atualizar_role(service.buscar_por_id(usuario_id), dados.role_usuario)
