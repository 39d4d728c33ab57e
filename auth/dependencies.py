# auth/dependencies.py
"""
Dependencies de autenticação e autorização para injeção nas rotas
"""

from uuid import UUID

from fastapi import Depends, Request

from auth.filtro import UsuarioAutenticado
from auth.models import RoleType
from utils.errors import AcessoNegadoError, NaoAutenticadoError
from utils.logging_config import get_logger

logger = get_logger(__name__)


def get_usuario_autenticado(request: Request) -> UsuarioAutenticado:
    """
    Dependency que retorna a identidade estabelecida pelo filtro JWT.
    Lança 401 se a requisição for anônima.

    Uso:
        @router.get("/rota")
        def rota(usuario: UsuarioAutenticado = Depends(get_usuario_autenticado)):
            ...
    """
    usuario = getattr(request.state, "usuario", None)
    if usuario is None:
        raise NaoAutenticadoError()
    return usuario


def require_roles(*roles: RoleType):
    """
    Cria uma dependency que exige ao menos uma das roles.
    Lança 403 se o usuário autenticado não tiver nenhuma delas.

    Uso:
        @router.delete("/{id}", dependencies=[Depends(require_roles(RoleType.ROLE_ADMIN))])
    """
    exigidas = [role.value for role in roles]

    def verificador(
        request: Request,
        usuario: UsuarioAutenticado = Depends(get_usuario_autenticado),
    ) -> UsuarioAutenticado:
        if not usuario.possui_alguma(*exigidas):
            logger.warning(
                "acesso_negado",
                usuario=usuario.nome,
                path=request.url.path,
                roles_exigidas=exigidas,
            )
            raise AcessoNegadoError()
        return usuario

    return verificador


require_admin = require_roles(RoleType.ROLE_ADMIN)


def require_proprio_ou_admin(
    usuario_id: UUID,
    request: Request,
    usuario: UsuarioAutenticado = Depends(get_usuario_autenticado),
) -> UsuarioAutenticado:
    """
    Dependency para rotas /{usuario_id}: só o próprio usuário ou ROLE_ADMIN.
    Lança 403 nos demais casos.
    """
    if usuario.usuario_id != usuario_id and not usuario.possui_alguma(RoleType.ROLE_ADMIN.value):
        logger.warning(
            "acesso_negado",
            usuario=usuario.nome,
            path=request.url.path,
            motivo="usuario_alheio",
        )
        raise AcessoNegadoError()
    return usuario
