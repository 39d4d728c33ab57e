# auth/filtro.py
"""
Filtro de autenticação JWT aplicado a todas as rotas da API.

Para cada requisição roteada:
1. Extrai o token do header "Authorization: Bearer <token>"
2. Valida o token (assinatura, formato, expiração, claims)
3. Carrega o usuário e as suas roles
4. Guarda a identidade em request.state.usuario

Sem identidade válida, só as rotas públicas são acessíveis (401 nas demais).

Uso (main.py):
    app = FastAPI(dependencies=[Depends(filtro_autenticacao_jwt)])
"""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from auth.security import extrair_subject
from database.connection import get_db
from users.services import UsuarioService
from utils.errors import NaoAutenticadoError
from utils.logging_config import get_logger

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

# Rotas acessíveis sem autenticação (qualquer método)
ROTAS_PUBLICAS = (
    "/autenticacao/login",
    "/autenticacao/registro",
    "/autenticacao/requisitos-senha",
    "/health",
)

# Documentação da API (prefixos)
PREFIXOS_PUBLICOS = (
    "/docs",
    "/redoc",
    "/openapi.json",
)


@dataclass
class UsuarioAutenticado:
    """Identidade da requisição atual"""
    usuario_id: UUID
    nome: str
    authorities: List[str] = field(default_factory=list)

    def possui_alguma(self, *roles: str) -> bool:
        return any(role in self.authorities for role in roles)


def rota_publica(path: str, method: str = "GET") -> bool:
    if method.upper() == "OPTIONS":
        return True
    caminho = path.rstrip("/") or "/"
    if caminho in ROTAS_PUBLICAS:
        return True
    return any(caminho.startswith(prefixo) for prefixo in PREFIXOS_PUBLICOS)


def autenticar_token(token: str, db: Session) -> Optional[UsuarioAutenticado]:
    """
    Resolve a identidade a partir de um token bearer.

    Devolve None para token inválido, usuário inexistente ou não ativo.
    """
    nome = extrair_subject(token)
    if nome is None:
        return None

    usuario = UsuarioService(db).buscar_por_nome(nome)
    if usuario is None:
        logger.warning("token_usuario_inexistente", nome=nome)
        return None
    if not usuario.is_active:
        logger.warning("token_usuario_inativo", nome=nome, status=usuario.status_usuario.value)
        return None

    return UsuarioAutenticado(
        usuario_id=usuario.usuario_id,
        nome=usuario.nome,
        authorities=usuario.authorities,
    )


def filtro_autenticacao_jwt(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[UsuarioAutenticado]:
    """
    Dependency global: estabelece a identidade e aplica a lista de rotas públicas.

    Raises:
        NaoAutenticadoError: rota protegida sem identidade válida
    """
    identidade = None
    if credentials is not None:
        identidade = autenticar_token(credentials.credentials, db)

    request.state.usuario = identidade

    if identidade is None and not rota_publica(request.url.path, request.method):
        logger.info("acesso_nao_autenticado", path=request.url.path, method=request.method)
        raise NaoAutenticadoError()

    return identidade
