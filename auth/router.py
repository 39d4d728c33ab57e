# auth/router.py
"""
Endpoints de autenticação: login, registro e dados do usuário logado
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from auth.dependencies import get_usuario_autenticado
from auth.filtro import UsuarioAutenticado
from auth.schemas import LoginRequest, RegistroRequest, TokenResponse, UsuarioResponse
from auth.security import create_access_token, verify_password
from database.connection import get_db
from users.services import UsuarioService
from utils.errors import NaoAutenticadoError
from utils.logging_config import get_logger
from utils.password_policy import get_password_requirements
from utils.rate_limit import limiter, LIMITS

logger = get_logger(__name__)

router = APIRouter(prefix="/autenticacao", tags=["Autenticação"])

MSG_CREDENCIAIS_INVALIDAS = "Erro: Usuário ou senha inválidos."


@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(LIMITS["login"])  # SECURITY: tentativas por minuto por IP
def login(
    request: Request,  # Necessário para rate limiting
    dados: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Autentica o usuário e retorna um token JWT.

    - **nome**: Nome de usuário
    - **senha**: Senha
    """
    usuario = UsuarioService(db).buscar_por_nome(dados.nome)

    if usuario is None or not verify_password(dados.senha, usuario.senha):
        logger.warning("login_falhou", nome=dados.nome, motivo="credenciais_invalidas")
        raise NaoAutenticadoError(MSG_CREDENCIAIS_INVALIDAS)

    if not usuario.is_active:
        logger.warning("login_falhou", nome=dados.nome, motivo=f"usuario_{usuario.status_usuario.value.lower()}")
        raise NaoAutenticadoError(MSG_CREDENCIAIS_INVALIDAS)

    token = create_access_token(subject=usuario.nome)
    logger.info("login_sucesso", usuario_id=str(usuario.usuario_id))
    return TokenResponse(token=token)


@router.post("/registro", response_model=UsuarioResponse, status_code=status.HTTP_201_CREATED)
def registro(
    dados: RegistroRequest,
    db: Session = Depends(get_db)
):
    """
    Registra um novo usuário com role ROLE_USUARIO e status ATIVO.

    Retorna 409 se o nome já existir.
    """
    logger.debug("registro_usuario", nome=dados.nome)
    return UsuarioService(db).registrar(dados.nome, dados.senha)


@router.get("/me", response_model=UsuarioResponse)
def me(
    usuario: UsuarioAutenticado = Depends(get_usuario_autenticado),
    db: Session = Depends(get_db)
):
    """Retorna os dados do usuário logado."""
    return UsuarioService(db).buscar_por_id(usuario.usuario_id)


@router.get("/requisitos-senha")
def requisitos_senha():
    """Requisitos da política de senhas (público, usado no formulário de registro)."""
    return get_password_requirements()
