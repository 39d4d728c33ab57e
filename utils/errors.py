# utils/errors.py
"""
Exceções de domínio e handlers globais de erro da API.

Todas as respostas de erro seguem o mesmo envelope:

    {
        "codigoErro": 404,
        "mensagemErro": "Livro não encontrado!",
        "detalhesErro": {"campo": "mensagem"}   # opcional
    }

Uso:
    from utils.errors import NaoEncontradoError
    raise NaoEncontradoError("Livro não encontrado!")

    # No main.py
    registrar_handlers(app)
"""

from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.logging_config import get_logger

logger = get_logger(__name__)

MENSAGEM_VALIDACAO = "ERRO DE VALIDAÇÃO"
MENSAGEM_CORPO_INVALIDO = "Erro: O corpo da requisição está ausente ou mal formatado."
MENSAGEM_INTEGRIDADE = (
    "Erro: Violação de integridade de dados. "
    "Verifique se os valores informados já estão em uso."
)
MENSAGEM_METODO_NAO_PERMITIDO = "Erro: Método HTTP não permitido para este endpoint."
MENSAGEM_RECURSO_INEXISTENTE = "Erro: Recurso não encontrado."


class ErroResponse(BaseModel):
    """Envelope uniforme de erro"""
    codigoErro: int
    mensagemErro: str
    detalhesErro: Optional[Dict[str, str]] = None


# ==================================================
# EXCEÇÕES DE DOMÍNIO
# ==================================================

class LivrariaError(Exception):
    """Erro base da aplicação"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    mensagem_padrao = "Erro interno."

    def __init__(self, mensagem: Optional[str] = None, detalhes: Optional[Dict[str, str]] = None):
        self.mensagem = mensagem or self.mensagem_padrao
        self.detalhes = detalhes
        super().__init__(self.mensagem)


class NaoEncontradoError(LivrariaError):
    """Entidade inexistente (id, ISBN) ou consulta externa sem resultado"""
    status_code = status.HTTP_404_NOT_FOUND
    mensagem_padrao = "Recurso não encontrado."


class ConflitoError(LivrariaError):
    """Valor único já em uso ou senha antiga incorreta"""
    status_code = status.HTTP_409_CONFLICT
    mensagem_padrao = "Conflito de dados."


class ValidacaoError(LivrariaError):
    status_code = status.HTTP_400_BAD_REQUEST
    mensagem_padrao = MENSAGEM_VALIDACAO


class NaoAutenticadoError(LivrariaError):
    status_code = status.HTTP_401_UNAUTHORIZED
    mensagem_padrao = "Erro: Acesso não autorizado. Autentique-se para acessar este recurso."


class AcessoNegadoError(LivrariaError):
    status_code = status.HTTP_403_FORBIDDEN
    mensagem_padrao = "Erro: Acesso negado. Você não tem permissão para acessar este recurso."


class RelatorioError(LivrariaError):
    """Falha ao renderizar um relatório PDF"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    mensagem_padrao = "Erro ao gerar o relatório."


# ==================================================
# ENVELOPE
# ==================================================

def erro_response(
    status_code: int,
    mensagem: str,
    detalhes: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    corpo = ErroResponse(codigoErro=status_code, mensagemErro=mensagem, detalhesErro=detalhes)
    return JSONResponse(
        status_code=status_code,
        content=corpo.model_dump(exclude_none=True),
        headers=headers,
    )


def detalhes_validacao(erros) -> Dict[str, str]:
    """
    Converte a lista de erros do pydantic num mapa campo -> mensagem.

    Mantém a primeira mensagem de cada campo.
    """
    detalhes: Dict[str, str] = {}
    for erro in erros:
        loc = [str(parte) for parte in erro.get("loc", ()) if parte not in ("body", "query", "path")]
        campo = loc[-1] if loc else "corpo"
        mensagem = erro.get("msg", "")
        if mensagem.startswith("Value error, "):
            mensagem = mensagem[len("Value error, "):]
        detalhes.setdefault(campo, mensagem)
    return detalhes


def corpo_mal_formatado(erros) -> bool:
    """True quando o erro é do corpo inteiro (ausente, JSON inválido ou tipo errado)."""
    for erro in erros:
        if erro.get("type") == "json_invalid":
            return True
        if tuple(erro.get("loc", ())) == ("body",):
            return True
    return False


# ==================================================
# HANDLERS
# ==================================================

async def livraria_error_handler(request: Request, exc: LivrariaError) -> JSONResponse:
    headers = None
    if isinstance(exc, NaoAutenticadoError):
        headers = {"WWW-Authenticate": "Bearer"}

    if exc.status_code >= 500:
        logger.error("erro_interno", path=request.url.path, erro=exc.mensagem, tipo=type(exc).__name__)
    else:
        logger.info("erro_dominio", path=request.url.path, status_code=exc.status_code, erro=exc.mensagem)

    return erro_response(exc.status_code, exc.mensagem, exc.detalhes, headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    erros = exc.errors()
    if corpo_mal_formatado(erros):
        logger.warning("corpo_mal_formatado", path=request.url.path)
        return erro_response(status.HTTP_400_BAD_REQUEST, MENSAGEM_CORPO_INVALIDO)

    detalhes = detalhes_validacao(erros)
    logger.info("erro_validacao", path=request.url.path, campos=list(detalhes))
    return erro_response(status.HTTP_400_BAD_REQUEST, MENSAGEM_VALIDACAO, detalhes)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("violacao_integridade", path=request.url.path, erro=str(exc.orig))
    return erro_response(status.HTTP_409_CONFLICT, MENSAGEM_INTEGRIDADE)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        mensagem = MENSAGEM_METODO_NAO_PERMITIDO
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        mensagem = MENSAGEM_RECURSO_INEXISTENTE
    else:
        mensagem = str(exc.detail)
    return erro_response(exc.status_code, mensagem, headers=getattr(exc, "headers", None))


def registrar_handlers(app: FastAPI) -> None:
    """
    Registra os handlers de erro na aplicação.

    Exceções inesperadas não têm handler próprio e seguem o padrão do framework (500).
    """
    from utils.rate_limit import rate_limit_exceeded_handler

    app.add_exception_handler(LivrariaError, livraria_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
