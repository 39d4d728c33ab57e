# auth/security.py
"""
Funções de segurança: hash de senha e JWT
"""

from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from jose import JWTError, ExpiredSignatureError, jwt
from jose.exceptions import JWTClaimsError

from config import SECRET_KEY, ALGORITHM, JWT_EXPIRATION_MS
from utils.logging_config import get_logger
from utils.timezone import now_utc

logger = get_logger(__name__)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica se a senha plain corresponde ao hash"""
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # Valor armazenado não é um hash bcrypt
        return False


def get_password_hash(password: str) -> str:
    """Gera hash da senha"""
    return bcrypt.hashpw(
        password.encode('utf-8'),
        bcrypt.gensalt()
    ).decode('utf-8')


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Cria um token JWT para o usuário.

    Args:
        subject: Nome do usuário (claim "sub")
        expires_delta: Validade customizada; padrão JWT_EXPIRATION_MS
        secret_key: Chave de assinatura; padrão SECRET_KEY
        now: Instante de emissão (claim "iat")

    Returns:
        Token JWT como string
    """
    issued_at = now or now_utc()
    if expires_delta is None:
        expires_delta = timedelta(milliseconds=JWT_EXPIRATION_MS)

    to_encode = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, secret_key or SECRET_KEY, algorithm=ALGORITHM)


def extrair_subject(token: Optional[str], secret_key: Optional[str] = None) -> Optional[str]:
    """
    Valida assinatura, formato, algoritmo, expiração e claims do token
    e devolve o subject numa única decodificação.

    Cada causa de falha é registrada separadamente no log; o retorno é
    o nome do usuário, ou None para qualquer token inválido.
    """
    if not token or not token.strip():
        logger.warning("token_claims_vazias", motivo="token ausente ou vazio")
        return None

    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        logger.warning("token_malformado", erro=str(e))
        return None

    if header.get("alg") != ALGORITHM or header.get("typ", "JWT") != "JWT":
        logger.warning("token_nao_suportado", alg=header.get("alg"), typ=header.get("typ"))
        return None

    try:
        payload = jwt.decode(token, secret_key or SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        logger.warning("token_expirado")
        return None
    except JWTClaimsError as e:
        logger.warning("token_claims_invalidas", erro=str(e))
        return None
    except JWTError as e:
        logger.warning("token_assinatura_invalida", erro=str(e))
        return None

    if not payload.get("sub"):
        logger.warning("token_claims_vazias", motivo="subject ausente")
        return None

    return payload["sub"]


def validar_token(token: Optional[str], secret_key: Optional[str] = None) -> bool:
    """Token válido ou não; as causas de falha ficam no log."""
    return extrair_subject(token, secret_key) is not None


def get_username_token(token: str, secret_key: Optional[str] = None) -> Optional[str]:
    """Nome do usuário (subject) do token; None se o token não for válido."""
    return extrair_subject(token, secret_key)
