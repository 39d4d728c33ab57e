# utils/password_policy.py
"""
SECURITY: Política de senhas dos usuários da livraria.

Regras:
- Entre 5 e 20 caracteres, sem espaços
- Pelo menos um número, uma letra minúscula e uma maiúscula
- Pelo menos um caractere especial
"""

import re
from typing import List, Tuple

MIN_PASSWORD_LENGTH = 5
MAX_PASSWORD_LENGTH = 20

# Caracteres especiais aceitos
SPECIAL_CHARACTERS = "!@#&()–[{}]:;',?/*~$^+=<>%"

_ESPECIAL_RE = re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]")


def check_password_strength(password: str) -> Tuple[bool, List[str]]:
    """
    SECURITY: Verifica a senha contra a política.

    Returns:
        Tuple (is_valid, list_of_errors)

    Example:
        is_valid, errors = check_password_strength("Livr@1")
    """
    errors = []

    if len(password) < MIN_PASSWORD_LENGTH or len(password) > MAX_PASSWORD_LENGTH:
        errors.append(
            f"Informe a senha com no mínimo {MIN_PASSWORD_LENGTH} caracteres "
            f"e no máximo {MAX_PASSWORD_LENGTH}"
        )

    if re.search(r"\s", password):
        errors.append("A senha não pode conter espaços")

    if not re.search(r"[0-9]", password):
        errors.append("A senha deve conter pelo menos um número")

    if not re.search(r"[a-z]", password):
        errors.append("A senha deve conter pelo menos uma letra minúscula")

    if not re.search(r"[A-Z]", password):
        errors.append("A senha deve conter pelo menos uma letra maiúscula")

    if not _ESPECIAL_RE.search(password):
        errors.append("A senha deve conter pelo menos um caractere especial")

    return len(errors) == 0, errors


def validate_password(password: str) -> str:
    """
    Valida a senha e a devolve, ou levanta ValueError com os erros encontrados.

    Pensada para uso em field_validator do pydantic.
    """
    is_valid, errors = check_password_strength(password)
    if not is_valid:
        raise ValueError("; ".join(errors))
    return password


def get_password_requirements() -> dict:
    """Requisitos da política (exibidos no frontend de cadastro)."""
    return {
        "min_length": MIN_PASSWORD_LENGTH,
        "max_length": MAX_PASSWORD_LENGTH,
        "require_uppercase": True,
        "require_lowercase": True,
        "require_digit": True,
        "require_special": True,
        "special_characters": SPECIAL_CHARACTERS,
    }
