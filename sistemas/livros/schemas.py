# sistemas/livros/schemas.py
"""
Schemas Pydantic do catálogo de livros

Um schema por operação: cadastro, atualização completa, patch de status,
cadastro por ISBN e a projeção de saída.
"""

import re
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from sistemas.livros.models import Categoria, Formato, StatusLivro, TipoCapa

_SEPARADORES_ISBN_RE = re.compile(r"[\s-]")


def normalizar_isbn(isbn: str) -> str:
    """
    Remove espaços e hífens.

    Example:
        normalizar_isbn("978-0-13-468599-1")  # "9780134685991"
    """
    return _SEPARADORES_ISBN_RE.sub("", isbn or "")


def _validar_valor(v: Decimal) -> Decimal:
    """Valor monetário: maior que zero, até 6 dígitos inteiros e 2 decimais."""
    if v <= 0:
        raise ValueError("O valor deve ser maior que zero.")
    _, digitos, expoente = v.normalize().as_tuple()
    if expoente >= 0:
        inteiros, casas = len(digitos) + expoente, 0
    else:
        casas = -expoente
        inteiros = max(len(digitos) - casas, 0)
    if casas > 2 or inteiros > 6:
        raise ValueError("Valor inválido.")
    return v


# ==========================================
# Requests
# ==========================================

class LivroCreate(BaseModel):
    """Cadastro manual de livro"""
    model_config = ConfigDict(populate_by_name=True)

    isbn: str = Field(..., min_length=2, max_length=100)
    titulo: str = Field(..., min_length=2, max_length=100)
    subtitulo: Optional[str] = Field(None, max_length=255)
    valor: Decimal
    quantidade: int = Field(..., ge=0)
    categoria: Categoria
    tipo_capa: TipoCapa = Field(..., alias="tipoCapa")
    autor: str = Field(..., max_length=255)
    editora: str = Field(..., max_length=255)

    @field_validator("isbn")
    @classmethod
    def isbn_normalizado(cls, v: str) -> str:
        v = normalizar_isbn(v)
        if len(v) < 2:
            raise ValueError("O campo deve conter ao menos 2 caracteres.")
        return v

    @field_validator("titulo")
    @classmethod
    def sem_espacos_nas_bordas(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("O campo deve conter ao menos 2 caracteres.")
        return v

    @field_validator("valor")
    @classmethod
    def valor_monetario(cls, v: Decimal) -> Decimal:
        return _validar_valor(v)


class LivroUpdate(LivroCreate):
    """Atualização completa de livro"""
    status: Optional[StatusLivro] = None
    formato: Optional[Formato] = None


class LivroStatusPatch(BaseModel):
    """Altera apenas o status do livro"""
    status: StatusLivro


class LivroIsbnCreate(BaseModel):
    """Dados comerciais informados ao cadastrar por ISBN"""
    model_config = ConfigDict(populate_by_name=True)

    valor: Decimal
    quantidade: int = Field(..., ge=0)
    categoria: Categoria
    tipo_capa: TipoCapa = Field(..., alias="tipoCapa")

    @field_validator("valor")
    @classmethod
    def valor_monetario(cls, v: Decimal) -> Decimal:
        return _validar_valor(v)


# ==========================================
# Responses
# ==========================================

class LivroResponse(BaseModel):
    """Projeção de livro; campos nulos são omitidos"""
    model_config = ConfigDict(from_attributes=True)

    livro_id: UUID = Field(..., serialization_alias="livroId")
    isbn: str
    titulo: str
    subtitulo: Optional[str] = None
    valor: Optional[Decimal] = None
    quantidade: Optional[int] = None
    status_livro: Optional[StatusLivro] = Field(None, serialization_alias="statusLivro")
    categoria: Optional[Categoria] = None
    tipo_capa: Optional[TipoCapa] = Field(None, serialization_alias="tipoCapa")
    formato: Optional[Formato] = None
    data_publicacao: Optional[str] = Field(None, serialization_alias="dataPublicacao")
    numero_paginas: Optional[int] = Field(None, serialization_alias="numeroPaginas")
    capa_url: Optional[str] = Field(None, serialization_alias="capaUrl")
    autor: Optional[str] = None
    editora: Optional[str] = None
    data_cadastro: Optional[datetime] = Field(None, serialization_alias="dataCadastroLivro")
    data_atualizacao: Optional[datetime] = Field(None, serialization_alias="dataAtualizacaoLivro")

    @field_serializer("valor")
    def valor_como_numero(self, valor: Optional[Decimal]) -> Optional[float]:
        return float(valor) if valor is not None else None
