# sistemas/livros/models.py
"""
Modelo de dados do catálogo de livros

- Livro: exemplar do catálogo, cadastrado manualmente ou por consulta de ISBN
"""

import enum
import uuid

from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum, Uuid

from database.connection import Base
from utils.timezone import now_utc


class Categoria(str, enum.Enum):
    EVANGELIO = "EVANGELIO"
    TEOLOGICO = "TEOLOGICO"
    CIENCIAS = "CIENCIAS"
    HISTORIA = "HISTORIA"
    FILOSOFIA = "FILOSOFIA"
    EDUCACAO = "EDUCACAO"
    TECNOLOGIA = "TECNOLOGIA"


class StatusLivro(str, enum.Enum):
    DISPONIVEL = "DISPONIVEL"
    INDISPONIVEL = "INDISPONIVEL"
    ESGOTADO = "ESGOTADO"


class TipoCapa(str, enum.Enum):
    COMUM = "COMUM"
    DURA = "DURA"


class Formato(str, enum.Enum):
    FISICO = "FISICO"
    DIGITAL = "DIGITAL"


class Livro(Base):
    """
    Livro do catálogo.

    ISBN e título são únicos. Autor e editora são texto livre.
    """
    __tablename__ = "tb_livro"

    livro_id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Identificação
    isbn = Column(String(100), unique=True, nullable=False, index=True)
    titulo = Column(String(255), unique=True, nullable=False, index=True)
    subtitulo = Column(String(255), nullable=True)

    # Comercial
    valor = Column(Numeric(8, 2), nullable=True)
    quantidade = Column(Integer, nullable=True)
    status_livro = Column(
        Enum(StatusLivro, native_enum=False, length=20),
        nullable=False,
        default=StatusLivro.DISPONIVEL,
    )

    # Classificação
    categoria = Column(Enum(Categoria, native_enum=False, length=30), nullable=True)
    tipo_capa = Column(Enum(TipoCapa, native_enum=False, length=20), nullable=True)
    formato = Column(
        Enum(Formato, native_enum=False, length=20),
        nullable=False,
        default=Formato.FISICO,
    )

    # Metadados editoriais (Open Library devolve a data como texto livre)
    data_publicacao = Column(String(50), nullable=True)
    numero_paginas = Column(Integer, nullable=True)
    capa_url = Column(String(500), nullable=True)
    autor = Column(String(255), nullable=True)
    editora = Column(String(255), nullable=True)

    # Timestamps
    data_cadastro = Column(DateTime(timezone=True), nullable=False, default=now_utc, index=True)
    data_atualizacao = Column(DateTime(timezone=True), nullable=False, default=now_utc)

    def __repr__(self):
        return f"<Livro(livro_id={self.livro_id}, isbn='{self.isbn}', titulo='{self.titulo}')>"
