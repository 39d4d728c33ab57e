# sistemas/livros/services_isbn.py
"""
Cadastro e consulta de livros por ISBN.

Fluxo do cadastro:
1. Normaliza o ISBN (remove espaços e hífens) e valida 10 ou 13 dígitos
2. Reaproveita o livro já gravado com esse ISBN, ou consulta a Open Library
   e grava um livro novo (formato FISICO, status DISPONIVEL)
3. Sobrepõe quantidade, valor, categoria e tipo de capa informados
"""

import re
from typing import Optional

from sqlalchemy.orm import Session

from services.openlibrary_client import DadosOpenLibrary, OpenLibraryClient, OpenLibraryError
from sistemas.livros.exceptions import (
    ConsultaIsbnError, IsbnInvalidoError, LivroNaoEncontradoError, TituloEmUsoError,
)
from sistemas.livros.models import Formato, Livro, StatusLivro
from sistemas.livros.schemas import LivroIsbnCreate, normalizar_isbn
from sistemas.livros.services import LivroService
from utils.logging_config import get_logger
from utils.timezone import now_utc

logger = get_logger(__name__)

_ISBN_RE = re.compile(r"\d{10}|\d{13}")


def validar_isbn(isbn: str) -> str:
    """
    Normaliza e valida o ISBN.

    Raises:
        IsbnInvalidoError: não tem exatamente 10 ou 13 dígitos
    """
    limpo = normalizar_isbn(isbn)
    if not _ISBN_RE.fullmatch(limpo):
        logger.info("isbn_invalido", isbn=isbn)
        raise IsbnInvalidoError(isbn)
    return limpo


class LivrariaService:
    """Integração do catálogo com a Open Library"""

    def __init__(self, db: Session, client: Optional[OpenLibraryClient] = None):
        self.db = db
        self.client = client or OpenLibraryClient()
        self.livros = LivroService(db)

    def consultar_livro_por_isbn(self, isbn: str) -> Livro:
        """Livro já gravado com o ISBN informado (404 se não houver)."""
        limpo = validar_isbn(isbn)
        livro = self.livros.buscar_por_isbn(limpo)
        if livro is None:
            raise LivroNaoEncontradoError(f"Livro com ISBN: {limpo} não encontrado.")
        return livro

    def registrar_livro_por_isbn(self, isbn: str, dados: LivroIsbnCreate) -> Livro:
        limpo = validar_isbn(isbn)

        livro = self.livros.buscar_por_isbn(limpo)
        if livro is None:
            livro = self._novo_livro(limpo, self._consultar_open_library(limpo))
            self.db.add(livro)
        else:
            logger.info("isbn_ja_cadastrado", isbn=limpo, livro_id=str(livro.livro_id))

        livro.quantidade = dados.quantidade
        livro.valor = dados.valor
        livro.categoria = dados.categoria
        livro.tipo_capa = dados.tipo_capa
        livro.data_atualizacao = now_utc()

        self.db.commit()
        self.db.refresh(livro)

        logger.info("livro_registrado_por_isbn", livro_id=str(livro.livro_id), isbn=limpo)
        return livro

    def _consultar_open_library(self, isbn: str) -> DadosOpenLibrary:
        try:
            return self.client.buscar_por_isbn(isbn)
        except OpenLibraryError as e:
            raise ConsultaIsbnError(f"Livro com ISBN: {isbn} não encontrado na Open Library.") from e

    def _novo_livro(self, isbn: str, dados: DadosOpenLibrary) -> Livro:
        if self.livros.existe_por_titulo(dados.titulo):
            raise TituloEmUsoError()

        agora = now_utc()
        return Livro(
            isbn=isbn,
            titulo=dados.titulo,
            subtitulo=dados.subtitulo,
            numero_paginas=dados.numero_paginas,
            data_publicacao=dados.data_publicacao,
            capa_url=dados.capa_url,
            autor=dados.autor,
            editora=dados.editora,
            formato=Formato.FISICO,
            status_livro=StatusLivro.DISPONIVEL,
            data_cadastro=agora,
            data_atualizacao=agora,
        )
