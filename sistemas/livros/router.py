# sistemas/livros/router.py
"""
Endpoints do catálogo de livros
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from database.connection import get_db
from services.openlibrary_client import OpenLibraryClient
from sistemas.livros.models import Categoria, StatusLivro
from sistemas.livros.schemas import (
    LivroCreate, LivroIsbnCreate, LivroResponse, LivroStatusPatch, LivroUpdate,
)
from sistemas.livros.services import LivroService
from sistemas.livros.services_isbn import LivrariaService
from utils.logging_config import get_logger
from utils.paginacao import Pagina, Paginacao, parametros_paginacao

logger = get_logger(__name__)

router = APIRouter(prefix="/livros", tags=["Livros"])


def get_openlibrary_client() -> OpenLibraryClient:
    """Dependency do cliente da Open Library (substituída nos testes)."""
    return OpenLibraryClient()


# ============================================
# Catálogo
# ============================================

@router.post("", response_model=LivroResponse, response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
def cadastrar_livro(dados: LivroCreate, db: Session = Depends(get_db)):
    """
    Cadastra um livro.

    - 409 se o título ou o ISBN já estiverem em uso
    """
    logger.debug("cadastro_livro", isbn=dados.isbn)
    return LivroService(db).cadastrar(dados)


@router.get("", response_model=Pagina[LivroResponse], response_model_exclude_none=True)
def listar_livros(
    titulo: Optional[str] = Query(None),
    isbn: Optional[str] = Query(None),
    autor: Optional[str] = Query(None),
    editora: Optional[str] = Query(None),
    valor: Optional[Decimal] = Query(None),
    categoria: Optional[Categoria] = Query(None),
    status_livro: Optional[StatusLivro] = Query(None, alias="status"),
    paginacao: Paginacao = Depends(parametros_paginacao),
    db: Session = Depends(get_db)
):
    """
    Lista livros com filtros e paginação.

    Padrão: 10 por página, ordenados pela data de cadastro (mais recentes primeiro).
    """
    return LivroService(db).listar(
        paginacao,
        titulo=titulo,
        isbn=isbn,
        autor=autor,
        editora=editora,
        valor=valor,
        categoria=categoria,
        status=status_livro,
    )


@router.get("/livroId/{livro_id}", response_model=LivroResponse, response_model_exclude_none=True)
def buscar_livro(livro_id: UUID, db: Session = Depends(get_db)):
    return LivroService(db).buscar_por_id(livro_id)


@router.put("/{livro_id}", response_model=LivroResponse, response_model_exclude_none=True)
def atualizar_livro(livro_id: UUID, dados: LivroUpdate, db: Session = Depends(get_db)):
    """Atualização completa do livro."""
    service = LivroService(db)
    return service.atualizar(service.buscar_por_id(livro_id), dados)


@router.patch("/status/{livro_id}", response_model=LivroResponse, response_model_exclude_none=True)
def atualizar_status_livro(livro_id: UUID, dados: LivroStatusPatch, db: Session = Depends(get_db)):
    """Altera somente o status do livro."""
    service = LivroService(db)
    return service.atualizar_status(service.buscar_por_id(livro_id), dados.status)


@router.delete("/{livro_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_livro(livro_id: UUID, db: Session = Depends(get_db)):
    service = LivroService(db)
    service.deletar(service.buscar_por_id(livro_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================
# ISBN (Open Library)
# ============================================

@router.post("/isbn/{isbn}", response_model=LivroResponse, response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
def registrar_livro_por_isbn(
    isbn: str,
    dados: LivroIsbnCreate,
    db: Session = Depends(get_db),
    client: OpenLibraryClient = Depends(get_openlibrary_client)
):
    """
    Cadastra (ou reaproveita) o livro do ISBN e aplica os dados comerciais.

    - 400 se o ISBN não tiver 10 ou 13 dígitos
    - 404 se a Open Library não tiver o ISBN
    """
    return LivrariaService(db, client).registrar_livro_por_isbn(isbn, dados)


@router.get("/isbn/{isbn}", response_model=LivroResponse, response_model_exclude_none=True)
def consultar_livro_por_isbn(
    isbn: str,
    db: Session = Depends(get_db),
    client: OpenLibraryClient = Depends(get_openlibrary_client)
):
    return LivrariaService(db, client).consultar_livro_por_isbn(isbn)
