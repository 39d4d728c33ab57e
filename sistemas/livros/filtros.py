# sistemas/livros/filtros.py
"""
Construção das consultas filtradas de livros.

Texto: trecho sem diferenciar maiúsculas/minúsculas (ISBN sem hífens e espaços).
Valor: igualdade exata.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Select, select

from sistemas.livros.models import Categoria, Livro, StatusLivro
from sistemas.livros.schemas import normalizar_isbn


def _contem(coluna, trecho: str):
    return coluna.icontains(trecho, autoescape=True)


def construir_consulta_livros(
    titulo: Optional[str] = None,
    isbn: Optional[str] = None,
    autor: Optional[str] = None,
    editora: Optional[str] = None,
    valor: Optional[Decimal] = None,
    categoria: Optional[Categoria] = None,
    status: Optional[StatusLivro] = None,
) -> Select:
    """
    SELECT de livros com os filtros informados (os ausentes são ignorados).

    Example:
        consulta = construir_consulta_livros(titulo="cristo", valor=Decimal("59.90"))
        livros = db.scalars(consulta).all()
    """
    consulta = select(Livro)

    if titulo:
        consulta = consulta.where(_contem(Livro.titulo, titulo))
    isbn = normalizar_isbn(isbn)
    if isbn:
        consulta = consulta.where(_contem(Livro.isbn, isbn))
    if autor:
        consulta = consulta.where(_contem(Livro.autor, autor))
    if editora:
        consulta = consulta.where(_contem(Livro.editora, editora))
    if valor is not None:
        consulta = consulta.where(Livro.valor == valor)
    if categoria is not None:
        consulta = consulta.where(Livro.categoria == categoria)
    if status is not None:
        consulta = consulta.where(Livro.status_livro == status)

    return consulta
