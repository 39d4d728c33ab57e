# utils/paginacao.py
"""
Paginação e ordenação de consultas SQLAlchemy.

Parâmetros de query aceitos pelas listagens:
    page  - página (começa em 0)
    size  - itens por página (1 a 100)
    sort  - "campo,asc" ou "campo,desc"

Uso:
    @router.get("", response_model=Pagina[LivroResponse])
    def listar(paginacao: Paginacao = Depends(parametros_paginacao), ...):
        return paginar(db, consulta, paginacao, COLUNAS_ORDENAVEIS, Livro.data_cadastro.desc())
"""

import math
from dataclasses import dataclass
from typing import Dict, Generic, List, Optional, TypeVar

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from utils.errors import ValidacaoError

T = TypeVar("T")

TAMANHO_PADRAO = 10
TAMANHO_MAXIMO = 100


class Pagina(BaseModel, Generic[T]):
    """Página de resultados"""
    content: List[T]
    totalElements: int
    totalPages: int
    number: int
    size: int


@dataclass
class Paginacao:
    page: int = 0
    size: int = TAMANHO_PADRAO
    sort: Optional[str] = None


def parametros_paginacao(
    page: int = Query(0, ge=0, description="Página (0 = primeira)"),
    size: int = Query(TAMANHO_PADRAO, ge=1, le=TAMANHO_MAXIMO, description="Itens por página"),
    sort: Optional[str] = Query(None, description="Ordenação: campo,asc|desc"),
) -> Paginacao:
    return Paginacao(page=page, size=size, sort=sort)


def resolver_ordenacao(sort: Optional[str], colunas: Dict[str, object], padrao):
    """
    Converte "campo,direcao" numa cláusula ORDER BY.

    Raises:
        ValidacaoError: campo desconhecido ou direção inválida
    """
    if not sort:
        return padrao

    partes = [parte.strip() for parte in sort.split(",")]
    campo = partes[0]
    direcao = partes[1].lower() if len(partes) > 1 and partes[1] else "asc"

    if campo not in colunas:
        raise ValidacaoError(detalhes={"sort": f"Campo de ordenação inválido: {campo}"})
    if direcao not in ("asc", "desc"):
        raise ValidacaoError(detalhes={"sort": f"Direção de ordenação inválida: {direcao}"})

    coluna = colunas[campo]
    return coluna.desc() if direcao == "desc" else coluna.asc()


def paginar(
    db: Session,
    consulta: Select,
    paginacao: Paginacao,
    colunas_ordenaveis: Dict[str, object],
    ordenacao_padrao,
) -> dict:
    """
    Executa a consulta paginada e devolve o dicionário no formato de Pagina.
    """
    ordem = resolver_ordenacao(paginacao.sort, colunas_ordenaveis, ordenacao_padrao)

    total = db.scalar(
        select(func.count()).select_from(consulta.order_by(None).subquery())
    ) or 0

    itens = db.scalars(
        consulta.order_by(ordem)
        .offset(paginacao.page * paginacao.size)
        .limit(paginacao.size)
    ).all()

    return {
        "content": itens,
        "totalElements": total,
        "totalPages": math.ceil(total / paginacao.size) if total else 0,
        "number": paginacao.page,
        "size": paginacao.size,
    }
