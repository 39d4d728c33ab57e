# sistemas/relatorios/router.py
"""
Endpoints de relatórios de livros (download de PDF)
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from database.connection import get_db
from sistemas.livros.models import StatusLivro
from sistemas.relatorios.services import RelatorioGerado, RelatorioService
from utils.logging_config import get_logger
from utils.rate_limit import limiter, LIMITS

logger = get_logger(__name__)

router = APIRouter(prefix="/relatorios/livros", tags=["Relatórios"])

RESPOSTA_PDF = {200: {"content": {"application/pdf": {}}, "description": "Arquivo PDF"}}


def resposta_pdf(relatorio: RelatorioGerado) -> Response:
    """Resposta de download com o PDF como anexo."""
    return Response(
        content=relatorio.conteudo,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{relatorio.nome_arquivo}"'},
    )


@router.get("/generico", response_class=Response, responses=RESPOSTA_PDF)
@limiter.limit(LIMITS["relatorio"])
def relatorio_generico(
    request: Request,
    titulo: str = Query("RELATORIO GERAL"),
    db: Session = Depends(get_db)
):
    """Todos os livros; o título do cabeçalho é personalizável."""
    return resposta_pdf(RelatorioService(db).gerar_relatorio_generico(titulo))


@router.get("/por-categoria", response_class=Response, responses=RESPOSTA_PDF)
@limiter.limit(LIMITS["relatorio"])
def relatorio_por_categoria(request: Request, db: Session = Depends(get_db)):
    return resposta_pdf(RelatorioService(db).gerar_relatorio_por_categoria())


@router.get("/por-autor", response_class=Response, responses=RESPOSTA_PDF)
@limiter.limit(LIMITS["relatorio"])
def relatorio_por_autor(request: Request, db: Session = Depends(get_db)):
    return resposta_pdf(RelatorioService(db).gerar_relatorio_por_autor())


@router.get("/por-editora", response_class=Response, responses=RESPOSTA_PDF)
@limiter.limit(LIMITS["relatorio"])
def relatorio_por_editora(request: Request, db: Session = Depends(get_db)):
    """Livros sem editora ficam no grupo "Desconhecida"."""
    return resposta_pdf(RelatorioService(db).gerar_relatorio_por_editora())


@router.get("/por-status", response_class=Response, responses=RESPOSTA_PDF)
@limiter.limit(LIMITS["relatorio"])
def relatorio_por_status(
    request: Request,
    status_livro: StatusLivro = Query(StatusLivro.DISPONIVEL, alias="status"),
    db: Session = Depends(get_db)
):
    """
    Livros com o status informado.

    - 400 se o status não existir
    """
    return resposta_pdf(RelatorioService(db).gerar_relatorio_por_status(status_livro))


@router.get("/por-valor", response_class=Response, responses=RESPOSTA_PDF)
@limiter.limit(LIMITS["relatorio"])
def relatorio_por_valor(
    request: Request,
    valor_minimo: Decimal = Query(Decimal("0.0"), alias="valorMinimo"),
    db: Session = Depends(get_db)
):
    """Livros com valor a partir de valorMinimo, do mais caro ao mais barato."""
    return resposta_pdf(RelatorioService(db).gerar_relatorio_por_valor(valor_minimo))


@router.get("/por-estoque-zerado", response_class=Response, responses=RESPOSTA_PDF)
@limiter.limit(LIMITS["relatorio"])
def relatorio_por_estoque_zerado(request: Request, db: Session = Depends(get_db)):
    return resposta_pdf(RelatorioService(db).gerar_relatorio_por_estoque_zerado())
