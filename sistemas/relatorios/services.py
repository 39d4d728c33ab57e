# sistemas/relatorios/services.py
"""
Relatórios de livros em PDF.

Cada método devolve um RelatorioGerado (bytes do PDF + nome do arquivo).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from sistemas.livros.models import Livro, StatusLivro
from sistemas.relatorios.agrupamento import agrupar_livros
from sistemas.relatorios.pdf import Coluna, RelatorioPdfBuilder, formatar_moeda, texto_ou_traco
from utils.logging_config import get_logger

logger = get_logger(__name__)

TITULO_GENERICO_PADRAO = "RELATÓRIO GERAL"


@dataclass
class RelatorioGerado:
    conteudo: bytes
    nome_arquivo: str


# ============================================
# Colunas
# ============================================

def _coluna_titulo(peso: float = 3.2) -> Coluna:
    return Coluna("TÍTULO", peso, lambda livro: texto_ou_traco(livro.titulo))


COL_ISBN = Coluna("ISBN", 1.6, lambda livro: texto_ou_traco(livro.isbn))
COL_VALOR = Coluna("VALOR", 1.3, lambda livro: formatar_moeda(livro.valor), alinhar_direita=True)
COL_EDITORA = Coluna("EDITORA", 1.8, lambda livro: texto_ou_traco(livro.editora))
COL_AUTORES = Coluna("AUTORES", 2.0, lambda livro: texto_ou_traco(livro.autor))
COL_AUTOR = Coluna("AUTOR", 2.0, lambda livro: texto_ou_traco(livro.autor))
COL_CATEGORIA = Coluna("CATEGORIA", 1.5, lambda livro: texto_ou_traco(livro.categoria))
COL_QUANTIDADE = Coluna("QTD.", 0.7, lambda livro: texto_ou_traco(livro.quantidade), alinhar_direita=True)
COL_STATUS = Coluna("STATUS", 1.4, lambda livro: texto_ou_traco(livro.status_livro))
COL_FORMATO = Coluna("FORMATO", 1.1, lambda livro: texto_ou_traco(livro.formato))

COLUNAS_GENERICO = [_coluna_titulo(), COL_ISBN, COL_VALOR, COL_EDITORA, COL_QUANTIDADE, COL_AUTORES]
COLUNAS_CATEGORIA = [_coluna_titulo(), COL_ISBN, COL_VALOR, COL_AUTORES, COL_EDITORA, COL_QUANTIDADE]
COLUNAS_AUTOR = [_coluna_titulo(), COL_ISBN, COL_VALOR, COL_EDITORA, COL_QUANTIDADE]
COLUNAS_EDITORA = [_coluna_titulo(), COL_ISBN, COL_VALOR, COL_CATEGORIA, COL_AUTOR, COL_QUANTIDADE]
COLUNAS_VALOR = [_coluna_titulo(), COL_ISBN, COL_VALOR, COL_EDITORA, COL_QUANTIDADE]
COLUNAS_STATUS = [_coluna_titulo(), COL_ISBN, COL_VALOR, COL_EDITORA, COL_QUANTIDADE, COL_STATUS]
COLUNAS_ESTOQUE_ZERADO = [
    _coluna_titulo(3.0), COL_ISBN, COL_AUTOR, COL_EDITORA, COL_CATEGORIA, COL_VALOR, COL_STATUS, COL_FORMATO,
]


class RelatorioService:
    """Consulta os livros e monta os relatórios"""

    def __init__(self, db: Session):
        self.db = db

    def _livros(self, *condicoes, ordem=None) -> List[Livro]:
        consulta = select(Livro).where(*condicoes).order_by(ordem if ordem is not None else Livro.titulo)
        return list(self.db.scalars(consulta))

    # ==================================================
    # VARIANTES
    # ==================================================

    def gerar_relatorio_generico(self, titulo: str = TITULO_GENERICO_PADRAO) -> RelatorioGerado:
        """Todos os livros em uma única tabela; título em branco vira "RELATÓRIO GERAL"."""
        titulo = (titulo or "").strip() or TITULO_GENERICO_PADRAO

        builder = RelatorioPdfBuilder(titulo, COLUNAS_GENERICO)
        builder.adicionar_secao(self._livros())
        return RelatorioGerado(builder.build(), "relatorio_generico_livros.pdf")

    def gerar_relatorio_por_categoria(self) -> RelatorioGerado:
        builder = RelatorioPdfBuilder(
            "RELATÓRIO DE LIVROS POR CATEGORIA", COLUNAS_CATEGORIA, rotulo_total="TOTAL GERAL DE LIVROS"
        )
        for categoria, livros in agrupar_livros(self._livros(), "categoria").items():
            builder.adicionar_secao(livros, f"Categoria: {categoria}", "Total de livros nesta categoria")
        return RelatorioGerado(builder.build(), "relatorio_livros_por_categoria.pdf")

    def gerar_relatorio_por_autor(self) -> RelatorioGerado:
        builder = RelatorioPdfBuilder(
            "RELATÓRIO DE LIVROS POR AUTOR", COLUNAS_AUTOR, rotulo_total="TOTAL GERAL DE LIVROS"
        )
        for autor, livros in agrupar_livros(self._livros(), "autor").items():
            builder.adicionar_secao(livros, f"Autor: {autor}", "Total de livros deste autor")
        return RelatorioGerado(builder.build(), "relatorio_livros_por_autor.pdf")

    def gerar_relatorio_por_editora(self) -> RelatorioGerado:
        builder = RelatorioPdfBuilder(
            "RELATÓRIO DE LIVROS POR EDITORA", COLUNAS_EDITORA, rotulo_total="TOTAL GERAL DE LIVROS"
        )
        grupos = agrupar_livros(self._livros(), "editora", rotulo_vazio="Desconhecida")
        for editora, livros in grupos.items():
            builder.adicionar_secao(livros, f"Editora: {editora}", "Total de livros desta editora")
        return RelatorioGerado(builder.build(), "relatorio_livros_por_editora.pdf")

    def gerar_relatorio_por_status(self, status: StatusLivro) -> RelatorioGerado:
        livros = self._livros(Livro.status_livro == status)

        builder = RelatorioPdfBuilder(f"RELATÓRIO DE STATUS: {status.value}", COLUNAS_STATUS)
        builder.adicionar_secao(livros)
        return RelatorioGerado(builder.build(), "relatorio_livros_por_status.pdf")

    def gerar_relatorio_por_valor(self, valor_minimo: Decimal = Decimal("0")) -> RelatorioGerado:
        """Livros com valor >= valor_minimo, do mais caro para o mais barato."""
        livros = self._livros(
            Livro.valor.is_not(None),
            Livro.valor >= valor_minimo,
            ordem=Livro.valor.desc(),
        )

        titulo = f"RELATÓRIO DE LIVROS POR VALOR (a partir de R$ {valor_minimo:.2f})"
        builder = RelatorioPdfBuilder(titulo, COLUNAS_VALOR)
        builder.adicionar_secao(livros)
        return RelatorioGerado(builder.build(), "relatorio_livros_por_valor.pdf")

    def gerar_relatorio_por_estoque_zerado(self) -> RelatorioGerado:
        livros = self._livros(Livro.quantidade == 0)

        builder = RelatorioPdfBuilder(
            "RELATÓRIO DE LIVROS COM ESTOQUE ZERADO", COLUNAS_ESTOQUE_ZERADO, paisagem=True
        )
        builder.adicionar_secao(livros)
        return RelatorioGerado(builder.build(), "relatorio_livros_por_estoque_zerado.pdf")
