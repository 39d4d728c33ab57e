# sistemas/relatorios/pdf.py
"""
Montagem de relatórios tabulares em PDF com PyMuPDF.

Layout:
- Bloco de título entre dois traços, com "Gerado em: dd/mm/aaaa"
- Seções opcionais com cabeçalho de grupo e subtotal
- Tabela com cabeçalho vinho (repetido a cada página) e linhas zebradas
- Total geral ao final
- Rodapé fixo em todas as páginas, com "Página i de n"

IMPORTANTE: PyMuPDF não é thread-safe; a renderização roda sob pymupdf_lock.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional

import fitz  # PyMuPDF

from config import RELATORIO_RODAPE
from sistemas.livros.models import Livro
from utils.errors import RelatorioError
from utils.logging_config import get_logger
from utils.pymupdf_lock import pymupdf_lock
from utils.timezone import formatar_data

logger = get_logger(__name__)

# ============================================
# Estilo
# ============================================

VINHO = (58 / 255, 0, 0)
BRANCO = (1, 1, 1)
PRETO = (0, 0, 0)
CINZA_CLARO = (245 / 255, 245 / 255, 245 / 255)
CINZA_ESCURO = (0.35, 0.35, 0.35)
CINZA = (0.5, 0.5, 0.5)

FONTE = "helv"
FONTE_NEGRITO = "hebo"
FONTE_ITALICO = "heit"

MARGEM = 36
ALTURA_CABECALHO_TABELA = 20
ALTURA_LINHA = 18
PADDING_CELULA = 4
TAMANHO_FONTE_DADOS = 9
ALTURA_RODAPE = 34
MAX_CARACTERES_CELULA = 50


def formatar_moeda(valor: Optional[Decimal]) -> str:
    """Decimal("1234.5") -> "R$ 1.234,50"."""
    if valor is None:
        return "-"
    texto = f"{valor:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {texto}"


def texto_ou_traco(valor) -> str:
    if valor is None:
        return "-"
    if hasattr(valor, "value"):
        return str(valor.value)
    return str(valor)


def truncar(texto: str, largura: float, fontsize: float = TAMANHO_FONTE_DADOS,
            fontname: str = FONTE, max_caracteres: int = MAX_CARACTERES_CELULA) -> str:
    """Corta o texto com "..." para caber na largura (e no limite de caracteres)."""
    if len(texto) > max_caracteres:
        texto = texto[:max_caracteres - 3] + "..."
    if fitz.get_text_length(texto, fontname=fontname, fontsize=fontsize) <= largura:
        return texto
    texto = texto.removesuffix("...")
    while texto and fitz.get_text_length(texto + "...", fontname=fontname, fontsize=fontsize) > largura:
        texto = texto[:-1]
    return texto.rstrip() + "..."


@dataclass
class Coluna:
    """Coluna da tabela: título, peso relativo da largura e extrator do valor"""
    titulo: str
    peso: float
    valor: Callable[[Livro], str]
    alinhar_direita: bool = False


@dataclass
class SecaoRelatorio:
    livros: List[Livro]
    cabecalho: Optional[str] = None
    rotulo_subtotal: Optional[str] = None


@dataclass
class RelatorioPdfBuilder:
    """
    Monta um relatório PDF de livros.

    Uso:
        builder = RelatorioPdfBuilder("RELATÓRIO DE LIVROS POR CATEGORIA", colunas)
        builder.adicionar_secao(livros, "Categoria: HISTORIA", "Total de livros nesta categoria")
        pdf_bytes = builder.build()
    """
    titulo: str
    colunas: List[Coluna]
    paisagem: bool = False
    rotulo_total: str = "TOTAL DE LIVROS"
    rodape: str = RELATORIO_RODAPE
    gerado_em: Optional[datetime] = None
    secoes: List[SecaoRelatorio] = field(default_factory=list)

    def adicionar_secao(self, livros: List[Livro], cabecalho: Optional[str] = None,
                        rotulo_subtotal: Optional[str] = None) -> "RelatorioPdfBuilder":
        self.secoes.append(SecaoRelatorio(list(livros), cabecalho, rotulo_subtotal))
        return self

    @property
    def total_livros(self) -> int:
        return sum(len(secao.livros) for secao in self.secoes)

    def build(self) -> bytes:
        """
        Renderiza o documento completo.

        Raises:
            RelatorioError: falha do PyMuPDF durante a renderização
        """
        with pymupdf_lock:
            doc = fitz.open()
            try:
                _Renderizador(self, doc).renderizar()
                pdf_bytes = doc.tobytes(garbage=3, deflate=True)
            except Exception as e:
                logger.error("relatorio_falhou", titulo=self.titulo, erro=str(e))
                raise RelatorioError(f"Erro ao gerar o relatório: {self.titulo}") from e
            finally:
                doc.close()

        logger.info("relatorio_gerado", titulo=self.titulo, livros=self.total_livros, bytes=len(pdf_bytes))
        return pdf_bytes


class _Renderizador:
    """Estado de uma renderização (página atual e posição vertical)."""

    def __init__(self, builder: RelatorioPdfBuilder, doc):
        self.builder = builder
        self.doc = doc
        formato = "a4-l" if builder.paisagem else "a4"
        self.largura, self.altura = fitz.paper_size(formato)
        self.area_util = self.largura - 2 * MARGEM
        self.limite_inferior = self.altura - MARGEM - ALTURA_RODAPE
        self.pagina = None
        self.y = MARGEM

        peso_total = sum(coluna.peso for coluna in builder.colunas)
        self.larguras = [self.area_util * coluna.peso / peso_total for coluna in builder.colunas]

    # ----------------------------------------
    # Estrutura
    # ----------------------------------------

    def renderizar(self):
        self._nova_pagina()
        self._bloco_titulo()

        if self.builder.total_livros == 0:
            self._texto(MARGEM, self.y + 12, "Nenhum livro encontrado.", FONTE_ITALICO, 10, CINZA_ESCURO)
            self.y += 24

        for secao in self.builder.secoes:
            if secao.livros:
                self._secao(secao)

        self._garantir_espaco(26)
        self.y += 8
        self._texto(MARGEM, self.y + 12, f"{self.builder.rotulo_total}: {self.builder.total_livros}",
                    FONTE_NEGRITO, 12, PRETO)
        self.y += 18

        self._rodapes()

    def _nova_pagina(self):
        self.pagina = self.doc.new_page(width=self.largura, height=self.altura)
        self.y = MARGEM

    def _garantir_espaco(self, altura: float) -> bool:
        """Abre nova página se o bloco não couber. Retorna True se abriu."""
        if self.y + altura > self.limite_inferior:
            self._nova_pagina()
            return True
        return False

    # ----------------------------------------
    # Blocos
    # ----------------------------------------

    def _bloco_titulo(self):
        self._traco(self.y, VINHO, 1.2)
        self.y += 26
        self._texto_centralizado(self.y, self.builder.titulo, FONTE_NEGRITO, 16, VINHO)
        self.y += 18
        gerado_em = formatar_data(self.builder.gerado_em)
        self._texto_centralizado(self.y, f"Gerado em: {gerado_em}", FONTE_ITALICO, 9, CINZA_ESCURO)
        self.y += 10
        self._traco(self.y, VINHO, 1.2)
        self.y += 16

    def _secao(self, secao: SecaoRelatorio):
        if secao.cabecalho:
            self._garantir_espaco(20 + ALTURA_CABECALHO_TABELA + ALTURA_LINHA)
            self._texto(MARGEM, self.y + 13, secao.cabecalho, FONTE_NEGRITO, 12, PRETO)
            self.y += 20

        self._garantir_espaco(ALTURA_CABECALHO_TABELA + ALTURA_LINHA)
        self._cabecalho_tabela()

        for indice, livro in enumerate(secao.livros):
            if self._garantir_espaco(ALTURA_LINHA):
                self._cabecalho_tabela()
            self._linha(livro, indice)

        if secao.rotulo_subtotal:
            self._garantir_espaco(18)
            self.y += 4
            self._texto(MARGEM, self.y + 11, f"{secao.rotulo_subtotal}: {len(secao.livros)}",
                        FONTE, 10, PRETO)
            self.y += 14

        self.y += 12

    def _cabecalho_tabela(self):
        retangulo = fitz.Rect(MARGEM, self.y, MARGEM + self.area_util, self.y + ALTURA_CABECALHO_TABELA)
        self.pagina.draw_rect(retangulo, color=None, fill=VINHO, width=0)

        x = MARGEM
        for coluna, largura in zip(self.builder.colunas, self.larguras):
            texto = truncar(coluna.titulo, largura - 2 * PADDING_CELULA, fontname=FONTE_NEGRITO)
            self._texto(x + PADDING_CELULA, self.y + 14, texto, FONTE_NEGRITO, TAMANHO_FONTE_DADOS, BRANCO)
            x += largura
        self.y += ALTURA_CABECALHO_TABELA

    def _linha(self, livro: Livro, indice: int):
        if indice % 2 == 0:
            retangulo = fitz.Rect(MARGEM, self.y, MARGEM + self.area_util, self.y + ALTURA_LINHA)
            self.pagina.draw_rect(retangulo, color=None, fill=CINZA_CLARO, width=0)

        x = MARGEM
        for coluna, largura in zip(self.builder.colunas, self.larguras):
            texto = truncar(coluna.valor(livro), largura - 2 * PADDING_CELULA)
            if coluna.alinhar_direita:
                comprimento = fitz.get_text_length(texto, fontname=FONTE, fontsize=TAMANHO_FONTE_DADOS)
                posicao = x + largura - PADDING_CELULA - comprimento
            else:
                posicao = x + PADDING_CELULA
            self._texto(posicao, self.y + 12.5, texto, FONTE, TAMANHO_FONTE_DADOS, PRETO)
            x += largura
        self.y += ALTURA_LINHA

    def _rodapes(self):
        total_paginas = len(self.doc)
        y_traco = self.altura - MARGEM - 16
        for numero, pagina in enumerate(self.doc, start=1):
            pagina.draw_line(
                fitz.Point(MARGEM, y_traco),
                fitz.Point(self.largura - MARGEM, y_traco),
                color=CINZA, width=0.6,
            )
            pagina.insert_text(fitz.Point(MARGEM, y_traco + 14), self.builder.rodape,
                               fontname=FONTE_ITALICO, fontsize=8, color=CINZA)
            paginacao = f"Página {numero} de {total_paginas}"
            comprimento = fitz.get_text_length(paginacao, fontname=FONTE_ITALICO, fontsize=8)
            pagina.insert_text(fitz.Point(self.largura - MARGEM - comprimento, y_traco + 14), paginacao,
                               fontname=FONTE_ITALICO, fontsize=8, color=CINZA)

    # ----------------------------------------
    # Primitivas
    # ----------------------------------------

    def _texto(self, x: float, y: float, texto: str, fonte: str, tamanho: float, cor):
        self.pagina.insert_text(fitz.Point(x, y), texto, fontname=fonte, fontsize=tamanho, color=cor)

    def _texto_centralizado(self, y: float, texto: str, fonte: str, tamanho: float, cor):
        comprimento = fitz.get_text_length(texto, fontname=fonte, fontsize=tamanho)
        self._texto((self.largura - comprimento) / 2, y, texto, fonte, tamanho, cor)

    def _traco(self, y: float, cor, espessura: float):
        self.pagina.draw_line(fitz.Point(MARGEM, y), fitz.Point(self.largura - MARGEM, y),
                              color=cor, width=espessura)
