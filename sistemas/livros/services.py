# sistemas/livros/services.py
"""
Serviço do catálogo de livros: listagem paginada, consulta,
cadastro, atualização, patch de status e exclusão.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from sistemas.livros.exceptions import IsbnEmUsoError, LivroNaoEncontradoError, TituloEmUsoError
from sistemas.livros.filtros import construir_consulta_livros
from sistemas.livros.models import Formato, Livro, StatusLivro
from sistemas.livros.schemas import LivroCreate, LivroUpdate
from utils.logging_config import get_logger
from utils.paginacao import Paginacao, paginar
from utils.timezone import now_utc

logger = get_logger(__name__)

COLUNAS_ORDENAVEIS = {
    "titulo": Livro.titulo,
    "isbn": Livro.isbn,
    "autor": Livro.autor,
    "editora": Livro.editora,
    "valor": Livro.valor,
    "quantidade": Livro.quantidade,
    "categoria": Livro.categoria,
    "statusLivro": Livro.status_livro,
    "dataCadastro": Livro.data_cadastro,
    "dataCadastroLivro": Livro.data_cadastro,
    "dataAtualizacaoLivro": Livro.data_atualizacao,
}

ORDENACAO_PADRAO = Livro.data_cadastro.desc()


class LivroService:
    """Regras de negócio do catálogo"""

    def __init__(self, db: Session):
        self.db = db

    # ==================================================
    # CONSULTAS
    # ==================================================

    def listar(self, paginacao: Paginacao, **filtros) -> dict:
        """Listagem paginada; filtros: titulo, isbn, autor, editora, valor, categoria, status."""
        consulta = construir_consulta_livros(**filtros)
        return paginar(self.db, consulta, paginacao, COLUNAS_ORDENAVEIS, ORDENACAO_PADRAO)

    def buscar_por_id(self, livro_id: UUID) -> Livro:
        livro = self.db.get(Livro, livro_id)
        if livro is None:
            raise LivroNaoEncontradoError()
        return livro

    def buscar_por_isbn(self, isbn: str) -> Optional[Livro]:
        return self.db.scalar(select(Livro).where(Livro.isbn == isbn))

    def existe_por_titulo(self, titulo: str, exceto: Optional[UUID] = None) -> bool:
        consulta = select(Livro.livro_id).where(Livro.titulo == titulo)
        if exceto is not None:
            consulta = consulta.where(Livro.livro_id != exceto)
        return self.db.scalar(consulta) is not None

    def existe_por_isbn(self, isbn: str, exceto: Optional[UUID] = None) -> bool:
        consulta = select(Livro.livro_id).where(Livro.isbn == isbn)
        if exceto is not None:
            consulta = consulta.where(Livro.livro_id != exceto)
        return self.db.scalar(consulta) is not None

    # ==================================================
    # ESCRITA
    # ==================================================

    def _verificar_unicidade(self, titulo: str, isbn: str, exceto: Optional[UUID] = None):
        if self.existe_por_titulo(titulo, exceto):
            raise TituloEmUsoError()
        if self.existe_por_isbn(isbn, exceto):
            raise IsbnEmUsoError()

    def cadastrar(self, dados: LivroCreate) -> Livro:
        """
        Cadastra um livro com status DISPONIVEL e formato FISICO.

        Raises:
            TituloEmUsoError / IsbnEmUsoError: 409
        """
        self._verificar_unicidade(dados.titulo, dados.isbn)

        agora = now_utc()
        livro = Livro(
            **dados.model_dump(),
            status_livro=StatusLivro.DISPONIVEL,
            formato=Formato.FISICO,
            data_cadastro=agora,
            data_atualizacao=agora,
        )
        self.db.add(livro)
        self.db.commit()
        self.db.refresh(livro)

        logger.info("livro_cadastrado", livro_id=str(livro.livro_id), isbn=livro.isbn)
        return livro

    def atualizar(self, livro: Livro, dados: LivroUpdate) -> Livro:
        """Atualização completa; título e ISBN continuam únicos entre os demais livros."""
        self._verificar_unicidade(dados.titulo, dados.isbn, exceto=livro.livro_id)

        campos = dados.model_dump(exclude={"status", "formato"})
        for campo, valor in campos.items():
            setattr(livro, campo, valor)
        if dados.status is not None:
            livro.status_livro = dados.status
        if dados.formato is not None:
            livro.formato = dados.formato
        livro.data_atualizacao = now_utc()

        self.db.commit()
        self.db.refresh(livro)

        logger.info("livro_atualizado", livro_id=str(livro.livro_id))
        return livro

    def atualizar_status(self, livro: Livro, status: StatusLivro) -> Livro:
        """Altera apenas o status (nenhum outro campo, nem a data de atualização)."""
        if livro.status_livro == status:
            return livro

        livro.status_livro = status
        self.db.commit()
        self.db.refresh(livro)

        logger.info("status_livro_atualizado", livro_id=str(livro.livro_id), status=status.value)
        return livro

    def deletar(self, livro: Livro) -> None:
        livro_id = str(livro.livro_id)
        self.db.delete(livro)
        self.db.commit()
        logger.info("livro_deletado", livro_id=livro_id)
