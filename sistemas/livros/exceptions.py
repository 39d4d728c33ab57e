# sistemas/livros/exceptions.py
"""
Exceções específicas do catálogo de livros
"""

from utils.errors import ConflitoError, NaoEncontradoError, ValidacaoError


class LivroNaoEncontradoError(NaoEncontradoError):
    """Livro inexistente (id ou ISBN)"""
    mensagem_padrao = "Livro não encontrado!"


class TituloEmUsoError(ConflitoError):
    mensagem_padrao = "Esse título já está em uso!"


class IsbnEmUsoError(ConflitoError):
    mensagem_padrao = "Esse ISBN já está em uso!"


class IsbnInvalidoError(ValidacaoError):
    """ISBN fora do padrão de 10 ou 13 dígitos"""

    def __init__(self, isbn: str):
        super().__init__(detalhes={"isbn": f"ISBN inválido: {isbn}. Informe 10 ou 13 dígitos."})


class ConsultaIsbnError(NaoEncontradoError):
    """Open Library sem registro para o ISBN ou indisponível"""
    mensagem_padrao = "Livro não encontrado na Open Library para o ISBN informado."
