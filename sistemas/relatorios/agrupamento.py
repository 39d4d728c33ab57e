# sistemas/relatorios/agrupamento.py
"""
Agrupamento de livros em memória para os relatórios.
"""

import enum
from typing import Callable, Dict, Iterable, List, Union

from sistemas.livros.models import Livro

ROTULO_VAZIO = "Desconhecido"


def rotulo(valor, rotulo_vazio: str = ROTULO_VAZIO) -> str:
    """Texto exibido para o valor de agrupamento."""
    if valor is None:
        return rotulo_vazio
    if isinstance(valor, enum.Enum):
        return valor.value
    texto = str(valor).strip()
    return texto or rotulo_vazio


def agrupar_livros(
    livros: Iterable[Livro],
    chave: Union[str, Callable[[Livro], object]],
    rotulo_vazio: str = ROTULO_VAZIO,
) -> Dict[str, List[Livro]]:
    """
    Particiona os livros pelo valor da chave.

    Cada livro aparece em exatamente um grupo e a soma dos tamanhos
    dos grupos é o total de livros. Grupos ordenados pelo rótulo;
    dentro do grupo a ordem de entrada é mantida.

    Example:
        grupos = agrupar_livros(livros, "categoria")
        grupos = agrupar_livros(livros, "editora", rotulo_vazio="Desconhecida")
    """
    extrair = chave if callable(chave) else (lambda livro: getattr(livro, chave))

    grupos: Dict[str, List[Livro]] = {}
    for livro in livros:
        grupos.setdefault(rotulo(extrair(livro), rotulo_vazio), []).append(livro)

    return {nome: grupos[nome] for nome in sorted(grupos, key=str.casefold)}
