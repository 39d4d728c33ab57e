# services/openlibrary_client.py
"""
Cliente da API pública da Open Library (consulta de livros por ISBN).

Endpoint:
    GET {base}/api/books?bibkeys=ISBN:<digitos>&format=json&jscmd=data

Resposta (resumida):
    {
      "ISBN:9780134685991": {
        "title": "Effective Java",
        "subtitle": "...",
        "number_of_pages": 412,
        "publish_date": "2018",
        "cover": {"small": "...", "medium": "...", "large": "..."},
        "authors": [{"name": "Joshua Bloch"}],
        "publishers": [{"name": "Addison-Wesley"}]
      }
    }
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from config import OPENLIBRARY_BASE_URL, OPENLIBRARY_TIMEOUT
from utils.logging_config import get_logger

logger = get_logger(__name__)


class OpenLibraryError(Exception):
    """ISBN sem registro na Open Library ou falha de comunicação."""
    pass


@dataclass
class DadosOpenLibrary:
    """Campos aproveitados do registro da Open Library"""
    titulo: str
    subtitulo: Optional[str] = None
    numero_paginas: Optional[int] = None
    data_publicacao: Optional[str] = None
    capa_url: Optional[str] = None
    autor: Optional[str] = None
    editora: Optional[str] = None


def _nomes(itens) -> Optional[str]:
    nomes = [item.get("name") for item in itens or [] if isinstance(item, dict) and item.get("name")]
    return ", ".join(nomes) if nomes else None


def mapear_registro(registro: dict) -> DadosOpenLibrary:
    """Converte o registro JSON da Open Library nos campos do livro."""
    titulo = registro.get("title")
    if not titulo:
        raise OpenLibraryError("Registro sem título")

    capa = registro.get("cover") or {}
    try:
        numero_paginas = int(registro["number_of_pages"])
    except (KeyError, TypeError, ValueError):
        numero_paginas = None

    return DadosOpenLibrary(
        titulo=titulo,
        subtitulo=registro.get("subtitle"),
        numero_paginas=numero_paginas,
        data_publicacao=registro.get("publish_date"),
        capa_url=capa.get("medium"),
        autor=_nomes(registro.get("authors")),
        editora=_nomes(registro.get("publishers")),
    )


class OpenLibraryClient:
    """
    Cliente HTTP síncrono da Open Library.

    Uso:
        client = OpenLibraryClient()
        dados = client.buscar_por_isbn("9780134685991")

    Em testes, injete um httpx.MockTransport via `transport`.
    """

    def __init__(
        self,
        base_url: str = OPENLIBRARY_BASE_URL,
        timeout: float = OPENLIBRARY_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def buscar_por_isbn(self, isbn: str) -> DadosOpenLibrary:
        """
        Consulta o ISBN (já normalizado, só dígitos).

        Raises:
            OpenLibraryError: status != 200, erro de rede, JSON inválido ou ISBN sem registro
        """
        chave = f"ISBN:{isbn}"
        params = {"bibkeys": chave, "format": "json", "jscmd": "data"}

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(f"{self.base_url}/api/books", params=params)
                response.raise_for_status()
                corpo = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("openlibrary_status_erro", isbn=isbn, status_code=e.response.status_code)
            raise OpenLibraryError(f"Open Library respondeu {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("openlibrary_indisponivel", isbn=isbn, erro=str(e))
            raise OpenLibraryError("Falha de comunicação com a Open Library") from e
        except ValueError as e:
            logger.warning("openlibrary_json_invalido", isbn=isbn)
            raise OpenLibraryError("Resposta inválida da Open Library") from e

        registro = corpo.get(chave) if isinstance(corpo, dict) else None
        if not registro or not isinstance(registro, dict):
            logger.info("openlibrary_isbn_sem_registro", isbn=isbn)
            raise OpenLibraryError(f"ISBN {isbn} não encontrado")

        dados = mapear_registro(registro)
        logger.info("openlibrary_isbn_encontrado", isbn=isbn, titulo=dados.titulo)
        return dados
