# services/__init__.py
"""
Clientes de serviços externos da livraria
"""

from services.openlibrary_client import DadosOpenLibrary, OpenLibraryClient, OpenLibraryError

__all__ = [
    "DadosOpenLibrary",
    "OpenLibraryClient",
    "OpenLibraryError",
]
