# tests/fabricas.py
"""
Fábricas de dados para os testes (usuários, tokens, livros e Open Library).
"""

from decimal import Decimal

import httpx

from auth.models import PerfilUsuario, Role, RoleType, StatusUsuario, Usuario
from auth.security import create_access_token, get_password_hash
from sistemas.livros.models import Categoria, Formato, Livro, StatusLivro, TipoCapa
from utils.timezone import now_utc

SENHA_PADRAO = "Livr@123"


# ==================================================
# USUÁRIOS E TOKENS
# ==================================================

def criar_usuario(db, nome: str, senha: str = SENHA_PADRAO, admin: bool = False,
                  status: StatusUsuario = StatusUsuario.ATIVO) -> Usuario:
    """Grava um usuário direto no banco (sem passar pela API)."""
    role_nome = RoleType.ROLE_ADMIN if admin else RoleType.ROLE_USUARIO
    agora = now_utc()
    usuario = Usuario(
        nome=nome,
        senha=get_password_hash(senha),
        status_usuario=status,
        perfil_usuario=PerfilUsuario.ADMINISTRADOR if admin else PerfilUsuario.USUARIO,
        data_criacao=agora,
        data_atualizacao=agora,
        roles=[db.query(Role).filter(Role.role_nome == role_nome).one()],
    )
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario


def auth_header(nome: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=nome)}"}


# ==================================================
# LIVROS
# ==================================================

def criar_livro(db, titulo: str, isbn: str, **campos) -> Livro:
    """Grava um livro com valores padrão para os campos não informados."""
    agora = now_utc()
    dados = {
        "subtitulo": None,
        "valor": Decimal("49.90"),
        "quantidade": 5,
        "status_livro": StatusLivro.DISPONIVEL,
        "categoria": Categoria.TEOLOGICO,
        "tipo_capa": TipoCapa.COMUM,
        "formato": Formato.FISICO,
        "autor": "Autor Padrão",
        "editora": "Editora Padrão",
        "data_cadastro": agora,
        "data_atualizacao": agora,
    }
    dados.update(campos)
    livro = Livro(titulo=titulo, isbn=isbn, **dados)
    db.add(livro)
    db.commit()
    db.refresh(livro)
    return livro


def payload_livro(**campos) -> dict:
    """Corpo JSON válido para POST/PUT /livros."""
    corpo = {
        "isbn": "9788535902778",
        "titulo": "Institutas da Religião Cristã",
        "subtitulo": "Edição clássica",
        "valor": 129.90,
        "quantidade": 10,
        "categoria": "TEOLOGICO",
        "tipoCapa": "DURA",
        "autor": "João Calvino",
        "editora": "Editora Cultura Cristã",
    }
    corpo.update(campos)
    return corpo


# ==================================================
# OPEN LIBRARY
# ==================================================

REGISTRO_OPENLIBRARY = {
    "title": "Effective Java",
    "subtitle": "Third Edition",
    "number_of_pages": 412,
    "publish_date": "2018",
    "cover": {
        "small": "https://covers.openlibrary.org/b/id/1-S.jpg",
        "medium": "https://covers.openlibrary.org/b/id/1-M.jpg",
    },
    "authors": [{"name": "Joshua Bloch"}],
    "publishers": [{"name": "Addison-Wesley"}, {"name": "Pearson"}],
}


def transporte_openlibrary(registros: dict, status_code: int = 200, chamadas: list = None):
    """
    MockTransport que responde como a Open Library.

    registros: {"9780134685991": {...registro...}}
    """
    def handler(request: httpx.Request) -> httpx.Response:
        if chamadas is not None:
            chamadas.append(request)
        if status_code != 200:
            return httpx.Response(status_code, json={})
        chave = request.url.params.get("bibkeys", "")
        isbn = chave.replace("ISBN:", "")
        corpo = {chave: registros[isbn]} if isbn in registros else {}
        return httpx.Response(200, json=corpo)

    return httpx.MockTransport(handler)
