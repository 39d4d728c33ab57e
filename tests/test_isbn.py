# tests/test_isbn.py
"""
Testes do cadastro e da consulta de livros por ISBN (Open Library mockada
com httpx.MockTransport).
"""

import httpx
import pytest

from services.openlibrary_client import OpenLibraryClient, OpenLibraryError, mapear_registro
from sistemas.livros.exceptions import IsbnInvalidoError
from sistemas.livros.router import get_openlibrary_client
from sistemas.livros.services_isbn import normalizar_isbn, validar_isbn

from fabricas import REGISTRO_OPENLIBRARY, criar_livro, transporte_openlibrary

ISBN = "9780134685991"
CORPO_COMERCIAL = {"valor": 199.90, "quantidade": 7, "categoria": "TECNOLOGIA", "tipoCapa": "COMUM"}


# ==================================================
# NORMALIZAÇÃO E VALIDAÇÃO
# ==================================================

class TestValidacaoIsbn:

    @pytest.mark.parametrize("entrada, esperado", [
        ("978-0-13-468599-1", "9780134685991"),
        (" 0 13 468599 X ", "013468599X"),
        ("8535902775", "8535902775"),
    ])
    def test_normalizar(self, entrada, esperado):
        assert normalizar_isbn(entrada) == esperado

    @pytest.mark.parametrize("isbn", ["9780134685991", "978-0-13-468599-1", "0134685997"])
    def test_validos(self, isbn):
        assert validar_isbn(isbn).isdigit()

    @pytest.mark.parametrize("isbn", ["123", "97801346859", "978013468599X", "abcdefghij", ""])
    def test_invalidos(self, isbn):
        with pytest.raises(IsbnInvalidoError):
            validar_isbn(isbn)


# ==================================================
# CLIENTE OPEN LIBRARY
# ==================================================

class TestOpenLibraryClient:

    def test_busca_por_isbn(self):
        chamadas = []
        client = OpenLibraryClient(transport=transporte_openlibrary({ISBN: REGISTRO_OPENLIBRARY}, chamadas=chamadas))

        dados = client.buscar_por_isbn(ISBN)

        assert dados.titulo == "Effective Java"
        assert dados.subtitulo == "Third Edition"
        assert dados.numero_paginas == 412
        assert dados.data_publicacao == "2018"
        assert dados.capa_url.endswith("1-M.jpg")
        assert dados.autor == "Joshua Bloch"
        assert dados.editora == "Addison-Wesley, Pearson"

        params = chamadas[0].url.params
        assert params["bibkeys"] == f"ISBN:{ISBN}"
        assert params["format"] == "json"
        assert params["jscmd"] == "data"

    def test_isbn_sem_registro(self):
        client = OpenLibraryClient(transport=transporte_openlibrary({}))
        with pytest.raises(OpenLibraryError):
            client.buscar_por_isbn(ISBN)

    def test_status_de_erro(self):
        client = OpenLibraryClient(transport=transporte_openlibrary({}, status_code=503))
        with pytest.raises(OpenLibraryError):
            client.buscar_por_isbn(ISBN)

    @pytest.mark.parametrize("registro", [["Effective Java"], "Effective Java", 42])
    def test_registro_que_nao_e_objeto(self, registro):
        client = OpenLibraryClient(transport=transporte_openlibrary({ISBN: registro}))
        with pytest.raises(OpenLibraryError):
            client.buscar_por_isbn(ISBN)

    def test_json_invalido(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(OpenLibraryError):
            OpenLibraryClient(transport=transport).buscar_por_isbn(ISBN)

    def test_falha_de_rede(self):
        def handler(request):
            raise httpx.ConnectError("sem rede", request=request)

        with pytest.raises(OpenLibraryError):
            OpenLibraryClient(transport=httpx.MockTransport(handler)).buscar_por_isbn(ISBN)

    def test_mapear_registro_minimo(self):
        dados = mapear_registro({"title": "Só o título", "number_of_pages": "sem numero"})

        assert dados.titulo == "Só o título"
        assert dados.numero_paginas is None
        assert dados.capa_url is None
        assert dados.autor is None

    def test_registro_sem_titulo(self):
        with pytest.raises(OpenLibraryError):
            mapear_registro({"subtitle": "sem título"})


# ==================================================
# ROTAS /livros/isbn
# ==================================================

class TestRotasIsbn:

    @pytest.fixture
    def chamadas(self, app):
        """Substitui o cliente da Open Library e registra as requisições feitas."""
        registro = []
        transport = transporte_openlibrary({ISBN: REGISTRO_OPENLIBRARY}, chamadas=registro)
        app.dependency_overrides[get_openlibrary_client] = lambda: OpenLibraryClient(transport=transport)
        return registro

    def test_cadastra_por_isbn(self, client, chamadas, headers_usuario):
        response = client.post("/livros/isbn/978-0-13-468599-1", json=CORPO_COMERCIAL, headers=headers_usuario)

        assert response.status_code == 201
        data = response.json()
        assert data["isbn"] == ISBN
        assert data["titulo"] == "Effective Java"
        assert data["numeroPaginas"] == 412
        assert data["editora"] == "Addison-Wesley, Pearson"
        assert data["statusLivro"] == "DISPONIVEL"
        assert data["formato"] == "FISICO"
        assert data["valor"] == 199.9
        assert data["quantidade"] == 7
        assert data["categoria"] == "TECNOLOGIA"
        assert data["tipoCapa"] == "COMUM"
        assert len(chamadas) == 1

    def test_isbn_ja_cadastrado_reaproveita_o_livro(self, client, chamadas, headers_usuario):
        primeiro = client.post(f"/livros/isbn/{ISBN}", json=CORPO_COMERCIAL, headers=headers_usuario).json()

        corpo = {**CORPO_COMERCIAL, "quantidade": 2, "valor": 150.00, "tipoCapa": "DURA"}
        segundo = client.post(f"/livros/isbn/{ISBN}", json=corpo, headers=headers_usuario)

        assert segundo.status_code == 201
        data = segundo.json()
        assert data["livroId"] == primeiro["livroId"]
        assert data["quantidade"] == 2
        assert data["valor"] == 150.0
        assert data["tipoCapa"] == "DURA"
        assert len(chamadas) == 1

    def test_isbn_invalido(self, client, chamadas, headers_usuario):
        response = client.post("/livros/isbn/12345", json=CORPO_COMERCIAL, headers=headers_usuario)

        assert response.status_code == 400
        assert "isbn" in response.json()["detalhesErro"]
        assert chamadas == []

    def test_isbn_desconhecido_na_open_library(self, client, chamadas, headers_usuario):
        response = client.post("/livros/isbn/0000000000", json=CORPO_COMERCIAL, headers=headers_usuario)

        assert response.status_code == 404
        assert response.json()["codigoErro"] == 404

    def test_registro_mal_formado_na_open_library(self, client, app, headers_usuario):
        transport = transporte_openlibrary({ISBN: [REGISTRO_OPENLIBRARY]})
        app.dependency_overrides[get_openlibrary_client] = lambda: OpenLibraryClient(transport=transport)

        response = client.post(f"/livros/isbn/{ISBN}", json=CORPO_COMERCIAL, headers=headers_usuario)

        assert response.status_code == 404

    def test_titulo_retornado_ja_em_uso(self, client, db_session, chamadas, headers_usuario):
        criar_livro(db_session, "Effective Java", "1111111111")

        response = client.post(f"/livros/isbn/{ISBN}", json=CORPO_COMERCIAL, headers=headers_usuario)

        assert response.status_code == 409
        assert response.json()["mensagemErro"] == "Esse título já está em uso!"

    def test_dados_comerciais_validados(self, client, chamadas, headers_usuario):
        corpo = {**CORPO_COMERCIAL, "quantidade": -1}
        response = client.post(f"/livros/isbn/{ISBN}", json=corpo, headers=headers_usuario)

        assert response.status_code == 400
        assert "quantidade" in response.json()["detalhesErro"]

    def test_consulta_livro_gravado(self, client, db_session, headers_usuario):
        criar_livro(db_session, "Mere Christianity", "9780060652920")

        response = client.get("/livros/isbn/978-0-06-065292-0", headers=headers_usuario)

        assert response.status_code == 200
        assert response.json()["titulo"] == "Mere Christianity"

    def test_consulta_isbn_nao_gravado(self, client, headers_usuario):
        response = client.get(f"/livros/isbn/{ISBN}", headers=headers_usuario)

        assert response.status_code == 404
        assert response.json()["mensagemErro"] == f"Livro com ISBN: {ISBN} não encontrado."

    def test_consulta_isbn_mal_formado(self, client, headers_usuario):
        assert client.get("/livros/isbn/abc", headers=headers_usuario).status_code == 400

    def test_anonimo(self, client):
        assert client.post(f"/livros/isbn/{ISBN}", json=CORPO_COMERCIAL).status_code == 401
