# tests/test_usuarios.py
"""
Testes das rotas de gestão de usuários (/usuarios).
"""

import uuid

from auth.models import StatusUsuario, Usuario

from fabricas import SENHA_PADRAO, auth_header, criar_usuario


class TestListagem:

    def test_admin_lista_paginado(self, client, db_session, admin, headers_admin):
        for i in range(3):
            criar_usuario(db_session, f"leitor_{i:02d}", senha=f"Livr@{i}00")

        response = client.get("/usuarios", params={"size": 2}, headers=headers_admin)

        assert response.status_code == 200
        data = response.json()
        assert data["totalElements"] == 4
        assert data["totalPages"] == 2
        assert data["number"] == 0
        assert data["size"] == 2
        assert len(data["content"]) == 2

    def test_filtro_por_nome(self, client, db_session, admin, headers_admin):
        criar_usuario(db_session, "Maria_Leitora")
        criar_usuario(db_session, "joao_leitor")

        response = client.get("/usuarios", params={"nome": "maria"}, headers=headers_admin)

        nomes = [u["nome"] for u in response.json()["content"]]
        assert nomes == ["Maria_Leitora"]

    def test_filtro_por_id(self, client, usuario, admin, headers_admin):
        response = client.get("/usuarios", params={"usuarioId": str(usuario.usuario_id)}, headers=headers_admin)

        content = response.json()["content"]
        assert len(content) == 1
        assert content[0]["usuarioId"] == str(usuario.usuario_id)

    def test_ordenacao_por_nome(self, client, db_session, admin, headers_admin):
        criar_usuario(db_session, "zacarias")
        criar_usuario(db_session, "bartolomeu")

        response = client.get("/usuarios", params={"sort": "nome,asc"}, headers=headers_admin)

        nomes = [u["nome"] for u in response.json()["content"]]
        assert nomes == sorted(nomes)

    def test_ordenacao_invalida(self, client, admin, headers_admin):
        response = client.get("/usuarios", params={"sort": "senha,asc"}, headers=headers_admin)

        assert response.status_code == 400
        assert "sort" in response.json()["detalhesErro"]

    def test_usuario_comum_recebe_403(self, client, headers_usuario):
        response = client.get("/usuarios", headers=headers_usuario)

        assert response.status_code == 403
        assert response.json()["codigoErro"] == 403

    def test_anonimo_recebe_401(self, client):
        assert client.get("/usuarios").status_code == 401


class TestConsulta:

    def test_busca_por_id(self, client, usuario, headers_usuario):
        response = client.get(f"/usuarios/{usuario.usuario_id}", headers=headers_usuario)

        assert response.status_code == 200
        data = response.json()
        assert data["nome"] == "leitor_comum"
        assert data["roles"] == ["ROLE_USUARIO"]
        assert "senha" not in data

    def test_id_inexistente(self, client, headers_usuario):
        response = client.get(f"/usuarios/{uuid.uuid4()}", headers=headers_usuario)

        assert response.status_code == 404
        assert response.json()["mensagemErro"] == "ERRO, USUÁRIO NÃO ENCONTRADO!"

    def test_id_mal_formado(self, client, headers_usuario):
        response = client.get("/usuarios/nao-e-uuid", headers=headers_usuario)

        assert response.status_code == 400
        assert "usuario_id" in response.json()["detalhesErro"]


class TestAtualizacao:

    def test_usuario_renomeia_a_si_mesmo(self, client, usuario, headers_usuario):
        response = client.put(
            f"/usuarios/{usuario.usuario_id}/usuario", json={"nome": "leitor_renomeado"}, headers=headers_usuario
        )

        assert response.status_code == 200
        assert response.json()["nome"] == "leitor_renomeado"

    def test_admin_renomeia_sem_alterar_status(self, client, db_session, headers_admin):
        alvo = criar_usuario(db_session, "leitor_antigo", status=StatusUsuario.BLOQUEADO)

        response = client.put(
            f"/usuarios/{alvo.usuario_id}/usuario", json={"nome": "leitor_renomeado"}, headers=headers_admin
        )

        assert response.status_code == 200
        data = response.json()
        assert data["nome"] == "leitor_renomeado"
        assert data["statusUsuario"] == "BLOQUEADO"

        login = client.post("/autenticacao/login", json={"nome": "leitor_renomeado", "senha": SENHA_PADRAO})
        assert login.status_code == 401

    def test_usuario_comum_nao_renomeia_outro(self, client, db_session, admin, headers_usuario):
        bloqueado = criar_usuario(db_session, "leitor_bloqueado", senha="Bloq@123", status=StatusUsuario.BLOQUEADO)

        for alvo in (bloqueado, admin):
            response = client.put(
                f"/usuarios/{alvo.usuario_id}/usuario", json={"nome": "nome_invasor"}, headers=headers_usuario
            )
            assert response.status_code == 403

        db_session.refresh(bloqueado)
        assert bloqueado.nome == "leitor_bloqueado"
        assert bloqueado.status_usuario == StatusUsuario.BLOQUEADO
        assert client.get("/usuarios", headers=auth_header(admin.nome)).status_code == 200

    def test_nome_em_uso(self, client, usuario, admin, headers_usuario):
        response = client.put(
            f"/usuarios/{usuario.usuario_id}/usuario", json={"nome": admin.nome}, headers=headers_usuario
        )
        assert response.status_code == 409

    def test_troca_de_senha(self, client, usuario, headers_usuario):
        response = client.put(
            f"/usuarios/{usuario.usuario_id}/senha",
            json={"senhaAntiga": SENHA_PADRAO, "senha": "Nov@5678"},
            headers=headers_usuario,
        )

        assert response.status_code == 200
        assert response.json()["mensagem"] == "Senha atualizada com sucesso!"

        login = client.post("/autenticacao/login", json={"nome": usuario.nome, "senha": "Nov@5678"})
        assert login.status_code == 201

    def test_senha_antiga_incorreta(self, client, usuario, headers_usuario):
        response = client.put(
            f"/usuarios/{usuario.usuario_id}/senha",
            json={"senhaAntiga": "Errad@1", "senha": "Nov@5678"},
            headers=headers_usuario,
        )

        assert response.status_code == 409
        assert response.json()["mensagemErro"] == "Senha antiga incorreta!"

    def test_troca_de_senha_usuario_inexistente(self, client, headers_usuario):
        response = client.put(
            f"/usuarios/{uuid.uuid4()}/senha",
            json={"senhaAntiga": SENHA_PADRAO, "senha": "Nov@5678"},
            headers=headers_usuario,
        )
        assert response.status_code == 404


class TestAdministracao:

    def test_altera_status(self, client, usuario, headers_admin, headers_usuario):
        response = client.put(
            f"/usuarios/{usuario.usuario_id}/status", json={"statusUsuario": "INATIVO"}, headers=headers_admin
        )

        assert response.status_code == 200
        assert response.json()["statusUsuario"] == "INATIVO"

        # Token emitido antes da inativação deixa de valer
        assert client.get("/livros", headers=headers_usuario).status_code == 401

    def test_status_invalido(self, client, usuario, headers_admin):
        response = client.put(
            f"/usuarios/{usuario.usuario_id}/status", json={"statusUsuario": "SUSPENSO"}, headers=headers_admin
        )

        assert response.status_code == 400
        assert "statusUsuario" in response.json()["detalhesErro"]

    def test_promove_a_admin(self, client, usuario, headers_admin):
        response = client.put(
            f"/usuarios/{usuario.usuario_id}/role", json={"roleUsuario": "ROLE_ADMIN"}, headers=headers_admin
        )

        assert response.status_code == 200
        data = response.json()
        assert data["roles"] == ["ROLE_ADMIN"]
        assert data["perfilUsuario"] == "ADMINISTRADOR"

        # Com a nova role o usuário passa a listar usuários
        assert client.get("/usuarios", headers=auth_header(usuario.nome)).status_code == 200

    def test_usuario_comum_nao_altera_role(self, client, usuario, headers_usuario):
        response = client.put(
            f"/usuarios/{usuario.usuario_id}/role", json={"roleUsuario": "ROLE_ADMIN"}, headers=headers_usuario
        )
        assert response.status_code == 403

    def test_deleta_usuario(self, client, db_session, usuario, headers_admin):
        usuario_id = usuario.usuario_id

        response = client.delete(f"/usuarios/{usuario_id}", headers=headers_admin)

        assert response.status_code == 200
        assert response.json()["mensagem"] == "Usuário deletado com sucesso!"
        assert db_session.get(Usuario, usuario_id) is None
        assert client.get(f"/usuarios/{usuario_id}", headers=headers_admin).status_code == 404

    def test_deleta_inexistente(self, client, headers_admin):
        assert client.delete(f"/usuarios/{uuid.uuid4()}", headers=headers_admin).status_code == 404

    def test_usuario_comum_nao_deleta(self, client, admin, headers_usuario):
        assert client.delete(f"/usuarios/{admin.usuario_id}", headers=headers_usuario).status_code == 403
