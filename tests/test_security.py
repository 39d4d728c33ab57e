# tests/test_security.py
"""
Testes de hash de senha, tokens JWT e política de senhas.

Uso:
    pytest tests/test_security.py -v
"""

from datetime import timedelta

import pytest
from jose import jwt

from auth.security import (
    create_access_token, extrair_subject, get_password_hash, get_username_token, validar_token,
    verify_password,
)
from config import ALGORITHM, SECRET_KEY
from utils.password_policy import check_password_strength, get_password_requirements, validate_password
from utils.timezone import now_utc


class TestHashSenha:

    def test_hash_nunca_e_a_senha(self):
        hashed = get_password_hash("Livr@123")
        assert hashed != "Livr@123"
        assert hashed.startswith("$2")

    def test_verify_password(self):
        hashed = get_password_hash("Livr@123")
        assert verify_password("Livr@123", hashed) is True
        assert verify_password("Livr@124", hashed) is False

    def test_hashes_da_mesma_senha_sao_diferentes(self):
        """Salt aleatório: duas senhas iguais geram hashes distintos."""
        assert get_password_hash("Livr@123") != get_password_hash("Livr@123")

    def test_valor_armazenado_que_nao_e_hash(self):
        assert verify_password("Livr@123", "texto-puro") is False


class TestTokenJWT:

    def test_token_valido(self):
        token = create_access_token(subject="leitor_comum")
        assert validar_token(token) is True
        assert get_username_token(token) == "leitor_comum"

    def test_claims_do_token(self):
        agora = now_utc().replace(microsecond=0)
        token = create_access_token(subject="leitor_comum", now=agora, expires_delta=timedelta(hours=2))
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])

        assert payload["sub"] == "leitor_comum"
        assert payload["exp"] - payload["iat"] == 2 * 3600

    def test_validade_padrao_de_24_horas(self):
        token = create_access_token(subject="leitor_comum")
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        assert payload["exp"] - payload["iat"] == 24 * 3600

    @pytest.mark.parametrize("token", [None, "", "   "])
    def test_token_vazio(self, token):
        assert validar_token(token) is False

    def test_token_malformado(self):
        assert validar_token("isto.nao.e-um-jwt") is False
        assert validar_token("abc") is False

    def test_token_expirado(self):
        token = create_access_token(subject="leitor_comum", expires_delta=timedelta(seconds=-30))
        assert validar_token(token) is False

    def test_assinatura_invalida(self):
        token = create_access_token(subject="leitor_comum", secret_key="outra-chave")
        assert validar_token(token) is False

    def test_algoritmo_nao_suportado(self):
        agora = now_utc()
        token = jwt.encode(
            {"sub": "leitor_comum", "iat": agora, "exp": agora + timedelta(hours=1)},
            SECRET_KEY,
            algorithm="HS512",
        )
        assert validar_token(token) is False

    def test_token_sem_subject(self):
        agora = now_utc()
        token = jwt.encode({"iat": agora, "exp": agora + timedelta(hours=1)}, SECRET_KEY, algorithm=ALGORITHM)
        assert validar_token(token) is False

    def test_extrair_subject(self):
        assert extrair_subject(create_access_token(subject="leitor_comum")) == "leitor_comum"

        expirado = create_access_token(subject="leitor_comum", expires_delta=timedelta(seconds=-30))
        assert extrair_subject(expirado) is None
        assert get_username_token(expirado) is None

    def test_extrair_subject_decodifica_uma_vez(self, monkeypatch):
        chamadas = []
        decode_original = jwt.decode

        def decode_contando(*args, **kwargs):
            chamadas.append(args)
            return decode_original(*args, **kwargs)

        monkeypatch.setattr(jwt, "decode", decode_contando)

        assert extrair_subject(create_access_token(subject="leitor_comum")) == "leitor_comum"
        assert len(chamadas) == 1


class TestPoliticaSenha:

    @pytest.mark.parametrize("senha", ["Livr@123", "aB3$x", "Teologia#2024"])
    def test_senhas_validas(self, senha):
        is_valid, errors = check_password_strength(senha)
        assert is_valid, errors

    @pytest.mark.parametrize("senha, trecho", [
        ("aB3$", "no mínimo 5"),
        ("aB3$aB3$aB3$aB3$aB3$x", "no máximo 20"),
        ("ab3$cde", "maiúscula"),
        ("AB3$CDE", "minúscula"),
        ("aBc$def", "número"),
        ("aBc3def", "caractere especial"),
        ("aB3$ def", "espaços"),
    ])
    def test_senhas_invalidas(self, senha, trecho):
        is_valid, errors = check_password_strength(senha)
        assert not is_valid
        assert any(trecho in erro for erro in errors)

    def test_validate_password_levanta_value_error(self):
        with pytest.raises(ValueError):
            validate_password("fraca")

    def test_requisitos(self):
        requisitos = get_password_requirements()
        assert requisitos["min_length"] == 5
        assert requisitos["max_length"] == 20
        assert "@" in requisitos["special_characters"]
