# config.py
# -*- coding: utf-8 -*-
"""
Configurações centralizadas da API da Livraria Sola Scriptura
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Carrega variáveis de ambiente (apenas se existir .env)
load_dotenv()

# ==================================================
# AMBIENTE
# ==================================================
ENV = os.getenv("ENV", "development").lower()
IS_PRODUCTION = ENV == "production"
IS_TEST = ENV == "test"

BASE_DIR = Path(__file__).resolve().parent

# ==================================================
# CONFIGURAÇÕES DO BANCO DE DADOS
# ==================================================
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./livraria.db")

# Heroku/Railway usam postgres:// mas SQLAlchemy precisa de postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

RUN_MIGRATIONS_ON_STARTUP = os.getenv("RUN_MIGRATIONS_ON_STARTUP", "true").lower() == "true"

# ==================================================
# CONFIGURAÇÕES DE AUTENTICAÇÃO JWT
# ==================================================
# ATENÇÃO: Em produção, SEMPRE defina SECRET_KEY via variável de ambiente
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings
    warnings.warn("SECRET_KEY não definida! Usando chave temporária. DEFINA EM PRODUÇÃO!", RuntimeWarning)
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"

ALGORITHM = os.getenv("ALGORITHM", "HS256")
JWT_EXPIRATION_MS = int(os.getenv("JWT_EXPIRATION_MS", "86400000"))  # 24 horas

# Administrador inicial (opcional: só é criado se ambos estiverem definidos)
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")

# ==================================================
# CORS
# ==================================================
_DEFAULT_CORS_ORIGINS = (
    "http://localhost:5500,http://127.0.0.1:5500,"
    "http://localhost:5501,http://127.0.0.1:5501,"
    "http://127.0.0.1:5502"
)
CORS_ORIGINS = [
    origem.strip()
    for origem in os.getenv("CORS_ORIGINS", _DEFAULT_CORS_ORIGINS).split(",")
    if origem.strip()
]

# ==================================================
# OPEN LIBRARY (consulta de ISBN)
# ==================================================
OPENLIBRARY_BASE_URL = os.getenv("OPENLIBRARY_BASE_URL", "https://openlibrary.org")
OPENLIBRARY_TIMEOUT = float(os.getenv("OPENLIBRARY_TIMEOUT", "10"))

# ==================================================
# RELATÓRIOS
# ==================================================
RELATORIO_RODAPE = "Relatório gerado automaticamente pelo sistema da Livraria Sola Scriptura"
