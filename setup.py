"""
Setup script para instalação da API da Livraria Sola Scriptura.

Este arquivo permite instalar o projeto em modo editable para desenvolvimento:
    pip install -e .[test]

Isso adiciona o projeto ao PYTHONPATH e permite imports como:
    from sistemas.livros.services import LivroService
"""

from setuptools import setup, find_namespace_packages

setup(
    name="livraria-api",
    version="1.0.0",
    description="API da Livraria Sola Scriptura - usuários, catálogo de livros e relatórios",
    packages=find_namespace_packages(
        include=["auth*", "database*", "middleware*", "services*", "sistemas*", "users*", "utils*"],
    ),
    py_modules=["config", "main"],
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "pydantic>=2.5",
        "sqlalchemy>=2.0",
        "alembic>=1.13",
        "python-jose[cryptography]>=3.3",
        "bcrypt>=4.0",
        "python-dotenv>=1.0",
        "structlog>=24.1",
        "slowapi>=0.1.9",
        "httpx>=0.27",
        "pytz>=2024.1",
        "PyMuPDF>=1.24",
        "psycopg2-binary>=2.9",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
)
