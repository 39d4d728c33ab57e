# main.py
"""
API da Livraria Sola Scriptura - Aplicação FastAPI Principal

Back office da livraria:
- Autenticação JWT e gestão de usuários
- Catálogo de livros (com consulta de ISBN na Open Library)
- Relatórios em PDF
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth.filtro import filtro_autenticacao_jwt
from auth.router import router as auth_router
from config import CORS_ORIGINS, IS_TEST
from database.init_db import init_database
from middleware.request_id import RequestIDMiddleware, REQUEST_ID_HEADER
from middleware.request_logging import RequestLoggingMiddleware
from sistemas.livros.router import router as livros_router
from sistemas.relatorios.router import router as relatorios_router
from users.router import router as users_router
from utils.errors import registrar_handlers
from utils.logging_config import get_logger, setup_logging
from utils.rate_limit import limiter

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle events da aplicação.
    Executa na inicialização e no shutdown.
    """
    # Startup
    setup_logging()
    logger.info("api_iniciando")
    if not IS_TEST:
        init_database()
    yield
    # Shutdown
    logger.info("api_encerrando")


# Todas as rotas passam pelo filtro JWT; as públicas são liberadas dentro dele
app = FastAPI(
    title="API Livraria Sola Scriptura",
    description="Back office da livraria: usuários, catálogo de livros e relatórios",
    version="1.0.0",
    lifespan=lifespan,
    dependencies=[Depends(filtro_autenticacao_jwt)],
)

app.state.limiter = limiter
registrar_handlers(app)

# Ordem: o último adicionado é o mais externo
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", REQUEST_ID_HEADER],
)


# ==================================================
# HEALTH CHECK
# ==================================================

@app.get("/health", tags=["Health"])
async def health_check():
    """Health check para monitoramento"""
    return {"status": "ok", "service": "livraria-api"}


# ==================================================
# ROUTERS
# ==================================================

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(livros_router)
app.include_router(relatorios_router)


# ==================================================
# EXECUÇÃO DIRETA
# ==================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8080, reload=True)
