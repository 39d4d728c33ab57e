"""
POLÍTICA DE TIMEZONE DA LIVRARIA

REGRAS:
1. GRAVAÇÃO NO BANCO: Sempre UTC (timezone-aware)
2. EXIBIÇÃO (relatórios, respostas formatadas): America/Recife (UTC-3)

USO:
    from utils.timezone import now_utc, to_local, formatar_data

    data_cadastro = now_utc()
    print(formatar_data(data_cadastro))  # "19/10/2026"
"""

from datetime import datetime, timezone
from typing import Optional
import pytz

# =============================================================================
# CONFIGURAÇÃO DE TIMEZONE
# =============================================================================

TIMEZONE_LOCAL_NAME = "America/Recife"
TIMEZONE_LOCAL = pytz.timezone(TIMEZONE_LOCAL_NAME)

UTC = timezone.utc


def now_utc() -> datetime:
    """Datetime atual em UTC (timezone-aware). Use para gravar no banco."""
    return datetime.now(UTC)


def now_local() -> datetime:
    """Datetime atual no fuso da livraria."""
    return datetime.now(TIMEZONE_LOCAL)


def to_local(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Converte um datetime para America/Recife.

    Datetimes naive são tratados como UTC (SQLite não preserva o offset).
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(TIMEZONE_LOCAL)


def formatar_data(dt: Optional[datetime] = None, formato: str = "%d/%m/%Y") -> str:
    """Formata a data no fuso local; sem argumento usa o instante atual."""
    local = to_local(dt) if dt is not None else now_local()
    return local.strftime(formato)
