"""
Modulo de campanhas.

Estrutura:
- regras: Compilacao das regras de audiencia em query
- repository: Status da campanha no banco
- executor: Disparo de campanhas
- types: Tipos e enums
"""
from app.services.campanhas.executor import CampanhaExecutor
from app.services.campanhas.regras import compilar_regras
from app.services.campanhas.repository import CampanhaRepository
from app.services.campanhas.types import (
    DispatchRequest,
    ResultadoCampanha,
    StatusCampanha,
)
from app.services.entrega import SendOutcome

__all__ = [
    "CampanhaExecutor",
    "CampanhaRepository",
    "compilar_regras",
    "DispatchRequest",
    "ResultadoCampanha",
    "SendOutcome",
    "StatusCampanha",
]
