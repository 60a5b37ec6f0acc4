"""
Módulo centralizado para tratamento de timezone.

O worker grava timestamps sempre em UTC.
"""

from datetime import datetime, timezone


TZ_UTC = timezone.utc


def agora_utc() -> datetime:
    """
    Retorna datetime atual em UTC (timezone-aware).

    Use para:
    - Armazenar no banco de dados
    - Logs e timestamps

    Returns:
        datetime em UTC com tzinfo
    """
    return datetime.now(TZ_UTC)
