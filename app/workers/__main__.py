"""
Entry point para executar workers.

Uso: python -m app.workers campanhas
"""
import asyncio
import signal
import sys
import logging

from app.core.config import settings
from app.core.exceptions import WorkerStartupError
from app.core.logging import setup_logging

logger = logging.getLogger(__name__)

WORKERS = ("campanhas",)
SINAIS_PARADA = (signal.SIGINT, signal.SIGTERM)


async def executar_campanhas() -> int:
    """
    Monta dependencias e roda o worker de campanhas.

    Returns:
        Exit code (0 = parada por sinal, 1 = falha no startup)
    """
    from app.repositories.cliente import ClienteRepository
    from app.services.campanhas.executor import CampanhaExecutor
    from app.services.campanhas.repository import CampanhaRepository
    from app.services.entrega import EntregaClient
    from app.services.http_client import criar_http_client, fechar_http_client
    from app.services.redis import criar_redis_client, verificar_conexao_redis
    from app.services.supabase import criar_supabase_client
    from app.workers.campanhas_worker import CampanhasWorker

    loop = asyncio.get_running_loop()
    redis_client = criar_redis_client()
    http_client = criar_http_client()
    worker = None

    try:
        if not await verificar_conexao_redis(redis_client):
            raise WorkerStartupError("Redis nao acessivel", details={"url": settings.REDIS_URL})

        supabase = criar_supabase_client()

        executor = CampanhaExecutor(
            campanha_repo=CampanhaRepository(supabase),
            cliente_repo=ClienteRepository(supabase),
            entrega=EntregaClient(http_client),
        )
        worker = CampanhasWorker(redis_client, executor)

        for sig in SINAIS_PARADA:
            loop.add_signal_handler(sig, worker.parar)

        await worker.iniciar()
        await worker.executar()
        return 0

    except WorkerStartupError as e:
        logger.error(f"Falha no startup do worker: {e}")
        return 1

    finally:
        if worker is not None:
            for sig in SINAIS_PARADA:
                loop.remove_signal_handler(sig)
            await worker.fechar()
        await fechar_http_client(http_client)
        await redis_client.aclose()
        logger.info("Conexoes encerradas")


def main():
    """Executa worker baseado no argumento."""
    setup_logging()

    if len(sys.argv) < 2 or sys.argv[1] not in WORKERS:
        print("Uso: python -m app.workers <worker_name>")
        print(f"Workers disponíveis: {', '.join(WORKERS)}")
        sys.exit(1)

    logger.info(f"Iniciando {settings.APP_NAME} ({sys.argv[1]})...")
    sys.exit(asyncio.run(executar_campanhas()))


if __name__ == "__main__":
    main()
