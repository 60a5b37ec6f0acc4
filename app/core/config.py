"""
Configurações do worker de campanhas.
Carrega variáveis de ambiente.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Configurações carregadas do .env"""

    # App
    APP_NAME: str = "Campaign Worker"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Supabase (campanhas e clientes)
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_KEY: str = ""
    CAMPAIGNS_TABLE: str = "campaigns"
    CUSTOMERS_TABLE: str = "customers"
    CUSTOMERS_PAGE_SIZE: int = 1000  # limite padrao de linhas do PostgREST

    # Redis (canal de eventos de campanha)
    REDIS_URL: str = "redis://localhost:6379/0"
    CAMPAIGN_CHANNEL: str = "campaign:new"
    REDIS_RECONNECT_DELAY_SECONDS: float = 1.0

    # API de envio (vendor)
    DELIVERY_API_URL: str = "http://localhost:5000/api"
    DELIVERY_TIMEOUT_SECONDS: float = 10.0

    # Intervalo minimo entre envios de uma mesma campanha
    DISPATCH_INTERVAL_MS: int = 100

    # Mensagem enviada a cada cliente ({nome} = nome do cliente)
    CAMPAIGN_MESSAGE_TEMPLATE: str = "Hello {nome}, we have a special offer for you!"

    @property
    def dispatch_interval_seconds(self) -> float:
        """Intervalo entre envios em segundos."""
        return self.DISPATCH_INTERVAL_MS / 1000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignora variáveis extras do .env
    )


@lru_cache()
def get_settings() -> Settings:
    """Retorna instância cacheada das configurações."""
    return Settings()


settings = get_settings()
