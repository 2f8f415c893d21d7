"""
Настройки приложения через переменные окружения
"""
import os
from typing import List


DEFAULT_WEBSITE_URL = "https://www.grupoinforum.com"
DEFAULT_WHATSAPP_URL = (
    "https://wa.me/50242170962"
    "?text=Hola%2C%20vengo%20del%20formulario%20de%20software%20de%20gesti%C3%B3n"
)


class Settings:
    """Основные настройки приложения"""

    def __init__(self):
        # Основные
        self.environment: str = os.getenv("ENVIRONMENT", "production")
        self.debug: bool = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_file: str = os.getenv("LOG_FILE", "")

        # Web
        self.secret_key: str = os.getenv("SECRET_KEY", "change-me-in-production-very-secret-key")
        self.base_url: str = os.getenv("BASE_URL", "http://127.0.0.1:8000")
        self.cors_origins: str = os.getenv("CORS_ORIGINS", "*")

        # Отправка формы (внешний endpoint)
        self.submit_url: str = os.getenv("SUBMIT_URL", "")
        self.submit_timeout: float = float(os.getenv("SUBMIT_TIMEOUT", "15"))
        self.submit_max_retries: int = int(os.getenv("SUBMIT_MAX_RETRIES", "0"))
        self.submit_retry_base_delay_ms: int = int(os.getenv("SUBMIT_RETRY_BASE_DELAY_MS", "400"))

        # Ссылки для страницы формы и экрана благодарности
        self.privacy_url: str = os.getenv("PRIVACY_URL", "")
        self.website_url: str = os.getenv("WEBSITE_URL", DEFAULT_WEBSITE_URL)
        self.whatsapp_url: str = os.getenv("WHATSAPP_URL", DEFAULT_WHATSAPP_URL)

        # Сессии мастера
        self.session_ttl_minutes: int = int(os.getenv("SESSION_TTL_MINUTES", "120"))

    @property
    def cors_origins_list(self) -> List[str]:
        """Список разрешенных CORS origins"""
        if not self.cors_origins:
            return []
        return [x.strip() for x in self.cors_origins.split(",") if x.strip()]

    @property
    def submission_configured(self) -> bool:
        """Настроен ли внешний endpoint для отправки формы"""
        return bool(self.submit_url.strip())


# Глобальный экземпляр настроек (lazy initialization)
_settings_instance = None

def get_settings() -> Settings:
    """Получить экземпляр настроек (создается при первом обращении)"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance

# Глобальный объект для импорта в модулях
settings = get_settings()
