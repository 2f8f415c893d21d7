"""
Гибридная система логирования
- DEBUG, INFO → консоль
- WARNING и выше → консоль + файл (если задан LOG_FILE)
- BUSINESS события → отдельный логгер с JSON метаданными для аналитики
"""
import logging
import sys
import json
from logging.handlers import RotatingFileHandler
from typing import Dict, Any, Optional

from diagnostico.config.settings import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class HybridLogger:
    """Гибридная система логирования"""

    def __init__(self, log_level: str = "INFO", log_file: str = ""):
        self._setup_console_logger(log_level)
        if log_file:
            self._setup_file_handler(log_file)

    def _setup_console_logger(self, log_level: str) -> None:
        """Настройка консольного логгера"""
        self.app_logger = logging.getLogger("diagnostico")
        self.app_logger.setLevel(logging.DEBUG)
        self.business_logger = logging.getLogger("diagnostico.business")

        # Консольный handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        # Проверяем, что handler еще не добавлен
        if not self.app_logger.handlers:
            self.app_logger.addHandler(console_handler)

    def _setup_file_handler(self, log_file: str) -> None:
        """Файл с ротацией: максимум 10MB, 5 бэкапов"""
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.WARNING)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.app_logger.addHandler(file_handler)

    async def log(
        self,
        level: str,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Основной метод логирования"""
        level_upper = level.upper()

        if level_upper == 'BUSINESS':
            self._log_business(message, metadata)
            return

        log_level = getattr(logging, level_upper, logging.INFO)
        if metadata:
            message = f"{message} | {self._dump(metadata)}"
        self.app_logger.log(log_level, message)

    def _log_business(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Бизнес-события пишутся одной строкой: сообщение + JSON"""
        payload = self._dump(metadata) if metadata else "{}"
        self.business_logger.info(f"{message} | {payload}")

    @staticmethod
    def _dump(metadata: Dict[str, Any]) -> str:
        return json.dumps(metadata, ensure_ascii=False, default=str)

    async def error(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Логирование ошибок"""
        await self.log("ERROR", message, metadata)

    async def warning(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Логирование предупреждений"""
        await self.log("WARNING", message, metadata)

    async def critical(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Логирование критических ошибок"""
        await self.log("CRITICAL", message, metadata)

    async def business(self, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Логирование бизнес-событий"""
        await self.log("BUSINESS", message, metadata)

    async def info(self, message: str) -> None:
        """Информационное логирование (только в консоль)"""
        self.app_logger.info(message)

    async def debug(self, message: str) -> None:
        """Отладочное логирование (только в консоль)"""
        self.app_logger.debug(message)


# Глобальный экземпляр логгера
hybrid_logger = HybridLogger(settings.log_level, settings.log_file)
