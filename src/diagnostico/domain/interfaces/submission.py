"""
Протокол шлюза отправки диагностики.
Внешний endpoint принимает payload и сохраняет заявку.
"""
from typing import Any, Dict, Optional, Protocol


class SubmissionGateway(Protocol):
    """Шлюз отправки заполненной формы"""

    async def submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Отправляет payload во внешний endpoint.

        Args:
            payload: JSON-совместимый словарь формы

        Returns:
            Тело успешного ответа

        Raises:
            SubmissionError: Endpoint сообщил об ошибке или недоступен
        """
        ...


class SubmissionError(Exception):
    """Ошибка отправки формы с сообщением для пользователя"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class SubmissionTransportError(SubmissionError):
    """Сетевая ошибка или таймаут при обращении к endpoint"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)
