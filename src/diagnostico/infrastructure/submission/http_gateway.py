"""
HTTP шлюз отправки диагностики.
POST JSON во внешний endpoint; ошибкой считается не-2xx статус
или явный "ok": false в теле ответа.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from ...domain.interfaces.submission import SubmissionError, SubmissionTransportError
from ...domain.services.wizard import SUBMIT_FALLBACK_ERROR


class HttpSubmissionGateway:
    """
    Шлюз отправки формы через httpx.

    По умолчанию повторов нет. При max_retries > 0 повторяются только
    сетевые ошибки и 5xx с экспоненциальной задержкой.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 15.0,
        max_retries: int = 0,
        retry_base_delay_ms: int = 400,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not url:
            raise ValueError("URL для отправки формы не задан")

        self.url = url
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.retry_base_delay_ms = retry_base_delay_ms
        self._transport = transport
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Отправляет payload, при необходимости с повторами.

        Raises:
            SubmissionError: Endpoint вернул ошибку
            SubmissionTransportError: Endpoint недоступен
        """
        attempt = 0
        while True:
            try:
                return await self._post(payload)
            except SubmissionError as e:
                if not self._is_retryable(e) or attempt >= self.max_retries:
                    raise
                delay = self.retry_base_delay_ms * (2 ** attempt) / 1000
                attempt += 1
                self._logger.warning(
                    f"Повтор отправки формы ({attempt}/{self.max_retries}) через {delay:.2f}с: {e}"
                )
                await asyncio.sleep(delay)

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload)
        except httpx.TimeoutException as e:
            self._logger.error(f"Таймаут отправки формы: {e}")
            raise SubmissionTransportError(SUBMIT_FALLBACK_ERROR, e)
        except httpx.RequestError as e:
            self._logger.error(f"Сетевая ошибка отправки формы: {e}")
            raise SubmissionTransportError(SUBMIT_FALLBACK_ERROR, e)

        body = self._parse_body(response)

        if not response.is_success or body.get("ok") is False:
            message = body.get("error") or f"Error {response.status_code}"
            self._logger.error(f"Endpoint отклонил форму: HTTP {response.status_code}, {message}")
            raise SubmissionError(str(message), status_code=response.status_code)

        self._logger.debug(f"Форма принята endpoint: HTTP {response.status_code}")
        return body

    @staticmethod
    def _parse_body(response: httpx.Response) -> Dict[str, Any]:
        """Тело ответа как JSON-объект; иначе пустой словарь"""
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    @staticmethod
    def _is_retryable(error: SubmissionError) -> bool:
        if isinstance(error, SubmissionTransportError):
            return True
        return error.status_code is not None and error.status_code >= 500
