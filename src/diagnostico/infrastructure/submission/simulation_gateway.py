"""
Шлюз-симуляция: используется, когда SUBMIT_URL не настроен.
Форма не отправляется и не хранится, payload только пишется в лог.
"""
from typing import Any, Dict

from ..logging.hybrid_logger import hybrid_logger


class SimulationSubmissionGateway:
    """Логирование отправки вместо реального запроса"""

    async def submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        await hybrid_logger.info(f"[SUBMIT SIMULATION] Диагностика от {payload.get('email')}")
        await hybrid_logger.info(f"[SUBMIT SIMULATION] Компания: {payload.get('company')}, телефон: {payload.get('phone')}")
        await hybrid_logger.info("[SUBMIT SIMULATION] SUBMIT_URL не настроен - форма не отправлена")
        return {"ok": True}
