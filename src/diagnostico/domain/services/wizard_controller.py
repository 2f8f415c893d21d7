"""
Контроллер мастера: применяет команды к состоянию сессии и выполняет
асинхронную отправку через шлюз.
"""
from typing import Any, Callable, Optional

from ..entities.wizard_state import WizardState
from ..interfaces.submission import SubmissionError, SubmissionGateway
from . import wizard
from diagnostico.infrastructure.logging.hybrid_logger import hybrid_logger


class WizardController:
    """
    Владелец состояния одной сессии мастера.

    Состояние заменяется целиком после каждой команды. Перед ожиданием
    шлюза флаг submitting сохраняется через on_change, поэтому повторный
    submit той же сессии во время отправки ничего не делает.
    После ответа шлюза состояние перечитывается через load, и к нему
    применяются только submitting, error и result: правки, сделанные
    другими запросами во время отправки, не теряются.
    """

    def __init__(
        self,
        state: WizardState,
        gateway: SubmissionGateway,
        on_change: Optional[Callable[[WizardState], None]] = None,
        load: Optional[Callable[[], Optional[WizardState]]] = None,
    ):
        self._state = state
        self._gateway = gateway
        self._on_change = on_change
        self._load = load

    @property
    def state(self) -> WizardState:
        return self._state

    def _reload(self) -> WizardState:
        """Актуальное состояние сессии: за время ожидания шлюза его могли изменить другие запросы"""
        if self._load is not None:
            fresh = self._load()
            if fresh is not None:
                self._state = fresh
        return self._state

    def _apply(self, new_state: WizardState) -> WizardState:
        self._state = new_state
        if self._on_change is not None:
            self._on_change(new_state)
        return new_state

    def select_answer(self, question_id: str, value: str) -> WizardState:
        return self._apply(wizard.select_answer(self._state, question_id, value))

    def set_extra_text(self, question_id: str, text: str) -> WizardState:
        return self._apply(wizard.set_extra_text(self._state, question_id, text))

    def set_field(self, field_name: str, value: Any) -> WizardState:
        return self._apply(wizard.set_field(self._state, field_name, value))

    async def advance_step(self) -> WizardState:
        previous_step = self._state.step
        new_state = self._apply(wizard.advance_step(self._state))
        if new_state.step != previous_step:
            await hybrid_logger.business(
                "Переход на следующий шаг диагностики",
                {"from_step": previous_step, "to_step": new_state.step}
            )
        return new_state

    def retreat_step(self) -> WizardState:
        return self._apply(wizard.retreat_step(self._state))

    async def submit(self) -> WizardState:
        """
        Отправка формы. Ошибки шлюза превращаются в сообщение в состоянии,
        автоматических повторов нет.
        """
        state, submission = wizard.begin_submission(self._state)
        self._apply(state)
        if submission is None:
            return self._state

        payload = submission.to_payload()
        try:
            await self._gateway.submit(payload)
        except SubmissionError as e:
            await hybrid_logger.warning(
                f"Отправка диагностики отклонена: {e.message}",
                {"status_code": e.status_code}
            )
            return self._apply(wizard.fail_submission(self._reload(), e.message))
        except Exception as e:
            await hybrid_logger.error(f"Ошибка отправки диагностики: {e}")
            return self._apply(wizard.fail_submission(self._reload()))

        await hybrid_logger.business(
            "Диагностика отправлена",
            {
                "country": payload["country"],
                "answers": len(payload["answers"]["items"]),
                "utms": payload["answers"]["utms"],
            }
        )
        return self._apply(wizard.complete_submission(self._reload()))
