"""
Состояние мастера диагностики.
Все сущности неизменяемые: команды мастера возвращают новый экземпляр
через dataclasses.replace.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from .country import DEFAULT_COUNTRY


STEP_QUESTIONS = 1
STEP_CONTACT = 2
STEP_CONSENT = 3
TOTAL_STEPS = 3


@dataclass(frozen=True)
class Answer:
    """Ответ на вопрос: выбранный вариант и уточнение (если было введено)"""
    id: str
    value: str
    extra_text: Optional[str] = None


@dataclass(frozen=True)
class ContactForm:
    """Контактные данные второго и третьего шага"""
    name: str = ""
    company: str = ""
    role: str = ""
    email: str = ""
    country: str = DEFAULT_COUNTRY
    # Локальная часть номера без префикса, только цифры
    phone_local: str = ""
    consent: bool = False


CONTACT_FIELDS = ("name", "company", "role", "email", "country", "phone_local", "consent")


@dataclass(frozen=True)
class WizardResult:
    """Данные экрана благодарности"""
    title: str
    message: str


@dataclass(frozen=True)
class WizardState:
    """
    Состояние одной сессии мастера.
    После получения result состояние терминально.
    """
    step: int = STEP_QUESTIONS
    answers: Dict[str, Answer] = field(default_factory=dict)
    form: ContactForm = field(default_factory=ContactForm)
    utms: Dict[str, str] = field(default_factory=dict)
    submitting: bool = False
    error: Optional[str] = None
    result: Optional[WizardResult] = None

    @property
    def is_terminal(self) -> bool:
        return self.result is not None
