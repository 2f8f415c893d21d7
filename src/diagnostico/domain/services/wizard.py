"""
Мастер диагностики: команды над состоянием и производные значения.

Каждая команда - чистая функция (старое состояние, аргументы) → новое состояние.
Если ворота шага закрыты, команда возвращает состояние без изменений.
После успешной отправки (терминальное состояние) все команды игнорируются.
"""
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Tuple

from ..entities.country import get_country
from ..entities.questionnaire import QUESTIONS, get_question
from ..entities.submission import DiagnosticoSubmission, SubmissionAnswers, SubmissionAnswerItem
from ..entities.wizard_state import (
    Answer,
    WizardResult,
    WizardState,
    CONTACT_FIELDS,
    STEP_QUESTIONS,
    STEP_CONTACT,
    STEP_CONSENT,
    TOTAL_STEPS,
)
from .validation import (
    extract_digits,
    format_full_phone,
    get_prefix,
    is_corporate_email,
    is_email_shape_valid,
    is_phone_valid,
)


UTM_KEYS = ("utm_source", "utm_medium", "utm_campaign", "utm_content", "utm_term")

CONSENT_REQUIRED_MESSAGE = "Debes aceptar el consentimiento para continuar."
SUBMIT_FALLBACK_ERROR = "No se logró enviar. Intenta de nuevo."
SUCCESS_TITLE = "Formulario enviado"
SUCCESS_MESSAGE = (
    "Gracias por compartirnos esta información. Nuestro equipo revisará tus "
    "respuestas y te contactará para acompañarte en los siguientes pasos."
)


def create_state(utms: Optional[Mapping[str, str]] = None) -> WizardState:
    """Новое состояние: шаг 1, пустые ответы, пустая форма, страна по умолчанию"""
    return WizardState(utms=dict(utms or {}))


def extract_utms(params: Mapping[str, Any]) -> Dict[str, str]:
    """UTM метки из query параметров; пустые и отсутствующие не передаются"""
    utms = {}
    for key in UTM_KEYS:
        value = params.get(key)
        if value:
            utms[key] = value
    return utms


# ---------------------------------------------------------------------------
# Команды
# ---------------------------------------------------------------------------

def select_answer(state: WizardState, question_id: str, value: str) -> WizardState:
    """
    Выбор варианта ответа на вопрос.

    Ответ перезаписывается целиком, но уже введенное уточнение сохраняется:
    при возврате к варианту с уточнением текст не нужно вводить заново.

    Raises:
        ValueError: Неизвестный вопрос или вариант
    """
    if state.is_terminal:
        return state

    question = get_question(question_id)
    if question is None:
        raise ValueError(f"Неизвестный вопрос: {question_id}")
    if not question.has_option(value):
        raise ValueError(f"Неизвестный вариант '{value}' для вопроса {question_id}")

    previous = state.answers.get(question_id)
    extra_text = previous.extra_text if previous else None

    answers = {**state.answers, question_id: Answer(id=question_id, value=value, extra_text=extra_text)}
    return replace(state, answers=answers)


def set_extra_text(state: WizardState, question_id: str, text: str) -> WizardState:
    """Уточнение к ответу; без выбранного варианта игнорируется"""
    if state.is_terminal:
        return state

    existing = state.answers.get(question_id)
    if existing is None:
        return state

    answers = {**state.answers, question_id: replace(existing, extra_text=text)}
    return replace(state, answers=answers)


def set_field(state: WizardState, field_name: str, value: Any) -> WizardState:
    """
    Изменение поля контактной формы.
    Телефон хранится только цифрами, согласие приводится к bool.

    Raises:
        ValueError: Неизвестное поле
    """
    if state.is_terminal:
        return state

    if field_name not in CONTACT_FIELDS:
        raise ValueError(f"Неизвестное поле формы: {field_name}")

    if field_name == "phone_local":
        value = extract_digits(value)
    elif field_name == "consent":
        value = bool(value)
    else:
        value = "" if value is None else str(value)

    return replace(state, form=replace(state.form, **{field_name: value}))


def advance_step(state: WizardState) -> WizardState:
    """Переход вперед только при открытых воротах текущего шага"""
    if state.is_terminal:
        return state

    if state.step == STEP_QUESTIONS and can_continue_questions(state):
        return replace(state, step=STEP_CONTACT)
    if state.step == STEP_CONTACT and can_continue_data(state):
        return replace(state, step=STEP_CONSENT)
    return state


def retreat_step(state: WizardState) -> WizardState:
    """Переход назад разрешен всегда, кроме первого шага"""
    if state.is_terminal or state.step <= STEP_QUESTIONS:
        return state
    return replace(state, step=state.step - 1)


def begin_submission(state: WizardState) -> Tuple[WizardState, Optional[DiagnosticoSubmission]]:
    """
    Начало отправки формы.

    Returns:
        (новое состояние, payload). Payload равен None, если отправка
        не начата: не последний шаг, уже идет отправка или нет согласия.
    """
    if state.is_terminal or state.submitting or state.step != STEP_CONSENT:
        return state, None

    if not state.form.consent:
        return replace(state, error=CONSENT_REQUIRED_MESSAGE), None

    return replace(state, error=None, submitting=True), build_submission(state)


def complete_submission(state: WizardState) -> WizardState:
    """Успешная отправка: терминальное состояние с экраном благодарности"""
    return replace(
        state,
        submitting=False,
        error=None,
        result=WizardResult(title=SUCCESS_TITLE, message=SUCCESS_MESSAGE),
    )


def fail_submission(state: WizardState, message: Optional[str] = None) -> WizardState:
    """Ошибка отправки: остаемся на шаге 3, пользователь может повторить"""
    return replace(state, submitting=False, error=message or SUBMIT_FALLBACK_ERROR)


# ---------------------------------------------------------------------------
# Производные значения
# ---------------------------------------------------------------------------

def can_continue_questions(state: WizardState) -> bool:
    return all(question.id in state.answers for question in QUESTIONS)


def can_continue_data(state: WizardState) -> bool:
    form = state.form
    return (
        len(form.name.strip()) > 1
        and len(form.company.strip()) > 1
        and len(form.role.strip()) > 1
        and is_email_shape_valid(form.email)
        and is_corporate_email(form.email)
        and is_phone_valid(form.phone_local, form.country)
    )


def can_submit(state: WizardState) -> bool:
    return state.step == STEP_CONSENT and state.form.consent and not state.submitting


def should_show_extra_input(state: WizardState, question_id: str) -> bool:
    """Поле уточнения видно, только если выбранный вариант его требует"""
    question = get_question(question_id)
    if question is None:
        return False
    answer = state.answers.get(question_id)
    if answer is None:
        return False
    option = question.get_option(answer.value)
    return bool(option and option.requires_text)


def progress_pct(state: WizardState) -> float:
    return state.step / TOTAL_STEPS * 100


def selected_prefix(state: WizardState) -> str:
    return get_prefix(state.form.country)


def phone_full(state: WizardState) -> str:
    return format_full_phone(state.form.phone_local, state.form.country)


def country_label(state: WizardState) -> str:
    """Название страны для отправки; неизвестный код передается как есть"""
    country = get_country(state.form.country)
    return country.label if country else state.form.country


def build_submission(state: WizardState) -> DiagnosticoSubmission:
    """Сборка payload из текущего состояния"""
    form = state.form
    items = [
        SubmissionAnswerItem(id=answer.id, value=answer.value, extra_text=answer.extra_text)
        for answer in state.answers.values()
    ]
    return DiagnosticoSubmission(
        name=form.name,
        company=form.company,
        role=form.role,
        email=form.email,
        country=country_label(state),
        phone=phone_full(state),
        answers=SubmissionAnswers(utms=dict(state.utms), items=items),
    )
