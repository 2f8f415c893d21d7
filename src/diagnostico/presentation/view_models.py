"""
Модель представления мастера диагностики.
Собирает все значения, нужные фронтенду для отрисовки текущего экрана:
тексты, признаки видимости, подсказки и состояние кнопок.
"""
from typing import Any, Dict, List

from ..config.settings import Settings
from ..domain.entities.country import COUNTRIES
from ..domain.entities.questionnaire import QUESTIONS
from ..domain.entities.wizard_state import WizardState
from ..domain.services import wizard
from ..domain.services.validation import (
    CORPORATE_EMAIL_WARNING,
    is_corporate_email,
    is_phone_valid,
    phone_requirement_text,
)


PAGE_TITLE = "Análisis de Software de Gestión Empresarial"
PAGE_DESCRIPTION = (
    "Completa el cuestionario para que podamos analizar tu situación actual y "
    "entender qué soluciones se ajustan mejor a las necesidades de tu empresa."
)
EXTRA_INPUT_PLACEHOLDER = "Especifica aquí"
PRIVACY_LABEL = "Política de Privacidad"
CONSENT_TEXT = (
    "Autorizo a Grupo Inforum a contactarme respecto a esta evaluación y "
    "servicios relacionados. He leído la"
)
NEXT_LABEL = "Siguiente"
BACK_LABEL = "Atrás"
SUBMIT_LABEL = "Enviar formulario"
SUBMITTING_LABEL = "Enviando..."


def percent(value: float) -> str:
    """Ширина полосы прогресса для CSS: 66.66... → '66.67%'"""
    return f"{round(value, 2):g}%"


def build_questions_view(state: WizardState) -> List[Dict[str, Any]]:
    questions = []
    for question in QUESTIONS:
        answer = state.answers.get(question.id)
        selected = answer.value if answer else None
        questions.append({
            "id": question.id,
            "label": question.label,
            "type": question.mode,
            "required": question.required,
            "options": [
                {
                    "value": option.value,
                    "label": option.label,
                    "requires_text": option.requires_text,
                    "selected": option.value == selected,
                }
                for option in question.options
            ],
            "show_extra_input": wizard.should_show_extra_input(state, question.id),
            "extra_text": answer.extra_text if answer else None,
            "extra_placeholder": EXTRA_INPUT_PLACEHOLDER,
        })
    return questions


def build_contact_view(state: WizardState) -> Dict[str, Any]:
    form = state.form
    phone_invalid = bool(form.phone_local) and not is_phone_valid(form.phone_local, form.country)
    full_phone = wizard.phone_full(state)

    return {
        "name": form.name,
        "company": form.company,
        "role": form.role,
        "email": form.email,
        "email_warning": (
            CORPORATE_EMAIL_WARNING
            if form.email and not is_corporate_email(form.email)
            else None
        ),
        "country": form.country,
        "countries": [{"value": c.code, "label": c.label} for c in COUNTRIES],
        "prefix": wizard.selected_prefix(state),
        "phone_local": form.phone_local,
        "phone_full": full_phone,
        "phone_hint": {
            "is_error": phone_invalid,
            "text": (
                phone_requirement_text(form.country)
                if phone_invalid
                else f"Se enviará como: {full_phone}"
            ),
        },
        "consent": form.consent,
    }


def build_result_view(state: WizardState, app_settings: Settings) -> Dict[str, Any]:
    """Экран благодарности со ссылками на сайт и WhatsApp"""
    return {
        "title": state.result.title,
        "message": state.result.message,
        "links": [
            {"label": "Visita nuestro website", "url": app_settings.website_url},
            {"label": "Ir a WhatsApp", "url": app_settings.whatsapp_url},
        ],
    }


def build_wizard_view(state: WizardState, app_settings: Settings) -> Dict[str, Any]:
    """
    Полная модель представления.

    Args:
        state: Текущее состояние мастера
        app_settings: Настройки со ссылками (политика, сайт, WhatsApp)

    Returns:
        Словарь для JSON ответа
    """
    if state.is_terminal:
        return {
            "step": state.step,
            "completed": True,
            "progress_pct": 100.0,
            "bar_width": "100%",
            "result": build_result_view(state, app_settings),
        }

    progress = wizard.progress_pct(state)
    return {
        "step": state.step,
        "completed": False,
        "progress_pct": progress,
        "bar_width": percent(progress),
        "title": PAGE_TITLE,
        "description": PAGE_DESCRIPTION,
        "error": state.error,
        "questions": build_questions_view(state),
        "contact": build_contact_view(state),
        "privacy": {
            "label": PRIVACY_LABEL,
            "url": app_settings.privacy_url or None,
            "consent_text": CONSENT_TEXT,
        },
        "navigation": {
            "next_label": NEXT_LABEL,
            "back_label": BACK_LABEL,
            "can_go_back": state.step > 1,
            "can_continue_questions": wizard.can_continue_questions(state),
            "can_continue_data": wizard.can_continue_data(state),
            "submitting": state.submitting,
            "submit_label": SUBMITTING_LABEL if state.submitting else SUBMIT_LABEL,
            "submit_disabled": not wizard.can_submit(state),
        },
        "result": None,
    }
