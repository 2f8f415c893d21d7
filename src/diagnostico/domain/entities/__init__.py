# Domain entities - dataclasses for business objects
from .questionnaire import Question, PlainOption, FreeTextOption, Option, QUESTIONS, get_question
from .country import Country, PhoneRule, COUNTRIES, COUNTRY_CODES, DEFAULT_COUNTRY, DEFAULT_PREFIX, get_country
from .wizard_state import (
    Answer, ContactForm, WizardResult, WizardState,
    STEP_QUESTIONS, STEP_CONTACT, STEP_CONSENT, TOTAL_STEPS
)
from .submission import DiagnosticoSubmission, SubmissionAnswers, SubmissionAnswerItem

__all__ = [
    "Question",
    "PlainOption",
    "FreeTextOption",
    "Option",
    "QUESTIONS",
    "get_question",
    "Country",
    "PhoneRule",
    "COUNTRIES",
    "COUNTRY_CODES",
    "DEFAULT_COUNTRY",
    "DEFAULT_PREFIX",
    "get_country",
    "Answer",
    "ContactForm",
    "WizardResult",
    "WizardState",
    "STEP_QUESTIONS",
    "STEP_CONTACT",
    "STEP_CONSENT",
    "TOTAL_STEPS",
    "DiagnosticoSubmission",
    "SubmissionAnswers",
    "SubmissionAnswerItem",
]
