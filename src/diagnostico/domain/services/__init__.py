"""
Domain services - бизнес-логика мастера диагностики.
Содержит правила валидации, команды мастера и контроллер отправки.
"""
from .validation import (
    extract_digits, is_email_shape_valid, is_corporate_email, is_phone_valid,
    format_full_phone, phone_requirement_text
)
from .wizard_controller import WizardController

__all__ = [
    # Валидация
    "extract_digits",
    "is_email_shape_valid",
    "is_corporate_email",
    "is_phone_valid",
    "format_full_phone",
    "phone_requirement_text",

    # Контроллер
    "WizardController",
]
