"""
Правила валидации контактных данных: телефон по стране и корпоративный email.
Чистые функции без зависимостей от состояния мастера.
"""
import re
from typing import Optional

from ..entities.country import get_country, DEFAULT_PREFIX, FALLBACK_MIN_DIGITS


FREE_EMAIL_DOMAINS = frozenset({
    "gmail.com",
    "hotmail.com",
    "outlook.com",
    "yahoo.com",
    "icloud.com",
    "proton.me",
    "aol.com",
    "live.com",
    "msn.com",
})

EMAIL_SHAPE_RE = re.compile(r'.+@.+\..+')
NON_DIGIT_RE = re.compile(r'[^\d]')

CORPORATE_EMAIL_WARNING = "Usa un correo corporativo (no gmail/hotmail/outlook/yahoo, etc.)."


def extract_digits(value: Optional[str]) -> str:
    """Оставляет в строке только цифры: '+502 (1234)-56' → '502123456'"""
    return NON_DIGIT_RE.sub('', value or '')


def is_email_shape_valid(email: str) -> bool:
    """Базовая проверка формы text@text.text"""
    return bool(EMAIL_SHAPE_RE.search(email or ''))


def is_corporate_email(email: str) -> bool:
    """
    Email считается корпоративным, если домен (после последнего @)
    не входит в список бесплатных почтовых сервисов.
    Адрес без @ корпоративным не бывает.
    """
    if not email or '@' not in email:
        return False
    domain = email.rsplit('@', 1)[1].lower().strip()
    if not domain:
        return False
    return domain not in FREE_EMAIL_DOMAINS


def is_phone_valid(local: Optional[str], country_code: str) -> bool:
    """Проверка количества цифр локального номера по правилу страны"""
    digits = extract_digits(local)
    country = get_country(country_code)
    if country is None:
        return len(digits) >= FALLBACK_MIN_DIGITS

    rule = country.rule
    meets_min = len(digits) >= rule.min
    meets_max = len(digits) <= rule.max if rule.max is not None else True
    return meets_min and meets_max


def get_prefix(country_code: str) -> str:
    """Телефонный префикс страны или префикс по умолчанию"""
    country = get_country(country_code)
    return country.prefix if country else DEFAULT_PREFIX


def format_full_phone(local: Optional[str], country_code: str) -> str:
    """
    Полный номер для отправки: префикс + пробел + цифры.
    Без цифр возвращается только префикс.
    """
    digits = extract_digits(local)
    prefix = get_prefix(country_code)
    return f"{prefix} {digits}" if digits else prefix


def phone_requirement_text(country_code: str) -> str:
    """Подсказка о требуемой длине номера для выбранной страны"""
    country = get_country(country_code)
    if country is None:
        return f"Ingresa al menos {FALLBACK_MIN_DIGITS} dígitos del número local."

    rule = country.rule
    min_txt = f"{rule.min} dígitos"
    max_txt = f" (máx. {rule.max})" if rule.max else ""
    note = f" · {rule.note}" if rule.note else ""
    return f"Ingresa {min_txt}{max_txt} del número local{note}."
