"""
Страны, телефонные префиксы и правила длины локального номера.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class PhoneRule:
    """Правило длины локальной части номера (только цифры)"""
    min: int
    max: Optional[int] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class Country:
    code: str
    label: str
    prefix: str
    rule: PhoneRule


COUNTRIES: Tuple[Country, ...] = (
    Country("GT", "Guatemala", "+502", PhoneRule(min=8)),
    Country("SV", "El Salvador", "+503", PhoneRule(min=8)),
    Country("HN", "Honduras", "+504", PhoneRule(min=8)),
    Country("PA", "Panamá", "+507", PhoneRule(min=8)),
    Country("DO", "República Dominicana", "+1", PhoneRule(min=10)),
    Country("EC", "Ecuador", "+593", PhoneRule(min=9, note="Usa tu número móvil (9 dígitos)")),
)

COUNTRY_CODES: Tuple[str, ...] = tuple(c.code for c in COUNTRIES)

DEFAULT_COUNTRY = "GT"
DEFAULT_PREFIX = "+502"
# Для кода вне таблицы
FALLBACK_MIN_DIGITS = 8


def get_country(code: str) -> Optional[Country]:
    """Поиск страны по коду (GT, SV, ...)"""
    for country in COUNTRIES:
        if country.code == code:
            return country
    return None
