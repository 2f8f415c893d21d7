"""
Вопросы диагностики: статическая конфигурация первого шага мастера.
Варианты ответа - закрытый набор типов: обычный вариант и вариант,
требующий уточнения свободным текстом.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class PlainOption:
    """Вариант ответа без уточнения"""
    value: str
    label: str

    @property
    def requires_text(self) -> bool:
        return False


@dataclass(frozen=True)
class FreeTextOption:
    """Вариант ответа, для которого показывается поле «Especifica aquí»"""
    value: str
    label: str

    @property
    def requires_text(self) -> bool:
        return True


Option = Union[PlainOption, FreeTextOption]

SINGLE_CHOICE = "single"


@dataclass(frozen=True)
class Question:
    """Вопрос с выбором ровно одного варианта"""
    id: str
    label: str
    options: Tuple[Option, ...]
    mode: str = SINGLE_CHOICE
    required: bool = True

    def get_option(self, value: str) -> Optional[Option]:
        """Поиск варианта по значению"""
        for option in self.options:
            if option.value == value:
                return option
        return None

    def has_option(self, value: str) -> bool:
        return self.get_option(value) is not None


QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="industria",
        label="¿En qué industria opera la compañía?",
        options=(
            PlainOption("produccion", "Producción"),
            PlainOption("distribucion", "Distribución"),
            PlainOption("retail", "Retail"),
            PlainOption("servicios", "Servicios"),
            PlainOption("inmobiliaria_desarrollo", "Inmobiliaria y Desarrollo"),
            PlainOption("restaurante", "Restaurante"),
            FreeTextOption("otro", "Otro (especificar)"),
        ),
    ),
    Question(
        id="erp",
        label="¿Qué sistema empresarial (ERP) utiliza actualmente su empresa?",
        options=(
            PlainOption("sapb1", "SAP Business One"),
            PlainOption("sistema_propio", "Sistema Propio"),
            FreeTextOption("erp_otro", "Otro (especificar)"),
        ),
    ),
    Question(
        id="busca",
        label="¿Estás buscando un sistema o un servicio en particular?",
        options=(
            FreeTextOption("sistema", "Sistema (especificar)"),
            FreeTextOption("servicio", "Servicio (especificar)"),
        ),
    ),
)


def get_question(question_id: str) -> Optional[Question]:
    """Поиск вопроса по идентификатору"""
    for question in QUESTIONS:
        if question.id == question_id:
            return question
    return None
