"""
Формат отправки заполненной диагностики во внешний endpoint.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionAnswerItem(BaseModel):
    """Ответ на вопрос в формате внешнего endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Идентификатор вопроса")
    value: str = Field(description="Выбранный вариант")
    extra_text: Optional[str] = Field(None, alias="extraText", description="Уточнение")


class SubmissionAnswers(BaseModel):
    """UTM метки и ответы на вопросы"""
    utms: Dict[str, str] = Field(default_factory=dict)
    items: List[SubmissionAnswerItem] = Field(default_factory=list)


class DiagnosticoSubmission(BaseModel):
    """Полезная нагрузка отправки формы"""
    name: str
    company: str
    role: str
    email: str
    country: str = Field(description="Название страны, не код")
    phone: str = Field(description="Префикс + локальный номер")
    answers: SubmissionAnswers

    def to_payload(self) -> dict:
        """JSON для отправки: extraText без значения не передается"""
        payload = self.model_dump(by_alias=True)
        for item in payload["answers"]["items"]:
            if item.get("extraText") is None:
                item.pop("extraText", None)
        return payload
