"""
Роуты мастера диагностики.
Каждый endpoint применяет одну команду к состоянию сессии
и возвращает модель представления текущего экрана.
"""
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field, field_validator

from ....config.settings import Settings, get_settings
from ....domain.entities.country import COUNTRY_CODES
from ....domain.entities.wizard_state import WizardState
from ....domain.interfaces.submission import SubmissionGateway
from ....domain.services.wizard import extract_utms
from ....domain.services.wizard_controller import WizardController
from ....infrastructure.logging.hybrid_logger import hybrid_logger
from ....infrastructure.sessions import InMemoryWizardStore
from ....infrastructure.submission import create_submission_gateway
from ....presentation.view_models import build_wizard_view

router = APIRouter(prefix="/diagnostico", tags=["diagnostico"])

SESSION_KEY = "wizard_id"


class SelectAnswerRequest(BaseModel):
    """Выбор варианта ответа"""
    question_id: str = Field(min_length=1)
    value: str = Field(min_length=1)


class ExtraTextRequest(BaseModel):
    """Уточнение к выбранному варианту"""
    text: str = Field("", max_length=500)


class ContactUpdateRequest(BaseModel):
    """Частичное обновление контактной формы"""
    name: Optional[str] = Field(None, max_length=200)
    company: Optional[str] = Field(None, max_length=300)
    role: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=320)
    country: Optional[str] = None
    phone_local: Optional[str] = Field(None, max_length=40)
    consent: Optional[bool] = None

    @field_validator('country')
    @classmethod
    def validate_country(cls, v):
        if v is not None and v not in COUNTRY_CODES:
            raise ValueError(f"Страна должна быть одной из: {', '.join(COUNTRY_CODES)}")
        return v


# Хранилище и шлюз создаются при первом обращении; в тестах подменяются
# через app.dependency_overrides
_store: Optional[InMemoryWizardStore] = None
_gateway: Optional[SubmissionGateway] = None


def get_wizard_store() -> InMemoryWizardStore:
    global _store
    if _store is None:
        _store = InMemoryWizardStore(ttl_minutes=get_settings().session_ttl_minutes)
    return _store


def get_submission_gateway() -> SubmissionGateway:
    global _gateway
    if _gateway is None:
        _gateway = create_submission_gateway(get_settings())
    return _gateway


def _open_controller(
    request: Request,
    store: InMemoryWizardStore,
    gateway: SubmissionGateway,
    capture_utms: bool = False,
) -> Tuple[WizardController, bool]:
    """
    Загружает (или создает) состояние сессии и оборачивает его контроллером.
    Возвращает (контроллер, создана_ли_новая_сессия).
    """
    utms = extract_utms(request.query_params) if capture_utms else None
    session_id, state, created = store.get_or_create(request.session.get(SESSION_KEY), utms)
    request.session[SESSION_KEY] = session_id

    def _save(new_state: WizardState) -> None:
        store.save(session_id, new_state)

    def _load() -> Optional[WizardState]:
        return store.get(session_id)

    return WizardController(state, gateway, on_change=_save, load=_load), created


@router.get("")
async def open_wizard(
    request: Request,
    store: InMemoryWizardStore = Depends(get_wizard_store),
    gateway: SubmissionGateway = Depends(get_submission_gateway),
    app_settings: Settings = Depends(get_settings),
):
    """Открывает мастер; при новой сессии сохраняет UTM метки из query"""
    controller, created = _open_controller(request, store, gateway, capture_utms=True)
    if created:
        await hybrid_logger.business(
            "Открыта диагностика",
            {"utms": dict(controller.state.utms)}
        )
    return build_wizard_view(controller.state, app_settings)


@router.post("/answers")
async def select_answer(
    request: Request,
    body: SelectAnswerRequest,
    store: InMemoryWizardStore = Depends(get_wizard_store),
    gateway: SubmissionGateway = Depends(get_submission_gateway),
    app_settings: Settings = Depends(get_settings),
):
    """Выбор варианта ответа на вопрос"""
    controller, _ = _open_controller(request, store, gateway)
    try:
        state = controller.select_answer(body.question_id, body.value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return build_wizard_view(state, app_settings)


@router.put("/answers/{question_id}/extra-text")
async def set_extra_text(
    question_id: str,
    request: Request,
    body: ExtraTextRequest,
    store: InMemoryWizardStore = Depends(get_wizard_store),
    gateway: SubmissionGateway = Depends(get_submission_gateway),
    app_settings: Settings = Depends(get_settings),
):
    """Уточнение к ответу; без выбранного варианта ничего не меняет"""
    controller, _ = _open_controller(request, store, gateway)
    state = controller.set_extra_text(question_id, body.text)
    return build_wizard_view(state, app_settings)


@router.patch("/contact")
async def update_contact(
    request: Request,
    body: ContactUpdateRequest,
    store: InMemoryWizardStore = Depends(get_wizard_store),
    gateway: SubmissionGateway = Depends(get_submission_gateway),
    app_settings: Settings = Depends(get_settings),
):
    """Обновление переданных полей контактной формы"""
    controller, _ = _open_controller(request, store, gateway)
    for field_name, value in body.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        controller.set_field(field_name, value)
    return build_wizard_view(controller.state, app_settings)


@router.post("/next")
async def next_step(
    request: Request,
    store: InMemoryWizardStore = Depends(get_wizard_store),
    gateway: SubmissionGateway = Depends(get_submission_gateway),
    app_settings: Settings = Depends(get_settings),
):
    """Следующий шаг; при закрытых воротах состояние не меняется"""
    controller, _ = _open_controller(request, store, gateway)
    state = await controller.advance_step()
    return build_wizard_view(state, app_settings)


@router.post("/back")
async def previous_step(
    request: Request,
    store: InMemoryWizardStore = Depends(get_wizard_store),
    gateway: SubmissionGateway = Depends(get_submission_gateway),
    app_settings: Settings = Depends(get_settings),
):
    """Предыдущий шаг"""
    controller, _ = _open_controller(request, store, gateway)
    state = controller.retreat_step()
    return build_wizard_view(state, app_settings)


@router.post("/submit")
async def submit(
    request: Request,
    store: InMemoryWizardStore = Depends(get_wizard_store),
    gateway: SubmissionGateway = Depends(get_submission_gateway),
    app_settings: Settings = Depends(get_settings),
):
    """Отправка формы; ошибка возвращается в поле error модели представления"""
    controller, _ = _open_controller(request, store, gateway)
    state = await controller.submit()
    return build_wizard_view(state, app_settings)
