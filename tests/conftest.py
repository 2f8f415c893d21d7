"""
Общие fixtures для всех тестов
"""
import pytest
from fastapi.testclient import TestClient

# Импорты из нашего приложения
from diagnostico.main import app
from diagnostico.config.settings import Settings, get_settings
from diagnostico.application.web.routes.diagnostico import get_wizard_store, get_submission_gateway
from diagnostico.infrastructure.sessions import InMemoryWizardStore
from tests.fixtures.factories import WizardStateBuilder
from tests.mocks.gateway_mock import MockSubmissionGateway


class TestSettings(Settings):
    """Настройки для тестирования"""
    __test__ = False

    def __init__(self):
        super().__init__()
        self.debug = True
        self.submit_url = ""
        self.privacy_url = "https://www.grupoinforum.com/privacidad"
        self.website_url = "https://www.grupoinforum.com"
        self.whatsapp_url = "https://wa.me/50242170962"
        self.session_ttl_minutes = 120


@pytest.fixture
def test_settings() -> TestSettings:
    """Возвращает тестовые настройки"""
    return TestSettings()


@pytest.fixture
def mock_gateway() -> MockSubmissionGateway:
    """Мок шлюза отправки"""
    return MockSubmissionGateway()


@pytest.fixture
def wizard_store() -> InMemoryWizardStore:
    """Чистое хранилище сессий для каждого теста"""
    return InMemoryWizardStore(ttl_minutes=120)


@pytest.fixture
def test_client(wizard_store, mock_gateway, test_settings) -> TestClient:
    """Создает тестовый клиент FastAPI с подмененными зависимостями"""
    app.dependency_overrides[get_wizard_store] = lambda: wizard_store
    app.dependency_overrides[get_submission_gateway] = lambda: mock_gateway
    app.dependency_overrides[get_settings] = lambda: test_settings
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def empty_state():
    return WizardStateBuilder.empty()


@pytest.fixture
def answered_state():
    return WizardStateBuilder.questions_answered()


@pytest.fixture
def contact_state():
    return WizardStateBuilder.contact_filled()


@pytest.fixture
def ready_state():
    return WizardStateBuilder.ready_to_submit()


# Автоматическое применение маркеров
def pytest_collection_modifyitems(config, items):
    """Автоматически применяет маркеры к тестам"""
    for item in items:
        # Определяем тип теста по пути к файлу
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)
            item.add_marker(pytest.mark.slow)

        # Добавляем специфичные маркеры
        if "api" in str(item.fspath) or "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.api)
        if "wizard" in str(item.fspath):
            item.add_marker(pytest.mark.wizard)
        if "gateway" in str(item.fspath) or "submission" in str(item.fspath):
            item.add_marker(pytest.mark.submission)
