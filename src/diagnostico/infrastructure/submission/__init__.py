"""
Шлюзы отправки диагностики.
Выбор реализации по настройкам: HTTP при заданном SUBMIT_URL, иначе симуляция.
"""
from ...config.settings import Settings, settings as default_settings
from ...domain.interfaces.submission import SubmissionGateway
from .http_gateway import HttpSubmissionGateway
from .simulation_gateway import SimulationSubmissionGateway


def create_submission_gateway(app_settings: Settings = None) -> SubmissionGateway:
    """Создает шлюз отправки по настройкам"""
    app_settings = app_settings or default_settings
    if app_settings.submission_configured:
        return HttpSubmissionGateway(
            url=app_settings.submit_url,
            timeout=app_settings.submit_timeout,
            max_retries=app_settings.submit_max_retries,
            retry_base_delay_ms=app_settings.submit_retry_base_delay_ms,
        )
    return SimulationSubmissionGateway()


__all__ = [
    "HttpSubmissionGateway",
    "SimulationSubmissionGateway",
    "create_submission_gateway",
]
