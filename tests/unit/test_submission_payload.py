"""
Unit тесты сборки payload и начала отправки
"""
from dataclasses import replace

from diagnostico.domain.services import wizard
from tests.fixtures.factories import ContactFormFactory, WizardStateBuilder


class TestBuildSubmission:
    """Тесты формата payload"""

    def test_payload_fields(self):
        form = ContactFormFactory.create_with_consent(
            name="Ana López",
            company="Empresa S.A.",
            role="Gerente de TI",
            email="ana@empresa.com",
            country="PA",
            phone_local="12345678",
        )
        state = WizardStateBuilder.ready_to_submit(form=form, utms={"utm_source": "google"})

        payload = wizard.build_submission(state).to_payload()

        assert payload["name"] == "Ana López"
        assert payload["company"] == "Empresa S.A."
        assert payload["role"] == "Gerente de TI"
        assert payload["email"] == "ana@empresa.com"
        assert payload["country"] == "Panamá"
        assert payload["phone"] == "+507 12345678"
        assert payload["answers"]["utms"] == {"utm_source": "google"}
        assert "consent" not in payload

    def test_items_keep_answer_order_and_extra_text(self):
        state = WizardStateBuilder.ready_to_submit()
        items = wizard.build_submission(state).to_payload()["answers"]["items"]

        assert items == [
            {"id": "industria", "value": "retail"},
            {"id": "erp", "value": "sapb1"},
            {"id": "busca", "value": "sistema", "extraText": "CRM"},
        ]

    def test_empty_utms(self, ready_state):
        payload = wizard.build_submission(ready_state).to_payload()
        assert payload["answers"]["utms"] == {}

    def test_unknown_country_is_sent_as_code(self, ready_state):
        state = replace(ready_state, form=replace(ready_state.form, country="CR"))
        payload = wizard.build_submission(state).to_payload()
        assert payload["country"] == "CR"
        assert payload["phone"].startswith("+502")


class TestBeginSubmission:
    """Тесты начала отправки"""

    def test_consent_required(self, ready_state):
        state = wizard.set_field(ready_state, "consent", False)
        new_state, submission = wizard.begin_submission(state)

        assert submission is None
        assert new_state.error == wizard.CONSENT_REQUIRED_MESSAGE
        assert new_state.submitting is False

    def test_starts_in_flight_and_clears_error(self, ready_state):
        state = replace(ready_state, error="Error 500")
        new_state, submission = wizard.begin_submission(state)

        assert submission is not None
        assert new_state.submitting is True
        assert new_state.error is None

    def test_single_flight(self, ready_state):
        in_flight, _ = wizard.begin_submission(ready_state)
        again, submission = wizard.begin_submission(in_flight)
        assert submission is None
        assert again is in_flight

    def test_only_on_last_step(self, contact_state):
        state = wizard.set_field(contact_state, "consent", True)
        new_state, submission = wizard.begin_submission(state)
        assert submission is None
        assert new_state is state

    def test_failure_keeps_last_step(self, ready_state):
        in_flight, _ = wizard.begin_submission(ready_state)

        failed = wizard.fail_submission(in_flight, "Correo duplicado")
        assert failed.step == 3
        assert failed.submitting is False
        assert failed.error == "Correo duplicado"

        failed = wizard.fail_submission(in_flight)
        assert failed.error == wizard.SUBMIT_FALLBACK_ERROR
