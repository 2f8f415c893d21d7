"""
Unit тесты команд мастера и ворот шагов
"""
from dataclasses import replace

import pytest

from diagnostico.domain.entities.questionnaire import QUESTIONS
from diagnostico.domain.entities.wizard_state import WizardResult
from diagnostico.domain.services import wizard
from tests.fixtures.factories import ContactFormFactory, WizardStateBuilder


class TestInitialState:
    """Тесты начального состояния"""

    def test_defaults(self, empty_state):
        assert empty_state.step == 1
        assert empty_state.answers == {}
        assert empty_state.form.country == "GT"
        assert empty_state.form.consent is False
        assert empty_state.submitting is False
        assert empty_state.error is None
        assert empty_state.result is None

    def test_create_state_keeps_utms(self):
        state = wizard.create_state({"utm_source": "google"})
        assert state.utms == {"utm_source": "google"}

    def test_extract_utms_skips_missing_and_empty(self):
        params = {
            "utm_source": "linkedin",
            "utm_medium": "",
            "utm_term": "erp",
            "gclid": "abc",
        }
        assert wizard.extract_utms(params) == {"utm_source": "linkedin", "utm_term": "erp"}


class TestSelectAnswer:
    """Тесты выбора вариантов"""

    def test_select_records_answer(self, empty_state):
        state = wizard.select_answer(empty_state, "industria", "retail")
        assert state.answers["industria"].value == "retail"
        assert state.answers["industria"].extra_text is None
        # Исходное состояние не изменилось
        assert empty_state.answers == {}

    def test_reselect_overwrites_answer(self, empty_state):
        state = wizard.select_answer(empty_state, "industria", "retail")
        state = wizard.select_answer(state, "industria", "servicios")
        assert len(state.answers) == 1
        assert state.answers["industria"].value == "servicios"

    def test_unknown_question_or_option(self, empty_state):
        with pytest.raises(ValueError):
            wizard.select_answer(empty_state, "presupuesto", "alto")
        with pytest.raises(ValueError):
            wizard.select_answer(empty_state, "industria", "mineria")

    def test_extra_text_requires_existing_answer(self, empty_state):
        state = wizard.set_extra_text(empty_state, "industria", "Minería")
        assert state == empty_state

    def test_extra_input_visibility_follows_selected_option(self, empty_state):
        assert wizard.should_show_extra_input(empty_state, "industria") is False

        state = wizard.select_answer(empty_state, "industria", "otro")
        assert wizard.should_show_extra_input(state, "industria") is True

        state = wizard.select_answer(state, "industria", "retail")
        assert wizard.should_show_extra_input(state, "industria") is False

        assert wizard.should_show_extra_input(state, "desconocida") is False

    def test_stale_extra_text_is_kept_when_toggling_options(self, empty_state):
        """Уточнение не стирается при смене варианта и возврате обратно"""
        state = wizard.select_answer(empty_state, "industria", "otro")
        state = wizard.set_extra_text(state, "industria", "Minería")

        state = wizard.select_answer(state, "industria", "retail")
        assert wizard.should_show_extra_input(state, "industria") is False
        assert state.answers["industria"].extra_text == "Minería"

        state = wizard.select_answer(state, "industria", "otro")
        assert state.answers["industria"].extra_text == "Minería"

    def test_reselecting_same_option_keeps_extra_text(self, empty_state):
        state = wizard.select_answer(empty_state, "busca", "sistema")
        state = wizard.set_extra_text(state, "busca", "CRM")
        state = wizard.select_answer(state, "busca", "servicio")
        state = wizard.select_answer(state, "busca", "servicio")
        assert state.answers["busca"].value == "servicio"
        assert state.answers["busca"].extra_text == "CRM"


class TestSetField:
    """Тесты изменения полей формы"""

    def test_phone_is_stored_as_digits(self, empty_state):
        state = wizard.set_field(empty_state, "phone_local", "5555-12 34a")
        assert state.form.phone_local == "55551234"

    def test_consent_is_coerced_to_bool(self, empty_state):
        state = wizard.set_field(empty_state, "consent", 1)
        assert state.form.consent is True

    def test_unknown_field(self, empty_state):
        with pytest.raises(ValueError):
            wizard.set_field(empty_state, "website", "acme.co")

    def test_country_change_updates_prefix(self, empty_state):
        state = wizard.set_field(empty_state, "country", "EC")
        assert wizard.selected_prefix(state) == "+593"
        assert wizard.phone_full(state) == "+593"


class TestQuestionsGate:
    """Тесты перехода 1 → 2"""

    def test_gate_closed_until_all_questions_answered(self, empty_state):
        state = empty_state
        for question in QUESTIONS:
            assert wizard.can_continue_questions(state) is False
            assert wizard.advance_step(state).step == 1
            state = wizard.select_answer(state, question.id, question.options[0].value)

        assert wizard.can_continue_questions(state) is True
        assert wizard.advance_step(state).step == 2

    def test_contact_fields_do_not_open_questions_gate(self):
        state = WizardStateBuilder.empty(form=ContactFormFactory())
        state = wizard.select_answer(state, "industria", "retail")
        assert wizard.can_continue_questions(state) is False


class TestContactGate:
    """Тесты перехода 2 → 3"""

    def test_valid_form_opens_gate(self, contact_state):
        assert wizard.can_continue_data(contact_state) is True
        assert wizard.advance_step(contact_state).step == 3

    @pytest.mark.parametrize("field_name,value", [
        ("name", "A"),
        ("name", "  A  "),
        ("company", ""),
        ("role", "X"),
        ("email", "ana@empresa"),
        ("email", "ana@gmail.com"),
        ("email", "ANA@HOTMAIL.COM"),
        ("phone_local", "1234567"),
        ("country", "DO"),
    ])
    def test_single_invalid_field_closes_gate(self, contact_state, field_name, value):
        form = replace(contact_state.form, phone_local="12345678")
        state = replace(contact_state, form=form)
        assert wizard.can_continue_data(state) is True

        state = wizard.set_field(state, field_name, value)
        assert wizard.can_continue_data(state) is False
        assert wizard.advance_step(state).step == 2


class TestNavigation:
    """Тесты навигации назад и прогресса"""

    def test_back_is_always_allowed(self, ready_state):
        state = wizard.retreat_step(ready_state)
        assert state.step == 2
        state = wizard.retreat_step(state)
        assert state.step == 1
        assert wizard.retreat_step(state).step == 1

    def test_advance_on_last_step_is_noop(self, ready_state):
        assert wizard.advance_step(ready_state) == ready_state

    def test_progress(self, empty_state, contact_state, ready_state):
        assert wizard.progress_pct(empty_state) == pytest.approx(33.333, rel=1e-3)
        assert wizard.progress_pct(contact_state) == pytest.approx(66.667, rel=1e-3)
        assert wizard.progress_pct(ready_state) == 100


class TestTerminalState:
    """После успешной отправки состояние не меняется"""

    def test_commands_are_ignored(self, ready_state):
        state = wizard.complete_submission(ready_state)
        assert state.result == WizardResult(title=wizard.SUCCESS_TITLE, message=wizard.SUCCESS_MESSAGE)

        assert wizard.select_answer(state, "industria", "otro") is state
        assert wizard.set_extra_text(state, "busca", "ERP") is state
        assert wizard.set_field(state, "name", "Otro") is state
        assert wizard.advance_step(state) is state
        assert wizard.retreat_step(state) is state
        assert wizard.begin_submission(state) == (state, None)
