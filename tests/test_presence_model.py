import logging

import pytest

from utils.results import (ALREADY_MARKED, INVALID_CODE, NETWORK_REQUIRED,
                           NO_ACTIVE_SESSION, MESSAGES)


def test_submit_accepts_lowercase_code(sessions, presence, ledger):
    sessions.start("Dr. Grey")

    result = presence.submit("student-1", "Ann", "xj4k9p", True)

    assert result.ok
    assert result.value == "9:00:00 AM"
    [record] = ledger.all()
    assert record.session_code == "XJ4K9P"
    assert record.date == "1/1/2024"


def test_submit_trims_whitespace(sessions, presence):
    sessions.start("Dr. Grey")
    assert presence.submit("student-1", "Ann", "  XJ4K9P\n", True)


def test_network_gate_is_checked_first(presence):
    result = presence.submit("student-1", "Ann", "XJ4K9P", False)
    assert result.error == NETWORK_REQUIRED
    assert result.message == MESSAGES[NETWORK_REQUIRED]


def test_no_session(presence):
    assert presence.submit("student-1", "Ann", "XJ4K9P", True).error == NO_ACTIVE_SESSION


def test_ended_session_closes_the_gate(sessions, presence, ledger):
    sessions.start("Dr. Grey")
    sessions.end()

    result = presence.submit("student-1", "Ann", "XJ4K9P", True)

    assert result.error == NO_ACTIVE_SESSION
    assert ledger.all() == []


def test_wrong_code(sessions, presence, ledger):
    sessions.start("Dr. Grey")
    assert presence.submit("student-1", "Ann", "XJ4K9Q", True).error == INVALID_CODE
    assert ledger.all() == []


def test_old_code_is_invalid_after_restart(sessions, presence):
    sessions.start("Dr. Grey")
    sessions.start("Dr. Grey")
    assert presence.submit("student-1", "Ann", "XJ4K9P", True).error == INVALID_CODE


def test_second_submission_is_rejected_and_status_reports_marked(sessions, presence, ledger):
    sessions.start("Dr. Grey")
    assert presence.submit("student-1", "Ann", "xj4k9p", True)

    assert presence.check_status("student-1") == {"alreadyMarked": True, "at": "9:00:00 AM"}
    assert presence.submit("student-1", "Ann", "xj4k9p", True).error == ALREADY_MARKED
    assert len(ledger.all()) == 1


def test_status_resets_for_new_session(sessions, presence):
    sessions.start("Dr. Grey")
    presence.submit("student-1", "Ann", "XJ4K9P", True)
    sessions.start("Dr. Grey")
    assert presence.check_status("student-1") == {"alreadyMarked": False, "at": None}
    assert presence.submit("student-1", "Ann", "AB12CD", True)


def test_status_not_marked_once_session_ends(sessions, presence):
    sessions.start("Dr. Grey")
    presence.submit("student-1", "Ann", "XJ4K9P", True)
    sessions.end()
    assert presence.check_status("student-1")["alreadyMarked"] is False


def test_other_students_unaffected(sessions, presence):
    sessions.start("Dr. Grey")
    presence.submit("student-1", "Ann", "XJ4K9P", True)
    assert presence.check_status("student-2")["alreadyMarked"] is False
    assert presence.submit("student-2", "Bo", "XJ4K9P", True)


def test_accepted_submission_is_logged(sessions, presence, caplog: pytest.LogCaptureFixture):
    sessions.start("Dr. Grey")
    with caplog.at_level(logging.INFO):
        presence.submit("student-1", "Ann", "XJ4K9P", True)
    assert any("Ann" in r.getMessage() and "XJ4K9P" in r.getMessage() for r in caplog.records)
