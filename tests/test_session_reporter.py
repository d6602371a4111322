from data.scoring_client import ServiceResponse
from fakes import FakeClient
from game.runtime.models import (
    Failed,
    Identity,
    NewBest,
    NoImprovement,
    SessionResult,
    Skipped,
)
from game.session_reporter import SessionReporter

RESULT = SessionResult(times=(250, 300, 275), average=275.0)


def test_anonymous_session_is_skipped_without_network():
    client = FakeClient()
    assert SessionReporter(client).submit(RESULT, None) == Skipped()
    assert client.calls == []


def test_unauthenticated_identity_is_skipped():
    client = FakeClient()
    identity = Identity(username="ann", best_time_ms=None, authenticated=False)
    assert SessionReporter(client).submit(RESULT, identity) == Skipped()
    assert client.calls == []


def test_better_average_is_new_best():
    client = FakeClient()
    outcome = SessionReporter(client).submit(RESULT, Identity("ann", best_time_ms=300))
    assert outcome == NewBest(275.0)
    assert client.calls == [("update", "ann", 275.0)]


def test_first_score_is_new_best():
    outcome = SessionReporter(FakeClient()).submit(RESULT, Identity("ann", best_time_ms=None))
    assert outcome == NewBest(275.0)


def test_equal_or_worse_is_no_improvement():
    reporter = SessionReporter(FakeClient())
    assert reporter.submit(RESULT, Identity("ann", best_time_ms=275.0)) == NoImprovement()
    assert reporter.submit(RESULT, Identity("ann", best_time_ms=200)) == NoImprovement()


def test_server_error_is_reported_once():
    client = FakeClient(response=ServiceResponse(status=500, payload={}))
    outcome = SessionReporter(client).submit(RESULT, Identity("ann", best_time_ms=300))
    assert isinstance(outcome, Failed)
    assert "500" in outcome.reason
    assert len(client.calls) == 1


def test_connection_error_is_failed_not_raised():
    client = FakeClient(error="connection refused")
    outcome = SessionReporter(client).submit(RESULT, Identity("ann", best_time_ms=300))
    assert isinstance(outcome, Failed)
    assert "connection refused" in outcome.reason
    assert len(client.calls) == 1
