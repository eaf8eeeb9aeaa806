"""
Unit tests for the submit-and-poll state machine.
"""
from unittest.mock import Mock

import pytest

from docoverlay.domain.entities.analysis_result import AnalysisResult
from docoverlay.domain.exceptions import AnalysisFailed, NotConfigured, SubmissionError, TransportError
from docoverlay.domain.value_objects.operation_status import OperationState
from docoverlay.infrastructure.analysis.document_intelligence_client import RemoteOperation
from docoverlay.infrastructure.analysis.operation_poller import OperationPoller

RESULT = AnalysisResult(content="", pages=())


def make_engine(*operations, submit_side_effect=None) -> Mock:
    engine = Mock()
    engine.submit.side_effect = submit_side_effect
    engine.submit.return_value = "op-1"
    engine.poll.side_effect = list(operations)
    return engine


def running() -> RemoteOperation:
    return RemoteOperation(status="running")


def succeeded() -> RemoteOperation:
    return RemoteOperation(status="succeeded", result=RESULT)


class TestSuccessfulRun:
    def test_running_twice_then_succeeded(self, recording_event):
        engine = make_engine(running(), running(), succeeded())
        statuses = []
        poller = OperationPoller(engine, poll_interval=2.0)

        result = poller.run(b"%PDF", "prebuilt-layout", on_status=statuses.append, cancel_event=recording_event)

        assert result is RESULT
        assert engine.submit.call_count == 1
        assert engine.poll.call_count == 3
        assert recording_event.waits == [2.0, 2.0, 2.0]
        assert [status.state for status in statuses] == [
            OperationState.SUBMITTED,
            OperationState.RUNNING,
            OperationState.RUNNING,
            OperationState.SUCCEEDED,
        ]
        assert [status.poll_count for status in statuses] == [0, 1, 2, 3]

    def test_succeeded_without_payload_fails(self, recording_event):
        engine = make_engine(RemoteOperation(status="succeeded"))
        poller = OperationPoller(engine)

        with pytest.raises(AnalysisFailed):
            poller.run(b"%PDF", "prebuilt-layout", cancel_event=recording_event)

    def test_callback_errors_do_not_stop_polling(self, recording_event):
        engine = make_engine(running(), succeeded())
        poller = OperationPoller(engine)

        def broken(_status):
            raise RuntimeError("ui gone")

        assert poller.run(b"%PDF", "m", on_status=broken, cancel_event=recording_event) is RESULT


class TestFailedRun:
    def test_failed_raises_once_and_stops_polling(self, recording_event):
        engine = make_engine(
            running(),
            RemoteOperation(status="failed", error_code="InvalidContent", error_message="Corrupted"),
            running(),
        )
        poller = OperationPoller(engine, max_retries=2)

        with pytest.raises(AnalysisFailed) as exc_info:
            poller.run(b"%PDF", "prebuilt-layout", cancel_event=recording_event)

        assert exc_info.value.message == "Corrupted"
        assert exc_info.value.remote_code == "InvalidContent"
        assert engine.poll.call_count == 2
        assert engine.submit.call_count == 1

    def test_failed_without_message(self, recording_event):
        engine = make_engine(RemoteOperation(status="failed"))

        with pytest.raises(AnalysisFailed) as exc_info:
            OperationPoller(engine).run(b"%PDF", "m", cancel_event=recording_event)
        assert exc_info.value.message == "The analysis operation failed"


class TestRetries:
    def test_transient_errors_restart_with_backoff(self, recording_event):
        engine = make_engine(
            TransportError("reset"),
            TransportError("503", status_code=503),
            succeeded(),
        )
        poller = OperationPoller(engine, poll_interval=1.0, max_retries=2, retry_backoff=2.0)

        result = poller.run(b"%PDF", "m", cancel_event=recording_event)

        assert result is RESULT
        assert engine.submit.call_count == 3
        # poll wait, backoff 2 * 1, poll wait, backoff 2 * 2, poll wait
        assert recording_event.waits == [1.0, 2.0, 1.0, 4.0, 1.0]

    def test_gives_up_after_max_retries(self, recording_event):
        engine = make_engine(
            submit_side_effect=SubmissionError("busy", status_code=503),
        )
        poller = OperationPoller(engine, max_retries=2)

        with pytest.raises(SubmissionError):
            poller.run(b"%PDF", "m", cancel_event=recording_event)
        assert engine.submit.call_count == 3

    def test_permanent_error_is_not_retried(self, recording_event):
        engine = make_engine(submit_side_effect=NotConfigured("no endpoint"))

        with pytest.raises(NotConfigured):
            OperationPoller(engine).run(b"%PDF", "m", cancel_event=recording_event)
        assert engine.submit.call_count == 1

    def test_unreadable_result_is_not_resubmitted(self, recording_event):
        engine = make_engine(AnalysisFailed("Analysis result could not be read: bad page order"), succeeded())
        poller = OperationPoller(engine, max_retries=2)

        with pytest.raises(AnalysisFailed):
            poller.run(b"%PDF", "m", cancel_event=recording_event)
        assert engine.submit.call_count == 1

    def test_unknown_remote_status_is_wrapped(self, recording_event):
        engine = make_engine(RemoteOperation(status="paused"), succeeded())
        poller = OperationPoller(engine, max_retries=1)

        # The unknown status fails the first attempt; the second succeeds.
        assert poller.run(b"%PDF", "m", cancel_event=recording_event) is RESULT
        assert engine.submit.call_count == 2


class TestCancellation:
    def test_cancelled_before_start(self, make_event):
        event = make_event()
        event.set()
        engine = make_engine(succeeded())

        assert OperationPoller(engine).run(b"%PDF", "m", cancel_event=event) is None
        engine.submit.assert_not_called()

    def test_cancelled_while_polling(self, make_event):
        event = make_event(set_after=2)
        engine = make_engine(running(), running(), succeeded())
        statuses = []

        result = OperationPoller(engine).run(b"%PDF", "m", on_status=statuses.append, cancel_event=event)

        assert result is None
        assert engine.poll.call_count == 1
        assert [status.state for status in statuses] == [OperationState.SUBMITTED, OperationState.RUNNING]

    def test_cancelled_during_backoff(self, make_event):
        event = make_event(set_after=2)
        engine = make_engine(TransportError("reset"), succeeded())

        assert OperationPoller(engine).run(b"%PDF", "m", cancel_event=event) is None
        assert engine.submit.call_count == 1
