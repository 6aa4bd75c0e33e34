from datetime import datetime, timezone

import pytest

from logcodec.events import ExceptionEvent, Frame, SQLQueryEvent
from logcodec.log_entry import build_log_entry


@pytest.fixture
def crash_report():
    return (
        "12:01:33.201 [error] Task #PID<0.330.0> started from MyApp.Supervisor terminating\n"
        "** (RuntimeError) boom\n"
        "    (myapp) lib/my_app/worker.ex:42: MyApp.Worker.run/1\n"
        "    (elixir) lib/task/supervised.ex:85: Task.Supervised.do_apply/2\n"
        "    (stdlib) proc_lib.erl:247: :proc_lib.init_p_do_apply/3\n"
    )


@pytest.fixture
def timestamp():
    return datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def exception_event():
    return ExceptionEvent(
        name="RuntimeError",
        message="boom",
        backtrace=(
            Frame(function="MyApp.Worker.run/1", file="lib/my_app/worker.ex", line=42, app_name="myapp"),
        ),
    )


@pytest.fixture
def sql_entry(timestamp):
    return build_log_entry(
        timestamp,
        "info",
        "Query finished",
        {"context": {"request_id": "req-001"}, "event": SQLQueryEvent(sql="SELECT 1", time_ms=2.5)},
    )


@pytest.fixture
def bare_entry(timestamp):
    return build_log_entry(timestamp, "debug", "nothing attached")
