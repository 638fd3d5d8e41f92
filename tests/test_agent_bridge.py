"""
Tests for the agent executor bridge: local responders and worker processes
"""
import asyncio
import json
import os
import shlex
import sys

import pytest
from pydantic import ValidationError

from backend.app.core.config import Settings
from backend.app.core.exceptions import ExecutorErrorCode
from backend.app.services.agent_bridge import (
    LocalAgentExecutor,
    ProcessAgentExecutor,
    create_executor,
)


def invoke(executor, agent_type="usage", session_id="s1", message="How do I create a skill?"):
    return asyncio.run(executor.invoke(agent_type, session_id, message))


# Local executor

def test_local_executor_uses_responder():
    executor = LocalAgentExecutor(responder=lambda agent_type, message: f"{agent_type}: {message}")

    result = invoke(executor, message="hi")

    assert result.response == "usage: hi"
    assert result.error is None
    assert result.session_id == "s1"
    assert result.agent_type == "usage"


def test_local_executor_default_responder():
    result = invoke(LocalAgentExecutor())
    assert "Skill" in result.response
    assert not result.failed


def test_local_executor_turns_exceptions_into_errors():
    def broken(agent_type, message):
        raise RuntimeError("template missing")

    result = invoke(LocalAgentExecutor(responder=broken))

    assert result.failed
    assert "template missing" in result.error
    assert result.response == ""
    assert result.error_code == ExecutorErrorCode.AGENT_ERROR.value


def test_local_executor_is_available():
    assert asyncio.run(LocalAgentExecutor().check_available()) is True


# Process executor

def test_worker_receives_contract_arguments(worker):
    executor = worker("""
        import json, sys
        print(json.dumps({"session_id": "s1", "agent_type": "usage", "response": json.dumps(sys.argv[1:])}))
    """)

    result = invoke(executor, message="How do I create a skill?")

    assert json.loads(result.response) == [
        "--agent=usage",
        "--session=s1",
        "--message=How do I create a skill?",
        "--format=json",
    ]


def test_message_that_looks_like_an_option_reaches_worker(worker):
    executor = worker("""
        import argparse, json
        parser = argparse.ArgumentParser()
        for flag in ("--agent", "--session", "--message", "--format"):
            parser.add_argument(flag)
        args = parser.parse_args()
        print(json.dumps({"response": args.message}))
    """)

    for message in ("-h", "--help", "-v"):
        result = invoke(executor, message=message)
        assert result.error is None
        assert result.response == message


def test_message_with_nul_byte_is_a_launch_failure(worker):
    executor = worker("""
        print("unreachable")
    """)

    result = invoke(executor, message="hi\x00there")

    assert result.failed
    assert result.response == ""
    assert result.error.startswith("Failed to invoke agent")
    assert result.error_code == ExecutorErrorCode.LAUNCH_FAILURE.value


def test_worker_json_result_is_parsed(worker):
    executor = worker("""
        import json
        print(json.dumps({"session_id": "s1", "agent_type": "usage", "response": "## Skills"}))
    """)

    result = invoke(executor)

    assert result.response == "## Skills"
    assert result.error is None


def test_worker_result_missing_ids_uses_request_values(worker):
    executor = worker("""
        import json
        print(json.dumps({"response": "ok"}))
    """)

    result = invoke(executor, agent_type="docs", session_id="abc")

    assert result.response == "ok"
    assert result.session_id == "abc"
    assert result.agent_type == "docs"


def test_worker_non_json_output_is_used_as_response(worker):
    executor = worker("""
        print("hello")
    """)

    result = invoke(executor)

    assert result.response == "hello"
    assert result.error is None


def test_worker_json_that_is_not_a_result_is_used_as_text(worker):
    executor = worker("""
        print('["not", "a", "result"]')
    """)

    result = invoke(executor)

    assert result.response == '["not", "a", "result"]'
    assert result.error is None


def test_worker_non_zero_exit_is_an_error(worker):
    executor = worker("""
        import sys
        print("partial output")
        sys.stderr.write("engine crashed")
        sys.exit(3)
    """)

    result = invoke(executor)

    assert result.response == ""
    assert result.error
    assert "3" in result.error
    assert "engine crashed" in result.error
    assert result.error_code == ExecutorErrorCode.NON_ZERO_EXIT.value


def test_worker_reported_error_discards_response(worker):
    executor = worker("""
        import json
        print(json.dumps({"session_id": "s1", "agent_type": "usage", "response": "half", "error": "graph failed"}))
    """)

    result = invoke(executor)

    assert result.failed
    assert result.error == "graph failed"
    assert result.response == ""


def test_worker_stderr_does_not_leak_into_response(worker):
    executor = worker("""
        import json, sys
        sys.stderr.write("debug: building graph\\n")
        print(json.dumps({"response": "clean"}))
    """)

    assert invoke(executor).response == "clean"


def sleeper(pid_file):
    """Worker source that records its PID and then hangs"""
    return f"""
        import os, time
        with open({str(pid_file)!r}, "w") as f:
            f.write(str(os.getpid()))
        time.sleep(30)
    """


def pid_alive(pid):
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    return True


def test_worker_timeout_kills_process(worker, tmp_path):
    pid_file = tmp_path / "worker.pid"
    executor = worker(sleeper(pid_file), timeout=3.0)

    result = invoke(executor)

    assert result.failed
    assert result.response == ""
    assert "timed out" in result.error
    assert result.error_code == ExecutorErrorCode.TIMEOUT.value
    assert not pid_alive(int(pid_file.read_text()))


def test_cancelled_invoke_kills_process(worker, tmp_path):
    pid_file = tmp_path / "worker.pid"
    executor = worker(sleeper(pid_file), timeout=30.0)

    async def run():
        task = asyncio.create_task(executor.invoke("usage", "s1", "hi"))
        for _ in range(200):
            if pid_file.exists() and pid_file.read_text():
                break
            await asyncio.sleep(0.05)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run())

    assert not pid_alive(int(pid_file.read_text()))


def test_non_executable_worker_is_a_launch_failure(tmp_path):
    script = tmp_path / "wxorca-cli"
    script.write_text("#!/bin/sh\necho hello\n")
    script.chmod(0o644)

    result = invoke(ProcessAgentExecutor(command=[str(script)]))

    assert result.failed
    assert result.error.startswith("Failed to invoke agent")
    assert result.error_code == ExecutorErrorCode.LAUNCH_FAILURE.value


def test_missing_worker_binary_is_a_launch_failure():
    executor = ProcessAgentExecutor(command=["/nonexistent/wxorca-cli"])

    result = invoke(executor)

    assert result.failed
    assert result.response == ""
    assert result.error.startswith("Failed to invoke agent")
    assert result.error_code == ExecutorErrorCode.LAUNCH_FAILURE.value


def test_check_available(worker):
    assert asyncio.run(worker("import sys; sys.exit(0)").check_available()) is True
    assert asyncio.run(worker("import sys; sys.exit(1)").check_available()) is False
    assert asyncio.run(ProcessAgentExecutor(command=["/nonexistent/wxorca-cli"]).check_available()) is False


def test_empty_command_is_rejected():
    with pytest.raises(ValueError):
        ProcessAgentExecutor(command=[])


# Strategy selection

def test_create_executor_local():
    executor = create_executor(Settings(AGENT_EXECUTOR="local"))
    assert isinstance(executor, LocalAgentExecutor)


def test_create_executor_process():
    settings = Settings(
        AGENT_EXECUTOR="process",
        AGENT_CLI_COMMAND=f"{shlex.quote(sys.executable)} -m backend.cli",
        AGENT_TIMEOUT_SECONDS=12,
    )

    executor = create_executor(settings)

    assert isinstance(executor, ProcessAgentExecutor)
    assert executor.command == [sys.executable, "-m", "backend.cli"]
    assert executor.timeout == 12


def test_create_executor_rejects_unknown_kind():
    with pytest.raises(ValueError):
        create_executor(Settings(AGENT_EXECUTOR="remote"))


@pytest.mark.parametrize("field", ["AGENT_TIMEOUT_SECONDS", "AGENT_HEALTHCHECK_TIMEOUT_SECONDS"])
@pytest.mark.parametrize("value", [0, -5])
def test_timeouts_must_be_positive(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})
