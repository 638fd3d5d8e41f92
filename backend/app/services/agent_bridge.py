"""
Agent executor bridge.

Turns an (agent type, session id, message) invocation into a reply from one
of two interchangeable executors:

    LocalAgentExecutor    calls an in-process responder function
    ProcessAgentExecutor  spawns the external agent worker and reads one JSON
                          object from its stdout

Both return an AgentResult for every outcome. Failures are reported in
``AgentResult.error``; ``invoke`` does not raise for agent failures.

The executor is chosen once at startup with ``create_executor(settings)``.
"""
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from pydantic import ValidationError

from backend.app.agents.responders import respond
from backend.app.core.exceptions import ExecutorErrorCode
from backend.app.schemas.schemas import AgentResult

logger = logging.getLogger(__name__)

EXECUTOR_LOCAL = "local"
EXECUTOR_PROCESS = "process"


class AgentExecutor(ABC):
    """Base class for all agent executors"""

    name = "base"

    @abstractmethod
    async def invoke(self, agent_type: str, session_id: str, message: str) -> AgentResult:
        """Produce a reply for ``message``. Never raises for agent failures."""
        pass

    async def check_available(self) -> bool:
        """Whether the executor can currently serve requests"""
        return True


class LocalAgentExecutor(AgentExecutor):
    """Runs a responder function in-process"""

    name = EXECUTOR_LOCAL

    def __init__(self, responder: Callable[[str, str], str] = respond):
        self.responder = responder

    async def invoke(self, agent_type: str, session_id: str, message: str) -> AgentResult:
        try:
            response = self.responder(agent_type, message)
        except Exception as e:
            logger.exception(f"Local responder failed for agent '{agent_type}'")
            return AgentResult.failure(
                session_id, agent_type,
                f"Agent execution failed: {e}",
                ExecutorErrorCode.AGENT_ERROR.value,
            )

        return AgentResult(session_id=session_id, agent_type=agent_type, response=response)


class ProcessAgentExecutor(AgentExecutor):
    """
    Spawns the agent worker once per message.

        <command> --agent=<id> --session=<sid> --message=<text> --format=json
        <command> --agent <id> --session <sid> --message <text> --format json

    The worker prints exactly one AgentResult JSON object on stdout and exits
    0. Anything diagnostic goes to stderr.
    """

    name = EXECUTOR_PROCESS

    def __init__(
        self,
        command: Sequence[str],
        cwd: Optional[str] = None,
        timeout_seconds: float = 60.0,
        healthcheck_timeout_seconds: float = 5.0,
    ):
        if not command:
            raise ValueError("Agent worker command must not be empty")
        self.command = list(command)
        self.cwd = cwd
        self.timeout = timeout_seconds
        self.healthcheck_timeout = healthcheck_timeout_seconds

    def build_args(self, agent_type: str, session_id: str, message: str) -> List[str]:
        # --opt=value so values starting with "-" are not read as options
        return self.command + [
            f"--agent={agent_type}",
            f"--session={session_id}",
            f"--message={message}",
            "--format=json",
        ]

    async def invoke(self, agent_type: str, session_id: str, message: str) -> AgentResult:
        args = self.build_args(agent_type, session_id, message)

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd,
            )
        except (OSError, ValueError) as e:
            logger.error(f"Failed to spawn agent process {self.command[0]}: {e}")
            return AgentResult.failure(
                session_id, agent_type,
                f"Failed to invoke agent: {e}",
                ExecutorErrorCode.LAUNCH_FAILURE.value,
            )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            await self._terminate(process)
            logger.error(f"Agent process timed out after {self.timeout}s (session {session_id})")
            return AgentResult.failure(
                session_id, agent_type,
                f"Agent process timed out after {self.timeout:g} seconds",
                ExecutorErrorCode.TIMEOUT.value,
            )
        except asyncio.CancelledError:
            await self._terminate(process)
            raise

        output = stdout.decode("utf-8", errors="replace").strip()
        errors = stderr.decode("utf-8", errors="replace").strip()

        if process.returncode != 0:
            logger.error(f"Agent process exited with code {process.returncode}: {errors}")
            return AgentResult.failure(
                session_id, agent_type,
                f"Agent process exited with code {process.returncode}: {errors}",
                ExecutorErrorCode.NON_ZERO_EXIT.value,
            )

        if errors:
            logger.debug(f"Agent process stderr: {errors}")

        return self.parse_output(output, agent_type, session_id)

    @staticmethod
    def parse_output(output: str, agent_type: str, session_id: str) -> AgentResult:
        """
        Read the worker's stdout.

        Output that is not an AgentResult object is used as the reply text.
        """
        try:
            payload = json.loads(output)
        except json.JSONDecodeError:
            logger.warning("Agent output is not JSON, using raw text as the response")
            return AgentResult(session_id=session_id, agent_type=agent_type, response=output)

        if not isinstance(payload, dict) or not ({"response", "error"} & payload.keys()):
            logger.warning("Agent output is not an agent result object, using raw text as the response")
            return AgentResult(session_id=session_id, agent_type=agent_type, response=output)

        payload.setdefault("session_id", session_id)
        payload.setdefault("agent_type", agent_type)
        payload.pop("error_code", None)
        try:
            result = AgentResult.model_validate(payload)
        except ValidationError:
            logger.warning("Agent result object has unexpected field types, using raw text as the response")
            return AgentResult(session_id=session_id, agent_type=agent_type, response=output)

        if result.error:
            return AgentResult.failure(
                result.session_id, result.agent_type, result.error,
                ExecutorErrorCode.AGENT_ERROR.value,
            )
        return result

    async def check_available(self) -> bool:
        """Run ``<command> --help`` and report whether it exits cleanly"""
        try:
            process = await asyncio.create_subprocess_exec(
                *self.command, "--help",
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
                cwd=self.cwd,
            )
        except OSError as e:
            logger.warning(f"Agent worker not runnable: {e}")
            return False

        try:
            returncode = await asyncio.wait_for(process.wait(), timeout=self.healthcheck_timeout)
        except asyncio.TimeoutError:
            await self._terminate(process)
            logger.warning("Agent worker --help timed out")
            return False

        return returncode == 0

    @staticmethod
    async def _terminate(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()


def create_executor(settings) -> AgentExecutor:
    """Build the executor named by ``settings.AGENT_EXECUTOR``"""
    kind = settings.AGENT_EXECUTOR.strip().lower()

    if kind == EXECUTOR_LOCAL:
        return LocalAgentExecutor()

    if kind == EXECUTOR_PROCESS:
        return ProcessAgentExecutor(
            command=settings.agent_command,
            cwd=settings.AGENT_CLI_CWD,
            timeout_seconds=settings.AGENT_TIMEOUT_SECONDS,
            healthcheck_timeout_seconds=settings.AGENT_HEALTHCHECK_TIMEOUT_SECONDS,
        )

    raise ValueError(f"Unknown AGENT_EXECUTOR '{settings.AGENT_EXECUTOR}' (expected 'local' or 'process')")
