#!/usr/bin/env python3
"""
WXOrca agent worker CLI.

Implements the worker side of the process executor contract:

    wxorca-cli --agent usage --session s1 --message "How do I create a skill?" --format json

prints exactly one JSON object on stdout:

    {"session_id": "s1", "agent_type": "usage", "response": "..."}

Without --message the worker reads stdin line by line. A line may be a JSON
object ``{"message": ..., "session_id": ...}`` or plain text, and one result
is written per line. Logging goes to stderr only.
"""
import argparse
import json
import logging
import sys
import uuid
from typing import Iterable, Iterator, Optional, TextIO, Tuple

from backend.app.agents.catalog import agent_ids, resolve_agent_id
from backend.app.agents.responders import respond
from backend.app.core.exceptions import ExecutorErrorCode
from backend.app.schemas.schemas import AgentResult

logger = logging.getLogger("wxorca.cli")


def agent_type_arg(value: str) -> str:
    agent_id = resolve_agent_id(value)
    if agent_id is None:
        raise argparse.ArgumentTypeError(
            f"unknown agent type '{value}' (choose from {', '.join(agent_ids())})"
        )
    return agent_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wxorca-cli",
        description="WXOrca - AI-powered guide for IBM WatsonX Orchestrate",
    )
    parser.add_argument(
        "-a", "--agent", required=True, type=agent_type_arg,
        help="The type of agent to use",
    )
    parser.add_argument(
        "-s", "--session", help="Session ID for the conversation",
    )
    parser.add_argument(
        "-m", "--message",
        help="Single message to process (if not provided, reads messages from stdin)",
    )
    parser.add_argument(
        "-f", "--format", choices=["json", "text"], default="json", help="Output format",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging",
    )
    return parser


def process_message(agent_type: str, session_id: Optional[str], message: str) -> AgentResult:
    session_id = session_id or str(uuid.uuid4())
    logger.debug(f"Processing message for agent '{agent_type}', session {session_id}")

    try:
        response = respond(agent_type, message)
    except Exception as e:
        logger.exception("Agent execution failed")
        return AgentResult.failure(
            session_id, agent_type, f"Agent execution failed: {e}",
            ExecutorErrorCode.AGENT_ERROR.value,
        )

    return AgentResult(session_id=session_id, agent_type=agent_type, response=response)


def output_response(result: AgentResult, output_format: str, out: TextIO = None, err: TextIO = None) -> None:
    out = out or sys.stdout
    err = err or sys.stderr

    if output_format == "json":
        print(json.dumps(result.model_dump(exclude_none=True)), file=out)
    elif result.error:
        print(f"Error: {result.error}", file=err)
    else:
        print(result.response, file=out)


def read_messages(lines: Iterable[str], default_session: Optional[str]) -> Iterator[Tuple[str, Optional[str]]]:
    """Yield (message, session_id) pairs from interactive input"""
    for line in lines:
        line = line.strip()
        if not line:
            continue

        try:
            payload = json.loads(line)
        except json.JSONDecodeError:
            payload = None

        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            yield payload["message"], payload.get("session_id") or default_session
        else:
            yield line, default_session


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.message is not None:
        result = process_message(args.agent, args.session, args.message)
        output_response(result, args.format)
        return 0

    for message, session_id in read_messages(sys.stdin, args.session):
        result = process_message(args.agent, session_id, message)
        output_response(result, args.format)
        sys.stdout.flush()

    return 0


if __name__ == "__main__":
    sys.exit(main())
