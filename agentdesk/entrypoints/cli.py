from __future__ import annotations

import argparse
import json
import sys
import uuid
from typing import List, Optional

from agentdesk.memory.file_store import FileBackedMessageStore
from agentdesk.memory.session_store import InMemoryMessageStore, MessageStore
from agentdesk.schemas.errors import AgentDeskError
from agentdesk.schemas.messages import Role, ToolCall, Turn
from agentdesk.telemetry.logging import setup_logging
from agentdesk.tools.catalog import ToolServices, build_registry
from agentdesk.tools.registry import ToolRegistry
from agentdesk.utils.settings import AppConfig, load_config
from agentdesk.workflows.orchestrator import SessionOrchestrator


def build_store(config: AppConfig) -> MessageStore:
    if config.storage.backend == "file":
        return FileBackedMessageStore(config.storage.root)
    return InMemoryMessageStore()


def build_orchestrator(config: AppConfig, registry: Optional[ToolRegistry] = None) -> SessionOrchestrator:
    registry = registry or build_registry(ToolServices(sourcing_mode=config.tools.sourcing_mode))
    return SessionOrchestrator(
        store=build_store(config),
        tool_invoker=registry,
        context_character_limit=config.session.context_character_limit,
        max_summary_rounds=config.session.max_summary_rounds,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Send a turn to a task session and print its history.")
    parser.add_argument("content", nargs="?", default="", help="Turn text.")
    parser.add_argument("--task-id", default=None, help="Task identifier (new task when omitted).")
    parser.add_argument("--role", default=Role.USER.value, choices=[role.value for role in Role])
    parser.add_argument("--tool", default=None, help="Tool to invoke with this turn.")
    parser.add_argument("--args", default="{}", help="Tool arguments as a JSON object.")
    parser.add_argument("--list-tools", action="store_true", help="Print the tool catalog and exit.")
    parser.add_argument("--env", default="base", help="Config environment (base, dev, prod, ...).")
    args = parser.parse_args(argv)

    config = load_config(args.env)
    setup_logging(config.logging.level)
    registry = build_registry(ToolServices(sourcing_mode=config.tools.sourcing_mode))

    if args.list_tools:
        for descriptor in registry.descriptors():
            params = ", ".join(
                f"{p.name}:{p.kind.value}{'' if p.required else '?'}" for p in descriptor.parameters
            )
            print(f"{descriptor.name}({params}) - {descriptor.summary}")
        return 0

    try:
        tool_call = None
        if args.tool:
            arguments = json.loads(args.args)
            if not isinstance(arguments, dict):
                print("--args must be a JSON object", file=sys.stderr)
                return 2
            tool_call = ToolCall(name=args.tool, arguments=arguments)
        orchestrator = build_orchestrator(config, registry)
        turn = Turn(
            task_id=args.task_id or str(uuid.uuid4()),
            role=Role(args.role),
            content=args.content,
            tool_call=tool_call,
        )
        orchestrator.send(turn)
    except json.JSONDecodeError as exc:
        print(f"--args is not valid JSON: {exc}", file=sys.stderr)
        return 2
    except AgentDeskError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for stored in orchestrator.history(turn.task_id):
        print(f"\n[{stored.role.value}] {stored.timestamp.isoformat()}\n{stored.content}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
