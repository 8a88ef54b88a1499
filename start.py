"""Terminal chat loop for the route assistant.

Type a travel request and the assistant answers in the same session
until you say goodbye or press Ctrl-D. Use --ui to start the Gradio app
instead.
"""

from __future__ import annotations

import argparse
import subprocess
import sys
import uuid
from pathlib import Path

from route_assistant.container import get_container
from route_assistant.domain.errors import AssistantError
from route_assistant.domain.models import DecisionKind
from route_assistant.logging_setup import configure_logging
from route_assistant.ports.rendering import DecisionRendererPort
from route_assistant.services import DialogueOrchestrator


def run_ui() -> None:
    project_root = Path(__file__).resolve().parent
    script_path = project_root / "apps" / "chat_app.py"
    if not script_path.exists():
        print(f"Cannot find {script_path.relative_to(project_root)}.")
        sys.exit(1)

    cmd = [sys.executable, str(script_path)]
    print(f"Launching apps/chat_app.py with: {' '.join(cmd)}")
    subprocess.run(cmd, check=False)


def run_chat(session_id: str) -> None:
    container = get_container()
    orchestrator: DialogueOrchestrator = container.resolve(DialogueOrchestrator)
    renderer: DecisionRendererPort = container.resolve(DecisionRendererPort)

    print("=== Route Assistant === (Ctrl-D to quit)")
    while True:
        try:
            message = input("you> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not message:
            continue

        try:
            result = orchestrator.process_message(session_id, message)
        except AssistantError as e:
            print(f"assistant> ⚠️ {e}")
            continue

        print(f"assistant> {renderer.render(result.decision)}\n")
        if result.decision.kind is DecisionKind.GOODBYE:
            break


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat with the route assistant.")
    parser.add_argument("--ui", action="store_true", help="start the Gradio app instead")
    parser.add_argument("--session", default=None, help="session id (random by default)")
    args = parser.parse_args()

    if args.ui:
        run_ui()
        return

    configure_logging()
    run_chat(args.session or uuid.uuid4().hex)


if __name__ == "__main__":
    main()
