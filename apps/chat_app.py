import uuid
from typing import Any, Dict, List, Tuple

import gradio as gr

from route_assistant.container import get_container
from route_assistant.domain.errors import AssistantError
from route_assistant.logging_setup import configure_logging
from route_assistant.ports.rendering import DecisionRendererPort
from route_assistant.services import DialogueOrchestrator

configure_logging()

container = get_container()
orchestrator: DialogueOrchestrator = container.resolve(DialogueOrchestrator)
renderer: DecisionRendererPort = container.resolve(DecisionRendererPort)

EXAMPLES = [
    "Hi!",
    "Find a train from Mumbai to Pune tomorrow morning",
    "Show me buses from Bangalore to Chennai",
    "What's the cheapest way to get from Mumbai to Goa?",
    "compare",
    "I'll take option 2",
]

ChatHistory = List[Dict[str, str]]


def _new_session_id() -> str:
    return uuid.uuid4().hex


def respond(
    message: str, history: ChatHistory, session_id: str
) -> Tuple[ChatHistory, Dict[str, Any], str]:
    if not message or not message.strip():
        return history, {}, ""

    try:
        result = orchestrator.process_message(session_id, message)
        reply = renderer.render(result.decision)
        metadata = result.metadata
    except AssistantError as e:
        reply = f"⚠️ {e.message}"
        metadata = {"error": str(e)}

    history = history + [
        {"role": "user", "content": message},
        {"role": "assistant", "content": reply},
    ]
    return history, metadata, ""


def reset_conversation(session_id: str) -> Tuple[ChatHistory, Dict[str, Any], str]:
    orchestrator.clear_session(session_id)
    return [], {}, _new_session_id()


# ============================ UI ============================
with gr.Blocks(title="Route Assistant") as app:
    gr.Markdown(
        """
# 🚂🚌 Route Assistant
✔ Bus and train routes between Indian cities
✔ Remembers your trip across messages
"""
    )

    session_state = gr.State(_new_session_id)

    with gr.Row():
        with gr.Column(scale=3):
            chatbot = gr.Chatbot(type="messages", height=520, label="💬 Conversation")
            text_input = gr.Textbox(
                label="📝 Message",
                lines=1,
                placeholder="Where would you like to travel?",
            )
            with gr.Row():
                btn_send = gr.Button("🚀 Send", variant="primary")
                btn_clear = gr.Button("🧹 New conversation")
        with gr.Column(scale=2):
            metadata_view = gr.JSON(label="🔎 Intent & entities")

    gr.Examples(examples=EXAMPLES, inputs=text_input)

    btn_send.click(
        respond,
        inputs=[text_input, chatbot, session_state],
        outputs=[chatbot, metadata_view, text_input],
    )
    text_input.submit(
        respond,
        inputs=[text_input, chatbot, session_state],
        outputs=[chatbot, metadata_view, text_input],
    )
    btn_clear.click(
        reset_conversation,
        inputs=session_state,
        outputs=[chatbot, metadata_view, session_state],
    )

if __name__ == "__main__":
    app.launch()
