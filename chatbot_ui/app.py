"""
Main Chainlit Application for the MedInfo medicine assistant.

Provides a web-based chat UI with starter prompts, medicine cards and
image upload acknowledgement.

To run the application:
    chainlit run chatbot_ui/app.py
"""

import sys
from pathlib import Path

# Add project root to Python path so chainlit can import medinfo from a checkout
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import chainlit as cl  # noqa: E402
from medinfo.logs import get_component_logger  # noqa: E402
from medinfo.models import Role  # noqa: E402
from chatbot_ui.chat_handler import ChainlitChatHandler  # noqa: E402
from chatbot_ui.starter_prompts import get_starter_prompts  # noqa: E402
from chatbot_ui.config import (  # noqa: E402
    ERROR_MESSAGE_INITIALIZATION,
    ERROR_MESSAGE_SESSION_NOT_READY,
)


# Initialize global components
logger = get_component_logger("ChainlitUI")
chat_handler = ChainlitChatHandler()


@cl.set_starters
async def set_starters():
    """
    Set starter prompts for the chat interface.
    """
    return get_starter_prompts()


@cl.on_chat_start
async def on_chat_start():
    """
    Create the conversation session and show the welcome message.
    """
    try:
        session = chat_handler.create_session()
    except Exception as e:
        logger.error(
            "Failed to initialize chat session",
            component="ChainlitUI",
            subcomponent="OnChatStart",
            error=str(e),
            error_type=type(e).__name__,
        )
        await cl.Message(content=ERROR_MESSAGE_INITIALIZATION).send()
        return

    cl.user_session.set("conversation", session)

    welcome = session.transcript[0]
    if welcome.role == Role.ASSISTANT:
        await cl.Message(content=welcome.content).send()

    logger.info(
        "Chat session ready",
        component="ChainlitUI",
        subcomponent="OnChatStart",
        chat_id=cl.user_session.get("id"),
    )


@cl.on_message
async def on_message(message: cl.Message):
    """
    Handle incoming user messages.

    Args:
        message: The user's message from Chainlit.
    """
    session = cl.user_session.get("conversation")

    logger.info(
        "Received user message",
        component="ChainlitUI",
        subcomponent="OnMessage",
        chat_id=cl.user_session.get("id"),
        message_length=len(message.content or ""),
        attachment_count=len(message.elements or []),
    )

    if session is None:
        await cl.Message(content=ERROR_MESSAGE_SESSION_NOT_READY).send()
        return

    await chat_handler.handle_message(session, message)


@cl.on_chat_end
async def on_chat_end():
    logger.info(
        "Chat session ended",
        component="ChainlitUI",
        subcomponent="OnChatEnd",
        chat_id=cl.user_session.get("id"),
    )
