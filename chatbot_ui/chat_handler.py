"""
Chat Handler for Chainlit UI.

Bridges the Chainlit UI with the medinfo ConversationSession: user input is
submitted to the session, and a session observer mirrors appended assistant
messages and the pending indicator into the Chainlit chat.
"""

from typing import List, Optional

import chainlit as cl

from medinfo.config import Settings, get_settings
from medinfo.core import (
    ConversationSession,
    SessionBusyError,
    SessionObserver,
    TurnState,
    create_router,
)
from medinfo.core.responses import BUSY_REPLY
from medinfo.logs import get_component_logger
from medinfo.models import Message, Role
from chatbot_ui.config import PENDING_INDICATOR, SHOW_MEDICINE_IMAGES
from chatbot_ui.medicine_card_formatter import MedicineCardFormatter


class ChainlitSessionObserver(SessionObserver):
    """
    Mirrors session changes into the Chainlit chat.

    User messages are not echoed; Chainlit already shows what the user sent.
    """

    def __init__(self, card_formatter: Optional[MedicineCardFormatter] = None):
        self.card_formatter = card_formatter or MedicineCardFormatter()
        self.pending_message: Optional[cl.Message] = None

    async def on_message_appended(self, message: Message) -> None:
        if message.role != Role.ASSISTANT:
            return

        content = message.content
        elements = []
        if message.attached_record is not None:
            content += self.card_formatter.format_card(message.attached_record)
            if SHOW_MEDICINE_IMAGES:
                elements = self.card_formatter.create_card_elements(message.attached_record)

        await cl.Message(content=content, elements=elements).send()

    async def on_state_changed(self, state: TurnState) -> None:
        if state == TurnState.AWAITING_RESPONSE:
            if self.pending_message is None:
                self.pending_message = cl.Message(content=PENDING_INDICATOR)
                await self.pending_message.send()
            return

        if self.pending_message is not None:
            pending, self.pending_message = self.pending_message, None
            await pending.remove()


class ChainlitChatHandler:
    """
    Handles chat message processing for the Chainlit UI.

    One ConversationSession is created per connected chat and kept in the
    Chainlit user session by the app module.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the chat handler.

        Args:
            settings: Application settings; the global instance when omitted.
        """
        self.settings = settings or get_settings()
        self.logger = get_component_logger("ChainlitChatHandler")

    def create_session(self) -> ConversationSession:
        """Build a new conversation session wired to the Chainlit chat."""
        return ConversationSession(
            create_router(self.settings),
            follow_up_delay=self.settings.follow_up_delay_seconds,
            image_ack_delay=self.settings.image_ack_delay_seconds,
            observers=[ChainlitSessionObserver()],
        )

    async def handle_message(
        self, session: ConversationSession, message: cl.Message
    ) -> List[Message]:
        """
        Submit a Chainlit message (text and image attachments) to the session.

        Args:
            session: The chat's conversation session.
            message: The user's message from Chainlit.

        Returns:
            Messages appended to the transcript by this call.
        """
        appended: List[Message] = []
        try:
            if message.content and message.content.strip():
                appended.extend(await session.submit(message.content))

            for filename in self.image_filenames(message):
                appended.extend(await session.upload_image(filename))

        except SessionBusyError:
            self.logger.warning(
                "Message rejected while a turn is in flight",
                component="ChainlitChatHandler",
                subcomponent="HandleMessage",
            )
            await cl.Message(content=BUSY_REPLY).send()

        return appended

    @staticmethod
    def image_filenames(message: cl.Message) -> List[str]:
        """Names of the image attachments on a Chainlit message."""
        names = []
        for element in message.elements or []:
            mime = getattr(element, "mime", None) or ""
            if mime.startswith("image/"):
                names.append(element.name)
        return names
