"""
Conversation session state.

A session owns the append-only transcript and the turn state for one chat.
The pending indicator is derived from the turn state, so at most one is
ever shown and it disappears as soon as the turn resolves.
"""

import asyncio
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from medinfo.core.exceptions import SessionBusyError
from medinfo.core.responses import (
    IMAGE_UPLOAD_ACK,
    TRANSPORT_ERROR_REPLY,
    WELCOME_MESSAGE,
    image_upload_text,
)
from medinfo.core.router import ConversationRouter
from medinfo.logs import bind_turn, get_component_logger
from medinfo.models import Message


class TurnState(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class SessionObserver:
    """Receives transcript and turn-state changes. Override what you need."""

    async def on_message_appended(self, message: Message) -> None:
        pass

    async def on_state_changed(self, state: TurnState) -> None:
        pass


class ConversationSession:
    """
    One chat conversation.

    Turns are processed one at a time; submitting while a turn is in flight
    raises SessionBusyError and leaves the transcript untouched.
    """

    def __init__(
        self,
        router: ConversationRouter,
        follow_up_delay: float = 0.5,
        image_ack_delay: float = 0.8,
        observers: Optional[Iterable[SessionObserver]] = None,
    ):
        self.router = router
        self.follow_up_delay = follow_up_delay
        self.image_ack_delay = image_ack_delay
        self.observers: List[SessionObserver] = list(observers or [])
        self.logger = get_component_logger("ConversationSession")

        self._messages: List[Message] = [Message.assistant(WELCOME_MESSAGE)]
        self._state = TurnState.IDLE
        self._in_flight = False

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def busy(self) -> bool:
        """True from the moment input is accepted until its last reply is appended."""
        return self._in_flight

    @property
    def transcript(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def display_messages(self) -> Tuple[Message, ...]:
        """Transcript plus the pending indicator while a turn is awaiting."""
        if self._state == TurnState.AWAITING_RESPONSE:
            return tuple(self._messages) + (Message.pending(),)
        return tuple(self._messages)

    def add_observer(self, observer: SessionObserver) -> None:
        self.observers.append(observer)

    async def submit(self, text: str) -> List[Message]:
        """
        Process one user turn.

        Appends the user message, waits for the router, then appends the
        replies. Follow-up replies are spaced by follow_up_delay. The turn
        state is back to IDLE before the first reply is appended.

        Returns:
            The messages appended by this turn, user message first.

        Raises:
            SessionBusyError: If a turn is already in flight
        """
        self._ensure_idle()
        self._in_flight = True
        try:
            return await self._run_turn(text)
        finally:
            self._in_flight = False

    async def _run_turn(self, text: str) -> List[Message]:
        user_message = Message.user(text)
        appended = [user_message]
        await self._append(user_message)
        await self._set_state(TurnState.AWAITING_RESPONSE)

        try:
            with bind_turn(turn_id=user_message.id):
                replies = await self.router.route(text, self.transcript)
        except Exception as e:
            self.logger.error(
                "Routing failed",
                component="ConversationSession",
                subcomponent="Submit",
                turn_id=user_message.id,
                error=str(e),
                exc_info=True,
            )
            replies = []
        finally:
            await self._set_state(TurnState.IDLE)

        if not replies:
            replies = [Message.assistant(TRANSPORT_ERROR_REPLY)]

        for index, reply in enumerate(replies):
            if index > 0 and self.follow_up_delay > 0:
                await asyncio.sleep(self.follow_up_delay)
            await self._append(reply)
            appended.append(reply)

        return appended

    async def upload_image(self, filename: str) -> List[Message]:
        """
        Record an image upload and acknowledge it.

        The image itself is not analysed.

        Raises:
            SessionBusyError: If a turn is already in flight
        """
        self._ensure_idle()
        self._in_flight = True
        try:
            return await self._acknowledge_image(filename)
        finally:
            self._in_flight = False

    async def _acknowledge_image(self, filename: str) -> List[Message]:
        upload_message = Message.user(image_upload_text(filename))
        await self._append(upload_message)
        await self._set_state(TurnState.AWAITING_RESPONSE)

        try:
            if self.image_ack_delay > 0:
                await asyncio.sleep(self.image_ack_delay)
        finally:
            await self._set_state(TurnState.IDLE)

        ack = Message.assistant(IMAGE_UPLOAD_ACK)
        await self._append(ack)

        self.logger.info(
            "Image upload acknowledged",
            component="ConversationSession",
            subcomponent="UploadImage",
            filename=filename,
        )
        return [upload_message, ack]

    def _ensure_idle(self) -> None:
        if self._in_flight:
            self.logger.warning(
                "Rejected input while a turn is in flight",
                component="ConversationSession",
                subcomponent="Submit",
            )
            raise SessionBusyError()

    async def _append(self, message: Message) -> None:
        self._messages.append(message)
        for observer in self.observers:
            await observer.on_message_appended(message)

    async def _set_state(self, state: TurnState) -> None:
        self._state = state
        for observer in self.observers:
            await observer.on_state_changed(state)
