"""
Conversation Router

Decides how one user turn is answered and produces the assistant messages
for it. The router is pure with respect to the transcript: it returns the
replies and leaves appending, pending state and pacing to the session.

Flow:
1. Classify the utterance (first matching rule wins)
2. Answer casual, deflection and fever turns from canned text
3. Otherwise look the medicine up and render the outcome
"""

from typing import List, Optional, Sequence

from medinfo.config import Settings, get_settings
from medinfo.core.classifier import Strategy, classify
from medinfo.core.responses import (
    CONFIGURATION_ERROR_REPLY,
    FEVER_GUIDANCE,
    MEDICAL_ADVICE_REFUSAL,
    PACKAGING_FOLLOW_UP,
    TRANSPORT_ERROR_REPLY,
    casual_reply,
    lookup_intro,
    not_found_reply,
    parse_error_reply,
)
from medinfo.core.resolver import create_resolver
from medinfo.core.sources import (
    ChainedMedicineSource,
    HttpMedicineSource,
    LocalMedicineSource,
    MedicineDataSource,
)
from medinfo.logs import get_component_logger
from medinfo.models import LookupErrorKind, LookupResult, Message


class ConversationRouter:
    """
    Maps a user utterance to its assistant replies.

    Every call returns at least one assistant message; lookup failures are
    rendered as readable replies instead of propagating.
    """

    def __init__(self, source: MedicineDataSource):
        self.source = source
        self.logger = get_component_logger("ConversationRouter")

    async def route(
        self, user_text: str, transcript: Sequence[Message] = ()
    ) -> List[Message]:
        """
        Produce the assistant replies for one user turn.

        Args:
            user_text: Raw text typed by the user.
            transcript: Messages so far, oldest first. Not modified.

        Returns:
            Ordered assistant messages; the first is the main reply.
        """
        classification = classify(user_text)

        self.logger.info(
            "Routing user turn",
            component="ConversationRouter",
            subcomponent="Route",
            strategy=classification.strategy.value,
            rule=classification.rule_name,
            transcript_length=len(transcript),
        )

        if classification.strategy == Strategy.CASUAL:
            return [Message.assistant(casual_reply(classification.casual_kind))]

        if classification.strategy == Strategy.MEDICAL_ADVICE_DEFLECTION:
            return [Message.assistant(MEDICAL_ADVICE_REFUSAL)]

        if classification.strategy == Strategy.FEVER_GUIDANCE:
            return [Message.assistant(FEVER_GUIDANCE)]

        return await self._lookup_replies(user_text.strip())

    async def _lookup_replies(self, query: str) -> List[Message]:
        try:
            result = await self.source.lookup(query)
        except Exception as e:
            self.logger.error(
                "Medicine source raised unexpectedly",
                component="ConversationRouter",
                subcomponent="Lookup",
                source=getattr(self.source, "name", type(self.source).__name__),
                error=str(e),
                exc_info=True,
            )
            result = LookupResult.failure(LookupErrorKind.TRANSPORT, str(e))

        return render_lookup_result(query, result)


def render_lookup_result(query: str, result: LookupResult) -> List[Message]:
    """Turn a lookup outcome into assistant messages."""
    if result.found and result.medicine is not None:
        return [
            Message.assistant(lookup_intro(result.medicine.name), attached_record=result.medicine),
            Message.assistant(PACKAGING_FOLLOW_UP),
        ]

    if result.failed:
        if result.error_kind == LookupErrorKind.CONFIGURATION:
            return [Message.assistant(CONFIGURATION_ERROR_REPLY)]
        if result.error_kind == LookupErrorKind.PARSE:
            return [Message.assistant(parse_error_reply(query))]
        return [Message.assistant(TRANSPORT_ERROR_REPLY)]

    return [Message.assistant(not_found_reply(query, result.suggestion))]


def build_data_source(settings: Settings) -> MedicineDataSource:
    """
    Build the medicine data source selected by settings.

    A configured lookup URL replaces the in-process resolver; the local
    store is appended as fallback in remote_then_local mode.
    """
    mode = (settings.lookup_mode or "remote_then_local").lower()
    local = LocalMedicineSource()

    if mode == "local":
        return local

    if settings.medicine_lookup_url:
        remote: MedicineDataSource = HttpMedicineSource(
            settings.medicine_lookup_url,
            timeout_seconds=settings.lookup_timeout_seconds,
            auth_token=settings.medicine_lookup_token or None,
        )
    else:
        remote = create_resolver(settings)

    if mode == "remote":
        return remote
    return ChainedMedicineSource([remote, local])


def create_router(
    settings: Optional[Settings] = None, source: Optional[MedicineDataSource] = None
) -> ConversationRouter:
    """Build a router from application settings."""
    settings = settings or get_settings()
    return ConversationRouter(source or build_data_source(settings))
