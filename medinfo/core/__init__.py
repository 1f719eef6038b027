"""
Conversation core: intent classification, medicine lookup and session state.
"""

from .classifier import (
    CLASSIFICATION_RULES,
    CasualKind,
    Classification,
    ClassificationRule,
    Strategy,
    classify,
)
from .exceptions import (
    LookupConfigurationError,
    LookupParseError,
    LookupTransportError,
    MedicineLookupError,
    SessionBusyError,
)
from .resolver import RemoteMedicineResolver, create_resolver, extract_json_object
from .router import ConversationRouter, build_data_source, create_router, render_lookup_result
from .session import ConversationSession, SessionObserver, TurnState
from .sources import (
    ChainedMedicineSource,
    HttpMedicineSource,
    LocalMedicineSource,
    MedicineDataSource,
    result_from_envelope,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "CasualKind",
    "Classification",
    "ClassificationRule",
    "Strategy",
    "classify",
    "LookupConfigurationError",
    "LookupParseError",
    "LookupTransportError",
    "MedicineLookupError",
    "SessionBusyError",
    "RemoteMedicineResolver",
    "create_resolver",
    "extract_json_object",
    "ConversationRouter",
    "build_data_source",
    "create_router",
    "render_lookup_result",
    "ConversationSession",
    "SessionObserver",
    "TurnState",
    "ChainedMedicineSource",
    "HttpMedicineSource",
    "LocalMedicineSource",
    "MedicineDataSource",
    "result_from_envelope",
]
