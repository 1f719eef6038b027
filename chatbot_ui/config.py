"""
Configuration settings for the Chainlit UI application.

Defines UI-specific display options and error messages.
"""

from typing import Final

# UI Display Settings
SHOW_MEDICINE_IMAGES: Final[bool] = True
PENDING_INDICATOR: Final[str] = "Looking that up..."

# Error Messages
ERROR_MESSAGE_INITIALIZATION: Final[str] = (
    "I'm having trouble initializing. Please refresh and try again."
)
ERROR_MESSAGE_SESSION_NOT_READY: Final[str] = (
    "I'm not ready yet. Please wait a moment and try again."
)
