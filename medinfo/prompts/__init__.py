"""
Prompts for the generative medicine lookup.
"""

from medinfo.prompts.medicine_lookup_prompt import (
    MEDICINE_LOOKUP_SYSTEM_PROMPT,
    DEFAULT_DISCLAIMER,
    build_image_prompt,
    build_lookup_prompt,
    get_system_prompt,
)

__all__ = [
    "MEDICINE_LOOKUP_SYSTEM_PROMPT",
    "DEFAULT_DISCLAIMER",
    "build_image_prompt",
    "build_lookup_prompt",
    "get_system_prompt",
]
