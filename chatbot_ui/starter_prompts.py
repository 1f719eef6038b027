"""
Starter Prompts for Chainlit UI.

Suggested queries shown on the welcome screen; choosing one submits its
text exactly as if the user had typed it.
"""

from typing import List
import chainlit as cl


STARTER_QUERIES = [
    ("Amoxicillin", "Tell me about Amoxicillin"),
    ("Metformin", "What is Metformin used for?"),
    ("Omeprazole", "Tell me about Omeprazole"),
    ("Fever medicine", "What medicines are used for fever?"),
]


def get_starter_prompts() -> List[cl.Starter]:
    """
    Get the starter prompts for the chat interface.

    Returns:
        List of Chainlit Starter objects, one per suggested query.
    """
    return [
        cl.Starter(label=label, message=message)
        for label, message in STARTER_QUERIES
    ]
