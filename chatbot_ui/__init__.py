"""
Chainlit UI Module for the MedInfo medicine assistant.

This module provides a web-based chat interface using the Chainlit framework,
backed by the medinfo conversation session and router.
"""

__version__ = "1.0.0"
