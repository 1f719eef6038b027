"""
MedInfo Console Application Entry Point

Runs the conversation in a terminal: either a single --query turn or an
interactive loop. The same router and session back the Chainlit UI.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from medinfo.config import get_settings
from medinfo.core import (
    ConversationSession,
    LocalMedicineSource,
    SessionBusyError,
    SessionObserver,
    create_router,
)
from medinfo.logs import get_component_logger
from medinfo.models import MedicineRecord, Message, Role

EXIT_COMMANDS = {"exit", "quit", ":q"}


def format_record_summary(record: MedicineRecord) -> str:
    """Plain-text rendering of a medicine record for the terminal."""
    lines = [
        f"  {record.name} ({record.schedule_class.value})",
        f"  Manufacturer: {record.manufacturer}",
    ]
    if record.composition_text:
        lines.append(f"  Composition: {record.composition_text}")
    if record.uses:
        lines.append(f"  Uses: {', '.join(record.uses)}")
    if record.side_effects:
        lines.append(f"  Side effects: {', '.join(record.side_effects)}")
    if record.precautions:
        lines.append(f"  Precautions: {', '.join(record.precautions)}")
    if record.alternatives:
        lines.append(
            "  Alternatives: " + ", ".join(alt.name for alt in record.alternatives)
        )
    price = record.price_range
    lines.append(f"  Price: ₹{price.min:g} - ₹{price.max:g} per {price.unit}")
    lines.append(f"  Availability: {record.availability.value}")
    return "\n".join(lines)


class ConsolePrinter(SessionObserver):
    """Prints assistant messages as they are appended."""

    async def on_message_appended(self, message: Message) -> None:
        if message.role != Role.ASSISTANT:
            return
        print(f"\nMedInfo: {message.content}")
        if message.attached_record is not None:
            print(format_record_summary(message.attached_record))


class MedInfoApplication:
    """
    Console application wrapping one conversation session.
    """

    def __init__(self, local_only: bool = False):
        """Initialize the application."""
        self.settings = get_settings()
        self.logger = get_component_logger("Application")
        self.local_only = local_only
        self.session: Optional[ConversationSession] = None

    def initialize(self) -> ConversationSession:
        """Build the router and session."""
        self.logger.info(
            "Starting console application",
            component="Application",
            subcomponent="Initialize",
            app_version=self.settings.app_version,
            lookup_mode="local" if self.local_only else self.settings.lookup_mode,
        )
        source = LocalMedicineSource() if self.local_only else None
        router = create_router(self.settings, source=source)
        self.session = ConversationSession(
            router,
            follow_up_delay=self.settings.follow_up_delay_seconds,
            image_ack_delay=self.settings.image_ack_delay_seconds,
            observers=[ConsolePrinter()],
        )
        return self.session

    async def ask(self, text: str) -> List[Message]:
        if self.session is None:
            self.initialize()
        try:
            return await self.session.submit(text)
        except SessionBusyError as e:
            self.logger.warning(
                "Turn rejected",
                component="Application",
                subcomponent="Ask",
                error=e.message,
            )
            return []

    async def run_interactive(self) -> None:
        if self.session is None:
            self.initialize()
        print(f"\nMedInfo: {self.session.transcript[0].content}")
        while True:
            try:
                text = await asyncio.to_thread(input, "\nYou: ")
            except EOFError:
                break
            if text.strip().lower() in EXIT_COMMANDS:
                break
            if text.strip().lower().startswith("/image "):
                await self.session.upload_image(text.strip()[7:].strip())
                continue
            await self.ask(text)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MedInfo medicine information assistant")
    parser.add_argument("--query", "-q", help="Ask a single question and exit")
    parser.add_argument(
        "--local-only",
        action="store_true",
        help="Answer lookups from the built-in sample data only",
    )
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Main application execution function.
    """
    args = parse_args(argv)
    app = MedInfoApplication(local_only=args.local_only)
    app.initialize()

    try:
        if args.query:
            replies = await app.ask(args.query)
            return 0 if replies else 1
        await app.run_interactive()
        return 0

    except KeyboardInterrupt:
        print("\n\nApplication interrupted by user.")
        return 130


def cli() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
