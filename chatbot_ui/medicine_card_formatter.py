"""
Medicine Card Formatter for Chainlit UI.

Renders a MedicineRecord as a markdown medicine card appended to the
assistant message it is attached to, plus optional side elements.
"""

from typing import List

import chainlit as cl

from medinfo.models import Availability, MedicineRecord, ScheduleClass


SCHEDULE_BADGES = {
    ScheduleClass.OTC: "🟢",
    ScheduleClass.PRESCRIPTION: "🔵",
    ScheduleClass.SCHEDULE_H: "🟠",
    ScheduleClass.SCHEDULE_H1: "🟠",
    ScheduleClass.SCHEDULE_X: "🔴",
}

AVAILABILITY_BADGES = {
    Availability.WIDELY_AVAILABLE: "🟢",
    Availability.AVAILABLE: "🔵",
    Availability.LIMITED: "🟠",
    Availability.PRESCRIPTION_ONLY: "⚪",
}


def format_price(value: float) -> str:
    return f"₹{value:g}"


class MedicineCardFormatter:
    """
    Formats medicine records for display in the Chainlit UI.

    Sections appear in a fixed order; empty list sections are omitted.
    """

    def format_card(self, record: MedicineRecord) -> str:
        """
        Build the markdown card for a record.

        Args:
            record: Medicine record attached to an assistant message.

        Returns:
            Markdown string, starting with a horizontal rule.
        """
        schedule = record.schedule_class
        lines = [
            "\n\n---\n",
            f"### 💊 {record.name}",
        ]
        if record.manufacturer:
            lines.append(f"*{record.manufacturer}*")
        lines.append(f"{SCHEDULE_BADGES.get(schedule, '⚪')} **{schedule.value}**")

        if record.composition_text:
            lines.append(self._section("🧪 Composition", record.composition_text))
        lines.append(self._bullets("✅ Uses", record.uses))
        if record.mechanism_of_action:
            lines.append(self._section("⚙️ Mechanism of Action", record.mechanism_of_action))
        lines.append(self._bullets("💊 Available Forms", record.dosage_forms))
        lines.append(self._bullets("⚠️ Side Effects", record.side_effects))
        lines.append(self._bullets("🛡️ Precautions", record.precautions))
        lines.append(self._bullets("🚫 Contraindications", record.contraindications))
        lines.append(self.format_alternatives(record))

        price = record.price_range
        lines.append(
            self._section(
                "💰 Price Range",
                f"**{format_price(price.min)} - {format_price(price.max)}** per {price.unit}",
            )
        )
        availability = record.availability
        lines.append(
            self._section(
                "📍 Availability",
                f"{AVAILABILITY_BADGES.get(availability, '⚪')} {availability.value}",
            )
        )

        return "\n".join(line for line in lines if line)

    def format_alternatives(self, record: MedicineRecord) -> str:
        if not record.alternatives:
            return ""
        entries = []
        for alt in record.alternatives:
            entry = f"- **{alt.name}**"
            if alt.manufacturer:
                entry += f" ({alt.manufacturer})"
            if alt.price_range:
                entry += f" · {alt.price_range}"
            entries.append(entry)
        return "\n#### 🔄 Indian Alternatives\n" + "\n".join(entries)

    def create_card_elements(self, record: MedicineRecord) -> List[cl.Image]:
        """
        Create Chainlit elements for a record (the medicine image, if any).
        """
        if not record.image_url:
            return []
        return [
            cl.Image(
                name=record.name,
                url=record.image_url,
                display="inline",
            )
        ]

    @staticmethod
    def _section(title: str, body: str) -> str:
        return f"\n#### {title}\n{body}"

    @staticmethod
    def _bullets(title: str, items: List[str]) -> str:
        if not items:
            return ""
        return f"\n#### {title}\n" + "\n".join(f"- {item}" for item in items)
