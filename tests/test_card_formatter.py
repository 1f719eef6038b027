from chatbot_ui.medicine_card_formatter import MedicineCardFormatter
from chatbot_ui.starter_prompts import STARTER_QUERIES, get_starter_prompts
from medinfo.core import Strategy, classify
from medinfo.data import SAMPLE_MEDICINES
from medinfo.models import MedicineRecord


def test_card_sections_in_order():
    card = MedicineCardFormatter().format_card(SAMPLE_MEDICINES["dolo 650"])

    headings = [
        "Dolo 650",
        "Micro Labs Ltd.",
        "**OTC**",
        "Composition",
        "Uses",
        "Mechanism of Action",
        "Available Forms",
        "Side Effects",
        "Precautions",
        "Contraindications",
        "Indian Alternatives",
        "Price Range",
        "Availability",
    ]
    positions = [card.index(heading) for heading in headings]
    assert positions == sorted(positions)
    assert "**₹25 - ₹35** per strip of 15 tablets" in card
    assert "Widely Available" in card
    assert "- **Crocin 650** (GSK) · ₹25-30" in card


def test_card_omits_empty_sections():
    record = MedicineRecord.from_payload({"name": "Mystery Syrup"})
    card = MedicineCardFormatter().format_card(record)

    assert "Side Effects" not in card
    assert "Alternatives" not in card
    assert "**Prescription**" in card


def test_no_image_element_without_url():
    formatter = MedicineCardFormatter()
    assert formatter.create_card_elements(MedicineRecord.from_payload({"name": "X"})) == []


def test_starters_route_as_expected():
    strategies = {label: classify(message).strategy for label, message in STARTER_QUERIES}
    assert strategies == {
        "Amoxicillin": Strategy.MEDICINE_LOOKUP,
        "Metformin": Strategy.MEDICINE_LOOKUP,
        "Omeprazole": Strategy.MEDICINE_LOOKUP,
        "Fever medicine": Strategy.FEVER_GUIDANCE,
    }


def test_starters_submit_their_message_without_icons():
    starters = get_starter_prompts()

    assert [s.message for s in starters] == [message for _, message in STARTER_QUERIES]
    assert all(not getattr(s, "icon", None) for s in starters)
