"""
Sample medicine data store.

A small fixed table of common Indian medicines keyed by normalized name.
Used as a fallback/demo data source when the generative provider is
unavailable; it is not an authoritative drug database.
"""

from typing import Dict, Iterator, Optional, Tuple

from medinfo.models import (
    Alternative,
    Availability,
    MedicineRecord,
    PriceRange,
    ScheduleClass,
)


SAMPLE_MEDICINES: Dict[str, MedicineRecord] = {
    "dolo 650": MedicineRecord(
        id="1",
        name="Dolo 650",
        manufacturer="Micro Labs Ltd.",
        composition_text="Paracetamol 650mg",
        uses=[
            "Relief from mild to moderate pain",
            "Reduction of fever",
            "Headache relief",
            "Body aches and pain",
            "Toothache",
            "Cold and flu symptoms",
        ],
        mechanism_of_action=(
            "Paracetamol works by inhibiting the synthesis of prostaglandins in the central "
            "nervous system (CNS). It blocks the cyclooxygenase (COX) enzyme, reducing fever "
            "by acting on the hypothalamic heat-regulating center."
        ),
        schedule_class=ScheduleClass.OTC,
        side_effects=[
            "Nausea",
            "Allergic reactions (rare)",
            "Skin rash (rare)",
            "Liver damage (with overdose)",
            "Blood disorders (rare)",
        ],
        precautions=[
            "Do not exceed recommended dose",
            "Avoid alcohol consumption",
            "Use with caution in liver disease",
            "Check for paracetamol in other medications to avoid overdose",
            "Consult doctor if symptoms persist beyond 3 days",
        ],
        contraindications=[
            "Known hypersensitivity to paracetamol",
            "Severe liver impairment",
            "Acute hepatitis",
        ],
        alternatives=[
            Alternative(name="Crocin 650", manufacturer="GSK", price_range="₹25-30"),
            Alternative(name="Calpol 650", manufacturer="GSK", price_range="₹28-35"),
            Alternative(name="Pacimol 650", manufacturer="Ipca", price_range="₹20-25"),
            Alternative(name="Febrinil Plus", manufacturer="Zydus", price_range="₹22-28"),
        ],
        price_range=PriceRange(min=25, max=35, unit="strip of 15 tablets"),
        availability=Availability.WIDELY_AVAILABLE,
        dosage_forms=["Tablet", "Suspension"],
        image_url="https://images.apollo247.in/pub/media/catalog/product/d/o/dol0007_1.jpg",
    ),
    "azithromycin": MedicineRecord(
        id="2",
        name="Azithromycin 500",
        manufacturer="Various (Cipla, Sun Pharma, Zydus)",
        composition_text="Azithromycin 500mg",
        uses=[
            "Bacterial infections of respiratory tract",
            "Skin and soft tissue infections",
            "Ear infections",
            "Sexually transmitted infections",
            "Typhoid fever",
        ],
        mechanism_of_action=(
            "Azithromycin is a macrolide antibiotic that works by binding to the 50S ribosomal "
            "subunit of bacteria, inhibiting protein synthesis and thereby stopping bacterial growth."
        ),
        schedule_class=ScheduleClass.SCHEDULE_H,
        side_effects=[
            "Diarrhea",
            "Nausea and vomiting",
            "Abdominal pain",
            "Headache",
            "Dizziness",
            "QT prolongation (rare)",
        ],
        precautions=[
            "Complete the full course of antibiotics",
            "Take on empty stomach or 2 hours after meal",
            "Inform doctor about heart conditions",
            "Monitor for allergic reactions",
            "Avoid antacids within 2 hours",
        ],
        contraindications=[
            "Known allergy to azithromycin or macrolides",
            "History of cholestatic jaundice with azithromycin",
            "Severe liver disease",
        ],
        alternatives=[
            Alternative(name="Azee 500", manufacturer="Cipla", price_range="₹80-100"),
            Alternative(name="Azithral 500", manufacturer="Alembic", price_range="₹75-95"),
            Alternative(name="Zithromax", manufacturer="Pfizer", price_range="₹150-180"),
        ],
        price_range=PriceRange(min=70, max=120, unit="strip of 3 tablets"),
        availability=Availability.PRESCRIPTION_ONLY,
        dosage_forms=["Tablet", "Suspension", "Injection"],
        image_url="https://images.apollo247.in/pub/media/catalog/product/a/z/azi0027.jpg",
    ),
    "pan d": MedicineRecord(
        id="3",
        name="Pan D",
        manufacturer="Alkem Laboratories",
        composition_text="Pantoprazole 40mg + Domperidone 30mg",
        uses=[
            "Gastroesophageal reflux disease (GERD)",
            "Peptic ulcer disease",
            "Acid-related indigestion",
            "Nausea and vomiting",
            "Bloating and fullness",
        ],
        mechanism_of_action=(
            "Pantoprazole is a proton pump inhibitor (PPI) that reduces stomach acid production "
            "by blocking the H+/K+-ATPase enzyme. Domperidone is a prokinetic that enhances gut "
            "motility by blocking dopamine receptors."
        ),
        schedule_class=ScheduleClass.PRESCRIPTION,
        side_effects=[
            "Headache",
            "Diarrhea",
            "Nausea",
            "Flatulence",
            "Dizziness",
            "Vitamin B12 deficiency (long-term use)",
        ],
        precautions=[
            "Take 30-60 minutes before meals",
            "Not recommended for long-term use without medical supervision",
            "May mask symptoms of gastric cancer",
            "Use with caution in liver/kidney disease",
            "Avoid in patients with cardiac arrhythmias",
        ],
        contraindications=[
            "Known hypersensitivity to PPIs or domperidone",
            "Prolactin-releasing pituitary tumor",
            "GI hemorrhage, obstruction, or perforation",
        ],
        alternatives=[
            Alternative(name="Pantocid D", manufacturer="Sun Pharma", price_range="₹140-160"),
            Alternative(name="Nexpro RD", manufacturer="Torrent", price_range="₹150-180"),
            Alternative(name="Aciloc D", manufacturer="Cadila", price_range="₹80-100"),
        ],
        price_range=PriceRange(min=120, max=150, unit="strip of 15 capsules"),
        availability=Availability.AVAILABLE,
        dosage_forms=["Capsule"],
        image_url="https://images.apollo247.in/pub/media/catalog/product/p/a/pan0154.jpg",
    ),
}


def normalize_name(name: str) -> str:
    return (name or "").strip().lower()


class MedicineDataStore:
    """
    Fixed mapping from normalized medicine name to record.

    Lookup order: exact key match on the normalized query, then the first
    record (in table order) whose key, display name or composition contains
    the query, or whose key is contained in the query.
    """

    def __init__(self, records: Optional[Dict[str, MedicineRecord]] = None):
        source = SAMPLE_MEDICINES if records is None else records
        self._records: Dict[str, MedicineRecord] = {
            normalize_name(key): record for key, record in source.items()
        }

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Tuple[str, MedicineRecord]]:
        return iter(self._records.items())

    def lookup_local(self, name: str) -> Optional[MedicineRecord]:
        query = normalize_name(name)
        if not query:
            return None

        if query in self._records:
            return self._records[query]

        for key, record in self._records.items():
            if (
                query in key
                or key in query
                or query in record.name.lower()
                or query in record.composition_text.lower()
            ):
                return record

        return None
