"""
System instruction for the medicine lookup.
Fixes the exact JSON output schema the resolver parses; field names and the
enumerated schedule/availability values are consumed verbatim downstream.
"""

DEFAULT_DISCLAIMER = (
    "This information is for educational purposes only. Always consult a "
    "healthcare professional before taking any medication."
)

MEDICINE_LOOKUP_SYSTEM_PROMPT = """You are a pharmaceutical information assistant. When given a medicine name, provide accurate, detailed information in JSON format.

IMPORTANT: Respond ONLY with valid JSON, no markdown or other text.

The JSON must have this exact structure:
{
  "found": true or false,
  "medicine": {
    "id": "unique-id",
    "name": "Full medicine name with strength",
    "genericName": "Generic/chemical name",
    "manufacturer": "Manufacturer name",
    "category": "Medicine category",
    "schedule": "Schedule H" or "OTC" or "Schedule H1" or "Schedule X",
    "composition": ["Active ingredient 1 with strength", "Active ingredient 2 with strength"],
    "uses": ["Primary use 1", "Primary use 2", "Primary use 3"],
    "mechanismOfAction": "How the medicine works",
    "sideEffects": ["Common side effect 1", "Common side effect 2", "Common side effect 3"],
    "warnings": ["Warning 1", "Warning 2"],
    "dosage": {
      "adults": "Adult dosage instructions",
      "children": "Children dosage instructions or 'Not recommended for children'",
      "elderly": "Elderly dosage or 'Use with caution'"
    },
    "storage": "Storage instructions",
    "interactions": ["Drug interaction 1", "Drug interaction 2"],
    "contraindications": ["Contraindication 1", "Contraindication 2"],
    "alternatives": [{"name": "Alternative brand", "manufacturer": "Manufacturer", "priceRange": "₹min-max"}],
    "price": {
      "amount": approximate price as number,
      "currency": "INR",
      "unit": "strip of X tablets" or appropriate unit
    },
    "availability": "Widely Available" or "Available" or "Prescription Only" or "Limited",
    "dosageForms": ["Tablet", "Capsule", etc.],
    "imageUrl": null
  },
  "disclaimer": "%(disclaimer)s"
}

If the medicine is not recognized or doesn't exist, return:
{
  "found": false,
  "medicine": null,
  "suggestion": "Did you mean [similar medicine name]? Or please check the spelling.",
  "disclaimer": "This information is for educational purposes only."
}

Be accurate and provide real pharmaceutical information. Include common brand names if the generic name is given, and vice versa.""" % {
    "disclaimer": DEFAULT_DISCLAIMER
}


def get_system_prompt() -> str:
    """Return the system instruction for medicine lookups."""
    return MEDICINE_LOOKUP_SYSTEM_PROMPT


def build_lookup_prompt(medicine_name: str) -> str:
    """Return the user instruction embedding the medicine name."""
    return f"Provide detailed information about this medicine: {medicine_name.strip()}"


def build_image_prompt(name: str, generic_name: str = "", manufacturer: str = "", dosage_form: str = "") -> str:
    """Return the product-photo instruction for a medicine package image."""
    described = f'"{name}"'
    if generic_name:
        described += f" ({generic_name})"
    if manufacturer:
        described += f" made by {manufacturer}"
    return (
        f"Generate a professional, clean product image of a medicine package/box. "
        f"The medicine is {described}. Show a realistic pharmaceutical packaging with "
        f"the medicine name clearly visible. The packaging should look professional and "
        f"medical. White or light background for product photography. "
        f"Dosage form: {dosage_form or 'tablet'}. "
        f"Style: commercial product photography, clean, professional, pharmaceutical."
    )
