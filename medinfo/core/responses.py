"""
Canned assistant replies.
"""

from typing import Optional

from medinfo.core.classifier import CasualKind


WELCOME_MESSAGE = """Hello! 👋 I'm MedInfo, your medicine information assistant for Indian medicines.

I can help you with:
• Medicine details, composition & uses
• Side effects and precautions
• Indian alternatives and pricing
• Availability information

**Note:** I provide information only. For prescriptions or medical advice, please consult a licensed doctor.

How can I help you today?"""

CASUAL_REPLIES = {
    CasualKind.GREETING: (
        "Hello! 👋 Great to meet you! I'm here to help you with medicine information. "
        "What would you like to know about?"
    ),
    CasualKind.WELLBEING: (
        "I'm doing great, thank you for asking! 😊 Ready to help you with any "
        "medicine-related questions. What can I look up for you today?"
    ),
    CasualKind.THANKS: (
        "You're welcome! 🙏 Feel free to ask if you need information about any "
        "other medicines. Stay healthy!"
    ),
    CasualKind.FAREWELL: (
        "Goodbye! Take care and stay healthy! 👋 Feel free to come back anytime "
        "you need medicine information."
    ),
}

DEFAULT_CASUAL_REPLY = "I'm here to help! Would you like to know about any medicine?"

MEDICAL_ADVICE_REFUSAL = """I cannot provide medical prescriptions or personalized dosage advice. This requires a licensed medical professional who can evaluate your specific health condition.

**Please consult a doctor or pharmacist for:**
• Personal dosage recommendations
• Safety during pregnancy/breastfeeding
• Drug interactions with your current medications
• Suitability for your health conditions

Is there any general information about a medicine I can help you with?"""

FEVER_GUIDANCE = """I cannot prescribe medication. However, I can provide information about medicines commonly used for fever in India.

**Common OTC fever medicines in India:**
• **Paracetamol** (Dolo 650, Crocin, Calpol) - Most commonly used
• **Ibuprofen** (Brufen, Ibugesic) - Also reduces inflammation
• **Combination products** (Crocin Advance, Combiflam)

Would you like detailed information about any of these? Just ask "Tell me about Dolo 650" for example.

⚠️ **Important:** If fever persists beyond 3 days or is very high, please consult a doctor."""

PACKAGING_FOLLOW_UP = """📸 **Does the packaging match what you have?**

If you'd like, you can upload a picture of your medicine strip or box for verification. Just click the image button below!"""

IMAGE_UPLOAD_ACK = """Thank you for uploading the image! 🔍

**Image verification** is not available yet, so I have not analysed your picture. Once available, it will help you:
• Verify if your medicine matches the description
• Check expiry date visibility
• Confirm authentic packaging

For now, please compare the medicine name, manufacturer, and composition with the information I provided above.

Is there anything else you'd like to know?"""

CONFIGURATION_ERROR_REPLY = (
    "⚠️ Server configuration error: the medicine lookup service is not set up correctly. "
    "Please try again later or contact the administrator."
)

TRANSPORT_ERROR_REPLY = (
    "⚠️ I couldn't reach the medicine information service right now. "
    "Please try again in a little while."
)

PARSE_ERROR_REPLY = (
    "⚠️ Failed to parse medicine information for \"{query}\". "
    "Please try again, or rephrase with the brand or generic name."
)

BUSY_REPLY = "⏳ I'm still looking up your previous question. Please wait a moment."

NOT_FOUND_REPLY = """I couldn't find information about "{query}" in my database.
{suggestion}
**Try searching for:**
• Brand names like "Dolo 650", "Pan D", "Azithromycin"
• Generic names like "Paracetamol", "Omeprazole"

Is there another medicine you'd like to know about?"""


def casual_reply(kind: Optional[CasualKind]) -> str:
    return CASUAL_REPLIES.get(kind, DEFAULT_CASUAL_REPLY)


def lookup_intro(medicine_name: str) -> str:
    return f"Here's the detailed information for **{medicine_name}**:"


def not_found_reply(query: str, suggestion: Optional[str] = None) -> str:
    suggestion_line = f"\n💡 {suggestion.strip()}\n" if suggestion and suggestion.strip() else ""
    return NOT_FOUND_REPLY.format(query=query.strip(), suggestion=suggestion_line)


def parse_error_reply(query: str) -> str:
    return PARSE_ERROR_REPLY.format(query=query.strip())


def image_upload_text(filename: str) -> str:
    return f"[Uploaded image: {filename}]"
