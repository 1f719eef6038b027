"""
Intent classification for user utterances.

Rules are evaluated top-down against the trimmed, lower-cased input and the
first matching rule decides the response strategy. Order is precedence:
casual conversation, then medical-advice deflection, then fever guidance,
then medicine lookup as the catch-all.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence


class Strategy(str, Enum):
    """How a turn is answered."""

    CASUAL = "casual"
    MEDICAL_ADVICE_DEFLECTION = "medical_advice_deflection"
    FEVER_GUIDANCE = "fever_guidance"
    MEDICINE_LOOKUP = "medicine_lookup"


class CasualKind(str, Enum):
    GREETING = "greeting"
    WELLBEING = "wellbeing"
    THANKS = "thanks"
    FAREWELL = "farewell"


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    strategy: Strategy
    matches: Callable[[str], bool]
    casual_kind: Optional[CasualKind] = None


@dataclass(frozen=True)
class Classification:
    strategy: Strategy
    rule_name: str
    casual_kind: Optional[CasualKind] = None


def _prefix(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(rf"^(?:{pattern})\b", re.IGNORECASE)
    return lambda text: compiled.search(text) is not None


def _anywhere(*patterns: str) -> Callable[[str], bool]:
    compiled = [re.compile(p, re.IGNORECASE) for p in patterns]
    return lambda text: any(p.search(text) for p in compiled)


def _topic_with_question(topic: str, *question_words: str) -> Callable[[str], bool]:
    return lambda text: topic in text and any(word in text for word in question_words)


MEDICAL_ADVICE_PATTERNS = (
    r"should i take",
    r"can i take.*while.*pregnant",
    r"can i take.*during.*pregnancy",
    r"is it safe.*for me",
    r"what dose.*should",
    r"how much.*should i take",
)


CLASSIFICATION_RULES: List[ClassificationRule] = [
    ClassificationRule(
        "greeting",
        Strategy.CASUAL,
        _prefix(r"hi|hello|hey|hii+|hola|namaste"),
        CasualKind.GREETING,
    ),
    ClassificationRule(
        "wellbeing",
        Strategy.CASUAL,
        _prefix(r"how are you|how're you|wassup|what's up"),
        CasualKind.WELLBEING,
    ),
    ClassificationRule(
        "thanks",
        Strategy.CASUAL,
        _prefix(r"thanks|thank you|thx"),
        CasualKind.THANKS,
    ),
    ClassificationRule(
        "farewell",
        Strategy.CASUAL,
        _prefix(r"bye|goodbye|see you"),
        CasualKind.FAREWELL,
    ),
    ClassificationRule(
        "medical_advice",
        Strategy.MEDICAL_ADVICE_DEFLECTION,
        _anywhere(*MEDICAL_ADVICE_PATTERNS),
    ),
    ClassificationRule(
        "fever_guidance",
        Strategy.FEVER_GUIDANCE,
        _topic_with_question("fever", "medicine", "what", "which"),
    ),
    ClassificationRule(
        "medicine_lookup",
        Strategy.MEDICINE_LOOKUP,
        lambda text: True,
    ),
]


def normalize_utterance(text: str) -> str:
    return (text or "").strip().lower()


def classify(
    text: str, rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES
) -> Classification:
    """
    Classify a user utterance; first matching rule wins.

    Blank input is answered conversationally and never looked up.
    """
    normalized = normalize_utterance(text)
    if not normalized:
        return Classification(Strategy.CASUAL, "blank")

    for rule in rules:
        if rule.matches(normalized):
            return Classification(rule.strategy, rule.name, rule.casual_kind)

    return Classification(Strategy.MEDICINE_LOOKUP, "medicine_lookup")
