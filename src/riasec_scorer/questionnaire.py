"""The 36-item Holland RIASEC inventory.

Six statements per dimension, answered on a 1-5 agreement scale:
items 1-6 Realistic, 7-12 Investigative, 13-18 Artistic, 19-24 Social,
25-30 Enterprising, 31-36 Conventional.
"""

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from .exceptions import IncompleteResponsesError
from .schema import Dimension, QuestionnaireItem, ValidationResult

MIN_ANSWER = 1
MAX_ANSWER = 5
ITEMS_PER_DIMENSION = 6


def _item(item_id: int, dimension: Dimension, text: str, category: str) -> QuestionnaireItem:
    return QuestionnaireItem(id=item_id, dimension=dimension, text=text, category=category)


QUESTIONS: tuple[QuestionnaireItem, ...] = (
    # R - Realistic
    _item(1, Dimension.REALISTIC, "I like working with tools and machinery", "manual_work"),
    _item(2, Dimension.REALISTIC, "I enjoy outdoor activities", "physical_environment"),
    _item(3, Dimension.REALISTIC, "I am comfortable solving practical problems with my hands", "practical_problem_solving"),
    _item(4, Dimension.REALISTIC, "I prefer jobs that require concrete technical skills", "technical_skills"),
    _item(5, Dimension.REALISTIC, "I want to know how things work (mechanics, electricity, construction)", "technical_curiosity"),
    _item(6, Dimension.REALISTIC, "I like building or repairing physical objects", "construction"),
    # I - Investigative
    _item(7, Dimension.INVESTIGATIVE, "I like analyzing data and finding patterns", "data_analysis"),
    _item(8, Dimension.INVESTIGATIVE, "I enjoy solving complex problems that require logical thinking", "logical_problem_solving"),
    _item(9, Dimension.INVESTIGATIVE, "I am interested in researching how things work at a deep level", "research"),
    _item(10, Dimension.INVESTIGATIVE, "I prefer working with abstract ideas and theories", "abstract_thinking"),
    _item(11, Dimension.INVESTIGATIVE, "I like experimenting and testing hypotheses", "experimentation"),
    _item(12, Dimension.INVESTIGATIVE, "I enjoy learning about science, mathematics or technology", "scientific_learning"),
    # A - Artistic
    _item(13, Dimension.ARTISTIC, "I like expressing myself creatively (art, music, writing, design)", "creative_expression"),
    _item(14, Dimension.ARTISTIC, "I enjoy imagining new and original ideas", "imagination"),
    _item(15, Dimension.ARTISTIC, "I am comfortable in loosely structured, flexible environments", "flexibility"),
    _item(16, Dimension.ARTISTIC, "I prefer jobs that let me use my creativity", "creative_work"),
    _item(17, Dimension.ARTISTIC, "I am interested in aesthetics and visual design", "aesthetics"),
    _item(18, Dimension.ARTISTIC, "I enjoy creating unique, original things", "originality"),
    # S - Social
    _item(19, Dimension.SOCIAL, "I like helping other people with their problems", "helping"),
    _item(20, Dimension.SOCIAL, "I enjoy teaching or explaining things to others", "teaching"),
    _item(21, Dimension.SOCIAL, "I am comfortable working in teams and collaborating", "teamwork"),
    _item(22, Dimension.SOCIAL, "I prefer jobs that involve direct interaction with people", "interaction"),
    _item(23, Dimension.SOCIAL, "I care about the wellbeing and growth of others", "others_wellbeing"),
    _item(24, Dimension.SOCIAL, "I enjoy listening to and emotionally supporting others", "emotional_support"),
    # E - Enterprising
    _item(25, Dimension.ENTERPRISING, "I like leading projects and making decisions", "leadership"),
    _item(26, Dimension.ENTERPRISING, "I enjoy persuading and convincing others", "persuasion"),
    _item(27, Dimension.ENTERPRISING, "I am comfortable taking calculated risks", "risk"),
    _item(28, Dimension.ENTERPRISING, "I prefer jobs that give me autonomy and influence", "autonomy"),
    _item(29, Dimension.ENTERPRISING, "I am interested in business and commercial opportunities", "business"),
    _item(30, Dimension.ENTERPRISING, "I enjoy organizing events and directing teams", "team_direction"),
    # C - Conventional
    _item(31, Dimension.CONVENTIONAL, "I like working with data, numbers and organized records", "data_numbers"),
    _item(32, Dimension.CONVENTIONAL, "I enjoy following established procedures and protocols", "procedures"),
    _item(33, Dimension.CONVENTIONAL, "I am comfortable in structured, predictable environments", "structure"),
    _item(34, Dimension.CONVENTIONAL, "I prefer jobs that require precision and attention to detail", "precision"),
    _item(35, Dimension.CONVENTIONAL, "I am interested in administration and organizing information", "administration"),
    _item(36, Dimension.CONVENTIONAL, "I enjoy systematic, orderly tasks", "systematic_work"),
)

TOTAL_QUESTIONS = len(QUESTIONS)

ITEM_IDS: tuple[int, ...] = tuple(q.id for q in QUESTIONS)

# Item id -> dimension lookup table
ITEM_DIMENSIONS: Mapping[int, Dimension] = MappingProxyType(
    {q.id: q.dimension for q in QUESTIONS}
)

SCALE_LABELS: Mapping[int, str] = MappingProxyType({
    1: "Strongly disagree",
    2: "Disagree",
    3: "Neutral",
    4: "Agree",
    5: "Strongly agree",
})

DIMENSION_DESCRIPTIONS: Mapping[Dimension, dict[str, Any]] = MappingProxyType({
    Dimension.REALISTIC: {
        "summary": "Action-oriented, practical, drawn to tools and physical settings.",
        "traits": ["Practical", "Concrete", "Technical", "Athletic"],
        "environments": ["Workshops", "Laboratories", "Outdoors", "Construction"],
    },
    Dimension.INVESTIGATIVE: {
        "summary": "Analytical and curious, enjoys understanding and explaining phenomena.",
        "traits": ["Analytical", "Intellectual", "Curious", "Logical"],
        "environments": ["Laboratories", "Research", "Academia", "Technology"],
    },
    Dimension.ARTISTIC: {
        "summary": "Creative and expressive, values originality and aesthetics.",
        "traits": ["Creative", "Original", "Expressive", "Innovative"],
        "environments": ["Creative studios", "Agencies", "Media", "Design"],
    },
    Dimension.SOCIAL: {
        "summary": "Collaborative and empathetic, focused on helping and teaching.",
        "traits": ["Empathetic", "Cooperative", "Helpful", "Understanding"],
        "environments": ["Education", "Health", "Social services", "Counseling"],
    },
    Dimension.ENTERPRISING: {
        "summary": "Persuasive leader, oriented to goals and results.",
        "traits": ["Ambitious", "Persuasive", "Leader", "Competitive"],
        "environments": ["Business", "Sales", "Politics", "Management"],
    },
    Dimension.CONVENTIONAL: {
        "summary": "Organized and detail-minded, efficient with data and systems.",
        "traits": ["Organized", "Precise", "Efficient", "Detail-oriented"],
        "environments": ["Offices", "Finance", "Administration", "Banking"],
    },
})


def questions_by_dimension(dimension: Dimension) -> list[QuestionnaireItem]:
    return [q for q in QUESTIONS if q.dimension == dimension]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def _parse_item_id(key: Any) -> Optional[int]:
    """Accept int ids or numeric strings (as produced by JSON objects)."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        item_id = key
    elif isinstance(key, str) and key.strip().isdigit():
        item_id = int(key.strip())
    else:
        return None
    return item_id if item_id in ITEM_DIMENSIONS else None


def _is_valid_answer(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_ANSWER <= value <= MAX_ANSWER
    )


def validate_responses(responses: Any) -> ValidationResult:
    """Check that every item has an answer in [1, 5].

    Returns a failed result naming the number of missing answers and the
    completion percentage when the set is incomplete. Keys that are not
    item ids (or repeat one) also fail validation.
    """
    if not isinstance(responses, Mapping):
        return ValidationResult(
            valid=False,
            error="Responses must map item ids to answers",
            progress=0,
            missing_items=list(ITEM_IDS),
        )

    answered: set[int] = set()
    seen: set[int] = set()
    unknown: list[str] = []

    for key, value in responses.items():
        item_id = _parse_item_id(key)
        if item_id is None or item_id in seen:
            unknown.append(str(key))
            continue
        seen.add(item_id)
        if _is_valid_answer(value):
            answered.add(item_id)

    missing = [item_id for item_id in ITEM_IDS if item_id not in answered]
    progress = percentage(len(answered), TOTAL_QUESTIONS)

    if missing:
        count = len(missing)
        noun = "question" if count == 1 else "questions"
        return ValidationResult(
            valid=False,
            error=f"{count} {noun} left to answer",
            progress=progress,
            missing_items=missing,
            unknown_items=unknown,
        )

    if unknown:
        return ValidationResult(
            valid=False,
            error=f"Unknown or repeated item ids: {', '.join(unknown)}",
            progress=progress,
            unknown_items=unknown,
        )

    return ValidationResult(valid=True, progress=100)


def normalize_responses(responses: Mapping[Any, int]) -> dict[int, int]:
    """Return a validated response set keyed by integer item id, in item order.

    Raises:
        IncompleteResponsesError: if the set does not pass validate_responses.
    """
    validation = validate_responses(responses)
    if not validation.valid:
        raise IncompleteResponsesError(validation)

    by_id = {_parse_item_id(key): value for key, value in responses.items()}
    return {item_id: by_id[item_id] for item_id in ITEM_IDS}
