"""
Lead scoring for free-text customer inquiries.

Estimates the value, priority, timeline and lead type of an inquiry from the
message wording and the brand's category. Rules are keyword heuristics; the
first matching project keyword wins.
"""
import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


DEFAULT_BASE_VALUE = 2000

CATEGORY_BASE_VALUES = {
    "luxury": 5000,
    "haute couture": 5000,
    "bridal": 4000,
    "wedding": 4000,
    "evening wear": 3000,
    "formal": 3000,
    "ready-to-wear": 2500,
    "contemporary": 2500,
    "accessories": 1500,
    "sustainable": 2800,
    "ethical": 2800,
}

BUDGET_PATTERNS = [
    re.compile(r"\$[\d,]+"),
    re.compile(r"£[\d,]+"),
    re.compile(r"€[\d,]+"),
    re.compile(r"budget.*?(\d+)", re.IGNORECASE),
    re.compile(r"spend.*?(\d+)", re.IGNORECASE),
    re.compile(r"around.*?(\d+)", re.IGNORECASE),
    re.compile(r"up to.*?(\d+)", re.IGNORECASE),
]

# Budgets at or below this are treated as noise ("2 dresses", "size 12")
MIN_EXPLICIT_BUDGET = 100


@dataclass(frozen=True)
class ProjectRule:
    keyword: str
    multiplier: float
    min_value: Optional[int]  # None means the category base value
    priority: str
    lead_type: str


PROJECT_RULES = [
    ProjectRule("wedding", 2.5, 5000, "high", "booking_intent"),
    ProjectRule("bridal", 2.5, 4500, "high", "booking_intent"),
    ProjectRule("red carpet", 3.0, 8000, "urgent", "booking_intent"),
    ProjectRule("gala", 2.2, 4000, "high", "booking_intent"),
    ProjectRule("corporate", 2.0, 4000, "high", "booking_intent"),
    ProjectRule("event", 1.8, 3000, "high", "booking_intent"),
    ProjectRule("party", 1.5, 2500, "normal", "booking_intent"),
    ProjectRule("photoshoot", 1.3, 1500, "normal", "booking_intent"),
    ProjectRule("custom", 1.5, 2500, "normal", "booking_intent"),
    ProjectRule("bespoke", 1.8, 3000, "normal", "booking_intent"),
    ProjectRule("made to measure", 1.6, 2800, "normal", "booking_intent"),
    ProjectRule("couture", 2.5, 5000, "high", "booking_intent"),
    ProjectRule("wholesale", 3.0, 10000, "high", "quote_request"),
    ProjectRule("bulk", 2.5, 8000, "high", "quote_request"),
    ProjectRule("collection", 2.0, 6000, "normal", "quote_request"),
    ProjectRule("consultation", 0.3, 500, "normal", "consultation"),
    ProjectRule("styling", 0.8, 1200, "normal", "consultation"),
    ProjectRule("fitting", 0.4, 300, "normal", "consultation"),
    ProjectRule("quote", 1.0, None, "normal", "quote_request"),
    ProjectRule("price", 1.0, None, "normal", "quote_request"),
    ProjectRule("inquiry", 1.0, None, "normal", "inquiry"),
]

QUANTITY_HINT = re.compile(r"\d+.*(?:piece|item)", re.IGNORECASE)
QUANTITY = re.compile(r"(\d+).*(?:piece|item|dress|suit|gown)", re.IGNORECASE)

LUXURY_KEYWORDS = ["luxury", "premium", "high-end", "exclusive", "designer", "couture"]
BUDGET_CONSTRAINTS = ["budget", "affordable", "reasonable", "cost-effective", "economical"]

MINIMUM_ESTIMATE = 200


@dataclass
class InquiryAnalysis:
    estimated_value: int
    priority: str
    project_timeline: str
    lead_type: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def category_base_value(brand_category: Optional[str]) -> int:
    if not brand_category:
        return DEFAULT_BASE_VALUE
    return CATEGORY_BASE_VALUES.get(brand_category.lower(), DEFAULT_BASE_VALUE)


def extract_budget(message: str) -> Optional[int]:
    """Largest explicit budget mentioned, taking the first usable figure per pattern"""
    budget = None
    for pattern in BUDGET_PATTERNS:
        for match in pattern.finditer(message):
            digits = re.search(r"\d+", re.sub(r"[$£€,]", "", match.group(0)))
            if not digits:
                continue
            amount = int(digits.group(0))
            if amount > MIN_EXPLICIT_BUDGET:
                budget = amount if budget is None else max(budget, amount)
                break
    return budget


def round_estimate(value: float) -> int:
    """Round half up to 50, 100 or 250 depending on size"""
    if value < 1000:
        step = 50
    elif value < 5000:
        step = 100
    else:
        step = 250
    return int(math.floor(value / step + 0.5) * step)


def analyze_inquiry_message(message: str, brand_category: Optional[str] = None) -> InquiryAnalysis:
    """Score an inquiry message into an estimated lead"""
    lower = message.lower()
    base_value = category_base_value(brand_category)

    estimated: float = base_value
    priority = "normal"
    timeline = "3-6 months"
    lead_type = "inquiry"

    budget = extract_budget(message)
    if budget is not None:
        estimated = max(estimated, budget)

    for rule in PROJECT_RULES:
        if rule.keyword in lower:
            min_value = base_value if rule.min_value is None else rule.min_value
            estimated = max(estimated * rule.multiplier, min_value)
            priority = rule.priority
            lead_type = rule.lead_type
            break

    if "multiple" in lower or "several" in lower:
        estimated *= 1.5
    if QUANTITY_HINT.search(lower):
        quantity_match = QUANTITY.search(lower)
        if quantity_match:
            quantity = int(quantity_match.group(1))
            if 1 < quantity <= 20:
                estimated *= min(quantity, 5)

    if any(word in lower for word in ("urgent", "asap", "rush")):
        timeline = "ASAP"
        priority = "urgent"
        estimated *= 1.3
    elif "next week" in lower or "this month" in lower:
        timeline = "1-3 months"
        priority = "high"
        estimated *= 1.1
    elif "next month" in lower or "few months" in lower:
        timeline = "3-6 months"
    elif "next year" in lower or "planning ahead" in lower:
        timeline = "6+ months"

    if any(word in lower for word in LUXURY_KEYWORDS):
        estimated *= 1.4
        if priority == "normal":
            priority = "high"

    if (
        any(word in lower for word in BUDGET_CONSTRAINTS)
        and "no budget" not in lower
        and "unlimited" not in lower
    ):
        estimated *= 0.8

    return InquiryAnalysis(
        estimated_value=max(round_estimate(estimated), MINIMUM_ESTIMATE),
        priority=priority,
        project_timeline=timeline,
        lead_type=lead_type,
    )
