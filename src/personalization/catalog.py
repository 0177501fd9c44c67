"""Support resource catalog: categories, keywords, related topics, curated links."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional


@dataclass(frozen=True)
class Resource:
    title: str
    url: str  # identity for de-duplication
    description: str = ""
    category: str = ""


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    keywords: tuple[str, ...] = ()
    related: tuple[str, ...] = ()
    resources: tuple[Resource, ...] = field(default_factory=tuple)


def _category(
    id: str,
    name: str,
    keywords: list[str],
    related: list[str],
    resources: list[tuple[str, str, str]],
) -> Category:
    return Category(
        id=id,
        name=name,
        keywords=tuple(keywords),
        related=tuple(related),
        resources=tuple(Resource(title, url, desc, id) for title, url, desc in resources),
    )


# Declaration order matters: the classifier picks the first category whose
# keyword matches, so earlier categories win overlapping keywords.
DEFAULT_CATEGORIES: list[Category] = [
    _category(
        "mental-health",
        "Mental Health",
        [
            "mind",
            "mental",
            "anxiety",
            "depression",
            "stress",
            "wellbeing",
            "therapy",
            "counselling",
            "psychology",
            "rethink",
            "sane",
            "helpguide",
            "beyondblue",
        ],
        ["professional-guidance", "financial-support", "self-care"],
        [
            ("Mind - Mental Health Support", "https://www.mind.org.uk", "Information and support for mental health problems"),
            ("Rethink Mental Illness", "https://www.rethink.org", "Support for those severely affected by mental illness"),
            ("SANE Mental Health", "https://www.sane.org.uk", "Emotional support and information"),
            ("Mental Health Foundation", "https://www.mentalhealth.org.uk", "Prevention and research"),
        ],
    ),
    _category(
        "grief-loss",
        "Grief & Loss",
        ["grief", "loss", "bereavement", "death", "dying", "cruse", "samaritans", "marie curie", "funeral", "mourning"],
        ["mental-health", "financial-support", "degenerative"],
        [
            ("Cruse Bereavement Support", "https://www.cruse.org.uk", "Free bereavement support"),
            ("Marie Curie", "https://www.mariecurie.org.uk", "End of life care and support"),
            ("What's Your Grief", "https://whatsyourgrief.com", "Grief education and resources"),
            ("Samaritans", "https://www.samaritans.org", "24/7 listening support"),
        ],
    ),
    _category(
        "degenerative",
        "Degenerative Conditions",
        [
            "alzheimer",
            "dementia",
            "parkinson",
            "mnd",
            "motor neurone",
            "ms",
            "multiple sclerosis",
            "progressive",
            "neurological",
        ],
        ["financial-support", "grief-loss", "professional-guidance"],
        [
            ("Alzheimer's Society", "https://www.alzheimers.org.uk", "Dementia support and information"),
            ("Parkinson's UK", "https://www.parkinsons.org.uk", "Support for Parkinson's"),
            ("MND Association", "https://www.mndassociation.org", "Motor Neurone Disease support"),
            ("MS Society", "https://www.mssociety.org.uk", "Multiple Sclerosis support"),
        ],
    ),
    _category(
        "financial-support",
        "Financial Support",
        [
            "money",
            "financial",
            "benefits",
            "pip",
            "universal credit",
            "esa",
            "allowance",
            "grants",
            "debt",
            "carers allowance",
            "turn2us",
            "citizens advice",
        ],
        ["mental-health", "degenerative", "carers"],
        [
            ("Turn2us", "https://www.turn2us.org.uk", "Benefits calculator and grants search"),
            ("Citizens Advice", "https://www.citizensadvice.org.uk/benefits", "Free benefits advice"),
            ("Mental Health & Money Advice", "https://mentalhealthandmoneyadvice.org", "Money and mental health support"),
            (
                "Carers UK Financial Support",
                "https://www.carersuk.org/help-and-advice/financial-support",
                "Help for carers",
            ),
        ],
    ),
    _category(
        "professional-guidance",
        "Professional Guidance",
        ["nice", "nhs", "rcpsych", "clinical", "guidelines", "treatment", "doctor", "psychiatrist", "gp", "medication"],
        ["mental-health", "degenerative"],
        [
            ("NICE Guidelines", "https://www.nice.org.uk", "Evidence-based healthcare guidance"),
            ("NHS Mental Health", "https://www.nhs.uk/mental-health", "NHS mental health services"),
            ("Royal College of Psychiatrists", "https://www.rcpsych.ac.uk/mental-health", "Trusted mental health information"),
            ("Clinical Knowledge Summaries", "https://cks.nice.org.uk", "Clinical guidance for professionals"),
        ],
    ),
    _category(
        "carers",
        "Carers Support",
        ["carer", "caring", "caregiver", "family", "looking after", "support someone"],
        ["financial-support", "degenerative", "mental-health"],
        [
            ("Carers UK", "https://www.carersuk.org", "Support and advice for carers"),
            ("Carers Trust", "https://carers.org", "Help for unpaid carers"),
            ("Dementia UK", "https://www.dementiauk.org", "Admiral Nurses for dementia carers"),
            (
                "Young Carers",
                "https://www.childrenssociety.org.uk/what-we-do/our-work/supporting-young-carers",
                "Support for young carers",
            ),
        ],
    ),
    _category(
        "crisis",
        "Crisis Support",
        ["crisis", "urgent", "emergency", "suicide", "self-harm", "immediate", "now", "help"],
        ["mental-health", "grief-loss"],
        [
            ("Samaritans - 116 123", "https://www.samaritans.org", "Free 24/7 support"),
            ("NHS Crisis - 111", "https://www.nhs.uk/nhs-services/mental-health-services", "NHS mental health crisis"),
            ("CALM - 0800 58 58 58", "https://www.thecalmzone.net", "For men in crisis"),
            ("Shout - Text 85258", "https://giveusashout.org", "Crisis text support"),
        ],
    ),
]


class CategoryCatalog:
    """Read-only, ordered view over the categories known to the site."""

    def __init__(self, categories: Optional[Iterable[Category]] = None):
        source = DEFAULT_CATEGORIES if categories is None else categories
        self._categories: dict[str, Category] = {c.id: c for c in source}

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._categories

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def get(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def ids(self) -> list[str]:
        return list(self._categories)

    def display_name(self, category_id: str, default: str = "Resource") -> str:
        category = self._categories.get(category_id)
        return category.name if category else default

    def resources(self, category_id: str, limit: Optional[int] = None) -> list[Resource]:
        """Curated resources for a category, empty for unknown ids."""
        category = self._categories.get(category_id)
        if category is None:
            return []
        items = list(category.resources)
        return items if limit is None else items[:limit]
