"""Static resource search: plain case-insensitive substring filter."""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class SearchEntry:
    id: str
    title: str
    category: str  # display label, e.g. "Mental Health"
    description: str
    keywords: str
    url: str
    section: str  # page section (category id) the card lives in

    @property
    def search_text(self) -> str:
        return f"{self.title} {self.description} {self.keywords} {self.category}".lower()


SEARCH_INDEX: list[SearchEntry] = [
    # Mental Health
    SearchEntry("mind", "Mind", "Mental Health", "Leading mental health charity in England and Wales",
                "anxiety depression stress wellbeing counselling therapy", "https://www.mind.org.uk", "mental-health"),
    SearchEntry("mhf", "Mental Health Foundation", "Mental Health", "UK charity focused on prevention and research",
                "prevention awareness week research", "https://www.mentalhealth.org.uk", "mental-health"),
    SearchEntry("helpguide", "HelpGuide", "Mental Health", "Evidence-based mental health resources",
                "anxiety depression ptsd meditation self-help", "https://www.helpguide.org", "mental-health"),
    SearchEntry("beyondblue", "Beyond Blue", "Mental Health", "Australian mental health organisation",
                "anxiety depression suicide prevention", "https://www.beyondblue.org.au", "mental-health"),
    SearchEntry("rethink", "Rethink Mental Illness", "Mental Health", "Support for those severely affected by mental illness",
                "schizophrenia bipolar severe mental illness", "https://www.rethink.org", "mental-health"),
    SearchEntry("sane", "SANE", "Mental Health", "Emotional support and combating stigma",
                "saneline emotional support stigma", "https://www.sane.org.uk", "mental-health"),
    # Professional Guidance
    SearchEntry("nice", "NICE Guidelines", "Professional Guidance", "National Institute for Health and Care Excellence",
                "clinical guidelines treatment evidence-based", "https://www.nice.org.uk", "professional-guidance"),
    SearchEntry("nhs", "NHS Mental Health", "Professional Guidance", "NHS mental health services and information",
                "nhs doctor gp treatment medication", "https://www.nhs.uk/mental-health", "professional-guidance"),
    SearchEntry("rcpsych", "Royal College of Psychiatrists", "Professional Guidance", "Trusted mental health information",
                "psychiatrist medication treatment professional", "https://www.rcpsych.ac.uk", "professional-guidance"),
    SearchEntry("cks", "Clinical Knowledge Summaries", "Professional Guidance", "Clinical guidance for professionals",
                "clinical gp professional diagnosis", "https://cks.nice.org.uk", "professional-guidance"),
    # Grief & Loss
    SearchEntry("cruse", "Cruse Bereavement Support", "Grief & Loss", "Free bereavement support",
                "grief bereavement death loss mourning", "https://www.cruse.org.uk", "grief-loss"),
    SearchEntry("mariecurie", "Marie Curie", "Grief & Loss", "End of life care and support",
                "dying death palliative care hospice", "https://www.mariecurie.org.uk", "grief-loss"),
    SearchEntry("wyg", "What's Your Grief", "Grief & Loss", "Grief education and resources",
                "grief education coping loss", "https://whatsyourgrief.com", "grief-loss"),
    SearchEntry("samaritans", "Samaritans", "Crisis Support", "24/7 listening support",
                "crisis suicide support 116123", "https://www.samaritans.org", "crisis"),
    # Degenerative Conditions
    SearchEntry("alzheimers", "Alzheimer's Society", "Degenerative Conditions", "Dementia support and information",
                "alzheimers dementia memory cognitive", "https://www.alzheimers.org.uk", "degenerative"),
    SearchEntry("parkinsons", "Parkinson's UK", "Degenerative Conditions", "Support for Parkinsons",
                "parkinsons tremor movement neurological", "https://www.parkinsons.org.uk", "degenerative"),
    SearchEntry("mnd", "MND Association", "Degenerative Conditions", "Motor Neurone Disease support",
                "motor neurone disease als lou gehrig", "https://www.mndassociation.org", "degenerative"),
    SearchEntry("ms", "MS Society", "Degenerative Conditions", "Multiple Sclerosis support",
                "multiple sclerosis ms neurological", "https://www.mssociety.org.uk", "degenerative"),
    # Financial Support
    SearchEntry("mhma", "Mental Health & Money Advice", "Financial Support", "Money and mental health support",
                "money debt financial anxiety", "https://mentalhealthandmoneyadvice.org", "financial-support"),
    SearchEntry("turn2us", "Turn2us", "Financial Support", "Benefits calculator and grants search",
                "benefits grants calculator welfare", "https://www.turn2us.org.uk", "financial-support"),
    SearchEntry("citizensadvice", "Citizens Advice", "Financial Support", "Free benefits advice",
                "benefits advice pip esa universal credit", "https://www.citizensadvice.org.uk", "financial-support"),
    SearchEntry("carersuk", "Carers UK", "Financial Support", "Help for carers",
                "carers allowance caring family support", "https://www.carersuk.org", "financial-support"),
]


class SearchIndex:
    def __init__(self, entries: Optional[Iterable[SearchEntry]] = None):
        self.entries = list(SEARCH_INDEX if entries is None else entries)

    def search(self, query: str) -> list[SearchEntry]:
        """Entries whose title, description, keywords or category contain the query."""
        needle = query.strip().lower()
        if not needle:
            return []
        return [e for e in self.entries if needle in e.search_text]

    def get(self, entry_id: str) -> Optional[SearchEntry]:
        return next((e for e in self.entries if e.id == entry_id), None)
