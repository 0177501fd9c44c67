"""Keyword-based category inference for interaction signals."""

from dataclasses import dataclass
from typing import Optional

import structlog

from personalization.catalog import CategoryCatalog
from shared_types import GENERAL_CATEGORY

logger = structlog.get_logger()


@dataclass(frozen=True)
class InteractionSignal:
    """What is known about a clicked element.

    hint: id of the enclosing page section, if any.
    href: link target.
    label: visible text of the element.
    """

    hint: Optional[str] = None
    href: str = ""
    label: str = ""


class Classifier:
    """Map an interaction signal to a catalog category id.

    Resolution order: an exact section hint, then the first category (in
    catalog order) with a keyword contained in ``href + label``, then
    ``general``. No scoring between multiple matches.
    """

    def __init__(self, catalog: CategoryCatalog):
        self.catalog = catalog

    def classify(self, signal: InteractionSignal) -> str:
        if signal.hint and signal.hint in self.catalog:
            return signal.hint

        haystack = f"{signal.href} {signal.label}".lower()
        for category in self.catalog:
            for keyword in category.keywords:
                if keyword.lower() in haystack:
                    logger.debug("classifier.keyword_match", category=category.id, keyword=keyword)
                    return category.id

        return GENERAL_CATEGORY
