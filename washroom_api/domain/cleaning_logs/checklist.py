"""
Cleaning checklist catalogue
Staff tick every item; the result folds into the five legacy checklist columns.
"""

from dataclasses import asdict, dataclass
from typing import Optional

STATUS_COMPLETE = "complete"
STATUS_ATTENTION_REQUIRED = "attention_required"


@dataclass(frozen=True)
class ChecklistSection:
    id: str
    title_en: str
    title_fr: str


@dataclass(frozen=True)
class ChecklistItem:
    key: str
    label_en: str
    label_fr: str
    section: str
    has_na_option: bool = False


CHECKLIST_SECTIONS = [
    ChecklistSection(
        "supplies",
        "1. Supplies & Restocking (Hygiene & Handwashing)",
        "Approvisionnement et réapprovisionnement (hygiène et lavage des mains)",
    ),
    ChecklistSection(
        "sanitization",
        "2. Sanitization (Infection Control)",
        "Désinfection (contrôle des infections)",
    ),
    ChecklistSection(
        "facility",
        "3. Facility & Safety (Compliance)",
        "Installations et sécurité (conformité)",
    ),
]

CHECKLIST_ITEMS = [
    ChecklistItem("handwashingStation", "Handwashing Station", "Poste de lavage des mains", "supplies"),
    ChecklistItem("toiletPaper", "Toilet Paper", "Papier hygiénique", "supplies"),
    ChecklistItem("bins", "Bins", "Poubelles", "supplies"),
    ChecklistItem("requiredSignage", "Required Signage", "Signalisation requise", "supplies", has_na_option=True),
    ChecklistItem("surfacesDisinfected", "Surfaces Disinfected", "Surfaces désinfectées", "sanitization"),
    ChecklistItem("fixtures", "Fixtures", "Installations", "sanitization"),
    ChecklistItem("cleaningTools", "Cleaning Tools", "Outils de nettoyage", "sanitization"),
    ChecklistItem("chemicalStorage", "Chemical Storage", "Entreposage des produits chimiques", "sanitization"),
    ChecklistItem("waterTemperature", "Water Temperature", "Température de l'eau", "facility"),
    ChecklistItem("floors", "Floors", "Planchers", "facility"),
    ChecklistItem("ventilationLighting", "Ventilation & Lighting", "Ventilation et éclairage", "facility"),
    ChecklistItem("structuralIntegrity", "Structural Integrity", "Intégrité structurelle", "facility"),
]

CHECKLIST_KEYS = {item.key for item in CHECKLIST_ITEMS}


def checklist_by_section() -> list[dict]:
    """Sections in form order, each carrying its items"""
    return [
        {
            **asdict(section),
            "items": [asdict(item) for item in CHECKLIST_ITEMS if item.section == section.id],
        }
        for section in CHECKLIST_SECTIONS
    ]


# Each legacy column is the AND of these checklist items
LEGACY_COLUMNS = {
    "checklist_supplies": ("handwashingStation", "toiletPaper"),
    "checklist_surfaces": ("surfacesDisinfected",),
    "checklist_fixtures": ("fixtures", "waterTemperature", "ventilationLighting"),
    "checklist_trash": ("bins",),
    "checklist_floor": ("floors",),
}


def item_done(checklist: dict[str, bool], item: ChecklistItem, not_applicable: set[str]) -> bool:
    if checklist.get(item.key, False):
        return True
    return item.has_na_option and item.key in not_applicable


def unchecked_items(checklist: dict[str, bool], not_applicable: Optional[set[str]] = None) -> list[str]:
    """Bilingual labels of every item still open"""
    not_applicable = not_applicable or set()
    return [
        f"{item.label_en} / {item.label_fr}"
        for item in CHECKLIST_ITEMS
        if not item_done(checklist, item, not_applicable)
    ]


def checklist_status(checklist: dict[str, bool], not_applicable: Optional[set[str]] = None) -> str:
    return STATUS_ATTENTION_REQUIRED if unchecked_items(checklist, not_applicable) else STATUS_COMPLETE


def to_legacy_columns(checklist: dict[str, bool]) -> dict[str, bool]:
    return {
        column: all(checklist.get(key, False) for key in keys)
        for column, keys in LEGACY_COLUMNS.items()
    }


def from_legacy_columns(log) -> dict[str, bool]:
    """Per-item flags implied by a stored log; items sharing a legacy column share its value"""
    expanded: dict[str, bool] = {}
    for column, keys in LEGACY_COLUMNS.items():
        for key in keys:
            expanded[key] = bool(getattr(log, column))
    return expanded
