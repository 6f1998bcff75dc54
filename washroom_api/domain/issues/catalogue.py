"""Issue types a washroom visitor can report"""

from dataclasses import dataclass

STATUS_OPEN = "open"
STATUS_RESOLVED = "resolved"


@dataclass(frozen=True)
class IssueType:
    value: str
    label_en: str
    label_fr: str

    @property
    def label(self) -> str:
        return f"{self.label_en} / {self.label_fr}"


ISSUE_TYPES = [
    IssueType("out_of_supplies", "Out of Supplies", "Rupture de stock"),
    IssueType("needs_cleaning", "Needs Cleaning", "Nécessite un nettoyage"),
    IssueType("maintenance_required", "Maintenance Required", "Entretien requis"),
    IssueType("safety_concern", "Safety Concern", "Problème de sécurité"),
    IssueType("other", "Other", "Autre"),
]

ISSUE_TYPES_BY_VALUE = {issue_type.value: issue_type for issue_type in ISSUE_TYPES}


def issue_label(value: str) -> str:
    issue_type = ISSUE_TYPES_BY_VALUE.get(value)
    return issue_type.label if issue_type else value
