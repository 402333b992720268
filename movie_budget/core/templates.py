"""
Budget template catalog.

Fixed starter budgets for common project types, plus the single pending
slot that holds the most recently generated template until it is applied.
"""

import datetime
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .ledger import BudgetLineItem, new_item_id


FEATURE_FILM = "feature-film"
SHORT_FILM = "short-film"
DOCUMENTARY = "documentary"


@dataclass(frozen=True)
class TemplateItem:
    """One planned line of a template."""
    category: str
    subcategory: str
    description: str
    amount: float


@dataclass(frozen=True)
class BudgetTemplate:
    """Named, ordered set of planned line items."""
    name: str
    description: str
    items: Tuple[TemplateItem, ...]

    @property
    def total(self) -> float:
        """Sum of every planned amount."""
        return sum(item.amount for item in self.items)

    def to_line_items(self, today: Optional[datetime.date] = None) -> List[BudgetLineItem]:
        """Synthesize ledger items for this template.

        Each item gets a fresh identifier, no spend to date, and a note
        naming the template it came from.
        """
        item_date = today or datetime.date.today()
        return [
            BudgetLineItem(
                id=new_item_id(),
                category=item.category,
                subcategory=item.subcategory,
                description=item.description,
                amount=item.amount,
                actual=0.0,
                notes=f"Template item from {self.name}",
                date=item_date,
            )
            for item in self.items
        ]


# Fixed catalog - no user-defined templates
TEMPLATE_CATALOG: Dict[str, BudgetTemplate] = {
    FEATURE_FILM: BudgetTemplate(
        name="Feature Film Budget Template",
        description="Standard template for a feature film production",
        items=(
            TemplateItem("Above the Line", "Director", "Director Fee", 150000),
            TemplateItem("Above the Line", "Producer", "Producer Fee", 100000),
            TemplateItem("Above the Line", "Cast", "Lead Actor", 500000),
            TemplateItem("Production", "Equipment", "Camera Package", 75000),
            TemplateItem("Production", "Location", "Location Fees", 50000),
            TemplateItem("Post-Production", "Editing", "Editor Fee", 60000),
            TemplateItem("Post-Production", "Visual Effects", "VFX Budget", 100000),
            TemplateItem("Other", "Insurance", "Production Insurance", 25000),
            TemplateItem("Contingency", "Emergency Fund", "Contingency Fund", 100000),
        ),
    ),
    SHORT_FILM: BudgetTemplate(
        name="Short Film Budget Template",
        description="Template for short film production",
        items=(
            TemplateItem("Above the Line", "Director", "Director Fee", 5000),
            TemplateItem("Production", "Equipment", "Camera Rental", 2000),
            TemplateItem("Production", "Location", "Location Fees", 1000),
            TemplateItem("Post-Production", "Editing", "Editor Fee", 3000),
            TemplateItem("Other", "Marketing", "Festival Submissions", 500),
        ),
    ),
    DOCUMENTARY: BudgetTemplate(
        name="Documentary Budget Template",
        description="Template for documentary production",
        items=(
            TemplateItem("Above the Line", "Director", "Director Fee", 30000),
            TemplateItem("Production", "Equipment", "Camera & Sound Equipment", 15000),
            TemplateItem("Production", "Transportation", "Travel Expenses", 10000),
            TemplateItem("Post-Production", "Editing", "Editor Fee", 25000),
            TemplateItem("Other", "Legal", "Clearance & Rights", 5000),
        ),
    ),
}


def generate_template(project_type: str) -> BudgetTemplate:
    """Return the catalog template for a project type.

    Unknown project types fall back to the feature film template.
    """
    return TEMPLATE_CATALOG.get(project_type, TEMPLATE_CATALOG[FEATURE_FILM])


def format_amount(amount: float) -> str:
    """Format a monetary amount with thousands separators and no symbol."""
    # Up to three decimals, trailing zeros dropped, like en-US toLocaleString
    return f"{amount:,.3f}".rstrip("0").rstrip(".")


def render_template(template: BudgetTemplate) -> str:
    """Render a template listing as chat markup."""
    lines = [
        f"📋 **{template.name}**",
        "",
        template.description,
        "",
        "**Template Items:**",
    ]
    for item in template.items:
        lines.append(
            f"• {item.category} > {item.subcategory}: "
            f"{item.description} - ${format_amount(item.amount)}"
        )
    lines.append("")
    lines.append("Would you like me to apply this template to your budget?")
    return "\n".join(lines)


class PendingTemplateSlot:
    """Scratch holder for the last generated, not yet applied template.

    Holds at most one template; storing a new one discards the previous.
    """

    def __init__(self):
        self._template: Optional[BudgetTemplate] = None

    @property
    def template(self) -> Optional[BudgetTemplate]:
        return self._template

    def store(self, template: BudgetTemplate) -> None:
        self._template = template

    def take(self) -> Optional[BudgetTemplate]:
        """Return the pending template and empty the slot."""
        template, self._template = self._template, None
        return template

    def __bool__(self) -> bool:
        return self._template is not None
