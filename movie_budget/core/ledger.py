"""
Budget ledger state management.

Holds budget line items and keeps the derived totals consistent with them.

Every mutation produces a fresh LedgerState snapshot whose totals are
computed from the full item collection, so a reader never observes totals
that disagree with the items they were derived from.
"""

from dataclasses import dataclass, field, replace
import datetime
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import uuid4


DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Above the Line",
    "Production",
    "Post-Production",
    "Other",
    "Contingency",
)

DEFAULT_SUBCATEGORIES: Dict[str, Tuple[str, ...]] = {
    "Above the Line": ("Director", "Producer", "Writer", "Cast", "Crew"),
    "Production": ("Equipment", "Location", "Props", "Costumes", "Transportation"),
    "Post-Production": ("Editing", "Visual Effects", "Sound", "Music", "Color Grading"),
    "Other": ("Insurance", "Legal", "Marketing", "Distribution"),
    "Contingency": ("Emergency Fund", "Overages"),
}


def new_item_id() -> str:
    """Return a fresh opaque identifier for a line item."""
    return uuid4().hex


@dataclass(frozen=True)
class BudgetLineItem:
    """One recorded or planned expense.

    Variance is never taken from the caller: it is always actual - amount.
    Items are replaced wholesale on edit, never mutated in place.
    """
    id: str
    category: str
    subcategory: str
    description: str
    amount: float
    actual: float = 0.0
    notes: str = ""
    date: datetime.date = field(default_factory=datetime.date.today)
    variance: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "variance", self.actual - self.amount)

    @classmethod
    def create(
        cls,
        category: str,
        subcategory: str,
        description: str,
        amount: float,
        actual: float = 0.0,
        notes: str = "",
        item_date: Optional[datetime.date] = None,
    ) -> "BudgetLineItem":
        """Build a new item with a freshly generated identifier."""
        return cls(
            id=new_item_id(),
            category=category,
            subcategory=subcategory,
            description=description,
            amount=amount,
            actual=actual,
            notes=notes,
            date=item_date or datetime.date.today(),
        )

    def with_changes(self, **changes) -> "BudgetLineItem":
        """Return a full replacement of this item with the given fields changed."""
        changes.pop("variance", None)
        return replace(self, **changes)


@dataclass(frozen=True)
class LedgerState:
    """Read model of the ledger: items, derived totals and category taxonomy."""
    items: Tuple[BudgetLineItem, ...]
    total_budget: float
    total_actual: float
    total_variance: float
    categories: Tuple[str, ...]
    subcategories: Dict[str, Tuple[str, ...]]

    def find(self, item_id: str) -> Optional[BudgetLineItem]:
        """Return the item with the given identifier, if present."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def items_in(self, category: str) -> List[BudgetLineItem]:
        """Return items belonging to a category, in display order."""
        return [item for item in self.items if item.category == category]


def _derive(
    items: Iterable[BudgetLineItem],
    categories: Tuple[str, ...],
    subcategories: Dict[str, Tuple[str, ...]],
) -> LedgerState:
    """Build a snapshot, recomputing every total from scratch."""
    items = tuple(items)
    return LedgerState(
        items=items,
        total_budget=sum(item.amount for item in items),
        total_actual=sum(item.actual for item in items),
        total_variance=sum(item.variance for item in items),
        categories=categories,
        subcategories=subcategories,
    )


class LedgerStore:
    """Process-wide budget ledger for one application session.

    None of the operations validate their input: category membership,
    empty strings and negative amounts are all accepted as given. Form
    validation happens before these calls are made.
    """

    def __init__(
        self,
        categories: Iterable[str] = DEFAULT_CATEGORIES,
        subcategories: Optional[Dict[str, Iterable[str]]] = None,
    ):
        if subcategories is None:
            subcategories = DEFAULT_SUBCATEGORIES
        self._state = _derive(
            (),
            tuple(categories),
            {name: tuple(values) for name, values in subcategories.items()},
        )

    @property
    def state(self) -> LedgerState:
        """Current immutable snapshot of the ledger."""
        return self._state

    def add_item(self, item: BudgetLineItem) -> LedgerState:
        """Append an item and recompute totals."""
        return self._set_items(self._state.items + (item,))

    def update_item(self, item: BudgetLineItem) -> LedgerState:
        """Replace the item sharing item.id; unknown ids leave the items unchanged."""
        items = tuple(
            item if existing.id == item.id else existing
            for existing in self._state.items
        )
        return self._set_items(items)

    def delete_item(self, item_id: str) -> LedgerState:
        """Remove the item with the given id; unknown ids are a no-op."""
        items = tuple(item for item in self._state.items if item.id != item_id)
        return self._set_items(items)

    def replace_all(self, items: Iterable[BudgetLineItem]) -> LedgerState:
        """Discard the current items and install the given ones."""
        return self._set_items(tuple(items))

    def add_category(self, name: str) -> LedgerState:
        """Append a category with an empty subcategory list.

        Duplicate names are kept; adding an existing name appends it again
        and resets its subcategory list to empty.
        """
        subcategories = dict(self._state.subcategories)
        subcategories[name] = ()
        self._state = replace(
            self._state,
            categories=self._state.categories + (name,),
            subcategories=subcategories,
        )
        return self._state

    def add_subcategory(self, category: str, subcategory: str) -> LedgerState:
        """Append a subcategory, treating an unknown category as empty."""
        subcategories = dict(self._state.subcategories)
        subcategories[category] = subcategories.get(category, ()) + (subcategory,)
        self._state = replace(self._state, subcategories=subcategories)
        return self._state

    def _set_items(self, items: Tuple[BudgetLineItem, ...]) -> LedgerState:
        self._state = _derive(items, self._state.categories, self._state.subcategories)
        return self._state
