#!/usr/bin/env python3
"""
Category Hierarchy

In-memory tree of a family's categories (roots plus one level of
subcategories) built once per request from a flat snapshot.

Features:
- Validates the one-level nesting rule and parent references
- Parent/children navigation in stable name order
- Rollup of leaf-keyed amounts to ancestor totals, zero-filled
"""

import logging
from collections.abc import Iterable, Iterator, Mapping

from .currency import DEFAULT_CURRENCY
from .exceptions import InvalidCategoryTree, UnknownCategory
from .models import Category, CategoryId, Classification
from .money import Money

logger = logging.getLogger(__name__)


class CategoryTree:
    """
    Read-only hierarchy over a consistent category snapshot.

    Example:
        >>> tree = CategoryTree([
        ...     Category("food", "Food", Classification.EXPENSE),
        ...     Category("groceries", "Groceries", Classification.EXPENSE, parent_id="food"),
        ... ])
        >>> rolled = tree.rollup({"groceries": Money.of("120")})
        >>> rolled["food"].format()
        '$120.00'
    """

    def __init__(self, categories: Iterable[Category]):
        self._by_id: dict[CategoryId, Category] = {}
        self._children: dict[CategoryId, list[Category]] = {}

        for category in categories:
            if category.id in self._by_id:
                raise InvalidCategoryTree(f"Duplicate category id: {category.id!r}")
            self._by_id[category.id] = category

        for category in self._by_id.values():
            if category.parent_id is None:
                continue
            if category.parent_id == category.id:
                raise InvalidCategoryTree(f"Category {category.id!r} is its own parent")
            parent = self._by_id.get(category.parent_id)
            if parent is None:
                raise InvalidCategoryTree(
                    f"Category {category.id!r} references unknown parent {category.parent_id!r}"
                )
            if parent.parent_id is not None:
                raise InvalidCategoryTree(
                    f"Category {category.id!r} nests under subcategory {parent.id!r}; "
                    "only one level of nesting is allowed"
                )
            self._children.setdefault(parent.id, []).append(category)

        for children in self._children.values():
            children.sort(key=lambda c: c.name)

        logger.debug("Built category tree with %d categories", len(self._by_id))

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._by_id.values())

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def get(self, category_id: CategoryId) -> Category:
        """
        Look up a category by id.

        Raises:
            UnknownCategory: If the id is not in the tree
        """
        try:
            return self._by_id[category_id]
        except KeyError:
            raise UnknownCategory(category_id) from None

    def roots(self) -> list[Category]:
        """Top-level categories, ordered by name."""
        return sorted((c for c in self._by_id.values() if c.parent_id is None), key=lambda c: c.name)

    def children_of(self, category_id: CategoryId) -> list[Category]:
        """Direct subcategories of a category, ordered by name."""
        self.get(category_id)
        return list(self._children.get(category_id, []))

    def parent_of(self, category_id: CategoryId) -> Category | None:
        category = self.get(category_id)
        return self._by_id[category.parent_id] if category.parent_id is not None else None

    def root_of(self, category_id: CategoryId) -> Category:
        """The category itself if it is a root, otherwise its parent."""
        return self.parent_of(category_id) or self.get(category_id)

    def descendant_ids(self, category_id: CategoryId) -> set[CategoryId]:
        """The category's id together with every subcategory id."""
        ids = {category_id}
        for child in self.children_of(category_id):
            ids |= self.descendant_ids(child.id)
        return ids

    def filter(self, classification: Classification) -> "CategoryTree":
        """
        Sub-tree containing only categories of one classification.

        A subcategory whose parent has the other classification is dropped
        along with that parent.
        """
        kept = [c for c in self._by_id.values() if c.classification == classification]
        kept_ids = {c.id for c in kept}
        return CategoryTree(c for c in kept if c.parent_id is None or c.parent_id in kept_ids)

    def rollup(
        self,
        leaf_totals: Mapping[CategoryId, Money],
        currency: str | None = None,
    ) -> dict[CategoryId, Money]:
        """
        Roll leaf amounts up to every ancestor.

        Every category in the tree appears in the result; categories with no
        amount of their own or below get zero. Each category's value is its
        own amount plus all of its descendants' amounts.

        Args:
            leaf_totals: Category id to amount
            currency: Currency for zero values; defaults to the amounts' currency

        Returns:
            Category id to rolled-up amount

        Raises:
            UnknownCategory: If leaf_totals names a category not in the tree
            CurrencyMismatch: If amounts use different currencies
        """
        if currency is None:
            currency = next(iter(leaf_totals.values())).currency if leaf_totals else DEFAULT_CURRENCY

        for category_id in leaf_totals:
            if category_id not in self._by_id:
                raise UnknownCategory(category_id)

        result: dict[CategoryId, Money] = {}

        def visit(category: Category) -> Money:
            total = Money.zero(currency).add(leaf_totals.get(category.id, Money.zero(currency)))
            for child in self._children.get(category.id, []):
                total = total.add(visit(child))
            result[category.id] = total
            return total

        for root in self.roots():
            visit(root)
        return result
