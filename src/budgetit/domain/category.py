"""Category domain service."""

from __future__ import annotations

from typing import Any, Optional, Sequence, TYPE_CHECKING

from budgetit.domain.entities import Category, CategoryGroup
from budgetit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_group_not_found,
    category_not_found,
    plan_not_found,
)

if TYPE_CHECKING:
    from budgetit.database.base import Database


class CategoryService:
    """Service for managing category groups and categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_group(self, plan_id: int, name: str) -> int:
        """Create a category group at the end of the plan's ordering.

        Args:
            plan_id: Plan ID
            name: Group name

        Returns:
            Category group ID

        Raises:
            NotFoundError: If the plan doesn't exist
            ConflictError: If a group with the same name exists
        """
        if self.db.get_plan(plan_id) is None:
            raise NotFoundError(plan_not_found(plan_id))
        name = self._clean_name(name, "Category group")

        groups = self.db.list_category_groups(plan_id)
        if any(g.name == name for g in groups):
            raise ConflictError(f"Category group '{name}' already exists")

        sort_order = max((g.sort_order for g in groups), default=-1) + 1
        return self.db.create_category_group(plan_id=plan_id, name=name, sort_order=sort_order)

    def create_category(self, group_id: int, name: str) -> int:
        """Create a category at the end of a group.

        Args:
            group_id: Category group ID
            name: Category name

        Returns:
            Category ID

        Raises:
            NotFoundError: If the group doesn't exist
            ConflictError: If the group already has a category with this name
        """
        group = self.require_group(group_id)
        name = self._clean_name(name, "Category")

        siblings = self.db.list_categories(group.plan_id, group_id=group_id)
        if any(c.name == name for c in siblings):
            raise ConflictError(f"Category '{name}' already exists in group '{group.name}'")

        sort_order = max((c.sort_order for c in siblings), default=-1) + 1
        return self.db.create_category(group_id=group_id, name=name, sort_order=sort_order)

    def get_group(self, group_id: int) -> Optional[CategoryGroup]:
        """Get category group by ID."""
        return self.db.get_category_group(group_id)

    def require_group(self, group_id: int, plan_id: Optional[int] = None) -> CategoryGroup:
        """Get a category group or raise NotFoundError."""
        group = self.db.get_category_group(group_id)
        if group is None or (plan_id is not None and group.plan_id != plan_id):
            raise NotFoundError(category_group_not_found(group_id))
        return group

    def get_group_by_name(self, plan_id: int, name: str) -> Optional[CategoryGroup]:
        """Find a group by name (case-insensitive)."""
        wanted = name.strip().lower()
        for group in self.db.list_category_groups(plan_id):
            if group.name.lower() == wanted:
                return group
        return None

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: int, plan_id: Optional[int] = None) -> Category:
        """Get a category, optionally checking it belongs to ``plan_id``.

        Raises:
            NotFoundError: If the category doesn't exist in the plan
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if plan_id is not None:
            group = self.db.get_category_group(category.group_id)
            if group is None or group.plan_id != plan_id:
                raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_path(self, plan_id: int, path: str) -> Optional[Category]:
        """Find a category by "Group > Category" path or by bare name.

        A bare name must match exactly one category in the plan. Matching is
        case-insensitive.
        """
        parts = [p.strip().lower() for p in path.split(">")]
        groups = {g.id: g for g in self.db.list_category_groups(plan_id)}
        categories = self.db.list_categories(plan_id)

        if len(parts) == 2:
            group_name, category_name = parts
            matches = [
                c for c in categories
                if c.name.lower() == category_name and groups[c.group_id].name.lower() == group_name
            ]
        elif len(parts) == 1:
            matches = [c for c in categories if c.name.lower() == parts[0]]
        else:
            return None

        return matches[0] if len(matches) == 1 else None

    def list_groups(self, plan_id: int, include_hidden: bool = True) -> list[CategoryGroup]:
        """List a plan's category groups in display order."""
        groups = self.db.list_category_groups(plan_id)
        if not include_hidden:
            groups = [g for g in groups if not g.hidden]
        return groups

    def list_categories(self, plan_id: int, include_hidden: bool = True) -> list[Category]:
        """List a plan's categories in display order.

        With ``include_hidden=False`` both hidden categories and categories
        in hidden groups are left out.
        """
        categories = self.db.list_categories(plan_id)
        if include_hidden:
            return categories
        hidden_groups = {g.id for g in self.db.list_category_groups(plan_id) if g.hidden}
        return [c for c in categories if not c.hidden and c.group_id not in hidden_groups]

    def get_category_tree(self, plan_id: int, include_hidden: bool = True) -> list[dict[str, Any]]:
        """Get groups with their categories nested under 'categories'."""
        categories = self.db.list_categories(plan_id)
        tree = []
        for group in self.list_groups(plan_id, include_hidden=include_hidden):
            children = [
                c for c in categories
                if c.group_id == group.id and (include_hidden or not c.hidden)
            ]
            tree.append({"group": group, "categories": children})
        return tree

    def rename_group(self, group_id: int, name: str) -> None:
        """Rename a category group."""
        group = self.require_group(group_id)
        name = self._clean_name(name, "Category group")
        if any(g.id != group_id and g.name == name for g in self.db.list_category_groups(group.plan_id)):
            raise ConflictError(f"Category group '{name}' already exists")
        self.db.update_category_group(group_id, name=name)

    def rename_category(self, category_id: int, name: str) -> None:
        """Rename a category."""
        category = self.require_category(category_id)
        group = self.require_group(category.group_id)
        name = self._clean_name(name, "Category")
        siblings = self.db.list_categories(group.plan_id, group_id=group.id)
        if any(c.id != category_id and c.name == name for c in siblings):
            raise ConflictError(f"Category '{name}' already exists in group '{group.name}'")
        self.db.update_category(category_id, name=name)

    def set_group_hidden(self, group_id: int, hidden: bool) -> None:
        """Hide or show a category group."""
        self.require_group(group_id)
        self.db.update_category_group(group_id, hidden=hidden)

    def set_category_hidden(self, category_id: int, hidden: bool) -> None:
        """Hide or show a category. Hidden categories drop out of plan totals."""
        self.require_category(category_id)
        self.db.update_category(category_id, hidden=hidden)

    def move_category(self, category_id: int, target_group_id: int) -> None:
        """Move a category to the end of another group in the same plan.

        Raises:
            NotFoundError: If the category or target group doesn't exist
            ValidationError: If the target group belongs to another plan
        """
        category = self.require_category(category_id)
        source = self.require_group(category.group_id)
        target = self.require_group(target_group_id)
        if target.plan_id != source.plan_id:
            raise ValidationError("Cannot move a category to a group in another plan")
        if target.id == source.id:
            return

        siblings = self.db.list_categories(target.plan_id, group_id=target.id)
        sort_order = max((c.sort_order for c in siblings), default=-1) + 1
        self.db.update_category(category_id, group_id=target.id, sort_order=sort_order)

    def seed_categories(self, plan_id: int, groups: Sequence[tuple[str, Sequence[str]]]) -> int:
        """Create groups and categories that don't exist yet.

        Args:
            plan_id: Plan ID
            groups: (group name, category names) pairs in display order

        Returns:
            Number of categories created
        """
        created = 0
        for group_name, category_names in groups:
            group = self.get_group_by_name(plan_id, group_name)
            group_id = group.id if group is not None else self.create_group(plan_id, group_name)
            existing = {c.name for c in self.db.list_categories(plan_id, group_id=group_id)}
            for category_name in category_names:
                if category_name not in existing:
                    self.create_category(group_id, category_name)
                    created += 1
        return created

    @staticmethod
    def _clean_name(name: str, kind: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError(f"{kind} name is required")
        return name
