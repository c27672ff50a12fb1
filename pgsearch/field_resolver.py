"""
Field resolver for request-driven search
Resolves field paths like 'p.title' to column attributes of the bound entities
"""

from typing import Any, Dict, List, Mapping

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable


class FieldResolutionError(Exception):
    """Custom exception for field resolution errors"""

    pass


class FieldResolver:
    """Resolves `alias.column` paths against a mapping of aliases to entities"""

    def __init__(self, bindings: Mapping[str, Any]):
        """
        Args:
            bindings: alias -> mapped class or `aliased()` entity, e.g.
                `{"p": Post, "a": aliased(Author)}`
        """
        if not bindings:
            raise FieldResolutionError("At least one entity binding is required")
        self.bindings: Dict[str, Any] = {}
        for alias, entity in bindings.items():
            try:
                mapper = getattr(inspect(entity), "mapper", None)
            except NoInspectionAvailable:
                mapper = None
            if mapper is None:
                raise FieldResolutionError(f"Binding '{alias}' is not a mapped entity: {entity!r}")
            self.bindings[alias] = entity

    def resolve_field(self, field_path: str):
        """
        Resolves a field path like 'p.title' to the entity's column attribute

        Returns:
            The ORM attribute, usable as a search qualifier
        """
        parts = field_path.split(".")
        if len(parts) != 2 or not all(parts):
            raise FieldResolutionError(f"Invalid field path format: {field_path}. Expected 'alias.column'")

        alias, column = parts
        if alias not in self.bindings:
            raise FieldResolutionError(f"Unknown alias '{alias}' in {field_path}. Bound aliases: {sorted(self.bindings)}")

        entity = self.bindings[alias]
        if column not in inspect(entity).mapper.columns:
            raise FieldResolutionError(f"Unknown column '{column}' for alias '{alias}'")
        return getattr(entity, column)

    def resolve_fields(self, field_paths: List[str]) -> List[Any]:
        return [self.resolve_field(field_path) for field_path in field_paths]

    def validate_field_path(self, field_path: str) -> bool:
        """Validates if a field path is valid"""
        try:
            self.resolve_field(field_path)
            return True
        except FieldResolutionError:
            return False
