"""
Core domain models for the module generator.

These records are produced by the alias resolver, the field parser and the
template data assembler and consumed read-only by the renderer. All of them
are immutable once built.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..constants import BaseColumns, GoTypes
from .naming import NamingConvention


class FieldCategory(Enum):
    """Categories of user-facing type tokens."""

    STORAGE = "storage"
    RELATIONSHIP = "relationship"
    BASIC = "basic"
    TRANSLATION = "translation"
    CUSTOM = "custom"


class RelationKind(Enum):
    """
    Relationship descriptor of a generated field.

    BELONGS_TO_OBJECT marks the scalar foreign key column that backs a
    belongs_to association; the association object itself is BELONGS_TO.
    """

    NONE = "none"
    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"
    HAS_ONE = "has_one"
    MANY_TO_MANY = "many_to_many"
    BELONGS_TO_OBJECT = "belongs_to_object"

    @property
    def is_association(self) -> bool:
        return self in _ASSOCIATION_KINDS


_ASSOCIATION_KINDS = frozenset({
    RelationKind.BELONGS_TO,
    RelationKind.HAS_MANY,
    RelationKind.HAS_ONE,
    RelationKind.MANY_TO_MANY,
})


@dataclass(frozen=True)
class FieldTypeAlias:
    """One entry of the alias table."""

    alias: str
    canonical_type: str
    target_type: str
    category: FieldCategory

    @property
    def is_custom(self) -> bool:
        return self.category is FieldCategory.CUSTOM


@dataclass(frozen=True)
class Field:
    """
    One struct field of a generated model.

    ``gorm_tag`` holds the inner GORM tag text and ``json_tag`` the full JSON
    tag text; ``struct_tag`` renders both for the Go struct definition.
    """

    name: str
    type: str
    json_name: str
    json_tag: str
    db_name: str
    gorm_tag: str = ""

    # Relationship properties
    is_relation: bool = False
    relation_kind: RelationKind = RelationKind.NONE
    related_model: str = ""
    foreign_key: str = ""

    # Attachment properties
    is_attachment: bool = False
    is_image: bool = False
    is_file: bool = False

    # Validation properties
    is_required: bool = False
    is_unique: bool = False

    def __post_init__(self):
        """Ensure consistency of the relationship attributes."""
        if self.is_relation:
            if not self.related_model:
                raise ValueError(f"Relation field {self.name!r} has no related model")
            if not self.relation_kind.is_association:
                raise ValueError(
                    f"Relation field {self.name!r} has non-relation kind {self.relation_kind.value!r}"
                )

    @property
    def struct_tag(self) -> str:
        """Go struct tag, e.g. ``gorm:"index" json:"author_id,omitempty"``."""
        parts = []
        if self.gorm_tag:
            parts.append(f'gorm:"{self.gorm_tag}"')
        parts.append(f'json:"{self.json_tag}"')
        return " ".join(parts)

    @property
    def is_translatable(self) -> bool:
        return self.type == GoTypes.TRANSLATION

    @property
    def is_base_column(self) -> bool:
        """Whether the model template already declares this column."""
        return self.name in BaseColumns.NAMES

    @property
    def is_soft_delete(self) -> bool:
        return self.name == BaseColumns.SOFT_DELETE and self.type == GoTypes.TIME

    @property
    def is_timestamp(self) -> bool:
        return self.name in BaseColumns.TIMESTAMPS and self.type == GoTypes.TIME

    @property
    def is_column(self) -> bool:
        """Whether the field is an inline, user-editable database column."""
        return not (
            self.is_relation
            or self.is_attachment
            or self.is_translatable
            or self.is_base_column
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "type": self.type,
            "json_name": self.json_name,
            "json_tag": self.json_tag,
            "db_name": self.db_name,
            "gorm_tag": self.gorm_tag,
            "is_relation": self.is_relation,
            "relation_kind": self.relation_kind.value,
            "related_model": self.related_model,
            "foreign_key": self.foreign_key,
            "is_attachment": self.is_attachment,
            "is_image": self.is_image,
            "is_file": self.is_file,
            "is_required": self.is_required,
            "is_unique": self.is_unique,
        }


@dataclass(frozen=True)
class SingleField:
    """Parse result of a token that yields one field."""

    field: Field
    imports: Tuple[str, ...] = ()
    join_table: Optional[str] = None

    @property
    def fields(self) -> Tuple[Field, ...]:
        return (self.field,)


@dataclass(frozen=True)
class BelongsToPair:
    """
    Parse result of a belongs_to token.

    ``association`` is None only when the caller asked for the foreign key
    alone.
    """

    foreign_key: Field
    association: Optional[Field]
    imports: Tuple[str, ...] = ()
    join_table: Optional[str] = None

    @property
    def fields(self) -> Tuple[Field, ...]:
        if self.association is None:
            return (self.foreign_key,)
        return (self.foreign_key, self.association)


ParsedField = Union[SingleField, BelongsToPair]


@dataclass(frozen=True)
class TemplateData:
    """
    Everything the templates need to render one module.

    Each ``has_*`` flag is the OR of the matching per-field predicate.
    """

    naming: NamingConvention
    fields: Tuple[Field, ...]
    module_path: str

    has_relations: bool = False
    has_belongs_to: bool = False
    has_has_many: bool = False
    has_has_one: bool = False
    has_many_to_many: bool = False
    has_images: bool = False
    has_files: bool = False
    has_attachments: bool = False
    has_timestamps: bool = False
    has_soft_delete: bool = False
    has_translatable_fields: bool = False

    imports: Tuple[str, ...] = ()
    join_tables: Tuple[str, ...] = ()

    @property
    def model_fields(self) -> Tuple[Field, ...]:
        """Declared fields the model template has to emit."""
        return tuple(f for f in self.fields if not f.is_base_column)

    @property
    def column_fields(self) -> Tuple[Field, ...]:
        """Fields accepted by the create/update request structs."""
        return tuple(f for f in self.fields if f.is_column)

    @property
    def preload_fields(self) -> Tuple[Field, ...]:
        """Associations that are eager loaded when reading records."""
        return tuple(f for f in self.fields if f.is_relation or f.is_attachment or f.is_translatable)

    @property
    def display_field(self) -> Optional[Field]:
        """String column shown in select boxes: ``name`` or ``title`` first, else the first string column."""
        strings = [f for f in self.column_fields if f.type == GoTypes.STRING]
        for candidate in strings:
            if candidate.db_name in ("name", "title"):
                return candidate
        return strings[0] if strings else None

    def to_context(self) -> Dict[str, Any]:
        """Template context: naming attributes at top level plus the data itself."""
        context: Dict[str, Any] = self.naming.to_dict()
        context.update({
            "data": self,
            "naming": self.naming,
            "display_name": self.naming.display_name,
            "display_plural": self.naming.display_plural,
            "fields": self.model_fields,
            "column_fields": self.column_fields,
            "preload_fields": self.preload_fields,
            "imports": self.imports,
            "module_path": self.module_path,
        })
        return context


@dataclass
class GenerationResult:
    """Outcome of one generate invocation."""

    model_name: str
    written_files: List[Path] = field(default_factory=list)
    init_file_patched: bool = False
    warnings: List[str] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.written_files)
