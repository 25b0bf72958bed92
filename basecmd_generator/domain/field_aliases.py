"""
Field type alias resolution.

Maps the type token typed on the command line (``image``, ``belongsTo``,
``text`` ...) to a canonical type and the Go type it becomes. Lookup is a
case-insensitive exact match; unknown tokens pass through unchanged as
custom types, so resolution never fails.
"""

from typing import Dict, Iterable, List, Mapping

from ..constants import GoTypes, RelationTypes
from .models import FieldCategory, FieldTypeAlias


def _aliases(names: Iterable[str], canonical: str, target: str, category: FieldCategory) -> List[FieldTypeAlias]:
    return [FieldTypeAlias(name, canonical, target, category) for name in names]


_STORAGE = FieldCategory.STORAGE
_RELATIONSHIP = FieldCategory.RELATIONSHIP
_BASIC = FieldCategory.BASIC
_TRANSLATION = FieldCategory.TRANSLATION

# Go scalars resolve to themselves
_GO_SCALARS = [
    "int", "int8", "int16", "int32", "int64",
    "uint", "uint8", "uint16", "uint32", "uint64",
    "byte", "rune",
]

FIELD_TYPE_ALIASES: List[FieldTypeAlias] = [
    # Storage
    *_aliases(["image", "file", "attachment", "*storage.Attachment"],
              "storage.Attachment", GoTypes.ATTACHMENT, _STORAGE),

    # Translation
    *_aliases(["translation", "translatable", "translatedField", "locale", "translation.Field"],
              "translation.Field", GoTypes.TRANSLATION, _TRANSLATION),

    # Relationships
    *_aliases(["belongsTo", "belongs_to"], RelationTypes.BELONGS_TO, "", _RELATIONSHIP),
    *_aliases(["hasMany", "has_many"], RelationTypes.HAS_MANY, "", _RELATIONSHIP),
    *_aliases(["hasOne", "has_one"], RelationTypes.HAS_ONE, "", _RELATIONSHIP),
    *_aliases(["manyToMany", "many_to_many", "toMany", "to_many"],
              RelationTypes.MANY_TO_MANY, "", _RELATIONSHIP),

    # Strings
    *_aliases(["text"], "text", GoTypes.STRING, _BASIC),
    *_aliases(["email"], "email", GoTypes.STRING, _BASIC),
    *_aliases(["password"], "password", GoTypes.STRING, _BASIC),
    *_aliases(["url"], "url", GoTypes.STRING, _BASIC),
    *_aliases(["phone"], "phone", GoTypes.STRING, _BASIC),
    *_aliases(["slug"], "slug", GoTypes.STRING, _BASIC),
    *_aliases(["uuid"], "uuid", GoTypes.STRING, _BASIC),
    *_aliases(["string"], "string", GoTypes.STRING, _BASIC),

    # Date and time
    *_aliases(["datetime", "date", "timestamp", "time", "time.Time"], "datetime", GoTypes.TIME, _BASIC),

    # Numbers
    *_aliases(["float", "decimal", "float64"], "float", GoTypes.FLOAT64, _BASIC),
    *_aliases(["float32"], "float32", "float32", _BASIC),
    *_aliases(["sort"], "sort", GoTypes.INT, _BASIC),
    *[FieldTypeAlias(name, name, name, _BASIC) for name in _GO_SCALARS],

    # Booleans
    *_aliases(["bool", "boolean"], "bool", GoTypes.BOOL, _BASIC),

    # JSON
    *_aliases(["json", "jsonb"], "json", GoTypes.JSON, _BASIC),
]


def _compile(aliases: Iterable[FieldTypeAlias]) -> Mapping[str, FieldTypeAlias]:
    table: Dict[str, FieldTypeAlias] = {}
    for entry in aliases:
        key = entry.alias.lower()
        if key in table:
            raise ValueError(f"Duplicate field type alias: {entry.alias!r}")
        table[key] = entry
    return table


_ALIAS_TABLE: Mapping[str, FieldTypeAlias] = _compile(FIELD_TYPE_ALIASES)


def resolve_field_type(token: str) -> FieldTypeAlias:
    """
    Resolve a type token to its alias entry.

    Args:
        token: Type token as typed by the user, in any case

    Returns:
        The matching alias entry, or a custom entry whose canonical and
        target types are the token itself

    Example:
        >>> resolve_field_type("Image").target_type
        '*storage.Attachment'
        >>> resolve_field_type("Money").category
        <FieldCategory.CUSTOM: 'custom'>
    """
    entry = _ALIAS_TABLE.get(token.lower())
    if entry is not None:
        return entry
    return FieldTypeAlias(token, token, token, FieldCategory.CUSTOM)


def get_target_type(token: str) -> str:
    return resolve_field_type(token).target_type


def get_field_category(token: str) -> FieldCategory:
    return resolve_field_type(token).category


def is_relationship_type(token: str) -> bool:
    return get_field_category(token) is FieldCategory.RELATIONSHIP


def is_storage_type(token: str) -> bool:
    return get_field_category(token) is FieldCategory.STORAGE


def is_translation_type(token: str) -> bool:
    return get_field_category(token) is FieldCategory.TRANSLATION


def get_canonical_relationship(token: str) -> str:
    """Canonical relationship name for a token, or an empty string for non-relations."""
    entry = resolve_field_type(token)
    if entry.category is not FieldCategory.RELATIONSHIP:
        return ""
    return entry.canonical_type


def is_belongs_to_relationship(token: str) -> bool:
    return get_canonical_relationship(token) == RelationTypes.BELONGS_TO


def is_has_many_relationship(token: str) -> bool:
    return get_canonical_relationship(token) == RelationTypes.HAS_MANY


def is_has_one_relationship(token: str) -> bool:
    return get_canonical_relationship(token) == RelationTypes.HAS_ONE


def is_many_to_many_relationship(token: str) -> bool:
    return get_canonical_relationship(token) == RelationTypes.MANY_TO_MANY


def known_aliases() -> List[str]:
    """All alias tokens in table order, used for help output and warnings."""
    return [entry.alias for entry in FIELD_TYPE_ALIASES]
