"""
Field parsing for the ``name[:type[:RelatedModel]]`` field DSL.

One token becomes one Field, or two for belongs_to relations (the scalar
foreign key followed by the association object). Type inference, GORM tag
rules and relationship wiring all happen here so that a field declared once
is named and typed identically in every generated file.
"""

import logging
from typing import List, Optional, Tuple

from ..constants import (
    DefaultConfig,
    FieldFlags,
    GoImports,
    GoTypes,
    GormTags,
    InferenceRules,
    RelationTypes,
)
from ..exceptions import raise_field_definition_error
from .field_aliases import resolve_field_type
from .models import (
    BelongsToPair,
    Field,
    FieldCategory,
    FieldTypeAlias,
    ParsedField,
    RelationKind,
    SingleField,
)
from .naming import Inflector, to_pascal_case, to_snake_case

logger = logging.getLogger(__name__)

_FK_SUFFIX = "_id"
_BARE_FK_SUFFIX = "id"


def infer_field_type(name: str) -> str:
    """
    Infer a type token from a field name.

    The name is matched in snake_case form. Rules are checked in a fixed
    order and the first match wins, so ``published_at`` is a datetime even
    though it contains ``published``.

    Example:
        >>> infer_field_type("published_at")
        'datetime'
        >>> infer_field_type("is_active")
        'bool'
    """
    lowered = to_snake_case(name)
    for kind, patterns, type_token in InferenceRules.RULES:
        if kind == InferenceRules.SUFFIX:
            matched = lowered.endswith(patterns)
        else:
            matched = any(pattern in lowered for pattern in patterns)
        if matched:
            return type_token
    return InferenceRules.DEFAULT_TYPE


def is_required_field(name: str) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in FieldFlags.REQUIRED_KEYWORDS)


def is_unique_field(name: str) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in FieldFlags.UNIQUE_KEYWORDS)


def build_gorm_tag(column: str, alias: FieldTypeAlias) -> str:
    """
    Column GORM tag for a plain field.

    Args:
        column: snake_case column name
        alias: Resolved type of the field

    Returns:
        Inner tag text, possibly empty
    """
    go_type = alias.target_type
    canonical = alias.canonical_type
    parts: List[str] = []

    if canonical == "text":
        parts.append(GormTags.TEXT)
    elif canonical == "uuid":
        parts.append(GormTags.UUID)
    elif canonical == "url":
        parts.append(GormTags.URL_VARCHAR)
    elif canonical == "email":
        parts.extend([GormTags.VARCHAR, GormTags.UNIQUE_INDEX])
    elif go_type == GoTypes.STRING:
        if column in GormTags.SHORT_UNIQUE_NAMES:
            parts.extend([GormTags.UNIQUE_INDEX, GormTags.SHORT_VARCHAR])
        else:
            parts.append(GormTags.VARCHAR)
            if "email" in column:
                parts.append(GormTags.UNIQUE_INDEX)
    elif go_type == GoTypes.FLOAT64:
        if any(keyword in column for keyword in GormTags.MONEY_KEYWORDS):
            parts.append(GormTags.DECIMAL)
    elif go_type == GoTypes.BOOL:
        parts.append(GormTags.BOOLEAN)
    elif go_type == GoTypes.JSON:
        parts.append(GormTags.JSONB)
    elif go_type == GoTypes.TIME:
        if column == "deleted_at":
            parts.append(GormTags.FOREIGN_KEY_INDEX)
    elif go_type == GoTypes.INT:
        if GormTags.STATUS_KEYWORD in column:
            parts.append(GormTags.STATUS_DEFAULT)
    elif go_type == GoTypes.UINT and column.endswith(_FK_SUFFIX):
        parts.append(GormTags.FOREIGN_KEY_INDEX)

    if column in GormTags.NOT_NULL_NAMES:
        parts.append(GormTags.NOT_NULL)
    return ";".join(parts)


class FieldParser:
    """
    Parses field tokens for one model.

    Args:
        model_name: Name of the model the fields belong to
        inflector: Pluralization service shared with the naming builder
        module_path: Go module path used for cross-module imports
    """

    def __init__(
        self,
        model_name: str,
        inflector: Optional[Inflector] = None,
        module_path: str = DefaultConfig.MODULE_PATH,
    ):
        self.model = to_pascal_case(model_name)
        self.model_snake = to_snake_case(self.model)
        self.inflector = inflector or Inflector()
        self.module_path = module_path

    def parse(self, token: str, include_association: bool = True) -> ParsedField:
        """
        Parse one field token.

        Args:
            token: ``name[:type[:RelatedModel]]``
            include_association: When False a belongs_to token yields only
                its foreign key field

        Returns:
            SingleField or BelongsToPair

        Raises:
            FieldDefinitionError: If the field name is empty
        """
        name, type_token, related = self._split_token(token)
        if type_token is None:
            type_token = infer_field_type(name)
            logger.debug(f"Inferred type '{type_token}' for field '{name}'")

        alias = resolve_field_type(type_token)

        if alias.category is FieldCategory.RELATIONSHIP:
            return self._parse_relationship(name, alias.canonical_type, related, include_association)

        if alias.target_type == GoTypes.UINT and to_snake_case(name).endswith(_FK_SUFFIX):
            logger.debug(f"Field '{name}' looks like a foreign key, expanding to belongs_to")
            return self._belongs_to(name, related, include_association)

        if alias.category is FieldCategory.STORAGE:
            return SingleField(self._attachment(name, alias))

        if alias.category is FieldCategory.TRANSLATION:
            return SingleField(self._translation(name))

        return SingleField(self._plain(name, alias))

    def parse_all(self, tokens: List[str]) -> List[ParsedField]:
        return [self.parse(token) for token in tokens]

    def _split_token(self, token: str) -> Tuple[str, Optional[str], Optional[str]]:
        parts = [part.strip() for part in token.split(":")]
        name = parts[0]
        if not name:
            raise_field_definition_error("Field name must not be empty", token=token, model=self.model)
        type_token = parts[1] if len(parts) > 1 and parts[1] else None
        related = parts[2] if len(parts) > 2 and parts[2] else None
        return name, type_token, related

    def _related_model(self, override: Optional[str], default: str) -> Tuple[str, Tuple[str, ...]]:
        """Related model type name and any import it needs."""
        if not override:
            return default, ()
        if "." in override:
            # pkg.Model lives in another generated module
            package, model = override.split(".", 1)
            import_path = f"{self.module_path}/{GoImports.APP}/{package}"
            return f"{package}.{to_pascal_case(model)}", (import_path,)
        return to_pascal_case(override), ()

    def _parse_relationship(
        self,
        name: str,
        relation: str,
        related: Optional[str],
        include_association: bool,
    ) -> ParsedField:
        if relation == RelationTypes.BELONGS_TO:
            return self._belongs_to(name, related, include_association)
        if relation == RelationTypes.HAS_ONE:
            return self._has_one(name, related)
        return self._to_many(name, relation, related)

    def _belongs_to(self, name: str, related: Optional[str], include_association: bool) -> BelongsToPair:
        snake = to_snake_case(name)
        if snake.endswith(_FK_SUFFIX):
            fk_column, base = snake, snake[:-len(_FK_SUFFIX)]
        elif snake.endswith(_BARE_FK_SUFFIX):
            # authorid keeps its name, the association drops the suffix
            fk_column, base = snake, snake[:-len(_BARE_FK_SUFFIX)]
        else:
            fk_column, base = snake + _FK_SUFFIX, snake
        if not base:
            raise_field_definition_error(
                "Foreign key name needs a prefix before 'id'", token=name, model=self.model
            )

        related_model, imports = self._related_model(related, to_pascal_case(base))
        fk_name = to_pascal_case(fk_column)

        foreign_key = Field(
            name=fk_name,
            type=GoTypes.UINT,
            json_name=fk_column,
            json_tag=f"{fk_column},omitempty",
            db_name=fk_column,
            gorm_tag=GormTags.FOREIGN_KEY_INDEX,
            relation_kind=RelationKind.BELONGS_TO_OBJECT,
            related_model=related_model,
            foreign_key=fk_name,
            is_required=is_required_field(fk_column),
            is_unique=is_unique_field(fk_column),
        )
        if not include_association:
            return BelongsToPair(foreign_key, None, imports)

        association = Field(
            name=to_pascal_case(base),
            type=f"*{related_model}",
            json_name=base,
            json_tag=f"{base},omitempty",
            db_name="",
            gorm_tag=f"foreignKey:{fk_name}",
            is_relation=True,
            relation_kind=RelationKind.BELONGS_TO,
            related_model=related_model,
            foreign_key=fk_name,
        )
        return BelongsToPair(foreign_key, association, imports)

    def _has_one(self, name: str, related: Optional[str]) -> SingleField:
        snake = to_snake_case(name)
        related_model, imports = self._related_model(related, to_pascal_case(snake))
        foreign_key = f"{self.model}Id"
        field = Field(
            name=to_pascal_case(snake),
            type=f"*{related_model}",
            json_name=snake,
            json_tag=f"{snake},omitempty",
            db_name="",
            gorm_tag=f"foreignKey:{foreign_key}",
            is_relation=True,
            relation_kind=RelationKind.HAS_ONE,
            related_model=related_model,
            foreign_key=foreign_key,
        )
        return SingleField(field, imports)

    def _to_many(self, name: str, relation: str, related: Optional[str]) -> SingleField:
        snake = to_snake_case(name)
        default_related = to_pascal_case(self.inflector.singular(snake))
        related_model, imports = self._related_model(related, default_related)

        join_table = None
        if relation == RelationTypes.MANY_TO_MANY:
            kind = RelationKind.MANY_TO_MANY
            related_name = related_model.rsplit(".", 1)[-1]
            join_table = f"{self.model_snake}_{to_snake_case(self.inflector.plural(related_name))}"
            gorm_tag = f"many2many:{join_table}"
            foreign_key = ""
        else:
            kind = RelationKind.HAS_MANY
            foreign_key = f"{self.model}Id"
            gorm_tag = f"foreignKey:{foreign_key}"

        field = Field(
            name=to_pascal_case(snake),
            type=f"[]*{related_model}",
            json_name=snake,
            json_tag=f"{snake},omitempty",
            db_name="",
            gorm_tag=gorm_tag,
            is_relation=True,
            relation_kind=kind,
            related_model=related_model,
            foreign_key=foreign_key,
        )
        return SingleField(field, imports, join_table)

    def _attachment(self, name: str, alias: FieldTypeAlias) -> Field:
        snake = to_snake_case(name)
        is_image = alias.alias.lower() == "image"
        return Field(
            name=to_pascal_case(snake),
            type=GoTypes.ATTACHMENT,
            json_name=snake,
            json_tag=f"{snake},omitempty",
            db_name="",
            gorm_tag=GormTags.ASSOCIATION,
            is_attachment=True,
            is_image=is_image,
            is_file=not is_image,
            is_required=is_required_field(snake),
        )

    def _translation(self, name: str) -> Field:
        snake = to_snake_case(name)
        return Field(
            name=to_pascal_case(snake),
            type=GoTypes.TRANSLATION,
            json_name=snake,
            json_tag=f"{snake},omitempty",
            db_name="",
            gorm_tag=GormTags.ASSOCIATION,
            is_required=is_required_field(snake),
        )

    def _plain(self, name: str, alias: FieldTypeAlias) -> Field:
        snake = to_snake_case(name)
        if alias.is_custom:
            logger.debug(f"Field '{name}' uses custom type '{alias.target_type}'")
        return Field(
            name=to_pascal_case(snake),
            type=alias.target_type,
            json_name=snake,
            json_tag=snake,
            db_name=snake,
            gorm_tag=build_gorm_tag(snake, alias),
            is_required=is_required_field(snake),
            is_unique=is_unique_field(snake),
        )
