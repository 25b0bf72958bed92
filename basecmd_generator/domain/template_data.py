"""
Template data assembly.

Combines the naming convention of a model with its parsed fields, folds the
per-field predicates into the aggregate flags the templates branch on, and
computes the import set of the generated model file.
"""

from typing import Dict, Iterable, List, Optional, Set

from ..constants import DefaultConfig, GoImports, GoTypes
from .field_parser import FieldParser
from .models import Field, RelationKind, TemplateData
from .naming import Inflector, build_naming_convention


def type_imports(go_type: str, module_path: str = DefaultConfig.MODULE_PATH) -> Set[str]:
    """
    Import paths required by one Go field type.

    Example:
        >>> sorted(type_imports("*storage.Attachment"))
        ['base/core/storage']
    """
    mapping: Dict[str, str] = {
        GoTypes.TIME: GoImports.TIME,
        GoTypes.JSON: GoImports.DATATYPES,
        GoTypes.ATTACHMENT: f"{module_path}/{GoImports.STORAGE}",
        GoTypes.TRANSLATION: f"{module_path}/{GoImports.TRANSLATION}",
    }
    path = mapping.get(go_type)
    return {path} if path else set()


def _fold_flags(fields: Iterable[Field]) -> Dict[str, bool]:
    flags = {
        "has_relations": False,
        "has_belongs_to": False,
        "has_has_many": False,
        "has_has_one": False,
        "has_many_to_many": False,
        "has_images": False,
        "has_files": False,
        "has_attachments": False,
        "has_timestamps": False,
        "has_soft_delete": False,
        "has_translatable_fields": False,
    }
    for field in fields:
        kind = field.relation_kind
        flags["has_relations"] |= field.is_relation
        flags["has_belongs_to"] |= kind is RelationKind.BELONGS_TO
        flags["has_has_many"] |= kind is RelationKind.HAS_MANY
        flags["has_has_one"] |= kind is RelationKind.HAS_ONE
        flags["has_many_to_many"] |= kind is RelationKind.MANY_TO_MANY
        flags["has_images"] |= field.is_image
        flags["has_files"] |= field.is_file
        # images and files are attachments too
        flags["has_attachments"] |= field.is_attachment or field.is_image or field.is_file
        flags["has_timestamps"] |= field.is_timestamp
        flags["has_soft_delete"] |= field.is_soft_delete
        flags["has_translatable_fields"] |= field.is_translatable
    return flags


def assemble_template_data(
    model_name: str,
    field_tokens: Iterable[str],
    inflector: Optional[Inflector] = None,
    module_path: str = DefaultConfig.MODULE_PATH,
) -> TemplateData:
    """
    Build the template data for one model.

    Fields keep the order of ``field_tokens``; a belongs_to token contributes
    its foreign key immediately followed by the association object. Calling
    this twice with the same arguments returns equal results.

    Args:
        model_name: Model name in any case
        field_tokens: ``name[:type[:RelatedModel]]`` tokens
        inflector: Pluralization service shared by naming and parsing
        module_path: Go module path of the target project

    Returns:
        Immutable TemplateData

    Raises:
        ValueError: If no model name can be derived
        FieldDefinitionError: If a token has an empty field name
    """
    inflector = inflector or Inflector()
    naming = build_naming_convention(model_name, inflector)
    parser = FieldParser(naming.model, inflector=inflector, module_path=module_path)

    fields: List[Field] = []
    imports: Set[str] = set(GoImports.ALWAYS)
    join_tables: List[str] = []

    for token in field_tokens:
        parsed = parser.parse(token)
        fields.extend(parsed.fields)
        imports.update(parsed.imports)
        if parsed.join_table and parsed.join_table not in join_tables:
            join_tables.append(parsed.join_table)

    for field in fields:
        imports.update(type_imports(field.type, module_path))

    return TemplateData(
        naming=naming,
        fields=tuple(fields),
        module_path=module_path,
        imports=tuple(sorted(imports)),
        join_tables=tuple(join_tables),
        **_fold_flags(fields),
    )
