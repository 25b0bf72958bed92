"""
Domain module for the module generator.

Field type resolution, field parsing, naming conventions and template data
assembly. Nothing in here touches the file system.
"""

from .models import (
    FieldCategory,
    RelationKind,
    FieldTypeAlias,
    Field,
    SingleField,
    BelongsToPair,
    ParsedField,
    TemplateData,
    GenerationResult,
)

from .field_aliases import (
    resolve_field_type,
    is_relationship_type,
    is_storage_type,
    is_translation_type,
    get_canonical_relationship,
)

from .field_parser import (
    FieldParser,
    infer_field_type,
)

from .naming import (
    Inflector,
    NamingConvention,
    build_naming_convention,
    to_snake_case,
    to_pascal_case,
    to_camel_case,
    to_kebab_case,
)

from .template_data import assemble_template_data

__all__ = [
    # Core models
    'FieldCategory',
    'RelationKind',
    'FieldTypeAlias',
    'Field',
    'SingleField',
    'BelongsToPair',
    'ParsedField',
    'TemplateData',
    'GenerationResult',

    # Alias resolution
    'resolve_field_type',
    'is_relationship_type',
    'is_storage_type',
    'is_translation_type',
    'get_canonical_relationship',

    # Field parsing
    'FieldParser',
    'infer_field_type',

    # Naming
    'Inflector',
    'NamingConvention',
    'build_naming_convention',
    'to_snake_case',
    'to_pascal_case',
    'to_camel_case',
    'to_kebab_case',

    # Assembly
    'assemble_template_data',
]
