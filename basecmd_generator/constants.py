"""
Centralized constants for the module generator.

Marker comments, file layout, template names, inference rules and the
name-based GORM tag rules all live here so that the domain modules stay
free of magic strings.
"""

from typing import Dict, List, Tuple


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    PROJECT_ROOT = "."
    APP_DIR = "app"
    MODULE_PATH = "base"
    INIT_FILE = "app/init.go"
    CONFIG_FILE_NAME = ".basegen.yaml"

    FORMAT_CODE = True
    GENERATE_VALIDATOR = False


# =============================================================================
# INIT FILE MARKERS
# =============================================================================

class Markers:
    """Marker comments located by exact substring match in the init file."""

    IMPORT = "// MODULE_IMPORT_MARKER"
    INITIALIZER = "// MODULE_INITIALIZER_MARKER"


# =============================================================================
# TEMPLATES AND OUTPUT LAYOUT
# =============================================================================

class TemplateNames:
    """Names of the packaged Jinja2 templates."""

    MODEL = "model.go.j2"
    SERVICE = "service.go.j2"
    CONTROLLER = "controller.go.j2"
    MODULE = "module.go.j2"
    VALIDATOR = "validator.go.j2"
    INIT = "init.go.j2"

    # Template name -> file name inside app/<package>/
    MODULE_FILES: Dict[str, str] = {
        SERVICE: "service.go",
        CONTROLLER: "controller.go",
        MODULE: "module.go",
    }


class OutputLayout:
    """Directory names inside the application directory."""

    MODELS_DIR = "models"
    GO_EXTENSION = ".go"


# =============================================================================
# FIELD TYPES
# =============================================================================

class GoTypes:
    """Go type names produced by the field parser."""

    STRING = "string"
    INT = "int"
    UINT = "uint"
    BOOL = "bool"
    FLOAT64 = "float64"
    TIME = "time.Time"
    JSON = "datatypes.JSON"
    ATTACHMENT = "*storage.Attachment"
    TRANSLATION = "translation.Field"


class RelationTypes:
    """Canonical relationship names."""

    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"
    HAS_ONE = "has_one"
    MANY_TO_MANY = "many_to_many"

    ALL = [BELONGS_TO, HAS_MANY, HAS_ONE, MANY_TO_MANY]


class BaseColumns:
    """Columns every generated model declares on its own."""

    NAMES = {"Id", "CreatedAt", "UpdatedAt", "DeletedAt"}
    SOFT_DELETE = "DeletedAt"
    TIMESTAMPS = {"CreatedAt", "UpdatedAt"}


# =============================================================================
# TYPE INFERENCE
# =============================================================================

class InferenceRules:
    """
    Ordered name patterns used when a field is declared without a type.

    Each rule is (kind, patterns, type token). Rules are checked in order on
    the lower-cased field name and the first match wins.
    """

    SUFFIX = "suffix"
    CONTAINS = "contains"
    DEFAULT_TYPE = "string"

    RULES: List[Tuple[str, Tuple[str, ...], str]] = [
        (SUFFIX, ("_id",), "uint"),
        (SUFFIX, ("_at", "_date", "_time"), "datetime"),
        (SUFFIX, ("_count", "_number"), "int"),
        (CONTAINS, ("email",), "email"),
        (CONTAINS, ("phone",), "phone"),
        (CONTAINS, ("url", "link"), "url"),
        (CONTAINS, ("description", "content", "text"), "text"),
        (CONTAINS, ("active", "enabled", "published"), "bool"),
    ]


# =============================================================================
# GORM TAG RULES
# =============================================================================

class GormTags:
    """GORM tag fragments and the name patterns that trigger them."""

    FOREIGN_KEY_INDEX = "index"
    ASSOCIATION = "foreignKey:ModelId;references:Id"
    NOT_NULL = "not null"
    UNIQUE_INDEX = "uniqueIndex"

    VARCHAR = "type:varchar(255)"
    SHORT_VARCHAR = "type:varchar(100)"
    URL_VARCHAR = "type:varchar(500)"
    TEXT = "type:text"
    DECIMAL = "type:decimal(10,2)"
    BOOLEAN = "type:boolean;default:false"
    UUID = "type:uuid"
    JSONB = "type:jsonb"
    STATUS_DEFAULT = "default:0"

    NOT_NULL_NAMES = {"name", "title", "email", "username"}
    SHORT_UNIQUE_NAMES = {"username", "slug"}
    MONEY_KEYWORDS = ("price", "amount", "cost")
    STATUS_KEYWORD = "status"


class FieldFlags:
    """Name substrings that mark a field required or unique."""

    REQUIRED_KEYWORDS = ("name", "title", "email", "username", "password")
    UNIQUE_KEYWORDS = ("email", "username", "slug", "code", "sku")


# =============================================================================
# IMPORTS
# =============================================================================

class GoImports:
    """Import paths of the generated model file."""

    TIME = "time"
    GORM = "gorm.io/gorm"
    DATATYPES = "gorm.io/datatypes"

    ALWAYS = (TIME, GORM)

    # Paths below are relative to the Go module path of the project
    STORAGE = "core/storage"
    TRANSLATION = "core/translation"
    APP = "app"


# =============================================================================
# GO LANGUAGE
# =============================================================================

class GoKeywords:
    """Reserved words that cannot be used as package or variable names."""

    ALL = {
        "break", "case", "chan", "const", "continue", "default", "defer",
        "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
        "interface", "map", "package", "range", "return", "select", "struct",
        "switch", "type", "var",
    }
