"""
Naming convention utilities for the module generator.

This module converts identifiers between the naming conventions used by the
generated Go code (PascalCase types, camelCase variables, snake_case tables
and packages, kebab-case routes) and derives the complete set of names for
one model in a single place, so that the model, service, controller and
module files always agree with each other.
"""

import re
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Tuple

import inflect


# Words whose trailing "s" belongs to the singular form. inflect happily
# strips it ("status" -> "statu"), which would make them look plural.
_SINGULAR_ENDINGS = ("ss", "us", "is")

# Singular nouns ending in "as" that inflect reads as plurals of "-a" words
# ("alias" -> "alia"). Plurals such as "ideas" or "schemas" share the ending.
_SINGULAR_AS_WORDS = frozenset({
    "alias", "atlas", "bias", "canvas", "christmas", "gas", "pancreas",
})

_LAST_WORD_RE = re.compile(r"([A-Z]?[a-z0-9]+|[A-Z]+)$")


class Inflector:
    """
    English pluralization service wrapping an inflect engine.

    Compound identifiers are inflected on their last word only and the
    original capitalization is preserved:

        >>> Inflector().plural("ProductCategory")
        'ProductCategories'

    One instance is created at startup and handed to every component that
    needs it; nothing in this module keeps a global engine.
    """

    def __init__(self, engine: Optional[inflect.engine] = None):
        self._engine = engine if engine is not None else inflect.engine()

    def plural(self, word: str) -> str:
        """Return the plural of ``word``; already plural words are returned unchanged."""
        if not word:
            return word
        prefix, last = _split_last_word(word)
        if self._is_plural_word(last):
            return word
        return prefix + _match_case(last, self._plural_word(last.lower()))

    def singular(self, word: str) -> str:
        """Return the singular of ``word``; singular words are returned unchanged."""
        if not word:
            return word
        prefix, last = _split_last_word(word)
        if not self._is_plural_word(last):
            return word
        return prefix + _match_case(last, self._singular_word(last.lower()))

    def is_plural(self, word: str) -> bool:
        if not word:
            return False
        return self._is_plural_word(_split_last_word(word)[1])

    def _plural_word(self, lowered: str) -> str:
        if lowered in _SINGULAR_AS_WORDS:
            return lowered + "es"
        return self._engine.plural_noun(lowered)

    def _singular_word(self, lowered: str) -> str:
        if lowered.endswith("es") and lowered[:-2] in _SINGULAR_AS_WORDS:
            return lowered[:-2]
        return self._engine.singular_noun(lowered)

    def _is_plural_word(self, word: str) -> bool:
        lowered = word.lower()
        if lowered in _SINGULAR_AS_WORDS:
            return False
        if lowered.endswith("es") and lowered[:-2] in _SINGULAR_AS_WORDS:
            return True
        if lowered.endswith(_SINGULAR_ENDINGS):
            return False
        singular = self._engine.singular_noun(lowered)
        if not singular or singular == lowered:
            return False
        return self._engine.plural_noun(singular) == lowered


def _split_last_word(word: str) -> Tuple[str, str]:
    match = _LAST_WORD_RE.search(word)
    if not match:
        return "", word
    return word[:match.start()], match.group(0)


def _match_case(template: str, word: str) -> str:
    if template.isupper() and len(template) > 1:
        return word.upper()
    if template[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


def split_words(name: str) -> List[str]:
    """
    Split an identifier into lower-case words.

    Underscores, hyphens, spaces and case boundaries all separate words.

    Example:
        >>> split_words("HTTPServer_config-name")
        ['http', 'server', 'config', 'name']
    """
    return [word for word in to_snake_case(name).split("_") if word]


def to_snake_case(name: str) -> str:
    """
    Convert CamelCase, PascalCase, kebab-case or spaced words to snake_case.

    Args:
        name: The string to convert to snake_case

    Returns:
        The converted snake_case string

    Example:
        >>> to_snake_case("ProductCategory")
        'product_category'
        >>> to_snake_case("XMLHttpRequest")
        'xml_http_request'
        >>> to_snake_case("AuthorId")
        'author_id'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    name = re.sub(r"[\s\-]+", "_", name.strip())
    name = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    name = re.sub("__([A-Z])", r"_\1", name)
    name = re.sub("([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub("_+", "_", name)
    return name.strip("_").lower()


def to_pascal_case(name: str) -> str:
    """
    Convert any identifier to PascalCase.

    Every word is capitalized and the rest of it lower-cased, so acronyms
    are normalized ("ID" becomes "Id"). No singularization is applied.

    Example:
        >>> to_pascal_case("author_id")
        'AuthorId'
        >>> to_pascal_case("product-category")
        'ProductCategory'
    """
    return "".join(word.capitalize() for word in split_words(name))


def to_camel_case(name: str) -> str:
    """Convert an identifier to camelCase (``product_category`` -> ``productCategory``)."""
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(name: str) -> str:
    """Convert an identifier to kebab-case (``ProductCategory`` -> ``product-category``)."""
    return to_snake_case(name).replace("_", "-")


def to_capital_case(name: str) -> str:
    """Convert an identifier to space separated title words (``product_category`` -> ``Product Category``)."""
    return " ".join(word.capitalize() for word in split_words(name))


@dataclass(frozen=True)
class NamingConvention:
    """
    Every name derived from a single model name.

    All attributes are pure functions of ``original``; two conventions built
    from the same input compare equal.
    """

    original: str

    # Model naming
    model: str          # ProductCategory
    model_lower: str    # productCategory
    model_snake: str    # product_category
    model_kebab: str    # product-category

    # Plural forms
    plural: str         # ProductCategories
    plural_lower: str   # productCategories
    plural_snake: str   # product_categories
    plural_kebab: str   # product-categories

    # Package and directory naming
    package_name: str   # product_categories
    dir_name: str       # product_categories

    # Routes
    route_path: str     # /product-categories
    route_group: str    # product-categories

    # Go type names
    controller: str     # ProductCategoryController
    service: str        # ProductCategoryService

    # Database
    table_name: str     # product_categories

    # Variables
    var_single: str     # productCategory
    var_plural: str     # productCategories
    var_id: str         # productCategoryId

    @property
    def display_name(self) -> str:
        """Human readable model name used in generated doc comments."""
        return to_capital_case(self.model)

    @property
    def display_plural(self) -> str:
        return to_capital_case(self.plural)

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for template rendering."""
        return asdict(self)


def build_naming_convention(model_name: str, inflector: Optional[Inflector] = None) -> NamingConvention:
    """
    Derive the full naming convention for a model.

    Args:
        model_name: Model name in any case, singular or plural
        inflector: Pluralization service; a fresh one is created when omitted

    Returns:
        The NamingConvention for ``model_name``

    Raises:
        ValueError: If the name contains no identifier characters

    Example:
        >>> naming = build_naming_convention("category")
        >>> naming.table_name, naming.route_path, naming.controller
        ('categories', '/categories', 'CategoryController')
    """
    model = to_pascal_case(model_name or "")
    if not model:
        raise ValueError(f"Cannot derive a model name from {model_name!r}")

    inflector = inflector or Inflector()
    plural = inflector.plural(model)
    plural_snake = to_snake_case(plural)
    plural_kebab = to_kebab_case(plural)
    model_lower = to_camel_case(model)

    return NamingConvention(
        original=model_name,
        model=model,
        model_lower=model_lower,
        model_snake=to_snake_case(model),
        model_kebab=to_kebab_case(model),
        plural=plural,
        plural_lower=to_camel_case(plural),
        plural_snake=plural_snake,
        plural_kebab=plural_kebab,
        package_name=plural_snake,
        dir_name=plural_snake,
        route_path="/" + plural_kebab,
        route_group=plural_kebab,
        controller=model + "Controller",
        service=model + "Service",
        table_name=plural_snake,
        var_single=model_lower,
        var_plural=to_camel_case(plural),
        var_id=model_lower + "Id",
    )
