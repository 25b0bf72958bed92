"""
Tests for case conversion, the inflector and naming conventions.
"""

from dataclasses import FrozenInstanceError
from unittest import TestCase

import pytest

from basecmd_generator.domain.naming import (
    Inflector,
    build_naming_convention,
    split_words,
    to_camel_case,
    to_capital_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)


class TestCaseConversion(TestCase):
    """Test cases for the case converter functions"""

    def test_snake_case_from_pascal(self):
        assert to_snake_case("ProductCategory") == "product_category"
        assert to_snake_case("XMLHttpRequest") == "xml_http_request"
        assert to_snake_case("AuthorId") == "author_id"
        assert to_snake_case("AuthorID") == "author_id"

    def test_snake_case_from_other_separators(self):
        assert to_snake_case("product-category") == "product_category"
        assert to_snake_case("Product Category") == "product_category"
        assert to_snake_case("already_snake") == "already_snake"

    def test_snake_case_rejects_non_strings(self):
        with pytest.raises(TypeError):
            to_snake_case(42)

    def test_pascal_case(self):
        assert to_pascal_case("author_id") == "AuthorId"
        assert to_pascal_case("product-category") == "ProductCategory"
        assert to_pascal_case("productCategory") == "ProductCategory"
        assert to_pascal_case("ID") == "Id"
        assert to_pascal_case("") == ""

    def test_pascal_case_does_not_singularize(self):
        assert to_pascal_case("categories") == "Categories"

    def test_camel_and_kebab_case(self):
        assert to_camel_case("ProductCategory") == "productCategory"
        assert to_camel_case("author_id") == "authorId"
        assert to_kebab_case("ProductCategories") == "product-categories"

    def test_capital_case(self):
        assert to_capital_case("product_category") == "Product Category"
        assert to_capital_case("ProductCategory") == "Product Category"

    def test_split_words(self):
        assert split_words("HTTPServer_config-name") == ["http", "server", "config", "name"]


class TestInflector(TestCase):
    """Test cases for the Inflector service"""

    def setUp(self):
        self.inflector = Inflector()

    def test_plural_of_simple_words(self):
        assert self.inflector.plural("Post") == "Posts"
        assert self.inflector.plural("Category") == "Categories"
        assert self.inflector.plural("category") == "categories"

    def test_plural_of_compound_identifier_keeps_prefix(self):
        assert self.inflector.plural("ProductCategory") == "ProductCategories"
        assert self.inflector.plural("TestItem") == "TestItems"
        assert self.inflector.plural("post_tag") == "post_tags"

    def test_plural_of_plural_is_unchanged(self):
        assert self.inflector.plural("Categories") == "Categories"
        assert self.inflector.plural("posts") == "posts"

    def test_singular(self):
        assert self.inflector.singular("comments") == "comment"
        assert self.inflector.singular("categories") == "category"
        assert self.inflector.singular("post_tags") == "post_tag"
        assert self.inflector.singular("comment") == "comment"

    def test_is_plural(self):
        assert self.inflector.is_plural("categories")
        assert not self.inflector.is_plural("category")
        assert not self.inflector.is_plural("status")
        assert not self.inflector.is_plural("address")
        assert not self.inflector.is_plural("")

    def test_singular_words_ending_in_as(self):
        assert self.inflector.plural("Alias") == "Aliases"
        assert self.inflector.plural("Canvas") == "Canvases"
        assert self.inflector.plural("PhotoAlias") == "PhotoAliases"
        assert self.inflector.plural("Aliases") == "Aliases"
        assert self.inflector.singular("aliases") == "alias"
        assert self.inflector.singular("canvas") == "canvas"
        assert not self.inflector.is_plural("alias")
        assert self.inflector.is_plural("aliases")

    def test_empty_word(self):
        assert self.inflector.plural("") == ""
        assert self.inflector.singular("") == ""


class TestNamingConvention(TestCase):
    """Test cases for build_naming_convention"""

    def test_singular_names_ending_in_as_are_pluralized(self):
        alias = build_naming_convention("Alias")
        assert alias.plural == "Aliases"
        assert alias.table_name == alias.package_name == "aliases"
        assert alias.route_path == "/aliases"

        canvas = build_naming_convention("canvas")
        assert canvas.table_name == "canvases"
        assert canvas.route_path == "/canvases"
        assert canvas.controller == "CanvasController"

    def test_all_variants_for_compound_name(self):
        naming = build_naming_convention("ProductCategory")

        assert naming.original == "ProductCategory"
        assert naming.model == "ProductCategory"
        assert naming.model_lower == "productCategory"
        assert naming.model_snake == "product_category"
        assert naming.model_kebab == "product-category"
        assert naming.plural == "ProductCategories"
        assert naming.plural_lower == "productCategories"
        assert naming.plural_snake == "product_categories"
        assert naming.plural_kebab == "product-categories"
        assert naming.package_name == "product_categories"
        assert naming.dir_name == "product_categories"
        assert naming.route_path == "/product-categories"
        assert naming.route_group == "product-categories"
        assert naming.controller == "ProductCategoryController"
        assert naming.service == "ProductCategoryService"
        assert naming.table_name == "product_categories"
        assert naming.var_single == "productCategory"
        assert naming.var_plural == "productCategories"
        assert naming.var_id == "productCategoryId"

    def test_singular_and_plural_inputs_share_table_route_and_package(self):
        for name in ("category", "Category", "categories"):
            naming = build_naming_convention(name)
            assert naming.table_name == "categories", name
            assert naming.route_path == "/categories", name
            assert naming.package_name == "categories", name

    def test_snake_and_kebab_inputs(self):
        assert build_naming_convention("product_category").model == "ProductCategory"
        assert build_naming_convention("product-category").table_name == "product_categories"

    def test_derived_names_are_consistent(self):
        naming = build_naming_convention("TestItem")
        assert naming.table_name == naming.plural_snake
        assert naming.package_name == naming.dir_name == naming.plural_snake
        assert naming.route_path == "/" + naming.route_group
        assert naming.var_single == naming.model_lower

    def test_building_twice_gives_equal_records(self):
        inflector = Inflector()
        assert build_naming_convention("Post", inflector) == build_naming_convention("Post", inflector)
        assert build_naming_convention("Post") == build_naming_convention("Post", inflector)

    def test_record_is_immutable(self):
        naming = build_naming_convention("Post")
        with pytest.raises(FrozenInstanceError):
            naming.model = "Other"

    def test_display_names(self):
        naming = build_naming_convention("ProductCategory")
        assert naming.display_name == "Product Category"
        assert naming.display_plural == "Product Categories"

    def test_to_dict_contains_every_variant(self):
        data = build_naming_convention("Post").to_dict()
        assert data["route_group"] == "posts"
        assert data["controller"] == "PostController"
        assert len(data) == 19

    def test_empty_name_is_rejected(self):
        with pytest.raises(ValueError):
            build_naming_convention("")
        with pytest.raises(ValueError):
            build_naming_convention("__")
