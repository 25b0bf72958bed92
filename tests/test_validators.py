"""
Tests for model name and field token validation.
"""

from unittest import TestCase

import pytest

from basecmd_generator.exceptions import ValidationError
from basecmd_generator.validators import (
    FieldDefinitionValidator,
    ModelNameValidator,
    ValidationResult,
)


class TestValidationResult(TestCase):
    """Test cases for ValidationResult"""

    def test_errors_make_result_invalid(self):
        assert ValidationResult(errors=["boom"]).is_valid is False

    def test_merge(self):
        result = ValidationResult(warnings=["first"])
        result.merge(ValidationResult(errors=["bad"], warnings=["second"]))
        assert not result.is_valid
        assert result.errors == ["bad"]
        assert result.warnings == ["first", "second"]

    def test_raise_if_invalid(self):
        ValidationResult(warnings=["only a warning"]).raise_if_invalid()

        with pytest.raises(ValidationError) as exc_info:
            ValidationResult(errors=["a", "b"]).raise_if_invalid()
        assert "a; b" in exc_info.value.message
        assert exc_info.value.error_code == "VALIDATION_ERROR"


class TestModelNameValidator(TestCase):
    """Test cases for ModelNameValidator"""

    def test_valid_names(self):
        for name in ("Post", "product_category", "ProductCategory", "order-item", "Blog Post"):
            assert ModelNameValidator.validate(name).is_valid, name

    def test_empty_name(self):
        result = ModelNameValidator.validate("  ")
        assert result.errors == ["Model name is required"]

    def test_bad_characters(self):
        for name in ("9lives", "post!", "_hidden"):
            assert not ModelNameValidator.validate(name).is_valid, name

    def test_go_keyword(self):
        result = ModelNameValidator.validate("Type")
        assert not result.is_valid
        assert "reserved Go keyword" in result.errors[0]


class TestFieldDefinitionValidator(TestCase):
    """Test cases for FieldDefinitionValidator"""

    def test_valid_tokens(self):
        for token in ("title", "title:string", "author:belongsTo:User", "owner_id:uint:User", "price:float64"):
            result = FieldDefinitionValidator.validate_token(token)
            assert result.is_valid and not result.warnings, token

    def test_empty_field_name(self):
        assert not FieldDefinitionValidator.validate_token(":string").is_valid

    def test_bad_field_name(self):
        assert not FieldDefinitionValidator.validate_token("first-name:string").is_valid

    def test_custom_type_warns(self):
        result = FieldDefinitionValidator.validate_token("location:geo.Point")
        assert result.is_valid
        assert "custom Go type" in result.warnings[0]

    def test_invalid_type_is_an_error(self):
        assert not FieldDefinitionValidator.validate_token("location:geo point").is_valid

    def test_related_model_on_plain_field_warns(self):
        result = FieldDefinitionValidator.validate_token("title:string:User")
        assert result.is_valid
        assert "ignored" in result.warnings[0]

    def test_too_many_parts_warns(self):
        result = FieldDefinitionValidator.validate_token("author:belongsTo:User:extra")
        assert result.is_valid
        assert "more than three parts" in result.warnings[0]

    def test_duplicate_names(self):
        result = FieldDefinitionValidator.validate_tokens(["title", "Title:text", "body"])
        assert not result.is_valid
        assert "declared more than once" in result.errors[0]

    def test_distinct_names(self):
        assert FieldDefinitionValidator.validate_tokens(["title", "body:text", "author:belongsTo"]).is_valid

    def test_belongs_to_fields_collide_with_other_tokens(self):
        result = FieldDefinitionValidator.validate_tokens(["author_id", "author:string"], "Post")
        assert not result.is_valid
        assert result.errors == ["Field 'Author' is declared more than once (by 'author_id' and 'author:string')"]

        result = FieldDefinitionValidator.validate_tokens(["author:belongsTo:User", "author_id"], "Post")
        assert not result.is_valid
        assert len(result.errors) == 2
        assert "'AuthorId'" in result.errors[0]
        assert "'Author'" in result.errors[1]

    def test_foreign_key_without_prefix_is_an_error(self):
        result = FieldDefinitionValidator.validate_tokens(["id:belongsTo:User"], "Post")
        assert not result.is_valid
