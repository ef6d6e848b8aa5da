"""
Tests for template catalog models.
"""

import pytest
from pydantic import ValidationError

from style_kits.models.template_models import (
    FavoriteRequest,
    Template,
    TemplateCatalog,
)


class TestTemplate:
    """Test the Template model."""

    def test_wire_fields(self, sample_templates_data):
        template = Template.model_validate(sample_templates_data[2])

        assert template.popularity_index == 7
        assert template.tags == ("Pricing", "Minimal")
        assert template.key == "3"

    def test_defaults(self):
        template = Template(id="abc", title="Plain")

        assert template.type == ""
        assert template.tags == ()
        assert template.popularity_index is None
        assert template.is_pro is False

    def test_null_tags_and_blank_popularity(self):
        template = Template.model_validate(
            {"id": 1, "title": "T", "tags": None, "popularityIndex": ""}
        )

        assert template.tags == ()
        assert template.popularity_index is None

    def test_single_tag_string(self):
        assert Template(id=1, title="T", tags="hero").tags == ("hero",)

    def test_non_string_tags_become_strings(self):
        template = Template.model_validate(
            {"id": 1, "title": "T", "tags": ["modern", 2020, None]}
        )

        assert template.tags == ("modern", "2020")
        assert template.matches("2020")

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (9, 9),
            ("7", 7),
            (" 12abc", 12),
            (4.5, 4),
            ("-3", -3),
            ("n/a", None),
            ("", None),
            (True, None),
            ([1], None),
            (float("nan"), None),
        ],
    )
    def test_popularity_index_is_lenient(self, raw, expected):
        template = Template.model_validate(
            {"id": 1, "title": "T", "popularityIndex": raw}
        )

        assert template.popularity_index == expected

    def test_extra_fields_are_kept(self):
        template = Template.model_validate({"id": 1, "title": "T", "author": "Qode"})

        assert template.model_extra == {"author": "Qode"}

    def test_is_frozen(self):
        template = Template(id=1, title="T")

        with pytest.raises(ValidationError):
            template.title = "Other"

    def test_title_is_required(self):
        with pytest.raises(ValidationError):
            Template.model_validate({"id": 1})

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("pricing", True),
            ("TABLE", True),
            ("minim", True),
            ("hero", False),
            ("", True),
        ],
    )
    def test_matches(self, sample_templates_data, query, expected):
        template = Template.model_validate(sample_templates_data[2])

        assert template.matches(query) is expected


class TestTemplateCatalog:
    """Test the catalog envelope."""

    def test_parses_payload(self, sample_catalog_payload):
        catalog = TemplateCatalog.model_validate(sample_catalog_payload)

        assert len(catalog.templates) == 5
        assert catalog.count == 5

    def test_one_odd_template_does_not_reject_the_catalog(self, sample_catalog_payload):
        sample_catalog_payload["templates"][1]["popularityIndex"] = "n/a"
        sample_catalog_payload["templates"][0]["tags"] = ["modern", 2020]

        catalog = TemplateCatalog.model_validate(sample_catalog_payload)

        assert len(catalog.templates) == 5
        assert catalog.templates[1].popularity_index is None

    def test_empty_payload(self):
        catalog = TemplateCatalog.model_validate({})

        assert catalog.templates == []
        assert catalog.count is None
        assert catalog.timestamp is None


def test_favorite_request_defaults_to_adding():
    assert FavoriteRequest(template_id=3).favorite is True
