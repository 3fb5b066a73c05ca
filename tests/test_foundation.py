"""
Unit Tests for Netflex foundation helpers.

Test Coverage:
    - Variable format coercion (boolean, json, passthrough)
    - Variable lookups by alias and caching of the remote list
    - Setting as a Variable alias
    - StaticContent blocks, areas and the static_content helper
"""
import pytest
import requests

from foundation import GlobalContent, Setting, StaticContent, Variable, get_setting, static_content
from netflex import get_cache


VARIABLES = [
    {"alias": "site_name", "format": "text", "value": "Example Site"},
    {"alias": "maintenance", "format": "boolean", "value": "1"},
    {"alias": "newsletter", "format": "boolean", "value": "0"},
    {"alias": "opening_hours", "format": "json", "value": '{"mon": "08-16"}'},
    {"alias": "already_decoded", "format": "json", "value": {"a": 1}},
    {"alias": "broken_flag", "format": "boolean", "value": "true"},
    {"alias": "broken_json", "format": "json", "value": "{not json"},
]

STATICS = [
    {
        "alias": "footer",
        "globals": [
            {"alias": "address", "content_type": "text", "content": {"text": "Storgata 1, Oslo", "image": None}},
            {"alias": "logo", "content_type": "image", "content": {"image": "logo.png", "text": "Logo"}},
        ]
    },
    {"alias": "empty", "globals": []},
]


class TestVariable:
    """Test suite for Variable and Setting."""

    def test_get_text_value(self, api):
        api.get.return_value = VARIABLES
        assert Variable.get("site_name") == "Example Site"

    def test_boolean_format_is_coerced(self, api):
        api.get.return_value = VARIABLES
        assert Variable.get("maintenance") is True
        assert Variable.get("newsletter") is False

    def test_json_format_is_decoded(self, api):
        api.get.return_value = VARIABLES
        assert Variable.get("opening_hours") == {"mon": "08-16"}
        assert Variable.get("already_decoded") == {"a": 1}

    def test_malformed_values_degrade(self, api):
        api.get.return_value = VARIABLES

        assert Variable.get("broken_flag") is False
        assert Variable.get("broken_json") is None

    def test_unknown_alias_returns_none(self, api):
        api.get.return_value = VARIABLES
        assert Variable.retrieve("missing") is None
        assert Variable.get("missing") is None

    def test_all_wraps_records(self, api):
        api.get.return_value = VARIABLES

        variables = Variable.all()

        assert len(variables) == len(VARIABLES)
        assert all(isinstance(variable, Variable) for variable in variables)
        assert variables[0].alias == "site_name"
        assert variables[0].missing_attribute is None

    def test_list_is_fetched_once_and_cached(self, api):
        api.get.return_value = VARIABLES

        Variable.get("site_name")
        Variable.get("maintenance")

        api.get.assert_called_once_with("foundation/variables")
        assert get_cache().get("variables") == VARIABLES

    def test_transport_errors_propagate(self, api):
        api.get.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(requests.exceptions.ConnectionError):
            Variable.get("site_name")
        assert get_cache().has("variables") is False

    def test_setting_behaves_like_variable(self, api):
        api.get.return_value = VARIABLES

        setting = Setting.retrieve("maintenance")

        assert isinstance(setting, Setting)
        assert setting.value is True
        assert get_setting("site_name") == "Example Site"

    def test_remote_object_is_read_only(self, api):
        api.get.return_value = VARIABLES
        variable = Variable.retrieve("site_name")

        with pytest.raises(AttributeError):
            variable.value = "changed"


class TestStaticContent:
    """Test suite for StaticContent, GlobalContent and static_content()."""

    def test_retrieve_block(self, api):
        api.get.return_value = STATICS

        block = StaticContent.retrieve("footer")

        assert block.alias == "footer"
        assert [item.alias for item in block.globals] == ["address", "logo"]
        assert all(isinstance(item, GlobalContent) for item in block.globals)
        api.get.assert_called_once_with("foundation/globals")

    def test_area_get_defaults_to_content_type(self, api):
        api.get.return_value = STATICS
        block = StaticContent.retrieve("footer")

        assert block.area("address").get() == "Storgata 1, Oslo"
        assert block.area("logo").get() == "logo.png"
        assert block.area("logo").get("text") == "Logo"
        assert block.area("missing") is None

    def test_static_content_without_area_returns_block(self, api):
        api.get.return_value = STATICS
        assert static_content("footer") == StaticContent.retrieve("footer")

    def test_static_content_area_and_field(self, api):
        api.get.return_value = STATICS

        assert static_content("footer", "address") == "Storgata 1, Oslo"
        assert static_content("footer", "logo", "text") == "Logo"
        assert static_content("footer", "logo", "unknown") is None

    def test_static_content_unknown_block_or_area(self, api):
        api.get.return_value = STATICS

        assert static_content("missing") is None
        assert static_content("missing", "address") is None
        assert static_content("empty", "address") is None

    def test_statics_are_cached(self, api):
        api.get.return_value = STATICS

        static_content("footer", "address")
        static_content("footer", "logo")

        api.get.assert_called_once_with("foundation/globals")
