import pytest

from print_engine.print_config import (
    DEFAULT_PRINT_CONFIG,
    DEFAULT_PRINT_SETTINGS,
    ENUM_FIELDS,
    SETTINGS_FIELDS,
    config_from_settings,
    create_default_config,
    flatten_config,
    get_config_value,
    hydrate_settings,
)


def test_default_config_is_a_fresh_copy():
    first = create_default_config()
    first["table"]["header"]["background_color"] = "#ff0000"
    second = create_default_config()
    assert second["table"]["header"]["background_color"] == DEFAULT_PRINT_CONFIG["table"]["header"]["background_color"]


def test_every_leaf_has_a_flat_key():
    assert SETTINGS_FIELDS["table_header_background_color"] == ("table", "header", "background_color")
    assert SETTINGS_FIELDS["header_logo_swap_position"] == ("header", "logo", "swap_position")
    assert SETTINGS_FIELDS["page_margins_top"] == ("page", "margins", "top")
    assert set(DEFAULT_PRINT_SETTINGS) == set(SETTINGS_FIELDS)


def test_no_default_is_none():
    assert all(value is not None for value in DEFAULT_PRINT_SETTINGS.values())


def test_enum_defaults_are_allowed_values():
    for key, allowed in ENUM_FIELDS.items():
        assert DEFAULT_PRINT_SETTINGS[key] in allowed, key


def test_flatten_inverts_config_from_settings():
    settings = dict(DEFAULT_PRINT_SETTINGS, totals_text_color="#123456")
    config = config_from_settings(settings)
    assert config["totals"]["text_color"] == "#123456"
    assert flatten_config(config) == settings


def test_get_config_value_accepts_dotted_path_and_tuple():
    config = create_default_config()
    assert get_config_value(config, "page.margins.left") == "15mm"
    assert get_config_value(config, ("page", "margins", "left")) == "15mm"


def test_hydrate_keeps_defaults_for_missing_and_none():
    settings = hydrate_settings({"page_direction": "rtl", "table_header_text_color": None})
    assert settings["page_direction"] == "rtl"
    assert settings["table_header_text_color"] == DEFAULT_PRINT_SETTINGS["table_header_text_color"]
    assert settings["footer_text"] == DEFAULT_PRINT_SETTINGS["footer_text"]


def test_hydrate_drops_unknown_keys():
    settings = hydrate_settings({"no_such_setting": "x"})
    assert "no_such_setting" not in settings


@pytest.mark.parametrize("stored,expected", [
    ("true", True),
    ("1", True),
    ("yes", True),
    ("false", False),
    ("0", False),
    (False, False),
])
def test_hydrate_coerces_booleans(stored, expected):
    assert hydrate_settings({"party_info_enabled": stored})["party_info_enabled"] is expected


def test_hydrate_rejects_invalid_enum_values(caplog):
    settings = hydrate_settings({"header_alignment": "diagonal"})
    assert settings["header_alignment"] == DEFAULT_PRINT_SETTINGS["header_alignment"]
    assert "header_alignment" in caplog.text


def test_hydrate_stringifies_non_boolean_values():
    assert hydrate_settings({"page_line_height": 1.5})["page_line_height"] == "1.5"
