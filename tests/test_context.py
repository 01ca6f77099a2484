import pytest
from ec_fdk.core.context import FdkConfig, as_config
from pydantic import ValidationError


def test_aliases_and_field_names_are_equivalent():
    a = FdkConfig(env="stage", dmShortID="83cc6374", entryID="e1")
    b = FdkConfig(env="stage", dm_short_id="83cc6374", entry_id="e1")
    assert a == b
    assert a.dm_short_id == "83cc6374"


def test_merge_returns_new_config_and_keeps_receiver():
    base = FdkConfig(env="stage", model="muffin")
    merged = base.merge({"dmShortID": "abc"}, model="cake")

    assert merged is not base
    assert merged.dm_short_id == "abc"
    assert merged.model == "cake"
    assert base.model == "muffin"
    assert base.dm_short_id is None


def test_config_is_frozen():
    config = FdkConfig(env="stage")
    with pytest.raises(ValidationError):
        config.env = "live"


def test_unknown_keys_are_kept():
    config = as_config({"env": "live", "custom": 1})
    assert config.env == "live"
    assert config.custom == 1
    assert config.merge(other=2).other == 2


def test_as_config_passes_configs_through():
    config = FdkConfig(env="stage")
    assert as_config(config) is config
    assert as_config(None) == FdkConfig()


def test_clean_alias():
    assert as_config({"_clean": True}).clean is True
    assert FdkConfig().merge(_clean=True).clean is True
