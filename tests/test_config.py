import pytest

from burst_geometry import EngineConfig, get_engine_config, set_engine_config


def test_defaults():
    config = EngineConfig()
    assert config.filter_digits == 30
    assert config.max_digits == 2000
    assert config.heading_digits == 100
    assert config.arc_sample_denominator == 10**6


def test_get_returns_a_copy():
    config = get_engine_config()
    config.filter_digits = 99
    assert get_engine_config().filter_digits != 99


def test_set_installs_a_validated_copy():
    original = get_engine_config()
    try:
        custom = EngineConfig(filter_digits=40, max_digits=400)
        set_engine_config(custom)
        custom.filter_digits = 11
        assert get_engine_config().filter_digits == 40
    finally:
        set_engine_config(original)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"filter_digits": 5},
        {"filter_digits": 30, "max_digits": 40},
        {"heading_digits": 10},
        {"arc_sample_denominator": 1},
    ],
)
def test_invalid_configs_are_rejected(kwargs):
    original = get_engine_config()
    with pytest.raises(ValueError):
        set_engine_config(EngineConfig(**kwargs))
    assert get_engine_config() == original
