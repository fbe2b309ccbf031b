import pytest

from pendulumsim.config import (
    SimulationConfig,
    get_default_config,
    get_fast_config,
    get_high_resolution_config,
)


def test_defaults():
    config = SimulationConfig()
    assert config.duration == 60.0
    assert config.dt == 0.01
    assert config.gravity == 9.8
    assert config.scale == 100.0
    assert config.n_steps == 6000
    assert config.pivot == (320.0, 240.0)
    assert config.frame_interval_ms == pytest.approx(1000 / 60)


@pytest.mark.parametrize(
    "key, value",
    [
        ("duration", 0.0),
        ("dt", -0.01),
        ("gravity", 0.0),
        ("scale", 0.0),
        ("screen_width", 0),
        ("frame_rate", 0),
        ("trail_length", -1),
    ],
)
def test_validation(key, value):
    with pytest.raises(ValueError, match=key):
        SimulationConfig(**{key: value})


def test_dt_larger_than_duration():
    with pytest.raises(ValueError):
        SimulationConfig(duration=0.01, dt=0.1)


def test_copy_with_changes():
    base = SimulationConfig()
    short = base.copy(duration=5.0, name="short")

    assert short.duration == 5.0
    assert short.name == "short"
    assert base.duration == 60.0
    assert short.n_steps == 500


def test_copy_rejects_unknown_key():
    with pytest.raises(ValueError, match="Unknown parameter"):
        SimulationConfig().copy(timestep=0.1)


def test_save_load(tmp_path):
    config = SimulationConfig(duration=12.5, trail_length=30, name="saved")
    path = tmp_path / "config.json"
    config.save(path)

    loaded = SimulationConfig.load(path)
    assert loaded == config


def test_presets():
    assert get_default_config() == SimulationConfig()
    assert get_fast_config().n_steps == 1000
    assert get_high_resolution_config().n_steps == 60000


def test_load_rejects_unknown_key(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"duration": 1.0, "timestep": 0.1}')
    with pytest.raises(ValueError, match="Unknown parameter: timestep"):
        SimulationConfig.load(path)


@pytest.mark.parametrize(
    "key, value", [("duration", "ten"), ("dt", None), ("trail_length", True)]
)
def test_validation_rejects_non_numbers(key, value):
    with pytest.raises(ValueError, match=f"{key} must be a number"):
        SimulationConfig(**{key: value})
