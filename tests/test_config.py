# tests/test_config.py
"""
Difficulty configs: validation, presets, TOML profiles in the workspace.
"""

from __future__ import annotations

import dataclasses
import textwrap

import pytest

from divquiz import config as CONFIG
from divquiz.config import PRESETS, DifficultyConfig, config_from_dict, get_preset, load_config
from divquiz.utility import ConfigError, UserInputError
from divquiz.workspace import ensure_workspace_seeded, workspace_dir

GOOD = {
    "name": "ok",
    "max_prime_factors": 3,
    "prime_weights": {2: 5, 3: 3, 5: 1},
    "stop_probability_table": ((0.5, 30),),
    "max_value": 60,
}

PROFILE_TOML = textwrap.dedent("""\
    [PROFILE]
    name = "tiny"
    description = '''  only twos
      and threes '''

    [GENERATION]
    MAX_PRIME_FACTORS = 3
    MAX_VALUE = 30
    PRIME_WEIGHTS = { "2" = 3, "3" = 1 }
    STOP_PROBABILITIES = [[0.25, 10], [0.75, 20]]
""")


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("DIVQUIZ_HOME", str(tmp_path))
    (tmp_path / "profiles").mkdir()
    return tmp_path


def _write_profile(home, name, text):
    p = home / "profiles" / f"{name}.toml"
    p.write_text(text, encoding="utf-8")
    return p


# ---------- validation --------------------------------------------------------


@pytest.mark.parametrize("override,fragment", [
    ({"max_value": 9}, "exceeds max_value"),
    ({"prime_weights": {2: 1, 4: 1}}, "not a prime"),
    ({"prime_weights": {2: 0}}, "positive integer"),
    ({"prime_weights": {2: 1.5}}, "positive integer"),
    ({"prime_weights": {}}, "empty"),
    ({"max_prime_factors": 0}, "max_prime_factors"),
    ({"max_prime_factors": True}, "max_prime_factors"),
    ({"max_value": True}, "max_value must be"),
    ({"stop_probability_table": ((1.2, 10),)}, "outside [0, 1]"),
    ({"stop_probability_table": ((0.2, 10.5),)}, "must be an integer"),
], ids=["ceiling", "non-prime", "zero-weight", "float-weight", "no-primes",
        "no-factors", "bool-factors", "bool-ceiling", "probability", "bound"])
def test_invalid_configs_fail_at_construction(override, fragment):
    with pytest.raises(ConfigError) as exc:
        DifficultyConfig(**{**GOOD, **override})
    assert fragment in str(exc.value)


def test_config_error_is_a_user_input_error():
    assert issubclass(ConfigError, UserInputError)


def test_config_is_immutable():
    cfg = DifficultyConfig(**GOOD)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.max_value = 100
    with pytest.raises(TypeError):
        cfg.prime_weights[7] = 1
    assert cfg.min_prime == 2
    assert cfg.sampler is cfg.sampler


def test_config_copies_caller_mapping():
    weights = {2: 1, 3: 1}
    cfg = DifficultyConfig(**{**GOOD, "prime_weights": weights})
    weights[5] = 1
    assert dict(cfg.prime_weights) == {2: 1, 3: 1}


# ---------- presets -----------------------------------------------------------


def test_presets_exist_side_by_side():
    assert list(PRESETS) == ["beginner", "intermediate", "advanced"]
    for name, cfg in PRESETS.items():
        assert cfg.name == name
        assert cfg.min_prime * max(cfg.prime_weights) <= cfg.max_value
        # the 2-or-3 repair never leaves the range
        assert max(cfg.prime_weights) * 3 <= cfg.max_value


def test_get_preset_is_case_insensitive_and_whole():
    assert get_preset(" Advanced ") is PRESETS["advanced"]
    with pytest.raises(UserInputError):
        get_preset("expert")


def test_preset_names_match_loosely_everywhere(home):
    assert CONFIG.has_profile(" Advanced ")
    assert load_config("INTERMEDIATE") is PRESETS["intermediate"]
    assert not CONFIG.has_profile("Expert")


def test_configs_are_hashable():
    cfg = DifficultyConfig(**GOOD)
    same = DifficultyConfig(**{**GOOD, "prime_weights": {5: 1, 3: 3, 2: 5}})
    assert hash(cfg) == hash(same)
    assert len({cfg, same, *PRESETS.values()}) == 4


def test_selecting_a_preset_replaces_runtime_config():
    from divquiz.runtime import APPLY, current

    APPLY(PRESETS["advanced"])
    APPLY(PRESETS["beginner"])
    rt = current()
    assert rt.config is PRESETS["beginner"]
    assert rt.profile_name == "beginner"


# ---------- profiles ----------------------------------------------------------


def test_load_profile_from_workspace(home):
    path = _write_profile(home, "tiny", PROFILE_TOML)
    cfg = load_config("tiny")
    assert cfg.name == "tiny"
    assert cfg.description == "only twos and threes"
    assert dict(cfg.prime_weights) == {2: 3, 3: 1}
    assert cfg.stop_probability_table == ((0.25, 10), (0.75, 20))
    assert cfg.max_prime_factors == 3
    assert cfg.max_value == 30
    assert cfg._source == path


def test_presets_win_over_workspace_files(home):
    _write_profile(home, "beginner", PROFILE_TOML)
    assert load_config("beginner") is PRESETS["beginner"]
    assert load_config(None) is PRESETS["beginner"]


def test_unknown_profile(home):
    assert not CONFIG.has_profile("nope")
    with pytest.raises(UserInputError):
        load_config("nope")


def test_broken_toml_reports_location(home):
    _write_profile(home, "broken", "[GENERATION]\nMAX_VALUE = = 3\n")
    with pytest.raises(ConfigError) as exc:
        load_config("broken")
    assert "broken.toml" in str(exc.value)
    assert "line 2" in str(exc.value)


@pytest.mark.parametrize("text,fragment", [
    ("[PROFILE]\nname = 'x'\n", "missing [GENERATION]"),
    ("[GENERATION]\nMAX_VALUE = 30\n", "lacks MAX_PRIME_FACTORS, PRIME_WEIGHTS"),
    ("[GENERATION]\nMAX_PRIME_FACTORS = 2\nMAX_VALUE = 30\nPRIME_WEIGHTS = { two = 1 }\n", "not an integer"),
    ("[GENERATION]\nMAX_PRIME_FACTORS = 2\nMAX_VALUE = 30\nPRIME_WEIGHTS = [2, 3]\n", "must be a table"),
    ("[GENERATION]\nMAX_PRIME_FACTORS = 2\nMAX_VALUE = 30\nPRIME_WEIGHTS = { \"2\" = 1 }\n"
     "STOP_PROBABILITIES = [[0.5]]\n", "bad STOP_PROBABILITIES row"),
    ("[GENERATION]\nMAX_PRIME_FACTORS = 2\nMAX_VALUE = 10\nPRIME_WEIGHTS = { \"2\" = 1, \"7\" = 1 }\n",
     "exceeds max_value"),
    ("PROFILE = \"x\"\n[GENERATION]\nMAX_PRIME_FACTORS = 2\nMAX_VALUE = 30\nPRIME_WEIGHTS = { \"2\" = 1 }\n",
     "[PROFILE] must be a table"),
], ids=["no-section", "missing-keys", "bad-key", "weights-array", "short-row", "ceiling", "profile-not-table"])
def test_invalid_profiles(home, text, fragment):
    _write_profile(home, "bad", text)
    with pytest.raises(ConfigError) as exc:
        load_config("bad")
    assert fragment in str(exc.value)


def test_config_from_dict_round_trips_as_dict():
    cfg = PRESETS["intermediate"]
    again = config_from_dict(cfg.as_dict(), "fallback")
    assert again == cfg


def test_listing_presets_and_workspace_profiles(home):
    _write_profile(home, "tiny", PROFILE_TOML)
    _write_profile(home, "bad", "[GENERATION]\n")
    names = dict(CONFIG.list_profiles_with_descriptions())
    assert names["beginner"] == PRESETS["beginner"].description
    assert names["tiny"] == "only twos and threes"
    assert names["bad"].startswith("(invalid:")
    _write_profile(home, "odd", "PROFILE = \"x\"\n[GENERATION]\nMAX_VALUE = 30\n")
    assert dict(CONFIG.list_profiles_with_descriptions())["odd"].startswith("(invalid:")
    assert CONFIG.list_all_profiles() == ["beginner", "intermediate", "advanced", "bad", "odd", "tiny"]


def test_current_profile_is_remembered(home):
    assert CONFIG.read_current_profile() is None
    CONFIG.write_current_profile("advanced.toml")
    assert CONFIG.read_current_profile() == "advanced"


def test_workspace_seeding_copies_valid_sample(home):
    root, copied = ensure_workspace_seeded()
    assert root == workspace_dir()
    assert copied >= 1
    cfg = load_config("challenge")
    assert cfg.max_prime_factors == 5
    # copy-if-missing: second run copies nothing
    assert ensure_workspace_seeded()[1] == 0
