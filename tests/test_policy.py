import logging

import pytest

from pallet_assignment.policy import (
    DEFAULT_PACKING_POLICY,
    PackingPolicy,
    default_settings_path,
    load_policy,
    policy_from_mapping,
)


@pytest.fixture(autouse=True)
def _clear_policy_cache():
    load_policy.cache_clear()
    yield
    load_policy.cache_clear()


def test_packaged_settings_match_defaults(monkeypatch):
    monkeypatch.delenv("PALLET_ASSIGNMENT_SETTINGS", raising=False)

    assert load_policy() == DEFAULT_PACKING_POLICY


def test_load_policy_from_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("packing:\n  strategy: best_fit\n  eps: 1e-9\n  max_workers: 4\n", encoding="utf-8")

    policy = load_policy(str(path))

    assert policy == PackingPolicy(strategy="best_fit", eps=1e-9, max_workers=4)


def test_env_variable_selects_settings_file(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("capacity_percent: 90\n", encoding="utf-8")
    monkeypatch.setenv("PALLET_ASSIGNMENT_SETTINGS", str(path))

    assert default_settings_path() == str(path)
    assert load_policy().capacity_percent == 90.0


def test_missing_settings_file_uses_defaults(tmp_path):
    assert load_policy(str(tmp_path / "absent.yaml")) == DEFAULT_PACKING_POLICY


def test_unknown_keys_are_ignored(caplog):
    with caplog.at_level(logging.WARNING, logger="pallet_assignment.policy"):
        policy = policy_from_mapping({"colour": "red", "strategy": "best_fit"})

    assert policy.strategy == "best_fit"
    assert "colour" in caplog.text


@pytest.mark.parametrize(
    "content",
    [
        "packing: [1, 2]\n",
        "- just\n- a list\n",
        "packing:\n  eps: tiny\n",
        "packing:\n  strategy: worst_fit\n",
        "packing: {unclosed\n",
    ],
)
def test_invalid_settings_raise(tmp_path, content):
    path = tmp_path / "settings.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        load_policy(str(path))


def test_policy_validation():
    with pytest.raises(ValueError):
        PackingPolicy(capacity_percent=0)
    with pytest.raises(ValueError):
        PackingPolicy(eps=-1.0)
    with pytest.raises(ValueError):
        PackingPolicy(max_workers=0)
