import json
import os

import pytest

from relnote.config import Config, create_sample_config, get_config, load_json_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in list(os.environ):
        if name.startswith("RELNOTE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def test_defaults():
    config = get_config()
    assert config.github_api_url == "https://api.github.com"
    assert config.github_token is None
    assert config.milestone_suffix == " Release"
    assert config.workers == 1


def test_api_url_is_normalized():
    assert Config(github_api_url="github.example.com/api/v3/").github_api_url == "https://github.example.com/api/v3"


def test_workers_must_be_positive():
    with pytest.raises(ValueError):
        Config(workers=0)


def test_members_org_defaults_to_owner():
    assert Config(owner="grpc").members_org == "grpc"
    assert Config(owner="me", org="grpc").members_org == "grpc"


def test_json_file_and_env_precedence(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"owner": "grpc", "repo": "grpc-go", "github_token": "from-file"}), encoding="utf-8")
    monkeypatch.setenv("RELNOTE_GITHUB_TOKEN", "from-env")

    config = get_config(str(path))

    assert config.owner == "grpc"
    assert config.repo == "grpc-go"
    assert config.github_token == "from-env"
    assert config.config_file == str(path)


def test_env_overrides_every_file_setting(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"workers": 4, "milestone_suffix": " Rel", "timeout": 10}), encoding="utf-8")
    monkeypatch.setenv("RELNOTE_WORKERS", "2")
    monkeypatch.setenv("RELNOTE_MILESTONE_SUFFIX", " Release")
    monkeypatch.setenv("RELNOTE_TIMEOUT", "60")

    config = get_config(str(path))

    assert (config.workers, config.milestone_suffix, config.timeout) == (2, " Release", 60)


def test_discovers_config_in_working_directory(tmp_path):
    (tmp_path / "relnote.json").write_text(json.dumps({"owner": "found"}), encoding="utf-8")
    assert get_config().owner == "found"


def test_broken_discovered_file_is_ignored(tmp_path):
    (tmp_path / "relnote.json").write_text("{not json", encoding="utf-8")
    assert get_config().owner is None


def test_broken_explicit_file_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        get_config(str(path))


def test_create_sample_config(tmp_path):
    path = tmp_path / "sample.json"
    create_sample_config(str(path))
    data = load_json_config(str(path))
    assert data["owner"] == "grpc"
    assert Config(**data).repo == "grpc-go"
