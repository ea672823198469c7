import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from butler.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,allow_www",
    [
        (json.dumps({"www": True, "domains": ["example.com"]}), ".json", True),
        (json.dumps({"allowWww": False, "domains": ["example.com"]}), ".json", False),
        ("allow_www: true\ndomains:\n  - example.com\n", ".yaml", True),
        ("domains: [example.com]\n", ".yml", False),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, allow_www):
    cfg = load_config(write_file(tmp_path, content, suffix))
    assert isinstance(cfg, CrawlerConfig)
    assert cfg.allow_www is allow_www
    assert cfg.domains == ["example.com"]


def test_defaults():
    cfg = CrawlerConfig(domains=["example.com"])
    assert cfg.schemes == ["http"]
    assert cfg.pool_size == 2
    assert cfg.timeout is None
    assert cfg.user_agent.startswith("Butler/")


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"domains": []},
        {"domains": ["http://example.com"]},
        {"domains": ["example.com/path"]},
        {"domains": ["  "]},
        {"domains": ["example.com"], "pool_size": 0},
        {"domains": ["example.com"], "timeout": 0},
        {"domains": ["example.com"], "unknown": 1},
    ],
)
def test_invalid_config(tmp_path, data):
    with pytest.raises(ValidationError):
        load_config(write_file(tmp_path, json.dumps(data), ".json"))


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("- a\n- b\n", ".yaml", TypeError),
        ("domains: [unclosed\n", ".yaml", ValueError),
        ("{not json", ".json", ValueError),
        ("[1, 2]", ".json", TypeError),
        ("domains = ['example.com']", ".toml", ValueError),
    ],
)
def test_unreadable_config(tmp_path, content, suffix, expect_exc):
    with pytest.raises(expect_exc):
        load_config(write_file(tmp_path, content, suffix))


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_load_config_default_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_file(tmp_path, json.dumps({"domains": ["example.com"]}), ".json")
    assert load_config(None).domains == ["example.com"]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.json")


def test_config_is_frozen():
    cfg = CrawlerConfig(domains=["example.com"])
    with pytest.raises(ValidationError):
        cfg.allow_www = True


def test_schemes_and_domains_are_cleaned():
    cfg = CrawlerConfig(domains=[" example.com "], schemes=["HTTP", "https"])
    assert cfg.domains == ["example.com"]
    assert cfg.schemes == ["http", "https"]
