"""Tests for YAML configuration loading."""

from pathlib import Path

from site_pipeline.config import AppConfig, load_config


def test_defaults_without_file() -> None:
    cfg = load_config(None)
    assert cfg.faq.min_sections == 3
    assert cfg.faq.max_pairs == 5
    assert cfg.faq.min_answer_chars == 30
    assert cfg.content.source_dirs == ["science", "dosing", "sports", "safety", "comparisons", "quality"]
    assert cfg.markup.container_tag == "article"


def test_defaults_are_not_shared() -> None:
    first = load_config(None)
    first.content.source_dirs.append("extra")
    assert "extra" not in load_config(None).content.source_dirs


def test_yaml_overrides_merge_per_section(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "faq:\n"
        "  max_pairs: 3\n"
        "  unknown_key: 1\n"
        "content:\n"
        "  source_dirs: [science]\n"
        "site:\n"
        "  base_url: https://example.com\n"
        "not_a_section:\n"
        "  value: 1\n",
        encoding="utf-8",
    )
    cfg = load_config(str(path))

    assert isinstance(cfg, AppConfig)
    assert cfg.faq.max_pairs == 3
    assert cfg.faq.min_sections == 3
    assert cfg.content.source_dirs == ["science"]
    assert cfg.content.page_suffix == ".html"
    assert cfg.site.base_url == "https://example.com"
    assert cfg.site.site_name == "Creatinepedia"


def test_empty_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()
