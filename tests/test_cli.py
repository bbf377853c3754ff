"""Tests for the command-line interface."""

from pathlib import Path

from typer.testing import CliRunner

from site_pipeline.cli import app


runner = CliRunner()


def _article(sections: int) -> str:
    body = "".join(
        f"\n      <h2>Topic {i}</h2>\n      <p>Paragraph {i} carries enough words to be an answer.</p>"
        for i in range(sections)
    )
    return f"<html>\n<head>\n  <title>T</title>\n</head>\n<body>\n    <article>{body}\n    </article>\n</body>\n</html>\n"


def test_inject_faqs_command(tmp_path: Path) -> None:
    (tmp_path / "science").mkdir()
    page = tmp_path / "science" / "atp.html"
    page.write_text(_article(3), encoding="utf-8")
    short = tmp_path / "science" / "short.html"
    short.write_text(_article(1), encoding="utf-8")

    result = runner.invoke(app, ["inject-faqs", "--root", str(tmp_path), "--no-progress"])

    assert result.exit_code == 0, result.output
    assert "Skipping dosing/ (not found)" in result.output
    assert "science/: 1 injected, 1 skipped" in result.output
    assert '<section class="faq-section">' in page.read_text(encoding="utf-8")
    assert short.read_text(encoding="utf-8") == _article(1)


def test_missing_root_exits_non_zero(tmp_path: Path) -> None:
    result = runner.invoke(app, ["inject-faqs", "--root", str(tmp_path / "missing"), "--no-progress"])
    assert result.exit_code == 1


def test_config_file_controls_directories(tmp_path: Path) -> None:
    (tmp_path / "guides").mkdir()
    (tmp_path / "guides" / "start.html").write_text(_article(3), encoding="utf-8")
    config = tmp_path / "site.yaml"
    config.write_text(f"content:\n  root_dir: {tmp_path}\n  source_dirs: [guides]\n", encoding="utf-8")

    result = runner.invoke(app, ["retemplate", "--config", str(config), "--no-progress"])

    assert result.exit_code == 0, result.output
    assert "guides/: 1 files" in result.output
    assert "Skipping" not in result.output
    assert '<link rel="canonical" href="https://creatinepedia.com/guides/start">' in (
        tmp_path / "guides" / "start.html"
    ).read_text(encoding="utf-8")


def test_indexes_command(tmp_path: Path) -> None:
    (tmp_path / "safety").mkdir()
    (tmp_path / "safety" / "kidneys.html").write_text(_article(3), encoding="utf-8")

    result = runner.invoke(app, ["indexes", "--root", str(tmp_path), "--no-progress"])

    assert result.exit_code == 0, result.output
    assert "articles.html (hub page)" in result.output
    assert "safety/index.html" in result.output
    assert (tmp_path / "articles.html").exists()
    assert (tmp_path / "safety" / "index.html").exists()


def test_sitemap_command_with_log_file(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("<html></html>", encoding="utf-8")

    result = runner.invoke(app, ["sitemap", "--root", str(tmp_path), "--log-file"])

    assert result.exit_code == 0, result.output
    assert "Total: 1 URLs" in result.output
    assert (tmp_path / "sitemap.xml").exists()
    assert (tmp_path / "site-pipeline.jsonl").exists()
