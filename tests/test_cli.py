import json
from pathlib import Path

from typer.testing import CliRunner

from miperize.cli import app

runner = CliRunner()


def test_convert_file_to_stdout(tmp_path: Path) -> None:
    source = tmp_path / "post.html"
    source.write_text('<p>Hi</p><img src="/content/a.jpg">', encoding="utf-8")

    result = runner.invoke(app, ["convert", str(source)])

    assert result.exit_code == 0, result.output
    assert result.stdout == (
        '<p>Hi</p><mip-img src="/content/a.jpg" width="600" height="400" layout="responsive"></mip-img>'
    )


def test_convert_stdin_with_config_and_out(tmp_path: Path) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"mip-iframe": {"sandbox": "allow-scripts"}}), encoding="utf-8")
    out = tmp_path / "out.html"

    result = runner.invoke(
        app,
        ["convert", "-", "--config", str(config), "--out", str(out)],
        input='<iframe src="http://example.com/embed"></iframe>',
    )

    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8") == (
        '<mip-iframe src="https://example.com/embed" width="600" height="400" '
        'layout="responsive" sandbox="allow-scripts"></mip-iframe>'
    )


def test_convert_json_output(tmp_path: Path) -> None:
    source = tmp_path / "post.html"
    source.write_text("<audio src=\"//cdn/a.mp3\"></audio>", encoding="utf-8")

    result = runner.invoke(app, ["convert", str(source), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["html"] == '<mip-audio src="https://cdn/a.mp3"></mip-audio>'
    assert payload["probes"] == []
    assert payload["probes_failed"] == 0


def test_convert_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["convert", str(tmp_path / "nope.html")])
    assert result.exit_code == 2


def test_convert_rejects_non_object_config(tmp_path: Path) -> None:
    source = tmp_path / "post.html"
    source.write_text("<p></p>", encoding="utf-8")
    config = tmp_path / "config.json"
    config.write_text("[1, 2]", encoding="utf-8")

    result = runner.invoke(app, ["convert", str(source), "--config", str(config)])

    assert result.exit_code == 2


def test_doctor_command_lists_dependencies() -> None:
    result = runner.invoke(app, ["doctor"])
    assert result.exit_code == 0, result.output
    assert "Miperize doctor" in result.stdout
    assert "aiohttp: ok" in result.stdout
    assert "Pillow: ok" in result.stdout
