import json

from scripts.build_navigation import main


def _write(root, relative, text):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_export_writes_navigation_json(tmp_path):
    content = tmp_path / "content"
    _write(content, "01_javascript/01_fundamentals/questions.md", "# Fundamentals\n")
    _write(content, "02_typescript/01_basics/questions.md", "# Basics\n")
    output = tmp_path / "out" / "navigation.json"

    exit_code = main([str(content), "--output", str(output)])

    assert exit_code == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["routes"] == [["javascript", "fundamentals"], ["typescript", "basics"]]
    assert [child["slug"] for child in payload["navigation"]["children"]] == ["javascript", "typescript"]
    assert payload["issues"] == []


def test_strict_mode_fails_on_issues(tmp_path, capsys):
    content = tmp_path / "content"
    _write(content, "01_cpp/01_c++/questions.md", "# C++\n")
    _write(content, "01_cpp/02_templates/questions.md", "# Templates\n")

    exit_code = main([str(content), "--strict"])

    assert exit_code == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["issues"][0]["type"] == "MalformedNameError"


def test_missing_root_exits_with_error(tmp_path, capsys):
    exit_code = main([str(tmp_path / "missing")])

    assert exit_code == 2
    assert "Navigation build failed" in capsys.readouterr().err
