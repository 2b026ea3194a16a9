import json

import pytest

import main


def test_headless_query_prints_result(capsys):
    code = main.main(["--start", "1", "1", "--goal", "18", "18"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["found"] is True
    assert data["path"][0] == {"x": 1, "y": 1}
    assert data["path"][-1] == {"x": 18, "y": 18}
    assert data["executionTime"] >= 0


def test_headless_query_not_found(tmp_path, capsys):
    world = tmp_path / "world.json"
    world.write_text(json.dumps({"map": [[0, 1], [1, 0]]}))
    code = main.main(
        ["--world", str(world), "--start", "0", "0", "--goal", "1", "1", "--algorithm", "bfs"]
    )
    assert code == 1
    data = json.loads(capsys.readouterr().out)
    assert data == {"path": [], "found": False, "executionTime": data["executionTime"]}


def test_bad_world_file_exits_with_error(tmp_path):
    assert main.main(["--world", str(tmp_path / "missing.json")]) == 2


def test_without_points_launches_demo(monkeypatch):
    import gridpath.demo

    launched = []

    class FakeDemo:
        def __init__(self, editor):
            launched.append(editor)

        def run(self):
            launched.append("ran")

    monkeypatch.setattr(gridpath.demo, "Demo", FakeDemo)
    assert main.main([]) == 0
    editor, ran = launched
    assert ran == "ran"
    # Start and goal come from the default world file
    assert editor.start == (1, 1)
    assert editor.goal == (18, 18)


@pytest.mark.parametrize(
    "argv", [["--start", "1", "1"], ["--goal", "18", "18"]]
)
def test_lone_endpoint_is_a_usage_error(monkeypatch, capsys, argv):
    import gridpath.demo

    def fail(editor):
        raise AssertionError("demo must not launch")

    monkeypatch.setattr(gridpath.demo, "Demo", fail)
    with pytest.raises(SystemExit) as excinfo:
        main.main(argv)
    assert excinfo.value.code == 2
    assert "--start and --goal must be given together" in capsys.readouterr().err
