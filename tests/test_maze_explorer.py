import random

from maze_explorer import main, render_block, summary
from mazegen import generate_maze
from parsing import Config
from world import World


def test_render_single_cell():
    assert render_block(generate_maze(1, 1)) == ["███", "█ █", "███"]


def test_render_two_cells_with_marks():
    maze = generate_maze(2, 1, random.Random(0))
    assert render_block(maze, marks={(0, 0): "S", (0, 1): "E"}) == [
        "█████",
        "█S E█",
        "█████",
    ]


def test_summary_mentions_walls():
    world = World.from_config(Config(width=3, height=3, seed=1, balls=1))
    lines = summary(world)
    assert lines[0] == "Maze 3x3 (fixed layout, explore mode)"
    assert lines[1] == "Floor size: 3.00 x 3.00"
    assert lines[2].startswith(f"Wall segments: {len(world.walls())} ")
    assert lines[-1].startswith("Ball 0:")


def test_usage(capsys):
    assert main(["maze_explorer.py"]) == 2
    assert "Usage" in capsys.readouterr().err


def test_run_writes_output(tmp_path, capsys):
    out = tmp_path / "maze.txt"
    config = tmp_path / "config.txt"
    config.write_text(
        "WIDTH=6\nHEIGHT=4\nLAYOUT=variable\nENTRY=0,0\nEXIT=5,3\n"
        f"BALLS=2\nTICKS=30\nSEED=3\nOUTPUT_FILE={out}\n",
        encoding="utf-8",
    )
    assert main(["maze_explorer.py", str(config)]) == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines[0]) == 6
    assert lines[5:7] == ["0,0", "5,3"]
    assert set(lines[7]) <= set("TBLR")
    assert len(lines[8].split(",")) == 7
    printed = capsys.readouterr().out
    assert "Simulated 30 ticks" in printed


def test_bad_config_reports_error(tmp_path, capsys):
    config = tmp_path / "config.txt"
    config.write_text("WIDTH=-2\nHEIGHT=4\n", encoding="utf-8")
    assert main(["maze_explorer.py", str(config)]) == 1
    assert capsys.readouterr().err.startswith("Error: ")
