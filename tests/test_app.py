from raycube.app import main

VALID_LEVEL = (
    "NO ./north.xpm\n"
    "SO ./south.xpm\n"
    "WE ./west.xpm\n"
    "EA ./east.xpm\n"
    "F 10,20,30\n"
    "C 40,50,60\n"
    "\n"
    "111\n"
    "1N1\n"
    "111\n"
)

OPEN_LEVEL = VALID_LEVEL.replace("111\n1N1\n111\n", "111\n1N0\n111\n")


def test_no_argument(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error\n")
    assert "cub3D: argc: none argument" in err


def test_too_many_arguments(capsys):
    assert main(["a.cub", "b.cub"]) == 1
    assert "to much arguments" in capsys.readouterr().err


def test_bad_map_name(capsys):
    assert main(["level.txt"]) == 1
    assert "cub3D: map: mapname not valid" in capsys.readouterr().err


def test_missing_map_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert "failed to open map" in capsys.readouterr().err


def test_open_map_is_rejected(tmp_path, capsys):
    level = tmp_path / "open.cub"
    level.write_text(OPEN_LEVEL)
    assert main([str(level)]) == 1
    assert "not a valid map" in capsys.readouterr().err


def test_missing_textures(tmp_path, monkeypatch, capsys):
    level = tmp_path / "room.cub"
    level.write_text(VALID_LEVEL)
    monkeypatch.chdir(tmp_path)
    assert main([str(level)]) == 1
    assert "cub3D: texture: load image fail" in capsys.readouterr().err