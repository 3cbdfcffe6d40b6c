from flappy_fish.score_store import HighScoreStore


def test_missing_file_defaults_to_zero(tmp_path):
    assert HighScoreStore(tmp_path / "nope.txt").load() == 0


def test_save_then_load(tmp_path):
    store = HighScoreStore(tmp_path / "best.txt")
    assert store.save(42)
    assert store.load() == 42
    assert (tmp_path / "best.txt").read_text() == "42"


def test_save_overwrites(tmp_path):
    store = HighScoreStore(tmp_path / "best.txt")
    store.save(100)
    store.save(7)
    assert (tmp_path / "best.txt").read_text() == "7"


def test_negative_and_padded_values(tmp_path):
    path = tmp_path / "best.txt"
    path.write_text("  -3\n")
    assert HighScoreStore(path).load() == -3


def test_malformed_or_empty_file_falls_back(tmp_path, caplog):
    path = tmp_path / "best.txt"
    path.write_text("")
    assert HighScoreStore(path).load() == 0

    path.write_text("lots")
    assert HighScoreStore(path).load() == 0
    assert "malformed" in caplog.text


def test_unreadable_path_falls_back(tmp_path):
    # A directory can't be read as text.
    assert HighScoreStore(tmp_path).load() == 0


def test_unwritable_path_is_skipped(tmp_path):
    store = HighScoreStore(tmp_path / "missing" / "best.txt")
    assert not store.save(5)
    assert store.load() == 0
