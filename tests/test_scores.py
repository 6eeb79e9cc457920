"""Tests for high-score persistence."""

import json

from game.chase.scores import JsonHighScoreStore, MemoryHighScoreStore


class TestMemoryStore:

    def test_defaults_to_zero(self):
        assert MemoryHighScoreStore().load() == 0

    def test_save_and_load(self):
        store = MemoryHighScoreStore()
        store.save(12)
        assert store.load() == 12
        assert store.saves == 1


class TestJsonStore:

    def test_missing_file_is_zero(self, tmp_path):
        assert JsonHighScoreStore(str(tmp_path / "nope.json")).load() == 0

    def test_round_trip_creates_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "best.json"
        store = JsonHighScoreStore(str(path))
        store.save(37)
        assert json.loads(path.read_text()) == {"chase_highscore": 37}
        assert JsonHighScoreStore(str(path)).load() == 37

    def test_malformed_json_is_zero(self, tmp_path):
        path = tmp_path / "best.json"
        path.write_text("{not json")
        assert JsonHighScoreStore(str(path)).load() == 0

    def test_wrong_shapes_are_zero(self, tmp_path):
        path = tmp_path / "best.json"
        for payload in ('{"chase_highscore": "abc"}', '[1, 2]', '{"other": 5}',
                        '{"chase_highscore": null}', '{"chase_highscore": -4}',
                        '{"chase_highscore": 1e400}', '{"chase_highscore": Infinity}'):
            path.write_text(payload)
            assert JsonHighScoreStore(str(path)).load() == 0

    def test_custom_key(self, tmp_path):
        path = tmp_path / "best.json"
        path.write_text('{"mine": 9}')
        assert JsonHighScoreStore(str(path), key="mine").load() == 9
