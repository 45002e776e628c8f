"""Tests for the headless recorder."""

import json

import numpy as np
import pytest
import zstandard as zstd

from tools import record as rec


@pytest.fixture
def settings():
    return {
        "session": "unit",
        "frames": 6,
        "count": 8,
        "preset": None,
        "seed": 9,
        "orbit": True,
    }


class TestFrameCodec:

    def test_round_trip(self):
        positions = np.arange(12, dtype=np.float64).reshape(4, 3) * 0.5
        velocities = -positions * 0.01
        strengths = np.array([0.0, 0.1, 0.5, 1.0])

        frame = rec.decompress_frame(rec.compress_frame(7, positions, velocities, strengths))

        assert frame["frame"] == 7
        np.testing.assert_allclose(frame["positions"], positions, rtol=1e-6)
        np.testing.assert_allclose(frame["velocities"], velocities, rtol=1e-6)
        np.testing.assert_allclose(frame["strengths"], strengths, rtol=1e-6)

    def test_rejects_foreign_data(self):
        junk = zstd.ZstdCompressor().compress(b"NOPE" + bytes(8))
        with pytest.raises(ValueError):
            rec.decompress_frame(junk)


class TestOrbit:

    def test_orbit_radius_and_height(self):
        for frame in (0, 10, 123):
            p = rec.orbit_point(frame)
            assert np.hypot(p[0], p[2]) == pytest.approx(rec.config.RECORDING["orbit_radius"])
            assert p[1] == rec.config.RECORDING["orbit_height"]

    def test_orbit_period(self):
        period = rec.config.RECORDING["orbit_period"]
        np.testing.assert_allclose(rec.orbit_point(0), rec.orbit_point(period), atol=1e-12)


class TestRecording:

    def test_record_session(self, tmp_path, settings):
        rec_dir = rec.record(settings, base_dir=tmp_path, progress_every=0)

        assert rec_dir == tmp_path / "unit"
        assert rec.get_completed_frames(rec_dir) == 6

        metadata = json.loads((rec_dir / "metadata.json").read_text())
        assert metadata["completed_frames"] == 6
        assert metadata["count"] == 8
        assert metadata["params"]["separation_distance"] == 0.8

        last = rec.load_frame(rec_dir, 5)
        assert last["positions"].shape == (8, 3)
        assert last["velocities"].shape == (8, 3)
        assert last["strengths"].shape == (8,)
        speeds = np.linalg.norm(last["velocities"], axis=1)
        assert (speeds <= metadata["agent"]["max_speed"] + 1e-6).all()

    def test_seeded_recordings_match(self, tmp_path, settings):
        a = rec.record(settings, base_dir=tmp_path / "a", progress_every=0)
        b = rec.record(settings, base_dir=tmp_path / "b", progress_every=0)
        np.testing.assert_array_equal(rec.load_frame(a, 5)["positions"], rec.load_frame(b, 5)["positions"])

    def test_preset_recording(self, tmp_path, settings):
        settings["preset"] = "tight_swarm"
        rec_dir = rec.record(settings, base_dir=tmp_path, progress_every=0)
        metadata = rec.load_metadata(rec_dir)
        assert metadata["params"]["boundary_radius"] == 3.5
        assert rec.load_frame(rec_dir, 0)["positions"].shape == (8, 3)

    def test_status_and_list(self, tmp_path, settings, capsys):
        rec.record(settings, base_dir=tmp_path, progress_every=0)
        assert rec.show_status("unit", tmp_path) == (6, 6)
        assert rec.show_status("missing", tmp_path) == (0, 0)
        assert rec.list_recordings(tmp_path) == ["unit"]
        assert "unit" in capsys.readouterr().out

    def test_cli(self, tmp_path):
        assert rec.main(["cli", "--frames", "3", "--count", "5", "--seed", "1", "--dir", str(tmp_path)]) == 0
        assert rec.get_completed_frames(tmp_path / "cli") == 3

    def test_cli_unknown_preset(self, tmp_path):
        with pytest.raises(SystemExit):
            rec.main(["cli", "--preset", "nope", "--dir", str(tmp_path)])

    def test_cli_preset_menu(self, tmp_path, capsys):
        assert rec.main(["--presets", "--dir", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "FLOCKING PRESETS" in out
        assert "key: murmuration" in out
        assert not any(tmp_path.iterdir())
