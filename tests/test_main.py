"""Tests for the viewer entry point's argument handling."""
import pytest

import main


class TestArguments:

    def test_unknown_preset_is_a_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main.main(["--preset", "nope"])
        assert exc.value.code == 2
        err = capsys.readouterr().err
        assert "unknown preset 'nope'" in err
        assert "murmuration" in err
