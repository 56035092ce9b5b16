"""
Source Check Script Tests
=========================

Command line handling of scripts/check_sources.py. No backend is contacted.
"""

import importlib.util
from pathlib import Path

import pytest


SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "check_sources.py"


@pytest.fixture
def check_sources():
    spec = importlib.util.spec_from_file_location("check_sources", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestCommandLine:
    """Bad digits are reported as usage errors."""

    @pytest.mark.parametrize("digit", ["12", "-1", "x", ""])
    def test_invalid_digit_is_usage_error(self, check_sources, monkeypatch, capsys, digit):
        calls = []
        monkeypatch.setattr(check_sources, "run_check", calls.append)

        with pytest.raises(SystemExit) as exc:
            check_sources.main(["--digit", digit])

        assert exc.value.code == 2
        assert calls == []
        assert "error:" in capsys.readouterr().err

    def test_valid_digit_runs_check(self, check_sources, monkeypatch):
        calls = []

        def fake_run_check(digit):
            calls.append(digit)
            return {"ok": True}

        monkeypatch.setattr(check_sources, "run_check", fake_run_check)

        with pytest.raises(SystemExit) as exc:
            check_sources.main(["--digit", "7"])

        assert exc.value.code == 0
        assert calls == [7]
