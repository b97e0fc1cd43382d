import pytest

from writefile.config.settings import WriteFileSettings, normalize_log_level


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, "INFO"), ("", "INFO"), ("  debug ", "DEBUG"), ("warning", "WARN"), ("ERROR", "ERROR")],
)
def test_normalize_log_level(raw, expected):
    assert normalize_log_level(raw) == expected


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("WRITEFILE_LOG_FORMAT", "text")
    monkeypatch.setenv("WRITEFILE_LOG_LEVEL", "warning")
    monkeypatch.setenv("WRITEFILE_SWEEP_MIN_AGE_SECONDS", "120")
    monkeypatch.setenv("WRITEFILE_FOLLOW_SYMLINKS", "false")

    cfg = WriteFileSettings(_env_file=None)

    assert cfg.log_format == "text"
    assert cfg.log_level == "WARN"
    assert cfg.sweep_min_age_seconds == 120
    assert cfg.follow_symlinks is False


def test_settings_defaults(monkeypatch):
    for name in ("LOG_FORMAT", "LOG_LEVEL", "SWEEP_MIN_AGE_SECONDS", "FOLLOW_SYMLINKS"):
        monkeypatch.delenv(f"WRITEFILE_{name}", raising=False)
    cfg = WriteFileSettings(_env_file=None)
    assert cfg.log_format == "json"
    assert cfg.log_level == "INFO"
    assert cfg.sweep_min_age_seconds == 3600
    assert cfg.follow_symlinks is True
