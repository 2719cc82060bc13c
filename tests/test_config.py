from akinator.config import Config


def test_validate_accepts_sane_settings(monkeypatch):
    monkeypatch.setattr(Config, "LANGUAGE", "fr")
    monkeypatch.setattr(Config, "SESSION_TTL_MS", 600000)
    monkeypatch.setattr(Config, "TIMEOUT", 15.0)

    assert Config.validate() == []


def test_validate_reports_problems(monkeypatch):
    monkeypatch.setattr(Config, "LANGUAGE", "xx")
    monkeypatch.setattr(Config, "SESSION_TTL_MS", 0)
    monkeypatch.setattr(Config, "TIMEOUT", -1.0)

    problems = Config.validate()

    assert len(problems) == 3
    assert any("AKINATOR_LANGUAGE" in p for p in problems)
