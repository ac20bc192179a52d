import pytest


@pytest.fixture(autouse=True)
def default_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JSONFABLE_TAG_KEY", raising=False)
    monkeypatch.delenv("JSONFABLE_ALLOW_NAN", raising=False)
