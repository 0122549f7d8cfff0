"""Schema drift report used before deploys."""
import check_migrations
from tennis_brackets.models.match import Match

from .conftest import test_engine


def test_fresh_schema_has_no_drift(session, monkeypatch):
    monkeypatch.setattr(check_migrations, "engine", test_engine)
    assert check_migrations.find_schema_drift() == {}
    assert check_migrations.main() == 0


def test_missing_table_is_reported(session, monkeypatch, capsys):
    monkeypatch.setattr(check_migrations, "engine", test_engine)
    Match.__table__.drop(test_engine)

    assert check_migrations.find_schema_drift() == {"match": ["*"]}
    assert check_migrations.main() == 1
    assert "match MISSING" in capsys.readouterr().out
