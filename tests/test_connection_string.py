from pathlib import Path

import pytest

from database import ConnectionString


def test_render_without_password_has_no_credential_clause(tmp_path):
    cs = ConnectionString(tmp_path / "app.db")
    assert cs.render() == f"Data Source={tmp_path / 'app.db'};Version=3;"
    assert not cs.has_password


def test_empty_password_means_no_password(tmp_path):
    cs = ConnectionString(tmp_path / "app.db", "")
    assert cs.password is None
    assert "Password" not in cs.render()


def test_password_masked_in_str_and_repr(tmp_path):
    cs = ConnectionString(tmp_path / "app.db", "s3cret")
    assert "s3cret" not in str(cs)
    assert "s3cret" not in repr(cs)
    assert str(cs).endswith("Password=***;")
    assert cs.render(reveal=True).endswith("Password=s3cret;")


def test_is_immutable(tmp_path):
    cs = ConnectionString(str(tmp_path / "app.db"), "pw")
    assert isinstance(cs.data_source, Path)
    with pytest.raises(AttributeError):
        cs.password = "other"


def test_equal_inputs_give_equal_strings(tmp_path):
    assert ConnectionString(tmp_path / "a.db", "x") == ConnectionString(tmp_path / "a.db", "x")
