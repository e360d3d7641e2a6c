"""
Tests for the Flask web UI.
"""
import pytest

import app as web
import config


@pytest.fixture
def client(data_files, monkeypatch):
    positions, targets = data_files
    monkeypatch.setattr(config, "POSITIONS_FILE", str(positions))
    monkeypatch.setattr(config, "TARGETS_FILE", str(targets))
    web.reset_state()
    web.app.config["TESTING"] = True
    with web.app.test_client() as c:
        yield c
    web.reset_state()


def test_health(client):
    data = client.get('/api/health').get_json()
    assert data["status"] == "healthy"


def test_index_renders_page(client):
    response = client.get('/')
    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert 'id="positions-table"' in html
    assert "Unallocated Positions" in html
    assert "<script>" in html


def test_positions_payload(client):
    data = client.get('/api/positions').get_json()
    assert data["sort"] == {"direction": 1, "column_index": None}
    assert data["expanded"] == []
    assert data["total_value"] == 2000.0
    assert "Stocks" in data["html"]


def test_sort_toggle_alternates(client):
    first = client.post('/api/positions/sort/1').get_json()
    assert first["sort"] == {"direction": 1, "column_index": 1}
    second = client.post('/api/positions/sort/1').get_json()
    assert second["sort"] == {"direction": -1, "column_index": 1}
    third = client.post('/api/positions/sort/1').get_json()
    assert third["sort"] == {"direction": 1, "column_index": 1}


def test_sort_unknown_column(client):
    response = client.post('/api/positions/sort/42')
    assert response.status_code == 404
    assert "error" in response.get_json()


def test_expand_toggle(client):
    data = client.post('/api/positions/stocks/toggle').get_json()
    assert data["expanded"] == ["stocks"]
    assert 'data-parent-key="stocks"' in data["html"]

    data = client.post('/api/positions/stocks/toggle').get_json()
    assert data["expanded"] == []
    assert 'data-parent-key="stocks"' not in data["html"]


def test_expand_unknown_row(client):
    assert client.post('/api/positions/nope/toggle').status_code == 404


def test_nested_sort(client):
    client.post('/api/positions/stocks/toggle')
    html = client.post('/api/positions/stocks/sort/1').get_json()["html"]
    # holdings of Stocks ascending by value: AAPL (500) before VTI (1000)
    nested = html[html.index('data-parent-key="stocks"'):]
    assert nested.index("AAPL") < nested.index("VTI")

    assert client.post('/api/positions/stocks/sort/9').status_code == 404
    assert client.post('/api/positions/nope/sort/1').status_code == 404


def test_reload_keeps_state(client, data_files):
    positions, _ = data_files
    client.post('/api/positions/sort/2')
    client.post('/api/positions/bonds/toggle')

    positions.write_text(positions.read_text() + "BNDX,700,10,0\n")
    data = client.post('/api/positions/reload').get_json()

    assert data["total_value"] == 2700.0
    assert data["sort"] == {"direction": 1, "column_index": 2}
    assert data["expanded"] == ["bonds"]


def test_missing_data_files(client, monkeypatch, tmp_path):
    monkeypatch.setattr(config, "POSITIONS_FILE", str(tmp_path / "missing.csv"))
    web.reset_state()
    response = client.get('/api/positions')
    assert response.status_code == 500
    assert "not found" in response.get_json()["error"]
