import logging

from conftest import API_KEY, add_employee


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_info_requires_api_key(client):
    assert client.get("/api/info").status_code == 401
    assert client.get("/api/info", headers={"X-API-Key": "wrong"}).status_code == 401


def test_info_reports_record_counts(client, store):
    add_employee(store)
    res = client.get("/api/info", headers={"X-API-Key": API_KEY})
    assert res.status_code == 200
    body = res.json()
    assert body["engine"] == "SQLAlchemy + SQLite"
    assert body["records"] == {"employees": 1, "timesheets": 0}


def test_root_redirects_to_employee_listing(client):
    res = client.get("/", follow_redirects=False)
    assert res.status_code in (302, 307)
    assert res.headers["location"] == "/employees"


def test_app_factory_builds_with_debug_route_logging(caplog):
    from hrapp.main import create_app

    with caplog.at_level(logging.DEBUG, logger="hrapp"):
        built = create_app()
    assert built.title == "HR Records"
    assert any(rec.getMessage().startswith("route ") for rec in caplog.records)
