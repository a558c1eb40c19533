import pytest

from seometa import base64url
from seometa.normalize import EXAMPLE_INPUT, normalize_record
from seometa.share import build_token
from seometa.web import create_app


@pytest.fixture()
def client():
    app = create_app()
    app.config.update(TESTING=True)
    return app.test_client()


def test_index_serves_form_with_example(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.mimetype == "text/html"
    body = resp.get_data(as_text=True)
    assert 'id="seoForm"' in body
    assert "__FIELDS__" not in body
    assert '"siteName"' in body
    assert EXAMPLE_INPUT["themeColor"] in body


def test_generate_returns_all_artifacts(client):
    resp = client.post("/api/generate", json={"title": "Hi", "canonical": "https://a.com/x"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["record"]["canonical"] == "https://a.com/x"
    assert data["head"].startswith("<title>Hi</title>")
    assert data["robots"].endswith("Sitemap: https://a.com/x/sitemap.xml\n")
    assert "<loc>https://a.com/x/</loc>" in data["sitemap"]
    assert data["warnings"] == []
    assert data["token"] == build_token(normalize_record({"title": "Hi", "canonical": "https://a.com/x"}))


def test_generate_tolerates_non_object_bodies(client):
    resp = client.post("/api/generate", data="[1, 2]", content_type="application/json")
    assert resp.status_code == 200
    assert resp.get_json()["robots"] == "User-agent: *\nAllow: /\n"

    resp = client.post("/api/generate", data="not json")
    assert resp.status_code == 200
    assert resp.get_json()["record"]["lang"] == "en"


def test_generate_reports_length_warnings(client):
    resp = client.post("/api/generate", json={"title": "x" * 61})
    assert resp.get_json()["warnings"] == ["Title is over about 60 chars."]


def test_decode_accepts_token_fragment_and_url(client):
    record = normalize_record(EXAMPLE_INPUT)
    token = build_token(record)
    for value in [token, "config=" + token, "https://tool.example/#config=" + token]:
        resp = client.post("/api/decode", json={"config": value})
        assert resp.status_code == 200
        assert resp.get_json()["record"] == record.to_dict()


def test_decode_bad_token_is_not_an_error(client):
    resp = client.post("/api/decode", json={"config": "config=!!!"})
    assert resp.status_code == 200
    assert resp.get_json() == {"record": None}

    resp = client.post("/api/decode", json={})
    assert resp.get_json() == {"record": None}


def test_template_download(client):
    resp = client.post("/api/template", json={"title": "Hi", "lang": "fr"})
    assert resp.status_code == 200
    assert resp.mimetype == "text/html"
    assert resp.headers["Content-Disposition"] == 'attachment; filename="template.html"'
    body = resp.get_data(as_text=True)
    assert body.startswith('<!doctype html>\n<html lang="fr">')
    assert "<h1>Hi</h1>" in body


def test_decode_deeply_nested_token_is_not_an_error(client):
    token = base64url.encode("[" * 100000)
    resp = client.post("/api/decode", json={"config": token})
    assert resp.status_code == 200
    assert resp.get_json() == {"record": None}


def test_index_ignores_out_of_order_generate_responses(client):
    body = client.get("/").get_data(as_text=True)
    assert "const seq = ++renderSeq;" in body
    assert "if (seq !== renderSeq) return;" in body
