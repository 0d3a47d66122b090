def test_root(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_create_body_fortune(client, body_sample) -> None:
    response = client.post("/api/fortune", json=body_sample)
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["variant"] == "body"
    assert data["seed"] == 1965077839
    assert data["scores"] == {"work": 61, "money": 30, "love": 61, "health": 65}
    assert data["attributes"]["bmi_band"] == "normal"


def test_string_numbers_are_accepted(client) -> None:
    response = client.post(
        "/api/fortune",
        json={"name": " 김준휘 ", "birth": "1999-11-02", "height": "175", "weight": "68.5"},
    )
    assert response.status_code == 200
    assert response.json()["data"]["seed"] == 1965077839


def test_create_goal_fortune(client) -> None:
    response = client.post(
        "/api/fortune",
        json={"variant": "goal", "name": "김준휘", "birth": "1999-11-02", "goal": "마라톤 완주"},
    )
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["seed"] == 1265248189
    assert data["goal_success"] == 69
    assert data["goal_tier"] == "medium"


def test_validation_error(client) -> None:
    response = client.post("/api/fortune", json={"name": "  ", "birth": "1999-11-02"})
    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "EmptyName"


def test_exports_require_a_result(client) -> None:
    for path in ("/api/fortune/last", "/api/fortune/last/text", "/api/fortune/last/share",
                 "/api/fortune/last/image", "/api/fortune/last/pdf"):
        response = client.get(path)
        assert response.status_code == 409
        assert response.json()["detail"] == "먼저 운세를 생성해주세요."


def test_failed_request_keeps_last_result(client, body_sample) -> None:
    client.post("/api/fortune", json=body_sample)
    client.post("/api/fortune", json={"name": "A", "birth": "1999-13-40x", "height": 175, "weight": 68})

    response = client.get("/api/fortune/last")
    assert response.status_code == 200
    assert response.json()["data"]["seed"] == 1965077839


def test_last_exports(client, body_sample) -> None:
    client.post("/api/fortune", json=body_sample)

    text = client.get("/api/fortune/last/text")
    assert text.status_code == 200
    assert "seed: 1965077839" in text.text

    image = client.get("/api/fortune/last/image", params={"theme": "light"})
    assert image.status_code == 200
    assert image.headers["content-type"] == "image/png"
    assert image.content.startswith(b"\x89PNG")

    pdf = client.get("/api/fortune/last/pdf")
    assert pdf.status_code == 200
    assert pdf.content.startswith(b"%PDF")


def test_share_without_key(client, body_sample) -> None:
    client.post("/api/fortune", json=body_sample)
    response = client.get("/api/fortune/last/share")
    assert response.status_code == 503


def test_share_with_key(client, body_sample) -> None:
    from api.main import app, get_report_generator
    from reports import ReportGenerator

    app.dependency_overrides[get_report_generator] = lambda: ReportGenerator(
        kakao_js_key="test-key", page_url="https://fortune.example/"
    )
    client.post("/api/fortune", json=body_sample)

    response = client.get("/api/fortune/last/share")
    assert response.status_code == 200
    body = response.json()
    assert body["kakao_js_key"] == "test-key"
    assert "종합점수: 54점" in body["payload"]["content"]["description"]


def test_random_sample(client) -> None:
    response = client.post("/api/fortune/random", params={"index": 0})
    assert response.status_code == 200
    assert response.json()["sample"]["name"] == "김준휘"
    assert response.json()["data"]["seed"] == 1965077839

    assert client.post("/api/fortune/random").status_code == 200
    assert client.post("/api/fortune/random", params={"index": 99}).status_code == 404


def test_theme_defaults_and_toggle(client) -> None:
    assert client.get("/api/theme", params={"prefers_light": True}).json()["theme"] == "light"
    assert client.get("/api/theme").json() == {"theme": "dark", "icon": "🌙", "label": "다크"}

    toggled = client.post("/api/theme/toggle")
    assert toggled.json()["theme"] == "light"
    # 저장된 값이 시스템 설정보다 우선
    assert client.get("/api/theme", params={"prefers_light": False}).json()["theme"] == "light"


def test_last_result_is_not_shared_between_clients(client, body_sample) -> None:
    from fastapi.testclient import TestClient

    from api.main import SESSION_COOKIE, app

    created = client.post("/api/fortune", json=body_sample)
    assert SESSION_COOKIE in created.cookies

    other = TestClient(app)
    response = other.get("/api/fortune/last")
    assert response.status_code == 409
    assert other.get("/api/fortune/last/text").status_code == 409

    assert client.get("/api/fortune/last").json()["data"]["name"] == "김준휘"


def test_unknown_session_cookie_gets_no_result(client, body_sample) -> None:
    from fastapi.testclient import TestClient

    from api.main import SESSION_COOKIE, app

    client.post("/api/fortune", json=body_sample)
    stranger = TestClient(app, cookies={SESSION_COOKIE: "made-up"})
    assert stranger.get("/api/fortune/last").status_code == 409


def test_numeric_name_is_accepted(client) -> None:
    response = client.post(
        "/api/fortune",
        json={"name": 123, "birth": "1999-11-02", "height": 175, "weight": 68},
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "123"
