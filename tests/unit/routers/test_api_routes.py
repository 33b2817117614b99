"""
Router tests for the Form Builder API.

Requests go through the FastAPI app with httpx; the FormService runs for
real over a mocked repository, and designer sessions live in a fresh
in-memory manager per test.
"""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from formbuilder.main import create_app
from formbuilder.models.enums import ElementType
from formbuilder.services.designer_sessions import DesignerSessionManager, get_session_manager
from formbuilder.services.forms import FormService, get_form_service
from tests.fixtures.auth import auth_headers, create_test_jwt
from tests.helpers.factories import make_element, make_form, make_form_create_data


@pytest.fixture
def app(mock_session, mock_form_repo):
    app = create_app()
    manager = DesignerSessionManager(max_sessions=10)

    def form_service_override() -> FormService:
        service = FormService(mock_session)
        service.repo = mock_form_repo
        return service

    app.dependency_overrides[get_form_service] = form_service_override
    app.dependency_overrides[get_session_manager] = lambda: manager
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def headers() -> dict[str, str]:
    return auth_headers(create_test_jwt())


@pytest.fixture
def layout():
    return [
        make_element("name", ElementType.TEXT_FIELD, label="Name", required=True),
        make_element("note", ElementType.PARAGRAPH_FIELD),
    ]


class TestElements:
    async def test_palette(self, client):
        response = await client.get("/api/elements")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == len(ElementType)
        assert body[0]["type"] == "TitleField"


class TestForms:
    async def test_requires_authentication(self, client):
        response = await client.get("/api/forms")
        assert response.status_code == 401

    async def test_list(self, client, headers, mock_form_repo):
        mock_form_repo.list_forms.return_value = [make_form(id=3)]

        response = await client.get("/api/forms", headers=headers)

        assert response.status_code == 200
        assert [f["id"] for f in response.json()] == [3]

    async def test_create(self, client, headers, mock_form_repo):
        mock_form_repo.create_form.return_value = make_form(name="Contact Form")

        response = await client.post("/api/forms", json=make_form_create_data(), headers=headers)

        assert response.status_code == 201
        assert response.json()["name"] == "Contact Form"
        assert response.json()["content"] == "[]"

    async def test_create_rejects_short_name(self, client, headers):
        response = await client.post(
            "/api/forms", json=make_form_create_data(name="abc"), headers=headers
        )
        assert response.status_code == 422

    async def test_get_missing(self, client, headers):
        response = await client.get("/api/forms/99", headers=headers)
        assert response.status_code == 404

    async def test_save_malformed_content(self, client, headers, mock_form_repo):
        mock_form_repo.get_form.return_value = make_form()

        response = await client.put(
            "/api/forms/1/content", json={"content": "not a layout"}, headers=headers
        )

        assert response.status_code == 422

    async def test_save_content_with_repeated_id(self, client, headers, mock_form_repo):
        mock_form_repo.get_form.return_value = make_form()
        content = json.dumps([make_element("a").to_wire(), make_element("a").to_wire()])

        response = await client.put(
            "/api/forms/1/content", json={"content": content}, headers=headers
        )

        assert response.status_code == 422
        mock_form_repo.update_content.assert_not_awaited()

    async def test_save_published_form(self, client, headers, mock_form_repo):
        mock_form_repo.get_form.return_value = make_form(published=True)

        response = await client.put("/api/forms/1/content", json={"content": "[]"}, headers=headers)

        assert response.status_code == 422

    async def test_publish(self, client, headers, mock_form_repo):
        mock_form_repo.get_form.return_value = make_form()
        mock_form_repo.publish.return_value = make_form(published=True)

        response = await client.post("/api/forms/1/publish", headers=headers)

        assert response.status_code == 200
        assert response.json()["published"] is True

    async def test_overall_stats(self, client, headers, mock_form_repo):
        mock_form_repo.get_stats.return_value = (4, 1)

        response = await client.get("/api/forms/stats", headers=headers)

        assert response.status_code == 200
        assert response.json() == {
            "visits": 4,
            "submissions": 1,
            "submission_rate": 25,
            "bounce_rate": 75,
        }

    async def test_submissions(self, client, headers, mock_form_repo, layout):
        mock_form_repo.get_form_with_submissions.return_value = make_form(elements=layout)

        response = await client.get("/api/forms/1/submissions", headers=headers)

        assert response.status_code == 200
        assert [c["id"] for c in response.json()["columns"]] == ["name"]


class TestSubmit:
    async def test_get_public_form(self, client, mock_form_repo, layout):
        form = make_form(published=True, elements=layout)
        mock_form_repo.increment_visits.return_value = form

        response = await client.get(f"/api/submit/{form.share_url}")

        assert response.status_code == 200
        assert [e["id"] for e in response.json()["elements"]] == ["name", "note"]
        assert response.json()["elements"][0]["extraAttributes"]["required"] is True

    async def test_unknown_share_url(self, client):
        response = await client.get("/api/submit/nope")
        assert response.status_code == 404

    async def test_unreadable_stored_content(self, client, mock_form_repo):
        mock_form_repo.increment_visits.return_value = make_form(published=True, content="[{")

        response = await client.get("/api/submit/abc")

        assert response.status_code == 500

    async def test_submit_invalid_values(self, client, mock_form_repo, layout):
        mock_form_repo.get_published_by_share_url.return_value = make_form(
            published=True, elements=layout
        )

        response = await client.post("/api/submit/abc", json={"values": {"name": ""}})

        assert response.status_code == 422
        assert response.json()["detail"]["invalid_fields"] == ["name"]

    async def test_submit(self, client, mock_form_repo, layout):
        mock_form_repo.get_published_by_share_url.return_value = make_form(
            published=True, elements=layout
        )

        response = await client.post("/api/submit/abc", json={"values": {"name": "Ada"}})

        assert response.status_code == 200
        assert response.json() == {"submitted": True}
        mock_form_repo.add_submission.assert_awaited_once_with("abc", json.dumps({"name": "Ada"}))


class TestDesigner:
    @pytest.fixture
    async def session_id(self, client, headers, mock_form_repo, layout):
        mock_form_repo.get_form.return_value = make_form(elements=layout)
        response = await client.post("/api/forms/1/designer", headers=headers)
        assert response.status_code == 201
        return response.json()["session_id"]

    async def test_open(self, client, headers, session_id):
        response = await client.get(f"/api/designer/{session_id}", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["form_id"] == 1
        assert [e["id"] for e in body["elements"]] == ["name", "note"]
        assert body["dirty"] is False

    async def test_open_requires_authentication(self, client):
        response = await client.post("/api/forms/1/designer")
        assert response.status_code == 401

    async def test_session_of_other_user(self, client, session_id):
        other = auth_headers(create_test_jwt(user_id="someone-else"))
        response = await client.get(f"/api/designer/{session_id}", headers=other)
        assert response.status_code == 404

    async def test_drop_from_palette(self, client, headers, session_id):
        response = await client.post(
            f"/api/designer/{session_id}/drop",
            json={
                "active": {"isDesignerBtnElement": True, "type": "SpacerField"},
                "over": {"isTopHalfDesignerElement": True, "elementId": "note"},
            },
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        new_id = body["element"]["id"]
        assert [e["id"] for e in body["session"]["elements"]] == ["name", new_id, "note"]
        assert body["session"]["dirty"] is True

    async def test_drop_on_missing_element(self, client, headers, session_id):
        response = await client.post(
            f"/api/designer/{session_id}/drop",
            json={
                "active": {"isDesignerElement": True, "elementId": "name"},
                "over": {"isBottomHalfDesignerElement": True, "elementId": "gone"},
            },
            headers=headers,
        )
        assert response.status_code == 409

    async def test_cancelled_drop(self, client, headers, session_id):
        response = await client.post(
            f"/api/designer/{session_id}/drop", json={"active": None, "over": None}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["element"] is None

    async def test_edit_select_and_remove(self, client, headers, session_id):
        response = await client.put(
            f"/api/designer/{session_id}/selection", json={"element_id": "name"}, headers=headers
        )
        assert response.json()["selected_element_id"] == "name"

        response = await client.put(
            f"/api/designer/{session_id}/elements/name",
            json={"extraAttributes": {"label": "Full name"}},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["elements"][0]["extraAttributes"]["label"] == "Full name"
        assert response.json()["selected_element_id"] == "name"

        response = await client.delete(f"/api/designer/{session_id}/elements/name", headers=headers)
        assert response.status_code == 200
        assert response.json()["selected_element_id"] is None
        assert [e["id"] for e in response.json()["elements"]] == ["note"]

    async def test_invalid_property_edit(self, client, headers, session_id):
        response = await client.put(
            f"/api/designer/{session_id}/elements/name",
            json={"extraAttributes": {"label": "x"}},
            headers=headers,
        )

        assert response.status_code == 422
        assert response.json()["detail"]["invalid_fields"] == ["label"]

    async def test_preview_validate(self, client, headers, session_id):
        response = await client.post(
            f"/api/designer/{session_id}/preview/validate",
            json={"values": {"name": ""}},
            headers=headers,
        )

        assert response.json() == {"valid": False, "invalid_fields": ["name"]}

    async def test_save(self, client, headers, session_id, mock_form_repo):
        mock_form_repo.update_content.return_value = make_form()

        response = await client.post(f"/api/designer/{session_id}/save", headers=headers)

        assert response.status_code == 200
        mock_form_repo.update_content.assert_awaited_once()
        saved_content = mock_form_repo.update_content.await_args.args[1]
        assert [e["id"] for e in json.loads(saved_content)] == ["name", "note"]

    async def test_close(self, client, headers, session_id):
        response = await client.delete(f"/api/designer/{session_id}", headers=headers)
        assert response.status_code == 204

        response = await client.get(f"/api/designer/{session_id}", headers=headers)
        assert response.status_code == 404
