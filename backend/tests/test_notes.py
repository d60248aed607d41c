class TestApplicationNotes:
    def _create_application(self, client, auth):
        r = client.post("/api/applications", json={"position": "Engineer", "company_name": "Acme"}, headers=auth)
        return r.json()["id"]

    def test_add_and_list_notes(self, client, auth):
        app_id = self._create_application(client, auth)
        r = client.post(f"/api/application-notes/{app_id}", json={"content": "Phone screen booked"}, headers=auth)
        assert r.status_code == 201
        assert r.json()["content"] == "Phone screen booked"
        assert r.json()["application_id"] == app_id
        client.post(f"/api/application-notes/{app_id}", json={"content": "Sent thank-you email"}, headers=auth)

        r = client.get(f"/api/application-notes/{app_id}", headers=auth)
        assert r.status_code == 200
        contents = {n["content"] for n in r.json()}
        assert contents == {"Phone screen booked", "Sent thank-you email"}

    def test_note_requires_content(self, client, auth):
        app_id = self._create_application(client, auth)
        r = client.post(f"/api/application-notes/{app_id}", json={"content": ""}, headers=auth)
        assert r.status_code == 400
        assert r.json()["error"] == "Missing required fields"

    def test_delete_note(self, client, auth):
        app_id = self._create_application(client, auth)
        note_id = client.post(f"/api/application-notes/{app_id}", json={"content": "x"}, headers=auth).json()["id"]

        r = client.delete(f"/api/application-notes/{app_id}/{note_id}", headers=auth)
        assert r.status_code == 200
        assert client.get(f"/api/application-notes/{app_id}", headers=auth).json() == []

    def test_delete_missing_note(self, client, auth):
        app_id = self._create_application(client, auth)
        r = client.delete(f"/api/application-notes/{app_id}/nope", headers=auth)
        assert r.status_code == 404

    def test_notes_of_other_user_not_found(self, client, signin):
        alice = signin("alice")
        bob = signin("bob")
        app_id = self._create_application(client, alice)
        note_id = client.post(f"/api/application-notes/{app_id}", json={"content": "mine"}, headers=alice).json()["id"]

        assert client.get(f"/api/application-notes/{app_id}", headers=bob).status_code == 404
        assert client.post(f"/api/application-notes/{app_id}", json={"content": "x"}, headers=bob).status_code == 404
        assert client.delete(f"/api/application-notes/{app_id}/{note_id}", headers=bob).status_code == 404
        assert len(client.get(f"/api/application-notes/{app_id}", headers=alice).json()) == 1
