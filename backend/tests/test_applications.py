class TestApplicationsCRUD:
    def _create(self, client, auth, **fields):
        body = {"position": "Backend Engineer", "company_name": "Acme"}
        body.update(fields)
        return client.post("/api/applications", json=body, headers=auth)

    def test_create_application(self, client, auth):
        r = self._create(client, auth, platform="LinkedIn", location="Berlin")
        assert r.status_code == 201
        data = r.json()
        assert data["position"] == "Backend Engineer"
        assert data["company_name"] == "Acme"
        assert data["status"] == "APPLIED"  # default
        assert data["priority"] == "MEDIUM"
        assert data["is_bookmarked"] is False
        assert data["is_reminder_sent"] is False
        assert data["is_ghosted"] is False
        assert data["date_applied"].endswith("Z")

    def test_create_requires_position_and_company(self, client, auth):
        r = client.post("/api/applications", json={"position": "Engineer"}, headers=auth)
        assert r.status_code == 400

    def test_create_rejects_unknown_status(self, client, auth):
        r = self._create(client, auth, status="HIRED")
        assert r.status_code == 400

    def test_create_with_explicit_date(self, client, auth):
        r = self._create(client, auth, date_applied="2024-05-01T10:00:00Z", status="WISHLIST")
        assert r.json()["date_applied"] == "2024-05-01T10:00:00Z"
        assert r.json()["status"] == "WISHLIST"

    def test_old_applied_application_is_ghosted(self, client, auth):
        r = self._create(client, auth, date_applied="2020-01-01T00:00:00Z")
        assert r.json()["is_ghosted"] is True

    def test_get_application(self, client, auth):
        app_id = self._create(client, auth).json()["id"]
        r = client.get(f"/api/applications/{app_id}", headers=auth)
        assert r.status_code == 200
        assert r.json()["id"] == app_id

    def test_get_missing_application(self, client, auth):
        r = client.get("/api/applications/does-not-exist", headers=auth)
        assert r.status_code == 404

    def test_update_application(self, client, auth):
        created = self._create(client, auth, date_applied="2024-01-01T00:00:00Z").json()
        r = client.put(f"/api/applications/{created['id']}", json={
            "position": "Staff Engineer",
            "notes": "Referred by a friend",
        }, headers=auth)
        assert r.status_code == 200
        data = r.json()
        assert data["position"] == "Staff Engineer"
        assert data["notes"] == "Referred by a friend"
        assert data["company_name"] == "Acme"
        assert data["last_updated"] > "2024-01-01T00:00:00Z"

    def test_update_rejects_empty_required_field(self, client, auth):
        app_id = self._create(client, auth).json()["id"]
        r = client.put(f"/api/applications/{app_id}", json={"company_name": ""}, headers=auth)
        assert r.status_code == 400

    def test_update_rejects_unknown_priority(self, client, auth):
        app_id = self._create(client, auth).json()["id"]
        r = client.put(f"/api/applications/{app_id}", json={"priority": "URGENT"}, headers=auth)
        assert r.status_code == 400

    def test_delete_application(self, client, auth):
        app_id = self._create(client, auth).json()["id"]
        r = client.delete(f"/api/applications/{app_id}", headers=auth)
        assert r.status_code == 200
        r = client.get(f"/api/applications/{app_id}", headers=auth)
        assert r.status_code == 404

    def test_delete_cascades_notes_and_tags(self, client, auth, test_db):
        app_id = self._create(client, auth).json()["id"]
        tag_id = client.post("/api/tags", json={"name": "remote"}, headers=auth).json()["id"]
        client.post(f"/api/application-tags/{app_id}", json={"tagId": tag_id}, headers=auth)
        client.post(f"/api/application-notes/{app_id}", json={"content": "Call back"}, headers=auth)

        client.delete(f"/api/applications/{app_id}", headers=auth)

        from jobtracker.models import ApplicationNote, application_tags
        db = test_db()
        try:
            assert db.query(ApplicationNote).count() == 0
            assert db.query(application_tags).count() == 0
        finally:
            db.close()


class TestApplicationListing:
    def _create(self, client, auth, position, **fields):
        body = {"position": position, "company_name": fields.pop("company_name", "Acme")}
        body.update(fields)
        return client.post("/api/applications", json=body, headers=auth).json()

    def test_list_in_display_order(self, client, auth):
        self._create(client, auth, "old-medium", date_applied="2024-01-01T00:00:00Z")
        self._create(client, auth, "new-medium", date_applied="2024-03-01T00:00:00Z")
        self._create(client, auth, "high", priority="HIGH", date_applied="2023-01-01T00:00:00Z")
        self._create(client, auth, "bookmarked-low", priority="LOW", is_bookmarked=True,
                     date_applied="2022-01-01T00:00:00Z")

        r = client.get("/api/applications", headers=auth)
        assert r.status_code == 200
        data = r.json()
        assert data["total"] == 4
        assert [a["position"] for a in data["applications"]] == [
            "bookmarked-low", "high", "new-medium", "old-medium",
        ]

    def test_filter_by_status(self, client, auth):
        self._create(client, auth, "one")
        self._create(client, auth, "two", status="WISHLIST")

        r = client.get("/api/applications?status=WISHLIST", headers=auth)
        assert r.json()["total"] == 1
        assert r.json()["applications"][0]["position"] == "two"

    def test_filter_by_unknown_status_is_rejected(self, client, auth):
        r = client.get("/api/applications?status=HIRED", headers=auth)
        assert r.status_code == 400

    def test_search(self, client, auth):
        self._create(client, auth, "Data Scientist", company_name="Globex")
        self._create(client, auth, "Frontend Developer", platform="Indeed")

        r = client.get("/api/applications?q=globex", headers=auth)
        assert [a["position"] for a in r.json()["applications"]] == ["Data Scientist"]
        r = client.get("/api/applications?q=indeed", headers=auth)
        assert [a["position"] for a in r.json()["applications"]] == ["Frontend Developer"]

    def test_date_range(self, client, auth):
        self._create(client, auth, "jan", date_applied="2024-01-15T00:00:00Z")
        self._create(client, auth, "feb", date_applied="2024-02-15T00:00:00Z")
        self._create(client, auth, "mar", date_applied="2024-03-15T00:00:00Z")

        r = client.get(
            "/api/applications",
            params={"start_date": "2024-02-01T00:00:00Z", "end_date": "2024-02-28T00:00:00Z"},
            headers=auth,
        )
        assert [a["position"] for a in r.json()["applications"]] == ["feb"]

    def test_pagination(self, client, auth):
        for i in range(5):
            self._create(client, auth, f"job-{i}", date_applied=f"2024-01-0{i + 1}T00:00:00Z")

        r = client.get("/api/applications?page=2&per_page=2", headers=auth)
        data = r.json()
        assert data["total"] == 5
        assert [a["position"] for a in data["applications"]] == ["job-2", "job-1"]


class TestOwnership:
    def test_other_users_application_is_not_found(self, client, signin):
        alice = signin("alice")
        bob = signin("bob")
        app_id = client.post("/api/applications", json={
            "position": "Engineer", "company_name": "Acme",
        }, headers=alice).json()["id"]

        assert client.get(f"/api/applications/{app_id}", headers=bob).status_code == 404
        assert client.put(f"/api/applications/{app_id}", json={"notes": "x"}, headers=bob).status_code == 404
        assert client.delete(f"/api/applications/{app_id}", headers=bob).status_code == 404
        assert client.get("/api/applications", headers=bob).json()["total"] == 0

        # alice's record is untouched
        r = client.get(f"/api/applications/{app_id}", headers=alice)
        assert r.status_code == 200
        assert r.json()["notes"] is None


class TestStatusTransitions:
    def _create(self, client, auth):
        return client.post("/api/applications", json={
            "position": "Engineer", "company_name": "Acme", "date_applied": "2024-01-01T00:00:00Z",
        }, headers=auth).json()

    def test_any_status_reachable(self, client, auth):
        app = self._create(client, auth)
        for status in ["OFFERING", "WISHLIST", "GHOSTED", "APPLIED"]:
            r = client.patch(f"/api/applications/{app['id']}/status", json={"status": status}, headers=auth)
            assert r.status_code == 200
            assert r.json()["status"] == status

    def test_transition_updates_last_updated(self, client, auth):
        app = self._create(client, auth)
        r = client.patch(f"/api/applications/{app['id']}/status", json={"status": "SCREENING"}, headers=auth)
        assert r.json()["last_updated"] >= app["last_updated"]
        assert r.json()["last_updated"] > "2024-01-01T00:00:00Z"

    def test_unknown_status_rejected(self, client, auth):
        app = self._create(client, auth)
        r = client.patch(f"/api/applications/{app['id']}/status", json={"status": "HIRED"}, headers=auth)
        assert r.status_code == 400

    def test_non_owned_transition_fails_without_mutation(self, client, signin):
        alice = signin("alice")
        bob = signin("bob")
        app = self._create(client, alice)

        r = client.patch(f"/api/applications/{app['id']}/status", json={"status": "REJECTED"}, headers=bob)
        assert r.status_code == 404

        after = client.get(f"/api/applications/{app['id']}", headers=alice).json()
        assert after["status"] == "APPLIED"
        assert after["last_updated"] == app["last_updated"]


class TestApplicationSettings:
    def test_toggle_bookmark_and_priority(self, client, auth):
        app = client.post("/api/applications", json={
            "position": "Engineer", "company_name": "Acme",
        }, headers=auth).json()

        r = client.put("/api/application-settings", json={
            "applicationId": app["id"], "isBookmarked": True, "priority": "HIGH",
        }, headers=auth)
        assert r.status_code == 200
        assert r.json()["is_bookmarked"] is True
        assert r.json()["priority"] == "HIGH"
        assert r.json()["last_updated"] == app["last_updated"]

    def test_missing_application_id(self, client, auth):
        r = client.put("/api/application-settings", json={"isBookmarked": True}, headers=auth)
        assert r.status_code == 400

    def test_non_owned_application(self, client, signin):
        alice = signin("alice")
        bob = signin("bob")
        app = client.post("/api/applications", json={
            "position": "Engineer", "company_name": "Acme",
        }, headers=alice).json()
        r = client.put("/api/application-settings", json={
            "applicationId": app["id"], "isBookmarked": True,
        }, headers=bob)
        assert r.status_code == 404


class TestStatusChangeService:
    def test_missing_application_returns_failure(self, client, auth, test_db):
        from jobtracker.dependencies import RequestContext
        from jobtracker.models import Application
        from jobtracker.services.application_service import update_application_status

        app_id = client.post("/api/applications", json={
            "position": "Engineer", "company_name": "Acme",
        }, headers=auth).json()["id"]
        stranger = RequestContext(user_id="someone-else", username="mallory", token="x")

        db = test_db()
        try:
            result = update_application_status(db, stranger, app_id, "OFFERING")
            assert result.success is False
            assert result.application is None
            assert result.error

            result = update_application_status(db, stranger, "no-such-id", "OFFERING")
            assert result.success is False

            assert db.query(Application).filter(Application.id == app_id).one().status == "APPLIED"
        finally:
            db.close()
