import pytest


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _create_job(client, token, **fields):
    body = {"jobTitle": "Dev", "location": "NY", "description": "Build things"}
    body.update(fields)
    return client.post("/jobs", headers=_auth_headers(token), json=body)


def test_create_job_requires_token(client):
    r = client.post("/jobs", json={"jobTitle": "Dev", "location": "NY", "description": "..."})
    assert r.status_code == 401, r.text
    assert r.headers.get("www-authenticate") == "Bearer"


def test_create_job_success(client, token):
    r = _create_job(client, token)
    assert r.status_code == 201, r.text
    job = r.json()["job"]
    assert job["jobTitle"] == "Dev"
    assert job["location"] == "NY"
    assert job["description"] == "Build things"
    assert isinstance(job["id"], int)
    assert job["createdOn"]


def test_create_job_missing_fields_is_400(client, token):
    r = client.post("/jobs", headers=_auth_headers(token), json={"jobTitle": "Dev"})
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "JobTitle, Location, and Description are required"


def test_list_jobs_is_public(client, token):
    _create_job(client, token, jobTitle="First")
    _create_job(client, token, jobTitle="Second")

    r = client.get("/jobs")
    assert r.status_code == 200, r.text
    titles = {j["jobTitle"] for j in r.json()["jobs"]}
    assert titles == {"First", "Second"}


def test_job_details(client, token, job):
    r = client.post("/jobs/details", headers=_auth_headers(token), json={"jobId": job["id"]})
    assert r.status_code == 200, r.text
    assert r.json()["job"] == job


def test_job_details_accepts_string_id(client, token, job):
    r = client.post("/jobs/details", headers=_auth_headers(token), json={"jobId": str(job["id"])})
    assert r.status_code == 200, r.text


def test_job_details_missing_id_is_400(client, token):
    r = client.post("/jobs/details", headers=_auth_headers(token), json={})
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "Job ID is required"


def test_job_details_unknown_job_is_404(client, token):
    r = client.post("/jobs/details", headers=_auth_headers(token), json={"jobId": 9999})
    assert r.status_code == 404, r.text
    assert r.json()["error"] == "Job not found"


def test_update_job_changes_only_given_fields(client, token, job):
    r = client.put(
        "/jobs/update",
        headers=_auth_headers(token),
        json={"jobId": job["id"], "location": "Berlin", "description": ""},
    )
    assert r.status_code == 200, r.text
    updated = r.json()["job"]
    assert updated["location"] == "Berlin"
    assert updated["jobTitle"] == job["jobTitle"]
    assert updated["description"] == job["description"]
    assert updated["createdOn"] == job["createdOn"]


def test_update_unknown_job_is_404(client, token):
    r = client.put("/jobs/update", headers=_auth_headers(token), json={"jobId": 9999, "location": "X"})
    assert r.status_code == 404, r.text


def test_update_job_requires_token(client, job):
    r = client.put("/jobs/update", json={"jobId": job["id"], "location": "X"})
    assert r.status_code == 401, r.text


def test_delete_job(client, token, job):
    r = client.request("DELETE", "/jobs/delete", headers=_auth_headers(token), json={"jobId": job["id"]})
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Job removed"

    again = client.request("DELETE", "/jobs/delete", headers=_auth_headers(token), json={"jobId": job["id"]})
    assert again.status_code == 404, again.text
    assert client.get("/jobs").json()["jobs"] == []


def test_delete_job_removes_its_applications(client, token, job):
    applied = client.post("/jobs/apply", headers=_auth_headers(token), json={"jobId": job["id"]})
    assert applied.status_code == 201, applied.text

    r = client.request("DELETE", "/jobs/delete", headers=_auth_headers(token), json={"jobId": job["id"]})
    assert r.status_code == 200, r.text

    listing = client.get("/jobs/applications/user", headers=_auth_headers(token))
    assert listing.json()["applications"] == []


def test_delete_job_missing_id_is_400(client, token):
    r = client.request("DELETE", "/jobs/delete", headers=_auth_headers(token), json={})
    assert r.status_code == 400, r.text


def test_non_numeric_job_id_is_400(client, token):
    r = client.post("/jobs/details", headers=_auth_headers(token), json={"jobId": "abc"})
    assert r.status_code == 400, r.text


@pytest.mark.parametrize(
    "method,path",
    [("POST", "/jobs/details"), ("POST", "/jobs/apply"), ("DELETE", "/jobs/delete"), ("PUT", "/jobs/update")],
)
def test_job_id_beyond_integer_range_is_400(client, token, method, path):
    r = client.request(method, path, headers=_auth_headers(token), json={"jobId": 10**30})
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "Job ID must not exceed 9223372036854775807"
