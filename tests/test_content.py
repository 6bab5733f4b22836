"""
Companies, blogs and course catalogues.
"""
from bson import ObjectId


class TestCompanies:
    def test_duplicate_name(self, client, admin_headers, company):
        response = client.post("/api/companies", headers=admin_headers, json={
            "name": "Acme Corp", "description": "Again", "location": "Delhi",
        })
        assert response.status_code == 400
        assert response.json()["message"] == "Company name already exists"

    def test_public_read_admin_write(self, client, employer, company):
        assert client.get("/api/companies").json()["count"] == 1
        assert client.get(f"/api/companies/{company['_id']}").json()["company"]["name"] == "Acme Corp"

        response = client.patch(f"/api/companies/{company['_id']}", headers=employer["headers"], json={"location": "X"})
        assert response.status_code == 403

    def test_update_and_delete(self, client, admin_headers, company):
        response = client.patch(f"/api/companies/{company['_id']}", headers=admin_headers, json={"location": "Chennai"})
        assert response.json()["company"]["location"] == "Chennai"

        assert client.delete(f"/api/companies/{company['_id']}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/companies/{company['_id']}").status_code == 404

    def test_bad_website(self, client, admin_headers):
        response = client.post("/api/companies", headers=admin_headers, json={
            "name": "Nowhere", "description": "d", "location": "l", "website": "not a url",
        })
        assert response.status_code == 400


class TestBlogs:
    BLOG = {
        "title": "Interview Tips 101!",
        "content": "Prepare well.",
        "excerpt": "Short version",
        "category": "Interview Tips",
    }

    def test_slug_and_view_count(self, client, admin_headers):
        response = client.post("/api/blogs", headers=admin_headers, json=self.BLOG)
        assert response.status_code == 201
        blog = response.json()["blog"]
        assert blog["slug"] == "interview-tips-101"
        assert blog["views"] == 0

        assert client.get("/api/blogs/interview-tips-101").json()["blog"]["views"] == 1
        assert client.get("/api/blogs/interview-tips-101").json()["blog"]["views"] == 2

    def test_duplicate_slug(self, client, admin_headers):
        client.post("/api/blogs", headers=admin_headers, json=self.BLOG)
        response = client.post("/api/blogs", headers=admin_headers, json=self.BLOG)
        assert response.status_code == 400

    def test_list_filters_unpublished_category_and_search(self, client, admin_headers):
        client.post("/api/blogs", headers=admin_headers, json=self.BLOG)
        client.post("/api/blogs", headers=admin_headers, json={
            **self.BLOG, "title": "Draft", "is_published": False,
        })
        client.post("/api/blogs", headers=admin_headers, json={
            **self.BLOG, "title": "Hired at Acme", "category": "Success Stories", "content": "A story",
        })

        assert client.get("/api/blogs").json()["count"] == 2
        by_category = client.get("/api/blogs", params={"category": "Success Stories"}).json()
        assert [b["title"] for b in by_category["blogs"]] == ["Hired at Acme"]
        by_search = client.get("/api/blogs", params={"search": "prepare"}).json()
        assert [b["title"] for b in by_search["blogs"]] == ["Interview Tips 101!"]
        assert client.get("/api/blogs/draft").status_code == 404

    def test_retitle_changes_slug(self, client, admin_headers):
        blog = client.post("/api/blogs", headers=admin_headers, json=self.BLOG).json()["blog"]
        response = client.patch(f"/api/blogs/{blog['_id']}", headers=admin_headers, json={"title": "New Title"})
        assert response.json()["blog"]["slug"] == "new-title"
        assert client.delete(f"/api/blogs/{blog['_id']}", headers=admin_headers).status_code == 200


class TestCourses:
    CAMPUS = {
        "university_name": "State University",
        "course_name": "MBA",
        "category": "Management",
        "degree_type": "PG",
        "description": "Two years",
        "duration": "2 years",
        "level": "Postgraduate",
        "location": "Delhi",
    }
    CERTIFICATE = {
        "title": "Python for Data",
        "instructor": "Dr. Rao",
        "level": "Beginner",
        "duration": "6 weeks",
        "category": "Data",
        "current_price": 499,
        "original_price": 1999,
    }

    def test_campus_course_crud(self, client, admin_headers):
        course = client.post("/api/campuscourses", headers=admin_headers, json=self.CAMPUS).json()["course"]
        client.post("/api/campuscourses", headers=admin_headers, json={**self.CAMPUS, "is_active": False})
        assert client.get("/api/campuscourses").json()["count"] == 1

        response = client.patch(f"/api/campuscourses/{course['_id']}", headers=admin_headers, json={"rating": 4.5})
        assert response.json()["course"]["rating"] == 4.5
        assert client.delete(f"/api/campuscourses/{course['_id']}", headers=admin_headers).status_code == 200

    def test_certificate_course_crud(self, client, admin_headers, student):
        assert client.post("/api/certificatecourses", headers=student["headers"], json=self.CERTIFICATE).status_code == 403

        course = client.post("/api/certificatecourses", headers=admin_headers, json=self.CERTIFICATE).json()["course"]
        assert course["currency"] == "₹"
        assert client.get(f"/api/certificatecourses/{course['_id']}").status_code == 200
        assert client.get(f"/api/certificatecourses/{ObjectId()}").json()["message"] == "Course not found"


def test_health_endpoints(client):
    assert client.get("/").json()["status"] == "healthy"
