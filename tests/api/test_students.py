"""
Tests for the Students API endpoints.
"""
from fastapi.testclient import TestClient

from tests.constants import TEST_STUDENT_PAYLOAD, TEST_TEACHER_ID, UNKNOWN_STUDENT_ID


def create_student(client: TestClient, **overrides) -> str:
    response = client.post("/students", json={**TEST_STUDENT_PAYLOAD, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["insertedId"]


def get_student(client: TestClient, student_id: str, teacher_id: str = TEST_TEACHER_ID) -> dict:
    students = client.get(f"/students/{teacher_id}").json()
    return next(s for s in students if s["id"] == student_id)


class TestStudentsAPICreate:
    """Test class for POST /students."""

    def test_create_student(self, client: TestClient):
        response = client.post("/students", json=TEST_STUDENT_PAYLOAD)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Student added successfully"

        student = get_student(client, body["insertedId"])
        assert student["name"] == TEST_STUDENT_PAYLOAD["name"]
        assert student["teacherId"] == TEST_TEACHER_ID
        assert student["teachingDays"] == 16
        assert student["salary"] == 5000
        assert student["transportCost"] == 300
        assert student["classesConducted"] == 0
        assert student["paymentStatus"] == "Unpaid"
        assert student["lastPaidDate"] is None
        assert student["carryOverClasses"] == 0

    def test_create_student_ignores_cycle_fields(self, client: TestClient):
        student_id = create_student(client, classesConducted=9, paymentStatus="Paid", carryOverClasses=3)

        student = get_student(client, student_id)
        assert student["classesConducted"] == 0
        assert student["paymentStatus"] == "Unpaid"
        assert student["carryOverClasses"] == 0

    def test_create_student_numeric_strings(self, client: TestClient):
        student_id = create_student(client, teachingDays="12", salary="4500.50", transportCost="")

        student = get_student(client, student_id)
        assert student["teachingDays"] == 12
        assert student["salary"] == 4500.5
        assert student["transportCost"] == 0

    def test_create_student_missing_name(self, client: TestClient):
        """A rejected student is not persisted."""
        payload = {k: v for k, v in TEST_STUDENT_PAYLOAD.items() if k != "name"}

        response = client.post("/students", json=payload)

        assert response.status_code == 400
        assert client.get(f"/students/{TEST_TEACHER_ID}").json() == []

    def test_create_student_missing_teacher(self, client: TestClient):
        payload = {k: v for k, v in TEST_STUDENT_PAYLOAD.items() if k != "teacherId"}
        assert client.post("/students", json=payload).status_code == 400

    def test_create_student_malformed_number(self, client: TestClient):
        response = client.post("/students", json={**TEST_STUDENT_PAYLOAD, "teachingDays": "sixteen"})
        assert response.status_code == 400

    def test_create_student_number_too_large_for_storage(self, client: TestClient):
        response = client.post("/students", json={**TEST_STUDENT_PAYLOAD, "teachingDays": 10**20})

        assert response.status_code == 400
        assert client.get(f"/students/{TEST_TEACHER_ID}").json() == []

    def test_create_student_sub_cent_salary_is_rejected(self, client: TestClient):
        """Amounts are kept to the cent; extra decimals are refused, not rounded."""
        for field in ("salary", "transportCost"):
            response = client.post("/students", json={**TEST_STUDENT_PAYLOAD, field: "100.005"})
            assert response.status_code == 400, field
        assert client.get(f"/students/{TEST_TEACHER_ID}").json() == []

    def test_money_is_returned_as_numbers(self, client: TestClient):
        student_id = create_student(client, salary="4500.75", transportCost=120)

        student = get_student(client, student_id)
        assert isinstance(student["salary"], float)
        assert isinstance(student["transportCost"], float)
        assert student["salary"] == 4500.75


class TestStudentsAPIList:
    """Test class for GET /students/{teacherId}."""

    def test_list_only_teacher_students(self, client: TestClient):
        mine = create_student(client)
        create_student(client, teacherId="another-teacher")

        response = client.get(f"/students/{TEST_TEACHER_ID}")

        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [mine]

    def test_list_unknown_teacher(self, client: TestClient):
        response = client.get("/students/nobody")
        assert response.status_code == 200
        assert response.json() == []


class TestStudentsAPICycle:
    """Test class for the conduct-class / mark-paid / new-month transitions."""

    def test_month_with_carry_over_then_new_month(self, client: TestClient):
        student_id = create_student(client)
        for _ in range(18):
            response = client.patch(f"/students/{student_id}/conduct-class")
            assert response.status_code == 200
        assert response.json()["message"] == "Class conducted count updated successfully"

        response = client.patch(f"/students/{student_id}/mark-paid")
        assert response.status_code == 200
        paid = response.json()["student"]
        assert paid["classesConducted"] == 18
        assert paid["carryOverClasses"] == 2
        assert paid["paymentStatus"] == "Paid"
        assert paid["lastPaidDate"] is not None

        response = client.patch(f"/students/{student_id}/new-month")
        assert response.status_code == 200
        assert response.json()["message"] == "Student reset for new month."

        student = get_student(client, student_id)
        assert student["classesConducted"] == 2
        assert student["carryOverClasses"] == 0
        assert student["paymentStatus"] == "Unpaid"
        assert student["lastPaidDate"] is None

    def test_conduct_class_after_payment_is_rejected(self, client: TestClient):
        student_id = create_student(client)
        client.patch(f"/students/{student_id}/conduct-class")
        client.patch(f"/students/{student_id}/mark-paid")

        response = client.patch(f"/students/{student_id}/conduct-class")

        assert response.status_code == 400
        assert "already marked as paid" in response.json()["detail"]
        assert get_student(client, student_id)["classesConducted"] == 1

    def test_mark_paid_twice_is_idempotent(self, client: TestClient):
        student_id = create_student(client, teachingDays=1)
        for _ in range(3):
            client.patch(f"/students/{student_id}/conduct-class")
        first = client.patch(f"/students/{student_id}/mark-paid").json()["student"]

        response = client.patch(f"/students/{student_id}/mark-paid")

        assert response.status_code == 200
        second = response.json()["student"]
        assert second["carryOverClasses"] == first["carryOverClasses"] == 2
        assert second["lastPaidDate"] == first["lastPaidDate"]

    def test_paid_date_carries_utc_offset(self, client: TestClient):
        student_id = create_student(client)
        client.patch(f"/students/{student_id}/mark-paid")

        paid_date = get_student(client, student_id)["lastPaidDate"]
        assert paid_date.endswith(("Z", "+00:00"))

    def test_invalid_student_id(self, client: TestClient):
        for action in ("conduct-class", "mark-paid", "new-month"):
            response = client.patch(f"/students/not-a-valid-id/{action}")
            assert response.status_code == 400, action
        assert client.delete("/students/not-a-valid-id").status_code == 400

    def test_unknown_student(self, client: TestClient):
        """Every transition on a missing student is a 404."""
        for action in ("conduct-class", "mark-paid", "new-month"):
            response = client.patch(f"/students/{UNKNOWN_STUDENT_ID}/{action}")
            assert response.status_code == 404, action
            assert response.json()["detail"] == "Student not found"


class TestStudentsAPIDelete:
    """Test class for DELETE /students/{id}."""

    def test_delete_paid_student(self, client: TestClient):
        student_id = create_student(client)
        client.patch(f"/students/{student_id}/mark-paid")

        response = client.delete(f"/students/{student_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Student deleted successfully"}
        assert client.get(f"/students/{TEST_TEACHER_ID}").json() == []

    def test_delete_twice(self, client: TestClient):
        student_id = create_student(client)
        client.delete(f"/students/{student_id}")

        response = client.delete(f"/students/{student_id}")

        assert response.status_code == 404
