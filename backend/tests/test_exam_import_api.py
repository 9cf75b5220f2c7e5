"""Tests for the CSV exam import endpoints."""

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.exam import Exam, ExamQuestion
from app.services.exam_import import SAMPLE_CSV


def upload(content: str | bytes, filename: str = "exam.csv") -> dict:
    data = content.encode("utf-8") if isinstance(content, str) else content
    return {"file": (filename, data, "text/csv")}


class TestTemplate:
    """Tests for the sample template download."""

    def test_download_template(self, client):
        response = client.get("/v1/exams/import/template")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="exam_template.csv"' in response.headers["content-disposition"]
        assert response.headers["etag"].startswith('W/"')
        assert response.text == SAMPLE_CSV

    def test_template_not_modified(self, client):
        etag = client.get("/v1/exams/import/template").headers["etag"]
        response = client.get("/v1/exams/import/template", headers={"If-None-Match": etag})

        assert response.status_code == 304
        assert response.headers["etag"] == etag

    def test_template_is_a_valid_import(self, client):
        response = client.post("/v1/exams/import/preview", files=upload(SAMPLE_CSV))

        assert response.status_code == 200
        assert response.json()["is_valid"] is True
        assert response.json()["accepted_rows"] == 5


class TestPreview:
    """Tests for parse + validate without saving."""

    def test_preview_sample(self, client, sample_csv):
        response = client.post("/v1/exams/import/preview", files=upload(sample_csv))

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is True
        assert data["errors"] == []
        assert data["warnings"] == []
        assert data["total_rows"] == 2
        assert data["accepted_rows"] == 2
        first, second = data["questions"]
        assert first["question"] == "Is the sky blue?"
        assert first["type"] == "true-false"
        assert first["row_number"] == 2
        assert second["correct_answers"] == ["A", "C"]
        assert second["option_c"] == "Orange"

    def test_preview_reports_every_error(self, client):
        text = (
            "question,type,optionA,optionB,optionC,optionD,correctAnswers\n"
            "Pick one,single,Yes,No,,,A|B\n"
            "Pick some,multiple,Red,,,,A|C"
        )
        response = client.post("/v1/exams/import/preview", files=upload(text))

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is False
        assert data["errors"] == [
            "Row 2: Single-choice questions can only have one correct answer",
            "Row 3: Questions must have at least optionA and optionB",
            "Row 3: Invalid correct answers: C",
        ]
        assert [e["code"] for e in data["error_details"]] == [
            "TOO_MANY_CORRECT",
            "MISSING_OPTIONS",
            "INVALID_CORRECT",
        ]
        assert data["accepted_rows"] == 2

    def test_short_rows_become_warnings(self, client):
        text = (
            "question,type,optionA,optionB,optionC,optionD,correctAnswers\n"
            "Is water wet?,true-false,True,False\n"
            "Is fire hot?,true-false,True,False,,,A"
        )
        response = client.post("/v1/exams/import/preview", files=upload(text))

        data = response.json()
        assert data["is_valid"] is True
        assert data["skipped_rows"] == [2]
        assert data["warnings"] == ["Row 2: skipped, expected 7 fields but found 4"]
        assert data["total_rows"] == 2
        assert data["accepted_rows"] == 1
        assert data["questions"][0]["row_number"] == 3

    def test_no_usable_rows(self, client):
        text = "question,type,optionA,optionB,correctAnswers\n,single,a,b,A\nQ,single,a,b,"
        response = client.post("/v1/exams/import/preview", files=upload(text))

        data = response.json()
        assert data["is_valid"] is False
        assert data["errors"] == ["No valid questions found in CSV"]
        assert data["questions"] == []

    def test_header_only(self, client):
        response = client.post("/v1/exams/import/preview", files=upload("question,type\n"))
        assert response.json()["errors"] == ["No valid questions found in CSV"]

    def test_strict_types_setting(self, client, monkeypatch):
        text = "question,type,optionA,optionB,correctAnswers\nSky blue?,boolean,Yes,No,A"

        assert client.post("/v1/exams/import/preview", files=upload(text)).json()["is_valid"] is True

        monkeypatch.setattr(settings, "IMPORT_STRICT_TYPES", True)
        data = client.post("/v1/exams/import/preview", files=upload(text)).json()
        assert data["is_valid"] is False
        assert data["error_details"][0]["code"] == "UNRECOGNIZED_TYPE"

    def test_undecodable_file(self, client):
        response = client.post("/v1/exams/import/preview", files=upload(b"\xff\xfe\xfa"))

        assert response.status_code == 400
        assert response.json()["error_code"] == "CSV_DECODE_ERROR"

    def test_file_too_large(self, client, sample_csv, monkeypatch):
        monkeypatch.setattr(settings, "MAX_BODY_BYTES_IMPORT", 10)
        response = client.post("/v1/exams/import/preview", files=upload(sample_csv))

        assert response.status_code == 413
        assert response.json()["error_code"] == "PAYLOAD_TOO_LARGE"
        assert response.json()["details"] == {"limit": 10}

    def test_too_many_rows(self, client, sample_csv, monkeypatch):
        monkeypatch.setattr(settings, "IMPORT_MAX_ROWS", 1)
        response = client.post("/v1/exams/import/preview", files=upload(sample_csv))

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_LIMIT_EXCEEDED"

    def test_preview_keeps_every_answer(self, client):
        text = "question,type,optionA,optionB,correctAnswers\nQ,multiple,a,b,A|B|A|B|A|B|A|B|A"
        response = client.post("/v1/exams/import/preview", files=upload(text))

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is True
        assert data["questions"][0]["correct_answers"] == ["A", "B"] * 4 + ["A"]

    def test_preview_long_question_text(self, client):
        text = "question,type,optionA,optionB,correctAnswers\n" + "Q" * 4001 + ",single,a,b,A|B"
        response = client.post("/v1/exams/import/preview", files=upload(text))

        assert response.status_code == 200
        data = response.json()
        assert data["questions"][0]["question"] == "Q" * 4001
        assert data["errors"] == ["Row 2: Single-choice questions can only have one correct answer"]

    def test_row_cap_checked_before_parsing(self, client, sample_csv, monkeypatch):
        def fail(text):
            raise AssertionError("pipeline ran past the row cap")

        monkeypatch.setattr(settings, "IMPORT_MAX_ROWS", 1)
        monkeypatch.setattr("app.api.v1.endpoints.exam_import.build_preview", fail)
        response = client.post("/v1/exams/import/preview", files=upload(sample_csv))

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_LIMIT_EXCEEDED"
        assert response.json()["details"] == {"limit": 1}

    def test_missing_file(self, client):
        response = client.post("/v1/exams/import/preview")

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_request_id_is_echoed(self, client, sample_csv):
        response = client.post(
            "/v1/exams/import/preview",
            files=upload(sample_csv),
            headers={"X-Request-ID": "req-123"},
        )
        assert response.headers["X-Request-ID"] == "req-123"


class TestImport:
    """Tests for importing and saving an exam."""

    def test_import_saves_exam(self, client, db: Session, sample_csv):
        response = client.post(
            "/v1/exams/import", files=upload(sample_csv), data={"title": "  General Knowledge "}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "General Knowledge"
        assert data["source"] == "csv"
        assert data["question_count"] == 2

        questions = db.query(ExamQuestion).order_by(ExamQuestion.position).all()
        assert [q.question_text for q in questions] == ["Is the sky blue?", "Which of these are fruits?"]
        assert questions[0].option_c is None
        assert questions[1].correct_answers == ["A", "C"]

    def test_saved_exam_can_be_fetched(self, client, sample_csv):
        exam_id = client.post(
            "/v1/exams/import", files=upload(sample_csv), data={"title": "Quiz"}
        ).json()["exam_id"]

        response = client.get(f"/v1/exams/{exam_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Quiz"
        assert [q["position"] for q in data["questions"]] == [1, 2]
        assert data["questions"][0]["question_type"] == "true-false"

    def test_invalid_csv_is_not_saved(self, client, db: Session):
        text = "question,type,optionA,optionB,correctAnswers\nPick,single,Yes,No,A|B"
        response = client.post("/v1/exams/import", files=upload(text), data={"title": "Quiz"})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "CSV_VALIDATION_FAILED"
        assert body["details"]["errors"] == [
            "Row 2: Single-choice questions can only have one correct answer"
        ]
        assert db.query(Exam).count() == 0

    def test_title_is_required(self, client, db: Session, sample_csv):
        response = client.post("/v1/exams/import", files=upload(sample_csv), data={"title": "  "})

        assert response.status_code == 422
        assert response.json()["error_code"] == "TITLE_REQUIRED"
        assert response.json()["message"] == "Exam title is required."
        assert db.query(Exam).count() == 0
