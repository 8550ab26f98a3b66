import services.query_service as query_service
from core.exceptions import DatabaseConnectionError
from services.patient_service import get_all_patients
from services.query_service import DEFAULT_QUERY, QUERY_EXAMPLES, execute_query


class TestExecuteQuery:
    def test_select_returns_rows_as_dicts(self, sample_patients):
        result = execute_query("SELECT first_name, last_name FROM patients ORDER BY last_name, first_name")

        assert result == {
            "success": True,
            "data": [
                {"first_name": "John", "last_name": "Doe"},
                {"first_name": "Robert", "last_name": "Doel"},
                {"first_name": "Jane", "last_name": "Smith"},
            ],
            "error": None,
        }

    def test_invalid_statement_is_captured(self, test_database):
        result = execute_query("SELEC nonsense FROM")

        assert result["success"] is False
        assert result["data"] == []
        assert "syntax error" in result["error"]

    def test_unknown_table_reports_engine_message(self, test_database):
        result = execute_query("SELECT * FROM visits")

        assert result["success"] is False
        assert "no such table: visits" in result["error"]

    def test_positional_params_are_bound(self, sample_patients):
        result = execute_query("SELECT first_name FROM patients WHERE last_name = ?", ["Smith"])

        assert result["data"] == [{"first_name": "Jane"}]

    def test_named_params_are_bound(self, sample_patients):
        result = execute_query(
            "SELECT first_name FROM patients WHERE gender = :gender ORDER BY first_name",
            {"gender": "male"},
        )

        assert [row["first_name"] for row in result["data"]] == ["John", "Robert"]

    def test_params_are_not_interpolated(self, sample_patients):
        result = execute_query(
            "SELECT COUNT(*) AS n FROM patients WHERE last_name = ?",
            ["x' OR '1'='1"],
        )

        assert result["data"] == [{"n": 0}]

    def test_write_statements_commit_and_return_no_rows(self, test_database):
        result = execute_query(
            "INSERT INTO patients (first_name, last_name, date_of_birth, gender) VALUES (?, ?, ?, ?)",
            ("Grace", "Hopper", "1906-12-09", "female"),
        )

        assert result == {"success": True, "data": [], "error": None}
        assert [p.last_name for p in get_all_patients()] == ["Hopper"]

    def test_constraint_violation_is_captured(self, test_database):
        result = execute_query("INSERT INTO patients (first_name) VALUES ('Nobody')")

        assert result["success"] is False
        assert "NOT NULL" in result["error"]

    def test_connection_failure_is_captured(self, monkeypatch):
        def unavailable():
            raise DatabaseConnectionError("unable to open database file")

        monkeypatch.setattr(query_service, "get_engine", unavailable)

        result = execute_query("SELECT 1")

        assert result == {"success": False, "data": [], "error": "unable to open database file"}


class TestExamples:
    def test_every_example_runs(self, sample_patients):
        for example in QUERY_EXAMPLES:
            result = execute_query(example["query"])
            assert result["success"], (example["id"], result["error"])

    def test_gender_distribution(self, sample_patients):
        query = next(e["query"] for e in QUERY_EXAMPLES if e["id"] == "gender-count")

        assert execute_query(query)["data"] == [
            {"gender": "female", "patient_count": 1},
            {"gender": "male", "patient_count": 2},
        ]

    def test_default_query_is_first_example(self):
        assert DEFAULT_QUERY == QUERY_EXAMPLES[0]["query"]
