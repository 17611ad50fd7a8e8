"""Tests für die Aufrufschnittstelle (Statuscodes + Payloads)."""

import json
from pathlib import Path

import pytest

from config.schema import AppConfig, StoreConfig
from service.timetable_service import (
    MSG_CLEARED,
    MSG_DATE_INVALID,
    MSG_DATE_REQUIRED,
    MSG_EXPORT_MISSING,
    MSG_EXPORT_OK,
    MSG_INSUFFICIENT,
    MSG_SERVER_ERROR,
    TimetableService,
)


def make_service(tmp_path: Path, choose=None) -> TimetableService:
    config = AppConfig(store=StoreConfig(data_dir=str(tmp_path)))
    return TimetableService.from_config(config, choose=choose)


def seed_data(tmp_path: Path, constraints=None) -> None:
    if constraints is None:
        constraints = [{"id": 1, "resource": "Dupont", "day": "lundi",
                        "time": "08:00-10:00", "type": "Indisponible"}]
    files = {
        "ress-ens.json": [{"id": 1, "name": "Dupont", "subjects": "Math"}],
        "ress-group.json": [{"id": 1, "name": "G1"}],
        "ress-salle.json": [{"id": 1, "name": "R1"}],
        "constraints.json": constraints,
    }
    for name, data in files.items():
        (tmp_path / name).write_text(json.dumps(data), encoding="utf-8")


# ─── Generierung ──────────────────────────────────────────────────────────────

class TestGenerate:
    def test_success(self, tmp_path):
        seed_data(tmp_path)
        status, payload = make_service(tmp_path).generate({"date": "2024-01-01"})
        assert status == 200
        assert payload["date"] == "2024-01-01"
        assert len(payload["timetable"]) == 4
        assert payload["timetable"][0]["lundi"] == "-"
        assert payload["timetable"][0]["mardi"] == "Math (Dupont, G1, R1)"

    @pytest.mark.parametrize("payload", [{}, {"date": ""}, {"date": None}])
    def test_missing_date(self, tmp_path, payload):
        seed_data(tmp_path)
        assert make_service(tmp_path).generate(payload) == (400, {"error": MSG_DATE_REQUIRED})

    def test_invalid_date(self, tmp_path):
        seed_data(tmp_path)
        assert make_service(tmp_path).generate({"date": "../x"}) == (400, {"error": MSG_DATE_INVALID})

    def test_insufficient_data(self, tmp_path):
        seed_data(tmp_path, constraints=[])
        assert make_service(tmp_path).generate({"date": "2024-01-01"}) == \
            (400, {"error": MSG_INSUFFICIENT})

    def test_store_failure(self, tmp_path):
        seed_data(tmp_path)
        (tmp_path / "ress-salle.json").write_text("not json", encoding="utf-8")
        assert make_service(tmp_path).generate({"date": "2024-01-01"}) == \
            (500, {"error": MSG_SERVER_ERROR})

    @pytest.mark.parametrize("date", [0, False, []])
    def test_falsy_date_is_missing(self, tmp_path, date):
        seed_data(tmp_path)
        assert make_service(tmp_path).generate({"date": date}) == (400, {"error": MSG_DATE_REQUIRED})
        assert not (tmp_path / "emploit").exists()

    def test_falsy_export_date_is_missing(self, tmp_path):
        assert make_service(tmp_path).export({"date": 0, "timetables": []}) == \
            (400, {"error": MSG_EXPORT_MISSING})

    def test_comma_in_resource_name_is_server_error(self, tmp_path):
        seed_data(tmp_path)
        (tmp_path / "ress-ens.json").write_text(
            json.dumps([{"name": "Dupont, Jean", "subjects": "Math"}]), encoding="utf-8")
        assert make_service(tmp_path).generate({"date": "2024-01-01"}) == \
            (500, {"error": MSG_SERVER_ERROR})

    def test_numeric_date_used_as_string(self, tmp_path):
        seed_data(tmp_path)
        status, payload = make_service(tmp_path).generate({"date": 20240101})
        assert status == 200
        assert payload["date"] == "20240101"
        assert (tmp_path / "emploit" / "timetable_20240101.json").is_file()


# ─── Export ───────────────────────────────────────────────────────────────────

class TestExport:
    def test_persists_verbatim(self, tmp_path):
        service = make_service(tmp_path)
        entries = [{"time": "08:00-10:00", "lundi": "Handarbeit"}]
        assert service.export({"date": "2024-05-05", "timetables": entries}) == \
            (200, {"message": MSG_EXPORT_OK})
        stored = json.loads(
            (tmp_path / "emploit" / "timetable_2024-05-05.json").read_text(encoding="utf-8"))
        assert stored == {"date": "2024-05-05", "timetable": entries}

    def test_empty_list_is_accepted(self, tmp_path):
        status, _ = make_service(tmp_path).export({"date": "d", "timetables": []})
        assert status == 200

    @pytest.mark.parametrize("payload", [
        {"timetables": []},
        {"date": "2024-01-01"},
        {"date": "", "timetables": []},
    ])
    def test_missing_fields(self, tmp_path, payload):
        assert make_service(tmp_path).export(payload) == (400, {"error": MSG_EXPORT_MISSING})

    def test_export_overwrites_generated(self, tmp_path):
        seed_data(tmp_path)
        service = make_service(tmp_path)
        service.generate({"date": "2024-01-01"})
        service.export({"date": "2024-01-01", "timetables": []})
        _, items = service.visualisation()
        assert items == [{"date": "2024-01-01", "timetable": []}]


# ─── Verwaltung ───────────────────────────────────────────────────────────────

class TestManagement:
    def test_visualisation_empty(self, tmp_path):
        assert make_service(tmp_path).visualisation() == (200, [])

    def test_history(self, tmp_path):
        service = make_service(tmp_path)
        service.export({"date": "2024-01-01", "timetables": []})
        service.export({"date": "semaine-12", "timetables": []})
        status, items = service.history()
        assert status == 200
        assert items == [
            {"name": "timetable_2024-01-01.json", "date": "2024-01-01"},
            {"name": "timetable_semaine-12.json", "date": "Inconnu"},
        ]

    def test_get_timetable(self, tmp_path):
        seed_data(tmp_path)
        service = make_service(tmp_path)
        _, generated = service.generate({"date": "2024-01-01"})
        assert service.get_timetable("timetable_2024-01-01.json") == (200, generated)

    def test_get_timetable_unknown_is_empty(self, tmp_path):
        assert make_service(tmp_path).get_timetable("timetable_x.json") == (200, [])

    def test_get_timetable_rejects_path(self, tmp_path):
        assert make_service(tmp_path).get_timetable("../ress-ens.json") == \
            (500, {"error": MSG_SERVER_ERROR})

    def test_get_timetable_malformed(self, tmp_path):
        (tmp_path / "emploit").mkdir()
        (tmp_path / "emploit" / "timetable_x.json").write_text("{", encoding="utf-8")
        assert make_service(tmp_path).get_timetable("timetable_x.json") == \
            (500, {"error": MSG_SERVER_ERROR})

    def test_clear(self, tmp_path):
        service = make_service(tmp_path)
        service.export({"date": "a", "timetables": []})
        service.export({"date": "b", "timetables": []})
        assert service.clear() == (200, {"message": MSG_CLEARED})
        assert service.visualisation() == (200, [])
