"""
Budget API tests: form/JSON submission through to the database.

Tests:
1-4.  Create: form post, JSON post, view data, expiration
5-7.  Validation: 422 payload, oversized ids and areas, nothing persisted
7a.   Logging: one line per rejection or lookup miss
8-9.  Lookup misses: 404 payload, nothing persisted
10-12. Read: list, get, estimate
13.   Health
"""

import logging
from datetime import datetime

import pytest

from insulation_budget import models


def _form(catalogue, **overrides):
    fields = {
        "customerId": str(catalogue["customer_id"]),
        "insulatingMaterialId": str(catalogue["cellulose_id"]),
        "layerThickness": "100",
        "areaToCover": "9",
    }
    fields.update(overrides)
    return fields


# ============================================================
# 1-4. Create
# ============================================================

def test_create_budget_from_form(client, db, catalogue):
    resp = client.post("/api/budgets/", data=_form(catalogue))
    assert resp.status_code == 200
    data = resp.json()

    assert data["price"] == pytest.approx(90.0)  # 9 m² × 10/m² at 100 mm
    assert data["totally_bags_quantity"] == pytest.approx(2.0)
    assert data["layer_thickness"] == 100
    assert data["customer"]["name"] == "Marta Gómez"
    assert data["bag"]["id"] == catalogue["cellulose_bag_id"]
    assert data["bag"]["building_material"]["name"] == "Celulosa proyectada"
    assert db.query(models.Budget).count() == 1


def test_create_budget_from_json(client, catalogue):
    resp = client.post("/api/budgets/", json={
        "customerId": catalogue["customer_id"],
        "insulatingMaterialId": catalogue["cellulose_id"],
        "layerThickness": 50,
        "areaToCover": 9,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["price"] == pytest.approx(49.5)  # 50 mm tier is 5.5/m²
    assert data["totally_bags_quantity"] == pytest.approx(1.0)


def test_untiered_material_scales_reference_price(client, catalogue):
    """Rock wool has no tiers: 11.5/m² at 100 mm becomes 23/m² at 200 mm."""
    resp = client.post("/api/budgets/", data=_form(
        catalogue,
        insulatingMaterialId=str(catalogue["rock_wool_id"]),
        layerThickness="200",
        areaToCover="4.5",
    ))
    assert resp.status_code == 200
    assert resp.json()["price"] == pytest.approx(103.5)
    assert resp.json()["totally_bags_quantity"] == pytest.approx(2.0)


def test_budget_expires_30_days_after_creation(client, catalogue):
    data = client.post("/api/budgets/", data=_form(catalogue)).json()
    created = datetime.fromisoformat(data["created_at"])
    expires = datetime.fromisoformat(data["expiration_date"])
    assert abs((expires - created).total_seconds() - 30 * 86400) < 60


# ============================================================
# 5-7. Validation
# ============================================================

def test_area_below_minimum_returns_422(client, db, catalogue):
    resp = client.post("/api/budgets/", data=_form(catalogue, areaToCover="4"))
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "validation"
    assert list(body["errors"]) == ["areaToCover"]
    assert db.query(models.Budget).count() == 0


def test_empty_form_reports_every_field(client, db, catalogue):
    resp = client.post("/api/budgets/", data={})
    assert resp.status_code == 422
    assert set(resp.json()["errors"]) == {
        "customerId", "insulatingMaterialId", "layerThickness", "areaToCover",
    }
    assert db.query(models.Budget).count() == 0


def test_oversized_customer_id_returns_422(client, db, catalogue):
    """An id beyond a 64-bit row id is rejected before the lookup runs."""
    resp = client.post("/api/budgets/", data=_form(catalogue, customerId="1e20"))
    assert resp.status_code == 422
    assert resp.json()["errors"] == {"customerId": ["El cliente ingresado no es correcto."]}
    assert db.query(models.Budget).count() == 0


def test_overflowing_area_returns_422(client, db, catalogue):
    """1e308 m² overflows price and bag count, nothing is saved."""
    resp = client.post("/api/budgets/", data=_form(catalogue, areaToCover="1e308", layerThickness="150"))
    assert resp.status_code == 422
    assert resp.json()["errors"] == {"areaToCover": ["El área a cubrir ingresada es incorrecta."]}
    assert db.query(models.Budget).count() == 0

    estimate = client.get("/api/budgets/estimate", params=_form(catalogue, areaToCover="1e308", layerThickness="150"))
    assert estimate.status_code == 422


def test_rejection_is_logged_once(client, catalogue, caplog):
    caplog.set_level(logging.INFO)
    client.post("/api/budgets/", data=_form(catalogue, areaToCover="4"))
    rejected = [r for r in caplog.records if "rejected" in r.getMessage()]
    assert len(rejected) == 1


def test_lookup_miss_is_logged_once(client, catalogue, caplog):
    caplog.set_level(logging.INFO)
    client.post("/api/budgets/", data=_form(catalogue, customerId="999"))
    misses = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(misses) == 1
    assert "999" in misses[0].getMessage()


def test_thickness_out_of_range_message(client, catalogue):
    resp = client.post("/api/budgets/", data=_form(catalogue, layerThickness="250"))
    assert resp.status_code == 422
    assert resp.json()["errors"]["layerThickness"] == ["Debe ingresar una capa de 200mm como máximo."]


# ============================================================
# 8-9. Lookup misses
# ============================================================

def test_unknown_customer_returns_404(client, db, catalogue):
    resp = client.post("/api/budgets/", data=_form(catalogue, customerId="999"))
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"
    assert resp.json()["detail"] == "El cliente no existe."
    assert db.query(models.Budget).count() == 0


def test_material_without_bag_returns_404(client, db, catalogue):
    resp = client.post("/api/budgets/", data=_form(catalogue, insulatingMaterialId="999"))
    assert resp.status_code == 404
    assert resp.json()["detail"] == "La bolsa de aislante no existe."
    assert db.query(models.Budget).count() == 0


# ============================================================
# 10-12. Read
# ============================================================

def test_list_and_get_budgets(client, catalogue):
    first = client.post("/api/budgets/", data=_form(catalogue)).json()
    second = client.post("/api/budgets/", data=_form(catalogue, areaToCover="18")).json()

    listed = client.get("/api/budgets/").json()
    assert [b["id"] for b in listed] == [second["id"], first["id"]]

    fetched = client.get(f"/api/budgets/{first['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["price"] == pytest.approx(90.0)


def test_get_missing_budget_404(client):
    resp = client.get("/api/budgets/12345")
    assert resp.status_code == 404


def test_estimate_does_not_persist(client, db, catalogue):
    resp = client.get("/api/budgets/estimate", params=_form(catalogue, layerThickness="150"))
    assert resp.status_code == 200
    data = resp.json()
    assert data["unit_price"] == pytest.approx(14.5)
    assert data["price"] == pytest.approx(130.5)
    assert data["totally_bags_quantity"] == pytest.approx(3.0)
    assert db.query(models.Budget).count() == 0


# ============================================================
# 13. Health
# ============================================================

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
