"""HTTP API."""

import pytest
from httpx import ASGITransport, AsyncClient

from estimator.api.main import create_app
from estimator.models import WallSurface
from estimator.settings import Settings
from estimator.storage.memory import InMemoryEstimateRepository

from conftest import area, marker, segment


@pytest.fixture()
def app(catalog, walls):
    return create_app(
        settings=Settings(), catalog=catalog, walls=walls, estimates=InMemoryEstimateRepository(),
    )


@pytest.mark.asyncio()
async def test_health(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio()
async def test_rules_and_catalog(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        rules = (await client.get("/api/rules")).json()
        fabrics = (await client.get("/api/catalog", params={"category": "fabric", "wall_height": 3.5})).json()
        everything = (await client.get("/api/catalog")).json()

    active = {r["category"]: r["id"] for r in rules if r["active"]}
    assert active["mounting_plate"] == "mounting_plate.by_unit"
    assert fabrics["options"] == []
    assert len(everything["options"]) == 6


@pytest.mark.asyncio()
async def test_stateless_estimate(app):
    body = {
        "length_m": 3.0,
        "height_m": 2.5,
        "elements": [
            segment("1", "profile", 4.3).model_dump(mode="json"),
            area("2", "fabric", 1.0).model_dump(mode="json"),
            marker("3", "light").model_dump(mode="json"),
            marker("4", "ghost").model_dump(mode="json"),
        ],
    }
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/api/estimate", json=body)

    assert response.status_code == 200
    data = response.json()
    quantities = {line["option_id"]: line["quantity"] for line in data["lines"]}
    assert quantities["profile"] == pytest.approx(6.0)
    assert quantities["fabric"] == pytest.approx(7.95)
    assert quantities["light"] == 1.0
    assert data["skipped_option_ids"] == ["ghost"]
    assert data["totals"]["total_cost"] == pytest.approx(sum(l["total_cost"] for l in data["lines"]))


@pytest.mark.asyncio()
async def test_gesture_replay(app):
    body = {
        "option_id": "profile",
        "down": {"x": 0, "y": 0},
        "moves": [{"x": 50, "y": 0}, {"x": 100, "y": 0}],
        "up": {"x": 100, "y": 0},
    }
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        drawn = (await client.post("/api/gestures", json=body)).json()
        tap = (await client.post("/api/gestures", json={**body, "moves": []})).json()
        unknown = await client.post("/api/gestures", json={**body, "option_id": "nope"})

    assert drawn["element"]["kind"] == "segment"
    assert drawn["element"]["length_m"] == pytest.approx(2.0)
    assert tap["element"] is None
    assert unknown.status_code == 404
    assert unknown.json()["error"] == "OptionNotFoundError"


@pytest.mark.asyncio()
async def test_wall_workflow(app, wall):
    canvas = {"elements": [
        segment("1", "profile", 1.0).model_dump(mode="json"),
        marker("2", "light").model_dump(mode="json"),
    ]}
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        saved = await client.put(f"/api/walls/{wall.id}/canvas", json=canvas)
        live = (await client.get(f"/api/walls/{wall.id}/estimate")).json()
        first = await client.put(f"/api/walls/{wall.id}/estimates", json={"notes": "draft"})
        second = await client.put(f"/api/walls/{wall.id}/estimates", json={"notes": "final"})
        rows = (await client.get(f"/api/walls/{wall.id}/estimates")).json()

    assert saved.status_code == 200
    assert len(saved.json()["canvas_data"]) == 2
    assert {line["option_id"] for line in live["lines"]} == {"profile", "light"}
    assert first.status_code == 200
    assert len(rows) == 2
    assert {r["notes"] for r in rows} == {"final"}
    assert {r["id"] for r in rows} == {r["id"] for r in second.json()["records"]}


@pytest.mark.asyncio()
async def test_dimensions_endpoint(app, wall):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        ok = await client.put(f"/api/walls/{wall.id}/dimensions", json={"length_m": 4.5, "height_m": 2.7})
        bad = await client.put(f"/api/walls/{wall.id}/dimensions", json={"length_m": 0, "height_m": 2.7})
        missing = await client.get("/api/walls/nope")

    assert ok.json()["length_m"] == 4.5
    assert ok.json()["area_m2"] == pytest.approx(4.5 * 2.7)
    assert bad.status_code == 400
    assert bad.json()["error"] == "DimensionValidationError"
    assert missing.status_code == 404


@pytest.mark.asyncio()
async def test_perimeter_endpoint(app, walls):
    walls.add_wall(WallSurface(id="fresh", canvas_data=[
        segment("1", "profile", 1.0, points=_points((0, 0), (253, 0), (253, 97))),
    ]))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        preview = (await client.post("/api/walls/fresh/perimeter", params={"apply": "false"})).json()
        applied = (await client.post("/api/walls/fresh/perimeter")).json()
        again = (await client.post("/api/walls/fresh/perimeter")).json()

    assert preview["applied"] is False
    assert preview["dimensions"] == {"length_m": 5.1, "height_m": 2.0}
    assert applied["applied"] is True
    assert applied["wall"]["length_m"] == 5.1
    assert again["applied"] is False


def _points(*coords):
    from estimator.models import Point

    return tuple(Point(x=x, y=y) for x, y in coords)


def _seeded_settings(**storage) -> Settings:
    return Settings(
        walls=[WallSurface(id="seed", name="Seeded wall", length_m=3.0, height_m=2.5)],
        catalog={"options": [{
            "id": "spot", "name": "Spot", "category": "light", "unit": "piece",
            "material_unit_price": 100, "labor_unit_price": 50,
        }]},
        **storage,
    )


@pytest.mark.asyncio()
async def test_configured_walls_are_served_without_injected_stores():
    app = create_app(settings=_seeded_settings())
    canvas = {"elements": [marker("1", "spot").model_dump(mode="json")]}
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        wall = await client.get("/api/walls/seed")
        await client.put("/api/walls/seed/canvas", json=canvas)
        estimate = (await client.get("/api/walls/seed/estimate")).json()

    assert wall.status_code == 200
    assert wall.json()["name"] == "Seeded wall"
    assert estimate["totals"]["total_cost"] == pytest.approx(150.0)


@pytest.mark.asyncio()
async def test_file_storage_seed_keeps_existing_walls(tmp_path):
    settings = _seeded_settings(storage={"backend": "file", "root": str(tmp_path)})
    first = create_app(settings=settings)
    async with AsyncClient(transport=ASGITransport(app=first), base_url="http://test") as client:
        await client.put("/api/walls/seed/dimensions", json={"length_m": 6.0, "height_m": 3.0})

    second = create_app(settings=settings)
    async with AsyncClient(transport=ASGITransport(app=second), base_url="http://test") as client:
        wall = (await client.get("/api/walls/seed")).json()

    assert wall["length_m"] == 6.0


@pytest.mark.asyncio()
async def test_saving_estimate_while_catalog_is_down_keeps_rows(catalog, walls, wall):
    from estimator.exceptions import CatalogError

    class OfflineCatalog:
        async def resolve_options(self, ids):
            raise CatalogError("catalog offline")

        async def list_options(self, category=None, wall_height=None, include_inactive=False):
            return []

    estimates = InMemoryEstimateRepository()
    online = create_app(settings=Settings(), catalog=catalog, walls=walls, estimates=estimates)
    offline = create_app(settings=Settings(), catalog=OfflineCatalog(), walls=walls, estimates=estimates)
    canvas = {"elements": [marker("1", "light").model_dump(mode="json")]}

    async with AsyncClient(transport=ASGITransport(app=online), base_url="http://test") as client:
        await client.put(f"/api/walls/{wall.id}/canvas", json=canvas)
        saved = (await client.put(f"/api/walls/{wall.id}/estimates", json={})).json()["records"]
    async with AsyncClient(transport=ASGITransport(app=offline), base_url="http://test") as client:
        refused = await client.put(f"/api/walls/{wall.id}/estimates", json={})
        rows = (await client.get(f"/api/walls/{wall.id}/estimates")).json()

    assert refused.status_code == 503
    assert refused.json()["error"] == "CatalogError"
    assert [r["id"] for r in rows] == [r["id"] for r in saved]
