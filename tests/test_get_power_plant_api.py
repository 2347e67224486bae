"""
Tests for GET /powerplants/{id} and GET /powerplants.

Covers:
- Lookup by id, including unknown and malformed ids
- Paging defaults, normalization and totals
- Owner search
"""

from datetime import date

import pytest

from .conftest import make_id, make_plant, seed


def numbered(n: int, owner: str = "Owner Name"):
    return [
        make_plant(owner, 10 + i % 100, date(2025, 1, 1), id=make_id(i))
        for i in range(n)
    ]


class TestGetById:
    """Test lookup by id."""

    def test_existing(self, client, repository):
        """Record is returned in camelCase"""
        plant = make_plant("Jane Doe", "12.5", date(2025, 3, 1), date(2026, 3, 1))
        seed(repository, plant)

        response = client.get(f"/powerplants/{plant.id}")

        assert response.status_code == 200
        assert response.json() == {
            "id": str(plant.id),
            "owner": "Jane Doe",
            "power": 12.5,
            "validFrom": "2025-03-01",
            "validTo": "2026-03-01",
        }

    def test_unknown_id(self, client):
        """Unknown id is 404 with an empty body"""
        response = client.get(f"/powerplants/{make_id(99)}")

        assert response.status_code == 404
        assert response.content == b""

    @pytest.mark.parametrize("plant_id", ["not-a-uuid", "12345"])
    def test_malformed_id(self, client, plant_id):
        """Ids that are not UUIDs match nothing"""
        response = client.get(f"/powerplants/{plant_id}")
        assert response.status_code == 404


class TestListPaging:
    """Test paging."""

    def test_empty(self, client):
        """Empty store has zero pages"""
        response = client.get("/powerplants")

        assert response.status_code == 200
        assert response.json() == {"powerPlants": [], "totalCount": 0, "totalPages": 0}

    def test_defaults(self, client, repository):
        """First page of ten, ordered by id"""
        plants = numbered(12)
        seed(repository, *reversed(plants))

        data = client.get("/powerplants").json()

        assert [p["id"] for p in data["powerPlants"]] == [str(p.id) for p in plants[:10]]
        assert data["totalCount"] == 12
        assert data["totalPages"] == 2

    def test_second_page(self, client, repository):
        """page=1&count=3 returns records 3..5"""
        plants = numbered(8)
        seed(repository, *plants)

        data = client.get("/powerplants", params={"page": 1, "count": 3}).json()

        assert [p["id"] for p in data["powerPlants"]] == [str(p.id) for p in plants[3:6]]
        assert data["totalCount"] == 8
        assert data["totalPages"] == 3

    def test_out_of_range_values_normalized(self, client, repository):
        """Negative page and zero count fall back to the defaults"""
        seed(repository, *numbered(6))

        data = client.get("/powerplants", params={"page": -5, "count": 0}).json()

        assert len(data["powerPlants"]) == 6
        assert data["totalCount"] == 6
        assert data["totalPages"] == 1

    def test_count_capped(self, client, repository):
        """Count above 200 is capped at 200"""
        seed(repository, *numbered(210))

        data = client.get("/powerplants", params={"count": 500}).json()

        assert len(data["powerPlants"]) == 200
        assert data["totalCount"] == 210
        assert data["totalPages"] == 2

    def test_page_beyond_end(self, client, repository):
        """Page past the last one is empty, totals still reported"""
        seed(repository, *numbered(4))

        data = client.get("/powerplants", params={"page": 3}).json()

        assert data["powerPlants"] == []
        assert data["totalCount"] == 4
        assert data["totalPages"] == 1

    def test_pages_cover_every_record_once(self, client, repository):
        """Walking the pages visits each record exactly once"""
        plants = numbered(23)
        seed(repository, *plants)

        seen = []
        for page in range(5):
            data = client.get("/powerplants", params={"page": page, "count": 5}).json()
            seen.extend(p["id"] for p in data["powerPlants"])

        assert seen == [str(p.id) for p in plants]

    @pytest.mark.parametrize(
        "params", [{"page": 10**18}, {"page": -(10**18)}, {"count": 2**31}]
    )
    def test_paging_outside_int32(self, client, repository, params):
        """Values wider than 32 bits are malformed, not server errors"""
        seed(repository, *numbered(1))

        response = client.get("/powerplants", params=params)

        assert response.status_code == 400
        assert response.json()["title"] == "Invalid request payload"

    def test_last_int32_page(self, client, repository):
        """Largest 32-bit page is simply past the end"""
        seed(repository, *numbered(1))

        data = client.get("/powerplants", params={"page": 2**31 - 1, "count": 200}).json()

        assert data["powerPlants"] == []
        assert data["totalCount"] == 1

    @pytest.mark.parametrize("params", [{"page": "first"}, {"count": "1.5"}])
    def test_non_integer_paging(self, client, params):
        """Non-integer page or count is a malformed request"""
        response = client.get("/powerplants", params=params)

        assert response.status_code == 400
        data = response.json()
        assert data["title"] == "Invalid request payload"
        assert "errors" not in data


class TestListOwnerSearch:
    """Test owner search."""

    @pytest.fixture
    def owners(self, repository):
        plants = [
            make_plant("Jane Doe", 10, date(2025, 1, 1), id=make_id(0)),
            make_plant("Bob Smith", 10, date(2025, 1, 1), id=make_id(1)),
            make_plant("Mary-Jane Roe", 10, date(2025, 1, 1), id=make_id(2)),
            make_plant("Janet Brown", 10, date(2025, 1, 1), id=make_id(3)),
        ]
        seed(repository, *plants)
        return plants

    @pytest.mark.parametrize("owner", ["Jane", "jane", "JANE"])
    def test_case_insensitive(self, client, owners, owner):
        """Substring match ignores case"""
        data = client.get("/powerplants", params={"owner": owner}).json()

        assert [p["owner"] for p in data["powerPlants"]] == [
            "Jane Doe",
            "Mary-Jane Roe",
            "Janet Brown",
        ]
        assert data["totalCount"] == 3

    def test_totals_count_filtered_set(self, client, owners):
        """Totals describe the filtered set, not the page"""
        data = client.get("/powerplants", params={"owner": "jane", "count": 2}).json()

        assert len(data["powerPlants"]) == 2
        assert data["totalCount"] == 3
        assert data["totalPages"] == 2

    @pytest.mark.parametrize("owner", ["", "   "])
    def test_blank_owner_lists_all(self, client, owners, owner):
        """Blank search text means no filter"""
        data = client.get("/powerplants", params={"owner": owner}).json()
        assert data["totalCount"] == 4

    def test_no_match(self, client, owners):
        """No matching owner gives an empty page"""
        data = client.get("/powerplants", params={"owner": "Zed"}).json()
        assert data == {"powerPlants": [], "totalCount": 0, "totalPages": 0}
