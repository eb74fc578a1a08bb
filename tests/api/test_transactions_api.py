"""
API tests for the transactions endpoint.

Tests cover:
- Newest-first merged list and per-address lists
- Filter validation
- Per-address failures
"""

from tests.conftest import make_tx

JANUARY = {"startDate": "2024-01-01", "endDate": "2024-01-31"}


class TestTransactionsAPI:
    """Tests for GET /transactions."""

    def test_merged_transactions(self, client, provider):
        """
        GIVEN two addresses with interleaved transactions
        WHEN requesting transactions
        THEN data is newest first and dataByAddress keeps provider order
        """
        provider.transactions["0xa"] = [make_tx("t3", 300), make_tx("t1", 100)]
        provider.transactions["0xb"] = [make_tx("t2", 200)]

        response = client.get("/transactions", params={"addresses": "0xa,0xb", **JANUARY})

        assert response.status_code == 200
        body = response.json()
        assert [t["hash"] for t in body["data"]] == ["t3", "t2", "t1"]
        assert [t["hash"] for t in body["dataByAddress"]["0xa"]] == ["t3", "t1"]
        assert [t["hash"] for t in body["dataByAddress"]["0xb"]] == ["t2"]

    def test_failed_address(self, client, provider):
        provider.transactions["0xa"] = [make_tx("t1", 100)]
        provider.failures["0xb"] = "Upstream API returned status 500"

        body = client.get("/transactions", params={"addresses": "0xa,0xb", **JANUARY}).json()

        assert list(body["dataByAddress"]) == ["0xa"]
        assert body["errors"][0]["address"] == "0xb"

    def test_filters_accepted(self, client):
        response = client.get(
            "/transactions",
            params={
                "addresses": "0xa",
                **JANUARY,
                "networks": "ethereum,base",
                "txTypes": "swap,deposit",
                "hideSpam": "true",
                "sort": "desc",
            },
        )

        assert response.status_code == 200

    def test_missing_dates(self, client):
        response = client.get("/transactions", params={"addresses": "0xa"})

        assert response.status_code == 400

    def test_inverted_range(self, client):
        response = client.get(
            "/transactions",
            params={"addresses": "0xa", "startDate": "2024-02-01", "endDate": "2024-01-01"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "startDate must not be after endDate"

    def test_invalid_tx_type(self, client):
        response = client.get("/transactions", params={"addresses": "0xa", **JANUARY, "txTypes": "TELEPORT"})

        assert response.status_code == 400

    def test_invalid_sort(self, client):
        response = client.get("/transactions", params={"addresses": "0xa", **JANUARY, "sort": "SIDEWAYS"})

        assert response.status_code == 400
