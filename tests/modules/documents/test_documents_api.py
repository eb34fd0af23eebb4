"""API tests for the Documents endpoints."""

from httpx import AsyncClient

DOCUMENTS = [
    {
        "client_ruc": "20100000001",
        "provider_ruc": "20500000005",
        "document_type": "01",
        "document_number": "F001-00000123",
        "issue_date": "2025-01-10",
        "due_date": "",
        "confirmation_date": "2025-01-14",
        "amount": "150.5",
        "currency": "PE",
    },
    {
        "client_ruc": "20100000001",
        "provider_ruc": "20500000005",
        "document_type": "01",
        "document_number": "F001-00000124",
        "amount": "49.5",
        "currency": "PE",
    },
]


async def _submit(client: AsyncClient, documents=None) -> dict:
    response = await client.post(
        "/api/v1/documents/batches", json={"documents": documents or DOCUMENTS}
    )
    assert response.status_code == 201
    return response.json()


class TestSubmitEndpoint:
    async def test_submit_batch(self, client: AsyncClient):
        body = await _submit(client)

        assert body["success"] is True
        assert body["message"] == "Saved 2 documents with correlative 1"
        data = body["data"]
        assert data["correlative"] == 1
        assert data["document_count"] == 2
        assert data["file_name"].startswith("RCP")
        assert data["file_name"].endswith("001.txt")
        assert data["file_name"] == f"RCP{data['business_date'].replace('-', '')}001.txt"

    async def test_second_submit_gets_next_correlative(self, client: AsyncClient):
        await _submit(client)
        body = await _submit(client)

        assert body["data"]["correlative"] == 2
        assert body["data"]["file_name"].endswith("002.txt")

    async def test_empty_batch_rejected(self, client: AsyncClient):
        response = await client.post("/api/v1/documents/batches", json={"documents": []})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "No documents were provided"
        assert body["errors"][0]["field"] == "documents"

    async def test_malformed_body(self, client: AsyncClient):
        response = await client.post("/api/v1/documents/batches", json={"documents": "nope"})

        assert response.status_code == 422
        assert response.json()["message"] == "Validation error"

    async def test_oversized_amount(self, client: AsyncClient):
        for amount in ("1e30", "1e15"):
            document = dict(DOCUMENTS[0], amount=amount)

            response = await client.post(
                "/api/v1/documents/batches", json={"documents": [document]}
            )

            assert response.status_code == 422
            assert response.json()["errors"][0]["field"] == "documents.0.amount"

    async def test_batch_total_too_large(self, client: AsyncClient):
        documents = [
            dict(DOCUMENTS[0], amount="60000000000000"),
            dict(DOCUMENTS[1], amount="40000000000000"),
        ]

        response = await client.post("/api/v1/documents/batches", json={"documents": documents})

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "documents"

    async def test_malformed_date(self, client: AsyncClient):
        document = dict(DOCUMENTS[0], issue_date="2025-13-45")

        response = await client.post("/api/v1/documents/batches", json={"documents": [document]})

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "documents.0.issue_date"

    async def test_client_cannot_choose_date(self, client: AsyncClient):
        """Extra fields such as a client date are ignored; the server date is used."""
        response = await client.post(
            "/api/v1/documents/batches",
            json={"documents": DOCUMENTS, "business_date": "1999-01-01"},
        )

        assert response.status_code == 201
        assert "19990101" not in response.json()["data"]["file_name"]


class TestHistoryEndpoints:
    async def test_list_documents(self, client: AsyncClient):
        await _submit(client)
        await _submit(client, DOCUMENTS[:1])

        response = await client.get("/api/v1/documents", params={"limit": 2})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 3
        assert data["limit"] == 2
        assert data["offset"] == 0
        assert len(data["items"]) == 2
        assert data["items"][0]["correlative"] == 2

    async def test_reversed_range(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/documents", params={"date_from": "2025-01-12", "date_to": "2025-01-10"}
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "date_from"

    async def test_limit_out_of_range(self, client: AsyncClient):
        response = await client.get("/api/v1/documents", params={"limit": 0})

        assert response.status_code == 422

    async def test_list_batches(self, client: AsyncClient):
        await _submit(client)
        await _submit(client)

        response = await client.get("/api/v1/documents/batches")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert [b["correlative"] for b in data["items"]] == [2, 1]
        assert data["items"][0]["total_amount"] == "200.0000"

    async def test_batch_detail(self, client: AsyncClient):
        batch_id = (await _submit(client))["data"]["batch_id"]

        response = await client.get(f"/api/v1/documents/batches/{batch_id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["document_count"] == 2
        assert [d["document_number"] for d in data["documents"]] == [
            "F001-00000123",
            "F001-00000124",
        ]
        assert data["documents"][0]["due_date"] is None

    async def test_batch_not_found(self, client: AsyncClient):
        response = await client.get("/api/v1/documents/batches/999")

        assert response.status_code == 404
        assert response.json()["success"] is False


class TestExportEndpoints:
    async def test_client_summary(self, client: AsyncClient):
        data = (await _submit(client))["data"]

        response = await client.get(
            f"/api/v1/documents/batches/{data['batch_id']}/export/client-summary"
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert (
            response.headers["content-disposition"]
            == f'attachment; filename="{data["file_name"]}"'
        )
        assert response.text == "20100000001|200.0000"

    async def test_fixed_width(self, client: AsyncClient):
        data = (await _submit(client))["data"]

        response = await client.get(
            f"/api/v1/documents/batches/{data['batch_id']}/export/fixed-width"
        )

        assert response.status_code == 200
        lines = response.text.split("\n")
        assert len(lines) == 2
        assert all(len(line) == 96 for line in lines)
        assert lines[0].startswith("201000000012050000000501F001-00000123")

    async def test_export_missing_batch(self, client: AsyncClient):
        response = await client.get("/api/v1/documents/batches/999/export/client-summary")

        assert response.status_code == 404


class TestHealth:
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
