"""
E2E walkthroughs for business personas across the full API.

Business personas:
- new_trader: just registered, nothing uploaded
- halfway_llp: financials uploaded, KYC still open
- almost_ready_mill: all company documents, director KYC pending
- bank_ready_exporter: every section complete, requests funding
"""

import pytest
from fastapi.testclient import TestClient


def onboard(client: TestClient, owner_id: str, **overrides) -> str:
    payload = {
        "owner_id": owner_id,
        "legal_name": f"{owner_id} Enterprises",
        "entity_type": "LLP",
        "sector": "Trading",
        "city": "Indore",
        "state": "Madhya Pradesh",
    }
    payload.update(overrides)
    response = client.post("/v1/businesses", json=payload)
    assert response.status_code == 201
    return response.json()["id"]


def upload_many(client: TestClient, business_id: str, group_type: str, count: int) -> None:
    for i in range(count):
        response = client.post(
            f"/v1/businesses/{business_id}/documents",
            json={
                "group_type": group_type,
                "file_name": f"{group_type}_{i}.pdf",
                "file_url": f"https://files.example.com/{group_type}_{i}.pdf",
                "mime_type": "application/pdf",
                "file_size_bytes": 2048,
            },
        )
        assert response.status_code == 201


def completion(client: TestClient, business_id: str) -> dict:
    response = client.get(f"/v1/businesses/{business_id}/completion")
    assert response.status_code == 200
    return response.json()


@pytest.mark.integration
def test_new_trader_just_getting_started(client: TestClient):
    """
    new_trader: only basic information
    Expected: 10%, five next steps, funding blocked
    """
    business_id = onboard(client, "new_trader")

    data = completion(client, business_id)

    assert data["percent"] == 10
    assert data["status_message"] == "Just getting started"
    assert len(data["next_steps"]) == 5
    assert data["is_fundable"] is False


@pytest.mark.integration
def test_halfway_llp(client: TestClient):
    """
    halfway_llp: balance sheets complete, sanction letters in progress, a director without Aadhaar
    Expected: 10 + 20 + 10 = 40%, "Halfway there"
    """
    business_id = onboard(client, "halfway_llp")
    upload_many(client, business_id, "BS_PNL", 3)
    upload_many(client, business_id, "SANCTION", 1)
    client.post(f"/v1/businesses/{business_id}/directors", json={"name": "Meera Jain", "pan": "AAAPJ1111A"})

    data = completion(client, business_id)

    assert data["percent"] == 40
    assert data["status_message"] == "Halfway there"
    assert "Complete director KYC documents" in data["next_steps"]


@pytest.mark.integration
def test_almost_ready_mill(client: TestClient):
    """
    almost_ready_mill: company documents and description done, director KYC fields incomplete
    Expected: 10 + 20 + 20 + 10 = 60%, funding blocked at 60
    """
    business_id = onboard(
        client,
        "almost_ready_mill",
        brief_description="Spinning mill supplying cotton yarn to regional weavers and garment units.",
    )
    upload_many(client, business_id, "BS_PNL", 3)
    upload_many(client, business_id, "SANCTION", 3)
    client.post(f"/v1/businesses/{business_id}/directors", json={"name": "Suresh Patel"})

    data = completion(client, business_id)
    assert data["percent"] == 60
    assert data["status_message"] == "Almost ready"

    response = client.post("/v1/funding-utilities", json={"business_id": business_id, "type": "TERM_LOAN"})
    assert response.status_code == 400
    assert response.json()["current_completion"] == 60


@pytest.mark.integration
def test_bank_ready_exporter(client: TestClient):
    """
    bank_ready_exporter: every section complete
    Expected: 100%, "Bank-ready profile", funding request accepted
    """
    business_id = onboard(client, "bank_ready_exporter")
    response = client.post(
        f"/v1/businesses/{business_id}/directors",
        json={"name": "Farah Khan", "dob": "1975-09-30", "pan": "AAAPK2222B", "aadhaar_number": "987654321098"},
    )
    assert response.status_code == 201
    for group_type in ["BS_PNL", "SANCTION", "PROFILE", "KYC_DIRECTOR", "ITR_DIRECTOR"]:
        upload_many(client, business_id, group_type, 3)

    data = completion(client, business_id)
    assert data["percent"] == 100
    assert data["status_message"] == "Bank-ready profile"
    assert data["next_steps"] == ["Profile complete! You can now access funding options"]
    assert data["document_groups"]["complete"] == 5

    response = client.post(
        "/v1/funding-utilities",
        json={"business_id": business_id, "type": "ASSET_FINANCE", "asset_type": "CNC machine", "asset_cost": 1800000},
    )
    assert response.status_code == 201
    assert response.json()["status"] == "DRAFT"
