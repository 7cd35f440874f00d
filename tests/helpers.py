"""HTTP helpers shared by the API tests."""


async def signup(client, email: str, name: str = "Test Customer") -> dict:
    """Register a customer and return their id and auth headers."""
    response = await client.post(
        "/auth/signup",
        json={
            "email": email,
            "password": "SecurePass123!",
            "name": name,
            "city": "Dhaka",
            "zipcode": "1207",
            "date_of_birth": "1990-05-17",
        },
    )
    assert response.status_code == 201, f"Signup failed: {response.text}"
    data = response.json()
    return {
        "customer_id": data["customer_id"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


async def open_account(
    client,
    who: dict,
    opening_amount_cents: int = 0,
    account_type: str = "checking",
) -> str:
    """Open an account for the customer and return its id."""
    response = await client.post(
        f"/customers/{who['customer_id']}/accounts",
        json={"account_type": account_type, "opening_amount_cents": opening_amount_cents},
        headers=who["headers"],
    )
    assert response.status_code == 201, f"Open account failed: {response.text}"
    return response.json()["account_id"]


async def transact(client, who: dict, account_id: str, transaction_type: str, amount_cents: int):
    """POST a deposit or withdrawal and return the raw response."""
    return await client.post(
        f"/customers/{who['customer_id']}/accounts/{account_id}/transactions",
        json={"transaction_type": transaction_type, "amount_cents": amount_cents},
        headers=who["headers"],
    )


async def balance_of(client, who: dict, account_id: str) -> int:
    response = await client.get(
        f"/customers/{who['customer_id']}/accounts/{account_id}",
        headers=who["headers"],
    )
    assert response.status_code == 200, response.text
    return response.json()["balance_cents"]
