import json
import os
import sys

from fastapi.testclient import TestClient
from cashcheck.main import create_app
from cashcheck.core.config import Settings

"""Smoke script for the live rate fetch.

Boots the app with the external-http provider, triggers one fetch and runs a
check for a sample amount. Needs network access; a failed fetch shows up in the
printed status rather than being raised.
"""


def run(amount: str = "25.000.000"):
    settings = Settings(exchange_rate_provider="external-http", auto_rates=False)
    settings.init_post_load()
    client = TestClient(create_app(settings_override=settings))
    rates = client.post("/rates/refresh").json()
    check = client.post("/check", json={"amount": amount}).json()
    print(json.dumps({"rates": rates, "check": check}, indent=2))


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run(*sys.argv[1:2])
