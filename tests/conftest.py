from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


@pytest.fixture
def registry_payload() -> list[dict]:
    """Two services as served by the registry catalog endpoint."""
    return [
        {
            "id": "svc-mysql",
            "name": "mysql",
            "bindable": True,
            "plans": [
                {
                    "id": "plan-small",
                    "name": "small",
                    "metadata": {
                        "instanceType": "gs://charts/mysql",
                        "bindingType": "gs://charts/mysql-proxy",
                    },
                },
                {
                    "id": "plan-large",
                    "name": "large",
                    "metadata": {"instanceType": "gs://charts/mysql-large"},
                },
            ],
        },
        {
            "id": "svc-redis",
            "name": "redis",
            "plans": [
                {
                    "id": "plan-default",
                    "name": "default",
                    "metadata": {"instanceType": "gs://charts/redis"},
                }
            ],
        },
    ]
