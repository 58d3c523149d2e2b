"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from pricewatch.core.config import Settings
from pricewatch.interfaces.http.app import create_app
from pricewatch.interfaces.http.dependencies import verify_cron_secret
from pricewatch.modules.price_tracker.errors import NotShopifyStoreError
from pricewatch.modules.price_tracker.extractors.registry import StrategyRegistry
from pricewatch.modules.price_tracker.notifier import PriceDropNotifier
from pricewatch.modules.price_tracker.result import ExtractionResult
from pricewatch.modules.price_tracker.service import PriceTrackerService
from pricewatch.modules.price_tracker.tests.fakes import (
    FakeExtractor,
    FakeItemStore,
    MockEmailService,
    make_item,
)

SECRET = "s3cret"
URL = "https://shop.example.com/products/linen-shirt"


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "environment": "test",
        "log_format": "text",
        "cron_secret": SECRET,
        "notification_email": "me@example.com",
    }
    values.update(overrides)
    return Settings(**values)


def _client(
    store: FakeItemStore | None = None,
    extractor: FakeExtractor | None = None,
    **settings: object,
) -> tuple[TestClient, FakeItemStore, FakeExtractor]:
    store = store if store is not None else FakeItemStore()
    extractor = extractor or FakeExtractor()
    app_settings = _settings(**settings)
    service = PriceTrackerService(
        store=store,
        registry=StrategyRegistry(default=extractor, custom={}),
        notifier=PriceDropNotifier(MockEmailService(), store),
        settings=app_settings,
    )
    return TestClient(create_app(app_settings, service=service)), store, extractor


def test_healthz() -> None:
    client, _, _ = _client()
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestItems:
    def test_list(self) -> None:
        client, _, _ = _client(FakeItemStore([make_item(1), make_item(2)]))

        response = client.get("/api/items")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [2, 1]
        assert response.json()[0]["original_price"] == 10000

    def test_add(self) -> None:
        product = ExtractionResult(
            handle="linen-shirt",
            store_domain="shop.example.com",
            title="Linen Shirt",
            image_url="",
            price=12900,
        )
        client, store, _ = _client(extractor=FakeExtractor(product=product))

        response = client.post("/api/items", json={"url": URL})

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "Linen Shirt"
        assert body["original_price"] == 12900
        assert body["current_price"] == 12900
        assert len(store.items) == 1

    def test_add_duplicate(self) -> None:
        client, _, _ = _client(FakeItemStore([make_item(1, url=URL)]))

        response = client.post("/api/items", json={"url": URL})

        assert response.status_code == 409
        assert response.json()["detail"] == "This product is already being monitored"

    @pytest.mark.parametrize(
        ("body", "detail"),
        [
            ({}, "URL is required"),
            ({"url": "   "}, "URL is required"),
            ({"url": "not a url"}, "Invalid URL format."),
            ({"url": "https://shop.example.com/about"}, "This store is not supported"),
        ],
    )
    def test_add_invalid(self, body: dict[str, str], detail: str) -> None:
        client, store, _ = _client()

        response = client.post("/api/items", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == detail
        assert store.items == {}

    def test_add_store_failure(self) -> None:
        extractor = FakeExtractor(product=NotShopifyStoreError("Product not found"))
        client, store, _ = _client(extractor=extractor)

        response = client.post("/api/items", json={"url": URL})

        assert response.status_code == 502
        assert response.json()["detail"] == "Product not found"
        assert store.items == {}

    def test_delete(self) -> None:
        client, store, _ = _client(FakeItemStore([make_item(1)]))

        response = client.delete("/api/items/1")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert store.items == {}

    def test_delete_missing(self) -> None:
        client, _, _ = _client()

        response = client.delete("/api/items/99")

        assert response.status_code == 404
        assert response.json()["detail"] == "Item not found"


class TestRefresh:
    def _client_with_item(
        self, **settings: object
    ) -> tuple[TestClient, FakeItemStore, FakeExtractor]:
        return _client(
            FakeItemStore([make_item(1, original_price=10000)]),
            FakeExtractor(prices={"item-1": 8000}),
            **settings,
        )

    def test_scheduled_requires_secret(self) -> None:
        client, store, extractor = self._client_with_item()

        assert client.get("/api/refresh").status_code == 401
        wrong = client.get("/api/refresh", headers={"Authorization": "Bearer nope"})
        assert wrong.status_code == 401

        assert extractor.price_calls == []
        assert store.items[1].current_price == 10000

    def test_scheduled_rejected_without_configured_secret(self) -> None:
        client, _, extractor = self._client_with_item(cron_secret=None)

        response = client.get("/api/refresh", headers={"Authorization": "Bearer None"})

        assert response.status_code == 401
        assert extractor.price_calls == []

    def test_scheduled_with_secret(self) -> None:
        client, store, _ = self._client_with_item()

        response = client.get("/api/refresh", headers={"Authorization": f"Bearer {SECRET}"})

        assert response.status_code == 200
        body = response.json()
        assert body["drops"] == 1
        assert body["notified"] is True
        assert body["results"] == [
            {"item_id": 1, "success": True, "price": 8000, "error": None, "error_code": None}
        ]
        assert body["items"][0]["current_price"] == 8000
        assert store.items[1].notified_price == 8000

    def test_manual_refresh_reports_failures(self) -> None:
        client, _, _ = _client(
            FakeItemStore([make_item(1)]),
            FakeExtractor(prices={"item-1": NotShopifyStoreError("Product not found")}),
        )

        response = client.post("/api/refresh")

        assert response.status_code == 200
        result = response.json()["results"][0]
        assert result["success"] is False
        assert result["error"] == "Product not found"
        assert result["error_code"] == "NOT_SHOPIFY_STORE"

    def test_storage_failure_is_500(self) -> None:
        class BrokenStore(FakeItemStore):
            async def list_items(self):  # type: ignore[no-untyped-def]
                raise OSError("database is locked")

        client, _, _ = _client(BrokenStore())

        response = client.post("/api/refresh")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to refresh prices"


class TestNotificationEmail:
    def test_get_falls_back_to_settings(self) -> None:
        client, _, _ = _client()
        assert client.get("/api/settings/notification-email").json() == {
            "email": "me@example.com"
        }

    def test_put(self) -> None:
        client, store, _ = _client()

        response = client.put(
            "/api/settings/notification-email", json={"email": " new@example.com "}
        )

        assert response.status_code == 200
        assert response.json() == {"email": "new@example.com"}
        assert store.settings["notification_email"] == "new@example.com"

    def test_put_invalid(self) -> None:
        client, _, _ = _client()
        response = client.put("/api/settings/notification-email", json={"email": "nope"})
        assert response.status_code == 400


class TestVerifyCronSecret:
    def test_accepts_bearer_token(self) -> None:
        verify_cron_secret(f"Bearer {SECRET}", _settings())

    @pytest.mark.parametrize("header", [None, "", SECRET, f"Basic {SECRET}", "Bearer other"])
    def test_rejects(self, header: str | None) -> None:
        with pytest.raises(HTTPException) as exc_info:
            verify_cron_secret(header, _settings())
        assert exc_info.value.status_code == 401
