"""Tests for screen navigation, the session cart and single-flight actions."""
from __future__ import annotations

import uuid

import pytest

from duka.app.core.errors import ActionInProgress, InvalidTransition
from duka.app.services.session import AppState, Screen, SessionRegistry, sessions
from duka.tests.conftest import auth


@pytest.fixture()
def state() -> AppState:
    return AppState(user_id=uuid.uuid4())


# ── Navigation ───────────────────────────────────────────────────────────────


class TestNavigation:
    def test_starts_on_dashboard(self, state):
        assert state.screen is Screen.DASHBOARD

    @pytest.mark.parametrize(
        "target, fetch",
        [
            (Screen.SALES, ("products",)),
            (Screen.INVENTORY, ("products",)),
            (Screen.PURCHASE, ("suppliers", "products")),
            (Screen.FINANCE, ("financial_report",)),
        ],
    )
    def test_dashboard_destinations(self, state, target, fetch):
        assert state.navigate(target) == fetch
        assert state.screen is target

    def test_sales_to_cart_and_back(self, state):
        state.navigate(Screen.SALES)
        assert state.navigate(Screen.SALES_CART) == ("products", "customers")
        assert state.back() == ("products",)
        assert state.screen is Screen.SALES
        state.back()
        assert state.screen is Screen.DASHBOARD

    def test_invalid_transition(self, state):
        state.navigate(Screen.INVENTORY)
        with pytest.raises(InvalidTransition) as exc:
            state.navigate(Screen.FINANCE)
        assert exc.value.params == {"source": "inventory", "target": "finance"}
        assert state.screen is Screen.INVENTORY

    def test_cart_not_reachable_from_dashboard(self, state):
        with pytest.raises(InvalidTransition):
            state.navigate(Screen.SALES_CART)

    def test_no_back_from_dashboard(self, state):
        with pytest.raises(InvalidTransition):
            state.back()


# ── Single-flight ────────────────────────────────────────────────────────────


class TestSingleFlight:
    def test_second_action_rejected_while_first_runs(self, state):
        with state.action(Screen.SALES_CART):
            assert state.is_busy(Screen.SALES_CART)
            with pytest.raises(ActionInProgress):
                state.begin_action(Screen.SALES_CART)
        assert not state.is_busy(Screen.SALES_CART)

    def test_other_screens_unaffected(self, state):
        with state.action(Screen.SALES_CART):
            with state.action(Screen.INVENTORY):
                assert state.in_flight == {Screen.SALES_CART, Screen.INVENTORY}

    def test_released_after_failure(self, state):
        with pytest.raises(RuntimeError):
            with state.action(Screen.PURCHASE):
                raise RuntimeError("store down")
        assert not state.is_busy(Screen.PURCHASE)

    def test_busy_screen_rejects_request(self, client, operator, operator_token):
        sessions.get(operator.id).begin_action(Screen.INVENTORY)
        res = client.post(
            "/api/v1/products/",
            json={"name": "Soap", "price": "2500"},
            headers=auth(operator_token),
        )
        assert res.status_code == 409
        assert res.json()["key"] == "errors.action_in_progress"


# ── Registry ─────────────────────────────────────────────────────────────────


class TestRegistry:
    def test_sign_in_replaces_state(self):
        registry = SessionRegistry()
        user_id = uuid.uuid4()
        first = registry.sign_in(user_id)
        first.navigate(Screen.SALES)
        second = registry.sign_in(user_id)
        assert second is not first
        assert second.screen is Screen.DASHBOARD

    def test_sign_out_discards(self):
        registry = SessionRegistry()
        user_id = uuid.uuid4()
        registry.sign_in(user_id)
        registry.sign_out(user_id)
        assert user_id not in registry
        assert registry.get(user_id).screen is Screen.DASHBOARD


# ── Endpoints ────────────────────────────────────────────────────────────────


class TestSessionEndpoints:
    def test_navigate_and_back(self, client, operator_token):
        headers = auth(operator_token)
        assert client.get("/api/v1/session/", headers=headers).json()["screen"] == "dashboard"

        res = client.post("/api/v1/session/navigate", json={"screen": "purchase"}, headers=headers)
        assert res.status_code == 200
        assert res.json()["screen"] == "purchase"
        assert res.json()["fetch"] == ["suppliers", "products"]

        res = client.post("/api/v1/session/back", headers=headers)
        assert res.json()["screen"] == "dashboard"

    def test_invalid_navigation(self, client, operator_token):
        res = client.post(
            "/api/v1/session/navigate", json={"screen": "sales_cart"}, headers=auth(operator_token)
        )
        assert res.status_code == 409
        assert res.json() == {
            "detail": "Cannot go from dashboard to sales_cart",
            "key": "errors.invalid_transition",
        }

    def test_cart_lifecycle(self, client, operator_token, soap, matches):
        headers = auth(operator_token)
        client.post("/api/v1/session/cart/items", json={"product_id": str(soap.id)}, headers=headers)
        client.post(
            "/api/v1/session/cart/items",
            json={"product_id": str(matches.id), "quantity": 2},
            headers=headers,
        )
        cart = client.patch(
            f"/api/v1/session/cart/items/{soap.id}", json={"change": 2}, headers=headers
        ).json()
        assert [(line["name"], line["quantity"]) for line in cart["lines"]] == [
            ("Soap", 3),
            ("Matches", 2),
        ]
        assert float(cart["total"]) == 9500

        cart = client.patch(
            f"/api/v1/session/cart/items/{soap.id}", json={"change": -10}, headers=headers
        ).json()
        assert cart["lines"][0]["quantity"] == 1

        cart = client.delete(f"/api/v1/session/cart/items/{matches.id}", headers=headers).json()
        assert [line["name"] for line in cart["lines"]] == ["Soap"]

        cart = client.delete("/api/v1/session/cart", headers=headers).json()
        assert cart["lines"] == []

    def test_zero_quantity_add_rejected(self, client, operator_token, soap):
        res = client.post(
            "/api/v1/session/cart/items",
            json={"product_id": str(soap.id), "quantity": 0},
            headers=auth(operator_token),
        )
        assert res.status_code == 400
        assert res.json()["key"] == "validation.invalid_quantity"

    def test_cart_edits_wait_for_checkout(self, client, operator, operator_token, soap):
        sessions.get(operator.id).begin_action(Screen.SALES_CART)
        res = client.post(
            "/api/v1/session/cart/items",
            json={"product_id": str(soap.id)},
            headers=auth(operator_token),
        )
        assert res.status_code == 409
        assert res.json()["key"] == "errors.action_in_progress"
        assert sessions.get(operator.id).cart.lines == []
