"""Shopper load test scenarios.

A stateful SequentialTaskSet journey: register, log in, search the catalogue,
fill the cart, check out and read the order back. Steps execute in order and
each depends on the previous step succeeding. A second user class hammers the
same member's cart from many tasks to exercise per-member serialisation.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_quantity, registration_data, search_criterion
from loadtests.helpers.state import ShopperState


class ShopperJourney(SequentialTaskSet):
    """Register -> Login -> Search -> Add to cart (x2) -> Checkout -> View order."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        payload = registration_data()
        with self.client.post(
            "/api/register",
            json=payload,
            catch_response=True,
            name="POST /api/register",
        ) as resp:
            if resp.status_code == 201:
                self.state.email = payload["email"]
                self.state.password = payload["password"]
            else:
                resp.failure(f"Register failed: {resp.status_code}")
                self.interrupt()

    @task
    def login(self):
        with self.client.post(
            "/api/login",
            json={"email": self.state.email, "password": self.state.password},
            catch_response=True,
            name="POST /api/login",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Login failed: {resp.status_code}")
                self.interrupt()

    @task
    def search(self):
        criterion, term = search_criterion()
        with self.client.get(
            f"/api/books/{criterion}/{term}",
            catch_response=True,
            name=f"GET /api/books/{criterion}/[term]",
        ) as resp:
            if resp.status_code == 200:
                self.state.found_isbns = [book["isbn"] for book in resp.json()["books"]]
            else:
                resp.failure(f"Search failed: {resp.status_code}")

    def _add_found_book(self):
        if not self.state.found_isbns:
            return
        with self.client.post(
            "/api/cart",
            json={"isbn": random.choice(self.state.found_isbns), "qty": cart_quantity()},
            catch_response=True,
            name="POST /api/cart",
        ) as resp:
            if resp.status_code == 200:
                self.state.cart_lines += 1
            else:
                resp.failure(f"Add to cart failed: {resp.status_code}")

    @task
    def add_first_book(self):
        self._add_found_book()

    @task
    def add_second_book(self):
        self._add_found_book()

    @task
    def checkout(self):
        if not self.state.cart_lines:
            self.interrupt()
        with self.client.post(
            "/api/checkout",
            catch_response=True,
            name="POST /api/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order_id"])
                self.state.cart_lines = 0
            else:
                resp.failure(f"Checkout failed: {resp.status_code}")
                self.interrupt()

    @task
    def view_order(self):
        order_id = self.state.order_ids[-1]
        with self.client.get(
            f"/api/order/{order_id}",
            catch_response=True,
            name="GET /api/order/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View order failed: {resp.status_code}")
        self.interrupt()


class ShopperUser(HttpUser):
    """Simulates a shopper going from search to a placed order."""

    tasks = [ShopperJourney]
    wait_time = between(0.5, 2.0)


class CartContention(SequentialTaskSet):
    """Register once, then add the same book repeatedly and check out.

    With several of these users sharing nothing but the catalogue, cart merges
    and checkouts interleave across members while staying serial per member.
    """

    def on_start(self):
        self.state = ShopperState()
        payload = registration_data()
        self.client.post("/api/register", json=payload, name="POST /api/register")
        self.client.post(
            "/api/login",
            json={"email": payload["email"], "password": payload["password"]},
            name="POST /api/login",
        )
        resp = self.client.get("/api/books/subject/Fiction", name="GET /api/books/subject/[term]")
        if resp.status_code == 200:
            self.state.found_isbns = [book["isbn"] for book in resp.json()["books"]]

    @task
    def add_same_book(self):
        if not self.state.found_isbns:
            self.interrupt()
        for _ in range(5):
            self.client.post(
                "/api/cart",
                json={"isbn": self.state.found_isbns[0], "qty": 1},
                name="POST /api/cart",
            )

    @task
    def checkout(self):
        with self.client.post(
            "/api/checkout",
            catch_response=True,
            name="POST /api/checkout",
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code}")


class CartContentionUser(HttpUser):
    """Rapid repeated adds followed by checkout."""

    tasks = [CartContention]
    wait_time = between(0.1, 0.5)
