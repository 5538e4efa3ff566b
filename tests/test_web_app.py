import sqlite3
import unittest

from fastapi.testclient import TestClient

from domain.models import Client
from infrastructure.db.client_repository_sqlite import SqliteClientRepository
from interfaces.web.app import create_app


class WebAppTests(unittest.TestCase):
    def setUp(self) -> None:
        # The app calls the repository from worker threads.
        self.repo = SqliteClientRepository(sqlite3.connect(":memory:", check_same_thread=False))
        self.repo.ensure_schema()
        self.repo.create(Client(name="alice", password="secret", balance=100))
        self.repo.create(Client(name="bob", password="hunter2", balance=0))
        self.client = TestClient(create_app(self.repo))

    def tearDown(self) -> None:
        self.client.close()
        self.repo.close()

    def transfer(self, **overrides):
        data = {"senderName": "alice", "senderPass": "secret", "count": "40", "nameTo": "bob"}
        data.update(overrides)
        return self.client.post("/transaction", data=data)

    def test_health(self):
        r = self.client.get("/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"status": "ok"})

    def test_form_pages(self):
        r = self.client.get("/transaction")
        self.assertEqual(r.status_code, 200)
        self.assertIn('name="senderName"', r.text)
        r = self.client.get("/registration")
        self.assertEqual(r.status_code, 200)
        self.assertIn('name="money"', r.text)

    def test_successful_transfer(self):
        r = self.transfer()
        self.assertEqual(r.status_code, 200)
        self.assertIn("The transaction was successful", r.text)
        self.assertEqual(self.repo.find_by_name("alice").balance, 60)
        self.assertEqual(self.repo.find_by_name("bob").balance, 40)

    def test_rejected_transfer_shows_generic_message(self):
        for overrides in ({"senderPass": "wrong"}, {"count": "1000"}, {"nameTo": "nobody"}, {"count": "x"}):
            r = self.transfer(**overrides)
            self.assertEqual(r.status_code, 200)
            self.assertIn("transaction rejected", r.text)
        self.assertEqual(self.repo.find_by_name("alice").balance, 100)

    def test_registration(self):
        r = self.client.post("/registration", data={"name": "carol", "password": "pw", "money": "15"})
        self.assertIn("Add client successful", r.text)
        self.assertEqual(self.repo.find_by_name("carol").balance, 15)

        r = self.client.post("/registration", data={"name": "carol", "password": "pw", "money": "15"})
        self.assertIn("Client not add", r.text)

    def test_registration_with_out_of_range_money(self):
        r = self.client.post(
            "/registration", data={"name": "big", "password": "pw", "money": str(10**20)}
        )
        self.assertEqual(r.status_code, 200)
        self.assertIn("Client not add", r.text)
        self.assertIsNone(self.repo.find_by_name("big"))

    def test_client_list_hides_passwords(self):
        r = self.client.get("/clients")
        self.assertEqual(r.status_code, 200)
        self.assertIn("alice", r.text)
        self.assertIn("Total balance: 100", r.text)
        self.assertNotIn("secret", r.text)

    def test_store_failure_is_a_server_error(self):
        self.repo.drop_schema()
        r = self.transfer()
        self.assertEqual(r.status_code, 500)
        self.assertIn("transaction rejected", r.text)


if __name__ == "__main__":
    unittest.main()
