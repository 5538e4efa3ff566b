import unittest
from types import SimpleNamespace
from unittest import mock

from application.services import register_client
from interfaces.telegram.handlers import create_telegram_bot
from test_application_services import InMemoryClientRepository


def _message(text):
    return SimpleNamespace(text=text, chat=SimpleNamespace(id=42))


class TelegramHandlersTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client_repo = InMemoryClientRepository()
        register_client("alice", "secret", 100, self.client_repo)
        register_client("bob", "hunter2", 0, self.client_repo)
        self.bot = create_telegram_bot("123456:TEST-token", self.client_repo)
        self.bot.send_message = mock.Mock()

    def run_command(self, text):
        command = text.split()[0][1:]
        for handler in self.bot.message_handlers:
            if command in (handler["filters"].get("commands") or []):
                handler["function"](_message(text))
                return self.bot.send_message.call_args[0][1]
        raise AssertionError(f"no handler for {command}")

    def test_transfer(self):
        self.assertEqual(
            self.run_command("/transfer alice secret bob 40"), "The transaction was successful"
        )
        self.assertEqual(self.client_repo.find_by_name("bob").balance, 40)

    def test_transfer_rejected(self):
        self.assertEqual(self.run_command("/transfer alice nope bob 40"), "transaction rejected")
        self.assertEqual(self.client_repo.find_by_name("alice").balance, 100)

    def test_transfer_usage(self):
        self.assertIn("Usage", self.run_command("/transfer alice secret"))
        self.assertEqual(self.run_command("/transfer alice secret bob lots"), "Amount must be a number.")

    def test_register_and_balance(self):
        self.assertEqual(self.run_command("/register carol pw 15"), "Add client successful")
        self.assertEqual(self.run_command("/register carol pw 15"), "Client not add")
        self.assertEqual(self.run_command("/balance carol pw"), "Balance of carol: 15")
        self.assertEqual(self.run_command("/balance carol bad"), "Request rejected.")

    def test_list(self):
        reply = self.run_command("/list")
        self.assertIn("alice: 100", reply)
        self.assertIn("Total balance: 100", reply)

    def test_delete(self):
        self.assertEqual(self.run_command("/delete bob wrong"), "Request rejected.")
        self.assertEqual(self.run_command("/delete bob hunter2"), "Account closed.")
        self.assertIsNone(self.client_repo.find_by_name("bob"))


if __name__ == "__main__":
    unittest.main()
