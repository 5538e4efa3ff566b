from __future__ import annotations

import telebot

from application.services import (
    delete_client,
    get_balance,
    list_clients,
    register_client,
    transfer_money,
)
from domain.errors import BankError
from domain.repositories import ClientRepository


STORE_FAILURE = "The bank is unavailable right now, please try again later."


def _command_args(message) -> list[str]:
    """Split `/cmd a b c` into `["a", "b", "c"]`."""

    return message.text.split()[1:]


def create_telegram_bot(bot_token: str, client_repo: ClientRepository) -> telebot.TeleBot:
    """
    Configure and return a TeleBot instance wired to the application layer.

    This module contains only Telegram-specific concerns: parsing command
    arguments and mapping results to chat replies.
    """

    bot = telebot.TeleBot(bot_token)

    @bot.message_handler(commands=["start", "hello"])
    def handle_start(message):
        bot.send_message(
            message.chat.id,
            "Welcome to the bank bot!\n"
            "Use /register to open an account and /transfer to send money.\n"
            "Type /help to see available commands.",
        )

    @bot.message_handler(commands=["help"])
    def handle_help(message):
        bot.send_message(
            message.chat.id,
            "/register <name> <password> <money>              - open an account\n"
            "/balance <name> <password>                       - show your balance\n"
            "/transfer <name> <password> <recipient> <amount> - send money\n"
            "/delete <name> <password>                        - close your account\n"
            "/list                                            - list all clients\n",
        )

    @bot.message_handler(commands=["list"])
    def handle_list(message):
        result = list_clients(client_repo)
        if not result.clients:
            bot.send_message(message.chat.id, "No clients yet.")
            return

        lines = [f"{c.name}: {c.balance}" for c in result.clients]
        lines.append(f"Total balance: {result.total_balance}")
        bot.send_message(message.chat.id, "\n".join(lines))

    @bot.message_handler(commands=["register"])
    def handle_register(message):
        args = _command_args(message)
        if len(args) != 3:
            bot.send_message(message.chat.id, "Usage: /register <name> <password> <money>")
            return

        name, password, raw_money = args
        try:
            money = int(raw_money)
        except ValueError:
            bot.send_message(message.chat.id, "Money must be a number.")
            return

        try:
            result = register_client(name, password, money, client_repo)
        except BankError:
            bot.send_message(message.chat.id, STORE_FAILURE)
            return

        text = "Add client successful" if result.success else "Client not add"
        bot.send_message(message.chat.id, text)

    @bot.message_handler(commands=["balance"])
    def handle_balance(message):
        args = _command_args(message)
        if len(args) != 2:
            bot.send_message(message.chat.id, "Usage: /balance <name> <password>")
            return

        try:
            result = get_balance(args[0], args[1], client_repo)
        except BankError:
            bot.send_message(message.chat.id, STORE_FAILURE)
            return

        if not result.success:
            bot.send_message(message.chat.id, "Request rejected.")
            return
        bot.send_message(message.chat.id, f"Balance of {result.client.name}: {result.client.balance}")

    @bot.message_handler(commands=["transfer"])
    def handle_transfer(message):
        args = _command_args(message)
        if len(args) != 4:
            bot.send_message(
                message.chat.id, "Usage: /transfer <name> <password> <recipient> <amount>"
            )
            return

        sender_name, sender_password, recipient_name, raw_amount = args
        try:
            amount = int(raw_amount)
        except ValueError:
            bot.send_message(message.chat.id, "Amount must be a number.")
            return

        try:
            result = transfer_money(
                sender_name, sender_password, recipient_name, amount, client_repo
            )
        except BankError:
            bot.send_message(message.chat.id, STORE_FAILURE)
            return

        if result.success:
            bot.send_message(message.chat.id, "The transaction was successful")
        else:
            bot.send_message(message.chat.id, "transaction rejected")

    @bot.message_handler(commands=["delete"])
    def handle_delete(message):
        args = _command_args(message)
        if len(args) != 2:
            bot.send_message(message.chat.id, "Usage: /delete <name> <password>")
            return

        try:
            result = delete_client(args[0], client_repo, password=args[1])
        except BankError:
            bot.send_message(message.chat.id, STORE_FAILURE)
            return

        text = "Account closed." if result.success else "Request rejected."
        bot.send_message(message.chat.id, text)

    return bot
