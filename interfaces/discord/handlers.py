from __future__ import annotations

import asyncio
import logging

import discord
from discord.ext import commands

from application.services import (
    delete_client,
    get_balance,
    list_clients,
    register_client,
    transfer_money,
)
from domain.errors import BankError
from domain.repositories import ClientRepository


logger = logging.getLogger(__name__)

STORE_FAILURE = "The bank is unavailable right now, please try again later."


def create_discord_bot(client_repo: ClientRepository) -> commands.Bot:
    """
    Configure and return a Discord bot with behaviour analogous to
    the Telegram interface: register, balance, transfer, delete, list.

    Application services are synchronous; they run in a worker thread so
    the event loop is not blocked by database access.
    """

    intents = discord.Intents.default()
    intents.message_content = True

    # Disable the default help command so we can provide our own `!help`.
    bot = commands.Bot(command_prefix="!", intents=intents, help_command=None)

    async def call(func, *args, **kwargs):
        return await asyncio.to_thread(func, *args, **kwargs)

    @bot.event
    async def on_ready():
        logger.info("Discord bot logged in as %s (id=%s)", bot.user, bot.user.id)

    @bot.event
    async def on_command_error(ctx: commands.Context, error: commands.CommandError):
        if isinstance(error, (commands.MissingRequiredArgument, commands.BadArgument)):
            await ctx.send("Invalid arguments. Type !help to see available commands.")
            return
        original = getattr(error, "original", error)
        if isinstance(original, BankError):
            await ctx.send(STORE_FAILURE)
            return
        logger.error("Command %s failed", ctx.command, exc_info=original)

    @bot.command(name="start")
    async def start_cmd(ctx: commands.Context):
        await ctx.send(
            "Welcome to the bank bot (Discord)!\n"
            "Use !register to open an account and !transfer to send money.\n"
            "Type !help to see available commands."
        )

    @bot.command(name="help")
    async def help_cmd(ctx: commands.Context):
        await ctx.send(
            "!register <name> <password> <money>              - open an account\n"
            "!balance <name> <password>                       - show your balance\n"
            "!transfer <name> <password> <recipient> <amount> - send money\n"
            "!delete <name> <password>                        - close your account\n"
            "!list                                            - list all clients\n"
        )

    @bot.command(name="list")
    async def list_cmd(ctx: commands.Context):
        result = await call(list_clients, client_repo)
        if not result.clients:
            await ctx.send("No clients yet.")
            return

        lines = [f"{c.name}: {c.balance}" for c in result.clients]
        lines.append(f"Total balance: {result.total_balance}")
        await ctx.send("\n".join(lines))

    @bot.command(name="register")
    async def register_cmd(ctx: commands.Context, name: str, password: str, money: int):
        result = await call(register_client, name, password, money, client_repo)
        await ctx.send("Add client successful" if result.success else "Client not add")

    @bot.command(name="balance")
    async def balance_cmd(ctx: commands.Context, name: str, password: str):
        result = await call(get_balance, name, password, client_repo)
        if not result.success:
            await ctx.send("Request rejected.")
            return
        await ctx.send(f"Balance of {result.client.name}: {result.client.balance}")

    @bot.command(name="transfer")
    async def transfer_cmd(
        ctx: commands.Context,
        name: str,
        password: str,
        recipient: str,
        amount: int,
    ):
        result = await call(transfer_money, name, password, recipient, amount, client_repo)
        if result.success:
            await ctx.send("The transaction was successful")
        else:
            await ctx.send("transaction rejected")

    @bot.command(name="delete")
    async def delete_cmd(ctx: commands.Context, name: str, password: str):
        result = await call(delete_client, name, client_repo, password=password)
        await ctx.send("Account closed." if result.success else "Request rejected.")

    return bot
