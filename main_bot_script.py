import logging
import sys

import discord
from discord import app_commands
from discord.ext import commands

import config
from amesh import amesh, amesh_slash

# Set up logging for the main bot file
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO),
                    format='%(asctime)s %(levelname)s %(message)s')


class RadarBot(commands.Bot):
    async def setup_hook(self):
        # Slash commands have to be pushed to Discord before they show up
        synced = await self.tree.sync()
        logging.info(f"Synced {len(synced)} application command(s)")


# Initialize the Discord bot
intents = discord.Intents.default()
intents.message_content = True  # Required for reading message content for commands
bot = RadarBot(command_prefix=config.COMMAND_PREFIX, intents=intents)

# Register commands
bot.add_command(amesh)
bot.tree.add_command(amesh_slash)


@bot.event
async def on_ready():
    """Event handler for when the bot successfully connects to Discord."""
    logging.info(f'{bot.user} has connected to Discord!')
    logging.info(config.STARTUP_MESSAGE)


@bot.event
async def on_command_error(ctx, error):
    # Errors are logged and the bot keeps serving other commands
    if isinstance(error, commands.CommandNotFound):
        return
    logging.error(f"Command {ctx.command} failed: {error!r}")


@bot.tree.error
async def on_app_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError):
    logging.error(f"Slash command {interaction.command and interaction.command.name} failed: {error!r}")


def main():
    if not config.DISCORD_TOKEN:
        logging.error("DISCORD_TOKEN is not set")
        sys.exit(1)
    bot.run(token=config.DISCORD_TOKEN, log_handler=None)


if __name__ == "__main__":
    main()
