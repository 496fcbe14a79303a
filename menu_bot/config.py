import os
from dataclasses import dataclass

TRANSPORTS = ("discord", "telegram")

TOKEN_ENV = {
    "discord": "DISCORD_BOT_TOKEN",
    "telegram": "TELEGRAM_BOT_TOKEN",
}

@dataclass(frozen=True)
class Settings:
    token: str
    transport: str = "discord"
    config_path: str = "config/config.json"
    roster_path: str = "config/users.csv"
    # Telegram only: concurrent event handlers and long-poll timeout (seconds)
    workers: int = 4
    poll_timeout: int = 60

    @property
    def token_env(self) -> str:
        return TOKEN_ENV[self.transport]

def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None

def load_settings() -> Settings:
    transport = os.getenv("MENU_BOT_TRANSPORT", "discord").strip().lower() or "discord"
    if transport not in TRANSPORTS:
        raise ValueError(
            f"MENU_BOT_TRANSPORT must be one of {', '.join(TRANSPORTS)}, got {transport!r}"
        )
    token = os.getenv(TOKEN_ENV[transport], "").strip()
    return Settings(
        token=token or "",
        transport=transport,
        config_path=os.getenv("MENU_BOT_CONFIG", "").strip() or Settings.config_path,
        roster_path=os.getenv("MENU_BOT_ROSTER", "").strip() or Settings.roster_path,
        workers=_int_env("MENU_BOT_WORKERS", Settings.workers),
        poll_timeout=_int_env("MENU_BOT_POLL_TIMEOUT", Settings.poll_timeout),
    )
