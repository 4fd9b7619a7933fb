#!/usr/bin/env python3
"""
Basic usage example for the OnlyConfig module.
"""
from pydantic import BaseModel, ConfigDict, Field

from OnlyConfig import Config, Recovery, ValidationError
from OnlyConfig.utils import format_json


class Api(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str = "localhost"
    port: int = 8080


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    api: Api = Field(default_factory=Api)
    debug: bool = False


def main():
    """Main function."""
    config = Config(Settings, {"debug": True})
    print("Initial configuration:")
    print(format_json(config.get()))

    # Watch one key and the whole config
    config.subscribe(on_change=lambda port: print(f"\napi.port changed to {port}"), key="api.port")
    config.subscribe(on_change=lambda state: print(f"config is now {state}"))

    config.set(value="9000", key="api.port")

    # Invalid updates raise and leave the config untouched
    try:
        config.set(value={"api": {"port": "not a port"}})
    except ValidationError as e:
        print(f"\nRejected: {e.message}")

    # Keep an undeclared key by allowing unknown keys for this update
    config.set(value={"feature_flags": {"beta": True}}, on_error=lambda error: Recovery.ALLOW_UNKNOWN)

    print("\nFinal configuration:")
    print(format_json(config.get_all()))


if __name__ == "__main__":
    main()
