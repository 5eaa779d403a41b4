"""Application layer: ports and use cases of the Telegram sink."""
