from client.adapters.token_storage import JsonFileTokenStorage, MemoryTokenStorage

__all__ = ["JsonFileTokenStorage", "MemoryTokenStorage"]
