import argparse
import asyncio
import os

from app.core.logging import setup_logging
from client.adapters.token_storage import JsonFileTokenStorage
from client.app import CatalogApp
from client.gateway import CatalogApiClient
from client.views.tree import to_html


async def _run(base_url: str, token_file: str, view: str) -> str:
    async with CatalogApiClient(base_url, JsonFileTokenStorage(token_file)) as api:
        app = CatalogApp(api)
        await app.start()
        await app.navigate(view)
        return to_html(app.page.tree)


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a catalog view as HTML.")
    parser.add_argument("--base-url", default=os.getenv("CATALOG_API_URL", "http://localhost:3000"))
    parser.add_argument("--token-file", default=os.path.expanduser("~/.documentary-catalog/tokens.json"))
    parser.add_argument("--view", default="home")
    args = parser.parse_args()
    setup_logging(os.getenv("LOG_LEVEL", "WARNING"))
    print(asyncio.run(_run(args.base_url, args.token_file, args.view)))


if __name__ == "__main__":
    main()
