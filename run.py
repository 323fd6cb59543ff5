"""Unified entry point for the mock backend and the console.

This script serves the Tour of Schools backend with Uvicorn and, unless
``CONSOLE_ENABLED`` is false, runs the interactive console against it
in the same process.  Leaving the console stops the backend.

Host, port and logging are configured through the environment variables
read by ``tour_of_schools_api.app.core.config``.  Set ``LOG_FILE`` to
keep log lines out of the console output.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from tour_of_schools import main as console_main
from tour_of_schools_api.app.core.config import settings
from tour_of_schools_api.app.main import app as api_app


async def run_console(server: Server) -> None:
    """Wait for the backend to accept connections, then run the console."""
    while not server.started:
        await asyncio.sleep(0.05)
    await asyncio.to_thread(console_main, f"http://{settings.host}:{settings.port}")


async def main() -> None:
    """Run the backend, and the console next to it when enabled."""
    config = Config(app=api_app, host=settings.host, port=settings.port, reload=False, log_level="info")
    server = Server(config)
    if not settings.console_enabled:
        await server.serve()
        return
    tasks = [asyncio.create_task(server.serve()), asyncio.create_task(run_console(server))]
    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    for task in done:
        if exception := task.exception():
            logging.exception("Exception in service", exc_info=exception)
    server.should_exit = True
    for task in pending:
        if task is not tasks[0]:
            task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
