# cli.py
import logging

import click
import uvicorn

from images_api.config.settings import get_settings

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Images API"""
    pass


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to HOST)")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to PORT)")
@click.option("--reload", is_flag=True, default=False, help="Restart on code changes")
def serve(host, port, reload):
    """Run the API server"""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    host = host or settings.host
    port = port or settings.port
    logger.info(f"Server is running on port {port}")
    uvicorn.run(
        "images_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    for key, value in settings.get_environment_dict().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    cli()
