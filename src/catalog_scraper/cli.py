"""Click CLI interface for the catalog scraper."""

import json
import logging
import sys

import click

from . import SUPPORTED_BACKENDS, __version__
from .backends import get_backend
from .catalog import Catalog, ObjectType, QueryFamily
from .catalog.templates import registered_types
from .config import ScraperConfig
from .exceptions import (
    BackendNotAvailableError,
    CatalogScraperError,
    ConfigurationError,
    ConnectionError,
)
from .importer import CatalogImporter

OBJECT_TYPE_CHOICES = [object_type.value for object_type in ObjectType] + ["all"]


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def connection_options(func):
    """Shared connection options."""
    options = [
        click.option("--db-type", "-t", type=click.Choice(SUPPORTED_BACKENDS, case_sensitive=False),
                     default="postgresql", help="Database type"),
        click.option("-h", "--host", envvar="DB_HOST", help="Database server hostname"),
        click.option("-P", "--port", type=int, envvar="DB_PORT", help="Database server port"),
        click.option("-d", "--database", envvar="DB_NAME", help="Database name"),
        click.option("-u", "--username", envvar="DB_USER", help="Database username"),
        click.option("-p", "--password", envvar="DB_PASSWORD", help="Database password"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
def cli():
    """Catalog Scraper - Read PostgreSQL system catalogs as attribute maps."""
    pass


@cli.command()
@connection_options
@click.option("-o", "--output", type=click.Path(dir_okay=False),
              help="Write JSON to this file instead of stdout")
@click.option("--schemas", multiple=True, help="Include only specific schemas")
@click.option("--exclude-schemas", multiple=True, help="Exclude specific schemas")
@click.option("--object-types", multiple=True,
              type=click.Choice(OBJECT_TYPE_CHOICES, case_sensitive=False),
              help="Object types to read (default: all)")
@click.option("--system-objects", is_flag=True, help="Include objects created with the cluster")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def scrape(
    db_type: str,
    host: str | None,
    port: int | None,
    database: str | None,
    username: str | None,
    password: str | None,
    output: str | None,
    schemas: tuple[str, ...],
    exclude_schemas: tuple[str, ...],
    object_types: tuple[str, ...],
    system_objects: bool,
    verbose: int,
) -> None:
    """Read the catalog in import order and write attribute maps as JSON."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        config = ScraperConfig(
            db_type=db_type.lower(),
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            output=output,
            include_schemas=list(schemas),
            exclude_schemas=list(exclude_schemas) if exclude_schemas else [],
            object_types=[t.lower() for t in object_types] if object_types else ["all"],
            include_system_objects=system_objects,
            verbosity=verbose,
        )
        config.validate()

        ConnectionClass = get_backend(config.db_type)

        with ConnectionClass(config) as conn:
            importer = CatalogImporter(Catalog(conn), config)
            batches = importer.run()

        document = [
            {
                "step": str(batch.step),
                "object_type": batch.object_type.value,
                "objects": batch.objects,
            }
            for batch in batches
        ]
        text = json.dumps(document, indent=2)

        if config.output:
            config.output.write_text(text + "\n", encoding="utf-8")
            total = sum(len(batch.objects) for batch in batches)
            click.echo(f"Wrote {total} objects to {config.output}", err=True)
        else:
            click.echo(text)

    except BackendNotAvailableError as e:
        click.echo(f"Backend not available: {e}", err=True)
        sys.exit(1)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except ConnectionError as e:
        click.echo(f"Connection error: {e}", err=True)
        sys.exit(1)
    except CatalogScraperError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


@cli.command()
@connection_options
@click.option("--schema", default="", help="Count only objects in this schema")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def count(
    db_type: str,
    host: str | None,
    port: int | None,
    database: str | None,
    username: str | None,
    password: str | None,
    schema: str,
    verbose: int,
) -> None:
    """Print the number of objects of every supported type."""
    setup_logging(verbose)

    try:
        config = ScraperConfig(
            db_type=db_type.lower(),
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
        )
        config.validate()

        ConnectionClass = get_backend(config.db_type)
        supported = registered_types(QueryFamily.LIST)

        with ConnectionClass(config) as conn:
            catalog = Catalog(conn)
            for object_type in ObjectType:
                if object_type not in supported:
                    continue
                click.echo(f"{object_type.value:<12} {catalog.get_object_count(object_type, schema)}")

    except BackendNotAvailableError as e:
        click.echo(f"Backend not available: {e}", err=True)
        sys.exit(1)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except CatalogScraperError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command("test-connection")
@connection_options
def test_connection(
    db_type: str,
    host: str | None,
    port: int | None,
    database: str | None,
    username: str | None,
    password: str | None,
) -> None:
    """Test database connection."""
    try:
        config = ScraperConfig(
            db_type=db_type.lower(),
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
        )
        config.validate()

        ConnectionClass = get_backend(config.db_type)

        click.echo(f"Connecting to {db_type} database...")
        with ConnectionClass(config) as conn:
            version = conn.get_version() if hasattr(conn, "get_version") else "Unknown"
            click.echo("Connection successful!")
            click.echo(f"\nServer version:\n{version}")

    except BackendNotAvailableError as e:
        click.echo(f"Backend not available: {e}", err=True)
        sys.exit(1)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except ConnectionError as e:
        click.echo(f"Connection failed: {e}", err=True)
        sys.exit(1)
    except CatalogScraperError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
