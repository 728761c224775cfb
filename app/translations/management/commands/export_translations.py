import click
from flask.cli import with_appcontext

from app.translations.services import TranslationService


@click.command("translations-export")
@click.option("--dir", "messages_dir", default=None, help="Directory to write <locale>.json files to")
@with_appcontext
def export_translations(messages_dir):
    """Write every supported locale's messages to JSON files."""

    for path in TranslationService.export_files(messages_dir=messages_dir):
        click.echo(f"Wrote {path}")
