import click
from flask.cli import with_appcontext

from app.translations.services import TranslationService


@click.command("translations-import")
@click.option("--dir", "messages_dir", default=None, help="Directory holding <locale>.json files")
@with_appcontext
def import_translations(messages_dir):
    """Replace all translations with the contents of the message files."""

    count = TranslationService.import_files(messages_dir=messages_dir)
    click.echo(f"Imported {count} translations.")
