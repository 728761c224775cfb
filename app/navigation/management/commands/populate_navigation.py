import click
from flask.cli import with_appcontext
from sqlalchemy import delete

from external.database import db
from app.navigation.models import NavigationCategory, NavigationSubcategory
from app.navigation.management.data import CATEGORIES, SUBCATEGORIES


@click.command("populate-navigation")
@click.option(
    "--force",
    is_flag=True,
    help="Force recreation of the navigation (will delete existing entries)",
)
@with_appcontext
def populate_navigation(force):
    """Populate the navigation tables with the standard furniture categories."""

    if force:
        click.echo("Deleting existing navigation...")
        db.session.execute(delete(NavigationSubcategory))
        db.session.execute(delete(NavigationCategory))
        db.session.commit()

    created = {}
    for data in CATEGORIES:
        if db.session.execute(
            db.select(NavigationCategory).filter_by(slug=data["slug"])
        ).first():
            click.echo(f"  Skipped existing: {data['name']}")
            continue
        category = NavigationCategory(url=f"/products?categories={data['slug']}", **data)
        db.session.add(category)
        db.session.flush()
        created[data["slug"]] = category.id
        click.echo(f"  Created: {data['name']}")

    for data in SUBCATEGORIES:
        data = dict(data)
        category_id = created.get(data.pop("category_slug"))
        if category_id:
            db.session.add(NavigationSubcategory(category_id=category_id, **data))
            click.echo(f"  Created: {data['name']}")

    try:
        db.session.commit()
        click.echo(f"Navigation ready: {len(created)} categories created.")
    except Exception as e:
        db.session.rollback()
        click.echo(f"Error creating navigation: {str(e)}")
        raise
