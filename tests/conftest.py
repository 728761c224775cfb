"""Pytest configuration and fixtures for the storefront API."""

import pytest

from external.database import db, init_db
from main.setup import create_app

ADMIN_EMAIL = "admin@mebeles.lv"
USER_EMAIL = "user@mebeles.lv"
PASSWORD = "correct-horse-1"


@pytest.fixture
def make_app(tmp_path):
    """Build an app on an in-memory database; keyword overrides go to the config."""
    created = []

    def _make(**overrides):
        config = {
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "LOG_DIR": tmp_path / "logs",
            "LOG_LEVEL": "WARNING",
            "RATE_LIMIT_BACKEND": "memory",
            "MESSAGES_DIR": tmp_path / "messages",
            "SUPPORTED_LOCALES": ["lv", "en"],
            "S3_BUCKET_NAME": "test-bucket",
            "S3_REGION": "eu-north-1",
            "S3_ACCESS_KEY": "test",
            "S3_SECRET_KEY": "test",
            "CDN_DOMAIN": None,
        }
        config.update(overrides)
        app = create_app(config)
        with app.app_context():
            init_db()
        created.append(app)
        return app

    yield _make

    for app in created:
        with app.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


def _create_user(app, email, role):
    from app.users.models import User, UserRole

    with app.app_context():
        user = User(email=email, full_name=email.split("@")[0], role=UserRole(role))
        user.set_password(PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user.id


def _logged_in_client(app, email):
    client = app.test_client()
    response = client.post("/users/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture
def admin_user(app):
    return _create_user(app, ADMIN_EMAIL, "admin")


@pytest.fixture
def regular_user(app):
    return _create_user(app, USER_EMAIL, "user")


@pytest.fixture
def admin_client(app, admin_user):
    return _logged_in_client(app, ADMIN_EMAIL)


@pytest.fixture
def user_client(app, regular_user):
    return _logged_in_client(app, USER_EMAIL)


@pytest.fixture
def catalog(app):
    """Two categories and a small mixed catalog; returns ids keyed by slug."""
    from app.navigation.models import NavigationCategory, NavigationSubcategory
    from app.products.models import Product, ProductStatus

    with app.app_context():
        sofas = NavigationCategory(name="Dīvāni", slug="divani", order_index=1)
        tables = NavigationCategory(name="Galdi", slug="galdi", order_index=2)
        hidden = NavigationCategory(
            name="Arhīvs", slug="arhivs", order_index=3, is_active=False
        )
        db.session.add_all([sofas, tables, hidden])
        db.session.flush()

        corner = NavigationSubcategory(
            category_id=sofas.id, name="Stūra dīvāni", slug="stura-divani", order_index=1
        )
        db.session.add(corner)
        db.session.flush()

        rows = [
            dict(name="Alpha Sofa", slug="alpha-sofa", price=500, stock_quantity=3,
                 category_id=sofas.id, subcategory_id=corner.id, featured=True,
                 description="Soft corner sofa"),
            dict(name="Beta Sofa", slug="beta-sofa", price=300, sale_price=250,
                 stock_quantity=0, category_id=sofas.id),
            dict(name="Gamma Table", slug="gamma-table", price=120, stock_quantity=7,
                 category_id=tables.id, description="Oak table, 100% solid"),
            dict(name="Delta Table", slug="delta-table", price=80, stock_quantity=1,
                 category_id=tables.id, featured=True),
            dict(name="Epsilon Chair", slug="epsilon-chair", price=45, stock_quantity=0,
                 status=ProductStatus.INACTIVE),
            dict(name="Zeta Draft", slug="zeta-draft", price=999, stock_quantity=2,
                 status=ProductStatus.DRAFT),
        ]
        ids = {}
        for row in rows:
            product = Product(**row)
            db.session.add(product)
            db.session.flush()
            ids[product.slug] = product.id

        ids["divani"] = sofas.id
        ids["galdi"] = tables.id
        ids["arhivs"] = hidden.id
        ids["stura-divani"] = corner.id
        db.session.commit()
        return ids
