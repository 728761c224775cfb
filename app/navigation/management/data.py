"""
Navigation data used by the ``populate-navigation`` command.

Subcategories refer to their parent through ``category_slug``.
"""

CATEGORIES = [
    {"name": "Dīvāni", "slug": "divani", "order_index": 1},
    {"name": "Galdi", "slug": "galdi", "order_index": 2},
    {"name": "Krēsli", "slug": "kresli", "order_index": 3},
    {"name": "Gultas", "slug": "gultas", "order_index": 4},
    {"name": "Skapji", "slug": "skapji", "order_index": 5},
]

SUBCATEGORIES = [
    {"category_slug": "divani", "name": "Stūra dīvāni", "slug": "stura-divani", "order_index": 1},
    {"category_slug": "divani", "name": "Dīvāngultas", "slug": "divangultas", "order_index": 2},
    {"category_slug": "galdi", "name": "Pusdienu galdi", "slug": "pusdienu-galdi", "order_index": 1},
    {"category_slug": "galdi", "name": "Kafijas galdiņi", "slug": "kafijas-galdini", "order_index": 2},
    {"category_slug": "kresli", "name": "Biroja krēsli", "slug": "biroja-kresli", "order_index": 1},
    {"category_slug": "gultas", "name": "Divguļamās gultas", "slug": "divgulamas-gultas", "order_index": 1},
    {"category_slug": "skapji", "name": "Drēbju skapji", "slug": "drebju-skapji", "order_index": 1},
]
