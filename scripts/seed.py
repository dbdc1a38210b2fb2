# scripts/seed.py
"""
Load demo customers, invoices and a sign-in user into the database.

Re-running the script replaces the previous demo data.
"""

import logging
from datetime import date

from dashboard.auth import hash_password
from dashboard.config import configure_logging
from dashboard.db.engine import get_engine, init_db
from dashboard.db.schema import customers, invoices, users

logger = logging.getLogger(__name__)

DEMO_USER = {
    "name": "User",
    "email": "user@nextmail.com",
    "password": "123456",
}

CUSTOMERS = [
    {"name": "Delba de Oliveira", "email": "delba@oliveira.com", "image_url": "/customers/delba-de-oliveira.png"},
    {"name": "Lee Robinson", "email": "lee@robinson.com", "image_url": "/customers/lee-robinson.png"},
    {"name": "Hector Simpson", "email": "hector@simpson.com", "image_url": "/customers/hector-simpson.png"},
    {"name": "Steven Tey", "email": "steven@tey.com", "image_url": "/customers/steven-tey.png"},
    {"name": "Steph Dietz", "email": "steph@dietz.com", "image_url": "/customers/steph-dietz.png"},
    {"name": "Michael Novotny", "email": "michael@novotny.com", "image_url": ""},
]

# (customer email, cents, status, date)
INVOICES = [
    ("delba@oliveira.com", 15795, "pending", date(2022, 12, 6)),
    ("lee@robinson.com", 20348, "pending", date(2022, 11, 14)),
    ("hector@simpson.com", 3040, "paid", date(2022, 10, 29)),
    ("steven@tey.com", 44800, "paid", date(2023, 9, 10)),
    ("steph@dietz.com", 34577, "pending", date(2023, 8, 5)),
    ("michael@novotny.com", 54246, "pending", date(2023, 7, 16)),
    ("delba@oliveira.com", 666, "pending", date(2023, 6, 27)),
    ("hector@simpson.com", 32545, "paid", date(2023, 6, 9)),
    ("lee@robinson.com", 1250, "paid", date(2023, 6, 17)),
    ("steven@tey.com", 8546, "paid", date(2023, 6, 7)),
]


def load_demo_data(engine) -> dict:
    with engine.begin() as conn:
        conn.execute(invoices.delete())
        conn.execute(customers.delete())
        conn.execute(users.delete().where(users.c.email == DEMO_USER["email"]))

        conn.execute(customers.insert(), CUSTOMERS)
        ids = {
            row.email: row.id
            for row in conn.execute(customers.select())
        }

        conn.execute(
            invoices.insert(),
            [
                {"customer_id": ids[email], "amount": amount, "status": status, "date": day}
                for email, amount, status, day in INVOICES
            ],
        )

        conn.execute(
            users.insert().values(
                name=DEMO_USER["name"],
                email=DEMO_USER["email"],
                password=hash_password(DEMO_USER["password"]),
            )
        )

    return {
        "n_customers": len(CUSTOMERS),
        "n_invoices": len(INVOICES),
        "n_users": 1,
    }


def main():
    configure_logging()
    engine = init_db(get_engine())
    stats = load_demo_data(engine)

    logger.info(f"Customers loaded:      {stats['n_customers']}")
    logger.info(f"Invoices loaded:       {stats['n_invoices']}")
    logger.info("Demo user:             %s", DEMO_USER["email"])


if __name__ == "__main__":
    main()
