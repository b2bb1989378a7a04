"""
Built-in Bootstrap Dataset

Seeded into an empty remote store on first start (and used as-is in local
mode). Every call builds fresh ids, so two datasets never share entities.

The sample expenses mix EUR, MAD and USD on purpose: totals are raw sums.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from expense_tracker.models.entities import (
    MISCELLANEOUS_CATEGORY_NAME,
    UNASSIGNED_PARTNER_NAME,
    Category,
    Currency,
    Expense,
    Partner,
    PaymentStatus,
)


@dataclass
class SeedDataset:
    partners: list[Partner] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)


# (name, email, role)
SEED_PARTNERS = [
    ("Zakaria", "zak@example.com", "CEO"),
    ("Naoufal", "naoufal@example.com", "CTO"),
    ("Hamza", "hamza@example.com", "Lead Dev"),
    ("Laamimach", "laamimach@example.com", "Partner"),
    (UNASSIGNED_PARTNER_NAME, None, None),
]

# (name, default_is_fixed)
SEED_CATEGORIES = [
    ("Servers & Hosting", True),
    ("Software & Subscriptions", True),
    ("Domain Names", True),
    ("Rent", True),
    ("Utilities (Water, Electricity)", True),
    ("Internet (Fibre, etc.)", True),
    ("Office Supplies", None),
    ("Marketing & Advertising", None),
    ("Operational Costs", None),
    ("Salaries/Stipends", True),
    ("Travel", None),
    ("Legal & Professional Fees", None),
    (MISCELLANEOUS_CATEGORY_NAME, None),
]

# (date, category, provider, description, amount, currency, partner, is_fixed)
SEED_EXPENSES = [
    # One-time purchases
    ("2025-04-10", "Rent", "Landlord", "Loyer 3 mois (lkra)", "12000", Currency.EUR, "Zakaria", False),
    ("2025-04-11", "Office Supplies", "Retail Store", "TV Purchase", "7500", Currency.EUR, "Zakaria", False),
    ("2025-04-12", "Software & Subscriptions", "Telaja Services", "Telaja Service", "1500", Currency.EUR, "Naoufal", False),
    ("2025-04-13", "Software & Subscriptions", "Rwaq Solutions", "Rwaq Service", "1200", Currency.EUR, "Zakaria", False),
    # Recurring monthly charges
    ("2025-04-01", "Rent", "Landlord", "Loyer (Monthly Rent)", "4000", Currency.MAD, UNASSIGNED_PARTNER_NAME, True),
    ("2025-04-01", "Internet (Fibre, etc.)", "Telecom Provider", "Connexion Fibre (Monthly)", "500", Currency.MAD, UNASSIGNED_PARTNER_NAME, True),
    ("2025-04-01", "Utilities (Water, Electricity)", "Utility Company", "Eau et Electricité (Monthly)", "300", Currency.MAD, UNASSIGNED_PARTNER_NAME, True),
    ("2025-05-01", "Rent", "Landlord", "Loyer (Monthly Rent)", "4000", Currency.MAD, UNASSIGNED_PARTNER_NAME, True),
    ("2025-05-01", "Internet (Fibre, etc.)", "Telecom Provider", "Connexion Fibre (Monthly)", "500", Currency.MAD, UNASSIGNED_PARTNER_NAME, True),
    ("2025-05-01", "Utilities (Water, Electricity)", "Utility Company", "Eau et Electricité (Monthly)", "300", Currency.MAD, UNASSIGNED_PARTNER_NAME, True),
    # Servers, scripts and domains
    ("2025-04-05", "Servers & Hosting", "Server Provider Intl.", "Server Master (USD Plan)", "450", Currency.USD, "Naoufal", True),
    ("2025-05-05", "Servers & Hosting", "Server Provider Intl.", "Server Master (USD Plan)", "450", Currency.USD, "Naoufal", True),
    ("2025-04-15", "Servers & Hosting", "hetzner", "1 server (General)", "1500", Currency.USD, "Zakaria", True),
    ("2025-04-15", "Software & Subscriptions", "script gsuite", "GSuite Scripts/Service", "3000", Currency.USD, "Zakaria", True),
    ("2025-04-15", "Domain Names", "domains", "General Domains April", "300", Currency.USD, "Naoufal", True),
    ("2025-04-15", MISCELLANEOUS_CATEGORY_NAME, "binance", "Binance fees/service", "1170", Currency.USD, "Naoufal", False),
    ("2025-04-20", "Operational Costs", "Internal Funding", "General Contribution (Hamza)", "13000", Currency.USD, "Hamza", False),
    ("2025-05-15", "Domain Names", "domaines", "Domaines (Mai)", "200", Currency.USD, "Naoufal", True),
    ("2025-05-15", "Servers & Hosting", "scaleway (mai)", "Scaleway service (Mai)", "690", Currency.USD, "Zakaria", True),
]


def build_seed_dataset() -> SeedDataset:
    """Build the bootstrap partners, categories and expenses with fresh ids."""
    partners = [
        Partner(name=name, email=email, role=role)
        for name, email, role in SEED_PARTNERS
    ]
    categories = [
        Category(name=name, default_is_fixed=default_is_fixed)
        for name, default_is_fixed in SEED_CATEGORIES
    ]
    partner_ids = {p.name: p.id for p in partners}
    category_ids = {c.name: c.id for c in categories}

    expenses = []
    for (day, category, provider, description, amount,
         currency, partner, is_fixed) in SEED_EXPENSES:
        expenses.append(Expense(
            date=date.fromisoformat(day),
            category_id=category_ids[category],
            provider=provider,
            description=description,
            amount=Decimal(amount),
            currency=currency,
            paid_by_partner_id=partner_ids[partner],
            is_fixed_charge=is_fixed,
            payment_status=PaymentStatus.PAID,
            payment_method="Partner Personal" if partner == "Hamza" else None,
        ))

    return SeedDataset(partners=partners, categories=categories, expenses=expenses)
