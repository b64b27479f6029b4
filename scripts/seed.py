#!/usr/bin/env python3
# =============================================================================
# scripts/seed.py - Demo Data Seeder
# =============================================================================
# Populates a Supabase project with reference and demo data:
# - Six auth users with profiles (admin, chef, driver, three clients)
# - One Nashik address per client
# - Ten recipes with macro facts
# - The biweekly menu template (weeks 1-2, Monday-Saturday)
# - One active subscription per client, starting today
#
# Usage:
#   python scripts/seed.py                 # wipe demo tables, then seed
#   python scripts/seed.py --skip-cleanup  # seed on top of existing rows
#
# Prerequisites:
#   - SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY and SUPABASE_ANON_KEY in the
#     environment (.env). The seeder only writes with the service_role key,
#     but the client factory loads the full API settings, which require the
#     anon key as well.
#   - Tables and triggers already migrated
#
# Deleting auth users is not attempted; rerunning against a project that
# already has the demo accounts logs a creation error per account and skips it.
# =============================================================================

import argparse
import calendar
import logging
import os
import sys
from datetime import date
from typing import Any

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv  # noqa: E402

load_dotenv()

from supabase import Client  # noqa: E402

from core.models.entities import (  # noqa: E402
    Address,
    MealSlot,
    MenuTemplate,
    Profile,
    Recipe,
    Subscription,
    SubscriptionStatus,
    UserRole,
)
from lib.delivery_calendar import delivery_today  # noqa: E402
from lib.supabase_client import SupabaseClient  # noqa: E402

logger = logging.getLogger("seed")

# Profile kept across cleanups (the platform's super admin, if any)
KEEP_PROFILE_ID = "00000000-0000-0000-0000-000000000000"

# Child tables first
CLEANUP_TABLES = [
    ("deliveries", "id", 0),
    ("pauses", "id", 0),
    ("subscriptions", "id", 0),
    ("addresses", "id", 0),
    ("profiles", "id", KEEP_PROFILE_ID),
]

DEMO_PASSWORD = "password"

DEMO_USERS = [
    {"email": "admin@nutrifit.com", "role": UserRole.ADMIN, "full_name": "Admin User"},
    {"email": "chef@nutrifit.com", "role": UserRole.CHEF, "full_name": "Chef User"},
    {"email": "driver@nutrifit.com", "role": UserRole.DRIVER, "full_name": "Driver User"},
    {"email": "client1@example.com", "role": UserRole.CLIENT, "full_name": "Aarav Sharma"},
    {"email": "client2@example.com", "role": UserRole.CLIENT, "full_name": "Diya Patel"},
    {"email": "client3@example.com", "role": UserRole.CLIENT, "full_name": "Rohan Mehta"},
]

# One per client, in client order
CLIENT_ADDRESSES = [
    {"line1": "123 Gangapur Road", "city": "Nashik", "pincode": "422013", "lat": 20.0084, "lng": 73.7639},
    {"line1": "456 College Road", "city": "Nashik", "pincode": "422005", "lat": 19.9975, "lng": 73.7898},
    {"line1": "789 Trimbak Road", "city": "Nashik", "pincode": "422002", "lat": 19.9949, "lng": 73.7534},
]

RECIPES = [
    Recipe(name="Grilled Chicken Salad", kcal=350, protein_g=40, carbs_g=10, fats_g=18),
    Recipe(name="Paneer Tikka Bowl", kcal=400, protein_g=25, carbs_g=20, fats_g=25),
    Recipe(name="Quinoa Pulao", kcal=320, protein_g=12, carbs_g=55, fats_g=8),
    Recipe(name="Egg Curry", kcal=450, protein_g=20, carbs_g=15, fats_g=35),
    Recipe(name="Tofu Stir Fry", kcal=380, protein_g=22, carbs_g=30, fats_g=18),
    Recipe(name="Fish Curry", kcal=420, protein_g=35, carbs_g=10, fats_g=28),
    Recipe(name="Dal Makhani", kcal=380, protein_g=15, carbs_g=45, fats_g=15),
    Recipe(name="Chicken Biryani", kcal=550, protein_g=30, carbs_g=60, fats_g=20),
    Recipe(name="Soya Chaap Masala", kcal=410, protein_g=28, carbs_g=25, fats_g=22),
    Recipe(name="Mushroom Matar", kcal=300, protein_g=10, carbs_g=35, fats_g=14),
]

# (week_no, dow) -> index into RECIPES. Sundays have no menu.
MENU_PLAN = {
    (1, 1): 0,  # Mon: Grilled Chicken Salad
    (1, 2): 1,  # Tue: Paneer Tikka Bowl
    (1, 3): 2,  # Wed: Quinoa Pulao
    (1, 4): 3,  # Thu: Egg Curry
    (1, 5): 4,  # Fri: Tofu Stir Fry
    (1, 6): 5,  # Sat: Fish Curry
    (2, 1): 6,  # Mon: Dal Makhani
    (2, 2): 7,  # Tue: Chicken Biryani
    (2, 3): 8,  # Wed: Soya Chaap Masala
    (2, 4): 9,  # Thu: Mushroom Matar
    (2, 5): 0,  # Fri: Grilled Chicken Salad
    (2, 6): 1,  # Sat: Paneer Tikka Bowl
}


# =============================================================================
# Helpers
# =============================================================================

def add_one_month(day: date) -> date:
    """Same day next month, clamped to the last day (Jan 31 -> Feb 28/29)."""
    year = day.year + (1 if day.month == 12 else 0)
    month = 1 if day.month == 12 else day.month + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


# =============================================================================
# Seed Steps
# =============================================================================

def clear_tables(client: Client) -> None:
    """Delete demo rows, children before parents."""
    for table, column, keep in CLEANUP_TABLES:
        client.table(table).delete().neq(column, keep).execute()
        logger.info(f"Cleared {table}")


def create_users(client: Client) -> list[dict[str, Any]]:
    """
    Create auth users and their profiles.

    Returns:
        Created profile rows. Users that fail are logged and skipped.
    """
    profiles: list[dict[str, Any]] = []

    for user in DEMO_USERS:
        try:
            auth_response = client.auth.admin.create_user({
                "email": user["email"],
                "password": DEMO_PASSWORD,
                "email_confirm": True,
            })
        except Exception as e:
            logger.error(f"Error creating user {user['email']}: {e}")
            continue

        profile = Profile(
            id=str(auth_response.user.id),
            role=user["role"],
            full_name=user["full_name"],
        )
        try:
            response = client.table("profiles").insert(profile.model_dump(mode="json")).execute()
        except Exception as e:
            logger.error(f"Error creating profile for {user['email']}: {e}")
            continue

        profiles.append(response.data[0])
        logger.info(f"Created user: {user['email']}")

    return profiles


def create_addresses(client: Client, client_profiles: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """One address per client profile, in order."""
    rows = [
        Address(user_id=profile["id"], **address).model_dump(mode="json", exclude_none=True)
        for profile, address in zip(client_profiles, CLIENT_ADDRESSES)
    ]
    if not rows:
        return []
    response = client.table("addresses").insert(rows).execute()
    logger.info(f"Created {len(rows)} addresses")
    return response.data or []


def create_recipes(client: Client) -> list[dict[str, Any]]:
    """Insert RECIPES and return the rows with their ids, in the same order."""
    response = client.table("recipes").insert([r.model_dump(mode="json") for r in RECIPES]).execute()
    logger.info(f"Created {len(response.data or [])} recipes")
    return response.data or []


def build_menu_templates(recipes: list[dict[str, Any]]) -> list[MenuTemplate]:
    return [
        MenuTemplate(
            week_no=week_no,
            dow=dow,
            recipe_id=recipes[recipe_index]["id"],
            meal_slot=MealSlot.LUNCH,
        )
        for (week_no, dow), recipe_index in sorted(MENU_PLAN.items())
    ]


def create_menu_templates(client: Client, recipes: list[dict[str, Any]]) -> None:
    templates = build_menu_templates(recipes)
    client.table("menu_templates").insert([t.model_dump(mode="json") for t in templates]).execute()
    logger.info(f"Created {len(templates)} menu templates")


def build_subscriptions(client_profiles: list[dict[str, Any]], start: date) -> list[Subscription]:
    return [
        Subscription(
            user_id=profile["id"],
            status=SubscriptionStatus.ACTIVE,
            start_date=start,
            next_billing_date=add_one_month(start),
        )
        for profile in client_profiles
    ]


def create_subscriptions(client: Client, client_profiles: list[dict[str, Any]], start: date) -> None:
    subscriptions = build_subscriptions(client_profiles, start)
    if not subscriptions:
        logger.warning("No client profiles, skipping subscriptions")
        return
    client.table("subscriptions").insert(
        [s.model_dump(mode="json", exclude_none=True) for s in subscriptions]
    ).execute()
    logger.info(f"Created {len(subscriptions)} subscriptions")


def seed(client: Client, cleanup: bool = True, today: date | None = None) -> None:
    """Run every seed step in order."""
    if cleanup:
        clear_tables(client)

    profiles = create_users(client)
    client_profiles = [p for p in profiles if p.get("role") == UserRole.CLIENT.value]

    create_addresses(client, client_profiles)
    recipes = create_recipes(client)
    create_menu_templates(client, recipes)
    create_subscriptions(client, client_profiles, today or delivery_today())


# =============================================================================
# CLI Entry Point
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the NutriFit Supabase project with demo data")
    parser.add_argument(
        "--skip-cleanup",
        action="store_true",
        help="Keep existing rows instead of clearing demo tables first",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger.info("Seeding database...")
    seed(SupabaseClient.get_service_client(), cleanup=not args.skip_cleanup)
    logger.info("Database seeding complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
