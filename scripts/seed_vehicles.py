#!/usr/bin/env python3
"""
Seed the vehicle catalog with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Goes through the record store, so ids, timestamps and photo rules
  are the same as for vehicles created through the API
- Photos are tiny placeholder PNGs written to the uploads directory

Usage:
    python scripts/seed_vehicles.py
    VEHICLE_STORE_BACKEND=sql DATABASE_URL=sqlite:///dp_cars.db python scripts/seed_vehicles.py
"""

from __future__ import annotations

import base64
import random
import sys
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path
from typing import Iterator

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dp_cars.adapters.json_document_vehicle_repository import JsonDocumentVehicleRepository
from dp_cars.adapters.local_asset_store import LocalAssetStore
from dp_cars.adapters.sql_vehicle_repository import SqlVehicleRepository
from dp_cars.domain.vehicle import MIN_IMAGES_ON_CREATE, VehicleFields, VehicleStatus
from dp_cars.infra.config import SQL_BACKEND, uploads_dir, vehicle_store_backend, vehicles_document_path
from dp_cars.infra.db.session import get_session
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_VEHICLES = 24  # Four pages at the default page size
CURRENT_YEAR = 2024

# 1x1 transparent PNG
PLACEHOLDER_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


# ==============================================================================
# Catalog Data
# ==============================================================================

# type -> (models, base price min, base price max) in EUR
MODELS_BY_TYPE = {
    "auto": (
        ["Fiat Panda", "Volkswagen Golf", "Toyota Yaris", "Renault Clio", "BMW Serie 3", "Audi A4"],
        Decimal("9000"),
        Decimal("45000"),
    ),
    "moto": (
        ["Honda SH 125", "Yamaha MT-07", "Ducati Monster", "Piaggio Vespa", "Kawasaki Z650"],
        Decimal("2500"),
        Decimal("14000"),
    ),
}

TRANSMISSIONS = ["Manuale", "Automatico"]
FUEL_TYPES = ["Benzina", "Diesel", "Ibrido", "Elettrico", "GPL"]


# ==============================================================================
# Generation
# ==============================================================================


def calculate_price(vehicle_type: str, year: int) -> Decimal:
    """
    Price from the type's band, depreciated ~8% per year (max 60%),
    rounded to the nearest 100.
    """
    _, base_min, base_max = MODELS_BY_TYPE[vehicle_type]
    base_price = Decimal(random.randint(int(base_min), int(base_max)))

    years_old = max(0, CURRENT_YEAR - year)
    depreciation = min(Decimal("0.08") * years_old, Decimal("0.60"))
    price = base_price * (Decimal("1") - depreciation)

    price = (price / 100).quantize(Decimal("1")) * 100
    return max(price, Decimal("500"))


def generate_fields() -> VehicleFields:
    """Generate one random vehicle's attributes."""
    vehicle_type = random.choices(["auto", "moto"], weights=[3, 1], k=1)[0]
    models, _, _ = MODELS_BY_TYPE[vehicle_type]
    model = random.choice(models)

    year = random.choices(
        range(2015, CURRENT_YEAR + 1),
        weights=[1, 1, 2, 2, 3, 3, 4, 5, 6, 7],  # Favor newer years
        k=1,
    )[0]
    years_old = CURRENT_YEAR - year
    km = random.randint(0, max(1000, years_old * 15000))

    if vehicle_type == "moto":
        transmission = "Manuale"
        power = f"{random.randint(11, 110)} CV"
    else:
        transmission = random.choice(TRANSMISSIONS)
        power = f"{random.randint(70, 250)} CV"

    return VehicleFields(
        type=vehicle_type,
        title=f"{model} {year}",
        price=calculate_price(vehicle_type, year),
        year=year,
        km=km,
        fuel=random.choice(FUEL_TYPES),
        transmission=transmission,
        power=power,
        status=random.choices(list(VehicleStatus), weights=[8, 1, 1], k=1)[0],
    )


@contextmanager
def open_record_store() -> Iterator[VehicleRecordStore]:
    """Record store over the configured backing (same as the API)."""
    assets = LocalAssetStore(uploads_dir())
    if vehicle_store_backend() == SQL_BACKEND:
        with get_session() as session:
            yield VehicleRecordStore(SqlVehicleRepository(session), assets)
    else:
        yield VehicleRecordStore(JsonDocumentVehicleRepository(vehicles_document_path()), assets)


def seed_vehicles(num_vehicles: int = NUM_VEHICLES, seed: int = RANDOM_SEED) -> None:
    """
    Seed the catalog with random vehicles.

    Args:
        num_vehicles: Number of vehicles to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)

    print(f"🌱 Seeding catalog with {num_vehicles} vehicles (seed={seed})...")

    with open_record_store() as store:
        # Step 1: Clear existing data (idempotent), photos included
        print("🗑️  Clearing existing vehicles...")
        existing = store.list()
        for vehicle in existing:
            store.delete(vehicle.id)
        print(f"   Deleted {len(existing)} existing vehicles")

        # Step 2: Generate and insert new vehicles
        print(f"🚗 Generating {num_vehicles} vehicles...")
        created = []
        for _ in range(num_vehicles):
            fields = generate_fields()
            image_refs = [
                store.assets.store(f"{fields.type}-{index}.png", "image/png", PLACEHOLDER_PNG)
                for index in range(1, MIN_IMAGES_ON_CREATE + 1)
            ]
            created.append(store.create(fields, image_refs))

        print(f"✅ Successfully seeded {len(created)} vehicles!")

        print("\n📊 Sample vehicles:")
        for i, vehicle in enumerate(created[:5], 1):
            print(f"   {i}. [{vehicle.type}] {vehicle.title} - €{vehicle.price:,.2f} ({vehicle.fuel}, {vehicle.km} km)")

        if len(created) > 5:
            print(f"   ... and {len(created) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_vehicles()
    except Exception as e:
        print(f"❌ Error seeding catalog: {e}", file=sys.stderr)
        sys.exit(1)
