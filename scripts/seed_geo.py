# scripts/seed_geo.py
# Loads the Bangladesh division/district lookup tables. Safe to re-run.
import asyncio
import logging

from pymongo import UpdateOne

from redsaver.core.config import Settings, validate_runtime_config
from redsaver.core.db import connect
from redsaver.main import configure_logging

logger = logging.getLogger("seed_geo")

DIVISIONS = {
    "1": ("Chattogram", [
        "Comilla", "Feni", "Brahmanbaria", "Rangamati", "Noakhali", "Chandpur",
        "Lakshmipur", "Chattogram", "Coxsbazar", "Khagrachhari", "Bandarban",
    ]),
    "2": ("Rajshahi", [
        "Sirajganj", "Pabna", "Bogura", "Rajshahi", "Natore", "Joypurhat",
        "Chapainawabganj", "Naogaon",
    ]),
    "3": ("Khulna", [
        "Jashore", "Satkhira", "Meherpur", "Narail", "Chuadanga", "Kushtia",
        "Magura", "Khulna", "Bagerhat", "Jhenaidah",
    ]),
    "4": ("Barisal", ["Jhalakathi", "Patuakhali", "Pirojpur", "Barisal", "Bhola", "Barguna"]),
    "5": ("Sylhet", ["Sylhet", "Moulvibazar", "Habiganj", "Sunamganj"]),
    "6": ("Dhaka", [
        "Narsingdi", "Gazipur", "Shariatpur", "Narayanganj", "Tangail", "Kishoreganj",
        "Manikganj", "Dhaka", "Munshiganj", "Rajbari", "Madaripur", "Gopalganj", "Faridpur",
    ]),
    "7": ("Rangpur", [
        "Panchagarh", "Dinajpur", "Lalmonirhat", "Nilphamari", "Gaibandha",
        "Thakurgaon", "Rangpur", "Kurigram",
    ]),
    "8": ("Mymensingh", ["Sherpur", "Mymensingh", "Jamalpur", "Netrokona"]),
}


def build_rows():
    divisions, districts = [], []
    seq = 1
    for division_id, (name, district_names) in DIVISIONS.items():
        divisions.append({"_id": division_id, "name": name})
        for district in district_names:
            districts.append({"_id": str(seq), "division_id": division_id, "name": district})
            seq += 1
    return divisions, districts


def _upserts(rows):
    return [UpdateOne({"_id": r["_id"]}, {"$set": {k: v for k, v in r.items() if k != "_id"}}, upsert=True) for r in rows]


async def main():
    settings = Settings()
    configure_logging(settings.log_level)
    validate_runtime_config(settings)
    client, store = await connect(settings)
    try:
        divisions, districts = build_rows()
        await store.divisions.bulk_write(_upserts(divisions))
        await store.districts.bulk_write(_upserts(districts))
        logger.info("Seeded %d divisions, %d districts", len(divisions), len(districts))
    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(main())
