# populate_db.py

import json
import os

import requests

# Catalog endpoint of the running API
API_URL = os.getenv("HEIRS_API_URL", "http://127.0.0.1:8000/heirs/")

heirs_data = [
    { "name_en": "Spouse", "name_ar": "زوج / زوجة", "description": "1/8 with children, 1/4 without" },
    { "name_en": "Father", "name_ar": "أب", "description": "1/6 beside sons, otherwise also residuary" },
    { "name_en": "Mother", "name_ar": "أم", "description": "1/6 with children or siblings, otherwise 1/3" },
    { "name_en": "Paternal Grandfather", "name_ar": "جد", "description": "1/6 in place of an absent father" },
    { "name_en": "Paternal Grandmother", "name_ar": "جدة من الأب", "description": "Shares 1/6 in place of an absent mother" },
    { "name_en": "Maternal Grandmother", "name_ar": "جدة من الأم", "description": "Shares 1/6 in place of an absent mother" },
    { "name_en": "Sons", "name_ar": "أبناء", "description": "Residuary, twice a daughter's share" },
    { "name_en": "Daughters", "name_ar": "بنات", "description": "1/2 alone, 2/3 together, residuary beside sons" },
    { "name_en": "Full Brothers", "name_ar": "إخوة أشقاء", "description": "Residuary when no children and no father" },
    { "name_en": "Full Sisters", "name_ar": "أخوات شقيقات", "description": "1/2 alone, 2/3 together, residuary beside full brothers" },
    { "name_en": "Paternal Brothers", "name_ar": "إخوة لأب", "description": "Residuary when no full siblings, children or father" },
    { "name_en": "Paternal Sisters", "name_ar": "أخوات لأب", "description": "1/2 alone, 2/3 together, excluded by full siblings" },
]

def populate_database():
    print("Adding heir categories...")
    for heir in heirs_data:
        try:
            response = requests.post(API_URL, data=json.dumps(heir), headers={"Content-Type": "application/json"})

            if response.status_code == 200:
                print(f"  [ADDED] {heir['name_en']}")
            elif response.status_code == 400:
                # 400 means the category is already in the catalog
                print(f"  [SKIPPED] '{heir['name_en']}' already exists.")
            else:
                print(f"  [ERROR] Could not add {heir['name_en']}. Status: {response.status_code}, Body: {response.text}")

        except requests.exceptions.ConnectionError as e:
            print("\n[ERROR] Could not reach the API. Is the uvicorn server running?")
            print(f"Detail: {e}")
            break
    print("\nDone.")

if __name__ == "__main__":
    populate_database()
