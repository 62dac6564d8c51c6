"""
Shared store documents for tests.

Seed data in store shape: two authors, three startups and the editor
picks playlist.
"""


ADA = {
    "_id": "author-github-101",
    "_type": "author",
    "id": "101",
    "name": "Ada Lovelace",
    "username": "ada",
    "email": "ada@example.com",
    "image": "https://avatars.example.com/ada.png",
    "bio": "Analytical engines",
}

GRACE = {
    "_id": "author-github-202",
    "_type": "author",
    "id": "202",
    "name": "Grace Hopper",
    "username": "grace",
    "email": "grace@example.com",
    "image": None,
    "bio": "",
}

SOLAR = {
    "_id": "startup-solar",
    "_type": "startup",
    "_createdAt": "2025-01-01T09:00:00Z",
    "title": "Solar Drones",
    "slug": {"_type": "slug", "current": "solar-drones"},
    "author": {"_type": "reference", "_ref": ADA["_id"]},
    "views": 10,
    "description": "Drones that never land",
    "category": "Energy",
    "image": "https://images.example.com/solar.png",
    "pitch": "# Solar Drones\n\nFlying **forever** on sunlight.",
}

HEALTH = {
    "_id": "startup-health",
    "_type": "startup",
    "_createdAt": "2025-02-01T09:00:00Z",
    "title": "Health Bot",
    "slug": {"_type": "slug", "current": "health-bot"},
    "author": {"_type": "reference", "_ref": ADA["_id"]},
    "views": 0,
    "description": "A chatbot nurse",
    "category": "Health",
    "image": "https://images.example.com/health.png",
    "pitch": "",
}

EDU = {
    "_id": "startup-edu",
    "_type": "startup",
    "_createdAt": "2025-03-01T09:00:00Z",
    "title": "EduStream",
    "slug": {"_type": "slug", "current": "edustream"},
    "author": {"_type": "reference", "_ref": GRACE["_id"]},
    "views": 3,
    "description": "Live lessons for everyone",
    "category": "Education",
    "image": "https://images.example.com/edu.png",
    "pitch": "Teach **live**.",
}

EDITOR_PICKS = {
    "_id": "playlist-editor-picks",
    "_type": "playlist",
    "title": "Editor Picks",
    "slug": {"_type": "slug", "current": "editor-picks"},
    "select": [{"_type": "reference", "_ref": SOLAR["_id"]}],
}


def get_all_documents():
    """All seed documents, in insertion order."""
    return [ADA, GRACE, SOLAR, HEALTH, EDU, EDITOR_PICKS]

