"""
Demo project loaded into an empty store on startup (see SEED_ON_EMPTY).
"""

from .snapshots import parse_projects

DEFAULT_PROJECTS = [
    {
        "id": "proj-1",
        "name": "Downtown Highrise",
        "areas": [
            {
                "id": "area-1",
                "name": "First Floor - Lobby",
                "workItems": [
                    {
                        "id": "item-1", "name": "Marble Flooring", "category": "Interior",
                        "subWorks": [
                            {"id": "sw-1", "name": "Grinding", "isCompleted": True},
                            {"id": "sw-2", "name": "Polishing", "isCompleted": False},
                        ],
                        "designPreference": "Italian Statuario marble",
                        "color": "White with grey veins",
                        "length": 100, "width": 50, "depth": 0, "units": 1,
                        "unitType": "sqft", "quantity": 5000,
                        "status": "In Progress",
                    },
                ],
            },
            {
                "id": "area-2",
                "name": "Second Floor - Office Space",
                "workItems": [
                    {
                        "id": "item-2", "name": "Electrical Wiring", "category": "Electrical",
                        "subWorks": [
                            {"id": "sw-3", "name": "Conduit laying", "isCompleted": True},
                            {"id": "sw-4", "name": "Wire pulling", "isCompleted": True},
                        ],
                        "designPreference": "Standard copper wiring", "color": "N/A",
                        "length": 500, "width": 0, "depth": 0, "units": 0,
                        "unitType": "rm", "quantity": 500,
                        "status": "Completed",
                    },
                    {
                        "id": "item-3", "name": "Drywall Installation", "category": "Civil",
                        "subWorks": [],
                        "designPreference": "Fire-rated gypsum board", "color": "Off-white",
                        "length": 200, "width": 8, "depth": 0, "units": 1,
                        "unitType": "sqft", "quantity": 1600,
                        "status": "Pending",
                    },
                ],
            },
        ],
    },
]


def default_projects():
    return parse_projects(DEFAULT_PROJECTS)
