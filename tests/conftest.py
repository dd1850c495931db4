from datetime import date
from pathlib import Path

import pytest
import yaml

CAMPAIGNS_CSV = """id,start_date,end_date,status,name,platform
A,2024-03-01,2024-03-06,active,Flash week,glovo
B,2024-03-05,2024-03-05,scheduled,Tuesday BOGO,ubereats
C,2024-03-07,2024-03-08,scheduled,,justeat
D,2024-02-01,2024-02-10,completed,Old promo,glovo
"""

EVENTS_CSV = """id,event_date,end_date,category,name
E1,2024-03-08,,holiday,Women's Day
E2,2024-03-09,2024-03-10,sports,Derby weekend
"""


@pytest.fixture
def today() -> date:
    return date(2024, 3, 6)


@pytest.fixture
def bundle_path(tmp_path: Path) -> Path:
    """Bundle YAML with CSV campaigns/events and inline weather rows."""
    (tmp_path / "campaigns.csv").write_text(CAMPAIGNS_CSV, encoding="utf-8")
    (tmp_path / "events.csv").write_text(EVENTS_CSV, encoding="utf-8")
    bundle = {
        "name": "demo-brand",
        "data": {
            "campaigns": "campaigns.csv",
            "events": "events.csv",
            "weather": [
                {
                    "date": "2024-03-06",
                    "temperature_max": 18.5,
                    "temperature_min": 9.0,
                    "weather_code": 3,
                    "precipitation_probability": 20,
                    "description": "Overcast",
                }
            ],
        },
    }
    path = tmp_path / "bundle.yaml"
    path.write_text(yaml.safe_dump(bundle, sort_keys=False), encoding="utf-8")
    return path
