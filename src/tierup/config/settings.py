import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[3]
DATA_DIR = Path(os.environ.get("TIERUP_DATA_DIR") or BASE_DIR / "data")

CATALOG_FILES = {
    "CPU": "cpuSorted.json",
    "GPU": "gpuSorted.json",
    "RAM": "ramSorted.json",
}

POWER_PROFILE_FILE = "powerProfiles.json"

LOG_DIR = BASE_DIR / "logs"
LOG_FILE = LOG_DIR / "tierup.log"
