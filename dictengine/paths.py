# dictengine/paths.py

import os

# --- Base data paths ---
DATA_DIR = os.getenv("DICTENGINE_DATA_DIR", "data")

# --- StarDict files: <prefix>.ifo / <prefix>.idx / <prefix>.dict[.dz|.gz] ---
DICT_PREFIX = os.getenv(
    "DICTENGINE_DICT_PREFIX",
    os.path.join(DATA_DIR, "stardict-oxford-gb-formated-2.4.2", "oxford-gb-formated"),
)

# --- sqlite word store filled by dictengine.dump ---
DB_PATH = os.getenv("DICTENGINE_DB", os.path.join(DATA_DIR, "words.db"))

# --- Width of word_data_offset in .idx (2.4.2 dictionaries are always 32) ---
OFFSET_BITS = int(os.getenv("DICTENGINE_OFFSET_BITS", "32"))
