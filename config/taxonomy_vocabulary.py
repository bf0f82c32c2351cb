"""
Product taxonomy vocabulary for document tagging and retrieval filtering.

Compiled-in on purpose: changing an entry here changes how documents are
tagged, so collections must be re-indexed after an edit.

- MODEL_PATTERNS: ordered list, the first category whose pattern matches wins
- OPE_BATTERY_PREFIXES: OPE series that are always battery powered
- POWER_TYPE_KEYWORDS: content keywords for power type detection
- CATEGORY_PATH_KEYWORDS: directory / filename conventions per category
- QUERY_CATEGORY_KEYWORDS: words in a user query that name a category
"""

# Model number patterns per category, in tie-break order (ROBOT, OPE, ERCO).
# Each token is SERIES + optional hyphen + NUMBER, e.g. "TM-850", "DHCAS-2600HD".
MODEL_PATTERNS = [
    {
        "category": "robot",
        "series": ["TM", "RP", "BM", "BP", "EG"],
        "number": r"[0-9]{3,4}",
    },
    {
        # Outdoor Power Equipment
        "category": "ope",
        "series": [
            "CS", "PPT", "SRM", "GT", "PAS", "PB", "ES", "HCA", "HC", "HCR",
            "HCAS", "HCS", "CSG", "MB", "DCS", "DPS", "DPAS", "DTT", "DPPF",
            "DPPT", "DSRM", "DLM", "DPB", "DHC", "DHCA", "DHCAS", "DHCS",
            "RP", "LBP", "LCJQ",
        ],
        "number": r"[0-9]+[A-Z]*",
    },
    {
        # Leaf blowers
        "category": "erco",
        "series": [
            "EB", "ES", "LG", "EWB", "EKM", "SP", "GHX", "STF", "ETM", "EWM",
            "ERM", "ERSS", "FM", "KAH", "SWZ",
        ],
        "number": r"[0-9]+[A-Z]*",
    },
]

# OPE series prefixes that are always battery powered:
# - D: all D-series models (DCS, DSRM, DLM, DPAS, ...)
# - LBP: lithium battery powered blowers
# - LCJQ: lithium cordless models
OPE_BATTERY_PREFIXES = ["D", "LBP", "LCJQ"]

# Battery and fuel keywords for power type detection (matched as substrings)
POWER_TYPE_KEYWORDS = {
    "battery": [
        "battery",
        "batteries",
        "akku",
        "li-ion",
        "lithium",
        "cordless",
        "rechargeable",
        "akku-betrieben",
        "akku betrieben",
        "akku-system",
        "48v",
        "36v",
        "40v",
        "56v",
        "60v",
        "72v",
        "80v",
    ],
    "fuel": [
        "gas",
        "gasoline",
        "petrol",
        "benzin",
        "2-stroke",
        "2 stroke",
        "2-cycle",
        "2 cycle",
        "2t",
        "mix",
        "carburetor",
        "vergaser",
    ],
}

# Directory / name conventions checked before any model pattern.
# "robot" matches any mention of robot(s) anywhere in filename, path or content.
CATEGORY_PATH_KEYWORDS = {
    "robot": ["robot", "/robot-", "\\robot-"],
    "ope": ["ope-", "/ope-", "\\ope-"],
    "erco": ["erco-", "/erco-", "\\erco-"],
}

# Whole-word query terms that identify a category without a model number
QUERY_CATEGORY_KEYWORDS = {
    "robot": ["robot", "robots", "robotic", "roboter", "mähroboter"],
    "ope": ["ope", "outdoor power equipment"],
    "erco": ["erco"],
}
