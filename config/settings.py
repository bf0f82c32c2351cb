"""
Base configuration settings for the taxonomy RAG assistant
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent

# Logging Settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = BASE_DIR / os.getenv("LOG_FILE", "data/logs/assistant.log")
LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

# Data Directories
DATA_DIR = BASE_DIR / "data"
LOGS_DIR = DATA_DIR / "logs"

# Uploaded RAG documents, one sub-folder per collection (robot-collection, ope-collection, ...)
UPLOADS_DIR = BASE_DIR / os.getenv("UPLOADS_DIR", "data/uploads/rag")

# Create directories
for directory in [LOGS_DIR]:
    directory.mkdir(parents=True, exist_ok=True)

# Known document collections, keyed by topic
COLLECTIONS = {
    "robot": os.getenv("ROBOT_COLLECTION", "robot-collection"),
    "ope": os.getenv("OPE_COLLECTION", "ope-collection"),
    "erco": os.getenv("ERCO_COLLECTION", "erco-collection"),
}
