"""
Game constants and environment-driven settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()

WORD_LENGTH = 5
MAX_GUESSES = 6

# Width of a time bucket; a new target word is picked at each boundary
BUCKET_SECONDS = 3600

# Word list sources, checked in this order
WORDS_JSON_ENV = "WORDLE_WORDS_JSON"
USER_WORDS_FILE = os.path.join(".wordle", "words_en_5.json")
BUNDLED_WORDS_PATH = os.path.join(os.path.dirname(__file__), "data", "words_en_5.json")

SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")
HOST = os.environ.get("WORDLE_HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", 5000))
