"""Configuration and runtime constants."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Credentials (optional, the API source is skipped without them)
LOGIN = os.getenv("WORD_TRAINER_LOGIN")
PASSWORD = os.getenv("WORD_TRAINER_PASSWORD")
STUDENT_ID = os.getenv("WORD_TRAINER_STUDENT")

# Session Configuration
TRAIN_COUNT = int(os.getenv("TRAIN_COUNT", "20"))
DIRECTION = os.getenv("DIRECTION", "native-to-foreign")  # "native-to-foreign" or "foreign-to-native"

# Vocabulary API Configuration
AUTH_URL = os.getenv("AUTH_URL", "https://id.skyeng.ru/api/v1/auth/login")
WORDSETS_URL = os.getenv("WORDSETS_URL", "https://api.words.skyeng.ru/api/for-vimbox/v1/wordsets.json")
WORDSET_WORDS_URL = os.getenv(
    "WORDSET_WORDS_URL", "https://api.words.skyeng.ru/api/v1/wordsets/{set_id}/words.json"
)
MEANINGS_URL = os.getenv("MEANINGS_URL", "https://dictionary.skyeng.ru/api/for-services/v2/meanings")
API_PAGE_SIZE = int(os.getenv("API_PAGE_SIZE", "100"))
MEANINGS_BATCH_SIZE = 10  # remote request-size limit
LOGIN_TIMEOUT = float(os.getenv("LOGIN_TIMEOUT", "5"))
PAGE_TIMEOUT = float(os.getenv("PAGE_TIMEOUT", "10"))
RETRY_ATTEMPTS = int(os.getenv("RETRY_ATTEMPTS", "3"))

# Enrichment Configuration
LOOKUP_URL = os.getenv("LOOKUP_URL", "https://sentencestack.com/q/{term}")
PROBE_URL = os.getenv("PROBE_URL", "http://www.gstatic.com/generate_204")
PROBE_TIMEOUT = float(os.getenv("PROBE_TIMEOUT", "10"))
LOOKUP_TIMEOUT = float(os.getenv("LOOKUP_TIMEOUT", "10"))
MAX_SENTENCES = int(os.getenv("MAX_SENTENCES", "5"))

# File paths
WORDS_FILE = Path(os.getenv("WORD_TRAINER_STORE", "words.json"))

# Testing Configuration
LIVE_TESTING = os.getenv("WORD_TRAINER_LIVE", "0") == "1"
